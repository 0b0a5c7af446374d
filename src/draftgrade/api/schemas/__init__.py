"""Pydantic models for API I/O."""

from .analysis import (
    AnalyzeRequest,
    DraftAnalysisRequest,
    DraftAnalysisResponse,
    DraftInfoResponse,
    DraftTeamResponse,
    GradesRequest,
    GradesResponse,
    LineupAnalysisResponse,
    LineupPlayerResponse,
    LineupRequest,
    LineupResponse,
    PositionGradeResponse,
    RecommendationResponse,
    RosterConstructionResponse,
    TeamAnalysisResponse,
    TeamGradeResponse,
)
from .cheat_sheet import (
    AdpCheatSheetItem,
    AdpCheatSheetResponse,
    LeagueFormatResponse,
    LeaguesResponse,
    VorpCheatSheetItem,
    VorpCheatSheetResponse,
)

__all__ = [
    "AdpCheatSheetItem",
    "AdpCheatSheetResponse",
    "AnalyzeRequest",
    "DraftAnalysisRequest",
    "DraftAnalysisResponse",
    "DraftInfoResponse",
    "DraftTeamResponse",
    "GradesRequest",
    "GradesResponse",
    "LeagueFormatResponse",
    "LeaguesResponse",
    "LineupAnalysisResponse",
    "LineupPlayerResponse",
    "LineupRequest",
    "LineupResponse",
    "PositionGradeResponse",
    "RecommendationResponse",
    "RosterConstructionResponse",
    "TeamAnalysisResponse",
    "TeamGradeResponse",
    "VorpCheatSheetItem",
    "VorpCheatSheetResponse",
]
