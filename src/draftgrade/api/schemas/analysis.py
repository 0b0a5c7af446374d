from __future__ import annotations

from typing import Any, Dict, List

from pydantic import AliasChoices, BaseModel, Field

from draftgrade.config import LeagueSettings
from draftgrade.models import PlayerRecord, TeamRoster


class LineupPlayerResponse(BaseModel):
    player_id: str | None
    player_name: str | None
    position: str
    team: str | None = None
    projected_points: float
    adp: float | None = None
    vorp_score: float | None = None
    round: int | None = None
    pick_no: int | None = None


class LineupAnalysisResponse(BaseModel):
    total_starters: int
    league_type: str
    requirements: Dict[str, Any]
    position_requirements: Dict[str, int]


class LineupResponse(BaseModel):
    optimal_lineup: Dict[str, List[LineupPlayerResponse]]
    total_projected_points: float
    bench_players: List[LineupPlayerResponse]
    bench_points: float
    analysis: LineupAnalysisResponse


class LineupRequest(BaseModel):
    roster: List[PlayerRecord] = Field(default_factory=list)
    settings: LeagueSettings = Field(default_factory=LeagueSettings)


class PositionGradeResponse(BaseModel):
    score: float
    grade: str
    projected_points: float
    player_count: int
    vorp_total: float


class RecommendationResponse(BaseModel):
    type: str
    priority: str
    message: str


class TeamGradeResponse(BaseModel):
    team_id: str | None = None
    owner_name: str | None = None
    league_type: str
    overall_score: float
    overall_grade: str
    position_grades: Dict[str, PositionGradeResponse]
    recommendations: List[RecommendationResponse]


class GradesRequest(BaseModel):
    teams: List[TeamRoster] = Field(default_factory=list)
    settings: LeagueSettings = Field(default_factory=LeagueSettings)


class GradesResponse(BaseModel):
    teams: List[TeamGradeResponse]


class AnalyzeRequest(BaseModel):
    team: TeamRoster
    settings: LeagueSettings = Field(default_factory=LeagueSettings)


class PositionalBalanceResponse(BaseModel):
    score: float
    issues: List[str]
    position_counts: Dict[str, int]


class DepthStrategyResponse(BaseModel):
    score: float
    notes: List[str]
    bench_size: int
    average_bench_points: float


class DraftValueResponse(BaseModel):
    score: float
    steals: List[str]
    reaches: List[str]
    notes: List[str]


class RosterConstructionResponse(BaseModel):
    overall_score: float
    grade: str
    positional_balance: PositionalBalanceResponse
    depth_strategy: DepthStrategyResponse
    draft_value: DraftValueResponse


class TeamAnalysisResponse(BaseModel):
    team_id: str | None = None
    owner_name: str | None = None
    lineup: LineupResponse
    grades: TeamGradeResponse
    construction: RosterConstructionResponse


class DraftAnalysisRequest(BaseModel):
    draft_url: str | None = Field(default=None, validation_alias=AliasChoices("draftUrl", "draft_url"))
    settings: LeagueSettings = Field(default_factory=LeagueSettings)


class DraftInfoResponse(BaseModel):
    draft_id: str
    name: str
    teams: int
    rounds: int
    total_picks: int


class DraftTeamResponse(BaseModel):
    team_id: str
    owner_name: str
    draft_slot: int
    total_projected_points: float
    average_projected_points: float
    total_adp_value: float
    average_adp_value: float
    total_vorp_score: float
    average_vorp_score: float
    analysis: TeamAnalysisResponse


class DraftAnalysisResponse(BaseModel):
    success: bool = True
    message: str
    draft_url: str
    status: str
    draft_info: DraftInfoResponse
    teams: List[DraftTeamResponse]
