"""Position grades, roster-construction grades and VORP computation."""

from .positions import (
    GRADE_THRESHOLDS,
    PositionGrade,
    PositionGrader,
    Recommendation,
    TeamGrade,
    position_score,
    replacement_baselines,
    score_to_grade,
)
from .vorp import DEFAULT_POOL_SIZES, compute_vorp_scores, replacement_levels
from .construction import (
    DepthStrategy,
    DraftValue,
    PositionalBalance,
    RosterConstruction,
    analyze_depth_strategy,
    analyze_draft_value,
    analyze_positional_balance,
    analyze_roster_construction,
)

__all__ = [
    "DEFAULT_POOL_SIZES",
    "DepthStrategy",
    "DraftValue",
    "GRADE_THRESHOLDS",
    "PositionGrade",
    "PositionGrader",
    "PositionalBalance",
    "Recommendation",
    "RosterConstruction",
    "TeamGrade",
    "analyze_depth_strategy",
    "analyze_draft_value",
    "analyze_positional_balance",
    "analyze_roster_construction",
    "compute_vorp_scores",
    "position_score",
    "replacement_baselines",
    "replacement_levels",
    "score_to_grade",
]
