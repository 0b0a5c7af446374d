"""Position-group grading from VORP and projected points."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Tuple, Union

from draftgrade.config import LeagueSettings, resolve_settings
from draftgrade.lineup.service import as_player_records, group_players_by_position
from draftgrade.models import PlayerRecord, TeamRoster, VorpEntry


logger = logging.getLogger(__name__)

VORP_WEIGHT = 0.6
PROJECTION_WEIGHT = 0.02

GRADE_THRESHOLDS: Tuple[Tuple[float, str], ...] = (
    (95, "A+"),
    (90, "A"),
    (80, "A-"),
    (70, "B+"),
    (60, "B"),
    (50, "B-"),
    (40, "C+"),
    (30, "C"),
    (20, "C-"),
    (10, "D"),
)
FAILING_GRADE = "F"

TeamLike = Union[TeamRoster, Mapping[str, Any], Sequence[Any]]


def score_to_grade(score: float) -> str:
    for threshold, grade in GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return FAILING_GRADE


def position_score(vorp_total: float, projected_total: float) -> float:
    return max(0.0, vorp_total * VORP_WEIGHT + projected_total * PROJECTION_WEIGHT)


@dataclass(frozen=True)
class PositionGrade:
    score: float
    grade: str
    projected_points: float
    player_count: int
    vorp_total: float = 0.0


@dataclass(frozen=True)
class Recommendation:
    type: str
    priority: str
    message: str


@dataclass
class TeamGrade:
    overall_score: float
    overall_grade: str
    position_grades: Dict[str, PositionGrade] = field(default_factory=dict)
    recommendations: List[Recommendation] = field(default_factory=list)
    league_type: str = "standard"


def replacement_baselines(teams: int = 12, superflex_slots: int = 0) -> Dict[str, int]:
    """League-wide starter demand per position, used as replacement rank."""

    return {
        "QB": teams * (1 + superflex_slots),
        "RB": teams * 2,
        "WR": teams * 2,
        "TE": teams,
        "K": teams,
        "DEF": teams,
    }


def team_players(team: TeamLike) -> List[PlayerRecord]:
    if isinstance(team, TeamRoster):
        return list(team.roster)
    if isinstance(team, Mapping):
        return as_player_records(team.get("roster") or ())
    return as_player_records(team or ())


class PositionGrader:
    """Grades a roster position by position against a fixed VORP lookup."""

    def __init__(self, vorp_entries: Iterable[Union[VorpEntry, Mapping[str, Any]]] = ()):
        lookup: Dict[str, float] = {}
        for entry in vorp_entries or ():
            if not isinstance(entry, VorpEntry):
                entry = VorpEntry.model_validate(dict(entry))
            name = entry.player_name.lower()
            if name:
                lookup[name] = entry.vorp_score
        self._vorp_lookup: Mapping[str, float] = MappingProxyType(lookup)
        logger.info("Loaded VORP data for %d players", len(lookup))

    @property
    def vorp_lookup(self) -> Mapping[str, float]:
        return self._vorp_lookup

    def vorp_for(self, name: str | None) -> float:
        if not name:
            return 0.0
        return self._vorp_lookup.get(name.lower(), 0.0)

    def grade_position(self, players: Sequence[PlayerRecord]) -> PositionGrade:
        vorp_total = sum(self.vorp_for(player.player_name) for player in players)
        projected_total = sum(player.projected_points for player in players)
        score = position_score(vorp_total, projected_total)
        return PositionGrade(
            score=score,
            grade=score_to_grade(score),
            projected_points=projected_total,
            player_count=len(players),
            vorp_total=vorp_total,
        )

    def calculate_position_grades(
        self,
        team: TeamLike,
        settings: Union[LeagueSettings, Mapping[str, Any], None] = None,
    ) -> TeamGrade:
        resolved = resolve_settings(settings)
        groups = group_players_by_position(team_players(team))
        position_grades = {position: self.grade_position(players) for position, players in groups.items()}

        overall_score = sum(grade.score for grade in position_grades.values()) / max(1, len(position_grades))

        recommendations: List[Recommendation] = []
        if position_grades:
            weakest = min(position_grades, key=lambda position: position_grades[position].score)
            recommendations.append(
                Recommendation(
                    type="weakness",
                    priority="high",
                    message=f"Focus on improving {weakest}",
                )
            )

        return TeamGrade(
            overall_score=overall_score,
            overall_grade=score_to_grade(overall_score),
            position_grades=position_grades,
            recommendations=recommendations,
            league_type=resolved.league_format.value,
        )
