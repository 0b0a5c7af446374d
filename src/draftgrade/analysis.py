"""Per-team draft analysis combining the lineup optimizer and position grader."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Union

from draftgrade.config import LeagueSettings, resolve_settings
from draftgrade.grading import PositionGrader, RosterConstruction, TeamGrade, analyze_roster_construction
from draftgrade.lineup import LineupReport, build_lineup_report
from draftgrade.models import TeamRoster


logger = logging.getLogger(__name__)


@dataclass
class TeamAnalysis:
    team: TeamRoster
    lineup: LineupReport
    grades: TeamGrade
    construction: RosterConstruction


def _as_team(team: Union[TeamRoster, Mapping[str, Any]]) -> TeamRoster:
    if isinstance(team, TeamRoster):
        return team
    return TeamRoster.model_validate(dict(team))


def analyze_team(
    team: Union[TeamRoster, Mapping[str, Any]],
    grader: PositionGrader,
    settings: Optional[Union[LeagueSettings, Mapping[str, Any]]] = None,
) -> TeamAnalysis:
    roster_team = _as_team(team)
    resolved = resolve_settings(settings)
    lineup = build_lineup_report(roster_team.roster, resolved)
    grades = grader.calculate_position_grades(roster_team, resolved)
    construction = analyze_roster_construction(roster_team, resolved, lineup)
    logger.debug(
        "Team %s: %.2f starter points, overall grade %s, construction grade %s",
        roster_team.team_id,
        lineup.total_projected_points,
        grades.overall_grade,
        construction.grade,
    )
    return TeamAnalysis(team=roster_team, lineup=lineup, grades=grades, construction=construction)


def analyze_draft(
    teams: Iterable[Union[TeamRoster, Mapping[str, Any]]],
    grader: PositionGrader,
    settings: Optional[Union[LeagueSettings, Mapping[str, Any]]] = None,
) -> List[TeamAnalysis]:
    resolved = resolve_settings(settings)
    results = [analyze_team(team, grader, resolved) for team in teams]
    logger.info("Analyzed %d teams (%s)", len(results), resolved.league_format.value)
    return results
