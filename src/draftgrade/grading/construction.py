"""Roster-construction grading: positional balance, bench depth and draft value.

This sits beside the VORP blend in :mod:`draftgrade.grading.positions` and grades
how a roster was put together rather than how many points it projects.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from draftgrade.config import LeagueFormat, LeagueSettings, resolve_settings
from draftgrade.grading.positions import TeamLike, score_to_grade, team_players
from draftgrade.lineup.service import LineupReport, build_lineup_report, group_players_by_position
from draftgrade.models import PlayerRecord


logger = logging.getLogger(__name__)

BALANCE_WEIGHT = 0.35
DEPTH_WEIGHT = 0.30
DRAFT_VALUE_WEIGHT = 0.25
KEEPER_WEIGHT = 0.10
# Keeper leagues are not modelled, so that component always scores neutral.
KEEPER_SCORE = 100.0

CRITICAL_POSITIONS = ("QB", "RB", "WR", "TE")
MISSING_STARTER_PENALTY = 15
OVERLOAD_ALLOWANCE = 2
OVERLOAD_PENALTY = 8
MISSING_POSITION_PENALTY = 25
SUPERFLEX_QB_PENALTY = 20
TWO_QB_PENALTY = 30

EMPTY_BENCH_PENALTY = 30
WEAK_BENCH_POINTS = 80.0
WEAK_BENCH_PENALTY = 15
STRONG_BENCH_POINTS = 120.0
STRONG_BENCH_BONUS = 10
MIN_BENCH_POSITIONS = 3
NARROW_BENCH_PENALTY = 10
WEAK_STARTER_POINTS = 60.0
MAX_WEAK_STARTERS = 2
WEAK_STARTERS_PENALTY = 20

ROUND_MARGIN = 2
REACH_PENALTY = 8
STEAL_BONUS = 5
NET_VALUE_ADJUSTMENT = 10


def _clamp(score: float) -> float:
    return max(0.0, min(100.0, score))


@dataclass(frozen=True)
class PositionalBalance:
    score: float
    issues: List[str] = field(default_factory=list)
    position_counts: Dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class DepthStrategy:
    score: float
    notes: List[str] = field(default_factory=list)
    bench_size: int = 0
    average_bench_points: float = 0.0


@dataclass(frozen=True)
class DraftValue:
    score: float
    steals: List[str] = field(default_factory=list)
    reaches: List[str] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class RosterConstruction:
    overall_score: float
    grade: str
    positional_balance: PositionalBalance
    depth_strategy: DepthStrategy
    draft_value: DraftValue


def analyze_positional_balance(players: Sequence[PlayerRecord], settings: LeagueSettings) -> PositionalBalance:
    """Penalize unfilled starter slots, overloaded positions and thin QB rooms."""

    requirement = settings.requirement
    counts = {position: len(group) for position, group in group_players_by_position(players).items()}
    score = 100.0
    issues: List[str] = []

    for position, required in requirement.position_counts:
        actual = counts.get(position, 0)
        if actual < required:
            deficit = required - actual
            score -= deficit * MISSING_STARTER_PENALTY
            issues.append(f"{position}: Missing {deficit} starter(s)")
        elif actual > required + OVERLOAD_ALLOWANCE:
            excess = actual - required - OVERLOAD_ALLOWANCE
            score -= excess * OVERLOAD_PENALTY
            issues.append(f"{position}: {excess} too many players")

    for position in CRITICAL_POSITIONS:
        if not counts.get(position):
            score -= MISSING_POSITION_PENALTY
            issues.append(f"{position}: Position completely missing")

    quarterbacks = counts.get("QB", 0)
    if settings.league_format is LeagueFormat.SUPERFLEX and quarterbacks < 2:
        score -= SUPERFLEX_QB_PENALTY
        issues.append("Superflex: Insufficient QB depth")
    if settings.league_format is LeagueFormat.TWO_QB and quarterbacks < 2:
        score -= TWO_QB_PENALTY
        issues.append("2QB: Must have at least 2 QBs")

    return PositionalBalance(score=_clamp(score), issues=issues, position_counts=counts)


def analyze_depth_strategy(report: LineupReport) -> DepthStrategy:
    """Grade the bench left over by the optimal lineup and flag weak starters."""

    bench = report.bench_players
    score = 100.0
    notes: List[str] = []
    average = sum(player.projected_points for player in bench) / len(bench) if bench else 0.0

    if not bench:
        score -= EMPTY_BENCH_PENALTY
        notes.append("No bench players")
    else:
        if average < WEAK_BENCH_POINTS:
            score -= WEAK_BENCH_PENALTY
            notes.append("Weak bench quality")
        elif average > STRONG_BENCH_POINTS:
            score += STRONG_BENCH_BONUS
            notes.append("Strong bench quality")
        if len({player.position for player in bench}) < MIN_BENCH_POSITIONS:
            score -= NARROW_BENCH_PENALTY
            notes.append("Limited bench position diversity")

    starters = [player for players in report.optimal_lineup.values() for player in players]
    weak_starters = sum(1 for player in starters if player.projected_points < WEAK_STARTER_POINTS)
    if weak_starters > MAX_WEAK_STARTERS:
        score -= WEAK_STARTERS_PENALTY
        notes.append(f"{weak_starters} weak starters")

    return DepthStrategy(score=_clamp(score), notes=notes, bench_size=len(bench), average_bench_points=average)


def analyze_draft_value(players: Sequence[PlayerRecord], teams: int = 12) -> DraftValue:
    """Compare each pick's round with the round its ADP implies.

    Players without both an ADP and a draft round are ignored.
    """

    score = 100.0
    steals: List[str] = []
    reaches: List[str] = []
    teams = max(1, teams)

    for player in players:
        if not player.adp or not player.round or player.adp <= 0 or player.round <= 0:
            continue
        adp_round = math.ceil(player.adp / teams)
        label = f"{player.display_name} (Round {player.round}, ADP ~{adp_round})"
        if adp_round - player.round > ROUND_MARGIN:
            score -= REACH_PENALTY
            reaches.append(label)
        elif player.round - adp_round > ROUND_MARGIN:
            score += STEAL_BONUS
            steals.append(label)

    notes: List[str] = []
    if len(steals) > len(reaches):
        score += NET_VALUE_ADJUSTMENT
        notes.append(f"More steals ({len(steals)}) than reaches ({len(reaches)})")
    elif len(reaches) > len(steals):
        score -= NET_VALUE_ADJUSTMENT
        notes.append(f"More reaches ({len(reaches)}) than steals ({len(steals)})")

    return DraftValue(score=_clamp(score), steals=steals, reaches=reaches, notes=notes)


def analyze_roster_construction(
    team: TeamLike,
    settings: Union[LeagueSettings, Mapping[str, Any], None] = None,
    lineup: Optional[LineupReport] = None,
) -> RosterConstruction:
    resolved = resolve_settings(settings)
    players = team_players(team)
    report = lineup or build_lineup_report(players, resolved)

    balance = analyze_positional_balance(players, resolved)
    depth = analyze_depth_strategy(report)
    value = analyze_draft_value(players, resolved.teams)

    overall = (
        balance.score * BALANCE_WEIGHT
        + depth.score * DEPTH_WEIGHT
        + value.score * DRAFT_VALUE_WEIGHT
        + KEEPER_SCORE * KEEPER_WEIGHT
    )
    logger.debug(
        "Roster construction: balance %.1f, depth %.1f, value %.1f -> %.1f",
        balance.score,
        depth.score,
        value.score,
        overall,
    )
    return RosterConstruction(
        overall_score=overall,
        grade=score_to_grade(overall),
        positional_balance=balance,
        depth_strategy=depth,
        draft_value=value,
    )
