"""Greedy starting-lineup selection for season-long league formats."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, Hashable, Iterable, List, Mapping, Optional, Sequence, Set, Union

from draftgrade.config import FLEX_SLOT, SUPERFLEX_SLOT, LeagueSettings, resolve_settings
from draftgrade.config.league import REQUIREMENT_META_KEYS
from draftgrade.models import PlayerRecord


logger = logging.getLogger(__name__)

OptimalLineup = Dict[str, List[PlayerRecord]]
SettingsLike = Union[LeagueSettings, Mapping[str, Any], None]


@dataclass(frozen=True)
class LineupAnalysis:
    total_starters: int
    league_type: str
    requirements: Dict[str, Any]
    position_requirements: Dict[str, int]


@dataclass
class LineupReport:
    optimal_lineup: OptimalLineup
    total_projected_points: float
    bench_players: List[PlayerRecord]
    bench_points: float
    analysis: LineupAnalysis


def as_player_records(roster: Iterable[Union[PlayerRecord, Mapping[str, Any]]]) -> List[PlayerRecord]:
    records: List[PlayerRecord] = []
    for entry in roster or ():
        if isinstance(entry, PlayerRecord):
            records.append(entry)
        else:
            records.append(PlayerRecord.model_validate(dict(entry)))
    return records


def player_key(player: PlayerRecord) -> Hashable:
    """Identity used for lineup/bench bookkeeping.

    Players without an id or name are tracked by object identity while a
    lineup is being filled.
    """

    key = player.identity_key
    if key is None:
        return ("anonymous", id(player))
    return key


def group_players_by_position(roster: Sequence[PlayerRecord]) -> Dict[str, List[PlayerRecord]]:
    groups: Dict[str, List[PlayerRecord]] = {}
    for player in roster:
        if not player.position:
            continue
        groups.setdefault(player.position, []).append(player)
    return groups


def _by_points_desc(players: Iterable[PlayerRecord]) -> List[PlayerRecord]:
    # sorted() is stable, so equal projections keep their incoming order
    return sorted(players, key=lambda player: player.projected_points, reverse=True)


def _take_best(candidates: Iterable[PlayerRecord], count: int, used: Set[Hashable]) -> List[PlayerRecord]:
    selected: List[PlayerRecord] = []
    if count <= 0:
        return selected
    for player in _by_points_desc(candidates):
        if len(selected) >= count:
            break
        key = player_key(player)
        if key in used:
            continue
        used.add(key)
        selected.append(player)
    return selected


def _fill_flex_slot(
    groups: Mapping[str, Sequence[PlayerRecord]],
    eligible_positions: Sequence[str],
    count: int,
    used: Set[Hashable],
) -> List[PlayerRecord]:
    pool = [
        player
        for position in eligible_positions
        for player in groups.get(position, ())
        if player_key(player) not in used
    ]
    return _take_best(pool, count, used)


def calculate_optimal_lineup(
    roster: Iterable[Union[PlayerRecord, Mapping[str, Any]]],
    settings: SettingsLike = None,
) -> OptimalLineup:
    """Assign the highest-projected players to each starting slot.

    Fixed position slots are filled first in requirement order, then FLEX and,
    for superflex leagues, SUPERFLEX from whatever remains. Fixed slots are
    always present in the result; flex-type slots are omitted when nothing is
    eligible.
    """

    resolved = resolve_settings(settings)
    requirement = resolved.requirement
    groups = group_players_by_position(as_player_records(roster))

    lineup: OptimalLineup = {}
    used: Set[Hashable] = set()

    for position, count in requirement.position_counts:
        available = [player for player in groups.get(position, ()) if player_key(player) not in used]
        lineup[position] = _take_best(available, count, used)

    flex = _fill_flex_slot(groups, requirement.flex_positions, requirement.flex_count, used)
    if flex:
        lineup[FLEX_SLOT] = flex

    if requirement.has_superflex:
        superflex = _fill_flex_slot(groups, requirement.superflex_positions, requirement.superflex_count, used)
        if superflex:
            lineup[SUPERFLEX_SLOT] = superflex

    logger.debug(
        "Built %s lineup with %d starters from %d position groups",
        requirement.league_format.value,
        len(used),
        len(groups),
    )
    return lineup


def get_bench_players(
    roster: Iterable[Union[PlayerRecord, Mapping[str, Any]]],
    optimal_lineup: Mapping[str, Sequence[Union[PlayerRecord, Mapping[str, Any]]]],
) -> List[PlayerRecord]:
    """Roster players not placed in ``optimal_lineup``, in roster order.

    Players without an id or name are matched by value, one bench exclusion per
    starter, so callers may pass the same plain mappings to both functions.
    """

    starters = as_player_records(player for players in optimal_lineup.values() for player in players or ())
    used = {player.identity_key for player in starters if player.identity_key is not None}
    anonymous_starters = Counter(player for player in starters if player.identity_key is None)

    bench: List[PlayerRecord] = []
    for player in as_player_records(roster):
        key = player.identity_key
        if key is None:
            if anonymous_starters[player] > 0:
                anonymous_starters[player] -= 1
                continue
        elif key in used:
            continue
        bench.append(player)
    return bench


def calculate_total_projected_points(
    players: Union[Sequence[Any], Mapping[str, Sequence[Any]]],
) -> float:
    if isinstance(players, Mapping):
        flattened: Iterable[Any] = (player for group in players.values() for player in group or ())
    else:
        flattened = players or ()
    total = 0.0
    for player in flattened:
        if isinstance(player, PlayerRecord):
            total += player.projected_points
        else:
            total += PlayerRecord.model_validate(dict(player)).projected_points
    return round(total, 2)


def analyze_lineup(optimal_lineup: Optional[Mapping[str, Sequence[PlayerRecord]]], settings: SettingsLike = None) -> LineupAnalysis:
    """Summarize the requirement behind a lineup.

    Only the resolved league settings feed the summary; the lineup contents are
    not inspected.
    """

    resolved = resolve_settings(settings)
    requirement = resolved.requirement
    requirements = requirement.as_dict()
    return LineupAnalysis(
        total_starters=requirement.total_starters,
        league_type=requirement.league_format.value,
        requirements=requirements,
        position_requirements={
            key: value for key, value in requirements.items() if key not in REQUIREMENT_META_KEYS
        },
    )


def build_lineup_report(
    roster: Iterable[Union[PlayerRecord, Mapping[str, Any]]],
    settings: SettingsLike = None,
) -> LineupReport:
    records = as_player_records(roster)
    resolved = resolve_settings(settings)
    lineup = calculate_optimal_lineup(records, resolved)
    bench = get_bench_players(records, lineup)
    return LineupReport(
        optimal_lineup=lineup,
        total_projected_points=calculate_total_projected_points(lineup),
        bench_players=bench,
        bench_points=calculate_total_projected_points(bench),
        analysis=analyze_lineup(lineup, resolved),
    )
