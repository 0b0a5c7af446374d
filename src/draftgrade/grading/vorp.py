"""Compute value-over-replacement scores from season projections."""

from __future__ import annotations

import logging
from statistics import median
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from draftgrade.lineup.service import as_player_records
from draftgrade.models import PlayerRecord, VorpEntry


logger = logging.getLogger(__name__)

# Size of the fantasy-relevant pool per position; its median is the replacement level.
DEFAULT_POOL_SIZES: Dict[str, int] = {
    "QB": 32,
    "RB": 70,
    "WR": 80,
    "TE": 24,
    "DEF": 32,
    "K": 32,
}


def replacement_levels(
    players: Iterable[PlayerRecord],
    pool_sizes: Optional[Mapping[str, int]] = None,
) -> Dict[str, float]:
    pool_sizes = pool_sizes or DEFAULT_POOL_SIZES
    points_by_position: Dict[str, List[float]] = {position: [] for position in pool_sizes}
    for player in players:
        if player.position in points_by_position and player.projected_points > 0:
            points_by_position[player.position].append(player.projected_points)

    levels: Dict[str, float] = {}
    for position, points in points_by_position.items():
        pool = sorted(points, reverse=True)[: pool_sizes[position]]
        if not pool:
            logger.warning("%s: no players with projections", position)
            levels[position] = 0.0
            continue
        levels[position] = median(pool)
        logger.debug("%s replacement level %.2f (%d players)", position, levels[position], len(pool))
    return levels


def compute_vorp_scores(
    players: Iterable[Union[PlayerRecord, Mapping[str, Any]]],
    pool_sizes: Optional[Mapping[str, int]] = None,
) -> List[VorpEntry]:
    records = as_player_records(players)
    levels = replacement_levels(records, pool_sizes)

    entries: List[VorpEntry] = []
    skipped = 0
    for player in records:
        if player.position not in levels or player.projected_points <= 0 or not player.player_name:
            skipped += 1
            continue
        entries.append(
            VorpEntry(
                player_name=player.player_name,
                position=player.position,
                vorp_score=round(player.projected_points - levels[player.position], 2),
                projected_points=player.projected_points,
            )
        )
    if skipped:
        logger.info("Skipped %d players without a usable position or projection", skipped)
    entries.sort(key=lambda entry: entry.vorp_score, reverse=True)
    return entries
