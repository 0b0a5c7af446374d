"""Player, VORP and team roster models."""

from .player import PlayerRecord, TeamRoster, VorpEntry, coerce_points

__all__ = ["PlayerRecord", "TeamRoster", "VorpEntry", "coerce_points"]
