"""Configuration helpers for league formats and runtime settings."""

from .league import (
    FLEX_SLOT,
    SUPERFLEX_SLOT,
    LeagueFormat,
    LeagueSettings,
    RosterRequirement,
    get_requirement,
    iter_requirements,
    resolve_league_format,
    resolve_settings,
)

__all__ = [
    "FLEX_SLOT",
    "SUPERFLEX_SLOT",
    "LeagueFormat",
    "LeagueSettings",
    "RosterRequirement",
    "get_requirement",
    "iter_requirements",
    "resolve_league_format",
    "resolve_settings",
]
