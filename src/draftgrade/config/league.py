"""League format presets and the starting-lineup requirements they resolve to."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic.config import ConfigDict


logger = logging.getLogger(__name__)

FLEX_SLOT = "FLEX"
SUPERFLEX_SLOT = "SUPERFLEX"

DEFAULT_FLEX_POSITIONS: Tuple[str, ...] = ("RB", "WR", "TE")
DEFAULT_SUPERFLEX_POSITIONS: Tuple[str, ...] = ("QB", "RB", "WR", "TE")

# Keys in the legacy requirement view that describe slots rather than count them.
REQUIREMENT_META_KEYS = frozenset({"totalStarters", "flexPositions", "superflexPositions"})


class LeagueFormat(str, Enum):
    STANDARD = "standard"
    SUPERFLEX = "superflex"
    TWO_QB = "2qb"
    TWO_FLEX = "2flex"


@dataclass(frozen=True)
class RosterRequirement:
    league_format: LeagueFormat
    position_counts: Tuple[Tuple[str, int], ...]
    flex_count: int
    flex_positions: Tuple[str, ...]
    superflex_count: int = 0
    superflex_positions: Tuple[str, ...] = ()

    @property
    def total_starters(self) -> int:
        return sum(count for _, count in self.position_counts) + self.flex_count + self.superflex_count

    @property
    def has_superflex(self) -> bool:
        return self.superflex_count > 0 and bool(self.superflex_positions)

    def slot_counts(self) -> Dict[str, int]:
        """Slot name to starter count, including FLEX and (if configured) SUPERFLEX."""

        counts = dict(self.position_counts)
        counts[FLEX_SLOT] = self.flex_count
        if self.superflex_count:
            counts[SUPERFLEX_SLOT] = self.superflex_count
        return counts

    def as_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = self.slot_counts()
        payload["flexPositions"] = list(self.flex_positions)
        payload["superflexPositions"] = list(self.superflex_positions)
        payload["totalStarters"] = self.total_starters
        return payload


def _standard_counts(qb: int = 1) -> Tuple[Tuple[str, int], ...]:
    return (("QB", qb), ("RB", 2), ("WR", 2), ("TE", 1), ("K", 1), ("DEF", 1))


_REQUIREMENTS: Dict[LeagueFormat, RosterRequirement] = {
    LeagueFormat.STANDARD: RosterRequirement(
        league_format=LeagueFormat.STANDARD,
        position_counts=_standard_counts(),
        flex_count=1,
        flex_positions=DEFAULT_FLEX_POSITIONS,
    ),
    LeagueFormat.SUPERFLEX: RosterRequirement(
        league_format=LeagueFormat.SUPERFLEX,
        position_counts=_standard_counts(),
        flex_count=1,
        flex_positions=DEFAULT_FLEX_POSITIONS,
        superflex_count=1,
        superflex_positions=DEFAULT_SUPERFLEX_POSITIONS,
    ),
    LeagueFormat.TWO_QB: RosterRequirement(
        league_format=LeagueFormat.TWO_QB,
        position_counts=_standard_counts(qb=2),
        flex_count=1,
        flex_positions=DEFAULT_FLEX_POSITIONS,
    ),
    LeagueFormat.TWO_FLEX: RosterRequirement(
        league_format=LeagueFormat.TWO_FLEX,
        position_counts=_standard_counts(),
        flex_count=2,
        flex_positions=DEFAULT_FLEX_POSITIONS,
    ),
}


def iter_requirements() -> Iterable[RosterRequirement]:
    """Return an iterator of all configured league presets."""

    return _REQUIREMENTS.values()


def resolve_league_format(name: Union[str, LeagueFormat, None]) -> LeagueFormat:
    """Map a league type name to a preset, falling back to ``standard``."""

    if isinstance(name, LeagueFormat):
        return name
    key = (name or "").strip().lower()
    try:
        return LeagueFormat(key)
    except ValueError:
        if key:
            logger.debug("Unknown league type %r; using standard", name)
        return LeagueFormat.STANDARD


def get_requirement(name: Union[str, LeagueFormat, None] = None) -> RosterRequirement:
    return _REQUIREMENTS[resolve_league_format(name)]


class LeagueSettings(BaseModel):
    """Caller-supplied league options; only ``league_type`` drives the lineup."""

    league_type: str = Field(
        default=LeagueFormat.STANDARD.value,
        validation_alias=AliasChoices("leagueType", "league_type"),
    )
    teams: int = Field(default=12, ge=1)
    rounds: int = Field(default=16, ge=1)
    scoring: str = "ppr"

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @field_validator("league_type", mode="before")
    @classmethod
    def _default_league_type(cls, value: Any) -> str:
        if value is None:
            return LeagueFormat.STANDARD.value
        return str(value)

    @property
    def league_format(self) -> LeagueFormat:
        return resolve_league_format(self.league_type)

    @property
    def requirement(self) -> RosterRequirement:
        return get_requirement(self.league_format)


def resolve_settings(settings: Optional[Union[LeagueSettings, Mapping[str, Any]]] = None) -> LeagueSettings:
    """Coerce ``None``, a plain mapping or a settings model into ``LeagueSettings``.

    Malformed option values are discarded rather than raised so callers always
    receive usable settings.
    """

    if isinstance(settings, LeagueSettings):
        return settings
    if not settings:
        return LeagueSettings()
    try:
        return LeagueSettings.model_validate(dict(settings))
    except ValueError:
        league_type = settings.get("leagueType", settings.get("league_type"))
        logger.warning("Ignoring invalid league settings %r", dict(settings))
        return LeagueSettings(league_type=league_type)
