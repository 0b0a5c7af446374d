"""Canonical player models shared across ingestion, lineup and grading layers."""

from __future__ import annotations

import math
from typing import Any, List, Mapping, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator
from pydantic.config import ConfigDict


def coerce_points(value: Any) -> float:
    """Best-effort numeric conversion; anything unusable counts as zero."""

    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class PlayerRecord(BaseModel):
    """Normalized roster entry.

    Loosely shaped input (camelCase keys, missing positions, blank projections)
    is accepted and coerced to neutral defaults instead of being rejected.
    """

    player_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("playerId", "player_id", "id"),
    )
    player_name: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("playerName", "player_name", "name"),
    )
    position: str = ""
    projected_points: float = Field(
        default=0.0,
        validation_alias=AliasChoices("projectedPoints", "projected_points"),
    )
    team: Optional[str] = None
    adp: Optional[float] = Field(default=None, validation_alias=AliasChoices("adpValue", "adp"))
    vorp_score: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices("vorpScore", "vorp_score"),
    )
    round: Optional[int] = None
    pick_no: Optional[int] = Field(default=None, validation_alias=AliasChoices("pickNo", "pick_no"))

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @field_validator("player_id", "player_name", "team", mode="before")
    @classmethod
    def _strip_text(cls, value: Any) -> Optional[str]:
        return _optional_text(value)

    @field_validator("position", mode="before")
    @classmethod
    def _normalize_position(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip().upper()

    @field_validator("projected_points", mode="before")
    @classmethod
    def _coerce_projection(cls, value: Any) -> float:
        return max(0.0, coerce_points(value))

    @field_validator("adp", "vorp_score", mode="before")
    @classmethod
    def _coerce_optional_float(cls, value: Any) -> Optional[float]:
        if value is None or value == "":
            return None
        return coerce_points(value)

    @field_validator("round", "pick_no", mode="before")
    @classmethod
    def _coerce_optional_int(cls, value: Any) -> Optional[int]:
        if value is None or value == "":
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            return None

    @property
    def identity_key(self) -> Optional[str]:
        return self.player_id or self.player_name

    @property
    def display_name(self) -> str:
        return self.player_name or self.player_id or ""


class VorpEntry(BaseModel):
    """Precomputed value-over-replacement score for one player."""

    player_name: str = Field(
        default="",
        validation_alias=AliasChoices("playerName", "player_name", "name"),
    )
    position: str = ""
    vorp_score: float = Field(
        default=0.0,
        validation_alias=AliasChoices("vorpScore", "vorp_score", "vorp"),
    )
    projected_points: float = Field(
        default=0.0,
        validation_alias=AliasChoices("projectedPoints", "projected_points", "points"),
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _first_non_null_key(cls, data: Any) -> Any:
        # An explicit null under one key falls through to the next spelling.
        if not isinstance(data, Mapping):
            return data
        merged = dict(data)
        for name, field in cls.model_fields.items():
            keys = field.validation_alias.choices if isinstance(field.validation_alias, AliasChoices) else (name,)
            value = next((data[key] for key in keys if data.get(key) is not None), None)
            for key in keys:
                merged.pop(key, None)
            if value is not None:
                merged[name] = value
        return merged

    @field_validator("player_name", mode="before")
    @classmethod
    def _name_text(cls, value: Any) -> str:
        return _optional_text(value) or ""

    @field_validator("position", mode="before")
    @classmethod
    def _normalize_position(cls, value: Any) -> str:
        return str(value or "").strip().upper()

    @field_validator("vorp_score", "projected_points", mode="before")
    @classmethod
    def _coerce_score(cls, value: Any) -> float:
        return coerce_points(value)


class TeamRoster(BaseModel):
    """A drafted team and the players on it."""

    team_id: Optional[str] = Field(default=None, validation_alias=AliasChoices("teamId", "team_id"))
    owner_name: Optional[str] = Field(default=None, validation_alias=AliasChoices("ownerName", "owner_name"))
    draft_slot: Optional[int] = Field(default=None, validation_alias=AliasChoices("draftSlot", "draft_slot"))
    roster: List[PlayerRecord] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("team_id", mode="before")
    @classmethod
    def _team_id_text(cls, value: Any) -> Optional[str]:
        return _optional_text(value)
