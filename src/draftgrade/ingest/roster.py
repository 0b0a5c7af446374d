"""Helpers to load roster, VORP and ADP files into canonical records."""

from __future__ import annotations

import csv
import json
import logging
import re
from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from draftgrade.models import PlayerRecord, VorpEntry, coerce_points


logger = logging.getLogger(__name__)

DEFAULT_ROSTER_MAPPING = {
    "player_id": "player_id",
    "name": "name",
    "position": "position",
    "team": "team",
    "projected_points": "projected_points",
}

_POSITION_RANK_SUFFIX = re.compile(r"\d+$")


def clean_position(raw: Optional[str]) -> str:
    """Drop positional rank suffixes ("WR12" -> "WR") and normalize case."""

    if not raw:
        return ""
    return _POSITION_RANK_SUFFIX.sub("", raw.strip()).upper()


class RosterRow(BaseModel):
    raw_id: Optional[str] = None
    raw_name: str
    raw_position: Optional[str] = None
    raw_team: Optional[str] = None
    raw_projection: str = "0"

    @classmethod
    def from_mapping(cls, row: Mapping[str, str], mapping: Mapping[str, str]) -> "RosterRow":
        def extract(spec: Optional[str | Sequence[str]], *, default: Optional[str] = None) -> Optional[str]:
            if spec is None:
                return default
            if isinstance(spec, str):
                value = row.get(spec)
                return value.strip() if value is not None else default
            parts = [row.get(col, "").strip() for col in spec if row.get(col)]
            return " ".join(parts) if parts else default

        def parse_spec(key: str) -> Optional[str | Sequence[str]]:
            spec = mapping.get(key, DEFAULT_ROSTER_MAPPING.get(key))
            if spec is None:
                return None
            if "|" in spec:
                return tuple(part.strip() for part in spec.split("|"))
            return spec

        return cls(
            raw_id=extract(parse_spec("player_id")),
            raw_name=extract(parse_spec("name"), default="") or "",
            raw_position=extract(parse_spec("position")),
            raw_team=extract(parse_spec("team")),
            raw_projection=extract(parse_spec("projected_points"), default="0") or "0",
        )

    def to_record(self) -> PlayerRecord:
        return PlayerRecord(
            player_id=self.raw_id,
            player_name=self.raw_name,
            position=clean_position(self.raw_position),
            team=self.raw_team,
            projected_points=self.raw_projection,
        )


def load_roster_csv(path: Path, *, mapping: Mapping[str, str] | None = None) -> List[PlayerRecord]:
    mapping = mapping or DEFAULT_ROSTER_MAPPING
    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        rows = [RosterRow.from_mapping(row, mapping) for row in reader]
    records = [row.to_record() for row in rows]
    missing_position = sum(1 for record in records if not record.position)
    if missing_position:
        logger.warning("%d roster rows in %s have no position", missing_position, path)
    return records


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"{path} is not valid JSON: {exc}") from exc


def load_vorp_json(path: Path) -> List[VorpEntry]:
    """Read VORP scores from either ``{"vorpScores": [...]}`` or a bare list."""

    data = _read_json(path)
    if isinstance(data, Mapping):
        data = data.get("vorpScores", [])
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of VORP entries")
    entries = [VorpEntry.model_validate(item) for item in data if isinstance(item, Mapping)]
    logger.info("Loaded %d VORP entries from %s", len(entries), path)
    return entries


class CheatSheetRow(BaseModel):
    name: str
    position: str
    vorp: float = 0.0
    points: float = 0.0


def load_vorp_cheat_sheet(path: Path) -> List[CheatSheetRow]:
    """Flatten the per-position top player lists of a VORP summary file."""

    data = _read_json(path)
    position_stats = data.get("positionStats", {}) if isinstance(data, Mapping) else {}
    rows: List[CheatSheetRow] = []
    for position, stats in position_stats.items():
        top_players = stats.get("topPlayers") if isinstance(stats, Mapping) else None
        if not isinstance(top_players, list):
            continue
        for player in top_players:
            if not isinstance(player, Mapping):
                continue
            rows.append(
                CheatSheetRow(
                    name=str(player.get("name", "")),
                    position=position,
                    vorp=coerce_points(player.get("vorp")),
                    points=coerce_points(player.get("points")),
                )
            )
    return rows


class AdpRow(BaseModel):
    rank: int = Field(default=0, alias="Rank")
    player: str = Field(alias="Player")
    team: str = Field(alias="Team")
    bye: int = Field(default=0, alias="Bye")
    position: str = Field(alias="POS")
    avg: float = Field(alias="AVG")
    sources: dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(populate_by_name=True)


def _parse_int(raw: Optional[str]) -> int:
    try:
        return int(float(raw)) if raw not in (None, "") else 0
    except ValueError:
        return 0


_ADP_REQUIRED = ("Player", "Team", "POS", "AVG")
_ADP_CORE = {"Rank", "Player", "Team", "Bye", "POS", "AVG"}


def load_adp_csv(path: Path) -> List[AdpRow]:
    """Parse a FantasyPros overall ADP export, skipping incomplete rows."""

    rows: List[AdpRow] = []
    with path.open(newline="", encoding="utf-8-sig") as f:
        reader = csv.DictReader(f)
        for line_no, row in enumerate(reader, start=2):
            values = {key.strip(): (value or "").strip() for key, value in row.items() if key}
            if any(not values.get(column) for column in _ADP_REQUIRED):
                logger.debug("Line %d missing required ADP fields; skipping", line_no)
                continue
            rows.append(
                AdpRow(
                    rank=_parse_int(values.get("Rank")),
                    player=values["Player"],
                    team=values["Team"],
                    bye=_parse_int(values.get("Bye")),
                    position=clean_position(values["POS"]),
                    avg=coerce_points(values["AVG"]),
                    sources={key: value for key, value in values.items() if key not in _ADP_CORE},
                )
            )
    logger.info("Loaded %d ADP rows from %s", len(rows), path)
    return rows
