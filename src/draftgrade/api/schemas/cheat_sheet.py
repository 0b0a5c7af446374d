from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class VorpCheatSheetItem(BaseModel):
    name: str
    position: str
    vorp: float
    points: float


class VorpCheatSheetResponse(BaseModel):
    success: bool = True
    data: List[VorpCheatSheetItem]
    count: int


class AdpCheatSheetItem(BaseModel):
    rank: int
    player: str
    team: str
    bye: int
    position: str
    avg: float
    sources: dict[str, str] = Field(default_factory=dict)


class AdpCheatSheetResponse(BaseModel):
    success: bool = True
    data: List[AdpCheatSheetItem]
    count: int


class LeagueFormatResponse(BaseModel):
    league_type: str
    total_starters: int
    slots: dict[str, int]
    flex_positions: List[str]
    superflex_positions: List[str]


class LeaguesResponse(BaseModel):
    data: list = Field(default_factory=list)
    message: str
    status: str = "ok"
