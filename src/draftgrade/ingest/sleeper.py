"""Sleeper mock-draft client and roster assembly."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

import httpx

from draftgrade.config.env import http_timeout, sleeper_base_url
from draftgrade.models import PlayerRecord, TeamRoster


logger = logging.getLogger(__name__)

_DRAFT_URL_PATTERN = re.compile(r"sleeper\.(?:com|app)/draft/nfl/([a-zA-Z0-9]+)")


class SleeperError(Exception):
    """Raised when a Sleeper draft cannot be located or fetched."""


def parse_sleeper_draft_url(url: str) -> str:
    match = _DRAFT_URL_PATTERN.search(url or "")
    if not match:
        raise SleeperError(
            "Invalid Sleeper mock draft URL format. Expected format: https://sleeper.app/draft/nfl/{draft_id}"
        )
    return match.group(1)


class SleeperClient:
    """Thin synchronous wrapper around the public Sleeper REST API."""

    def __init__(self, base_url: str | None = None, *, client: httpx.Client | None = None, timeout: float | None = None):
        self._owns_client = client is None
        self._client = client or httpx.Client(
            base_url=base_url or sleeper_base_url(),
            timeout=timeout if timeout is not None else http_timeout(),
        )

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "SleeperClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _get(self, path: str) -> Any:
        try:
            resp = self._client.get(path)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise SleeperError(
                f"Failed to fetch from Sleeper API: {exc.response.status_code} {exc.response.reason_phrase}"
            ) from exc
        except httpx.HTTPError as exc:
            raise SleeperError(f"Failed to fetch from Sleeper API: {exc}") from exc
        try:
            return resp.json()
        except ValueError as exc:
            raise SleeperError(f"Sleeper API returned invalid JSON for {path}") from exc

    def get_draft(self, draft_id: str) -> Dict[str, Any]:
        return self._get(f"/draft/{draft_id}")

    def get_picks(self, draft_id: str) -> List[Dict[str, Any]]:
        return self._get(f"/draft/{draft_id}/picks") or []

    def get_players(self) -> Dict[str, Any]:
        return self._get("/players/nfl") or {}


@dataclass
class DraftTeam:
    roster_id: int
    draft_slot: int
    owner_name: str
    players: List[PlayerRecord] = field(default_factory=list)
    total_projected_points: float = 0.0
    total_adp_value: float = 0.0
    total_vorp_score: float = 0.0

    def _average(self, total: float) -> float:
        return total / len(self.players) if self.players else 0.0

    @property
    def average_projected_points(self) -> float:
        return self._average(self.total_projected_points)

    @property
    def average_adp_value(self) -> float:
        return self._average(self.total_adp_value)

    @property
    def average_vorp_score(self) -> float:
        return self._average(self.total_vorp_score)

    def to_team_roster(self) -> TeamRoster:
        return TeamRoster(
            team_id=str(self.roster_id),
            owner_name=self.owner_name,
            draft_slot=self.draft_slot,
            roster=list(self.players),
        )


@dataclass
class DraftRosters:
    draft_id: str
    name: str
    teams: List[DraftTeam]
    rounds: int
    total_picks: int
    team_count: int = 0


def _player_name(sleeper_player: Mapping[str, Any]) -> str:
    full_name = sleeper_player.get("full_name")
    if full_name:
        return str(full_name)
    first = sleeper_player.get("first_name") or ""
    last = sleeper_player.get("last_name") or ""
    return f"{first} {last}".strip()


def build_draft_rosters(
    draft_id: str,
    draft: Mapping[str, Any],
    picks: List[Mapping[str, Any]],
    players: Mapping[str, Any],
    *,
    projections: Optional[Mapping[str, float]] = None,
    adp: Optional[Mapping[str, float]] = None,
    vorp: Optional[Mapping[str, float]] = None,
) -> DraftRosters:
    """Place each pick on its drafting roster.

    ``projections``, ``adp`` and ``vorp`` are keyed by lower-cased player name.
    """

    projections = projections or {}
    adp = adp or {}
    vorp = vorp or {}

    slot_to_roster_id = draft.get("slot_to_roster_id")
    if not slot_to_roster_id:
        raise SleeperError("No slot_to_roster_id found in draft data - this may not be a mock draft")

    teams: Dict[int, DraftTeam] = {}
    for slot, roster_id in slot_to_roster_id.items():
        teams[int(roster_id)] = DraftTeam(
            roster_id=int(roster_id),
            draft_slot=int(slot),
            owner_name=f"Team {roster_id}",
        )

    skipped = 0
    for pick in picks or []:
        sleeper_player = players.get(str(pick.get("player_id")))
        if not sleeper_player:
            skipped += 1
            continue
        roster_id = slot_to_roster_id.get(str(pick.get("draft_slot")))
        team = teams.get(int(roster_id)) if roster_id is not None else None
        if team is None:
            logger.warning("Pick %s has no matching roster; skipping", pick.get("pick_no"))
            continue

        name = _player_name(sleeper_player)
        key = name.lower()
        metadata = pick.get("metadata") or {}
        record = PlayerRecord(
            player_id=str(pick.get("player_id")),
            player_name=name,
            position=sleeper_player.get("position") or metadata.get("position") or "",
            team=sleeper_player.get("team"),
            projected_points=projections.get(key, 0.0),
            adp=adp.get(key, 0.0),
            vorp_score=vorp.get(key, 0.0),
            round=pick.get("round"),
            pick_no=pick.get("pick_no"),
        )
        team.players.append(record)
        team.total_projected_points += record.projected_points
        team.total_adp_value += record.adp or 0.0
        team.total_vorp_score += record.vorp_score or 0.0

    if skipped:
        logger.warning("Skipped %d picks with unknown player ids", skipped)

    settings = draft.get("settings") or {}
    metadata = draft.get("metadata") or {}
    return DraftRosters(
        draft_id=draft_id,
        name=metadata.get("name") or f"Draft {draft_id}",
        teams=list(teams.values()),
        rounds=int(settings.get("rounds") or 0),
        total_picks=len(picks or []),
        team_count=len(slot_to_roster_id),
    )


def fetch_draft_rosters(
    draft_url: str,
    client: SleeperClient,
    *,
    projections: Optional[Mapping[str, float]] = None,
    adp: Optional[Mapping[str, float]] = None,
    vorp: Optional[Mapping[str, float]] = None,
) -> DraftRosters:
    draft_id = parse_sleeper_draft_url(draft_url)
    logger.info("Analyzing draft ID: %s", draft_id)
    draft = client.get_draft(draft_id)
    picks = client.get_picks(draft_id)
    logger.info("Draft picks count: %d", len(picks))
    players = client.get_players()
    return build_draft_rosters(
        draft_id,
        draft,
        picks,
        players,
        projections=projections,
        adp=adp,
        vorp=vorp,
    )
