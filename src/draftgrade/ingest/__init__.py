"""Input adapters that normalize roster, VORP, ADP and draft data."""

from .roster import (
    AdpRow,
    CheatSheetRow,
    RosterRow,
    clean_position,
    load_adp_csv,
    load_roster_csv,
    load_vorp_cheat_sheet,
    load_vorp_json,
)
from .sleeper import (
    DraftRosters,
    DraftTeam,
    SleeperClient,
    SleeperError,
    build_draft_rosters,
    fetch_draft_rosters,
    parse_sleeper_draft_url,
)

__all__ = [
    "AdpRow",
    "CheatSheetRow",
    "DraftRosters",
    "DraftTeam",
    "RosterRow",
    "SleeperClient",
    "SleeperError",
    "build_draft_rosters",
    "clean_position",
    "fetch_draft_rosters",
    "load_adp_csv",
    "load_roster_csv",
    "load_vorp_cheat_sheet",
    "load_vorp_json",
    "parse_sleeper_draft_url",
]
