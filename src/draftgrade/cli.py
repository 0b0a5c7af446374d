"""Command-line interface for grading a roster and building its optimal lineup."""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any, Sequence

from draftgrade.analysis import TeamAnalysis, analyze_team
from draftgrade.config import resolve_settings
from draftgrade.config_loader import MappingProfile
from draftgrade.grading import PositionGrader
from draftgrade.ingest import load_roster_csv, load_vorp_json
from draftgrade.models import TeamRoster


logger = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build the optimal lineup and position grades for a roster")
    parser.add_argument("roster", type=Path, help="Path to roster CSV")
    parser.add_argument("--vorp", type=Path, default=None, help="Optional VORP scores JSON")
    parser.add_argument(
        "--league-type",
        default=None,
        help="League format (standard, superflex, 2qb, 2flex); unknown values use standard",
    )
    parser.add_argument(
        "--column",
        action="append",
        default=[],
        help="Mapping for roster CSV columns (e.g., name=First Name|Last Name)",
    )
    parser.add_argument("--load-profile", type=Path, help="Load column mapping JSON", default=None)
    parser.add_argument("--save-profile", type=Path, help="Save column mapping JSON", default=None)
    parser.add_argument("--output", type=Path, default=None, help="Write analysis JSON here instead of stdout")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def _parse_mapping(entries: list[str]) -> dict[str, str]:
    mapping: dict[str, str] = {}
    for entry in entries:
        if "=" not in entry:
            raise ValueError(f"Invalid mapping entry '{entry}', expected key=value")
        key, value = entry.split("=", 1)
        mapping[key.strip()] = value.strip()
    return mapping


def analysis_to_dict(analysis: TeamAnalysis) -> dict[str, Any]:
    lineup = analysis.lineup
    return {
        "optimal_lineup": {
            slot: [player.model_dump() for player in players] for slot, players in lineup.optimal_lineup.items()
        },
        "total_projected_points": lineup.total_projected_points,
        "bench_players": [player.model_dump() for player in lineup.bench_players],
        "bench_points": lineup.bench_points,
        "analysis": asdict(lineup.analysis),
        "grades": asdict(analysis.grades),
        "construction": asdict(analysis.construction),
    }


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    roster_mapping = _parse_mapping(args.column)
    league_type = args.league_type
    if args.load_profile:
        profile = MappingProfile.load(args.load_profile)
        roster_mapping = profile.roster_mapping | roster_mapping
        league_type = league_type or profile.league_type
    if args.save_profile:
        MappingProfile(roster_mapping, league_type).save(args.save_profile)
        print(f"Saved mapping profile to {args.save_profile}")

    records = load_roster_csv(args.roster, mapping=roster_mapping or None)
    entries = load_vorp_json(args.vorp) if args.vorp else []
    grader = PositionGrader(entries)
    settings = resolve_settings({"league_type": league_type})

    analysis = analyze_team(TeamRoster(roster=records), grader, settings)
    payload = json.dumps(analysis_to_dict(analysis), indent=2)

    if args.output:
        args.output.write_text(payload, encoding="utf-8")
        print(f"Wrote analysis for {len(records)} players to {args.output}")
    else:
        print(payload)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
