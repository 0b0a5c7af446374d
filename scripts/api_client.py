"""Lightweight REST client for the draftgrade API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def build_mapping(name: str) -> dict[str, str]:
    if not name:
        return {}
    try:
        return json.loads(name)
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid mapping JSON: {exc}") from exc


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the draftgrade REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("roster", type=Path, nargs="?", help="Roster CSV")
    parser.add_argument("--league-type", default="standard", help="League format for the lineup")
    parser.add_argument("--roster-mapping", default="", help="JSON mapping for roster columns")
    parser.add_argument("--draft-url", help="Analyze a Sleeper mock draft and exit")
    parser.add_argument("--formats", action="store_true", help="List supported league formats and exit")
    parser.add_argument("--cheat-sheet", choices=("vorp", "adp"), help="Fetch a cheat sheet and exit")
    parser.add_argument("--timeout", type=float, default=60.0, help="Request timeout in seconds")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url, timeout=args.timeout) as client:
        if args.formats or args.cheat_sheet or args.draft_url:
            if args.formats:
                resp = client.get("/formats")
                resp.raise_for_status()
                print(json.dumps(resp.json(), indent=2))
            if args.cheat_sheet:
                resp = client.get(f"/cheat-sheet/{args.cheat_sheet}")
                resp.raise_for_status()
                payload = resp.json()
                print(f"Received {payload['count']} {args.cheat_sheet} rows")
                print(json.dumps(payload["data"][:10], indent=2))
            if args.draft_url:
                resp = client.post(
                    "/analyze-draft",
                    json={"draftUrl": args.draft_url, "settings": {"leagueType": args.league_type}},
                )
                if resp.status_code >= 400:
                    raise SystemExit(f"draft analysis failed: {resp.json().get('detail')}")
                payload = resp.json()
                print("Draft:", json.dumps(payload["draft_info"], indent=2))
                for team in payload["teams"]:
                    grades = team["analysis"]["grades"]
                    print(
                        f"{team['owner_name']}: {team['total_projected_points']:.1f} pts, "
                        f"grade {grades['overall_grade']}"
                    )
            return

        if args.roster is None:
            raise SystemExit("roster file is required unless using --formats/--cheat-sheet/--draft-url")

        build_mapping(args.roster_mapping)
        files = {"roster": (args.roster.name, args.roster.read_bytes(), "text/csv")}
        data = {"league_type": args.league_type}
        if args.roster_mapping:
            data["roster_mapping"] = args.roster_mapping
        resp = client.post("/lineup/upload", files=files, data=data)
        resp.raise_for_status()
        payload = resp.json()
        print("Analysis:", json.dumps(payload["analysis"], indent=2))
        print(f"Starters: {payload['total_projected_points']:.2f} pts, bench: {payload['bench_points']:.2f} pts")
        print(json.dumps(payload["optimal_lineup"], indent=2))


if __name__ == "__main__":
    main()
