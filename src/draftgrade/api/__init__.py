"""REST API for draft grading and lineup analysis."""

from __future__ import annotations

import json
import logging
import tempfile
from dataclasses import asdict
from pathlib import Path
from typing import Callable, Iterable, List, Mapping, Sequence

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import JSONResponse

from draftgrade.analysis import TeamAnalysis, analyze_draft, analyze_team
from draftgrade.api.schemas import (
    AdpCheatSheetItem,
    AdpCheatSheetResponse,
    AnalyzeRequest,
    DraftAnalysisRequest,
    DraftAnalysisResponse,
    DraftInfoResponse,
    DraftTeamResponse,
    GradesRequest,
    GradesResponse,
    LeagueFormatResponse,
    LeaguesResponse,
    LineupAnalysisResponse,
    LineupPlayerResponse,
    LineupRequest,
    LineupResponse,
    PositionGradeResponse,
    RecommendationResponse,
    RosterConstructionResponse,
    TeamAnalysisResponse,
    TeamGradeResponse,
    VorpCheatSheetItem,
    VorpCheatSheetResponse,
)
from draftgrade.config import iter_requirements, resolve_settings
from draftgrade.config.env import data_dir as default_data_dir
from draftgrade.grading import PositionGrader, TeamGrade
from draftgrade.ingest import (
    SleeperClient,
    SleeperError,
    fetch_draft_rosters,
    load_adp_csv,
    load_roster_csv,
    load_vorp_cheat_sheet,
    load_vorp_json,
)
from draftgrade.lineup import LineupReport, build_lineup_report
from draftgrade.models import PlayerRecord, TeamRoster, VorpEntry


logger = logging.getLogger(__name__)

VORP_FILE = Path("consolidated") / "player-vorp-scores.json"
ADP_FILE = Path("2025") / "FantasyPros_2025_Overall_ADP_Rankings_PPR.csv"

SleeperClientFactory = Callable[[], SleeperClient]


def _player_response(player: PlayerRecord) -> LineupPlayerResponse:
    return LineupPlayerResponse.model_validate(player.model_dump())


def _players_response(players: Iterable[PlayerRecord]) -> List[LineupPlayerResponse]:
    return [_player_response(player) for player in players]


def _lineup_response(report: LineupReport) -> LineupResponse:
    return LineupResponse(
        optimal_lineup={slot: _players_response(players) for slot, players in report.optimal_lineup.items()},
        total_projected_points=report.total_projected_points,
        bench_players=_players_response(report.bench_players),
        bench_points=report.bench_points,
        analysis=LineupAnalysisResponse.model_validate(asdict(report.analysis)),
    )


def _grade_response(grade: TeamGrade, team: TeamRoster | None = None) -> TeamGradeResponse:
    return TeamGradeResponse(
        team_id=team.team_id if team else None,
        owner_name=team.owner_name if team else None,
        league_type=grade.league_type,
        overall_score=grade.overall_score,
        overall_grade=grade.overall_grade,
        position_grades={
            position: PositionGradeResponse.model_validate(asdict(position_grade))
            for position, position_grade in grade.position_grades.items()
        },
        recommendations=[RecommendationResponse.model_validate(asdict(item)) for item in grade.recommendations],
    )


def _analysis_response(analysis: TeamAnalysis) -> TeamAnalysisResponse:
    return TeamAnalysisResponse(
        team_id=analysis.team.team_id,
        owner_name=analysis.team.owner_name,
        lineup=_lineup_response(analysis.lineup),
        grades=_grade_response(analysis.grades, analysis.team),
        construction=RosterConstructionResponse.model_validate(asdict(analysis.construction)),
    )


def _name_lookup(entries: Sequence[VorpEntry], attr: str) -> dict[str, float]:
    return {entry.player_name.lower(): getattr(entry, attr) for entry in entries if entry.player_name}


async def _write_temp(upload: UploadFile | None) -> Path | None:
    if upload is None:
        return None
    contents = await upload.read()
    if not contents:
        return None
    tmp = tempfile.NamedTemporaryFile(delete=False, suffix=".csv")
    try:
        tmp.write(contents)
        tmp.flush()
    finally:
        tmp.close()
    return Path(tmp.name)


def _parse_mapping(mapping_str: str | None) -> dict[str, str]:
    if not mapping_str:
        return {}
    try:
        mapping = json.loads(mapping_str)
    except json.JSONDecodeError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid mapping JSON: {exc}") from exc
    if not isinstance(mapping, dict) or not all(
        isinstance(key, str) and isinstance(value, str) for key, value in mapping.items()
    ):
        raise HTTPException(status_code=400, detail="Mapping must be a JSON object of column names")
    return mapping


def create_app(
    data_dir: Path | None = None,
    sleeper_client_factory: SleeperClientFactory | None = None,
) -> FastAPI:
    app = FastAPI(title="draftgrade")
    root = data_dir or default_data_dir()
    app.state.data_dir = root
    make_sleeper_client = sleeper_client_factory or SleeperClient

    def load_vorp_entries() -> list[VorpEntry]:
        path = root / VORP_FILE
        try:
            return load_vorp_json(path)
        except FileNotFoundError:
            logger.warning("VORP data file not found at %s; grading without VORP", path)
        except ValueError as exc:
            logger.warning("Could not load VORP data: %s", exc)
        return []

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/formats", response_model=list[LeagueFormatResponse])
    async def formats() -> list[LeagueFormatResponse]:
        return [
            LeagueFormatResponse(
                league_type=requirement.league_format.value,
                total_starters=requirement.total_starters,
                slots=requirement.slot_counts(),
                flex_positions=list(requirement.flex_positions),
                superflex_positions=list(requirement.superflex_positions),
            )
            for requirement in iter_requirements()
        ]

    @app.post("/lineup", response_model=LineupResponse)
    async def lineup(request: LineupRequest) -> LineupResponse:
        return _lineup_response(build_lineup_report(request.roster, request.settings))

    @app.post("/lineup/upload", response_model=LineupResponse)
    async def lineup_upload(
        roster: UploadFile = File(...),
        league_type: str = Form("standard"),
        roster_mapping: str | None = Form(None),
    ) -> LineupResponse:
        roster_path = await _write_temp(roster)
        if roster_path is None:
            raise HTTPException(status_code=400, detail="roster file is empty")
        try:
            records = load_roster_csv(roster_path, mapping=_parse_mapping(roster_mapping) or None)
        except (ValueError, UnicodeDecodeError) as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        finally:
            roster_path.unlink(missing_ok=True)
        settings = resolve_settings({"league_type": league_type})
        return _lineup_response(build_lineup_report(records, settings))

    @app.post("/grades", response_model=GradesResponse)
    def grades(request: GradesRequest) -> GradesResponse:
        grader = PositionGrader(load_vorp_entries())
        return GradesResponse(
            teams=[
                _grade_response(grader.calculate_position_grades(team, request.settings), team)
                for team in request.teams
            ]
        )

    @app.post("/analyze", response_model=TeamAnalysisResponse)
    def analyze(request: AnalyzeRequest) -> TeamAnalysisResponse:
        grader = PositionGrader(load_vorp_entries())
        return _analysis_response(analyze_team(request.team, grader, request.settings))

    @app.post("/analyze-draft", response_model=DraftAnalysisResponse)
    def analyze_draft_url(request: DraftAnalysisRequest) -> DraftAnalysisResponse:
        if not request.draft_url:
            raise HTTPException(status_code=400, detail="Draft URL is required")
        logger.info("Starting draft analysis for URL: %s", request.draft_url)

        entries = load_vorp_entries()
        grader = PositionGrader(entries)
        adp: Mapping[str, float] = {}
        try:
            adp = {row.player.lower(): row.avg for row in load_adp_csv(root / ADP_FILE)}
        except FileNotFoundError:
            logger.warning("ADP data file not found at %s", root / ADP_FILE)

        client = make_sleeper_client()
        try:
            rosters = fetch_draft_rosters(
                request.draft_url,
                client,
                projections=_name_lookup(entries, "projected_points"),
                adp=adp,
                vorp=_name_lookup(entries, "vorp_score"),
            )
        except SleeperError as exc:
            logger.error("Draft analysis failed: %s", exc)
            raise HTTPException(status_code=502, detail=f"Draft analysis failed: {exc}") from exc
        finally:
            client.close()

        settings = resolve_settings(
            {
                "league_type": request.settings.league_type,
                "teams": max(1, rosters.team_count),
                "rounds": max(1, rosters.rounds),
            }
        )
        analyses = analyze_draft((team.to_team_roster() for team in rosters.teams), grader, settings)

        return DraftAnalysisResponse(
            message="Draft analysis completed successfully",
            draft_url=request.draft_url,
            status="completed",
            draft_info=DraftInfoResponse(
                draft_id=rosters.draft_id,
                name=rosters.name,
                teams=rosters.team_count,
                rounds=rosters.rounds,
                total_picks=rosters.total_picks,
            ),
            teams=[
                DraftTeamResponse(
                    team_id=str(team.roster_id),
                    owner_name=team.owner_name,
                    draft_slot=team.draft_slot,
                    total_projected_points=team.total_projected_points,
                    average_projected_points=team.average_projected_points,
                    total_adp_value=team.total_adp_value,
                    average_adp_value=team.average_adp_value,
                    total_vorp_score=team.total_vorp_score,
                    average_vorp_score=team.average_vorp_score,
                    analysis=_analysis_response(analysis),
                )
                for team, analysis in zip(rosters.teams, analyses)
            ],
        )

    @app.get("/cheat-sheet/vorp", response_model=VorpCheatSheetResponse)
    def vorp_cheat_sheet():
        try:
            rows = load_vorp_cheat_sheet(root / VORP_FILE)
        except (OSError, ValueError) as exc:
            logger.error("Error reading VORP data: %s", exc)
            return JSONResponse(status_code=500, content={"success": False, "error": "Failed to load VORP data"})
        data = [VorpCheatSheetItem.model_validate(row.model_dump()) for row in rows]
        return VorpCheatSheetResponse(data=data, count=len(data))

    @app.get("/cheat-sheet/adp", response_model=AdpCheatSheetResponse)
    def adp_cheat_sheet():
        try:
            rows = load_adp_csv(root / ADP_FILE)
        except (OSError, ValueError) as exc:
            logger.error("Error reading ADP data: %s", exc)
            return JSONResponse(status_code=500, content={"success": False, "error": "Failed to load ADP data"})
        data = [AdpCheatSheetItem.model_validate(row.model_dump()) for row in rows]
        return AdpCheatSheetResponse(data=data, count=len(data))

    @app.get("/leagues", response_model=LeaguesResponse)
    async def leagues() -> LeaguesResponse:
        return LeaguesResponse(message="Leagues endpoint - functionality coming soon")

    return app
