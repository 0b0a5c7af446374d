import json
from pathlib import Path

import pytest

from draftgrade.cli import main
from draftgrade.config_loader import MappingProfile


@pytest.fixture
def roster_csv(tmp_path: Path) -> Path:
    path = tmp_path / "roster.csv"
    path.write_text(
        "Player,Pos,Proj\n"
        "Josh Allen,QB,380\n"
        "Lamar Jackson,QB,360\n"
        "Bijan Robinson,RB1,300\n"
        "Breece Hall,RB,250\n"
        "James Cook,RB,240\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def vorp_json(tmp_path: Path) -> Path:
    path = tmp_path / "vorp.json"
    path.write_text(json.dumps({"vorpScores": [{"playerName": "Josh Allen", "vorpScore": 50}]}), encoding="utf-8")
    return path


def test_cli_writes_analysis(tmp_path: Path, roster_csv: Path, vorp_json: Path):
    output = tmp_path / "analysis.json"
    exit_code = main(
        [
            str(roster_csv),
            "--vorp",
            str(vorp_json),
            "--league-type",
            "superflex",
            "--column",
            "name=Player",
            "--column",
            "position=Pos",
            "--column",
            "projected_points=Proj",
            "--output",
            str(output),
        ]
    )
    assert exit_code == 0

    data = json.loads(output.read_text(encoding="utf-8"))
    assert [player["player_name"] for player in data["optimal_lineup"]["SUPERFLEX"]] == ["Lamar Jackson"]
    assert [player["player_name"] for player in data["optimal_lineup"]["FLEX"]] == ["James Cook"]
    assert data["bench_players"] == []
    assert data["total_projected_points"] == pytest.approx(1530.0)
    assert data["analysis"]["league_type"] == "superflex"
    assert data["grades"]["position_grades"]["QB"]["vorp_total"] == pytest.approx(50.0)
    assert data["construction"]["positional_balance"]["position_counts"] == {"QB": 2, "RB": 3}
    assert data["construction"]["depth_strategy"]["bench_size"] == 0


def test_cli_profile_round_trip(tmp_path: Path, roster_csv: Path, capsys: pytest.CaptureFixture[str]):
    profile_path = tmp_path / "profile.json"
    main(
        [
            str(roster_csv),
            "--column",
            "name=Player",
            "--column",
            "position=Pos",
            "--column",
            "projected_points=Proj",
            "--league-type",
            "2qb",
            "--save-profile",
            str(profile_path),
        ]
    )
    capsys.readouterr()

    profile = MappingProfile.load(profile_path)
    assert profile.league_type == "2qb"
    assert profile.roster_mapping["name"] == "Player"

    assert main([str(roster_csv), "--load-profile", str(profile_path)]) == 0
    data = json.loads(capsys.readouterr().out)
    assert [player["player_name"] for player in data["optimal_lineup"]["QB"]] == ["Josh Allen", "Lamar Jackson"]
    assert "SUPERFLEX" not in data["optimal_lineup"]


def test_cli_rejects_bad_column_entry(roster_csv: Path):
    with pytest.raises(ValueError):
        main([str(roster_csv), "--column", "name"])
