import json
from pathlib import Path

import pytest

from draftgrade.ingest import (
    RosterRow,
    clean_position,
    load_adp_csv,
    load_roster_csv,
    load_vorp_cheat_sheet,
    load_vorp_json,
)


def test_clean_position_strips_rank_suffix():
    assert clean_position("wr12") == "WR"
    assert clean_position(" DEF ") == "DEF"
    assert clean_position(None) == ""


def test_load_roster_csv_with_joined_name_columns(tmp_path: Path):
    path = tmp_path / "roster.csv"
    path.write_text(
        "Id,First,Last,Pos,Proj\n"
        "1,Josh,Allen,QB1,380.5\n"
        "2,Breece,Hall,RB,\n"
        "3,Mystery,Man,,12\n",
        encoding="utf-8",
    )
    mapping = {"player_id": "Id", "name": "First|Last", "position": "Pos", "projected_points": "Proj"}

    records = load_roster_csv(path, mapping=mapping)

    assert [record.player_name for record in records] == ["Josh Allen", "Breece Hall", "Mystery Man"]
    assert records[0].position == "QB"
    assert records[0].projected_points == pytest.approx(380.5)
    assert records[1].projected_points == 0.0
    assert records[2].position == ""


def test_roster_row_uses_default_columns():
    row = RosterRow.from_mapping(
        {"name": "Sam LaPorta", "position": "te", "projected_points": "200"},
        {},
    )
    record = row.to_record()
    assert record.identity_key == "Sam LaPorta"
    assert record.position == "TE"


def test_load_vorp_json_wrapped_and_bare(tmp_path: Path):
    wrapped = tmp_path / "wrapped.json"
    wrapped.write_text(json.dumps({"vorpScores": [{"playerName": "A", "vorp_score": 3.5}]}), encoding="utf-8")
    bare = tmp_path / "bare.json"
    bare.write_text(json.dumps([{"playerName": "B", "vorpScore": 7}, "junk"]), encoding="utf-8")

    assert load_vorp_json(wrapped)[0].vorp_score == pytest.approx(3.5)
    assert [entry.player_name for entry in load_vorp_json(bare)] == ["B"]


def test_load_vorp_json_rejects_bad_json(tmp_path: Path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        load_vorp_json(path)


def test_load_vorp_json_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_vorp_json(tmp_path / "missing.json")


def test_load_vorp_cheat_sheet_flattens_positions(tmp_path: Path):
    path = tmp_path / "vorp.json"
    path.write_text(
        json.dumps(
            {
                "positionStats": {
                    "QB": {"topPlayers": [{"name": "Josh Allen", "vorp": 80.1, "points": 380}]},
                    "RB": {"topPlayers": [{"name": "Bijan Robinson", "vorp": 60, "points": 300}]},
                    "K": {"median": 120},
                }
            }
        ),
        encoding="utf-8",
    )
    rows = load_vorp_cheat_sheet(path)
    assert [(row.name, row.position) for row in rows] == [("Josh Allen", "QB"), ("Bijan Robinson", "RB")]
    assert rows[0].vorp == pytest.approx(80.1)


def test_load_adp_csv_skips_incomplete_rows(tmp_path: Path):
    path = tmp_path / "adp.csv"
    path.write_text(
        '"Rank","Player","Team","Bye","POS","ESPN","AVG"\n'
        '"1","Ja\'Marr Chase","CIN","10","WR1","1","1.3"\n'
        '"2","Bijan Robinson","ATL","5","RB1","2","2.0"\n'
        '"3","Free Agent","","","WR99","","140"\n'
        '"x","Late Pick","KC","","K3","","n/a"\n',
        encoding="utf-8",
    )

    rows = load_adp_csv(path)

    assert [row.player for row in rows] == ["Ja'Marr Chase", "Bijan Robinson", "Late Pick"]
    assert rows[0].position == "WR"
    assert rows[0].rank == 1
    assert rows[0].bye == 10
    assert rows[0].avg == pytest.approx(1.3)
    assert rows[0].sources == {"ESPN": "1"}
    assert rows[2].rank == 0
    assert rows[2].avg == 0.0
