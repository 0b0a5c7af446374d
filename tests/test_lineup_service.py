import pytest

from draftgrade.lineup import (
    analyze_lineup,
    build_lineup_report,
    calculate_optimal_lineup,
    calculate_total_projected_points,
    get_bench_players,
)
from draftgrade.models import PlayerRecord


FIXED_SLOTS = ["QB", "RB", "WR", "TE", "K", "DEF"]


def _player(name: str, position: str, points: float | None, player_id: str | None = None) -> PlayerRecord:
    return PlayerRecord(player_id=player_id, player_name=name, position=position, projected_points=points)


def _sample_roster() -> list[PlayerRecord]:
    return [
        _player("Josh Allen", "QB", 380.0),
        _player("Jalen Hurts", "QB", 360.0),
        _player("Bijan Robinson", "RB", 300.0),
        _player("Breece Hall", "RB", 250.0),
        _player("James Cook", "RB", 240.0),
        _player("CeeDee Lamb", "WR", 320.0),
        _player("Garrett Wilson", "WR", 260.0),
        _player("Zay Flowers", "WR", 245.0),
        _player("Sam LaPorta", "TE", 200.0),
        _player("Jake Ferguson", "TE", 150.0),
        _player("Justin Tucker", "K", 140.0),
        _player("Ravens", "DEF", 120.0),
    ]


def _keys(players) -> list[str]:
    return [player.identity_key for player in players]


def test_top_k_per_position_and_bench():
    roster = [
        _player("A", "RB", 10),
        _player("B", "RB", 20),
        _player("C", "RB", 5),
    ]
    lineup = calculate_optimal_lineup(roster, {"leagueType": "standard"})

    assert _keys(lineup["RB"]) == ["B", "A"]
    # C is the only RB/WR/TE left, so it takes the flex spot
    assert _keys(lineup["FLEX"]) == ["C"]
    assert get_bench_players(roster, lineup) == []


def test_flex_takes_best_remaining_across_positions():
    lineup = calculate_optimal_lineup(_sample_roster())

    assert _keys(lineup["QB"]) == ["Josh Allen"]
    assert _keys(lineup["RB"]) == ["Bijan Robinson", "Breece Hall"]
    assert _keys(lineup["WR"]) == ["CeeDee Lamb", "Garrett Wilson"]
    assert _keys(lineup["FLEX"]) == ["Zay Flowers"]
    assert "SUPERFLEX" not in lineup


def test_lineup_and_bench_partition_roster():
    roster = _sample_roster()
    for league_type in ("standard", "superflex", "2qb", "2flex", "bogus"):
        lineup = calculate_optimal_lineup(roster, {"leagueType": league_type})
        starters = [key for players in lineup.values() for key in _keys(players)]
        bench = _keys(get_bench_players(roster, lineup))

        assert len(starters) == len(set(starters))
        assert not set(starters) & set(bench)
        assert set(starters) | set(bench) == set(_keys(roster))


def test_flex_omitted_when_no_candidates_remain():
    roster = [
        _player("QB1", "QB", 300),
        _player("RB1", "RB", 200),
        _player("RB2", "RB", 180),
        _player("WR1", "WR", 190),
        _player("WR2", "WR", 170),
        _player("TE1", "TE", 120),
    ]
    lineup = calculate_optimal_lineup(roster)

    assert "FLEX" not in lineup
    assert lineup["K"] == []
    assert lineup["DEF"] == []


def test_two_flex_fills_every_configured_slot():
    lineup = calculate_optimal_lineup(_sample_roster(), {"leagueType": "2flex"})
    assert _keys(lineup["FLEX"]) == ["Zay Flowers", "James Cook"]


def test_two_flex_stops_when_pool_exhausted():
    roster = [_player("RB1", "RB", 10), _player("RB2", "RB", 9), _player("RB3", "RB", 8)]
    lineup = calculate_optimal_lineup(roster, {"leagueType": "2flex"})
    assert _keys(lineup["FLEX"]) == ["RB3"]


def test_superflex_picks_best_remaining_quarterback():
    lineup = calculate_optimal_lineup(_sample_roster(), {"leagueType": "superflex"})

    assert _keys(lineup["FLEX"]) == ["Zay Flowers"]
    assert _keys(lineup["SUPERFLEX"]) == ["Jalen Hurts"]


def test_superflex_slot_only_in_superflex_format():
    lineup = calculate_optimal_lineup(_sample_roster(), {"leagueType": "2qb"})
    assert _keys(lineup["QB"]) == ["Josh Allen", "Jalen Hurts"]
    assert "SUPERFLEX" not in lineup


def test_ties_keep_roster_order():
    roster = [
        _player("First", "WR", 100),
        _player("Second", "WR", 100),
        _player("Third", "WR", 100),
        _player("Fourth", "TE", 100),
    ]
    lineup = calculate_optimal_lineup(roster)

    assert _keys(lineup["WR"]) == ["First", "Second"]
    assert _keys(lineup["TE"]) == ["Fourth"]
    assert _keys(lineup["FLEX"]) == ["Third"]


def test_unknown_format_matches_standard():
    roster = _sample_roster()
    assert calculate_optimal_lineup(roster, {"leagueType": "bogus"}) == calculate_optimal_lineup(
        roster, {"leagueType": "standard"}
    )


def test_empty_roster():
    lineup = calculate_optimal_lineup([], {})

    assert list(lineup) == FIXED_SLOTS
    assert all(players == [] for players in lineup.values())
    assert get_bench_players([], lineup) == []


def test_players_without_position_stay_on_bench():
    roster = [_player("Mystery", "", 999), _player("QB1", "qb", 10)]
    lineup = calculate_optimal_lineup(roster)

    assert _keys(lineup["QB"]) == ["QB1"]
    assert _keys(get_bench_players(roster, lineup)) == ["Mystery"]


def test_player_id_takes_precedence_over_name():
    roster = [
        _player("Same Name", "RB", 50, player_id="1"),
        _player("Same Name", "RB", 40, player_id="2"),
        _player("Same Name", "RB", 30, player_id="3"),
    ]
    lineup = calculate_optimal_lineup(roster)
    assert _keys(lineup["RB"]) == ["1", "2"]
    assert _keys(lineup["FLEX"]) == ["3"]


def test_accepts_plain_mappings():
    roster = [
        {"playerName": "Mapped Back", "position": "rb", "projectedPoints": 12},
        {"playerName": "Mapped Kicker", "position": "K"},
    ]
    lineup = calculate_optimal_lineup(roster)
    assert _keys(lineup["RB"]) == ["Mapped Back"]
    assert lineup["K"][0].projected_points == 0.0


def test_total_projected_points_accepts_lineup_or_list():
    lineup = calculate_optimal_lineup(_sample_roster())
    bench = get_bench_players(_sample_roster(), lineup)

    assert calculate_total_projected_points(lineup) == pytest.approx(2215.0)
    assert calculate_total_projected_points(bench) == pytest.approx(750.0)
    assert calculate_total_projected_points([{"projectedPoints": 1.005}, {"projectedPoints": None}]) == pytest.approx(1.0, abs=0.01)


def test_analyze_lineup_echoes_requirement():
    analysis = analyze_lineup({}, {"leagueType": "superflex"})

    assert analysis.total_starters == 10
    assert analysis.league_type == "superflex"
    assert analysis.requirements["superflexPositions"] == ["QB", "RB", "WR", "TE"]
    assert analysis.position_requirements == {
        "QB": 1,
        "RB": 2,
        "WR": 2,
        "TE": 1,
        "K": 1,
        "DEF": 1,
        "FLEX": 1,
        "SUPERFLEX": 1,
    }


def test_build_lineup_report_bundles_totals():
    report = build_lineup_report(_sample_roster(), {"leagueType": "standard"})

    assert report.total_projected_points == pytest.approx(2215.0)
    assert _keys(report.bench_players) == ["Jalen Hurts", "James Cook", "Jake Ferguson"]
    assert report.bench_points == pytest.approx(750.0)
    assert report.analysis.total_starters == 9


def test_anonymous_mapping_players_partition_roster():
    roster = [
        {"position": "K", "projectedPoints": 100},
        {"position": "K", "projectedPoints": 100},
        {"position": "DEF", "projectedPoints": 90},
    ]
    lineup = calculate_optimal_lineup(roster)
    bench = get_bench_players(roster, lineup)

    assert len(lineup["K"]) == 1
    assert len(lineup["DEF"]) == 1
    assert [(player.position, player.projected_points) for player in bench] == [("K", 100.0)]
    assert len(bench) + sum(len(players) for players in lineup.values()) == len(roster)
