import pytest

from draftgrade.config import (
    LeagueFormat,
    LeagueSettings,
    get_requirement,
    iter_requirements,
    resolve_league_format,
    resolve_settings,
)


def test_standard_requirement_counts():
    requirement = get_requirement("standard")
    assert dict(requirement.position_counts) == {"QB": 1, "RB": 2, "WR": 2, "TE": 1, "K": 1, "DEF": 1}
    assert requirement.flex_count == 1
    assert requirement.flex_positions == ("RB", "WR", "TE")
    assert requirement.total_starters == 9
    assert not requirement.has_superflex


@pytest.mark.parametrize(
    ("name", "total"),
    [("superflex", 10), ("2qb", 10), ("2flex", 10)],
)
def test_preset_totals(name, total):
    assert get_requirement(name).total_starters == total


def test_superflex_defines_eligible_positions():
    requirement = get_requirement("superflex")
    assert requirement.has_superflex
    assert requirement.superflex_positions == ("QB", "RB", "WR", "TE")
    assert requirement.slot_counts()["SUPERFLEX"] == 1


@pytest.mark.parametrize("name", ["bogus", "", None, "robs-league"])
def test_unknown_format_falls_back_to_standard(name):
    assert resolve_league_format(name) is LeagueFormat.STANDARD
    assert get_requirement(name) is get_requirement("standard")


def test_format_lookup_is_case_insensitive():
    assert resolve_league_format(" SuperFlex ") is LeagueFormat.SUPERFLEX


def test_as_dict_includes_meta_keys():
    payload = get_requirement("2flex").as_dict()
    assert payload["FLEX"] == 2
    assert payload["flexPositions"] == ["RB", "WR", "TE"]
    assert payload["superflexPositions"] == []
    assert payload["totalStarters"] == 10
    assert "SUPERFLEX" not in payload


def test_iter_requirements_covers_every_format():
    formats = {requirement.league_format for requirement in iter_requirements()}
    assert formats == set(LeagueFormat)


def test_resolve_settings_accepts_camel_case_mapping():
    settings = resolve_settings({"leagueType": "2qb", "teams": 10})
    assert settings.league_format is LeagueFormat.TWO_QB
    assert settings.teams == 10


def test_resolve_settings_defaults():
    assert resolve_settings(None).league_type == "standard"
    assert resolve_settings({}).requirement is get_requirement("standard")


def test_resolve_settings_ignores_invalid_options():
    settings = resolve_settings({"leagueType": "superflex", "teams": "many"})
    assert settings.league_format is LeagueFormat.SUPERFLEX
    assert settings.teams == 12


def test_resolve_settings_passes_model_through():
    settings = LeagueSettings(league_type="2flex")
    assert resolve_settings(settings) is settings
