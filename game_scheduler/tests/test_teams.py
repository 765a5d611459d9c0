"""Tests for the team directory and identifier resolution."""

import dataclasses

import pytest

from game_scheduler.teams import (
    DEFAULT_TEAM_ID,
    TEAMS,
    UnknownTeamIdentifier,
    parse_team_selector,
    resolve_team,
    resolve_team_selection,
    resolve_teams,
    team_by_code,
    team_by_id,
)


class TestTeamDirectory:
    def test_directory_is_a_bijection(self):
        codes = [team.code for team in TEAMS]
        ids = [team.id for team in TEAMS]
        assert len(TEAMS) == 32
        assert len(set(codes)) == len(codes)
        assert len(set(ids)) == len(ids)

    def test_codes_are_canonical_uppercase(self):
        assert all(team.code == team.code.upper() and len(team.code) == 3 for team in TEAMS)

    def test_lookup_both_directions(self):
        assert team_by_code("chi").id == 16
        assert team_by_id(16).code == "CHI"
        assert team_by_code("ZZZ") is None
        assert team_by_id(999) is None

    def test_teams_are_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            TEAMS[0].id = 99

    def test_lookup_tables_are_read_only(self):
        from game_scheduler import teams

        with pytest.raises(TypeError):
            teams._TEAMS_BY_CODE["NEW"] = TEAMS[0]


class TestResolveTeam:
    @pytest.mark.parametrize("team", TEAMS, ids=lambda team: team.code)
    def test_code_and_numeric_id_resolve_identically(self, team):
        assert resolve_team(team.code) == resolve_team(str(team.id)) == team.id

    def test_codes_are_case_insensitive_and_trimmed(self):
        assert resolve_team("  dal ") == 25
        assert resolve_team("Sea") == 55

    def test_unknown_numeric_id_is_accepted(self):
        assert resolve_team("999") == 999

    def test_unknown_code_fails(self):
        with pytest.raises(UnknownTeamIdentifier) as exc_info:
            resolve_team("ZZZ")
        assert exc_info.value.token == "ZZZ"
        assert "invalid team identifier: ZZZ" in str(exc_info.value)

    @pytest.mark.parametrize("token", ["", "1_0", "2.5", "CH1", "12a"])
    def test_non_integer_tokens_fail(self, token):
        with pytest.raises(UnknownTeamIdentifier):
            resolve_team(token)


class TestResolveTeams:
    def test_mixed_formats_keep_order(self):
        assert parse_team_selector("CHI,25,BOS") == [16, 25, 1]

    def test_fails_fast_on_first_invalid_token(self):
        with pytest.raises(UnknownTeamIdentifier) as exc_info:
            resolve_teams(["CHI", "XXX", "YYY"])
        assert exc_info.value.token == "XXX"


class TestResolveTeamSelection:
    def test_all_teams_means_empty_list(self):
        assert resolve_team_selection("CHI", all_teams=True) == []

    def test_selector_is_resolved(self):
        assert resolve_team_selection("sea, lak") == [55, 26]

    def test_defaults_to_dallas(self):
        assert resolve_team_selection(None) == [DEFAULT_TEAM_ID] == [25]
