# tests/test_teams.py
"""Tests for team identity resolution."""
import pytest

from savant.normalization.teams import (
    CANONICAL_CODES,
    TEAM_ALIASES,
    UNKNOWN_TEAM,
    is_known_team,
    normalize_team_code,
)


class TestNormalizeTeamCode:
    """Tests for normalize_team_code."""

    @pytest.mark.parametrize(
        "aliases, expected",
        [
            (["Tampa Bay Lightning", "T.B", "TB", "tbl"], "TBL"),
            (["San Jose Sharks", "S.J", "SJ", "SJS"], "SJS"),
            (["Los Angeles Kings", "L.A", "LA", "LAK"], "LAK"),
            (["New Jersey Devils", "N.J", "NJ", "NJD"], "NJD"),
            (["Vegas Golden Knights", "VEG", "VGK"], "VGK"),
            (["Boston Bruins", "boston", "BOS"], "BOS"),
        ],
    )
    def test_every_alias_resolves_to_the_same_code(self, aliases, expected):
        """Full name, short forms and the code itself agree."""
        assert {normalize_team_code(alias) for alias in aliases} == {expected}

    def test_relocated_franchise_maps_to_current_code(self):
        """Arizona's old codes resolve to Utah."""
        assert normalize_team_code("ARI") == "UTA"
        assert normalize_team_code("Arizona Coyotes") == "UTA"
        assert normalize_team_code("UTAH") == "UTA"

    def test_input_is_trimmed_and_uppercased(self):
        assert normalize_team_code("  toronto maple leafs ") == "TOR"

    @pytest.mark.parametrize("value", ["", "   ", None])
    def test_empty_or_missing_is_unknown(self, value):
        assert normalize_team_code(value) == UNKNOWN_TEAM

    def test_unrecognized_three_letters_are_trusted_verbatim(self):
        """Three-character input not in the table is assumed canonical."""
        assert normalize_team_code("XYZ") == "XYZ"
        assert normalize_team_code("xyz") == "XYZ"

    def test_unrecognized_longer_input_is_unknown(self):
        assert normalize_team_code("Hartford Whalers") == UNKNOWN_TEAM
        assert normalize_team_code("X") == UNKNOWN_TEAM

    def test_non_string_input_does_not_raise(self):
        assert normalize_team_code(123) == "123"
        assert normalize_team_code(12) == UNKNOWN_TEAM


class TestAliasTable:
    """Tests for the static alias table."""

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            TEAM_ALIASES["NEW"] = "NEW"  # type: ignore[index]

    def test_covers_the_whole_league(self):
        assert len(CANONICAL_CODES) == 32
        assert all(len(code) == 3 for code in CANONICAL_CODES)

    def test_every_canonical_code_maps_to_itself(self):
        for code in CANONICAL_CODES:
            assert normalize_team_code(code) == code

    def test_is_known_team(self):
        assert is_known_team("BOS")
        assert not is_known_team("XYZ")
        assert not is_known_team(UNKNOWN_TEAM)
