"""Tests for stacks/selection.py -- the selection expression parser."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from stackup.errors import SelectionAborted
from stackup.models import Stack
from stackup.stacks.selection import parse_selection, select_stacks


def _names(chosen: list[Stack]) -> list[str]:
    return [s.name for s in chosen]


class TestParseIndices:
    def test_single_index(self, stacks):
        assert _names(parse_selection("2", stacks)) == ["beta"]

    def test_comma_list_keeps_input_order(self, stacks):
        assert _names(parse_selection("3,1", stacks)) == ["gamma", "alpha"]

    def test_whitespace_inside_tokens_ignored(self, stacks):
        assert _names(parse_selection(" 1 , 3 ", stacks)) == ["alpha", "gamma"]

    def test_range_with_duplicate_keeps_first_occurrence(self, stacks):
        assert _names(parse_selection("1-2,1", stacks)) == ["alpha", "beta"]

    def test_mixed_index_range_index(self, stacks):
        assert _names(parse_selection("3,1-2,3", stacks)) == ["gamma", "alpha", "beta"]

    def test_reversed_range_expands_ascending(self, stacks):
        assert _names(parse_selection("3-1", stacks)) == ["alpha", "beta", "gamma"]

    def test_range_clipped_silently(self, stacks, capsys):
        assert _names(parse_selection("2-9", stacks)) == ["beta", "gamma"]
        assert capsys.readouterr().err == ""

    def test_huge_range_bound_clipped_without_expanding(self, stacks):
        """A typo like 1-100000000000 selects 1..N at once instead of walking the range."""
        assert _names(parse_selection("1-100000000000", stacks)) == ["alpha", "beta", "gamma"]
        assert _names(parse_selection("100000000000-2", stacks)) == ["beta", "gamma"]

    def test_range_entirely_out_of_bounds_is_empty(self, stacks):
        assert parse_selection("5-7", stacks) == []

    def test_out_of_range_index_warns_and_skips(self, stacks, capsys):
        assert _names(parse_selection("4,2", stacks)) == ["beta"]
        assert "ignoring invalid selection: 4" in capsys.readouterr().err

    def test_unknown_token_warns_and_skips(self, stacks, capsys):
        assert _names(parse_selection("x,1,-2", stacks)) == ["alpha"]
        err = capsys.readouterr().err
        assert "ignoring unknown token: x" in err
        assert "ignoring unknown token: -2" in err

    def test_empty_input_selects_nothing(self, stacks):
        assert parse_selection("", stacks) == []

    def test_empty_tokens_ignored(self, stacks, capsys):
        assert _names(parse_selection("1,,2,", stacks)) == ["alpha", "beta"]
        assert capsys.readouterr().err == ""


class TestParseSpecialTokens:
    @pytest.mark.parametrize("text", ["0", " 0 ", "all", "All", "ALL", "a", "A"])
    def test_all_tokens_select_everything_in_order(self, stacks, text):
        assert parse_selection(text, stacks) == stacks

    @pytest.mark.parametrize("text", ["2,all", "0,3", "1-2,A", "x,a"])
    def test_all_wins_over_other_tokens(self, stacks, text):
        assert parse_selection(text, stacks) == stacks

    @pytest.mark.parametrize("text", ["q", "Q", " q "])
    def test_quit_aborts(self, stacks, text):
        with pytest.raises(SelectionAborted, match="Aborted by user"):
            parse_selection(text, stacks)


class TestSelectStacks:
    def test_auto_all_skips_prompt(self, stacks, make_config):
        with patch("stackup.stacks.selection.prompts.read_selection") as mock_read:
            chosen = select_stacks(stacks, make_config(auto_all=True))

        assert chosen == stacks
        mock_read.assert_not_called()

    def test_interactive_shows_menu_and_parses(self, stacks, make_config, capsys):
        with patch("stackup.stacks.selection.prompts.read_selection", return_value="1,3"):
            chosen = select_stacks(stacks, make_config())

        assert _names(chosen) == ["alpha", "gamma"]
        err = capsys.readouterr().err
        assert "   1) alpha" in err
        assert "   3) gamma" in err
        assert "   0) All" in err
