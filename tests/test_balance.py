"""Tests for cfglint/balance.py — bracket balance check."""

import pytest

from cfglint.balance import check_balance
from cfglint.models import Position


class TestBalanced:
    @pytest.mark.parametrize("text", [
        "",
        "plain text\n",
        "a (b [c {d}] e) f\n",
        "outfit\n  [closet.indoors]\n",
        "multi (\n  line [\n  ]\n)\n",
        "crlf (x)\r\n[y]\r\n",
    ])
    def test_well_formed_text_passes(self, text):
        assert check_balance(text, "f.txt") is None


class TestUnmatched:
    def test_closer_before_any_opener(self):
        err = check_balance("abc)\n", "f.txt")
        assert err.variant == "unmatched"
        assert err.char == ")"
        assert err.position == Position(1, 4)
        assert err.message == "Unmatched closing ')' at f.txt:1:4"

    def test_closer_after_balanced_pair_on_later_row(self):
        err = check_balance("(ok)\n  x]\n", "f.txt")
        assert err.variant == "unmatched"
        assert err.position == Position(2, 4)


class TestMismatched:
    def test_names_both_positions(self):
        err = check_balance("a (b\n  c]\n", "f.txt")
        assert err.variant == "mismatched"
        assert err.position == Position(2, 4)
        assert err.opened_at == Position(1, 3)
        assert err.message == (
            "Mismatched closing ']' at f.txt:2:4, expecting ')' to match opening at f.txt:1:3"
        )

    def test_first_error_wins(self):
        """A mismatch reported mid-file hides later unclosed brackets."""
        err = check_balance("(]\n{{{\n", "f.txt")
        assert err.variant == "mismatched"


class TestUnclosed:
    def test_scenario_unterminated_paren(self):
        err = check_balance("section (unterminated\n", "f.txt")
        assert err.variant == "unclosed"
        assert err.char == "("
        assert err.position == Position(1, 9)
        assert err.message == "Unclosed '(' opened at f.txt:1:9"

    def test_reports_last_opened_still_open(self):
        err = check_balance("a ( b\nc { d\ne [ f ]\n", "f.txt")
        assert err.variant == "unclosed"
        assert err.char == "{"
        assert err.position == Position(2, 3)

    def test_crlf_does_not_shift_columns(self):
        err = check_balance("ok\r\n  [x\r\n", "f.txt")
        assert err.position == Position(2, 3)
