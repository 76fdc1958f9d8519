"""Tests for cfglint/duplicates.py — per-scope duplicate entries."""

from cfglint.duplicates import detect_duplicates
from cfglint.structure import parse_structure


def dupes(text: str):
    return detect_duplicates(parse_structure(text, "f.txt"), "f.txt")


class TestDetectDuplicates:
    def test_repeated_header_line_is_duplicate_in_section(self):
        """`coffee` parses as a subsection header; repeating the line is still a duplicate."""
        errors = dupes("drinks\n  coffee\n  coffee\n")
        assert len(errors) == 1
        assert errors[0].scope == "drinks"
        assert errors[0].text == "coffee"
        assert errors[0].message == (
            "f.txt:3 Duplicate entry in section 'drinks': \"coffee\" (first at drinks:2)"
        )

    def test_header_lines_sharing_first_word_are_distinct(self):
        assert dupes("shoes\n  red boots\n  red shoes\n") == []

    def test_header_lines_do_not_collide_with_items(self):
        assert dupes("drinks\n    coffee\n  coffee\n") == []

    def test_reopened_section_repeating_header_is_not_duplicate(self):
        text = "closet\n  indoors\n    jacket\nshoes\n    boot\ncloset\n  indoors\n    coat\n"
        assert dupes(text) == []

    def test_switching_back_to_earlier_subsection_is_not_duplicate(self):
        assert dupes("a\n  sub\n    x\n  other\n    y\n  sub\n    z\n") == []

    def test_header_repeated_after_nested_items_is_duplicate(self):
        errors = dupes("a\n  sub\n    x\n  sub\n")
        assert [(e.position.row, e.first_row, e.scope) for e in errors] == [(4, 2, "a")]

    def test_run_of_repeated_headers_points_at_first(self):
        errors = dupes("drinks\n  coffee\n  coffee  \n  coffee\n")
        assert [(e.position.row, e.first_row) for e in errors] == [(3, 2), (4, 2)]

    def test_repeated_items_in_section(self):
        errors = dupes("drinks\n  coffee, black\n  tea, green\n  coffee, black\n")
        assert len(errors) == 1
        err = errors[0]
        assert err.scope == "drinks"
        assert err.text == "coffee, black"
        assert err.first_row == 2
        assert err.position.row == 4
        assert err.message == (
            "f.txt:4 Duplicate entry in section 'drinks': \"coffee, black\" (first at drinks:2)"
        )

    def test_case_and_whitespace_insensitive(self):
        errors = dupes("shoes\n  hot\n    Red Shoes\n    red shoes  \n")
        assert len(errors) == 1
        assert errors[0].scope == "shoes.hot"
        assert errors[0].message.endswith("(first at shoes.hot:3)")

    def test_section_and_subsection_scopes_are_separate(self):
        text = "drinks\n    coffee\n  hot\n    coffee\n"
        assert dupes(text) == []

    def test_different_sections_are_separate(self):
        assert dupes("a\n    x\nb\n    x\n") == []

    def test_every_repeat_reported_against_first_row(self):
        errors = dupes("a\n    x\n    x\n    X\n")
        assert [(e.position.row, e.first_row) for e in errors] == [(3, 2), (4, 2)]

    def test_order_section_items_then_subsections(self):
        text = (
            "a\n"
            "  s1\n"
            "    y\n"
            "    y\n"
            "b\n"
            "    z\n"
            "    z\n"
            "a\n"
            "    q\n"
            "    q\n"
        )
        errors = dupes(text)
        assert [e.scope for e in errors] == ["a", "a.s1", "b"]
