"""Tests for offset to line/column conversion and error excerpts."""

from __future__ import annotations

import pytest

from turtlefmt.syntax.position import format_position, get_error_context

SOURCE = "<a> <b> <c> .\n<s> <p> <http://x\n<d> <e> <f> ."


class TestFormatPosition:
    """format_position()"""

    @pytest.mark.parametrize(
        ("source", "pos", "expected"),
        [
            ("<s>\n<p>", 0, "1:1"),
            ("<s>\n<p>", 5, "2:2"),
            ("<s>\r\n<p>", 5, "2:1"),
            ("é<s>", 1, "1:2"),
        ],
    )
    def test_positions(self, source: str, pos: int, expected: str) -> None:
        assert format_position(source, pos) == expected

    def test_past_end_is_clamped(self) -> None:
        assert format_position("ab", 99) == "1:3"

    def test_negative_rejected(self) -> None:
        with pytest.raises(ValueError, match=">= 0"):
            format_position("ab", -1)


class TestGetErrorContext:
    """get_error_context()"""

    def test_marker_under_offending_column(self) -> None:
        assert get_error_context(SOURCE, 22, context_lines=0) == (
            "<s> <p> <http://x\n        ^"
        )

    def test_surrounding_lines(self) -> None:
        assert get_error_context(SOURCE, 22).splitlines() == [
            "<a> <b> <c> .",
            "<s> <p> <http://x",
            "        ^",
            "<d> <e> <f> .",
        ]

    def test_first_line_has_no_previous(self) -> None:
        assert get_error_context(SOURCE, 0).splitlines()[0] == "<a> <b> <c> ."

    def test_custom_marker(self) -> None:
        assert get_error_context("<s> <p> ;", 8, context_lines=0, marker="~").endswith("        ~")

    def test_crlf_lines_are_stripped(self) -> None:
        context = get_error_context("<a> <b> <c> .\r\n<s> ;", 19, context_lines=1)

        assert "\r" not in context

    def test_out_of_range_clamped(self) -> None:
        assert get_error_context("ab", -5, context_lines=0) == "ab\n^"
