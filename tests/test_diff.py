"""Tests for reconcile() and unified diff generation."""

from __future__ import annotations

import pytest

from turtlefmt import Identical, Mode, Patch, Rewrite, reconcile
from turtlefmt.diff import unified_diff


class TestReconcile:
    """Identical / Patch / Rewrite decisions."""

    def test_identical(self) -> None:
        """Equal text needs nothing."""
        assert reconcile("<s> a <o> .\n", "<s> a <o> .\n") == Identical()

    def test_identical_in_write_mode(self) -> None:
        """Write mode does not rewrite canonical files."""
        assert reconcile("x\n", "x\n", Mode.WRITE) == Identical()

    def test_check_mode_patch(self) -> None:
        """Check mode reports a unified diff."""
        result = reconcile("<s>  a <o> .\n", "<s> a <o> .\n", Mode.CHECK, path="data.ttl")

        assert isinstance(result, Patch)
        assert result.diff.startswith("--- data.ttl\n+++ data.ttl\n")
        assert "-<s>  a <o> .\n" in result.diff
        assert "+<s> a <o> .\n" in result.diff

    def test_write_mode_rewrite(self) -> None:
        """Write mode returns the canonical text."""
        assert reconcile("<s>  a <o> .", "<s> a <o> .\n", Mode.WRITE) == Rewrite("<s> a <o> .\n")

    def test_default_mode_is_check(self) -> None:
        """Without a mode nothing is ever written."""
        assert isinstance(reconcile("a", "b\n"), Patch)

    def test_accepts_utf8_bytes(self) -> None:
        """Bytes are decoded as UTF-8."""
        original = "<s> <p> \"é\" .\n".encode()

        assert reconcile(original, "<s> <p> \"é\" .\n") == Identical()

    def test_invalid_utf8_raises(self) -> None:
        """Undecodable bytes are the caller's problem."""
        with pytest.raises(UnicodeDecodeError):
            reconcile(b"\xff", "x\n")

    def test_missing_final_newline_is_a_difference(self) -> None:
        """Comparison is exact; the trailing newline matters."""
        assert isinstance(reconcile("# hello", "# hello\n"), Patch)


class TestUnifiedDiff:
    """Diff text details."""

    def test_no_newline_marker(self) -> None:
        """An unterminated last line gets the standard marker."""
        diff = unified_diff("<s> <p> +01 .", "<s> <p> +1 .\n", "a.ttl")

        assert diff == (
            "--- a.ttl\n"
            "+++ a.ttl\n"
            "@@ -1 +1 @@\n"
            "-<s> <p> +01 .\n"
            "\\ No newline at end of file\n"
            "+<s> <p> +1 .\n"
        )

    def test_every_line_terminated(self) -> None:
        """Patches always end with a line break."""
        diff = unified_diff("a\nb", "a\nc\n")

        assert diff.endswith("\n")
        assert all(line for line in diff.split("\n")[:-1])

    def test_equal_text_gives_empty_diff(self) -> None:
        """No hunks for equal text."""
        assert unified_diff("a\n", "a\n") == ""

    def test_default_path(self) -> None:
        """Headers name <input> by default."""
        assert unified_diff("a\n", "b\n").startswith("--- <input>\n+++ <input>\n")

    def test_context_lines(self) -> None:
        """Hunks carry three lines of context."""
        original = "".join(f"<s> <p> {n} .\n" for n in range(10))
        canonical = original.replace("<s> <p> 5 .", "<s> <p> 05 .")

        diff = unified_diff(original, canonical)

        assert "@@ -3,7 +3,7 @@" in diff
