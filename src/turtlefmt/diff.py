"""Compare a document with its canonical form.

reconcile() turns an (original, canonical) pair into one of three
outcomes the driver acts on:

- Identical: nothing to do
- Patch: check mode, report a unified diff and leave the file alone
- Rewrite: write mode, replace the file content

Python 3.13+. Zero external dependencies.
"""

import difflib
from dataclasses import dataclass

from turtlefmt.enums import Mode

__all__ = ["Identical", "Patch", "Reconciliation", "Rewrite", "reconcile", "unified_diff"]

_NO_NEWLINE_MARKER: str = "\\ No newline at end of file\n"


@dataclass(frozen=True, slots=True)
class Identical:
    """The original already is canonical."""


@dataclass(frozen=True, slots=True)
class Patch:
    """Unified diff from the original to the canonical text."""

    diff: str


@dataclass(frozen=True, slots=True)
class Rewrite:
    """Canonical text to write in place of the original."""

    canonical: str


type Reconciliation = Identical | Patch | Rewrite


def _text(value: str | bytes) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return value


def unified_diff(original: str, canonical: str, path: str = "<input>") -> str:
    """Line-based unified diff, terminated lines only.

    A last line without a line break is followed by the usual
    "\\ No newline at end of file" marker so every hunk line ends in LF.

    Example:
        >>> print(unified_diff("<s> <p> +01 .", "<s> <p> +1 .\\n", "a.ttl"), end="")
        --- a.ttl
        +++ a.ttl
        @@ -1 +1 @@
        -<s> <p> +01 .
        \\ No newline at end of file
        +<s> <p> +1 .
    """
    lines = difflib.unified_diff(
        original.splitlines(keepends=True),
        canonical.splitlines(keepends=True),
        fromfile=path,
        tofile=path,
    )
    parts: list[str] = []
    for line in lines:
        parts.append(line)
        if not line.endswith("\n"):
            parts.append("\n" + _NO_NEWLINE_MARKER)
    return "".join(parts)


def reconcile(
    original: str | bytes,
    canonical: str | bytes,
    mode: Mode = Mode.CHECK,
    path: str = "<input>",
) -> Reconciliation:
    """Decide what to do with a formatted document.

    Args:
        original: Text as read (str, or UTF-8 bytes)
        canonical: Printer output for the same document
        mode: CHECK reports a Patch, WRITE asks for a Rewrite
        path: File name shown in the diff header

    Returns:
        Identical, Patch or Rewrite

    Raises:
        UnicodeDecodeError: If bytes are not valid UTF-8
    """
    original_text = _text(original)
    canonical_text = _text(canonical)
    if original_text == canonical_text:
        return Identical()
    if mode is Mode.WRITE:
        return Rewrite(canonical_text)
    return Patch(unified_diff(original_text, canonical_text, path))
