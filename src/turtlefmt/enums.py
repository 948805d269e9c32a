"""Enumerations for turtlefmt type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class NumericKind(StrEnum):
    """Lexical subclass of a Turtle numeric literal.

    StrEnum provides automatic string conversion: str(NumericKind.INTEGER) == "integer"
    """

    INTEGER = "integer"
    """[+-]? [0-9]+"""

    DECIMAL = "decimal"
    """[+-]? [0-9]* '.' [0-9]+"""

    DOUBLE = "double"
    """Mantissa with a mandatory exponent: 1.5e3, .5E-2, 7e0"""


class TokenKind(StrEnum):
    """Kind of a semantic token in the concrete syntax tree."""

    PREFIX_KEYWORD = "prefix_keyword"
    """@prefix or PREFIX (case-insensitive)"""

    BASE_KEYWORD = "base_keyword"
    """@base or BASE (case-insensitive)"""

    PNAME_NS = "pname_ns"
    """Prefix label in a directive: ex:"""

    IRIREF = "iriref"
    PREFIXED_NAME = "prefixed_name"
    BLANK_NODE_LABEL = "blank_node_label"
    ANON = "anon"
    A = "a"
    STRING = "string"
    LANGTAG = "langtag"
    DATATYPE_MARKER = "datatype_marker"
    """^^"""

    INTEGER = "integer"
    DECIMAL = "decimal"
    DOUBLE = "double"
    BOOLEAN = "boolean"
    PUNCTUATION = "punctuation"
    """. ; , [ ] ( )"""


class Mode(StrEnum):
    """What the caller wants done with a file that is not canonical."""

    CHECK = "check"
    """Report a unified diff, leave the file untouched."""

    WRITE = "write"
    """Replace the file content with the canonical text."""


class FileStatus(StrEnum):
    """Outcome of running the formatter over one file."""

    UNCHANGED = "unchanged"
    """Already canonical."""

    REFORMATTED = "reformatted"
    """Rewritten in place (write mode)."""

    NEEDS_FORMAT = "needs_format"
    """Not canonical; a patch was reported (check mode)."""

    FAILED = "failed"
    """Could not be read, parsed or written."""


__all__ = [
    "FileStatus",
    "Mode",
    "NumericKind",
    "TokenKind",
]
