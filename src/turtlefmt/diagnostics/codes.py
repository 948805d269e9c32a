"""Diagnostic codes and data structures.

Defines error codes, source spans, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceSpan",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        3000-3099: Lexical errors (malformed tokens)
        3100-3199: Grammar errors (tokens in the wrong place)
        6000-6099: Driver errors (files and paths)
    """

    # Lexical errors (3000-3099)
    UNEXPECTED_EOF = 3001
    UNTERMINATED_IRI = 3002
    INVALID_IRI_CHARACTER = 3003
    UNTERMINATED_STRING = 3004
    INVALID_ESCAPE = 3005
    INVALID_CODE_POINT = 3006
    INVALID_LANGUAGE_TAG = 3007
    INVALID_BLANK_NODE_LABEL = 3008

    # Grammar errors (3100-3199)
    UNEXPECTED_TOKEN = 3101
    NESTING_DEPTH_EXCEEDED = 3102

    # Driver errors (6000-6099)
    PATH_NOT_FOUND = 6001
    READ_FAILED = 6002
    NOT_CANONICAL = 6003


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Source code location for error reporting.

    Note:
        Python strings measure positions in characters (Unicode code points),
        not bytes. For multi-byte UTF-8 characters, character offset differs
        from byte offset.

    Attributes:
        start: Starting character offset (0-indexed)
        end: Ending character offset (exclusive)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If start is negative, end precedes start, or line or
                column is less than 1 (both are 1-indexed).
        """
        if self.start < 0:
            msg = f"SourceSpan.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"SourceSpan.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)
        if self.line < 1:
            msg = f"SourceSpan.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"SourceSpan.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Provides rich error information
    for both humans and tools (editors, CI annotations).

    Attributes:
        code: Unique error code
        message: Human-readable error description
        span: Source location (None for errors without a position)
        hint: Suggestion for fixing the error
        expected: Token categories the parser would have accepted
        path: File the diagnostic belongs to (set by the driver)
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    expected: tuple[str, ...] = ()
    path: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Delegates to DiagnosticFormatter for consistent output.

        Example output:
            error[UNTERMINATED_IRI]: IRI reference is not closed with '>'
              --> data.ttl:3:9
              = expected: '>'
              = help: Add the closing '>' or escape the offending character

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)

    def with_path(self, path: str) -> "Diagnostic":
        """Return a copy of this diagnostic attributed to a file."""
        return Diagnostic(
            code=self.code,
            message=self.message,
            span=self.span,
            hint=self.hint,
            expected=self.expected,
            path=path,
            severity=self.severity,
        )
