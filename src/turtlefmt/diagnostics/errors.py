"""turtlefmt exception hierarchy with structured diagnostics.

Integrates with diagnostic codes for Rust/Elm-inspired error messages.
All exceptions store Diagnostic objects for rich error information.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class TurtleError(Exception):
    """Base exception for all turtlefmt errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize TurtleError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class TurtleSyntaxError(TurtleError):
    """Turtle syntax error during parsing.

    Fatal for the document being parsed; a batch driver reports it and
    moves on to the next file.

    Attributes:
        position: Character offset of the offending token
        byte_offset: UTF-8 byte offset of the offending token
        line: 1-based line number
        column: 1-based column number
        expected: Token categories the parser would have accepted
    """

    def __init__(self, diagnostic: Diagnostic, *, byte_offset: int | None = None) -> None:
        """Initialize TurtleSyntaxError.

        Args:
            diagnostic: Diagnostic carrying a SourceSpan
            byte_offset: UTF-8 byte offset (defaults to the character offset)
        """
        super().__init__(diagnostic)
        span = diagnostic.span
        self.position: int = span.start if span is not None else 0
        self.line: int = span.line if span is not None else 1
        self.column: int = span.column if span is not None else 1
        self.byte_offset: int = byte_offset if byte_offset is not None else self.position
        self.expected: tuple[str, ...] = diagnostic.expected


class NestingDepthError(TurtleSyntaxError):
    """Collections or blank-node property lists nest deeper than allowed.

    Example:
        <s> <p> ( ( ( ( ... ) ) ) ) .  <- thousands of levels
    """
