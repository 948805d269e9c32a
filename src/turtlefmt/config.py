"""Formatting configuration.

Provides a single frozen dataclass that encapsulates the knobs of the
canonical printer and the input limits of the parser, so the library
entry points and the CLI share one typed object.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from turtlefmt.constants import DEFAULT_INDENTATION, MAX_DEPTH, MAX_SOURCE_SIZE

__all__ = ["FormatOptions"]


@dataclass(frozen=True, slots=True)
class FormatOptions:
    """Immutable configuration for formatting a Turtle document.

    All fields have sensible defaults; ``FormatOptions()`` produces the
    canonical layout.

    Attributes:
        indentation: Spaces per nesting level (default: 4).
        max_source_size: Largest accepted input, in characters
            (default: 10 MB). Larger input raises ValueError.
        max_nesting_depth: Deepest accepted nesting of collections and
            blank node property lists (default: 100). Clamped against the
            Python recursion limit.

    Example:
        >>> from turtlefmt import format_turtle
        >>> from turtlefmt.config import FormatOptions
        >>> format_turtle("<s> <p> <o> ; <q> <r> .", FormatOptions(indentation=2))
        '<s> <p> <o> ;\\n  <q> <r> .\\n'
    """

    indentation: int = DEFAULT_INDENTATION
    max_source_size: int = MAX_SOURCE_SIZE
    max_nesting_depth: int = MAX_DEPTH

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If any value is not positive.
        """
        if self.indentation <= 0:
            msg = "indentation must be positive"
            raise ValueError(msg)
        if self.max_source_size <= 0:
            msg = "max_source_size must be positive"
            raise ValueError(msg)
        if self.max_nesting_depth <= 0:
            msg = "max_nesting_depth must be positive"
            raise ValueError(msg)
