"""Core Turtle parser implementation.

This module provides the TurtleParser class that orchestrates parsing of
Turtle source text into the trees defined in :mod:`turtlefmt.syntax.ast`.

Architecture:
    The parser uses an immutable cursor pattern (:class:`~turtlefmt.syntax.cursor.Cursor`)
    to traverse source text. Statement rules live in
    :mod:`~turtlefmt.syntax.parser.rules`, token rules in
    :mod:`~turtlefmt.syntax.parser.primitives`. A ParseContext carries the
    nesting depth and collects the token stream and comments.

Error Handling:
    Parsing is all-or-nothing: the first syntax error raises
    TurtleSyntaxError and no partial tree is returned.

Limits:
    Input size and nesting depth are bounded; see TurtleParser.
"""

import logging

from turtlefmt.constants import MAX_DEPTH, MAX_SOURCE_SIZE
from turtlefmt.core.depth_guard import depth_clamp
from turtlefmt.syntax.ast import Document, Statement, SyntaxTree
from turtlefmt.syntax.cursor import Cursor
from turtlefmt.syntax.parser.rules import ParseContext, parse_statement

__all__ = ["TurtleParser"]

logger = logging.getLogger(__name__)


class TurtleParser:
    """Turtle parser using immutable cursor pattern.

    - Errors carry line:column, byte offset and the expected token set
    - Stateless between calls: safe to share across threads

    Attributes:
        max_source_size: Maximum allowed source size in characters (default: 10 MB)
        max_nesting_depth: Maximum nesting of '(' and '[' (default: 100)
    """

    __slots__ = ("_max_nesting_depth", "_max_source_size")

    def __init__(
        self,
        *,
        max_source_size: int | None = None,
        max_nesting_depth: int | None = None,
    ) -> None:
        """Initialize parser with optional size and nesting depth limits.

        Args:
            max_source_size: Maximum source size in characters (default: 10 MB).
                            Set to 0 to disable the size limit (not recommended).
            max_nesting_depth: Maximum collection/property list nesting
                              (default: 100, clamped to the recursion limit).
        """
        self._max_source_size = (
            max_source_size if max_source_size is not None else MAX_SOURCE_SIZE
        )
        self._max_nesting_depth = depth_clamp(
            max_nesting_depth if max_nesting_depth is not None else MAX_DEPTH
        )

    @property
    def max_source_size(self) -> int:
        """Maximum allowed source size in characters."""
        return self._max_source_size

    @property
    def max_nesting_depth(self) -> int:
        """Maximum allowed nesting depth."""
        return self._max_nesting_depth

    def parse(self, source: str) -> SyntaxTree:
        """Parse Turtle source into a SyntaxTree.

        Args:
            source: Turtle document text

        Returns:
            SyntaxTree with the Document, the token stream and the comments

        Raises:
            ValueError: If source exceeds max_source_size
            TurtleSyntaxError: On the first syntax error
            NestingDepthError: If nesting exceeds max_nesting_depth

        Example:
            >>> tree = TurtleParser().parse("<s> <p> <o> . # done\\n")
            >>> len(tree.document.statements), tree.comments[0].text
            (1, '# done')
        """
        if self._max_source_size > 0 and len(source) > self._max_source_size:
            msg = (
                f"Source size ({len(source):,} characters) exceeds maximum "
                f"({self._max_source_size:,} characters). "
                "Configure max_source_size in TurtleParser constructor to increase limit."
            )
            raise ValueError(msg)

        context = ParseContext(max_nesting_depth=self._max_nesting_depth)
        statements: list[Statement] = []
        cursor = context.skip(Cursor(source, 0))

        while not cursor.is_eof:
            result = parse_statement(cursor, context)
            statements.append(result.value)
            cursor = context.skip(result.cursor)

        logger.debug(
            "Parsed %d statements, %d tokens, %d comments",
            len(statements),
            len(context.tokens),
            len(context.comments),
        )
        return SyntaxTree(
            source=source,
            document=Document(tuple(statements)),
            tokens=tuple(context.tokens),
            comments=tuple(context.comments),
        )

    def parse_document(self, source: str) -> Document:
        """Parse source and return only the Document."""
        return self.parse(source).document
