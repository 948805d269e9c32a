"""Whitespace and comment handling for the Turtle parser.

Turtle allows whitespace (space, tab, CR, LF) and line comments between
any two tokens. Both are "extras": skipped here, with comments recorded
into the parse context's side-channel instead of the Document.
"""

from turtlefmt.syntax.ast import Comment, Span
from turtlefmt.syntax.cursor import Cursor

__all__ = ["WHITESPACE", "skip_extras", "skip_whitespace"]

# WS ::= #x20 | #x9 | #xD | #xA
WHITESPACE: frozenset[str] = frozenset(" \t\r\n")


def skip_whitespace(cursor: Cursor) -> Cursor:
    """Skip WS characters only (no comments)."""
    while not cursor.is_eof and cursor.current in WHITESPACE:
        cursor = cursor.advance()
    return cursor


def skip_extras(cursor: Cursor, comments: list[Comment]) -> Cursor:
    """Skip whitespace and comments, appending each comment to comments.

    Args:
        cursor: Current position in source
        comments: Sink for the comments encountered (source order)

    Returns:
        New cursor at the next semantic character (or EOF)
    """
    while True:
        cursor = skip_whitespace(cursor)
        if cursor.is_eof or cursor.current != "#":
            return cursor
        end = cursor.skip_to_line_end()
        comments.append(Comment(text=cursor.slice_to(end.pos), span=Span(cursor.pos, end.pos)))
        cursor = end
