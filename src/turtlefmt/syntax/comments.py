"""Comment correlation.

Comments live outside the Document. This pass decides, from source
offsets alone, where each comment goes in the canonical output:

- A comment that shares its source line with an earlier semantic token
  is *trailing*: the printer appends it to the output line holding that
  token.
- A comment alone on its line between statements starts a standalone
  *block* that precedes the next statement (or ends the document).
- A comment alone on its line inside a statement is also trailing, on
  the line of the token before it; the printer never splits a statement
  around a standalone comment.

The same pass records where blank lines separated top-level blocks in
the source, so the printer can keep (at most) one of them.
"""

from bisect import bisect_right
from dataclasses import dataclass

from turtlefmt.syntax.ast import Comment, Statement, SyntaxTree
from turtlefmt.syntax.cursor import LineOffsetCache

__all__ = ["Block", "CommentLayout", "correlate", "has_blank_line_between"]


@dataclass(frozen=True, slots=True)
class Block:
    """Top-level output unit: one statement or one standalone comment.

    Attributes:
        item: The statement or comment
        blank_before: Emit one blank line before this block
    """

    item: Statement | Comment
    blank_before: bool = False


@dataclass(frozen=True, slots=True)
class CommentLayout:
    """Result of correlating a SyntaxTree's comments.

    Attributes:
        blocks: Statements and standalone comments in output order
        trailing: Comments to append to the line of the preceding token
    """

    blocks: tuple[Block, ...]
    trailing: tuple[Comment, ...]


def has_blank_line_between(source: str, start: int, end: int) -> bool:
    """Check if the region contains a blank line (empty or whitespace-only).

    Args:
        source: The full source string
        start: Start position (inclusive)
        end: End position (exclusive)

    Returns:
        True if two line breaks occur with only spaces or tabs between them
    """
    newline_count = 0
    i = start
    while i < end:
        char = source[i]
        if char == "\n":
            newline_count += 1
            i += 1
        elif char == "\r":
            # \r\n counts as a single line break
            i += 2 if i + 1 < end and source[i + 1] == "\n" else 1
            newline_count += 1
        elif char in " \t":
            i += 1
            continue
        else:
            newline_count = 0
            i += 1
            continue
        if newline_count >= 2:
            return True
    return False


def _is_own_line(source: str, lines: LineOffsetCache, comment: Comment) -> bool:
    """True if only spaces/tabs precede the comment on its source line."""
    line_start = lines.line_start(comment.offset)
    return source[line_start : comment.offset].strip(" \t") == ""


def correlate(tree: SyntaxTree) -> CommentLayout:
    """Assign every comment of a parsed tree to a block or a trailing slot.

    Args:
        tree: Parsed source (spans must come from the same source)

    Returns:
        CommentLayout with blocks in source order

    Example:
        Source:
            # header
            <s> <p> <o> . # trailing

        blocks: (Block(Comment "# header"), Block(Triples))
        trailing: (Comment "# trailing",)
    """
    source = tree.source
    statements = tree.document.statements
    lines = LineOffsetCache(source)
    starts = [statement.span.start for statement in statements]

    items: list[Statement | Comment] = []
    trailing: list[Comment] = []
    statement_index = 0

    for comment in tree.comments:
        # Flush statements that start before this comment.
        while statement_index < len(statements) and starts[statement_index] < comment.offset:
            items.append(statements[statement_index])
            statement_index += 1

        inside = bisect_right(starts, comment.offset) - 1
        in_statement = inside >= 0 and statements[inside].span.end > comment.offset
        if in_statement or not _is_own_line(source, lines, comment):
            trailing.append(comment)
        else:
            items.append(comment)
    items.extend(statements[statement_index:])

    blocks: list[Block] = []
    previous_end = 0
    for index, item in enumerate(items):
        blank = index > 0 and has_blank_line_between(source, previous_end, item.span.start)
        blocks.append(Block(item, blank_before=blank))
        previous_end = max(previous_end, item.span.end)

    return CommentLayout(blocks=tuple(blocks), trailing=tuple(trailing))
