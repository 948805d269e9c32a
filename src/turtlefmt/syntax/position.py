"""Position utilities for Turtle source text.

Converts character offsets (as carried by TurtleSyntaxError) into
human-facing line/column positions and source excerpts for the CLI.
"""

from turtlefmt.syntax.cursor import LineOffsetCache

__all__ = ["format_position", "get_error_context"]


def format_position(source: str, pos: int) -> str:
    """Format an offset as "line:column" (1-based).

    Example:
        >>> format_position("<s>\\n<p>", 5)
        '2:2'
    """
    if pos < 0:
        msg = f"Position must be >= 0, got {pos}"
        raise ValueError(msg)
    line, column = LineOffsetCache(source).get_line_col(min(pos, len(source)))
    return f"{line}:{column}"


def get_error_context(source: str, pos: int, context_lines: int = 1, marker: str = "^") -> str:
    """Get formatted error context showing position in source.

    Creates a multi-line string showing the error location with
    surrounding context lines and a marker pointing to the error.

    Args:
        source: Complete Turtle source text
        pos: Character offset of error
        context_lines: Number of lines to show before/after error
        marker: Character to use for error marker

    Returns:
        Formatted error context string

    Example:
        >>> source = "<a> <b> <c> .\\n<s> <p> <http://x\\n<d> <e> <f> ."
        >>> print(get_error_context(source, 22, context_lines=0))
        <s> <p> <http://x
                ^
    """
    pos = max(0, min(pos, len(source)))
    line, column = LineOffsetCache(source).get_line_col(pos)
    line_index = line - 1

    lines = source.split("\n")
    start_line = max(0, line_index - context_lines)
    end_line = min(len(lines), line_index + context_lines + 1)

    context: list[str] = []
    for i in range(start_line, end_line):
        context.append(lines[i].rstrip("\r"))
        if i == line_index:
            context.append(" " * (column - 1) + marker)
    return "\n".join(context)
