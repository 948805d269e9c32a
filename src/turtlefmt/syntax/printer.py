"""Canonical Turtle printer.

Walks a parsed document top to bottom and emits every statement in the
single canonical layout:

- one directive per line, always in '@prefix' / '@base' spelling
- subject and first predicate group on one line, further groups on
  indented lines separated by ' ;', objects joined by ' , ', ' .' last
- collections and blank node property lists inline when small, as
  blocks otherwise; predicate groups sit at level 1, and each block
  indents its contents one level deeper than itself
- a multi-line object after the first starts its own line
- comments re-attached via the comment correlator, one per line

The source layout is never consulted except through the correlator.

Python 3.13+.
"""

import logging
from bisect import bisect_left

from turtlefmt.config import FormatOptions
from turtlefmt.core.depth_guard import DepthGuard
from turtlefmt.syntax.ast import (
    BaseDirective,
    BlankNodePropertyList,
    Collection,
    Comment,
    Document,
    PredicateObjects,
    PrefixDirective,
    Span,
    SyntaxTree,
    Term,
    Triples,
    is_atomic,
)
from turtlefmt.syntax.comments import Block, correlate
from turtlefmt.syntax.normalize import normalize_atomic, normalize_iriref, normalize_predicate
from turtlefmt.syntax.prefixes import PrefixBindings

__all__ = ["TurtlePrinter", "print_document"]

logger = logging.getLogger(__name__)


class _Output:
    """Line buffer with source-offset anchors.

    Every printed token that came from the source records an anchor
    (source offset, output line). Anchors are recorded in source order,
    so the output line of the last token before any source offset is a
    binary search away.

    Each output line carries at most one trailing comment. Further
    comments for the same line follow it on their own lines at column 0.
    """

    __slots__ = ("_anchor_lines", "_anchor_offsets", "_comments", "_unit", "lines")

    def __init__(self, indentation: int) -> None:
        self._unit = indentation
        self._anchor_offsets: list[int] = []
        self._anchor_lines: list[int] = []
        self._comments: dict[int, list[str]] = {}
        self.lines: list[list[str]] = []

    def start_line(self, level: int) -> None:
        self.lines.append([" " * (self._unit * level)] if level else [])

    def blank_line(self) -> None:
        self.lines.append([])

    def write(self, text: str) -> None:
        self.lines[-1].append(text)

    def anchor(self, offset: int) -> None:
        self._anchor_offsets.append(offset)
        self._anchor_lines.append(len(self.lines) - 1)

    def token(self, text: str, span: Span) -> None:
        self.write(text)
        self.anchor(span.start)

    def close(self, text: str, span: Span) -> None:
        self.write(text)
        self.anchor(max(span.start, span.end - 1))

    def attach(self, comment: Comment) -> None:
        """Queue a trailing comment for the line of the token before it."""
        index = bisect_left(self._anchor_offsets, comment.offset) - 1
        line = self._anchor_lines[index] if index >= 0 else 0
        if not self.lines:
            self.start_line(0)
        self._comments.setdefault(line, []).append(comment.text.rstrip())

    def render(self) -> str:
        rendered: list[str] = []
        for index, line in enumerate(self.lines):
            text = "".join(line)
            comments = self._comments.get(index)
            if not comments:
                rendered.append(text)
                continue
            first, *rest = comments
            rendered.append(f"{text} {first}" if text else first)
            rendered.extend(rest)
        return "\n".join(rendered) + "\n"


class TurtlePrinter:
    """Prints parsed Turtle in canonical layout.

    Thread-safe: all printing state is local to each call.

    Usage:
        >>> from turtlefmt.syntax import parse
        >>> printer = TurtlePrinter()
        >>> printer.print(parse("<s>   a <o>."))
        '<s> a <o> .\\n'
    """

    __slots__ = ("_options",)

    def __init__(self, options: FormatOptions | None = None) -> None:
        self._options = options if options is not None else FormatOptions()

    @property
    def options(self) -> FormatOptions:
        """Layout options in use."""
        return self._options

    def print(self, tree: SyntaxTree) -> str:
        """Print a parsed document with its comments.

        Args:
            tree: Result of parsing

        Returns:
            Canonical text ending with exactly one newline

        Raises:
            DepthLimitExceededError: Nesting deeper than max_nesting_depth
        """
        layout = correlate(tree)
        logger.debug(
            "Printing %d blocks with %d trailing comments",
            len(layout.blocks),
            len(layout.trailing),
        )
        return self._render(layout.blocks, layout.trailing)

    def print_document(self, document: Document) -> str:
        """Print a Document that has no comments (e.g. built in code)."""
        return self._render(tuple(Block(statement) for statement in document.statements), ())

    def _render(self, blocks: tuple[Block, ...], trailing: tuple[Comment, ...]) -> str:
        out = _Output(self._options.indentation)
        guard = DepthGuard(max_depth=self._options.max_nesting_depth)
        bindings = PrefixBindings()

        for block in blocks:
            if block.blank_before:
                out.blank_line()
            match block.item:
                case Comment() as comment:
                    out.start_line(0)
                    out.write(comment.text.rstrip())
                case PrefixDirective() as directive:
                    out.start_line(0)
                    out.token("@prefix", directive.span)
                    out.write(f" {directive.label}: {normalize_iriref(directive.iri)}")
                    out.close(" .", directive.span)
                    bindings = bindings.apply(directive)
                case BaseDirective() as directive:
                    out.start_line(0)
                    out.token("@base", directive.span)
                    out.write(f" {normalize_iriref(directive.iri)}")
                    out.close(" .", directive.span)
                case Triples() as triples:
                    self._write_triples(out, triples, bindings, guard)

        for comment in trailing:
            out.attach(comment)
        return out.render()

    def _write_triples(
        self, out: _Output, triples: Triples, bindings: PrefixBindings, guard: DepthGuard
    ) -> None:
        out.start_line(0)
        self._write_term(out, triples.subject, 0, bindings, guard)
        for index, group in enumerate(triples.predicate_objects):
            if index == 0:
                out.write(" ")
            else:
                out.write(" ;")
                out.start_line(1)
            self._write_group(out, group, 1, bindings, guard)
        out.close(" .", triples.span)

    def _write_group(
        self,
        out: _Output,
        group: PredicateObjects,
        level: int,
        bindings: PrefixBindings,
        guard: DepthGuard,
    ) -> None:
        """predicate object , object ...

        level is the nesting level of the predicate. A multi-line object
        after the first starts its own line one level deeper.
        """
        out.token(normalize_predicate(group.predicate, bindings), group.predicate.span)
        out.write(" ")
        for index, obj in enumerate(group.objects):
            if index == 0:
                self._write_term(out, obj, level, bindings, guard)
            elif _is_inline(obj):
                out.write(" , ")
                self._write_term(out, obj, level, bindings, guard)
            else:
                out.write(" ,")
                out.start_line(level + 1)
                self._write_term(out, obj, level + 1, bindings, guard)

    def _write_term(
        self, out: _Output, term: Term, level: int, bindings: PrefixBindings, guard: DepthGuard
    ) -> None:
        match term:
            case Collection(items=items):
                with guard:
                    self._write_collection(out, term, items, level, bindings, guard)
            case BlankNodePropertyList(predicate_objects=groups):
                with guard:
                    self._write_property_list(out, term, groups, level, bindings, guard)
            case _:
                out.token(normalize_atomic(term, bindings), term.span)

    def _write_collection(
        self,
        out: _Output,
        collection: Collection,
        items: tuple[Term, ...],
        level: int,
        bindings: PrefixBindings,
        guard: DepthGuard,
    ) -> None:
        """() / ( a b c ) / one item per line."""
        out.token("(", collection.span)
        if _is_inline(collection):
            for item in items:
                out.write(" ")
                self._write_term(out, item, level, bindings, guard)
            out.close(" )" if items else ")", collection.span)
            return

        for item in items:
            out.start_line(level + 1)
            self._write_term(out, item, level + 1, bindings, guard)
        out.start_line(level)
        out.close(")", collection.span)

    def _write_property_list(
        self,
        out: _Output,
        node: BlankNodePropertyList,
        groups: tuple[PredicateObjects, ...],
        level: int,
        bindings: PrefixBindings,
        guard: DepthGuard,
    ) -> None:
        """[ p o ] when a single predicate has a single atomic object, else a block."""
        out.token("[", node.span)
        if not groups:
            out.close("]", node.span)
            return
        if _is_inline(node):
            out.write(" ")
            self._write_group(out, groups[0], level, bindings, guard)
            out.close(" ]", node.span)
            return

        for index, group in enumerate(groups):
            if index:
                out.write(" ;")
            out.start_line(level + 1)
            self._write_group(out, group, level + 1, bindings, guard)
        out.start_line(level)
        out.close("]", node.span)


def _is_inline(term: Term) -> bool:
    """True if term prints on a single line."""
    match term:
        case Collection(items=items):
            return all(is_atomic(item) for item in items)
        case BlankNodePropertyList(predicate_objects=groups):
            return not groups or (
                len(groups) == 1 and len(groups[0].objects) == 1 and is_atomic(groups[0].objects[0])
            )
        case _:
            return True


def print_document(
    tree: SyntaxTree | Document, options: FormatOptions | None = None
) -> str:
    """Print a parsed tree (with comments) or a bare Document canonically.

    Convenience function for TurtlePrinter.

    Example:
        >>> from turtlefmt.syntax import parse
        >>> print_document(parse("PREFIX ex: <http://example.com/>"))
        '@prefix ex: <http://example.com/> .\\n'
    """
    printer = TurtlePrinter(options)
    if isinstance(tree, Document):
        return printer.print_document(tree)
    return printer.print(tree)
