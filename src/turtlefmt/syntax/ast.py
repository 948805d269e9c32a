"""Turtle syntax tree node definitions.

Two layers live here:

- The *Document* layer: statements and terms exactly as the grammar
  groups them. Spans are attached to every node but excluded from
  equality, so documents that differ only in layout compare equal.
- The *CST* layer: SyntaxTree wraps the Document together with the flat
  token stream and the comment side-channel, which together with the
  whitespace between them account for every character of the source.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import TypeIs

from turtlefmt.enums import NumericKind, TokenKind

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Base types
    "Span",
    "Token",
    "Comment",
    # Terms
    "IriRef",
    "PrefixedName",
    "BlankNodeLabel",
    "AnonBlankNode",
    "BlankNodePropertyList",
    "Collection",
    "StringLiteral",
    "NumericLiteral",
    "BooleanLiteral",
    # Statements
    "PredicateObjects",
    "PrefixDirective",
    "BaseDirective",
    "Triples",
    "Document",
    "SyntaxTree",
    # Type aliases
    "Iri",
    "Term",
    "Statement",
    "is_atomic",
]

# ============================================================================
# BASE TYPES
# ============================================================================


@dataclass(frozen=True, slots=True)
class Span:
    """Source position span.

    Tracks character offsets in source text for error reporting, comment
    correlation and diff generation.

    Attributes:
        start: Starting offset (inclusive)
        end: Ending offset (exclusive)

    Example:
        Source: "<s> a <o> ."
        IriRef "<s>" span: Span(start=0, end=3)
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        """Validate span invariants."""
        if self.start < 0:
            msg = f"Span start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"Span end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)


# Spans never take part in structural equality.
def _span_field() -> Span:
    return field(default=Span(0, 0), compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class Token:
    """One semantic lexeme: keyword, punctuation or term."""

    kind: TokenKind
    span: Span


@dataclass(frozen=True, slots=True)
class Comment:
    """Line comment, from '#' to the end of the line (exclusive).

    Never owned by the Document; attached at print time by the correlator.
    """

    text: str
    span: Span = _span_field()

    @property
    def offset(self) -> int:
        """Offset of the '#' character."""
        return self.span.start


# ============================================================================
# TERMS
# ============================================================================


@dataclass(frozen=True, slots=True)
class IriRef:
    """IRI reference <...> with escapes decoded.

    The `a` keyword is parsed into IriRef(RDF_TYPE_IRI) with raw="a".
    """

    value: str
    raw: str = field(default="", compare=False)
    span: Span = _span_field()


@dataclass(frozen=True, slots=True)
class PrefixedName:
    """prefix:local with backslash escapes removed from the local part."""

    prefix: str
    local: str
    raw: str = field(default="", compare=False)
    span: Span = _span_field()


@dataclass(frozen=True, slots=True)
class BlankNodeLabel:
    """_:label"""

    label: str
    span: Span = _span_field()


@dataclass(frozen=True, slots=True)
class AnonBlankNode:
    """[] - a fresh blank node without properties."""

    span: Span = _span_field()


@dataclass(frozen=True, slots=True)
class BlankNodePropertyList:
    """[ predicate object ; ... ] - always has at least one group."""

    predicate_objects: tuple["PredicateObjects", ...]
    span: Span = _span_field()


@dataclass(frozen=True, slots=True)
class Collection:
    """( object* ) - an RDF list."""

    items: tuple["Term", ...]
    span: Span = _span_field()


@dataclass(frozen=True, slots=True)
class StringLiteral:
    """Quoted string with optional language tag or datatype.

    Attributes:
        value: Decoded string value (escapes resolved)
        language: Language tag without '@', or None
        datatype: Datatype IRI after '^^', or None
    """

    value: str
    language: str | None = None
    datatype: "Iri | None" = None
    span: Span = _span_field()


@dataclass(frozen=True, slots=True)
class NumericLiteral:
    """INTEGER, DECIMAL or DOUBLE literal as written.

    Equality compares subclass, sign presence and numeric value, so
    "+01" == "+1" but "1" != "+1" and "1.0" != "1e0".
    """

    raw: str = field(compare=False)
    kind: NumericKind
    sign: str = ""
    value: Decimal = Decimal(0)
    span: Span = _span_field()

    @staticmethod
    def from_raw(raw: str, kind: NumericKind, span: Span) -> "NumericLiteral":
        """Build a literal from its lexical form."""
        sign = raw[0] if raw[0] in "+-" else ""
        return NumericLiteral(raw=raw, kind=kind, sign=sign, value=Decimal(raw), span=span)


@dataclass(frozen=True, slots=True)
class BooleanLiteral:
    """true / false"""

    value: bool
    span: Span = _span_field()


type Iri = IriRef | PrefixedName

type Term = (
    IriRef
    | PrefixedName
    | BlankNodeLabel
    | AnonBlankNode
    | BlankNodePropertyList
    | Collection
    | StringLiteral
    | NumericLiteral
    | BooleanLiteral
)


def is_atomic(term: object) -> TypeIs[
    IriRef | PrefixedName | BlankNodeLabel | AnonBlankNode
    | StringLiteral | NumericLiteral | BooleanLiteral
]:
    """True for terms printed as a single token (no nested structure)."""
    return not isinstance(term, (BlankNodePropertyList, Collection))


# ============================================================================
# STATEMENTS
# ============================================================================


@dataclass(frozen=True, slots=True)
class PredicateObjects:
    """One predicate with its comma-separated objects."""

    predicate: Iri
    objects: tuple[Term, ...]
    span: Span = _span_field()


@dataclass(frozen=True, slots=True)
class PrefixDirective:
    """@prefix label: <iri> .  /  PREFIX label: <iri>"""

    label: str
    iri: IriRef
    sparql: bool = field(default=False, compare=False)
    span: Span = _span_field()


@dataclass(frozen=True, slots=True)
class BaseDirective:
    """@base <iri> .  /  BASE <iri>"""

    iri: IriRef
    sparql: bool = field(default=False, compare=False)
    span: Span = _span_field()


@dataclass(frozen=True, slots=True)
class Triples:
    """subject predicateObjectList .

    predicate_objects may be empty only when the subject is a
    BlankNodePropertyList ("[ ex:p ex:o ] .").
    """

    subject: Term
    predicate_objects: tuple[PredicateObjects, ...]
    span: Span = _span_field()


type Statement = PrefixDirective | BaseDirective | Triples


@dataclass(frozen=True, slots=True)
class Document:
    """Root node: ordered statements."""

    statements: tuple[Statement, ...]


# ============================================================================
# CONCRETE SYNTAX TREE
# ============================================================================


@dataclass(frozen=True, slots=True)
class SyntaxTree:
    """Parsed source with every character accounted for.

    Attributes:
        source: The text that was parsed
        document: Semantic statement tree
        tokens: Semantic tokens in source order
        comments: Comments in source order (the side-channel)
    """

    source: str
    document: Document
    tokens: tuple[Token, ...]
    comments: tuple[Comment, ...]

    def extras(self) -> tuple[Span, ...]:
        """Spans not covered by semantic tokens: comments and whitespace runs."""
        covered = sorted(
            [t.span for t in self.tokens] + [c.span for c in self.comments],
            key=lambda s: s.start,
        )
        gaps: list[Span] = []
        pos = 0
        for span in covered:
            if span.start > pos:
                gaps.append(Span(pos, span.start))
            pos = max(pos, span.end)
        if pos < len(self.source):
            gaps.append(Span(pos, len(self.source)))
        extras = [c.span for c in self.comments] + gaps
        return tuple(sorted(extras, key=lambda s: s.start))
