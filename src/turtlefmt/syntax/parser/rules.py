"""Grammar rules for the Turtle parser.

Recursive descent over the W3C Turtle grammar: directives, triples,
predicate-object lists, collections, blank node property lists and
literals. Token-level work is delegated to primitives; whitespace and
comments to whitespace.skip_extras.

Every rule takes (cursor, context) and returns ParseResult[Node]. The
returned cursor may already be past trailing whitespace and comments;
those comments are recorded exactly once, so skipping again is a no-op.
"""

from dataclasses import dataclass, field

from turtlefmt.constants import MAX_DEPTH, RDF_TYPE_IRI
from turtlefmt.diagnostics import ErrorTemplate, NestingDepthError, TurtleSyntaxError
from turtlefmt.enums import TokenKind
from turtlefmt.syntax.ast import (
    AnonBlankNode,
    BaseDirective,
    BlankNodePropertyList,
    BooleanLiteral,
    Collection,
    Comment,
    Iri,
    IriRef,
    PredicateObjects,
    PrefixDirective,
    Span,
    Statement,
    StringLiteral,
    Term,
    Token,
    Triples,
)
from turtlefmt.syntax.cursor import Cursor, ParseResult
from turtlefmt.syntax.parser.primitives import (
    excerpt,
    match_keyword,
    parse_blank_node_label,
    parse_iriref,
    parse_langtag,
    parse_numeric,
    parse_pname_ns,
    parse_prefixed_name,
    parse_string,
    syntax_error,
)
from turtlefmt.syntax.parser.whitespace import skip_extras

__all__ = [
    "ParseContext",
    "parse_iri",
    "parse_object",
    "parse_predicate_object_list",
    "parse_statement",
    "parse_subject",
    "parse_verb",
]

_EXPECTED_OBJECT: tuple[str, ...] = ("IRI", "blank node", "literal", "'('", "'['")
_EXPECTED_SUBJECT: tuple[str, ...] = ("directive", "IRI", "blank node", "'('", "'['")
_EXPECTED_VERB: tuple[str, ...] = ("IRI", "'a'")


@dataclass(slots=True)
class ParseContext:
    """Explicit context for parsing operations.

    Replaces module-level state with explicit parameter passing. Nested
    contexts created by enter_nested() share the token and comment sinks
    with their parent.

    Attributes:
        max_nesting_depth: Maximum nesting of collections/property lists
        current_depth: Current nesting depth (0 = statement level)
        tokens: Semantic tokens recorded so far (source order)
        comments: Comments recorded so far (source order)
    """

    max_nesting_depth: int = MAX_DEPTH
    current_depth: int = 0
    tokens: list[Token] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)

    def is_depth_exceeded(self) -> bool:
        """Check if maximum nesting depth has been exceeded."""
        return self.current_depth >= self.max_nesting_depth

    def enter_nested(self) -> "ParseContext":
        """Create new context with incremented depth for a '(' or '['."""
        return ParseContext(
            max_nesting_depth=self.max_nesting_depth,
            current_depth=self.current_depth + 1,
            tokens=self.tokens,
            comments=self.comments,
        )

    def token(self, kind: TokenKind, start: int, end: int) -> Span:
        """Record a token and return its span."""
        span = Span(start, end)
        self.tokens.append(Token(kind, span))
        return span

    def skip(self, cursor: Cursor) -> Cursor:
        """Skip whitespace and comments, recording the comments."""
        return skip_extras(cursor, self.comments)


def _unexpected(cursor: Cursor, expected: tuple[str, ...]) -> TurtleSyntaxError:
    if cursor.is_eof:
        return syntax_error(ErrorTemplate.unexpected_eof(expected), cursor)
    found = excerpt(cursor)
    return syntax_error(ErrorTemplate.unexpected_token(found, expected), cursor, cursor.pos + len(found))


def _expect_punctuation(cursor: Cursor, char: str, context: ParseContext, expected: tuple[str, ...]) -> Cursor:
    end = cursor.expect(char)
    if end is None:
        raise _unexpected(cursor, expected)
    context.token(TokenKind.PUNCTUATION, cursor.pos, end.pos)
    return end


# =============================================================================
# Terms
# =============================================================================


def parse_iri(cursor: Cursor, context: ParseContext) -> ParseResult[Iri] | None:
    """Parse iri: IRIREF | PrefixedName"""
    iri = parse_iriref(cursor)
    if iri is not None:
        context.token(TokenKind.IRIREF, cursor.pos, iri.cursor.pos)
        return ParseResult(iri.value, iri.cursor)
    name = parse_prefixed_name(cursor)
    if name is not None:
        context.token(TokenKind.PREFIXED_NAME, cursor.pos, name.cursor.pos)
        return ParseResult(name.value, name.cursor)
    return None


def parse_verb(cursor: Cursor, context: ParseContext) -> ParseResult[Iri] | None:
    """Parse verb: iri | 'a'

    The keyword is returned as IriRef(rdf:type) with raw="a".
    """
    iri = parse_iri(cursor, context)
    if iri is not None:
        return iri
    end = match_keyword(cursor, "a")
    if end is None:
        return None
    span = context.token(TokenKind.A, cursor.pos, end.pos)
    return ParseResult(IriRef(RDF_TYPE_IRI, raw="a", span=span), end)


def _parse_literal(cursor: Cursor, context: ParseContext) -> ParseResult[StringLiteral] | None:
    """Parse RDFLiteral: String (LANGTAG | '^^' iri)?

    Whitespace and comments may separate the string from its annotation.
    """
    string = parse_string(cursor)
    if string is None:
        return None
    start = cursor.pos
    context.token(TokenKind.STRING, start, string.cursor.pos)
    after_string = string.cursor

    lookahead = context.skip(after_string)
    tag = parse_langtag(lookahead)
    if tag is not None:
        context.token(TokenKind.LANGTAG, lookahead.pos, tag.cursor.pos)
        literal = StringLiteral(string.value, language=tag.value, span=Span(start, tag.cursor.pos))
        return ParseResult(literal, tag.cursor)

    if lookahead.startswith("^^"):
        context.token(TokenKind.DATATYPE_MARKER, lookahead.pos, lookahead.pos + 2)
        type_cursor = context.skip(lookahead.advance(2))
        datatype = parse_iri(type_cursor, context)
        if datatype is None:
            raise _unexpected(type_cursor, ("datatype IRI",))
        literal = StringLiteral(string.value, datatype=datatype.value, span=Span(start, datatype.cursor.pos))
        return ParseResult(literal, datatype.cursor)

    return ParseResult(StringLiteral(string.value, span=Span(start, after_string.pos)), lookahead)


def _parse_collection(cursor: Cursor, context: ParseContext) -> ParseResult[Collection]:
    """Parse collection: '(' object* ')'"""
    if context.is_depth_exceeded():
        raise syntax_error(
            ErrorTemplate.nesting_depth_exceeded(context.max_nesting_depth),
            cursor,
            error_type=NestingDepthError,
        )
    nested = context.enter_nested()
    start = cursor.pos
    context.token(TokenKind.PUNCTUATION, start, start + 1)
    cursor = nested.skip(cursor.advance())

    items: list[Term] = []
    while cursor.is_eof or cursor.current != ")":
        if cursor.is_eof:
            raise _unexpected(cursor, (*_EXPECTED_OBJECT, "')'"))
        item = parse_object(cursor, nested)
        items.append(item.value)
        cursor = nested.skip(item.cursor)

    context.token(TokenKind.PUNCTUATION, cursor.pos, cursor.pos + 1)
    end = cursor.advance()
    return ParseResult(Collection(tuple(items), span=Span(start, end.pos)), end)


def _parse_bracket(cursor: Cursor, context: ParseContext) -> ParseResult[AnonBlankNode | BlankNodePropertyList]:
    """Parse ANON '[' ']' or blankNodePropertyList '[' predicateObjectList ']'

    Comments may appear inside ANON as well as whitespace.
    """
    start = cursor.pos
    recorded = len(context.comments)
    inner = context.skip(cursor.advance())
    if not inner.is_eof and inner.current == "]":
        end = inner.advance()
        if len(context.comments) == recorded:
            span = context.token(TokenKind.ANON, start, end.pos)
        else:
            # [ # comment ] keeps '[' and ']' as separate tokens around the comment.
            context.token(TokenKind.PUNCTUATION, start, start + 1)
            context.token(TokenKind.PUNCTUATION, inner.pos, end.pos)
            span = Span(start, end.pos)
        return ParseResult(AnonBlankNode(span=span), end)

    if context.is_depth_exceeded():
        raise syntax_error(
            ErrorTemplate.nesting_depth_exceeded(context.max_nesting_depth),
            cursor,
            error_type=NestingDepthError,
        )
    nested = context.enter_nested()
    context.token(TokenKind.PUNCTUATION, start, start + 1)

    groups = parse_predicate_object_list(inner, nested, required=True)
    cursor = nested.skip(groups.cursor)
    end = _expect_punctuation(cursor, "]", context, ("';'", "']'"))
    node = BlankNodePropertyList(groups.value, span=Span(start, end.pos))
    return ParseResult(node, end)


def parse_object(cursor: Cursor, context: ParseContext) -> ParseResult[Term]:
    """Parse object: iri | BlankNode | collection | blankNodePropertyList | literal

    Raises:
        TurtleSyntaxError: Nothing at cursor can start an object
    """
    if cursor.is_eof:
        raise _unexpected(cursor, _EXPECTED_OBJECT)

    char = cursor.current
    result: ParseResult[Term] | None
    if char in "\"'":
        result = _parse_literal(cursor, context)
    elif char == "(":
        result = _parse_collection(cursor, context)
    elif char == "[":
        result = _parse_bracket(cursor, context)
    else:
        result = _parse_simple_term(cursor, context)

    if result is None:
        raise _unexpected(cursor, _EXPECTED_OBJECT)
    return result


def _parse_simple_term(cursor: Cursor, context: ParseContext) -> ParseResult[Term] | None:
    """IRIs, blank node labels, booleans and numbers."""
    iri = parse_iri(cursor, context)
    if iri is not None:
        return iri

    label = parse_blank_node_label(cursor)
    if label is not None:
        context.token(TokenKind.BLANK_NODE_LABEL, cursor.pos, label.cursor.pos)
        return label

    for word, value in (("true", True), ("false", False)):
        end = match_keyword(cursor, word)
        if end is not None:
            span = context.token(TokenKind.BOOLEAN, cursor.pos, end.pos)
            return ParseResult(BooleanLiteral(value, span=span), end)

    number = parse_numeric(cursor)
    if number is not None:
        context.token(TokenKind(number.value.kind), cursor.pos, number.cursor.pos)
        return number
    return None


def parse_subject(cursor: Cursor, context: ParseContext) -> ParseResult[Term]:
    """Parse subject: iri | BlankNode | collection | blankNodePropertyList"""
    if not cursor.is_eof:
        char = cursor.current
        if char == "(":
            return _parse_collection(cursor, context)
        if char == "[":
            return _parse_bracket(cursor, context)
        iri = parse_iri(cursor, context)
        if iri is not None:
            return iri
        label = parse_blank_node_label(cursor)
        if label is not None:
            context.token(TokenKind.BLANK_NODE_LABEL, cursor.pos, label.cursor.pos)
            return label
    raise _unexpected(cursor, _EXPECTED_SUBJECT)


# =============================================================================
# Predicate-object lists
# =============================================================================


def _parse_object_list(cursor: Cursor, context: ParseContext) -> ParseResult[tuple[Term, ...]]:
    """Parse objectList: object (',' object)*"""
    objects: list[Term] = []
    while True:
        result = parse_object(cursor, context)
        objects.append(result.value)
        lookahead = context.skip(result.cursor)
        if lookahead.is_eof or lookahead.current != ",":
            return ParseResult(tuple(objects), lookahead)
        context.token(TokenKind.PUNCTUATION, lookahead.pos, lookahead.pos + 1)
        cursor = context.skip(lookahead.advance())


def parse_predicate_object_list(
    cursor: Cursor, context: ParseContext, *, required: bool
) -> ParseResult[tuple[PredicateObjects, ...]]:
    """Parse predicateObjectList: verb objectList (';' (verb objectList)?)*

    Redundant semicolons are accepted and produce no group.

    Args:
        cursor: Position of the first verb (extras already skipped)
        context: Parse context
        required: Raise if no verb is present (False after a '[ ... ]' subject)

    Returns:
        Groups in source order; cursor past any trailing extras
    """
    groups: list[PredicateObjects] = []
    verb = parse_verb(cursor, context)
    if verb is None:
        if required:
            raise _unexpected(cursor, _EXPECTED_VERB)
        return ParseResult((), cursor)

    while verb is not None:
        cursor = context.skip(verb.cursor)
        objects = _parse_object_list(cursor, context)
        span = Span(verb.value.span.start, objects.value[-1].span.end)
        groups.append(PredicateObjects(verb.value, objects.value, span=span))

        lookahead = objects.cursor
        saw_semicolon = False
        while not lookahead.is_eof and lookahead.current == ";":
            context.token(TokenKind.PUNCTUATION, lookahead.pos, lookahead.pos + 1)
            lookahead = context.skip(lookahead.advance())
            saw_semicolon = True
        cursor = lookahead
        if not saw_semicolon:
            break
        verb = parse_verb(cursor, context)

    return ParseResult(tuple(groups), cursor)


# =============================================================================
# Statements
# =============================================================================


def _parse_prefix_body(
    start: Cursor, cursor: Cursor, context: ParseContext, *, sparql: bool
) -> ParseResult[PrefixDirective]:
    cursor = context.skip(cursor)
    label = parse_pname_ns(cursor)
    if label is None:
        raise _unexpected(cursor, ("prefix label",))
    context.token(TokenKind.PNAME_NS, cursor.pos, label.cursor.pos)
    cursor = context.skip(label.cursor)
    iri = parse_iriref(cursor)
    if iri is None:
        raise _unexpected(cursor, ("IRI",))
    context.token(TokenKind.IRIREF, cursor.pos, iri.cursor.pos)
    end = iri.cursor
    if not sparql:
        end = _expect_punctuation(context.skip(end), ".", context, ("'.'",))
    directive = PrefixDirective(label.value, iri.value, sparql=sparql, span=Span(start.pos, end.pos))
    return ParseResult(directive, end)


def _parse_base_body(
    start: Cursor, cursor: Cursor, context: ParseContext, *, sparql: bool
) -> ParseResult[BaseDirective]:
    cursor = context.skip(cursor)
    iri = parse_iriref(cursor)
    if iri is None:
        raise _unexpected(cursor, ("IRI",))
    context.token(TokenKind.IRIREF, cursor.pos, iri.cursor.pos)
    end = iri.cursor
    if not sparql:
        end = _expect_punctuation(context.skip(end), ".", context, ("'.'",))
    return ParseResult(BaseDirective(iri.value, sparql=sparql, span=Span(start.pos, end.pos)), end)


def _parse_directive(cursor: Cursor, context: ParseContext) -> ParseResult[Statement] | None:
    """Parse prefixID | base | sparqlPrefix | sparqlBase"""
    for keyword, kind, body in (
        ("prefix", TokenKind.PREFIX_KEYWORD, _parse_prefix_body),
        ("base", TokenKind.BASE_KEYWORD, _parse_base_body),
    ):
        at_form = "@" + keyword
        if cursor.startswith(at_form):
            end = cursor.advance(len(at_form))
            context.token(kind, cursor.pos, end.pos)
            return body(cursor, end, context, sparql=False)
        end = match_keyword(cursor, keyword, ignore_case=True)
        if end is not None:
            context.token(kind, cursor.pos, end.pos)
            return body(cursor, end, context, sparql=True)
    return None


def _parse_triples(cursor: Cursor, context: ParseContext) -> ParseResult[Triples]:
    """Parse triples '.'

    triples ::= subject predicateObjectList
              | blankNodePropertyList predicateObjectList?
    """
    start = cursor.pos
    subject = parse_subject(cursor, context)
    cursor = context.skip(subject.cursor)
    groups = parse_predicate_object_list(
        cursor, context, required=not isinstance(subject.value, BlankNodePropertyList)
    )
    cursor = context.skip(groups.cursor)
    expected = ("'.'", "';'", "','") if groups.value else ("predicate", "'.'")
    end = _expect_punctuation(cursor, ".", context, expected)
    return ParseResult(Triples(subject.value, groups.value, span=Span(start, end.pos)), end)


def parse_statement(cursor: Cursor, context: ParseContext) -> ParseResult[Statement]:
    """Parse statement: directive | triples '.'

    Args:
        cursor: Position of the first character (extras already skipped)
        context: Parse context

    Raises:
        TurtleSyntaxError: Malformed statement
    """
    directive = _parse_directive(cursor, context)
    if directive is not None:
        return directive
    return _parse_triples(cursor, context)

