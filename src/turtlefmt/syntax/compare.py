"""Layout-independent comparison of Turtle documents.

semantic_signature() reduces a Document to nested tuples in which every
IRI is spelled out in full as of its point of use. Two documents with
equal signatures state the same triples in the same order with the same
directives, however they are laid out or abbreviated. Typed literals that
have a bare-token form compare equal to that token, so "1"^^xsd:integer
and 1 give the same signature.
"""

from turtlefmt.syntax.ast import (
    AnonBlankNode,
    BaseDirective,
    BlankNodeLabel,
    BlankNodePropertyList,
    BooleanLiteral,
    Collection,
    Document,
    Iri,
    NumericLiteral,
    PredicateObjects,
    PrefixDirective,
    PrefixedName,
    StringLiteral,
    Term,
    Triples,
)
from turtlefmt.syntax.normalize import typed_literal_shorthand
from turtlefmt.syntax.prefixes import PrefixBindings

__all__ = ["semantic_signature"]

type Signature = tuple[object, ...]


def _iri(iri: Iri, bindings: PrefixBindings) -> Signature:
    resolved = bindings.resolve_iri(iri)
    if resolved is None and isinstance(iri, PrefixedName):
        # Unbound prefix: compare the name itself.
        return ("pname", iri.prefix, iri.local)
    return ("iri", resolved)


def _groups(groups: tuple[PredicateObjects, ...], bindings: PrefixBindings) -> Signature:
    return tuple(
        (_iri(group.predicate, bindings), tuple(_term(obj, bindings) for obj in group.objects))
        for group in groups
    )


def _term(term: Term, bindings: PrefixBindings) -> Signature:
    match term:
        case BlankNodeLabel(label=label):
            return ("bnode", label)
        case AnonBlankNode():
            return ("anon",)
        case BlankNodePropertyList(predicate_objects=groups):
            return ("plist", _groups(groups, bindings))
        case Collection(items=items):
            return ("list", tuple(_term(item, bindings) for item in items))
        case StringLiteral(value=value, language=language, datatype=datatype):
            shorthand = typed_literal_shorthand(term, bindings)
            if shorthand is not None:
                return _term(shorthand, bindings)
            return (
                "literal",
                value,
                language,
                None if datatype is None else _iri(datatype, bindings),
            )
        case NumericLiteral(kind=kind, sign=sign, value=value):
            return ("number", kind, bool(sign), sign == "-", value)
        case BooleanLiteral(value=value):
            return ("boolean", value)
        case _:
            return _iri(term, bindings)


def semantic_signature(document: Document) -> Signature:
    """Reduce a Document to a comparable, layout-free value.

    Prefixed names are resolved with the bindings in effect where they
    occur, so `a`, `rdf:type` and `<...#type>` give the same signature.
    Directives are kept (with their spelling style dropped).

    Example:
        >>> from turtlefmt.syntax import parse
        >>> one = parse("@prefix rdf: <http://www.w3.org/1999/02/22-rdf-syntax-ns#> . <s> rdf:type <o> .")
        >>> two = parse("@prefix rdf: <http://www.w3.org/1999/02/22-rdf-syntax-ns#> .\\n<s> a <o> .")
        >>> semantic_signature(one.document) == semantic_signature(two.document)
        True
    """
    bindings = PrefixBindings()
    signature: list[Signature] = []
    for statement in document.statements:
        match statement:
            case PrefixDirective(label=label, iri=iri):
                signature.append(("prefix", label, iri.value))
                bindings = bindings.apply(statement)
            case BaseDirective(iri=iri):
                signature.append(("base", iri.value))
            case Triples(subject=subject, predicate_objects=groups):
                signature.append(("triples", _term(subject, bindings), _groups(groups, bindings)))
    return tuple(signature)
