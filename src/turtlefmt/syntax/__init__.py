"""Turtle syntax package.

Provides the parser, the syntax tree definitions, the comment
correlator, literal normalization and the canonical printer.

Python 3.13+.
"""

from .ast import (
    AnonBlankNode,
    BaseDirective,
    BlankNodeLabel,
    BlankNodePropertyList,
    BooleanLiteral,
    Collection,
    Comment,
    Document,
    Iri,
    IriRef,
    NumericLiteral,
    PredicateObjects,
    PrefixDirective,
    PrefixedName,
    Span,
    Statement,
    StringLiteral,
    SyntaxTree,
    Term,
    Token,
    Triples,
)
from .compare import semantic_signature
from .cursor import Cursor, LineOffsetCache, ParseResult
from .parser import TurtleParser
from .prefixes import PrefixBindings
from .printer import TurtlePrinter, print_document

__all__ = [
    "AnonBlankNode",
    "BaseDirective",
    "BlankNodeLabel",
    "BlankNodePropertyList",
    "BooleanLiteral",
    "Collection",
    "Comment",
    "Cursor",
    "Document",
    "Iri",
    "IriRef",
    "LineOffsetCache",
    "NumericLiteral",
    "ParseResult",
    "PredicateObjects",
    "PrefixBindings",
    "PrefixDirective",
    "PrefixedName",
    "Span",
    "Statement",
    "StringLiteral",
    "SyntaxTree",
    "Term",
    "Token",
    "Triples",
    "TurtleParser",
    "TurtlePrinter",
    "parse",
    "print_document",
    "semantic_signature",
]


def parse(source: str) -> SyntaxTree:
    """Parse Turtle source into a SyntaxTree.

    Convenience function for TurtleParser().parse().

    Args:
        source: Turtle document text

    Returns:
        SyntaxTree holding the Document, tokens and comments

    Raises:
        TurtleSyntaxError: On the first syntax error

    Example:
        >>> from turtlefmt.syntax import parse
        >>> tree = parse("<s> a <o> .")
        >>> tree.document.statements[0].predicate_objects[0].predicate.raw
        'a'
    """
    parser = TurtleParser()
    return parser.parse(source)
