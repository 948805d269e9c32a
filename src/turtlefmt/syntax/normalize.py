"""Canonical spellings for Turtle terms.

Pure functions from a parsed term to the text the printer emits. None
of them consult the source layout; all information comes from the
decoded term values and the prefix bindings in effect where they occur.

Python 3.13+. Zero external dependencies.
"""

import logging
from dataclasses import replace

from turtlefmt.constants import RDF_TYPE_IRI, XSD_NS, XSD_SHORTHAND_TYPES
from turtlefmt.enums import NumericKind
from turtlefmt.syntax.ast import (
    AnonBlankNode,
    BlankNodeLabel,
    BooleanLiteral,
    Iri,
    IriRef,
    NumericLiteral,
    PrefixedName,
    StringLiteral,
)
from turtlefmt.syntax.cursor import Cursor
from turtlefmt.syntax.parser.primitives import IRI_FORBIDDEN, parse_numeric
from turtlefmt.syntax.prefixes import PrefixBindings

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Literals
    "normalize_string",
    "normalize_numeric",
    "normalize_boolean",
    "normalize_literal",
    # Names
    "normalize_iriref",
    "normalize_local_name",
    "normalize_prefixed_name",
    "normalize_iri",
    "normalize_predicate",
    "normalize_atomic",
    "typed_literal_shorthand",
    # Helpers
    "is_rdf_type",
]

logger = logging.getLogger(__name__)

# Named escapes preferred over \u00XX.
_NAMED_ESCAPES: dict[str, str] = {
    "\t": "\\t",
    "\b": "\\b",
    "\n": "\\n",
    "\r": "\\r",
    "\f": "\\f",
}

# Characters a long string keeps raw.
_LONG_STRING_RAW: frozenset[str] = frozenset("\n\t")

# Local-name punctuation that is never legal unescaped.
_LOCAL_RESERVED: frozenset[str] = frozenset("~!$&'()*+,;=/?#@")

_HEX_DIGITS: frozenset[str] = frozenset("0123456789abcdefABCDEF")

_SHORTHAND_KINDS: dict[str, NumericKind] = {
    f"{XSD_NS}integer": NumericKind.INTEGER,
    f"{XSD_NS}decimal": NumericKind.DECIMAL,
    f"{XSD_NS}double": NumericKind.DOUBLE,
}

_XSD_BOOLEAN: str = f"{XSD_NS}boolean"


def _is_control(char: str) -> bool:
    # Cc, Cf, Zl, Zp, Zs other than U+0020, unassigned and private-use.
    return not char.isprintable()


def _escape_control(char: str) -> str:
    named = _NAMED_ESCAPES.get(char)
    if named is not None:
        return named
    code = ord(char)
    if code > 0xFFFF:
        return f"\\U{code:08X}"
    return f"\\u{code:04X}"


# ============================================================================
# LITERALS
# ============================================================================


def normalize_string(value: str) -> str:
    """Quote a decoded string value in canonical form.

    Short form "..." unless the value contains a line feed, in which case
    the long form \"\"\"...\"\"\" keeps line breaks (and tabs) literal.

    Examples:
        it's        -> "it's"
        say "hi"    -> "say \\"hi\\""
        a<LF>b      -> \"\"\"a<LF>b\"\"\"
    """
    if "\n" not in value:
        parts: list[str] = []
        for char in value:
            if char in '"\\':
                parts.append("\\" + char)
            elif _is_control(char):
                parts.append(_escape_control(char))
            else:
                parts.append(char)
        return '"' + "".join(parts) + '"'

    # Quotes touching the closing delimiter are always escaped.
    body = value.rstrip('"')
    trailing = len(value) - len(body)

    parts = []
    run = 0
    for char in body:
        if char == '"':
            # A third consecutive quote would close the string.
            parts.append('\\"' if run >= 2 else '"')
            run += 1
            continue
        run = 0
        if char == "\\":
            parts.append("\\\\")
        elif _is_control(char) and char not in _LONG_STRING_RAW:
            parts.append(_escape_control(char))
        else:
            parts.append(char)
    parts.extend('\\"' for _ in range(trailing))
    return '"""' + "".join(parts) + '"""'


def _trim_integer_digits(digits: str) -> str:
    return digits.lstrip("0") or "0"


def _trim_mantissa(mantissa: str) -> str:
    """Trim a DECIMAL-shaped or integer-shaped mantissa for a DOUBLE."""
    if "." not in mantissa:
        return _trim_integer_digits(mantissa)
    whole, fraction = mantissa.split(".")
    whole = whole.lstrip("0")
    fraction = fraction.rstrip("0")
    if not fraction:
        return whole or "0"
    return f"{whole}.{fraction}"


def normalize_numeric(literal: NumericLiteral) -> str:
    """Shortest spelling with the same value, subclass and sign presence.

    Examples:
        +01     -> +1
        0.50    -> .5
        1.00    -> 1.0
        1.50E+03 -> 1.5e3
        -0.0e-0 -> -0e0
    """
    raw = literal.raw
    sign = literal.sign
    unsigned = raw[len(sign):]

    match literal.kind:
        case NumericKind.INTEGER:
            return sign + _trim_integer_digits(unsigned)
        case NumericKind.DECIMAL:
            whole, fraction = unsigned.split(".")
            return f"{sign}{whole.lstrip('0')}.{fraction.rstrip('0') or '0'}"
        case NumericKind.DOUBLE:
            mantissa, exponent = unsigned.lower().split("e")
            exponent_sign = exponent[0] if exponent[0] in "+-" else ""
            exponent_digits = _trim_integer_digits(exponent[len(exponent_sign):])
            if exponent_sign == "+" or exponent_digits == "0":
                exponent_sign = ""
            return f"{sign}{_trim_mantissa(mantissa)}e{exponent_sign}{exponent_digits}"


def normalize_boolean(literal: BooleanLiteral) -> str:
    """true / false"""
    return "true" if literal.value else "false"


# ============================================================================
# NAMES
# ============================================================================


def normalize_iriref(iri: IriRef) -> str:
    """<...> with forbidden characters escaped as \\u00XX.

    Example:
        IriRef("http://example.com/a b") -> <http://example.com/a\\u0020b>
    """
    escaped = "".join(
        f"\\u{ord(char):04X}" if char in IRI_FORBIDDEN else char for char in iri.value
    )
    return f"<{escaped}>"


def normalize_local_name(local: str) -> str:
    """Escape a decoded local name where the raw character is illegal.

    Rules:
        - '.' and '-' are escaped at the start, '.' also at the end
        - reserved punctuation (~!$&'()*+,;=/?#@) is always escaped
        - '%' is raw only when it starts a %XX sequence
        - everything else ('_', ':', letters, digits) is raw
    """
    parts: list[str] = []
    last = len(local) - 1
    for index, char in enumerate(local):
        if char in _LOCAL_RESERVED:
            parts.append("\\" + char)
        elif char == "%":
            is_percent_escape = (
                index + 2 <= last
                and local[index + 1] in _HEX_DIGITS
                and local[index + 2] in _HEX_DIGITS
            )
            parts.append("%" if is_percent_escape else "\\%")
        elif (index == 0 and char in ".-") or (index == last and char == "."):
            parts.append("\\" + char)
        else:
            parts.append(char)
    return "".join(parts)


def normalize_prefixed_name(name: PrefixedName) -> str:
    """prefix:local with canonical local-name escapes."""
    return f"{name.prefix}:{normalize_local_name(name.local)}"


def _warn_if_unbound(name: PrefixedName, bindings: PrefixBindings) -> None:
    if name.prefix not in bindings:
        logger.warning(
            "Prefix %r is not defined; %s:%s is printed as written",
            name.prefix,
            name.prefix,
            name.local,
        )


def normalize_iri(iri: Iri, bindings: PrefixBindings) -> str:
    """Canonical spelling of an IRI term in subject/object/datatype position.

    Logs a warning for a prefixed name whose prefix is unbound.
    """
    if isinstance(iri, IriRef):
        return normalize_iriref(iri)
    _warn_if_unbound(iri, bindings)
    return normalize_prefixed_name(iri)


def is_rdf_type(iri: Iri, bindings: PrefixBindings) -> bool:
    """True if iri denotes rdf:type under the bindings in effect."""
    return bindings.resolve_iri(iri) == RDF_TYPE_IRI


def normalize_predicate(iri: Iri, bindings: PrefixBindings) -> str:
    """Canonical spelling in verb position: `a` for rdf:type."""
    if is_rdf_type(iri, bindings):
        return "a"
    return normalize_iri(iri, bindings)


def typed_literal_shorthand(
    literal: StringLiteral, bindings: PrefixBindings
) -> NumericLiteral | BooleanLiteral | None:
    """Bare-token form of an xsd:integer/decimal/double/boolean literal.

    Only when the lexical form is itself a Turtle token of the matching
    kind; the datatype may be written as an IRI or a prefixed name.

    Examples:
        "+01"^^xsd:integer  -> NumericLiteral +01 (printed as +1)
        "true"^^xsd:boolean -> BooleanLiteral true
        "1"^^xsd:decimal    -> None (1 would read as an integer)
        " 1"^^xsd:integer   -> None
    """
    if literal.datatype is None:
        return None
    datatype = bindings.resolve_iri(literal.datatype)
    if datatype not in XSD_SHORTHAND_TYPES:
        return None

    value = literal.value
    if datatype == _XSD_BOOLEAN:
        if value in ("true", "false"):
            return BooleanLiteral(value == "true", span=literal.span)
        return None

    result = parse_numeric(Cursor(value, 0))
    if result is None or result.cursor.pos != len(value):
        return None
    if result.value.kind is not _SHORTHAND_KINDS[datatype]:
        return None
    return replace(result.value, span=literal.span)


def normalize_literal(literal: StringLiteral, bindings: PrefixBindings) -> str:
    """String with its @language or ^^datatype suffix, or its bare-token form."""
    shorthand = typed_literal_shorthand(literal, bindings)
    if isinstance(shorthand, NumericLiteral):
        return normalize_numeric(shorthand)
    if isinstance(shorthand, BooleanLiteral):
        return normalize_boolean(shorthand)

    text = normalize_string(literal.value)
    if literal.language is not None:
        return f"{text}@{literal.language}"
    if literal.datatype is not None:
        return f"{text}^^{normalize_iri(literal.datatype, bindings)}"
    return text


def normalize_atomic(
    term: IriRef | PrefixedName | BlankNodeLabel | AnonBlankNode
    | StringLiteral | NumericLiteral | BooleanLiteral,
    bindings: PrefixBindings,
) -> str:
    """Canonical spelling of a single-token term outside verb position."""
    match term:
        case IriRef() | PrefixedName():
            return normalize_iri(term, bindings)
        case BlankNodeLabel(label=label):
            return f"_:{label}"
        case AnonBlankNode():
            return "[]"
        case StringLiteral():
            return normalize_literal(term, bindings)
        case NumericLiteral():
            return normalize_numeric(term)
        case BooleanLiteral():
            return normalize_boolean(term)
