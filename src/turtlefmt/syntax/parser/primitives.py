"""Primitive (token-level) parsers for Turtle.

This module provides low-level parsers for IRIs, prefixed names, blank
node labels, string literals, numbers and language tags per the W3C
Turtle grammar.

Error Handling:
    Every parser returns None when the input does not start with its
    token (nothing consumed). Once a token is recognized by its first
    characters, malformed input raises TurtleSyntaxError positioned at
    the offending token.
"""

import re
from dataclasses import replace

from turtlefmt.diagnostics import Diagnostic, ErrorTemplate, SourceSpan, TurtleSyntaxError
from turtlefmt.enums import NumericKind
from turtlefmt.syntax.ast import BlankNodeLabel, IriRef, NumericLiteral, PrefixedName, Span
from turtlefmt.syntax.cursor import Cursor, ParseResult

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Character classes
    "PN_CHARS_BASE",
    "PN_CHARS_U",
    "PN_CHARS",
    "PN_LOCAL_ESCAPABLE",
    "IRI_FORBIDDEN",
    # Errors
    "syntax_error",
    "excerpt",
    # Parsers
    "parse_escape_sequence",
    "parse_iriref",
    "parse_pname_ns",
    "parse_prefixed_name",
    "parse_blank_node_label",
    "parse_string",
    "parse_langtag",
    "parse_numeric",
    "match_keyword",
    "is_name_char",
]

# ============================================================================
# CHARACTER CLASSES (regex class bodies, W3C Turtle productions 163s-172s)
# ============================================================================

PN_CHARS_BASE: str = (
    "A-Za-z\u00c0-\u00d6\u00d8-\u00f6\u00f8-\u02ff\u0370-\u037d\u037f-\u1fff"
    "\u200c-\u200d\u2070-\u218f\u2c00-\u2fef\u3001-\ud7ff\uf900-\ufdcf"
    "\ufdf0-\ufffd\U00010000-\U000effff"
)
PN_CHARS_U: str = PN_CHARS_BASE + "_"
PN_CHARS: str = PN_CHARS_U + "\\-0-9\u00b7\u0300-\u036f\u203f-\u2040"

# Characters a local name may carry only as a backslash escape.
PN_LOCAL_ESCAPABLE: frozenset[str] = frozenset("_~.-!$&'()*+,;=/?#@%")

# [18] IRIREF excludes #x00-#x20 and <>"{}|^`\ from raw content.
IRI_FORBIDDEN: frozenset[str] = frozenset(
    [chr(c) for c in range(0x21)] + list('<>"{}|^`\\')
)

_PLX = r"%[0-9A-Fa-f]{2}|\\[_~.\-!$&'()*+,;=/?#@%]"
_PN_PREFIX = f"[{PN_CHARS_BASE}](?:[{PN_CHARS}.]*[{PN_CHARS}])?"
_PN_LOCAL = (
    f"(?:[{PN_CHARS_U}:0-9]|{_PLX})"
    f"(?:(?:[{PN_CHARS}.:]|{_PLX})*(?:[{PN_CHARS}:]|{_PLX}))?"
)

_PNAME_NS_RE = re.compile(f"({_PN_PREFIX})?:")
_PNAME_LN_RE = re.compile(f"({_PN_PREFIX})?:({_PN_LOCAL})?")
_BLANK_NODE_LABEL_RE = re.compile(f"_:([{PN_CHARS_U}0-9](?:[{PN_CHARS}.]*[{PN_CHARS}])?)")
_LANGTAG_RE = re.compile(r"@([a-zA-Z]+(?:-[a-zA-Z0-9]+)*)")
_NAME_CHAR_RE = re.compile(f"[{PN_CHARS}:]")
_LOCAL_ESCAPE_RE = re.compile(r"\\(.)")

# Tried in this order: the longest lexical class wins.
_NUMERIC_PATTERNS: tuple[tuple[NumericKind, re.Pattern[str]], ...] = (
    (
        NumericKind.DOUBLE,
        re.compile(
            r"[+-]?(?:[0-9]+\.[0-9]*[eE][+-]?[0-9]+"
            r"|\.[0-9]+[eE][+-]?[0-9]+"
            r"|[0-9]+[eE][+-]?[0-9]+)"
        ),
    ),
    (NumericKind.DECIMAL, re.compile(r"[+-]?[0-9]*\.[0-9]+")),
    (NumericKind.INTEGER, re.compile(r"[+-]?[0-9]+")),
)

# ECHAR ::= '\' [tbnrf"'\]
_ECHAR_VALUES: dict[str, str] = {
    "t": "\t",
    "b": "\b",
    "n": "\n",
    "r": "\r",
    "f": "\f",
    '"': '"',
    "'": "'",
    "\\": "\\",
}

# UCHAR ::= '\u' HEX{4} | '\U' HEX{8}
_UCHAR_LENGTHS: dict[str, int] = {"u": 4, "U": 8}

_HEX_DIGITS: str = "0123456789abcdefABCDEF"

# Maximum valid Unicode code point per Unicode Standard.
_MAX_UNICODE_CODE_POINT: int = 0x10FFFF

# UTF-16 surrogate code point range, not Unicode scalar values.
_SURROGATE_RANGE_START: int = 0xD800
_SURROGATE_RANGE_END: int = 0xDFFF

# Longest excerpt quoted in "Unexpected ..." messages.
_EXCERPT_LEN: int = 20


# ============================================================================
# ERRORS
# ============================================================================


def syntax_error(
    diagnostic: Diagnostic,
    cursor: Cursor,
    end: int | None = None,
    *,
    error_type: type[TurtleSyntaxError] = TurtleSyntaxError,
) -> TurtleSyntaxError:
    """Build a TurtleSyntaxError located at cursor.

    Args:
        diagnostic: Diagnostic from ErrorTemplate (its span is replaced)
        cursor: Start of the offending input
        end: End offset of the offending input (defaults to one character)
        error_type: TurtleSyntaxError subclass to instantiate

    Returns:
        Exception ready to raise
    """
    line, column = cursor.compute_line_col()
    stop = end if end is not None else min(cursor.pos + 1, len(cursor.source))
    span = SourceSpan(start=cursor.pos, end=max(stop, cursor.pos), line=line, column=column)
    return error_type(replace(diagnostic, span=span), byte_offset=cursor.byte_offset)


def excerpt(cursor: Cursor) -> str:
    """Short piece of source at cursor for error messages (up to whitespace)."""
    words = cursor.slice_ahead(_EXCERPT_LEN).split(maxsplit=1)
    return words[0] if words else cursor.slice_ahead(1)


# ============================================================================
# ESCAPES
# ============================================================================


def parse_escape_sequence(cursor: Cursor, *, allow_echar: bool) -> tuple[str, Cursor]:
    """Parse an escape sequence starting at the backslash.

    Supported escape sequences:
        \\t \\b \\n \\r \\f \\" \\' \\\\  (ECHAR, strings only)
        \\uXXXX                     (UCHAR, 4 hex digits)
        \\UXXXXXXXX                 (UCHAR, 8 hex digits)

    Args:
        cursor: Position OF the backslash
        allow_echar: False inside IRIs, where only UCHAR is legal

    Returns:
        (decoded_char, cursor after the sequence)

    Raises:
        TurtleSyntaxError: Unknown escape, short hex run, or a code point
            that is a surrogate or above U+10FFFF
    """
    after = cursor.advance()
    if after.is_eof:
        raise syntax_error(ErrorTemplate.invalid_escape("\\"), cursor)

    escape_ch = after.current

    if allow_echar and escape_ch in _ECHAR_VALUES:
        return (_ECHAR_VALUES[escape_ch], after.advance())

    length = _UCHAR_LENGTHS.get(escape_ch)
    if length is None:
        raise syntax_error(ErrorTemplate.invalid_escape("\\" + escape_ch), cursor, after.pos + 1)

    digits_cursor = after.advance()
    hex_digits = digits_cursor.slice_ahead(length)
    if len(hex_digits) < length or not all(c in _HEX_DIGITS for c in hex_digits):
        raise syntax_error(
            ErrorTemplate.invalid_escape("\\" + escape_ch + hex_digits),
            cursor,
            digits_cursor.pos + len(hex_digits),
        )
    end = digits_cursor.advance(length)

    code_point = int(hex_digits, 16)
    if code_point > _MAX_UNICODE_CODE_POINT or (
        _SURROGATE_RANGE_START <= code_point <= _SURROGATE_RANGE_END
    ):
        raise syntax_error(ErrorTemplate.invalid_code_point(hex_digits), cursor, end.pos)
    return (chr(code_point), end)


# ============================================================================
# IRIS AND NAMES
# ============================================================================


def parse_iriref(cursor: Cursor) -> ParseResult[IriRef] | None:
    """Parse IRIREF: <...>

    Examples:
        <http://example.com/s>  -> IriRef("http://example.com/s")
        <\\u00E9>                 -> IriRef("é")
        <>                      -> IriRef("")

    Raises:
        TurtleSyntaxError: UNTERMINATED_IRI (at the '<') when whitespace,
            '<' or EOF is met before '>'; INVALID_IRI_CHARACTER for other
            forbidden raw characters.
    """
    if cursor.is_eof or cursor.current != "<":
        return None

    start = cursor
    cursor = cursor.advance()
    parts: list[str] = []

    while True:
        if cursor.is_eof:
            raise syntax_error(ErrorTemplate.unterminated_iri(), start)
        ch = cursor.current
        if ch == ">":
            cursor = cursor.advance()
            span = Span(start.pos, cursor.pos)
            return ParseResult(IriRef("".join(parts), raw=start.slice_to(cursor.pos), span=span), cursor)
        if ch == "\\":
            char, cursor = parse_escape_sequence(cursor, allow_echar=False)
            parts.append(char)
            continue
        if ch in IRI_FORBIDDEN:
            if ch <= " " or ch == "<":
                raise syntax_error(ErrorTemplate.unterminated_iri(), start)
            raise syntax_error(ErrorTemplate.invalid_iri_character(ch), cursor)
        parts.append(ch)
        cursor = cursor.advance()


def parse_pname_ns(cursor: Cursor) -> ParseResult[str] | None:
    """Parse PNAME_NS: PN_PREFIX? ':'

    Returns the prefix label without the colon ("" for the empty prefix).
    """
    match = cursor.match(_PNAME_NS_RE)
    if match is None:
        return None
    return ParseResult(match.group(1) or "", cursor.at(match.end()))


def parse_prefixed_name(cursor: Cursor) -> ParseResult[PrefixedName] | None:
    """Parse PrefixedName: PNAME_NS PN_LOCAL?

    Local-name escapes (\\. \\- ...) are removed from `local`; percent
    escapes are kept verbatim as the grammar requires.

    Examples:
        ex:foo    -> PrefixedName("ex", "foo")
        :bar      -> PrefixedName("", "bar")
        ex:a\\.b   -> PrefixedName("ex", "a.b")
    """
    match = cursor.match(_PNAME_LN_RE)
    if match is None:
        return None
    end = cursor.at(match.end())
    local = _LOCAL_ESCAPE_RE.sub(r"\1", match.group(2) or "")
    name = PrefixedName(
        prefix=match.group(1) or "",
        local=local,
        raw=match.group(0),
        span=Span(cursor.pos, end.pos),
    )
    return ParseResult(name, end)


def parse_blank_node_label(cursor: Cursor) -> ParseResult[BlankNodeLabel] | None:
    """Parse BLANK_NODE_LABEL: '_:' label

    Raises:
        TurtleSyntaxError: '_:' not followed by a valid label
    """
    if not cursor.startswith("_:"):
        return None
    match = cursor.match(_BLANK_NODE_LABEL_RE)
    if match is None:
        raise syntax_error(ErrorTemplate.invalid_blank_node_label(), cursor, cursor.pos + 2)
    end = cursor.at(match.end())
    return ParseResult(BlankNodeLabel(match.group(1), span=Span(cursor.pos, end.pos)), end)


def is_name_char(cursor: Cursor) -> bool:
    """True if the character at cursor could continue a name or prefix."""
    return not cursor.is_eof and cursor.match(_NAME_CHAR_RE) is not None


def match_keyword(cursor: Cursor, word: str, *, ignore_case: bool = False) -> Cursor | None:
    """Match a bare keyword (a, true, false, PREFIX, BASE).

    The keyword must not run into a following name character, so "ab"
    and "truex" are not keywords.

    Returns:
        Cursor after the keyword, or None
    """
    text = cursor.slice_ahead(len(word))
    if (text.lower() != word.lower()) if ignore_case else (text != word):
        return None
    end = cursor.advance(len(word))
    if is_name_char(end):
        return None
    return end


# ============================================================================
# LITERALS
# ============================================================================


def parse_string(cursor: Cursor) -> ParseResult[str] | None:
    """Parse any of the four string forms and return the decoded value.

    Forms:
        "..."   '...'       short, no raw CR/LF
        \"\"\"...\"\"\" '''...'''   long, raw line breaks allowed

    A long string closes at the first occurrence of its triple delimiter.

    Raises:
        TurtleSyntaxError: UNTERMINATED_STRING (at the opening quote) or
            an invalid escape inside the string
    """
    if cursor.is_eof or cursor.current not in "\"'":
        return None

    quote = cursor.current
    delimiter = quote * 3 if cursor.startswith(quote * 3) else quote
    is_long = len(delimiter) == 3

    start = cursor
    cursor = cursor.advance(len(delimiter))
    parts: list[str] = []

    while True:
        if cursor.is_eof:
            raise syntax_error(ErrorTemplate.unterminated_string(delimiter), start, start.pos + len(delimiter))
        if cursor.startswith(delimiter):
            return ParseResult("".join(parts), cursor.advance(len(delimiter)))
        ch = cursor.current
        if ch == "\\":
            char, cursor = parse_escape_sequence(cursor, allow_echar=True)
            parts.append(char)
            continue
        if not is_long and ch in "\r\n":
            raise syntax_error(ErrorTemplate.unterminated_string(delimiter), start, start.pos + 1)
        parts.append(ch)
        cursor = cursor.advance()


def parse_langtag(cursor: Cursor) -> ParseResult[str] | None:
    """Parse LANGTAG: '@' [a-zA-Z]+ ('-' [a-zA-Z0-9]+)*

    Returns the tag without '@'. Case is preserved.

    Raises:
        TurtleSyntaxError: '@' not followed by a valid tag
    """
    if cursor.is_eof or cursor.current != "@":
        return None
    match = cursor.match(_LANGTAG_RE)
    if match is None:
        raise syntax_error(ErrorTemplate.invalid_language_tag(), cursor)
    return ParseResult(match.group(1), cursor.at(match.end()))


def parse_numeric(cursor: Cursor) -> ParseResult[NumericLiteral] | None:
    """Parse INTEGER, DECIMAL or DOUBLE.

    Examples:
        42      -> NumericLiteral(kind=INTEGER)
        -0.50   -> NumericLiteral(kind=DECIMAL, sign="-")
        1.5E+03 -> NumericLiteral(kind=DOUBLE)
        1.      -> INTEGER "1" (the '.' is left for the statement end)
    """
    for kind, pattern in _NUMERIC_PATTERNS:
        match = cursor.match(pattern)
        if match is not None:
            end = cursor.at(match.end())
            literal = NumericLiteral.from_raw(match.group(0), kind, Span(cursor.pos, end.pos))
            return ParseResult(literal, end)
    return None
