"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This solves EM101/EM102 violations while providing:
        - Testable error messages
        - Consistent formatting
        - Documentation of all error cases
    """

    # =========================================================================
    # LEXICAL ERRORS (3000-3099)
    # =========================================================================

    @staticmethod
    def unexpected_eof(expected: tuple[str, ...], span: SourceSpan | None = None) -> Diagnostic:
        """Input ended in the middle of a statement.

        Args:
            expected: Token categories that could have followed
            span: Location of the end of input

        Returns:
            Diagnostic for UNEXPECTED_EOF
        """
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_EOF,
            message="Unexpected end of input",
            span=span,
            hint="Every statement must be complete and triples must end with '.'",
            expected=expected,
        )

    @staticmethod
    def unterminated_iri(span: SourceSpan | None = None) -> Diagnostic:
        """IRI reference opened with '<' but never closed.

        Args:
            span: Location of the opening '<'

        Returns:
            Diagnostic for UNTERMINATED_IRI
        """
        return Diagnostic(
            code=DiagnosticCode.UNTERMINATED_IRI,
            message="IRI reference is not closed with '>'",
            span=span,
            hint="Add the closing '>' or escape the offending character as \\uXXXX",
            expected=("'>'",),
        )

    @staticmethod
    def invalid_iri_character(char: str, span: SourceSpan | None = None) -> Diagnostic:
        """Character that may not appear raw inside <...>.

        Args:
            char: The offending character
            span: Location of the character

        Returns:
            Diagnostic for INVALID_IRI_CHARACTER
        """
        msg = f"Character {char!r} is not allowed in an IRI reference"
        return Diagnostic(
            code=DiagnosticCode.INVALID_IRI_CHARACTER,
            message=msg,
            span=span,
            hint="Escape it as \\uXXXX",
            expected=("IRI character", "'>'"),
        )

    @staticmethod
    def unterminated_string(quote: str, span: SourceSpan | None = None) -> Diagnostic:
        """String literal opened but never closed.

        Args:
            quote: The opening delimiter (", ', \"\"\" or ''')
            span: Location of the opening delimiter

        Returns:
            Diagnostic for UNTERMINATED_STRING
        """
        msg = f"String literal opened with {quote} is not closed"
        hint = (
            "Close the string; use a long string (\"\"\"...\"\"\") for line breaks"
            if len(quote) == 1
            else "Close the string"
        )
        return Diagnostic(
            code=DiagnosticCode.UNTERMINATED_STRING,
            message=msg,
            span=span,
            hint=hint,
            expected=(repr(quote),),
        )

    @staticmethod
    def invalid_escape(sequence: str, span: SourceSpan | None = None) -> Diagnostic:
        """Backslash escape that is not valid in its context.

        Args:
            sequence: The escape as written (e.g. "\\q")
            span: Location of the backslash

        Returns:
            Diagnostic for INVALID_ESCAPE
        """
        msg = f"Invalid escape sequence {sequence!r}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_ESCAPE,
            message=msg,
            span=span,
            hint="Valid escapes are \\t \\b \\n \\r \\f \\\" \\' \\\\ \\uXXXX \\UXXXXXXXX",
            expected=("escape sequence",),
        )

    @staticmethod
    def invalid_code_point(hex_digits: str, span: SourceSpan | None = None) -> Diagnostic:
        """Numeric escape denoting a surrogate or a value above U+10FFFF.

        Args:
            hex_digits: The hex digits of the escape
            span: Location of the backslash

        Returns:
            Diagnostic for INVALID_CODE_POINT
        """
        msg = f"Escape U+{hex_digits.upper()} is not a Unicode scalar value"
        return Diagnostic(
            code=DiagnosticCode.INVALID_CODE_POINT,
            message=msg,
            span=span,
            hint="Surrogates and code points above U+10FFFF cannot be encoded",
        )

    @staticmethod
    def invalid_language_tag(span: SourceSpan | None = None) -> Diagnostic:
        """'@' after a string not followed by a language tag.

        Args:
            span: Location of the '@'

        Returns:
            Diagnostic for INVALID_LANGUAGE_TAG
        """
        return Diagnostic(
            code=DiagnosticCode.INVALID_LANGUAGE_TAG,
            message="Expected a language tag after '@'",
            span=span,
            hint="Language tags look like @en or @en-GB",
            expected=("language tag",),
        )

    @staticmethod
    def invalid_blank_node_label(span: SourceSpan | None = None) -> Diagnostic:
        """'_:' not followed by a valid label.

        Args:
            span: Location of '_:'

        Returns:
            Diagnostic for INVALID_BLANK_NODE_LABEL
        """
        return Diagnostic(
            code=DiagnosticCode.INVALID_BLANK_NODE_LABEL,
            message="Expected a blank node label after '_:'",
            span=span,
            expected=("blank node label",),
        )

    # =========================================================================
    # GRAMMAR ERRORS (3100-3199)
    # =========================================================================

    @staticmethod
    def unexpected_token(
        found: str, expected: tuple[str, ...], span: SourceSpan | None = None
    ) -> Diagnostic:
        """A token that cannot appear at this point of the grammar.

        Args:
            found: Short excerpt of the offending input
            expected: Token categories that would have been accepted
            span: Location of the offending input

        Returns:
            Diagnostic for UNEXPECTED_TOKEN
        """
        msg = f"Unexpected {found!r}, expected {' or '.join(expected)}"
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_TOKEN,
            message=msg,
            span=span,
            expected=expected,
        )

    @staticmethod
    def nesting_depth_exceeded(max_depth: int, span: SourceSpan | None = None) -> Diagnostic:
        """Collections/property lists nested beyond the configured limit.

        Args:
            max_depth: Configured maximum nesting depth
            span: Location of the opening bracket that exceeded the limit

        Returns:
            Diagnostic for NESTING_DEPTH_EXCEEDED
        """
        msg = f"Nesting depth exceeds the maximum of {max_depth}"
        return Diagnostic(
            code=DiagnosticCode.NESTING_DEPTH_EXCEEDED,
            message=msg,
            span=span,
            hint="Flatten deeply nested collections or blank node property lists",
        )

    # =========================================================================
    # DRIVER ERRORS (6000-6099)
    # =========================================================================

    @staticmethod
    def path_not_found(path: str) -> Diagnostic:
        """Command-line target does not exist.

        Args:
            path: The path as given on the command line

        Returns:
            Diagnostic for PATH_NOT_FOUND
        """
        msg = f"The target to format {path} does not seem to exist"
        return Diagnostic(code=DiagnosticCode.PATH_NOT_FOUND, message=msg, path=path)

    @staticmethod
    def read_failed(path: str, cause: str) -> Diagnostic:
        """File could not be read or written.

        Args:
            path: The file path
            cause: Text of the underlying OSError / UnicodeDecodeError

        Returns:
            Diagnostic for READ_FAILED
        """
        msg = f"Error while accessing {path}: {cause}"
        return Diagnostic(code=DiagnosticCode.READ_FAILED, message=msg, path=path)

    @staticmethod
    def not_canonical(path: str) -> Diagnostic:
        """Check mode found a file that would be reformatted.

        Args:
            path: The file path

        Returns:
            Diagnostic for NOT_CANONICAL
        """
        msg = f"The format of {path} is not correct"
        return Diagnostic(
            code=DiagnosticCode.NOT_CANONICAL,
            message=msg,
            path=path,
            hint="Run without --check to rewrite the file",
            severity="warning",
        )
