"""turtlefmt - canonical formatter for RDF Turtle documents.

Parses a Turtle document, keeps its comments, and prints it back in one
canonical layout: normalized literals and IRIs, `a` for rdf:type,
'@prefix'/'@base' directives, one predicate group per line. Formatting
is idempotent and never changes the RDF graph the document denotes.

Public API:
    format_turtle - Format Turtle text to its canonical form
    parse_turtle - Parse Turtle text to a SyntaxTree
    reconcile - Compare original and canonical text (Identical/Patch/Rewrite)
    FormatOptions - Indentation and input limits
    Mode - CHECK or WRITE

Exceptions:
    TurtleError - Base exception class
    TurtleSyntaxError - Parse errors (line, column, byte offset, expected set)
    NestingDepthError - Nesting deeper than max_nesting_depth

Submodules:
    turtlefmt.syntax.ast - Syntax tree node types
    turtlefmt.syntax.normalize - Canonical spellings of terms
    turtlefmt.diagnostics - Diagnostics and error formatting
    turtlefmt.cli - Command-line driver
"""

from .config import FormatOptions
from .diagnostics import NestingDepthError, TurtleError, TurtleSyntaxError
from .diff import Identical, Patch, Rewrite, reconcile
from .enums import Mode
from .syntax import TurtleParser, TurtlePrinter
from .syntax import parse as parse_turtle

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
try:
    from importlib.metadata import PackageNotFoundError
    from importlib.metadata import version as _get_version
except ImportError as e:
    raise RuntimeError("importlib.metadata unavailable - Python version too old? " + str(e)) from e

try:
    __version__ = _get_version("turtlefmt")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

# RDF 1.1 Turtle, W3C Recommendation 25 February 2014
__turtle_spec_url__ = "https://www.w3.org/TR/turtle/"

__recommended_encoding__ = "UTF-8"


def format_turtle(text: str, options: FormatOptions | None = None) -> str:
    """Format Turtle text to its canonical form.

    Args:
        text: Turtle document
        options: Layout and limits (default: FormatOptions())

    Returns:
        Canonical text ending with exactly one newline

    Raises:
        TurtleSyntaxError: If text is not valid Turtle
        ValueError: If text exceeds options.max_source_size

    Example:
        >>> format_turtle("PREFIX ex: <http://example.com/>\\nex:s ex:p +01 .")
        '@prefix ex: <http://example.com/> .\\nex:s ex:p +1 .\\n'
    """
    options = options if options is not None else FormatOptions()
    parser = TurtleParser(
        max_source_size=options.max_source_size,
        max_nesting_depth=options.max_nesting_depth,
    )
    return TurtlePrinter(options).print(parser.parse(text))


__all__ = [
    "FormatOptions",
    "Identical",
    "Mode",
    "NestingDepthError",
    "Patch",
    "Rewrite",
    "TurtleError",
    "TurtleSyntaxError",
    "__recommended_encoding__",
    "__turtle_spec_url__",
    "__version__",
    "format_turtle",
    "parse_turtle",
    "reconcile",
]
