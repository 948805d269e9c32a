"""Shared constants for turtlefmt.

This module provides centralized configuration constants used across
the syntax, printing and driver layers. Placing constants here avoids
circular imports and provides a single source of truth.

Constants are grouped by domain:
- Vocabulary: IRIs the formatter treats specially
- Layout: Defaults for the canonical printer
- Input limits: source size and nesting depth

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Vocabulary
    "RDF_NS",
    "RDF_TYPE_IRI",
    "XSD_NS",
    "XSD_SHORTHAND_TYPES",
    # Layout
    "DEFAULT_INDENTATION",
    # Input limits
    "MAX_DEPTH",
    "MAX_SOURCE_SIZE",
    # Driver
    "TURTLE_SUFFIX",
    "EXIT_CHECK_FAILED",
    "EXIT_ERROR",
]

# ============================================================================
# VOCABULARY
# ============================================================================

RDF_NS: str = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"

# The only IRI the printer rewrites to the `a` keyword (predicate position only).
RDF_TYPE_IRI: str = f"{RDF_NS}type"

XSD_NS: str = "http://www.w3.org/2001/XMLSchema#"

# Datatypes whose literals have a bare-token spelling: 1, 1.5, 1e0, true.
XSD_SHORTHAND_TYPES: frozenset[str] = frozenset(
    f"{XSD_NS}{name}" for name in ("integer", "decimal", "double", "boolean")
)

# ============================================================================
# LAYOUT
# ============================================================================

# Spaces per nesting level (subject block, property list, collection).
DEFAULT_INDENTATION: int = 4

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Maximum nesting of collections and blank-node property lists.
# Both the parser and the printer recurse once per level, so this also
# bounds Python stack usage. Clamped against sys.getrecursionlimit().
MAX_DEPTH: int = 100

# Maximum source size in characters (10 MB).
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

# ============================================================================
# DRIVER
# ============================================================================

TURTLE_SUFFIX: str = ".ttl"

# EX_DATAERR from sysexits.h: at least one file is not canonically formatted.
EXIT_CHECK_FAILED: int = 65

# A file could not be read or parsed, or a path does not exist.
EXIT_ERROR: int = 1
