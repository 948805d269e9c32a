"""Diagnostic system for turtlefmt errors.

Provides structured error diagnostics with codes, spans, hints and
expected-token sets. Inspired by Rust compiler diagnostics.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan
from .errors import NestingDepthError, TurtleError, TurtleSyntaxError
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "NestingDepthError",
    "OutputFormat",
    "SourceSpan",
    "TurtleError",
    "TurtleSyntaxError",
]
