"""Turtle parser package.

Public API:
    TurtleParser - Main parser class
    ParseContext - Parse-time state (depth, token and comment sinks)
"""

from turtlefmt.syntax.parser.core import TurtleParser
from turtlefmt.syntax.parser.rules import ParseContext

__all__ = ["ParseContext", "TurtleParser"]
