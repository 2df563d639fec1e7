"""SDL parser module.

Exports the ``Parser`` class, the ``parse`` convenience function, and
the parse error types.
"""
from __future__ import annotations

from gqlsdl.parser.errors import (
    MissingSeparator,
    MissingTerminator,
    SdlSyntaxError,
    UnrecognizedText,
)
from gqlsdl.parser.parser import Parser, parse

__all__ = [
    "Parser",
    "parse",
    "SdlSyntaxError",
    "MissingTerminator",
    "MissingSeparator",
    "UnrecognizedText",
]
