"""SDL grammar constants.

Exports the ``Keyword`` and ``EntityKind`` enums, ``match_keyword`` and the
shared textual constants.
"""
from __future__ import annotations

from gqlsdl.grammar.keywords import (
    COMMENT_DELIMITER,
    DEFAULT_INDENT_CHAR,
    DEFAULT_INDENT_SIZE,
    EntityKind,
    Keyword,
    match_keyword,
)

__all__ = [
    "COMMENT_DELIMITER",
    "DEFAULT_INDENT_CHAR",
    "DEFAULT_INDENT_SIZE",
    "EntityKind",
    "Keyword",
    "match_keyword",
]
