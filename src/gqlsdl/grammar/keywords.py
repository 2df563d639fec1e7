"""Keyword vocabulary for the schema definition language.

Defines the six top-level declaration keywords recognised by the parser,
the closed set of entity variant tags, and the textual constants shared
by the scanner, parser and formatter.
"""
from __future__ import annotations

from enum import Enum, auto
from typing import Final

COMMENT_DELIMITER: Final[str] = '"""'

DEFAULT_INDENT_SIZE: Final[int] = 2
DEFAULT_INDENT_CHAR: Final[str] = " "


class Keyword(Enum):
    """Top-level declaration keywords.

    Member order is the dispatch precedence used by the parser when
    matching a keyword prefix at the cursor.
    """

    SCALAR = "scalar"
    ENUM = "enum"
    INPUT = "input"
    TYPE = "type"
    DIRECTIVE = "directive"
    SCHEMA = "schema"

    def __str__(self) -> str:
        return self.value

    @property
    def is_brace_bodied(self) -> bool:
        """Return True for declarations whose body is delimited by braces."""
        return self in _BRACE_BODIED


_BRACE_BODIED: Final[frozenset[Keyword]] = frozenset(
    {Keyword.ENUM, Keyword.INPUT, Keyword.TYPE, Keyword.SCHEMA}
)


class EntityKind(Enum):
    """Variant tag carried by every entity in the model."""

    SCALAR = auto()
    DIRECTIVE = auto()
    SCHEMA = auto()
    ENUM = auto()
    INPUT = auto()
    TYPE = auto()
    FIELD = auto()
    PARAM = auto()
    ENUM_VALUE = auto()

    @property
    def keyword(self) -> Keyword | None:
        """Return the declaration keyword, or ``None`` for members."""
        return _KIND_KEYWORDS.get(self)

    @property
    def is_member(self) -> bool:
        """Return True for Field, Param and EnumValue."""
        return self.keyword is None


_KIND_KEYWORDS: Final[dict[EntityKind, Keyword]] = {
    EntityKind.SCALAR: Keyword.SCALAR,
    EntityKind.DIRECTIVE: Keyword.DIRECTIVE,
    EntityKind.SCHEMA: Keyword.SCHEMA,
    EntityKind.ENUM: Keyword.ENUM,
    EntityKind.INPUT: Keyword.INPUT,
    EntityKind.TYPE: Keyword.TYPE,
}


def match_keyword(text: str, pos: int) -> Keyword | None:
    """Return the keyword that ``text`` starts with at ``pos``, if any."""
    for keyword in Keyword:
        if text.startswith(keyword.value, pos):
            return keyword
    return None
