"""Entity model for parsed SDL documents.

The model is a closed set of variants: the six top-level declarations
(``Scalar``, ``Directive``, ``Schema``, ``Enum``, ``Input``, ``Type``) and
the three member kinds (``Field``, ``Param``, ``EnumValue``).  Every
variant carries a ``name``, an optional ``comment`` and a class-level
``kind`` tag; downstream code dispatches with ``isinstance`` checks.

Identity is an explicit composite value exposed as ``key``.  Equality and
hashing are defined on that key only, so entities stay hashable even
though their ``comment`` and member lists may be mutated after parsing.

Members hold a non-owning ``parent`` back-reference that takes part in
their identity: two fields named ``id`` in two different types are two
different entities.  Enum values are the exception and are identified by
name alone.
"""
from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from functools import cached_property
from typing import TYPE_CHECKING, ClassVar, Union

from gqlsdl.grammar.keywords import EntityKind

if TYPE_CHECKING:
    from gqlsdl.parser.errors import UnrecognizedText

logger = logging.getLogger(__name__)

Key = tuple[object, ...]


def alpha_prefix(name: str) -> str:
    """Return the maximal alphanumeric prefix of ``name``."""
    end = 0
    while end < len(name) and name[end].isalnum():
        end += 1
    return name[:end]


def _partition(items: list, predicate: Callable) -> tuple[list, list]:
    kept: list = []
    removed: list = []
    for item in items:
        (removed if predicate(item) else kept).append(item)
    return kept, removed


class _Entity:
    """Behaviour shared by every variant: identity, alpha-name, comment."""

    kind: ClassVar[EntityKind]
    name: str
    comment: str | None

    @property
    def key(self) -> Key:
        """Composite identity value."""
        return (self.kind, self.name)

    @cached_property
    def alpha_name(self) -> str:
        """Alphanumeric prefix of ``name``, computed once."""
        return alpha_prefix(self.name)

    def set_comment(self, comment: str | None) -> None:
        """Replace the comment; blank text clears it."""
        if comment is not None and not comment.strip():
            comment = None
        self.comment = comment

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, _Entity):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)


# ---------------------------------------------------------------------------
# Leaf declarations
# ---------------------------------------------------------------------------


@dataclass(eq=False)
class Scalar(_Entity):
    """A ``scalar`` declaration; ``name`` is the rest of its line."""

    kind: ClassVar[EntityKind] = EntityKind.SCALAR

    name: str
    comment: str | None = None


@dataclass(eq=False)
class Directive(_Entity):
    """A ``directive`` declaration; ``name`` is the rest of its line."""

    kind: ClassVar[EntityKind] = EntityKind.DIRECTIVE

    name: str
    comment: str | None = None


@dataclass(eq=False)
class Schema(_Entity):
    """A ``schema`` declaration.

    Its internal grammar is not modelled: ``name`` holds the whole brace
    body, braces included, verbatim.
    """

    kind: ClassVar[EntityKind] = EntityKind.SCHEMA

    name: str
    comment: str | None = None


# ---------------------------------------------------------------------------
# Enum
# ---------------------------------------------------------------------------


@dataclass(eq=False)
class EnumValue(_Entity):
    """A single value inside an ``enum`` body.

    Identity ignores the owning enum: two enums declaring the same value
    name produce equal ``EnumValue`` objects.
    """

    kind: ClassVar[EntityKind] = EntityKind.ENUM_VALUE

    name: str
    comment: str | None = None


@dataclass(eq=False)
class Enum(_Entity):
    """An ``enum`` declaration owning an ordered list of values."""

    kind: ClassVar[EntityKind] = EntityKind.ENUM

    name: str
    comment: str | None = None
    values: list[EnumValue] = field(default_factory=list)

    def remove_values(self, predicate: Callable[[EnumValue], bool]) -> list[EnumValue]:
        """Remove every value matching ``predicate``; return the removed ones."""
        kept, removed = _partition(self.values, predicate)
        self.values[:] = kept
        return removed

    @property
    def value_names(self) -> list[str]:
        """Value names in declaration order."""
        return [v.name for v in self.values]


# ---------------------------------------------------------------------------
# Structs (type / input) and their members
# ---------------------------------------------------------------------------


@dataclass(eq=False)
class Param(_Entity):
    """A parameter of a field.

    Parameters
    ----------
    name:
        Parameter identifier.
    type:
        Raw type text, modifiers and any ``= default`` included.
    parent:
        The field declaring this parameter.
    comment:
        Optional comment body.
    """

    kind: ClassVar[EntityKind] = EntityKind.PARAM

    name: str
    type: str
    parent: "Field" = field(repr=False)
    comment: str | None = None

    @property
    def key(self) -> Key:
        return (self.kind, self.name, self.type, self.parent.key)

    @property
    def clean_type(self) -> str:
        """The bare referenced type name."""
        from gqlsdl.graph.resolver import clean_type

        return clean_type(self.type)


@dataclass(eq=False)
class Field(_Entity):
    """A field of a ``type`` or ``input``.

    Parameters
    ----------
    name:
        Field identifier.
    return_type:
        Raw return type text: modifiers, default value and trailing
        directive annotations are kept as written.
    parent:
        The struct owning this field.
    comment:
        Optional comment body.
    params:
        Parsed parameters, in declaration order.
    params_text:
        The parameter list exactly as written between the parentheses,
        used when rendering.  ``None`` when the field has no parentheses.
    """

    kind: ClassVar[EntityKind] = EntityKind.FIELD

    name: str
    return_type: str
    parent: "Struct" = field(repr=False)
    comment: str | None = None
    params: list[Param] = field(default_factory=list)
    params_text: str | None = None

    @property
    def key(self) -> Key:
        return (self.kind, self.name, self.return_type, self.parent.key)

    @property
    def has_params(self) -> bool:
        """Return True if the field declares at least one parameter."""
        return bool(self.params)

    @property
    def clean_return_type(self) -> str:
        """The bare referenced return type name."""
        from gqlsdl.graph.resolver import clean_type

        return clean_type(self.return_type)


@dataclass(eq=False)
class Struct(_Entity):
    """Shared shape of ``type`` and ``input``: a name and owned fields."""

    kind: ClassVar[EntityKind]

    name: str
    comment: str | None = None
    fields: list[Field] = field(default_factory=list)

    def remove_fields(self, predicate: Callable[[Field], bool]) -> list[Field]:
        """Remove every field matching ``predicate``; return the removed ones."""
        kept, removed = _partition(self.fields, predicate)
        self.fields[:] = kept
        return removed

    def get_field(self, name: str) -> Field | None:
        """Return the first field called ``name``, or ``None``."""
        for f in self.fields:
            if f.name == name:
                return f
        return None

    @property
    def field_names(self) -> list[str]:
        """Field names in declaration order."""
        return [f.name for f in self.fields]


@dataclass(eq=False)
class Type(Struct):
    """A ``type`` declaration."""

    kind: ClassVar[EntityKind] = EntityKind.TYPE


@dataclass(eq=False)
class Input(Struct):
    """An ``input`` declaration."""

    kind: ClassVar[EntityKind] = EntityKind.INPUT


Declaration = Union[Scalar, Directive, Schema, Enum, Input, Type]
Member = Union[Field, Param, EnumValue]
Entity = Union[Declaration, Member]

Graph = dict[Declaration, list[Declaration]]


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------


@dataclass(eq=False)
class Document:
    """The result of parsing one SDL source text.

    Parameters
    ----------
    entities:
        Top-level declarations in source order.
    misc:
        Text that matched no declaration, preserved verbatim.
    unrecognized:
        Non-fatal records for each unrecognized source line.
    """

    entities: list[Declaration] = field(default_factory=list)
    misc: str = ""
    unrecognized: list["UnrecognizedText"] = field(default_factory=list)
    _graph: Graph | None = field(default=None, init=False, repr=False)

    def graph(self) -> Graph:
        """Return the reference graph, computing it on first call.

        Later calls return the cached adjacency list even if the document
        has been mutated since; call ``invalidate_graph`` to recompute.
        """
        if self._graph is None:
            from gqlsdl.graph.resolver import resolve_graph

            self._graph = resolve_graph(self.entities)
            logger.debug("Computed reference graph with %d node(s)", len(self._graph))
        return self._graph

    def invalidate_graph(self) -> None:
        """Drop the cached reference graph."""
        self._graph = None

    def get(self, name: str) -> Declaration | None:
        """Return the declaration whose alpha-name is ``name``, or ``None``."""
        for entity in self.entities:
            if entity.alpha_name == name:
                return entity
        return None

    def remove_entities(self, predicate: Callable[[Declaration], bool]) -> list[Declaration]:
        """Remove every declaration matching ``predicate``; return the removed ones."""
        kept, removed = _partition(self.entities, predicate)
        self.entities[:] = kept
        return removed

    @property
    def structs(self) -> list[Struct]:
        """All ``type`` and ``input`` declarations, in order."""
        return [e for e in self.entities if isinstance(e, Struct)]

    @property
    def enums(self) -> list[Enum]:
        """All ``enum`` declarations, in order."""
        return [e for e in self.entities if isinstance(e, Enum)]

    @property
    def names(self) -> list[str]:
        """Alpha-names of all declarations, in order."""
        return [e.alpha_name for e in self.entities]
