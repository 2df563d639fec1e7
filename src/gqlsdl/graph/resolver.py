"""Name-based reference graph over a parsed document.

References are resolved by text only: every field return type and
parameter type is reduced to a bare name with ``clean_type`` and looked
up among the document's declarations by alpha-name.  There is no symbol
table and no type checking; a name that matches nothing simply produces
no edge.
"""
from __future__ import annotations

import hashlib
import logging
from collections.abc import Iterable, Iterator

from gqlsdl.model.nodes import Declaration, Entity, Enum, Graph, Struct
from gqlsdl.scanner.scanner import skip_to_whitespace

logger = logging.getLogger(__name__)

_MODIFIERS = ("!", "[", "]")


def clean_type(raw: str) -> str:
    """Reduce a raw type to the bare name it refers to.

    Drops everything after the first whitespace (directive annotations),
    any ``= default`` assignment, and the ``!``, ``[`` and ``]`` modifiers.

    >>> clean_type("[User!]! @external")
    'User'
    """
    text = raw.strip()
    text = text[: skip_to_whitespace(text, 0)]
    equals = text.find("=")
    if equals > -1:
        text = text[:equals]
    for modifier in _MODIFIERS:
        text = text.replace(modifier, "")
    return text


def resolve_graph(entities: Iterable[Declaration]) -> Graph:
    """Build the adjacency list of named-type references.

    Every declaration gets an entry.  Only ``type`` and ``input``
    declarations have outgoing edges, and only ``type``, ``input`` and
    ``enum`` declarations are edge targets.  Targets are deduplicated and
    kept in order of first reference.
    """
    entities = list(entities)
    graph: Graph = {entity: [] for entity in entities}
    by_name: dict[str, Declaration] = {entity.alpha_name: entity for entity in entities}

    for struct in entities:
        if not isinstance(struct, Struct):
            continue
        targets: dict[Declaration, None] = {}
        for field in struct.fields:
            names = [param.clean_type for param in field.params]
            names.append(field.clean_return_type)
            for name in names:
                target = by_name.get(name)
                if isinstance(target, (Struct, Enum)):
                    targets.setdefault(target, None)
        graph[struct] = list(targets)
        logger.debug(
            "%s %r references %d declaration(s)",
            struct.kind.name.lower(),
            struct.alpha_name,
            len(targets),
        )
    return graph


def iter_edges(graph: Graph) -> Iterator[tuple[Declaration, Declaration]]:
    """Yield every ``(source, target)`` pair of ``graph``."""
    for source, targets in graph.items():
        for target in targets:
            yield source, target


def node_id(entity: Entity) -> str:
    """Return a stable identifier for ``entity``.

    The alpha-name alone is not unique (fields of different types share
    names), so a short digest of the entity's identity key is appended.
    The digest does not depend on the interpreter's hash seed.
    """
    digest = hashlib.blake2s(repr(entity.key).encode("utf-8"), digest_size=4).hexdigest()
    return f"{entity.alpha_name}_{digest}"
