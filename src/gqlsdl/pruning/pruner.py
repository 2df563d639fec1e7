"""Comment-pattern pruning of parsed documents.

A declaration, field or enum value survives pruning only when its comment
carries a *keep pattern* such as ``@Keep``.  When second patterns are
configured, one of them must also appear on the same line, after the
keep pattern (``@Keep public``).  The keep-pattern line is then removed
from every surviving comment so the rewritten SDL does not leak the
markers.

Scalars, directives, schemas and the ``Query`` and ``Mutation`` types are
always kept: a keep marker is prepended to their comment before the
filter runs, and is removed again with the other markers.

The document is modified in place; the returned ``PruneReport`` lists
what was removed.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from gqlsdl.model.nodes import (
    Declaration,
    Directive,
    Document,
    Enum,
    EnumValue,
    Field,
    Scalar,
    Schema,
    Struct,
    Type,
)
from gqlsdl.scanner.scanner import line_end

logger = logging.getLogger(__name__)

ALWAYS_KEPT_TYPES: frozenset[str] = frozenset({"Query", "Mutation"})


@dataclass(frozen=True)
class KeepRules:
    """Patterns deciding which commented entities survive pruning.

    Parameters
    ----------
    keep_patterns:
        At least one of these must occur in a comment for its entity to
        be kept.  Must not be empty.
    second_keep_patterns:
        When non-empty, one of these must also occur on the same line as
        the first keep-pattern match, after it.
    """

    keep_patterns: tuple[str, ...]
    second_keep_patterns: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.keep_patterns:
            raise ValueError("at least one keep pattern is required")
        if any(not p for p in (*self.keep_patterns, *self.second_keep_patterns)):
            raise ValueError("keep patterns must be non-empty strings")

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "KeepRules":
        """Build rules from already-loaded configuration data.

        Accepts ``keepPatterns`` / ``secondKeepPatterns`` keys, or their
        snake_case spellings.
        """
        keep = data.get("keepPatterns", data.get("keep_patterns")) or []
        second = data.get("secondKeepPatterns", data.get("second_keep_patterns")) or []
        if not isinstance(keep, Sequence) or isinstance(keep, str):
            raise ValueError("keepPatterns must be a list of strings")
        if not isinstance(second, Sequence) or isinstance(second, str):
            raise ValueError("secondKeepPatterns must be a list of strings")
        return cls(tuple(str(p) for p in keep), tuple(str(p) for p in second))

    @property
    def marker(self) -> str:
        """The comment line that marks an entity as kept."""
        if self.second_keep_patterns:
            return f"{self.keep_patterns[0]} {self.second_keep_patterns[0]}"
        return self.keep_patterns[0]

    def keeps(self, comment: str | None) -> bool:
        """Return True if ``comment`` marks its entity as kept."""
        if comment is None:
            return False
        for pattern in self.keep_patterns:
            idx = comment.find(pattern)
            if idx == -1:
                continue
            if not self.second_keep_patterns:
                return True
            line = comment[idx : line_end(comment, idx + 1)]
            if any(second in line for second in self.second_keep_patterns):
                return True
        return False

    def strip_markers(self, comment: str | None) -> str | None:
        """Remove every line of ``comment`` holding a keep-pattern match."""
        if comment is None:
            return None
        for pattern in self.keep_patterns:
            while (idx := comment.find(pattern)) != -1:
                line_start = comment.rfind("\n", 0, idx) + 1
                next_line = min(line_end(comment, line_start) + 1, len(comment))
                comment = comment[:line_start] + comment[next_line:]
        return comment


@dataclass
class PruneReport:
    """Everything ``prune`` removed from a document."""

    declarations: list[Declaration] = field(default_factory=list)
    fields: list[Field] = field(default_factory=list)
    values: list[EnumValue] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.declarations) + len(self.fields) + len(self.values)


def _always_kept(entity: Declaration) -> bool:
    if isinstance(entity, (Scalar, Directive, Schema)):
        return True
    return isinstance(entity, Type) and entity.alpha_name in ALWAYS_KEPT_TYPES


def prune(document: Document, rules: KeepRules) -> PruneReport:
    """Remove every entity whose comment lacks a keep pattern.

    Parameters
    ----------
    document:
        The document to prune in place.  Its cached reference graph is
        invalidated.
    rules:
        The keep patterns to apply.

    Returns
    -------
    PruneReport
        The removed declarations, fields and enum values.
    """
    report = PruneReport()

    for entity in document.entities:
        if _always_kept(entity):
            existing = entity.comment or ""
            entity.set_comment(f"{rules.marker}\n{existing}")

    report.declarations = document.remove_entities(lambda e: not rules.keeps(e.comment))

    for entity in document.entities:
        entity.set_comment(rules.strip_markers(entity.comment))
        members: list[Field] | list[EnumValue]
        if isinstance(entity, Struct):
            report.fields.extend(entity.remove_fields(lambda f: not rules.keeps(f.comment)))
            members = entity.fields
        elif isinstance(entity, Enum):
            report.values.extend(entity.remove_values(lambda v: not rules.keeps(v.comment)))
            members = entity.values
        else:
            continue
        for member in members:
            member.set_comment(rules.strip_markers(member.comment))

    document.invalidate_graph()
    logger.info(
        "Pruned %d declaration(s), %d field(s), %d enum value(s)",
        len(report.declarations),
        len(report.fields),
        len(report.values),
    )
    return report
