"""Error types for the SDL parser.

``MissingTerminator`` and ``MissingSeparator`` are fatal: they abort the
whole parse and no partial document is returned.  ``UnrecognizedText`` is
not raised; the parser records one per unrecognized source line on the
resulting ``Document`` and keeps going.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from gqlsdl.grammar.keywords import EntityKind
from gqlsdl.scanner.scanner import location

# Longest offending text echoed back in an error message.
_MAX_SNIPPET = 60

ErrorSubject = Union[EntityKind, str]


def _subject_label(kind: ErrorSubject) -> str:
    if isinstance(kind, EntityKind):
        return kind.name.lower()
    return kind


class SdlSyntaxError(Exception):
    """A fatal syntax error found while parsing an SDL source.

    Parameters
    ----------
    reason:
        Human-readable description of what was expected.
    kind:
        The entity kind being parsed, or ``"comment"``.
    text:
        The offending source text.
    offset:
        0-based offset of ``text`` within the full source.
    source:
        The full source, used to compute ``line`` and ``col``.
    """

    def __init__(
        self,
        reason: str,
        kind: ErrorSubject,
        text: str,
        offset: int,
        source: str = "",
    ) -> None:
        self.reason = reason
        self.kind = kind
        self.text = text
        self.offset = offset
        self.line, self.col = location(source, offset) if source else (0, 0)
        super().__init__(str(self))

    @property
    def snippet(self) -> str:
        """``text`` truncated for display."""
        flat = " ".join(self.text.split())
        if len(flat) > _MAX_SNIPPET:
            return flat[: _MAX_SNIPPET - 3] + "..."
        return flat

    def __str__(self) -> str:
        return (
            f"{type(self).__name__} at {self.line}:{self.col}: "
            f"{self.reason} for {_subject_label(self.kind)} (in {self.snippet!r})"
        )


class MissingTerminator(SdlSyntaxError):
    """An expected ``{``, ``}``, ``)`` or closing comment delimiter was not found."""


class MissingSeparator(SdlSyntaxError):
    """An expected ``:`` between a name and its type was not found."""


@dataclass(frozen=True)
class UnrecognizedText:
    """A source line that matched no declaration and went to misc text."""

    text: str
    offset: int
    line: int
    col: int

    def __str__(self) -> str:
        return f"Unrecognized text at {self.line}:{self.col}: {self.text!r}"
