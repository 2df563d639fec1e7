"""SDL text rendering for parsed documents.

``SdlFormatter`` turns a ``Document`` (usually after comments were
rewritten or members removed) back into SDL source.  It is not a
pretty-printer: names, return types and parameter lists are written
exactly as they were captured, so the output keeps the shape of the
original text.

Layout rules:

- a comment, when present, is written between triple quotes on the
  line(s) before its entity;
- ``type``, ``input`` and ``enum`` bodies put one member per record,
  indented, with a blank line between records;
- top-level declarations are separated by one blank line;
- misc text is written first, followed by a blank line.

Usage
-----
::

    from gqlsdl.formatter import SdlFormatter, FormatOptions
    from gqlsdl.parser import parse

    document = parse(source)
    text = SdlFormatter(FormatOptions(indent_size=4)).format(document)
"""
from __future__ import annotations

from dataclasses import dataclass

from gqlsdl.grammar.keywords import COMMENT_DELIMITER, DEFAULT_INDENT_CHAR, DEFAULT_INDENT_SIZE
from gqlsdl.model.nodes import (
    Directive,
    Document,
    Entity,
    Enum,
    EnumValue,
    Field,
    Param,
    Scalar,
    Schema,
    Struct,
)


@dataclass(frozen=True)
class FormatOptions:
    """Indentation used for members inside declaration bodies.

    Parameters
    ----------
    indent_size:
        How many times ``indent_char`` is repeated.  Must be positive.
    indent_char:
        A single indentation character.
    """

    indent_size: int = DEFAULT_INDENT_SIZE
    indent_char: str = DEFAULT_INDENT_CHAR

    def __post_init__(self) -> None:
        if self.indent_size <= 0:
            raise ValueError(f"indent_size must be positive, got {self.indent_size}")
        if len(self.indent_char) != 1:
            raise ValueError(f"indent_char must be a single character, got {self.indent_char!r}")

    @property
    def indent(self) -> str:
        return self.indent_char * self.indent_size


class SdlFormatter:
    """Renders documents and single entities as SDL text."""

    def __init__(self, options: FormatOptions | None = None) -> None:
        self._options = options or FormatOptions()

    @property
    def options(self) -> FormatOptions:
        return self._options

    def format(self, document: Document) -> str:
        """Render ``document``; the result ends with a newline unless empty."""
        body = "\n\n".join(self.format_entity(entity) for entity in document.entities)
        if document.misc.strip():
            misc = document.misc if document.misc.endswith("\n") else document.misc + "\n"
            body = misc + "\n" + body if body else misc.rstrip("\n")
        return body + "\n" if body else ""

    def format_entity(self, entity: Entity) -> str:
        """Render a single declaration or member."""
        indent = self._options.indent
        if isinstance(entity, (Scalar, Directive)):
            return self._comment(entity.comment) + f"{entity.kind.keyword.value} {entity.name}"
        if isinstance(entity, Schema):
            return self._comment(entity.comment) + f"schema {entity.name}"
        if isinstance(entity, Struct):
            fields = "\n\n".join(self.format_entity(f) for f in entity.fields)
            return self._comment(entity.comment) + f"{entity.kind.keyword.value} {entity.name} {{\n{fields}\n}}"
        if isinstance(entity, Enum):
            values = "\n\n".join(self.format_entity(v) for v in entity.values)
            return self._comment(entity.comment) + f"enum {entity.name} {{\n{values}\n}}"
        if isinstance(entity, Field):
            params = f"({entity.params_text})" if entity.params_text is not None and entity.params else ""
            return self._comment(entity.comment, indent) + f"{indent}{entity.name}{params}: {entity.return_type}"
        if isinstance(entity, EnumValue):
            return self._comment(entity.comment, indent) + f"{indent}{entity.name}"
        if isinstance(entity, Param):
            return self._comment(entity.comment) + f"{entity.name}: {entity.type}"
        raise TypeError(f"Unknown entity type: {type(entity)}")

    def _comment(self, comment: str | None, indent: str = "") -> str:
        if comment is None:
            return ""
        return f"{indent}{COMMENT_DELIMITER}{comment}{COMMENT_DELIMITER}\n"


def format_document(document: Document, options: FormatOptions | None = None) -> str:
    """Render ``document`` as SDL text.

    Parameters
    ----------
    document:
        The parsed (and possibly mutated) document.
    options:
        Indentation settings; defaults to two spaces.
    """
    return SdlFormatter(options).format(document)


def format_entity(entity: Entity, options: FormatOptions | None = None) -> str:
    """Render a single entity as SDL text."""
    return SdlFormatter(options).format_entity(entity)
