"""SDL declaration parser.

Converts an SDL source string into a ``Document`` in a single forward
pass.  There is no token stream: the parser moves an integer cursor over
the source with the primitives in ``gqlsdl.scanner`` and finds the extent
of each declaration by scanning for braces and line feeds.

Top-level loop
--------------
At every non-whitespace position the parser:

1. reads an optional triple-quote comment, which is attached to the
   declaration that follows it;
2. matches one of the declaration keywords (``scalar``, ``enum``,
   ``input``, ``type``, ``directive``, ``schema``) as a prefix;
3. bounds the declaration: brace-bodied kinds extend to the first ``}``
   after the keyword (the declaration window), line-bodied kinds to the
   end of the line;
4. hands the bounded region to the matching sub-parser.

Anything else is consumed one line at a time into the document's misc
text.

Body boundaries
---------------
Inside its window an ``enum`` or ``input`` looks for the first ``}``
after its opening brace, while a ``type`` or ``schema`` looks for the
last ``}`` in the window.  Both land on the same brace for well-formed
input; the difference only shows on unusual text and is kept as is.
A literal ``}`` inside a comment or default value ends the window early.
"""
from __future__ import annotations

import logging

from gqlsdl.grammar.keywords import EntityKind, Keyword, match_keyword
from gqlsdl.model.nodes import (
    Declaration,
    Directive,
    Document,
    Enum,
    EnumValue,
    Field,
    Input,
    Param,
    Scalar,
    Schema,
    Struct,
    Type,
)
from gqlsdl.parser.errors import (
    ErrorSubject,
    MissingSeparator,
    MissingTerminator,
    UnrecognizedText,
)
from gqlsdl.scanner.scanner import (
    line_end,
    location,
    read_comment,
    skip_to_whitespace,
    skip_whitespace,
    starts_comment,
)

logger = logging.getLogger(__name__)

_STRUCT_CLASSES: dict[Keyword, type[Struct]] = {
    Keyword.TYPE: Type,
    Keyword.INPUT: Input,
}
_LINE_CLASSES: dict[Keyword, type[Scalar] | type[Directive]] = {
    Keyword.SCALAR: Scalar,
    Keyword.DIRECTIVE: Directive,
}
_KEYWORD_KINDS: dict[Keyword, EntityKind] = {
    Keyword.SCALAR: EntityKind.SCALAR,
    Keyword.ENUM: EntityKind.ENUM,
    Keyword.INPUT: EntityKind.INPUT,
    Keyword.TYPE: EntityKind.TYPE,
    Keyword.DIRECTIVE: EntityKind.DIRECTIVE,
    Keyword.SCHEMA: EntityKind.SCHEMA,
}


class Parser:
    """Single-pass parser producing a ``Document`` from SDL source text.

    Parameters
    ----------
    source:
        The complete SDL source text.  It is never modified.
    """

    def __init__(self, source: str) -> None:
        self._source: str = source
        self._misc: list[str] = []
        self._unrecognized: list[UnrecognizedText] = []

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _line_at(self, pos: int, end: int | None = None) -> str:
        """Return the source text from ``pos`` to the end of its line."""
        return self._source[pos : line_end(self._source, pos, end)]

    def _terminator_error(self, reason: str, kind: ErrorSubject, start: int, end: int) -> MissingTerminator:
        return MissingTerminator(reason, kind, self._source[start:end], start, self._source)

    def _separator_error(self, reason: str, kind: ErrorSubject, start: int, end: int) -> MissingSeparator:
        return MissingSeparator(reason, kind, self._source[start:end], start, self._source)

    def _maybe_comment(self, pos: int, end: int | None = None) -> tuple[str | None, int]:
        """Read a comment at ``pos`` if one starts there.

        Returns the comment body (or ``None``) and the next non-whitespace
        position after it.
        """
        if not starts_comment(self._source, pos):
            return None, pos
        result = read_comment(self._source, pos, end)
        if result is None:
            raise self._terminator_error(
                "closing '\"\"\"' is missing",
                "comment",
                pos,
                line_end(self._source, pos, end),
            )
        body, after = result
        return body, skip_whitespace(self._source, after, end)

    # ------------------------------------------------------------------
    # Top-level parse
    # ------------------------------------------------------------------

    def parse(self) -> Document:
        """Parse the source and return the ``Document``.

        Raises
        ------
        MissingTerminator
            If a brace, parenthesis or comment delimiter is not closed.
        MissingSeparator
            If a field or parameter has no ``:`` before its type.
        """
        src = self._source
        size = len(src)
        document = Document()

        pos = skip_whitespace(src, 0)
        while pos < size:
            comment_start = pos
            comment, pos = self._maybe_comment(pos)

            keyword = match_keyword(src, pos) if pos < size else None
            if keyword is None:
                if comment is not None:
                    self._misc.append(src[comment_start:pos].rstrip() + "\n")
                if pos < size:
                    pos = self._consume_unrecognized(pos)
                pos = skip_whitespace(src, pos)
                continue

            if keyword.is_brace_bodied:
                window_end = src.find("}", pos)
                if window_end == -1:
                    raise self._terminator_error(
                        "'}' is missing", _KEYWORD_KINDS[keyword], pos, size
                    )
                window_end += 1
            else:
                window_end = line_end(src, pos)

            entity = self._parse_declaration(keyword, pos, window_end, comment)
            logger.debug("Parsed %s %r", keyword, entity.name)
            document.entities.append(entity)
            pos = skip_whitespace(src, window_end)

        document.misc = "".join(self._misc)
        document.unrecognized = list(self._unrecognized)
        logger.debug(
            "Parsed %d declaration(s), %d unrecognized line(s)",
            len(document.entities),
            len(document.unrecognized),
        )
        return document

    def _consume_unrecognized(self, pos: int) -> int:
        """Move the line at ``pos`` into misc text; return the next position."""
        eol = line_end(self._source, pos)
        text = self._source[pos:eol]
        self._misc.append(text + "\n")
        if not text.startswith("#"):
            line, col = location(self._source, pos)
            record = UnrecognizedText(text=text, offset=pos, line=line, col=col)
            self._unrecognized.append(record)
            logger.warning("%s; it will be kept as misc text", record)
        return eol + 1

    def _parse_declaration(
        self, keyword: Keyword, start: int, end: int, comment: str | None
    ) -> Declaration:
        header_start = start + len(keyword.value)
        if keyword in _LINE_CLASSES:
            name = self._source[header_start:end].strip()
            return _LINE_CLASSES[keyword](name=name, comment=comment)
        if keyword is Keyword.SCHEMA:
            return self._parse_schema(start, header_start, end, comment)
        if keyword is Keyword.ENUM:
            return self._parse_enum(start, header_start, end, comment)
        return self._parse_struct(keyword, start, header_start, end, comment)

    # ------------------------------------------------------------------
    # Brace-bodied declarations
    # ------------------------------------------------------------------

    def _find_open_brace(self, kind: EntityKind, start: int, header_start: int, end: int) -> int:
        open_brace = self._source.find("{", header_start, end)
        if open_brace == -1:
            raise self._terminator_error("'{' is missing", kind, start, end)
        return open_brace

    def _has_open_brace(self, start: int, end: int) -> bool:
        """Return True if a ``{`` occurs in ``[start, end)`` outside comments."""
        src = self._source
        pos = start
        while pos < end:
            if starts_comment(src, pos):
                result = read_comment(src, pos, end)
                if result is None:
                    return False
                pos = result[1]
                continue
            if src[pos] == "{":
                return True
            pos += 1
        return False

    def _check_close(self, kind: EntityKind, start: int, open_brace: int, close: int, end: int) -> None:
        """Reject a body with no ``}`` of its own.

        A second ``{`` before the closing brace means the window ran into
        the next declaration's body.  Braces inside comments do not count.
        """
        if close == -1 or self._has_open_brace(open_brace + 1, close):
            raise self._terminator_error("'}' is missing", kind, start, end)

    def _parse_schema(
        self, start: int, header_start: int, end: int, comment: str | None
    ) -> Schema:
        """Parse ``schema { ... }`` keeping the braced body as the name."""
        body_start = skip_whitespace(self._source, header_start, end)
        open_brace = self._find_open_brace(EntityKind.SCHEMA, start, header_start, end)
        close = self._source.rfind("}", open_brace + 1, end)
        self._check_close(EntityKind.SCHEMA, start, open_brace, close, end)
        return Schema(name=self._source[body_start : close + 1], comment=comment)

    def _parse_struct(
        self,
        keyword: Keyword,
        start: int,
        header_start: int,
        end: int,
        comment: str | None,
    ) -> Struct:
        """Parse ``type NAME { fields }`` or ``input NAME { fields }``."""
        cls = _STRUCT_CLASSES[keyword]
        open_brace = self._find_open_brace(cls.kind, start, header_start, end)
        name = self._source[header_start:open_brace].strip()

        if keyword is Keyword.TYPE:
            close = self._source.rfind("}", open_brace + 1, end)
        else:
            close = self._source.find("}", open_brace + 1, end)
        self._check_close(cls.kind, start, open_brace, close, end)

        struct = cls(name=name, comment=comment)
        self._parse_fields(struct, open_brace + 1, close)
        return struct

    def _parse_enum(
        self, start: int, header_start: int, end: int, comment: str | None
    ) -> Enum:
        """Parse ``enum NAME { VALUE ... }``."""
        open_brace = self._find_open_brace(EntityKind.ENUM, start, header_start, end)
        name = self._source[header_start:open_brace].strip()
        close = self._source.find("}", open_brace + 1, end)
        self._check_close(EntityKind.ENUM, start, open_brace, close, end)

        enum = Enum(name=name, comment=comment)
        self._parse_enum_values(enum, open_brace + 1, close)
        return enum

    # ------------------------------------------------------------------
    # Body sub-parsers
    # ------------------------------------------------------------------

    def _parse_enum_values(self, enum: Enum, start: int, end: int) -> None:
        """Read ``[comment] VALUE [@directive ...]`` records until ``end``.

        Values are separated by whitespace or commas.  A directive
        annotation on the same line stays part of the value's raw name.
        """
        src = self._source
        pos = start
        while (pos := skip_whitespace(src, pos, end)) < end:
            if src[pos] == ",":
                pos += 1
                continue
            comment, pos = self._maybe_comment(pos, end)
            if pos >= end:
                logger.warning("Dropping trailing comment in enum %r with no value after it", enum.name)
                break

            name_end = skip_to_whitespace(src, pos, end, stops=",")
            eol = line_end(src, pos, end)
            look = name_end
            while look < eol and src[look] in " \t":
                look += 1
            if look < eol and src[look] == "@":
                name_end = eol

            enum.values.append(EnumValue(name=src[pos:name_end].strip(), comment=comment))
            pos = name_end

    def _parse_fields(self, struct: Struct, start: int, end: int) -> None:
        """Read ``[comment] name[(params)]: returnType`` records until ``end``."""
        src = self._source
        pos = start
        while (pos := skip_whitespace(src, pos, end)) < end:
            comment, pos = self._maybe_comment(pos, end)
            if pos >= end:
                logger.warning("Dropping trailing comment in %r with no field after it", struct.name)
                break

            sep = pos
            while sep < end and src[sep] not in "(:":
                sep += 1
            if sep >= end:
                raise self._separator_error(
                    "':' is missing", EntityKind.FIELD, pos, line_end(src, pos, end)
                )
            name = src[pos:sep].strip()

            params_span: tuple[int, int] | None = None
            if src[sep] == "(":
                close = src.find(")", sep + 1, end)
                if close == -1:
                    raise self._terminator_error(
                        "')' is missing", EntityKind.FIELD, pos, line_end(src, pos, end)
                    )
                params_span = (sep + 1, close)
                sep = src.find(":", close + 1, end)
                if sep == -1:
                    raise self._separator_error(
                        "':' is missing", EntityKind.FIELD, pos, line_end(src, close, end)
                    )

            type_end = line_end(src, sep + 1, end)
            field = Field(
                name=name,
                return_type=src[sep + 1 : type_end].strip(),
                parent=struct,
                comment=comment,
            )
            if params_span is not None:
                field.params_text = src[params_span[0] : params_span[1]]
                field.params = self._parse_params(field, *params_span)
            struct.fields.append(field)
            pos = type_end + 1

    def _parse_params(self, field: Field, start: int, end: int) -> list[Param]:
        """Read ``[comment] name: Type [= default]`` records until ``end``."""
        src = self._source
        params: list[Param] = []
        pos = start
        while (pos := skip_whitespace(src, pos, end)) < end:
            if src[pos] == ",":
                pos += 1
                continue
            comment, pos = self._maybe_comment(pos, end)
            if pos >= end:
                break

            colon = src.find(":", pos, end)
            if colon == -1:
                raise self._separator_error("':' is missing", EntityKind.PARAM, pos, end)
            name = src[pos:colon].strip()

            type_start = skip_whitespace(src, colon + 1, end)
            type_end = skip_to_whitespace(src, type_start, end, stops=",")
            param_type = src[type_start:type_end]
            pos = type_end

            look = skip_whitespace(src, pos, end)
            if look < end and src[look] == "=":
                default_start = skip_whitespace(src, look + 1, end)
                default_end = self._default_end(default_start, line_end(src, default_start, end))
                param_type = f"{param_type} = {src[default_start:default_end].strip()}"
                pos = default_end

            params.append(Param(name=name, type=param_type, parent=field, comment=comment))
        return params

    def _default_end(self, start: int, end: int) -> int:
        """Return where a default literal starting at ``start`` ends.

        The literal runs to the first comma outside ``[...]`` list
        brackets, or to ``end``.
        """
        depth = 0
        for pos in range(start, end):
            char = self._source[pos]
            if char == "[":
                depth += 1
            elif char == "]" and depth > 0:
                depth -= 1
            elif char == "," and depth == 0:
                return pos
        return end


def parse(source: str) -> Document:
    """Parse SDL ``source`` and return its ``Document``.

    Raises
    ------
    MissingTerminator
        If a brace, parenthesis or comment delimiter is not closed.
    MissingSeparator
        If a field or parameter has no ``:`` before its type.
    """
    return Parser(source).parse()
