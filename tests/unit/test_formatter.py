"""Unit tests for gqlsdl.formatter.formatter — SdlFormatter and format_document."""
from __future__ import annotations

import pytest

from gqlsdl.formatter import FormatOptions, SdlFormatter, format_document, format_entity
from gqlsdl.model.nodes import Document, Param, Scalar
from gqlsdl.model.serializer import DocumentSerializer
from gqlsdl.parser import parse


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _fmt(source: str, options: FormatOptions | None = None) -> str:
    return format_document(parse(source), options)


# ---------------------------------------------------------------------------
# FormatOptions
# ---------------------------------------------------------------------------


class TestFormatOptions:
    def test_defaults(self) -> None:
        options = FormatOptions()
        assert options.indent == "  "

    def test_custom_indent(self) -> None:
        assert FormatOptions(indent_size=1, indent_char="\t").indent == "\t"

    @pytest.mark.parametrize("size", [0, -2])
    def test_non_positive_size_rejected(self, size: int) -> None:
        with pytest.raises(ValueError, match="indent_size"):
            FormatOptions(indent_size=size)

    @pytest.mark.parametrize("char", ["", "ab"])
    def test_indent_char_must_be_single(self, char: str) -> None:
        with pytest.raises(ValueError, match="indent_char"):
            FormatOptions(indent_char=char)

    def test_formatter_exposes_options(self) -> None:
        options = FormatOptions(indent_size=4)
        assert SdlFormatter(options).options is options


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------


class TestDeclarations:
    def test_single_field_type(self) -> None:
        assert _fmt("type A { name: String }") == "type A {\n  name: String\n}\n"

    def test_fields_separated_by_blank_line(self) -> None:
        assert _fmt("input A {\n  a: Int\n  b: Int\n}") == "input A {\n  a: Int\n\n  b: Int\n}\n"

    def test_enum_values(self) -> None:
        assert _fmt("enum Color { RED GREEN }") == "enum Color {\n  RED\n\n  GREEN\n}\n"

    def test_line_declarations(self) -> None:
        source = "scalar Date\ndirective @key(fields: String!) on OBJECT"
        assert _fmt(source) == "scalar Date\n\ndirective @key(fields: String!) on OBJECT\n"

    def test_schema_verbatim(self) -> None:
        source = "schema {\n  query: Query\n}\n"
        assert _fmt(source) == source

    def test_params_rendered_as_written(self) -> None:
        source = "type Q {\n  users(first: Int = 10, after: String): [User!]!\n}\n"
        assert _fmt(source) == source

    def test_name_with_directive(self) -> None:
        source = 'type User @key(fields: "id") {\n  id: ID!\n}\n'
        assert _fmt(source) == source

    def test_empty_document(self) -> None:
        assert format_document(Document()) == ""


# ---------------------------------------------------------------------------
# Comments and misc text
# ---------------------------------------------------------------------------


class TestComments:
    def test_declaration_and_field_comments(self) -> None:
        source = '"""A user"""\ntype User {\n  """pk"""\n  id: ID!\n}\n'
        assert _fmt(source) == source

    def test_multiline_comment(self) -> None:
        source = '"""\nThe root query\n"""\ntype Query {\n  a: Int\n}\n'
        assert _fmt(source) == source

    def test_enum_value_comment(self) -> None:
        source = 'enum Role {\n  """Full access"""\n  ADMIN\n}\n'
        assert _fmt(source) == source

    def test_misc_first_then_blank_line(self) -> None:
        assert _fmt("# header\nscalar Date") == "# header\n\nscalar Date\n"

    def test_misc_only(self) -> None:
        assert _fmt("# just a note\n") == "# just a note\n"


# ---------------------------------------------------------------------------
# Indentation
# ---------------------------------------------------------------------------


class TestIndentation:
    def test_four_spaces(self) -> None:
        options = FormatOptions(indent_size=4)
        assert _fmt("type A { a: Int }", options) == "type A {\n    a: Int\n}\n"

    def test_tabs(self) -> None:
        options = FormatOptions(indent_size=1, indent_char="\t")
        assert _fmt("enum E { X }", options) == "enum E {\n\tX\n}\n"

    def test_comment_indented_with_field(self) -> None:
        options = FormatOptions(indent_size=3)
        source = 'type A {\n  """c"""\n  a: Int\n}'
        assert _fmt(source, options) == 'type A {\n   """c"""\n   a: Int\n}\n'


# ---------------------------------------------------------------------------
# Single entities and mutation
# ---------------------------------------------------------------------------


class TestFormatEntity:
    def test_scalar_with_comment(self) -> None:
        assert format_entity(Scalar(name="Date", comment="ISO")) == '"""ISO"""\nscalar Date'

    def test_param(self) -> None:
        (struct,) = parse("type Q {\n  f(first: Int = 10): Int\n}").entities
        assert format_entity(struct.fields[0].params[0]) == "first: Int = 10"

    def test_field_without_params_drops_parentheses(self) -> None:
        (struct,) = parse("type Q {\n  f(first: Int): Int\n}").entities
        field = struct.fields[0]
        field.params.clear()
        assert format_entity(field) == "  f: Int"

    def test_removed_fields_are_not_rendered(self) -> None:
        document = parse("type A {\n  a: Int\n  b: Int\n}")
        document.get("A").remove_fields(lambda f: f.name == "a")
        assert format_document(document) == "type A {\n  b: Int\n}\n"

    def test_added_param_rendered_from_text(self) -> None:
        (struct,) = parse("type Q {\n  f(a: Int): Int\n}").entities
        field = struct.fields[0]
        field.params.append(Param(name="b", type="Int", parent=field))
        assert format_entity(field) == "  f(a: Int): Int"

    def test_unknown_entity_rejected(self) -> None:
        with pytest.raises(TypeError):
            format_entity(object())  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Re-parsing
# ---------------------------------------------------------------------------


class TestRoundTrip:
    def test_reparse_gives_same_structure(self, accounts_sdl: str) -> None:
        serializer = DocumentSerializer()
        document = parse(accounts_sdl)
        reparsed = parse(format_document(document))
        assert serializer.to_dict(reparsed) == serializer.to_dict(document)

    def test_formatting_is_idempotent(self, accounts_sdl: str) -> None:
        once = format_document(parse(accounts_sdl))
        assert format_document(parse(once)) == once
