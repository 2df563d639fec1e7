"""Unit tests for gqlsdl.model.serializer — DocumentSerializer JSON/YAML export."""
from __future__ import annotations

import json

import pytest
import yaml

from gqlsdl.model.nodes import Enum, Input, Scalar, Schema, Type
from gqlsdl.model.serializer import DocumentSerializer
from gqlsdl.parser import parse


@pytest.fixture()
def serializer() -> DocumentSerializer:
    return DocumentSerializer()


class TestToDict:
    def test_document_shape(self, serializer: DocumentSerializer) -> None:
        data = serializer.to_dict(parse("# note\nscalar Date"))
        assert data == {
            "kind": "Document",
            "misc": "# note\n",
            "entities": [
                {"kind": "SCALAR", "name": "Date", "alpha_name": "Date", "comment": None},
            ],
        }

    def test_struct_fields_and_params(self, serializer: DocumentSerializer) -> None:
        data = serializer.to_dict(parse('type Q {\n  """find"""\n  f(id: ID!): User\n}'))
        (struct,) = data["entities"]
        assert struct["kind"] == "TYPE"
        assert struct["fields"] == [
            {
                "name": "f",
                "return_type": "User",
                "comment": "find",
                "params_text": "id: ID!",
                "params": [{"name": "id", "type": "ID!", "comment": None}],
            }
        ]

    def test_enum_values(self, serializer: DocumentSerializer) -> None:
        data = serializer.to_dict(parse("enum Role { ADMIN MEMBER }"))
        (enum,) = data["entities"]
        assert enum["values"] == [
            {"name": "ADMIN", "comment": None},
            {"name": "MEMBER", "comment": None},
        ]

    def test_alpha_name_exported(self, serializer: DocumentSerializer) -> None:
        data = serializer.to_dict(parse('type User @key(fields: "id") { id: ID! }'))
        assert data["entities"][0]["alpha_name"] == "User"


class TestFromDict:
    def test_rebuilds_variants(self, serializer: DocumentSerializer, accounts_sdl: str) -> None:
        document = serializer.from_dict(serializer.to_dict(parse(accounts_sdl)))
        assert isinstance(document.entities[0], Scalar)
        assert isinstance(document.entities[2], Schema)
        assert isinstance(document.get("Query"), Type)
        assert isinstance(document.get("Role"), Enum)
        assert isinstance(document.get("UserFilter"), Input)

    def test_rebuilds_parent_links(self, serializer: DocumentSerializer, accounts_sdl: str) -> None:
        document = serializer.from_dict(serializer.to_dict(parse(accounts_sdl)))
        query = document.get("Query")
        users = query.get_field("users")
        assert users.parent is query
        assert all(p.parent is users for p in users.params)

    def test_rebuilt_graph_matches(self, serializer: DocumentSerializer, accounts_sdl: str) -> None:
        original = parse(accounts_sdl)
        loaded = serializer.from_dict(serializer.to_dict(original))
        assert loaded.graph() == original.graph()

    def test_unknown_kind_rejected(self, serializer: DocumentSerializer) -> None:
        with pytest.raises(ValueError, match="Unknown declaration kind"):
            serializer.from_dict({"entities": [{"kind": "INTERFACE", "name": "Node"}]})

    def test_member_kind_rejected_at_top_level(self, serializer: DocumentSerializer) -> None:
        with pytest.raises(ValueError, match="not a top-level"):
            serializer.from_dict({"entities": [{"kind": "FIELD", "name": "id"}]})

    def test_missing_entities_gives_empty_document(self, serializer: DocumentSerializer) -> None:
        document = serializer.from_dict({})
        assert document.entities == []
        assert document.misc == ""


class TestJson:
    def test_output_is_valid_json(self, serializer: DocumentSerializer, accounts_sdl: str) -> None:
        data = json.loads(serializer.to_json(parse(accounts_sdl)))
        assert data["kind"] == "Document"
        assert len(data["entities"]) == 7

    def test_round_trip(self, serializer: DocumentSerializer, accounts_sdl: str) -> None:
        document = parse(accounts_sdl)
        loaded = serializer.from_json(serializer.to_json(document))
        assert serializer.to_dict(loaded) == serializer.to_dict(document)


class TestYaml:
    def test_output_is_valid_yaml(self, serializer: DocumentSerializer, accounts_sdl: str) -> None:
        data = yaml.safe_load(serializer.to_yaml(parse(accounts_sdl)))
        assert [e["kind"] for e in data["entities"]][:3] == ["SCALAR", "DIRECTIVE", "SCHEMA"]

    def test_keys_keep_insertion_order(self, serializer: DocumentSerializer) -> None:
        text = serializer.to_yaml(parse("scalar Date"))
        assert text.index("kind: Document") < text.index("misc:") < text.index("entities:")

    def test_round_trip(self, serializer: DocumentSerializer, accounts_sdl: str) -> None:
        document = parse(accounts_sdl)
        loaded = serializer.from_yaml(serializer.to_yaml(document))
        assert serializer.to_dict(loaded) == serializer.to_dict(document)
