"""Test that the top-level quickstart API works for gqlsdl."""
from __future__ import annotations

import json

import pytest


def test_quickstart_imports(package_name: str) -> None:
    import importlib

    module = importlib.import_module(package_name)
    assert callable(module.parse)
    assert callable(module.format)
    assert callable(module.reference_graph)
    assert callable(module.prune)
    assert callable(module.export)


def test_quickstart_version(expected_version: str) -> None:
    import gqlsdl

    assert gqlsdl.__version__ == expected_version


def test_quickstart_parse_and_format() -> None:
    import gqlsdl

    document = gqlsdl.parse("type User { id: ID! }")
    assert gqlsdl.format(document) == "type User {\n  id: ID!\n}\n"


def test_quickstart_reference_graph() -> None:
    import gqlsdl

    document = gqlsdl.parse(
        "type User {\n  posts(first: Int = 10): [Post!]!\n}\ntype Post {\n  author: User\n}\n"
    )
    graph = gqlsdl.reference_graph(document)
    user, post = document.entities
    assert graph == {user: [post], post: [user]}


def test_quickstart_remove_field_and_format() -> None:
    import gqlsdl

    document = gqlsdl.parse("type User {\n  id: ID!\n  posts: [Post]\n}")
    document.get("User").remove_fields(lambda f: f.name == "posts")
    assert gqlsdl.format(document) == "type User {\n  id: ID!\n}\n"


def test_quickstart_prune() -> None:
    import gqlsdl
    from gqlsdl.pruning import KeepRules

    document = gqlsdl.parse('"""@Keep"""\ntype A { x: Int }\ntype B { y: Int }')
    report = gqlsdl.prune(document, KeepRules(("@Keep",)))
    assert document.names == ["A"]
    assert [d.alpha_name for d in report.declarations] == ["B"]
    assert [f.name for f in report.fields] == ["x"]


def test_quickstart_export() -> None:
    import gqlsdl

    document = gqlsdl.parse("scalar Date")
    assert json.loads(gqlsdl.export(document))["entities"][0]["name"] == "Date"
    assert "kind: Document" in gqlsdl.export(document, "yaml")


def test_quickstart_export_rejects_unknown_format() -> None:
    import gqlsdl

    with pytest.raises(ValueError, match="Unsupported"):
        gqlsdl.export(gqlsdl.parse(""), "xml")


def test_quickstart_documented_example() -> None:
    import gqlsdl

    assert "gqlsdl.reference_graph(document)" in gqlsdl.__doc__

    document = gqlsdl.parse(
        "type User {\n  id: ID!\n  posts(first: Int = 10): [Post!]!\n}\n\ntype Post {\n  author: User\n}\n"
    )
    user, post = document.entities
    assert gqlsdl.reference_graph(document) == {user: [post], post: [user]}

    document.get("User").set_comment("A user of the system")
    document.get("User").remove_fields(lambda f: f.name == "posts")
    assert gqlsdl.format(document) == (
        '"""A user of the system"""\n'
        "type User {\n"
        "  id: ID!\n"
        "}\n"
        "\n"
        "type Post {\n"
        "  author: User\n"
        "}\n"
    )
