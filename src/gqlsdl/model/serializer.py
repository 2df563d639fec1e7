"""Structure export of parsed documents to and from JSON and YAML.

This is a dump of the entity model, not SDL text (see
``gqlsdl.formatter`` for that).  Each entity becomes a plain dict with a
``"kind"`` discriminator so that loading it back is unambiguous, and
parent links are rebuilt on load.

Usage
-----
::

    from gqlsdl.model.serializer import DocumentSerializer

    serializer = DocumentSerializer()
    text = serializer.to_yaml(document)
    document2 = serializer.from_yaml(text)
"""
from __future__ import annotations

import json

import yaml

from gqlsdl.grammar.keywords import EntityKind
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

_LEAF_CLASSES: dict[EntityKind, type[Scalar] | type[Directive] | type[Schema]] = {
    EntityKind.SCALAR: Scalar,
    EntityKind.DIRECTIVE: Directive,
    EntityKind.SCHEMA: Schema,
}
_STRUCT_CLASSES: dict[EntityKind, type[Struct]] = {
    EntityKind.TYPE: Type,
    EntityKind.INPUT: Input,
}


class DocumentSerializer:
    """Converts between ``Document`` objects and plain Python dicts."""

    # ------------------------------------------------------------------
    # Serialization (model → dict)
    # ------------------------------------------------------------------

    def to_dict(self, document: Document) -> dict[str, object]:
        """Serialize a ``Document`` to a JSON-compatible dict."""
        return {
            "kind": "Document",
            "misc": document.misc,
            "entities": [self._declaration_to_dict(e) for e in document.entities],
        }

    def _declaration_to_dict(self, entity: Declaration) -> dict[str, object]:
        data: dict[str, object] = {
            "kind": entity.kind.name,
            "name": entity.name,
            "alpha_name": entity.alpha_name,
            "comment": entity.comment,
        }
        if isinstance(entity, Struct):
            data["fields"] = [self._field_to_dict(f) for f in entity.fields]
        elif isinstance(entity, Enum):
            data["values"] = [
                {"name": v.name, "comment": v.comment} for v in entity.values
            ]
        return data

    def _field_to_dict(self, field: Field) -> dict[str, object]:
        return {
            "name": field.name,
            "return_type": field.return_type,
            "comment": field.comment,
            "params_text": field.params_text,
            "params": [
                {"name": p.name, "type": p.type, "comment": p.comment} for p in field.params
            ],
        }

    # ------------------------------------------------------------------
    # Deserialization (dict → model)
    # ------------------------------------------------------------------

    def from_dict(self, data: dict[str, object]) -> Document:
        """Deserialize a ``Document`` from a plain dict."""
        return Document(
            entities=[self._declaration_from_dict(e) for e in data.get("entities", [])],
            misc=data.get("misc") or "",
        )

    def _declaration_from_dict(self, d: dict[str, object]) -> Declaration:
        try:
            kind = EntityKind[d["kind"]]
        except KeyError:
            raise ValueError(f"Unknown declaration kind: {d.get('kind')!r}") from None

        if kind in _LEAF_CLASSES:
            return _LEAF_CLASSES[kind](name=d["name"], comment=d.get("comment"))
        if kind in _STRUCT_CLASSES:
            struct = _STRUCT_CLASSES[kind](name=d["name"], comment=d.get("comment"))
            struct.fields = [self._field_from_dict(f, struct) for f in d.get("fields", [])]
            return struct
        if kind is EntityKind.ENUM:
            return Enum(
                name=d["name"],
                comment=d.get("comment"),
                values=[
                    EnumValue(name=v["name"], comment=v.get("comment"))
                    for v in d.get("values", [])
                ],
            )
        raise ValueError(f"{kind.name} is not a top-level declaration kind")

    def _field_from_dict(self, d: dict[str, object], parent: Struct) -> Field:
        field = Field(
            name=d["name"],
            return_type=d["return_type"],
            parent=parent,
            comment=d.get("comment"),
            params_text=d.get("params_text"),
        )
        field.params = [
            Param(name=p["name"], type=p["type"], parent=field, comment=p.get("comment"))
            for p in d.get("params", [])
        ]
        return field

    # ------------------------------------------------------------------
    # JSON helpers
    # ------------------------------------------------------------------

    def to_json(self, document: Document, indent: int = 2) -> str:
        """Serialize a ``Document`` to a JSON string."""
        return json.dumps(self.to_dict(document), indent=indent, ensure_ascii=False)

    def from_json(self, text: str) -> Document:
        """Deserialize a ``Document`` from a JSON string."""
        data: dict[str, object] = json.loads(text)
        return self.from_dict(data)

    # ------------------------------------------------------------------
    # YAML helpers
    # ------------------------------------------------------------------

    def to_yaml(self, document: Document) -> str:
        """Serialize a ``Document`` to a YAML string."""
        return yaml.dump(
            self.to_dict(document), default_flow_style=False, allow_unicode=True, sort_keys=False
        )

    def from_yaml(self, text: str) -> Document:
        """Deserialize a ``Document`` from a YAML string."""
        data: dict[str, object] = yaml.safe_load(text)
        return self.from_dict(data)
