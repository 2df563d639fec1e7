"""SDL entity model.

Exports every entity variant, the ``Document`` container and the
``DocumentSerializer`` for structure export to JSON/YAML.
"""
from __future__ import annotations

from gqlsdl.model.nodes import (
    Declaration,
    Directive,
    Document,
    Entity,
    Enum,
    EnumValue,
    Field,
    Graph,
    Input,
    Member,
    Param,
    Scalar,
    Schema,
    Struct,
    Type,
    alpha_prefix,
)
from gqlsdl.model.serializer import DocumentSerializer

__all__ = [
    # Declarations
    "Scalar",
    "Directive",
    "Schema",
    "Enum",
    "Input",
    "Type",
    "Struct",
    # Members
    "Field",
    "Param",
    "EnumValue",
    # Containers and aliases
    "Document",
    "Declaration",
    "Member",
    "Entity",
    "Graph",
    "alpha_prefix",
    # Serializer
    "DocumentSerializer",
]
