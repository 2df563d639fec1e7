"""Reference graph resolution for parsed SDL documents."""
from __future__ import annotations

from gqlsdl.graph.resolver import clean_type, iter_edges, node_id, resolve_graph

__all__ = ["clean_type", "iter_edges", "node_id", "resolve_graph"]
