"""gqlsdl — schema definition language toolkit: parser, reference graph, formatter.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import gqlsdl

    document = gqlsdl.parse('''
        type User {
          id: ID!
          posts(first: Int = 10): [Post!]!
        }

        type Post {
          author: User
        }
    ''')

    # Reference graph: User -> Post, Post -> User
    graph = gqlsdl.reference_graph(document)

    # Attach a comment, remove a field, then render the document back to SDL
    document.get("User").set_comment("A user of the system")
    document.get("User").remove_fields(lambda f: f.name == "posts")
    text = gqlsdl.format(document)

    gqlsdl.__version__
    '0.1.0'
"""
from __future__ import annotations

from typing import TYPE_CHECKING

__version__: str = "0.1.0"

if TYPE_CHECKING:
    from gqlsdl.formatter.formatter import FormatOptions
    from gqlsdl.model.nodes import Document, Graph
    from gqlsdl.pruning.pruner import KeepRules, PruneReport


def parse(source: str) -> "Document":
    """Parse an SDL source string into a ``Document``.

    Parameters
    ----------
    source:
        Complete SDL source text.

    Returns
    -------
    Document
        The parsed declarations and misc text.

    Raises
    ------
    gqlsdl.parser.MissingTerminator
        If a brace, parenthesis or comment delimiter is not closed.
    gqlsdl.parser.MissingSeparator
        If a field or parameter has no ``:`` before its type.
    """
    from gqlsdl.parser.parser import parse as _parse

    return _parse(source)


def format(document: "Document", options: "FormatOptions | None" = None) -> str:  # noqa: A001
    """Render a ``Document`` back to SDL text.

    Parameters
    ----------
    document:
        The document to render.
    options:
        Indentation settings; two spaces when omitted.

    Returns
    -------
    str
        SDL source text ending with a newline.
    """
    from gqlsdl.formatter.formatter import format_document

    return format_document(document, options)


def reference_graph(document: "Document") -> "Graph":
    """Return the memoized reference graph of ``document``."""
    return document.graph()


def prune(document: "Document", rules: "KeepRules") -> "PruneReport":
    """Remove entities whose comments lack a keep pattern, in place.

    Parameters
    ----------
    document:
        The document to prune.
    rules:
        The keep patterns to apply.

    Returns
    -------
    PruneReport
        What was removed.
    """
    from gqlsdl.pruning.pruner import prune as _prune

    return _prune(document, rules)


def export(document: "Document", output_format: str = "json") -> str:
    """Dump the structure of ``document`` as ``"json"`` or ``"yaml"`` text."""
    from gqlsdl.model.serializer import DocumentSerializer

    serializer = DocumentSerializer()
    if output_format == "yaml":
        return serializer.to_yaml(document)
    if output_format == "json":
        return serializer.to_json(document)
    raise ValueError(f"Unsupported export format: {output_format!r}")


__all__ = [
    "__version__",
    "parse",
    "format",
    "reference_graph",
    "prune",
    "export",
]
