#!/usr/bin/env python3
"""Example: Quickstart — gqlsdl

Minimal working example: parse a federated schema, inspect its
reference graph, prune it down to the public surface, and render it
back to SDL.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install gqlsdl
"""
from __future__ import annotations

import gqlsdl
from gqlsdl.graph import iter_edges
from gqlsdl.pruning import KeepRules

SDL_SOURCE = '''
scalar DateTime

"""@Keep public"""
type Query {
  """@Keep public"""
  product(upc: ID!): Product

  internalStats: Stats
}

"""@Keep public
A sellable item"""
type Product @key(fields: "upc") {
  """@Keep public"""
  upc: ID!

  """@Keep public"""
  status: Status

  cost: Float
}

"""@Keep public"""
enum Status {
  """@Keep public"""
  ACTIVE

  DISCONTINUED
}

type Stats {
  hits: Int
}
'''


def main() -> None:
    print(f"gqlsdl version: {gqlsdl.__version__}")

    # Step 1: Parse SDL source into a document
    document = gqlsdl.parse(SDL_SOURCE)
    print(f"Parsed {len(document.entities)} declarations: {', '.join(document.names)}")

    # Step 2: Walk the reference graph
    graph = gqlsdl.reference_graph(document)
    for source, target in iter_edges(graph):
        print(f"  {source.alpha_name} -> {target.alpha_name}")

    # Step 3: Keep only entities marked "@Keep public"
    report = gqlsdl.prune(document, KeepRules(("@Keep",), ("public",)))
    print(f"\nPruned {report.total} entities")

    # Step 4: Render the pruned schema
    print()
    print(gqlsdl.format(document))


if __name__ == "__main__":
    main()
