"""Shared test fixtures for gqlsdl.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. Add project-wide fixtures here; keep
domain-specific fixtures close to the tests that use them.
"""
from __future__ import annotations

import pytest

ACCOUNTS_SDL = '''# Federated accounts schema
scalar DateTime

directive @key(fields: String!) on OBJECT

schema {
  query: Query
}

"""
The root query
"""
type Query {
  """Look up a user"""
  user(id: ID!): User

  users(first: Int = 10, after: String): [User!]!
}

"""A registered account"""
type User @key(fields: "id") {
  id: ID!

  name: String

  role: Role!

  createdAt: DateTime
}

enum Role {
  """Full access"""
  ADMIN

  MEMBER
}

input UserFilter {
  role: Role
  nameContains: String
}
'''


@pytest.fixture()
def package_name() -> str:
    """Return the importable package name for assertions."""
    return "gqlsdl"


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def accounts_sdl() -> str:
    """A small federated schema touching every declaration kind."""
    return ACCOUNTS_SDL
