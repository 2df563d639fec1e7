"""SDL scanner primitives."""
from __future__ import annotations

from gqlsdl.scanner.scanner import (
    line_end,
    location,
    read_comment,
    skip_to_whitespace,
    skip_whitespace,
    starts_comment,
)

__all__ = [
    "line_end",
    "location",
    "read_comment",
    "skip_to_whitespace",
    "skip_whitespace",
    "starts_comment",
]
