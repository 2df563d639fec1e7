"""Comment-pattern pruning of SDL documents."""
from __future__ import annotations

from gqlsdl.pruning.pruner import ALWAYS_KEPT_TYPES, KeepRules, PruneReport, prune

__all__ = ["ALWAYS_KEPT_TYPES", "KeepRules", "PruneReport", "prune"]
