"""Core rename planning engine for audioshelf.

- DuplicateKeyer / find_duplicates: group plans whose destinations collide.
  group_duplicates does the same for name and name+size without an event loop.
- resolve: applies a duplicate resolution strategy to the plan set.
- BatchExecutor / apply_plans: run the resolved plans with partial-failure
  semantics.

Plan creation lives in ``audioshelf.core.planner``, which depends on the naming
rules and is not re-exported here.
"""

from audioshelf.core.apply import BatchExecutor, apply_plans
from audioshelf.core.duplicates import (
    DuplicateKeyer,
    find_duplicates,
    group_duplicates,
)
from audioshelf.core.resolver import resolve
from audioshelf.core.sanitizer import sanitize, validate_path
from audioshelf.core.series import extract_series

__all__ = [
    "BatchExecutor",
    "DuplicateKeyer",
    "apply_plans",
    "extract_series",
    "find_duplicates",
    "group_duplicates",
    "resolve",
    "sanitize",
    "validate_path",
]
