"""Domain models for the audioshelf application."""

from audioshelf.models.batch import BatchFailure, BatchOutcome, BatchState
from audioshelf.models.core import (
    DuplicateMethod,
    FileRecord,
    MetadataRecord,
    NamingOptions,
    PlanStatus,
    ResolutionStrategy,
    SeriesInfo,
)
from audioshelf.models.plan import DuplicateGroup, RenamePlan

__all__ = [
    "BatchFailure",
    "BatchOutcome",
    "BatchState",
    "DuplicateGroup",
    "DuplicateMethod",
    "FileRecord",
    "MetadataRecord",
    "NamingOptions",
    "PlanStatus",
    "RenamePlan",
    "ResolutionStrategy",
    "SeriesInfo",
]
