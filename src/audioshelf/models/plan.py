"""Models for rename plans.

This module defines the data structures for representing planned renames.
- A RenamePlan maps one original file to one proposed destination name/path.
- A DuplicateGroup collects plans whose destination keys are identical.

Plans are created fresh on every planning pass and are never mutated across
passes; later stages derive updated copies with ``model_copy``.
"""

from pathlib import PurePath
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from audioshelf.models.core import (
    DuplicateMethod,
    FileRecord,
    MetadataRecord,
    PlanStatus,
)

__all__: list[str] = [
    "DuplicateGroup",
    "RenamePlan",
]


class RenamePlan(BaseModel):
    """A single planned rename for one file."""

    id: str
    """Identifier of the FileRecord this plan renames."""

    original_name: str
    new_name: str
    original_path: str
    new_path: str
    extension: str

    metadata: MetadataRecord = Field(default_factory=MetadataRecord)
    """Metadata the new name was generated from."""

    file: FileRecord
    """Reference to the original file (size and content handle)."""

    dupe_key: Optional[str] = None
    """Duplicate key under the detection method last used to group this plan."""

    status: PlanStatus = PlanStatus.PENDING
    is_alternative: bool = False
    """True when the name was renumbered by keep-all duplicate resolution."""

    @model_validator(mode="after")
    def validate_names(self: "RenamePlan") -> "RenamePlan":
        """Ensure the destination path ends with the destination name.

        Raises:
            ValueError: If the basename of ``new_path`` differs from ``new_name``.
        """
        if PurePath(self.new_path).name != self.new_name:
            raise ValueError(
                f"new_path {self.new_path!r} does not end with {self.new_name!r}"
            )
        return self


class DuplicateGroup(BaseModel):
    """Two or more rename plans sharing one duplicate key."""

    key: str
    plans: List[RenamePlan]
    method: DuplicateMethod = DuplicateMethod.NAME

    @model_validator(mode="after")
    def validate_size(self: "DuplicateGroup") -> "DuplicateGroup":
        """Singleton groups are never materialized."""
        if len(self.plans) < 2:
            raise ValueError("A duplicate group needs at least two plans")
        return self

    @property
    def plan_ids(self: "DuplicateGroup") -> list[str]:
        return [plan.id for plan in self.plans]
