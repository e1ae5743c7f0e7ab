"""Core domain models for audioshelf.

This module defines the foundational records handed to the rename planning
engine by its collaborators (file layer, metadata sources, host settings).
- FileRecord describes one audio file on disk; the engine never reads its bytes
  except through an injected hash provider.
- MetadataRecord holds the bibliographic fields used by naming patterns. Any
  field may be absent.
- NamingOptions is an immutable configuration value passed explicitly to every
  component that needs it.

Design:
- Enums subclass ``str`` so plans and options serialize cleanly to JSON.
- MetadataRecord accepts the camelCase aliases used by catalog and sidecar
  JSON (``seriesNumber``, ``coverUrl``) as well as the Python field names.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DuplicateMethod(str, Enum):
    """Strategy used to decide whether two rename plans collide."""

    NAME = "name"
    NAME_SIZE = "name+size"
    CONTENT = "content"


class ResolutionStrategy(str, Enum):
    """How a group of colliding rename plans is resolved.

    ``skip`` is accepted as a synonym for ``skip-all``.
    """

    KEEP_FIRST = "keep-first"
    KEEP_ALL = "keep-all"
    SKIP_ALL = "skip-all"
    SKIP = "skip"
    MANUAL = "manual"


class PlanStatus(str, Enum):
    """Status of a rename plan.

    Used to track the lifecycle of each rename (pending, renamed, failed, etc.).
    """

    PENDING = "pending"
    RENAMED = "renamed"
    SKIPPED = "skipped"
    FAILED = "failed"
    MANUAL = "manual"


class FileRecord(BaseModel):
    """An audio file supplied by the file provider.

    Used as the atomic input unit for rename planning.
    """

    id: str
    """Stable identifier used to associate metadata and rename plans."""

    name: str
    """Original file name, including the extension."""

    extension: str
    """Extension without the leading dot (e.g. ``mp3``)."""

    path: str
    """Original full path of the file."""

    size: int = 0
    """Size of the file in bytes (used by name+size duplicate detection)."""

    last_modified: Optional[datetime] = None
    """Last modified timestamp reported by the file layer."""

    handle: Any = Field(default=None, exclude=True, repr=False)
    """Opaque content handle owned by the file layer and passed to the hash
    provider untouched."""

    @field_validator("extension")
    @classmethod
    def _strip_leading_dot(cls, value: str) -> str:
        return value.lstrip(".")


class MetadataRecord(BaseModel):
    """Bibliographic metadata for one audiobook file.

    Every field is optional; naming falls back to fixed text when the required
    ones (title, author) are missing.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: Optional[str] = None
    subtitle: Optional[str] = None
    author: Optional[str] = None
    narrator: Optional[str] = None
    series: Optional[str] = None
    series_number: Optional[Union[float, str]] = Field(
        default=None, alias="seriesNumber"
    )
    year: Optional[Union[int, str]] = None
    isbn: Optional[str] = None
    language: Optional[str] = None
    publisher: Optional[str] = None
    description: Optional[str] = None
    cover_url: Optional[str] = Field(default=None, alias="coverUrl")


class SeriesInfo(BaseModel):
    """Series data parsed out of a raw title or file name."""

    title: str
    series: str
    series_number: float


class NamingOptions(BaseModel):
    """Immutable naming configuration shared by the planning components."""

    model_config = ConfigDict(frozen=True)

    include_series: bool = True
    """Expand ``{series}``/``{number}`` tokens when series metadata exists."""

    create_directories: bool = False
    """Place renamed files under series (or pattern) subdirectories."""

    duplicate_method: DuplicateMethod = DuplicateMethod.NAME
    """Detection method used when grouping colliding plans."""
