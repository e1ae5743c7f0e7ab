"""Models describing the progress and outcome of a rename batch."""

from enum import Enum
from typing import List

from pydantic import BaseModel, Field


class BatchState(str, Enum):
    """Lifecycle of one batch run."""

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"


class BatchFailure(BaseModel):
    """A rename that failed during a batch run."""

    plan_id: str
    original_name: str
    new_name: str
    error: str


class BatchOutcome(BaseModel):
    """Progress counters for a batch run.

    ``processed == success + error <= total`` holds at every observation point.
    """

    total: int = 0
    processed: int = 0
    success: int = 0
    error: int = 0
    failures: List[BatchFailure] = Field(default_factory=list)

    @property
    def is_complete(self: "BatchOutcome") -> bool:
        return self.processed == self.total

    @property
    def percentage(self: "BatchOutcome") -> int:
        """Completion percentage, rounded to the nearest integer."""
        if self.total <= 0:
            return 0
        return round(self.processed / self.total * 100)

    def summary(self: "BatchOutcome") -> str:
        """Human-readable summary of a finished batch."""
        if self.error == 0:
            return "All files renamed successfully!"
        return (
            f"{self.success} file{'s' if self.success != 1 else ''} renamed "
            f"successfully, {self.error} file{'s' if self.error != 1 else ''} failed."
        )
