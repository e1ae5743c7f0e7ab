"""Batch executor for resolved rename plans.

This module turns a resolved plan set into file-system operations through an
injected rename provider.
- Plans run strictly one at a time, in plan-set order.
- A failed rename is recorded and counted; it never aborts the batch.
- Progress is observable after every item, either by polling ``outcome`` or
  through a progress callback.

State machine per run: ``IDLE -> RUNNING -> COMPLETED``. An empty plan set
completes immediately with every counter at zero. There is no cancellation
primitive: a caller driving ``step()`` can stop calling it at any time.
"""

import logging
from typing import Awaitable, Callable, Optional, Self, Sequence

from audioshelf.models.batch import BatchFailure, BatchOutcome, BatchState
from audioshelf.models.core import PlanStatus
from audioshelf.models.plan import RenamePlan

logger = logging.getLogger(__name__)

# A provider fails by raising or by returning False.
RenameProvider = Callable[[RenamePlan], Awaitable[Optional[bool]]]
ProgressCallback = Callable[[BatchOutcome], None]


class BatchExecutor:
    """Runs rename plans sequentially and tracks per-file outcomes."""

    def __init__(
        self: Self,
        rename_provider: RenameProvider,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> None:
        self._rename = rename_provider
        self._progress_callback = progress_callback
        self._state = BatchState.IDLE
        self._plans: list[RenamePlan] = []
        self._cursor = 0
        self._outcome = BatchOutcome()
        self._statuses: dict[str, PlanStatus] = {}

    @property
    def state(self: Self) -> BatchState:
        return self._state

    @property
    def outcome(self: Self) -> BatchOutcome:
        """Snapshot of the current counters."""
        return self._outcome.model_copy(deep=True)

    def start(self: Self, plans: Sequence[RenamePlan]) -> BatchOutcome:
        """Begin a new run over *plans*.

        Raises:
            RuntimeError: If a run is already in progress.
        """
        if self._state is BatchState.RUNNING:
            raise RuntimeError("A batch run is already in progress")
        self._plans = list(plans)
        self._cursor = 0
        self._outcome = BatchOutcome(total=len(self._plans))
        self._statuses = {plan.id: PlanStatus.PENDING for plan in self._plans}
        self._state = BatchState.RUNNING if self._plans else BatchState.COMPLETED
        logger.debug("Starting batch of %d rename(s)", len(self._plans))
        return self.outcome

    async def step(self: Self) -> BatchOutcome:
        """Rename the next plan and return the updated counters.

        Raises:
            RuntimeError: If no run is in progress.
        """
        if self._state is not BatchState.RUNNING:
            raise RuntimeError(f"Cannot step a batch in state {self._state.value}")

        plan = self._plans[self._cursor]
        self._cursor += 1
        try:
            result = await self._rename(plan)
        except Exception as exc:
            self._record_failure(plan, str(exc) or exc.__class__.__name__)
        else:
            if result is False:
                self._record_failure(plan, "Rename provider reported failure")
            else:
                self._outcome.success += 1
                self._outcome.processed += 1
                self._statuses[plan.id] = PlanStatus.RENAMED

        if self._outcome.processed == self._outcome.total:
            self._state = BatchState.COMPLETED
            logger.info(
                "Batch complete: %d renamed, %d failed",
                self._outcome.success,
                self._outcome.error,
            )

        snapshot = self.outcome
        if self._progress_callback is not None:
            self._progress_callback(snapshot)
        return snapshot

    async def run(self: Self, plans: Sequence[RenamePlan]) -> BatchOutcome:
        """Start a run and step through every plan."""
        self.start(plans)
        while self._state is BatchState.RUNNING:
            await self.step()
        return self.outcome

    def results(self: Self) -> list[RenamePlan]:
        """Plans of the current run with their execution status filled in."""
        return [
            plan.model_copy(update={"status": self._statuses[plan.id]})
            for plan in self._plans
        ]

    def _record_failure(self: Self, plan: RenamePlan, detail: str) -> None:
        logger.warning("Failed to rename %s: %s", plan.original_name, detail)
        self._outcome.error += 1
        self._outcome.processed += 1
        self._outcome.failures.append(
            BatchFailure(
                plan_id=plan.id,
                original_name=plan.original_name,
                new_name=plan.new_name,
                error=detail,
            )
        )
        self._statuses[plan.id] = PlanStatus.FAILED


async def apply_plans(
    plans: Sequence[RenamePlan],
    rename_provider: RenameProvider,
    progress_callback: Optional[ProgressCallback] = None,
) -> BatchOutcome:
    """Execute *plans* with a fresh BatchExecutor and return the final outcome."""
    return await BatchExecutor(rename_provider, progress_callback).run(plans)


__all__ = ["BatchExecutor", "ProgressCallback", "RenameProvider", "apply_plans"]
