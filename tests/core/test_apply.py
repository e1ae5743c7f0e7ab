"""Tests for the batch executor (audioshelf.core.apply).

Covers:
- Sequential execution with partial failures
- Observable progress after every item
- Lifecycle transitions and misuse errors
"""

from pathlib import Path

import pytest

from audioshelf.core.apply import BatchExecutor, apply_plans
from audioshelf.fs.operations import FilesystemRenamer
from audioshelf.models.batch import BatchOutcome, BatchState
from audioshelf.models.core import PlanStatus


class RecordingRenamer:
    """Rename provider that records calls and fails on selected plan ids."""

    def __init__(self, fail: set[str] | None = None, falsy: set[str] | None = None):
        self.fail = fail or set()
        self.falsy = falsy or set()
        self.calls: list[str] = []

    async def __call__(self, plan) -> bool:
        self.calls.append(plan.id)
        if plan.id in self.fail:
            raise PermissionError(f"cannot rename {plan.original_name}")
        return plan.id not in self.falsy


@pytest.fixture
def three_plans(make_plan):
    return [
        make_plan("a", "A.mp3"),
        make_plan("b", "B.mp3"),
        make_plan("c", "C.mp3"),
    ]


@pytest.mark.asyncio
async def test_second_failure_does_not_stop_batch(three_plans) -> None:
    renamer = RecordingRenamer(fail={"b"})
    outcome = await apply_plans(three_plans, renamer)

    assert (outcome.total, outcome.processed, outcome.success, outcome.error) == (
        3,
        3,
        2,
        1,
    )
    assert renamer.calls == ["a", "b", "c"]
    assert len(outcome.failures) == 1
    failure = outcome.failures[0]
    assert failure.plan_id == "b"
    assert failure.original_name == "b.mp3"
    assert "cannot rename" in failure.error


@pytest.mark.asyncio
async def test_false_result_counts_as_failure(three_plans) -> None:
    outcome = await apply_plans(three_plans, RecordingRenamer(falsy={"c"}))
    assert outcome.success == 2
    assert outcome.error == 1
    assert outcome.failures[0].plan_id == "c"


@pytest.mark.asyncio
async def test_progress_after_every_item(three_plans) -> None:
    seen: list[BatchOutcome] = []
    await apply_plans(three_plans, RecordingRenamer(fail={"a"}), seen.append)

    assert [o.processed for o in seen] == [1, 2, 3]
    assert [o.percentage for o in seen] == [33, 67, 100]
    for outcome in seen:
        assert outcome.processed == outcome.success + outcome.error
        assert outcome.processed <= outcome.total


@pytest.mark.asyncio
async def test_step_by_step(three_plans) -> None:
    executor = BatchExecutor(RecordingRenamer())
    assert executor.state is BatchState.IDLE

    executor.start(three_plans)
    assert executor.state is BatchState.RUNNING
    for expected in range(1, 4):
        outcome = await executor.step()
        assert outcome.processed == expected
    assert executor.state is BatchState.COMPLETED
    assert executor.outcome.is_complete

    with pytest.raises(RuntimeError):
        await executor.step()


@pytest.mark.asyncio
async def test_empty_batch_completes_immediately() -> None:
    executor = BatchExecutor(RecordingRenamer())
    outcome = executor.start([])
    assert executor.state is BatchState.COMPLETED
    assert (outcome.total, outcome.processed, outcome.success, outcome.error) == (
        0,
        0,
        0,
        0,
    )
    assert outcome.percentage == 0
    assert outcome.summary() == "All files renamed successfully!"


def test_start_while_running_raises(three_plans) -> None:
    executor = BatchExecutor(RecordingRenamer())
    executor.start(three_plans)
    with pytest.raises(RuntimeError, match="already in progress"):
        executor.start(three_plans)


@pytest.mark.asyncio
async def test_executor_can_be_reused(three_plans) -> None:
    executor = BatchExecutor(RecordingRenamer())
    await executor.run(three_plans)
    outcome = await executor.run(three_plans[:1])
    assert outcome.total == 1
    assert outcome.success == 1


@pytest.mark.asyncio
async def test_results_report_statuses(three_plans) -> None:
    executor = BatchExecutor(RecordingRenamer(fail={"b"}))
    await executor.run(three_plans)
    assert [p.status for p in executor.results()] == [
        PlanStatus.RENAMED,
        PlanStatus.FAILED,
        PlanStatus.RENAMED,
    ]


@pytest.mark.asyncio
async def test_outcome_is_a_snapshot(three_plans) -> None:
    executor = BatchExecutor(RecordingRenamer())
    executor.start(three_plans)
    before = executor.outcome
    await executor.step()
    assert before.processed == 0
    assert executor.outcome.processed == 1


@pytest.mark.asyncio
async def test_filesystem_renamer_batch(tmp_path: Path, make_plan) -> None:
    (tmp_path / "a.mp3").write_bytes(b"a")
    plans = [
        make_plan("a", "Alpha.mp3", directory=str(tmp_path)),
        make_plan("missing", "Missing.mp3", directory=str(tmp_path)),
    ]
    outcome = await apply_plans(plans, FilesystemRenamer())

    assert outcome.success == 1
    assert outcome.error == 1
    assert (tmp_path / "Alpha.mp3").read_bytes() == b"a"
    assert outcome.summary() == (
        "1 file renamed successfully, 1 file failed."
    )
