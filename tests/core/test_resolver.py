"""Tests for duplicate resolution (audioshelf.core.resolver)."""

from pathlib import Path

import pytest

from audioshelf.core.duplicates import find_duplicates
from audioshelf.core.resolver import (
    needs_manual_resolution,
    resolve,
    suggest_alternative_name,
)
from audioshelf.models.core import DuplicateMethod, ResolutionStrategy


@pytest.fixture
def colliding(make_plan):
    return [
        make_plan("a", "Book.mp3"),
        make_plan("b", "Other.mp3"),
        make_plan("c", "Book.mp3"),
        make_plan("d", "Book.mp3"),
    ]


@pytest.mark.asyncio
async def test_keep_all_renumbers(make_plan) -> None:
    plans = [make_plan("a", "Book.mp3"), make_plan("b", "Book.mp3")]
    groups = await find_duplicates(plans, DuplicateMethod.NAME)
    assert len(groups) == 1
    assert len(groups[0].plans) == 2

    resolved = resolve(groups, ResolutionStrategy.KEEP_ALL, plans)

    assert [p.new_name for p in resolved] == ["Book.mp3", "Book (1).mp3"]
    assert resolved[1].new_path == str(Path("/library", "Book (1).mp3"))
    assert resolved[1].is_alternative
    assert not resolved[0].is_alternative


@pytest.mark.asyncio
async def test_keep_all_numbers_from_one(colliding) -> None:
    groups = await find_duplicates(colliding, DuplicateMethod.NAME)
    resolved = resolve(groups, "keep-all", colliding)
    assert [p.new_name for p in resolved] == [
        "Book.mp3",
        "Other.mp3",
        "Book (1).mp3",
        "Book (2).mp3",
    ]


@pytest.mark.asyncio
async def test_keep_first(colliding) -> None:
    groups = await find_duplicates(colliding, DuplicateMethod.NAME)
    resolved = resolve(groups, ResolutionStrategy.KEEP_FIRST, colliding)
    assert [p.id for p in resolved] == ["a", "b"]
    assert len(resolved) == len(colliding) - sum(len(g.plans) - 1 for g in groups)


@pytest.mark.parametrize("strategy", ["skip-all", "skip"])
@pytest.mark.asyncio
async def test_skip_all(colliding, strategy: str) -> None:
    groups = await find_duplicates(colliding, DuplicateMethod.NAME)
    resolved = resolve(groups, strategy, colliding)
    assert [p.id for p in resolved] == ["b"]
    assert len(resolved) == len(colliding) - sum(len(g.plans) for g in groups)


@pytest.mark.asyncio
async def test_manual_leaves_plans_unchanged(colliding) -> None:
    groups = await find_duplicates(colliding, DuplicateMethod.NAME)
    resolved = resolve(groups, ResolutionStrategy.MANUAL, colliding)
    assert resolved == colliding
    assert needs_manual_resolution(groups, ResolutionStrategy.MANUAL)
    assert not needs_manual_resolution(groups, ResolutionStrategy.KEEP_ALL)
    assert not needs_manual_resolution([], ResolutionStrategy.MANUAL)


def test_resolve_without_groups_keeps_order(colliding) -> None:
    resolved = resolve([], ResolutionStrategy.SKIP_ALL, colliding)
    assert [p.id for p in resolved] == ["a", "b", "c", "d"]


@pytest.mark.asyncio
async def test_resolve_is_repeatable(colliding) -> None:
    groups = await find_duplicates(colliding, DuplicateMethod.NAME)
    once = resolve(groups, ResolutionStrategy.KEEP_FIRST, colliding)
    regrouped = await find_duplicates(once, DuplicateMethod.NAME)
    assert regrouped == []
    assert resolve(regrouped, ResolutionStrategy.KEEP_FIRST, once) == once


def test_resolve_rejects_unknown_strategy(colliding) -> None:
    with pytest.raises(ValueError):
        resolve([], "keep-some", colliding)


def test_suggest_alternative_name_keeps_extension_case(make_plan) -> None:
    plan = make_plan("a", "Book.MP3")
    alternative = suggest_alternative_name(plan, 3)
    assert alternative.new_name == "Book (3).MP3"
    assert Path(alternative.new_path).name == "Book (3).MP3"
    assert plan.new_name == "Book.MP3"


def test_suggest_alternative_name_without_extension(make_plan) -> None:
    plan = make_plan("a", "Book", original_name="a")
    assert suggest_alternative_name(plan).new_name == "Book (1)"
