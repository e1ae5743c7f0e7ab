"""Duplicate resolution for rename plans.

Given duplicate groups and a strategy, produce an updated plan set:
- keep-first: keep member 0 of each group, drop the rest.
- keep-all: keep every member, renumbering members 1..n as ``Name (i).ext``.
- skip-all / skip: drop every member of each group.
- manual: leave the plan set unchanged; the caller must decide interactively.

Resolution is a pure transform over the plan list and is safe to re-run
against a re-derived group list. keep-all renumbers within one group only; the
alternative names are not re-checked against other groups or files on disk.
"""

import logging
from pathlib import Path
from typing import Sequence

from audioshelf.models.core import ResolutionStrategy
from audioshelf.models.plan import DuplicateGroup, RenamePlan

logger = logging.getLogger(__name__)


def suggest_alternative_name(plan: RenamePlan, index: int = 1) -> RenamePlan:
    """Return a copy of *plan* named ``<name> (index).<ext>``.

    The destination path is rewritten so its basename stays equal to the new
    name.
    """
    suffix = f".{plan.extension}" if plan.extension else ""
    if suffix and plan.new_name.lower().endswith(suffix.lower()):
        stem = plan.new_name[: -len(suffix)]
        suffix = plan.new_name[-len(suffix) :]
    else:
        stem, suffix = plan.new_name, ""
    alternative = f"{stem} ({index}){suffix}"
    return plan.model_copy(
        update={
            "new_name": alternative,
            "new_path": str(Path(plan.new_path).with_name(alternative)),
            "is_alternative": True,
        }
    )


def needs_manual_resolution(
    groups: Sequence[DuplicateGroup], strategy: ResolutionStrategy
) -> bool:
    """True when duplicates remain and the strategy defers to the user."""
    return bool(groups) and ResolutionStrategy(strategy) is ResolutionStrategy.MANUAL


def resolve(
    groups: Sequence[DuplicateGroup],
    strategy: ResolutionStrategy,
    plans: Sequence[RenamePlan],
) -> list[RenamePlan]:
    """Apply *strategy* to every duplicate group.

    Args:
        groups: Duplicate groups, typically from ``DuplicateKeyer.group_by_key``.
        strategy: Resolution strategy.
        plans: The full plan set the groups were derived from.

    Returns:
        The updated plan set, in the original order.
    """
    strategy = ResolutionStrategy(strategy)
    if strategy is ResolutionStrategy.MANUAL:
        if groups:
            logger.info("%d duplicate group(s) left for manual resolution", len(groups))
        return list(plans)

    resolved: dict[str, RenamePlan] = {plan.id: plan for plan in plans}
    for group in groups:
        members = group.plans
        if strategy is ResolutionStrategy.KEEP_FIRST:
            for member in members[1:]:
                resolved.pop(member.id, None)
        elif strategy is ResolutionStrategy.KEEP_ALL:
            for index, member in enumerate(members[1:], start=1):
                current = resolved.get(member.id)
                if current is not None:
                    resolved[member.id] = suggest_alternative_name(current, index)
        else:
            for member in members:
                resolved.pop(member.id, None)
        logger.debug("Resolved group %r with %s", group.key, strategy.value)

    return list(resolved.values())
