"""Duplicate detection for rename plans.

Two plans collide when they compute the same key under a detection method:
- ``name``: lower-cased new file name.
- ``name+size``: lower-cased new file name plus the file's byte size.
- ``content``: digest of the file bytes from an injected hash provider.

Design:
- Content digests are cached in a side table keyed by plan id, owned by a
  DuplicateKeyer instance. Computing the key twice for the same plan never
  re-hashes, and separate keyers never share state.
- Groups are returned in first-seen key order and only when they have two or
  more members.
- Hash provider failures propagate to the caller unchanged.
"""

import logging
from typing import Any, Awaitable, Callable, Iterable, Optional, Self, Sequence

from audioshelf.models.core import DuplicateMethod
from audioshelf.models.plan import DuplicateGroup, RenamePlan

logger = logging.getLogger(__name__)

HashProvider = Callable[[Any], Awaitable[str]]


class DuplicateKeyer:
    """Computes duplicate keys and groups colliding plans."""

    def __init__(self: Self, hash_provider: Optional[HashProvider] = None) -> None:
        """Initialize the keyer.

        Args:
            hash_provider: Coroutine function mapping a FileRecord content handle
                to a hex digest. Required only for the ``content`` method.
        """
        self._hash_provider = hash_provider
        self._digests: dict[str, str] = {}

    def cached_digest(self: Self, plan_id: str) -> Optional[str]:
        """Return the cached content digest for *plan_id*, if any."""
        return self._digests.get(plan_id)

    def key(self: Self, plan: RenamePlan, method: DuplicateMethod) -> str:
        """Compute a key without suspending.

        Raises:
            ValueError: For the ``content`` method when no digest is cached yet.
        """
        method = DuplicateMethod(method)
        if method is DuplicateMethod.NAME:
            return plan.new_name.lower()
        if method is DuplicateMethod.NAME_SIZE:
            return f"{plan.new_name.lower()}_{plan.file.size}"
        digest = self._digests.get(plan.id)
        if digest is None:
            raise ValueError(f"No content digest computed yet for plan {plan.id}")
        return digest

    async def compute_key(self: Self, plan: RenamePlan, method: DuplicateMethod) -> str:
        """Compute the duplicate key for *plan* under *method*.

        Only the ``content`` method suspends, and only the first time a plan is
        seen; later calls are a cache lookup.
        """
        method = DuplicateMethod(method)
        if method is not DuplicateMethod.CONTENT or plan.id in self._digests:
            return self.key(plan, method)
        if self._hash_provider is None:
            raise ValueError("Content duplicate detection needs a hash provider")
        digest = await self._hash_provider(plan.file.handle)
        self._digests[plan.id] = digest
        return digest

    async def group_by_key(
        self: Self, plans: Sequence[RenamePlan], method: DuplicateMethod
    ) -> list[DuplicateGroup]:
        """Group *plans* by duplicate key.

        Plans are keyed sequentially in input order. Returned group members are
        copies of the plans with ``dupe_key`` filled in.

        Returns:
            Groups with two or more members, in first-seen key order.
        """
        method = DuplicateMethod(method)
        keyed = [(await self.compute_key(plan, method), plan) for plan in plans]
        return _build_groups(keyed, method)


def _build_groups(
    keyed: Sequence[tuple[str, RenamePlan]], method: DuplicateMethod
) -> list[DuplicateGroup]:
    buckets: dict[str, list[RenamePlan]] = {}
    for key, plan in keyed:
        buckets.setdefault(key, []).append(plan.model_copy(update={"dupe_key": key}))

    groups = [
        DuplicateGroup(key=key, plans=members, method=method)
        for key, members in buckets.items()
        if len(members) > 1
    ]
    if groups:
        logger.info(
            "Found %d duplicate group(s) among %d plans using %s",
            len(groups),
            len(keyed),
            method.value,
        )
    return groups


def group_duplicates(
    plans: Sequence[RenamePlan], method: DuplicateMethod
) -> list[DuplicateGroup]:
    """Group colliding plans by name or name+size without an event loop.

    Raises:
        ValueError: For the ``content`` method, which needs find_duplicates.
    """
    method = DuplicateMethod(method)
    if method is DuplicateMethod.CONTENT:
        raise ValueError("Content duplicate detection must use find_duplicates")
    keyer = DuplicateKeyer()
    return _build_groups([(keyer.key(plan, method), plan) for plan in plans], method)


async def find_duplicates(
    plans: Sequence[RenamePlan],
    method: DuplicateMethod,
    hash_provider: Optional[HashProvider] = None,
) -> list[DuplicateGroup]:
    """Group colliding plans with a one-off DuplicateKeyer."""
    if not plans:
        return []
    return await DuplicateKeyer(hash_provider).group_by_key(plans, method)


def would_cause_duplicate(new_path: str, existing_paths: Iterable[str]) -> bool:
    """Return True when *new_path* matches an existing path, ignoring case."""
    normalized = new_path.lower()
    return any(str(path).lower() == normalized for path in existing_paths)
