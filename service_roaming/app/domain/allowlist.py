"""
Account allow-list gate.
"""

from bisect import bisect_left
from typing import Iterable, Tuple

from shared.errors import BlockRequest


class AllowList:
    """Immutable, sorted set of account ids permitted to use the gateway."""

    def __init__(self, account_ids: Iterable[int]):
        # Sorted once here; lookups rely on it for the lifetime of the instance.
        self._ids: Tuple[int, ...] = tuple(sorted(account_ids))

    def __contains__(self, mid: int) -> bool:
        index = bisect_left(self._ids, mid)
        return index < len(self._ids) and self._ids[index] == mid

    def __len__(self) -> int:
        return len(self._ids)

    @property
    def ids(self) -> Tuple[int, ...]:
        return self._ids

    def check(self, mid: int) -> None:
        """Raise ``BlockRequest`` unless ``mid`` is allowed."""
        if mid not in self:
            raise BlockRequest(mid)
