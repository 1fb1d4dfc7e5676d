"""
Process-lifetime identity cache keyed by access key.
"""

import threading
from typing import Dict, Optional, TYPE_CHECKING

from shared.logging import get_logger

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from ..domain.models import Identity


class IdentityCache:
    """Shared mapping from access key to resolved identity.

    The lock guards a single dict access and is never held while awaiting,
    so a slow upstream resolution for one key does not stall other keys.
    Entries are never updated in place or removed; a concurrent resolution
    for the same key may overwrite with an equivalent identity.
    """

    def __init__(self):
        self._entries: Dict[str, "Identity"] = {}
        self._lock = threading.Lock()
        self.logger = get_logger("roaming.identity_cache")

    def lookup(self, access_key: str) -> Optional["Identity"]:
        with self._lock:
            return self._entries.get(access_key)

    def insert(self, access_key: str, identity: "Identity") -> None:
        with self._lock:
            replaced = access_key in self._entries
            self._entries[access_key] = identity

        if replaced:
            self.logger.debug("Identity cache entry overwritten", mid=identity.mid)

    def __contains__(self, access_key: str) -> bool:
        with self._lock:
            return access_key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
