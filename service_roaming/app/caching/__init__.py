"""
Roaming caching package.

Holds the process-lifetime identity cache shared by every request. Entries
are never evicted; a resolved access key stays mapped to its account.
"""

from .identity_cache import IdentityCache

__all__ = ["IdentityCache"]
