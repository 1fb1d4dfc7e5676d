"""
Access key to account resolution for the Roaming Service.
"""

import time
from typing import Callable, Optional, TYPE_CHECKING

from pydantic import ValidationError

from shared.logging import get_logger
from shared.errors import FailedParseResponse, WrongResponse
from .models import AccountInfoResponse, Credential, Identity
from .secrets import resolve_secret_key
from .signing import sign_query

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from shared.metrics import MetricsCollector
    from ..adapters.bili_client import BiliApiClient
    from ..caching.identity_cache import IdentityCache


class IdentityResolver:
    """Resolve credentials to identities, consulting the cache first."""

    def __init__(
        self,
        client: "BiliApiClient",
        cache: "IdentityCache",
        *,
        metrics: Optional["MetricsCollector"] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.client = client
        self.cache = cache
        self.metrics = metrics
        self.clock = clock
        self.logger = get_logger("roaming.identity_resolver")

    async def resolve(self, credential: Credential, user_agent: str) -> Identity:
        """Return the identity behind ``credential``.

        A cache hit returns without any signing or network work. On a miss
        the account-info endpoint is called once; there are no retries.
        """
        cached = self.cache.lookup(credential.access_key)
        if cached is not None:
            self.logger.info("Identity cache hit", mid=cached.mid, name=cached.name)
            self._record_lookup(hit=True)
            return cached

        self._record_lookup(hit=False)
        secret = resolve_secret_key(credential.appkey)
        signed = sign_query(credential.access_key, credential.appkey, int(self.clock()), secret)

        body = await self.client.get_account_info(signed.query, user_agent)

        try:
            response = AccountInfoResponse.model_validate_json(body)
        except ValidationError as e:
            self.logger.warning("Account info response rejected", error=str(e))
            raise FailedParseResponse() from e

        if response.code != 0:
            raise WrongResponse(response.code, response.message)

        identity = response.data
        if identity is None:
            raise FailedParseResponse()

        self.cache.insert(credential.access_key, identity)
        if self.metrics:
            self.metrics.set_cache_size(len(self.cache))

        self.logger.info("Identity cached", mid=identity.mid, name=identity.name)
        return identity

    def _record_lookup(self, hit: bool) -> None:
        if self.metrics:
            self.metrics.record_cache_lookup(hit)
