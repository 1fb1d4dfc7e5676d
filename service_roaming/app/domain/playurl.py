"""
Playurl request pipeline: authenticate, authorize, relay.
"""

from typing import Optional, TYPE_CHECKING

from shared.logging import get_logger, set_account_context
from shared.errors import BlockRequest
from .allowlist import AllowList
from .identity_resolver import IdentityResolver
from .models import Credential

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from shared.metrics import MetricsCollector
    from ..adapters.bili_client import BiliApiClient


class PlayUrlHandler:
    """Run one playurl request through the gateway pipeline."""

    def __init__(
        self,
        resolver: IdentityResolver,
        allow_list: AllowList,
        client: "BiliApiClient",
        metrics: Optional["MetricsCollector"] = None,
    ):
        self.resolver = resolver
        self.allow_list = allow_list
        self.client = client
        self.metrics = metrics
        self.logger = get_logger("roaming.playurl")

    async def authorize(self, credential: Credential, user_agent: str) -> int:
        """Resolve the credential and check it against the allow-list."""
        identity = await self.resolver.resolve(credential, user_agent)
        set_account_context(identity.mid)

        try:
            self.allow_list.check(identity.mid)
        except BlockRequest:
            if self.metrics:
                self.metrics.record_blocked_request()
            self.logger.warning("Request blocked", mid=identity.mid)
            raise

        return identity.mid

    async def handle(self, credential: Credential, path: str, query_string: str, user_agent: str) -> str:
        """Authorize and relay; returns the upstream body verbatim."""
        await self.authorize(credential, user_agent)

        body = await self.client.get_playurl(path, query_string, user_agent)
        self.logger.debug("Relayed playurl response", path=path, body=body)
        return body
