"""
Upstream platform API client for the Roaming Service.
"""

import httpx
from typing import Optional, TYPE_CHECKING

from shared.logging import get_logger
from shared.errors import FailedMakeRequest

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from shared.metrics import MetricsCollector


ACCOUNT_INFO_PATH = "/x/v2/account/myinfo"


class BiliApiClient:
    """Client for the platform's account and playurl hosts."""

    def __init__(
        self,
        account_api_url: str,
        playurl_api_url: str,
        http_client: Optional[httpx.AsyncClient] = None,
        *,
        timeout: float = 5.0,
        metrics: Optional["MetricsCollector"] = None,
    ):
        self.account_api_url = account_api_url.rstrip('/')
        self.playurl_api_url = playurl_api_url.rstrip('/')
        self.http_client = http_client or httpx.AsyncClient(timeout=timeout)
        self.metrics = metrics
        self.logger = get_logger("roaming.bili_client")

    async def get_text(self, url: str, user_agent: str, endpoint: str) -> str:
        """GET ``url`` with the caller's user agent and return the body text."""
        try:
            response = await self.http_client.get(url, headers={"user-agent": user_agent})
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            self.logger.error("Upstream request failed", endpoint=endpoint, error=str(e))
            self._record(endpoint, "error")
            raise FailedMakeRequest() from e

        self._record(endpoint, "ok")
        self.logger.debug(
            "Upstream response",
            endpoint=endpoint,
            status_code=response.status_code
        )
        return response.text

    async def get_account_info(self, signed_query: str, user_agent: str) -> str:
        """Fetch the account-info body for an already signed query."""
        return await self.get_text(
            f"{self.account_api_url}{ACCOUNT_INFO_PATH}?{signed_query}",
            user_agent,
            "account_info"
        )

    async def get_playurl(self, path: str, query_string: str, user_agent: str) -> str:
        """Relay the client's query to the playurl endpoint untouched."""
        url = f"{self.playurl_api_url}{path}"
        if query_string:
            url = f"{url}?{query_string}"
        return await self.get_text(url, user_agent, "playurl")

    async def close(self) -> None:
        await self.http_client.aclose()

    def _record(self, endpoint: str, outcome: str) -> None:
        if self.metrics:
            self.metrics.record_upstream_request(endpoint, outcome)
