"""
Roaming service for the Roaming Access Gateway.
"""

import argparse
import sys
from typing import Any, Dict, Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from shared.base_service import BaseService
from shared.config import ConfigFileError, ServiceConfig, get_config
from shared.errors import FailedMakeRequest, WrongRequest
from shared.logging import configure_logging, get_logger
from service_roaming.app.adapters import BiliApiClient
from service_roaming.app.caching import IdentityCache
from service_roaming.app.domain import AllowList, Credential, IdentityResolver, PlayUrlHandler


API_PLAYURL_PATH = "/pgc/player/api/playurl"
WEB_PLAYURL_PATH = "/pgc/player/web/playurl"


class RoamingService(BaseService):
    """Playurl gateway service implementation."""

    def __init__(self, config: Optional[ServiceConfig] = None, http_client: Optional[httpx.AsyncClient] = None):
        super().__init__("roaming", config)
        self.identity_cache = IdentityCache()
        self.allow_list = AllowList(self.config.users)
        self.bili_client = BiliApiClient(
            self.config.account_api_url,
            self.config.playurl_api_url,
            http_client,
            timeout=self.config.upstream_timeout,
            metrics=self.metrics,
        )
        self.identity_resolver = IdentityResolver(
            self.bili_client,
            self.identity_cache,
            metrics=self.metrics,
        )
        self.playurl_handler = PlayUrlHandler(
            self.identity_resolver,
            self.allow_list,
            self.bili_client,
            metrics=self.metrics,
        )

        if not len(self.allow_list):
            self.logger.warning("Allow-list is empty; every request will be blocked")

        self._setup_playurl_routes()

        # Expose service instance via app state for introspection/testing
        self.app.state.roaming_service = self

    def _setup_playurl_routes(self):
        """Set up playurl relay routes."""

        @self.app.get(API_PLAYURL_PATH)
        async def playurl(request: Request):
            """Playurl with a full access_key/appkey credential."""
            credential = _credential_from_query(request, web=False)
            return await self._relay(request, credential, API_PLAYURL_PATH)

        @self.app.get(WEB_PLAYURL_PATH)
        async def playurl_web(request: Request):
            """Playurl with only an access_key; the Android appkey is assumed."""
            credential = _credential_from_query(request, web=True)
            return await self._relay(request, credential, WEB_PLAYURL_PATH)

    async def _relay(self, request: Request, credential: Credential, path: str) -> PlainTextResponse:
        user_agent = request.headers.get("user-agent")
        if user_agent is None:
            raise FailedMakeRequest()

        body = await self.playurl_handler.handle(
            credential,
            path,
            request.url.query,
            user_agent,
        )
        return PlainTextResponse(body)

    async def _shutdown(self):
        await self.bili_client.close()

    def _health_details(self) -> Dict[str, Any]:
        return {
            "identity_cache_size": len(self.identity_cache),
            "allowed_accounts": len(self.allow_list),
        }


def _credential_from_query(request: Request, web: bool) -> Credential:
    access_key = request.query_params.get("access_key")
    if not access_key:
        raise WrongRequest()
    if web:
        return Credential.from_web(access_key)

    appkey = request.query_params.get("appkey")
    if not appkey:
        raise WrongRequest()
    return Credential(access_key=access_key, appkey=appkey)


def create_app(config: Optional[ServiceConfig] = None, http_client: Optional[httpx.AsyncClient] = None) -> FastAPI:
    """Create FastAPI application."""
    service = RoamingService(config, http_client)
    return service.app


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Run the playurl roaming gateway")
    parser.add_argument("--config", help="JSON config file with address, port and users")
    args = parser.parse_args(argv)

    try:
        config = get_config(args.config)
    except (ConfigFileError, ValidationError) as e:
        configure_logging("roaming")
        get_logger("roaming.main").error("Failed to parse config", error=str(e))
        sys.exit(1)

    service = RoamingService(config)
    service.logger.info(
        "Starting roaming gateway",
        host=config.host,
        port=config.port,
        allowed_accounts=len(service.allow_list)
    )
    service.run()


if __name__ == "__main__":
    main()
