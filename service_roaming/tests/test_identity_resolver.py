"""
Unit tests for IdentityResolver and BiliApiClient.
"""

import asyncio
import hashlib
import pytest
import httpx

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from service_roaming.app.adapters.bili_client import BiliApiClient
from service_roaming.app.caching.identity_cache import IdentityCache
from service_roaming.app.domain.identity_resolver import IdentityResolver
from service_roaming.app.domain.models import Credential, Identity
from service_roaming.app.domain.secrets import ANDROID_APPKEY
from shared.errors import FailedGetSecretKey, FailedMakeRequest, FailedParseResponse, WrongResponse
from shared.metrics import MetricsCollector
from shared.test_helpers import StubUpstream, TestDataFactory


USER_AGENT = "Bilibili Freedoooooom/MarkII"


def make_resolver(stub, cache=None, metrics=None):
    client = BiliApiClient("https://app.test", "https://api.test", stub.client(), metrics=metrics)
    return IdentityResolver(
        client,
        cache if cache is not None else IdentityCache(),
        metrics=metrics,
        clock=lambda: 1000000000.7,
    )


class TestIdentityResolver:
    """Test cases for IdentityResolver."""

    @pytest.fixture
    def stub(self):
        return StubUpstream(account_responses={
            "ak": TestDataFactory.account_info_body(42, "x"),
        })

    @pytest.fixture
    def credential(self):
        return Credential(access_key="ak", appkey=ANDROID_APPKEY)

    @pytest.mark.asyncio
    async def test_resolve_success(self, stub, credential):
        resolver = make_resolver(stub)

        identity = await resolver.resolve(credential, USER_AGENT)

        assert identity == Identity(mid=42, name="x")
        assert resolver.cache.lookup("ak") == identity

    @pytest.mark.asyncio
    async def test_signed_request_shape(self, stub, credential):
        resolver = make_resolver(stub)

        await resolver.resolve(credential, USER_AGENT)

        request = stub.account_calls[0]
        origin = "access_key=ak&appkey=1d8b6e7d45233436&ts=1000000000"
        expected_sign = hashlib.md5(
            (origin + "560c52ccd288fed045859ed18bffd973").encode()
        ).hexdigest()
        assert request.url.host == "app.test"
        assert request.url.query.decode() == f"{origin}&sign={expected_sign}"
        assert request.headers["user-agent"] == USER_AGENT

    @pytest.mark.asyncio
    async def test_second_resolve_hits_cache(self, stub, credential):
        metrics = MetricsCollector("roaming")
        resolver = make_resolver(stub, metrics=metrics)

        first = await resolver.resolve(credential, USER_AGENT)
        second = await resolver.resolve(credential, USER_AGENT)

        assert first == second
        assert len(stub.account_calls) == 1
        assert metrics.registry.get_sample_value("identity_cache_hits_total") == 1
        assert metrics.registry.get_sample_value("identity_cache_misses_total") == 1
        assert metrics.registry.get_sample_value("identity_cache_size") == 1

    @pytest.mark.asyncio
    async def test_cache_hit_skips_secret_and_network(self, stub):
        cache = IdentityCache()
        cache.insert("ak", Identity(mid=42, name="x"))
        resolver = make_resolver(stub, cache=cache)

        # An unknown appkey would fail on a miss; a hit never consults it.
        identity = await resolver.resolve(Credential(access_key="ak", appkey="unknown"), USER_AGENT)

        assert identity.mid == 42
        assert stub.requests == []

    @pytest.mark.asyncio
    async def test_unknown_appkey_makes_no_request(self, stub):
        resolver = make_resolver(stub)

        with pytest.raises(FailedGetSecretKey):
            await resolver.resolve(Credential(access_key="ak", appkey="unknown"), USER_AGENT)

        assert stub.requests == []

    @pytest.mark.asyncio
    async def test_upstream_error_passes_through(self, credential):
        stub = StubUpstream(account_responses={"ak": {"code": -1, "message": "invalid"}})
        resolver = make_resolver(stub)

        with pytest.raises(WrongResponse) as exc_info:
            await resolver.resolve(credential, USER_AGENT)

        assert exc_info.value.code == -1
        assert exc_info.value.message == "invalid"
        assert len(resolver.cache) == 0

    @pytest.mark.asyncio
    async def test_success_code_without_data(self, credential):
        stub = StubUpstream(account_responses={"ak": {"code": 0, "data": None}})
        resolver = make_resolver(stub)

        with pytest.raises(FailedParseResponse):
            await resolver.resolve(credential, USER_AGENT)

        assert len(resolver.cache) == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [
        "<html>502 Bad Gateway</html>",
        "",
        '{"message": "no code"}',
        '{"code": 0, "message": "0", "data": {"mid": -5, "name": "x"}}',
        '{"code": 0, "message": "0", "data": {"mid": 4294967296, "name": "x"}}',
        '{"code": 0, "message": "0", "data": {"name": "x"}}',
    ])
    async def test_malformed_body(self, credential, body):
        stub = StubUpstream(account_responses={"ak": body})
        resolver = make_resolver(stub)

        with pytest.raises(FailedParseResponse):
            await resolver.resolve(credential, USER_AGENT)

    @pytest.mark.asyncio
    async def test_transport_failure(self, credential):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = BiliApiClient(
            "https://app.test",
            "https://api.test",
            httpx.AsyncClient(transport=httpx.MockTransport(refuse)),
        )
        resolver = IdentityResolver(client, IdentityCache())

        with pytest.raises(FailedMakeRequest):
            await resolver.resolve(credential, USER_AGENT)

    @pytest.mark.asyncio
    async def test_concurrent_distinct_misses(self):
        count = 25
        stub = StubUpstream(
            account_responses={
                f"ak-{i}": TestDataFactory.account_info_body(i, f"user-{i}") for i in range(count)
            },
            account_delay=0.01,
        )
        resolver = make_resolver(stub)

        identities = await asyncio.wait_for(
            asyncio.gather(*[
                resolver.resolve(Credential(access_key=f"ak-{i}", appkey=ANDROID_APPKEY), USER_AGENT)
                for i in range(count)
            ]),
            timeout=5.0,
        )

        assert [identity.mid for identity in identities] == list(range(count))
        keys = [request.url.params["access_key"] for request in stub.account_calls]
        assert sorted(keys) == sorted(f"ak-{i}" for i in range(count))
        assert len(resolver.cache) == count


class TestBiliApiClient:
    """Test cases for BiliApiClient relay calls."""

    @pytest.mark.asyncio
    async def test_playurl_relays_query_untouched(self):
        stub = StubUpstream(playurl_response="raw body, not json")
        client = BiliApiClient("https://app.test", "https://api.test/", stub.client())
        query = "access_key=ak&appkey=1d8b6e7d45233436&cid=1&fnval=4048&ts=1&sign=abc"

        body = await client.get_playurl("/pgc/player/api/playurl", query, USER_AGENT)

        assert body == "raw body, not json"
        request = stub.playurl_calls[0]
        assert str(request.url) == f"https://api.test/pgc/player/api/playurl?{query}"
        assert request.headers["user-agent"] == USER_AGENT

    @pytest.mark.asyncio
    async def test_playurl_non_2xx_body_returned(self):
        def unavailable(request):
            return httpx.Response(503, text='{"code":-503,"message":"overloaded"}')

        client = BiliApiClient(
            "https://app.test",
            "https://api.test",
            httpx.AsyncClient(transport=httpx.MockTransport(unavailable)),
        )

        body = await client.get_playurl("/pgc/player/web/playurl", "access_key=ak", USER_AGENT)

        assert body == '{"code":-503,"message":"overloaded"}'

    @pytest.mark.asyncio
    async def test_playurl_transport_failure(self):
        metrics = MetricsCollector("roaming")
        stub = StubUpstream(fail_playurl=True)
        client = BiliApiClient("https://app.test", "https://api.test", stub.client(), metrics=metrics)

        with pytest.raises(FailedMakeRequest):
            await client.get_playurl("/pgc/player/api/playurl", "access_key=ak", USER_AGENT)

        assert metrics.registry.get_sample_value(
            "upstream_requests_total", {"endpoint": "playurl", "outcome": "error"}
        ) == 1

    @pytest.mark.asyncio
    async def test_unbuildable_url(self):
        metrics = MetricsCollector("roaming")
        stub = StubUpstream()
        client = BiliApiClient("https://app.test", "https://api.test", stub.client(), metrics=metrics)

        with pytest.raises(FailedMakeRequest):
            await client.get_account_info("access_key=a\x00b&appkey=x&ts=1&sign=y", USER_AGENT)

        assert stub.requests == []
        assert metrics.registry.get_sample_value(
            "upstream_requests_total", {"endpoint": "account_info", "outcome": "error"}
        ) == 1

    @pytest.mark.asyncio
    async def test_close(self):
        stub = StubUpstream()
        client = BiliApiClient("https://app.test", "https://api.test", stub.client())

        await client.close()

        assert client.http_client.is_closed
