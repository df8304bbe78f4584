"""Tests for StatusResolver."""

import asyncio
import logging

import httpx
import pytest

from delivery_bot.models import DeliveryStatus
from delivery_bot.resolver import StatusResolver

URL_TEMPLATE = "https://api.delivery.test/orders/{order_id}"


def _resolver(handler) -> StatusResolver:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return StatusResolver(URL_TEMPLATE, timeout=1.0, client=client)


def _outcomes(caplog) -> list[str]:
    return [
        r.context["outcome"]
        for r in caplog.records
        if hasattr(r, "context") and "outcome" in r.context
    ]


class TestStatusResolverFound:
    """Tests for successful lookups."""

    @pytest.mark.asyncio
    async def test_returns_status(self):
        """Test that a 200 with a status field yields a DeliveryStatus."""
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"status": "in transit"})

        resolver = _resolver(handler)

        result = await resolver.resolve_delivery_status("12345")

        assert result == DeliveryStatus(order_id="12345", status="in transit")
        assert len(requests) == 1
        assert requests[0].method == "GET"
        assert str(requests[0].url) == "https://api.delivery.test/orders/12345"


class TestStatusResolverAbsent:
    """Tests for lookups that resolve to no status."""

    @pytest.mark.asyncio
    async def test_no_order_id_makes_no_request(self):
        """Test that a missing order id skips the network call."""
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"status": "delivered"})

        resolver = _resolver(handler)

        assert await resolver.resolve_delivery_status(None) is None
        assert requests == []

    @pytest.mark.asyncio
    async def test_not_found(self, caplog):
        """Test that a 404 resolves to None and is logged as not_found."""
        resolver = _resolver(lambda request: httpx.Response(404))

        with caplog.at_level(logging.INFO):
            assert await resolver.resolve_delivery_status("1") is None

        assert _outcomes(caplog) == ["not_found"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [{"state": "delivered"}, {"status": None}, {"status": 7}, ["delivered"]],
    )
    async def test_payload_without_status(self, payload):
        """Test that a payload without a string status resolves to None."""
        resolver = _resolver(lambda request: httpx.Response(200, json=payload))

        assert await resolver.resolve_delivery_status("1") is None

    @pytest.mark.asyncio
    async def test_server_error(self, caplog):
        """Test that a 5xx resolves to None and is logged as unavailable."""
        resolver = _resolver(lambda request: httpx.Response(503))

        with caplog.at_level(logging.INFO):
            assert await resolver.resolve_delivery_status("1") is None

        assert _outcomes(caplog) == ["unavailable"]

    @pytest.mark.asyncio
    async def test_invalid_json(self, caplog):
        """Test that a non-JSON body resolves to None."""
        resolver = _resolver(
            lambda request: httpx.Response(200, content=b"<html>oops</html>")
        )

        with caplog.at_level(logging.INFO):
            assert await resolver.resolve_delivery_status("1") is None

        assert _outcomes(caplog) == ["unavailable"]

    @pytest.mark.asyncio
    async def test_transport_error(self, caplog):
        """Test that connection errors are absorbed."""

        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        resolver = _resolver(handler)

        with caplog.at_level(logging.INFO):
            assert await resolver.resolve_delivery_status("1") is None

        assert _outcomes(caplog) == ["unavailable"]

    @pytest.mark.asyncio
    async def test_timeout(self):
        """Test that timeouts are absorbed."""

        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        resolver = _resolver(handler)

        assert await resolver.resolve_delivery_status("1") is None

    @pytest.mark.asyncio
    async def test_slow_response_bounded_by_total_timeout(self, caplog):
        """Test that a response slower than the timeout overall is abandoned."""

        async def handler(request):
            await asyncio.sleep(1.0)
            return httpx.Response(200, json={"status": "delivered"})

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        resolver = StatusResolver(URL_TEMPLATE, timeout=0.05, client=client)

        with caplog.at_level(logging.INFO):
            assert await resolver.resolve_delivery_status("1") is None

        assert _outcomes(caplog) == ["unavailable"]

    @pytest.mark.asyncio
    async def test_no_retry(self):
        """Test that a failed lookup is attempted exactly once."""
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(500)

        resolver = _resolver(handler)
        await resolver.resolve_delivery_status("1")

        assert len(requests) == 1


class TestStatusResolverClose:
    """Tests for StatusResolver.close()."""

    @pytest.mark.asyncio
    async def test_does_not_close_injected_client(self):
        """Test that an injected client stays open."""
        client = httpx.AsyncClient(
            transport=httpx.MockTransport(lambda r: httpx.Response(404))
        )
        resolver = StatusResolver(URL_TEMPLATE, timeout=1.0, client=client)

        await resolver.close()

        assert not client.is_closed
        await client.aclose()

    @pytest.mark.asyncio
    async def test_closes_owned_client(self):
        """Test that a resolver-created client is closed."""
        resolver = StatusResolver(URL_TEMPLATE, timeout=1.0)

        await resolver.close()

        assert resolver._client.is_closed
