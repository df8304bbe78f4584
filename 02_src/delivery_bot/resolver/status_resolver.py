"""Order status resolver backed by the delivery service HTTP API."""

import asyncio
from typing import Protocol
from urllib.parse import quote

import httpx

from ..errors import ResolverFailure
from ..logging_config import get_logger
from ..models import DeliveryStatus

logger = get_logger(__name__)


class IStatusResolver(Protocol):
    """Turns an order id into a delivery status."""

    async def resolve_delivery_status(
        self, order_id: str | None
    ) -> DeliveryStatus | None:
        """Return the order's status, or None if unknown or unreachable."""
        ...


class StatusResolver:
    """
    Looks up delivery status with a single GET per order.

    Not found and unreachable both resolve to None. They are told apart in
    the logs through the "outcome" context key.
    """

    def __init__(
        self,
        url_template: str,
        timeout: float,
        client: httpx.AsyncClient | None = None,
    ):
        self._url_template = url_template
        self._timeout = timeout
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))

    async def resolve_delivery_status(
        self, order_id: str | None
    ) -> DeliveryStatus | None:
        """Return the order's status, or None if unknown or unreachable."""
        if not order_id:
            return None

        try:
            status = await self._fetch_status(order_id)
        except ResolverFailure as e:
            logger.error(
                f"Delivery API error: {e.message}",
                extra={"context": {"outcome": "unavailable", **e.details}},
            )
            return None

        if status is None:
            logger.info(
                f"Order {order_id} not found",
                extra={"context": {"outcome": "not_found", "order_id": order_id}},
            )
            return None

        return DeliveryStatus(order_id=order_id, status=status)

    async def _fetch_status(self, order_id: str) -> str | None:
        """Fetch the status field. Returns None when the order is not found."""
        url = self._url_template.format(order_id=quote(order_id, safe=""))
        details = {"order_id": order_id, "url": url}

        try:
            # httpx timeouts are per phase; bound the whole request as well
            response = await asyncio.wait_for(self._client.get(url), self._timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise ResolverFailure("Timed out", details=details) from e
        except httpx.HTTPError as e:
            raise ResolverFailure(f"Transport error: {e}", details=details) from e

        if response.status_code == httpx.codes.NOT_FOUND:
            return None
        if not response.is_success:
            raise ResolverFailure(
                f"Unexpected status {response.status_code}",
                details={**details, "status_code": response.status_code},
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise ResolverFailure("Malformed JSON payload", details=details) from e

        status = payload.get("status") if isinstance(payload, dict) else None
        if not isinstance(status, str) or not status:
            return None
        return status

    async def close(self) -> None:
        """Close the HTTP client if this resolver created it."""
        if self._owns_client:
            await self._client.aclose()
