"""Response dispatcher: maps a classified intent to a reply."""

import re
from typing import Awaitable, Callable, Protocol

from ..logging_config import get_logger
from ..models import Intent
from ..resolver import IStatusResolver

logger = get_logger(__name__)

ORDER_STATUS_REPLY = "Order status: {status}"
ORDER_NOT_FOUND_REPLY = "Order not found."
PAYMENT_REPLY = "Payment is accepted by card or cash."
CLARIFICATION_REPLY = "Please clarify your question."

_ORDER_ID_RE = re.compile(r"[0-9]+")


def extract_order_id(text: str) -> str | None:
    """Return the first run of digits in text, if any."""
    match = _ORDER_ID_RE.search(text)
    return match.group(0) if match else None


class IDispatcher(Protocol):
    """Produces the user-facing reply for an intent."""

    async def dispatch(self, intent: Intent, text: str) -> str:
        """Return the reply for intent, given the original message text."""
        ...


Rule = Callable[["Dispatcher", str], Awaitable[str]]


class Dispatcher:
    """Applies the intent rule table."""

    def __init__(self, resolver: IStatusResolver):
        self._resolver = resolver

    async def dispatch(self, intent: Intent, text: str) -> str:
        """Return the reply for intent, given the original message text."""
        return await RULES[intent](self, text)

    async def _delivery(self, text: str) -> str:
        order_id = extract_order_id(text)
        if order_id is None:
            logger.debug("No order id in delivery message")
            return ORDER_NOT_FOUND_REPLY

        status = await self._resolver.resolve_delivery_status(order_id)
        if status is None:
            return ORDER_NOT_FOUND_REPLY
        return ORDER_STATUS_REPLY.format(status=status.status)

    async def _payment(self, text: str) -> str:
        return PAYMENT_REPLY

    async def _clarify(self, text: str) -> str:
        return CLARIFICATION_REPLY


RULES: dict[Intent, Rule] = {
    Intent.DELIVERY: Dispatcher._delivery,
    Intent.PAYMENT: Dispatcher._payment,
    Intent.RETURN: Dispatcher._clarify,
    Intent.UNKNOWN: Dispatcher._clarify,
}

# Every intent needs a rule; fail on import rather than at request time.
_missing = set(Intent) - set(RULES)
if _missing:
    raise RuntimeError(
        f"No dispatch rule for intents: {sorted(i.value for i in _missing)}"
    )
