"""Intent to reply dispatch."""

from .dispatcher import (
    CLARIFICATION_REPLY,
    ORDER_NOT_FOUND_REPLY,
    PAYMENT_REPLY,
    Dispatcher,
    IDispatcher,
    extract_order_id,
)

__all__ = [
    "Dispatcher",
    "IDispatcher",
    "extract_order_id",
    "PAYMENT_REPLY",
    "CLARIFICATION_REPLY",
    "ORDER_NOT_FOUND_REPLY",
]
