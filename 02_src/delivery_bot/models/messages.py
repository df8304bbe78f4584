"""Message-related data models."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


@dataclass(frozen=True)
class Message:
    """An incoming chat message."""

    user_id: str
    text: str
    received_at: datetime


@dataclass(frozen=True)
class DeliveryStatus:
    """Delivery status reported by the order status service."""

    order_id: str
    status: str


@dataclass(frozen=True)
class DialogRecord:
    """One processed exchange, appended to the dialog history."""

    user_id: str
    message: str
    intent: str
    timestamp: datetime


class ErrorKind(str, Enum):
    """Failures that reach the caller."""

    MODEL_NOT_READY = "model_not_ready"
    PROCESSING_ERROR = "processing_error"


@dataclass(frozen=True)
class ReplyResult:
    """Pipeline result: either a response or an error kind."""

    response: str | None = None
    error_kind: ErrorKind | None = None

    @property
    def ok(self) -> bool:
        return self.error_kind is None

    @classmethod
    def success(cls, response: str) -> "ReplyResult":
        return cls(response=response)

    @classmethod
    def failure(cls, error_kind: ErrorKind) -> "ReplyResult":
        return cls(error_kind=error_kind)
