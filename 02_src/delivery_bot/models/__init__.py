"""Core data models for the delivery chatbot."""

from .intents import CLASSIFIED_INTENTS, ClassificationResult, Intent
from .messages import DeliveryStatus, DialogRecord, ErrorKind, Message, ReplyResult

__all__ = [
    # Intents
    "Intent",
    "CLASSIFIED_INTENTS",
    "ClassificationResult",
    # Messages
    "Message",
    "DeliveryStatus",
    "DialogRecord",
    "ErrorKind",
    "ReplyResult",
]
