"""Intent-related data models."""

from dataclasses import dataclass
from enum import Enum


class Intent(str, Enum):
    """Closed set of intents a message can be classified into."""

    DELIVERY = "delivery"
    PAYMENT = "payment"
    RETURN = "return"
    UNKNOWN = "unknown"


# Label order of the trained model; arg-max ties resolve to the first entry.
CLASSIFIED_INTENTS: tuple[Intent, ...] = (
    Intent.DELIVERY,
    Intent.PAYMENT,
    Intent.RETURN,
)


@dataclass(frozen=True)
class ClassificationResult:
    """Outcome of classifying one token sequence."""

    intent: Intent
    raw_scores: tuple[float, ...] | None = None  # diagnostics only
