"""Intent classification over normalized tokens."""

import asyncio
from typing import Protocol

import numpy as np

from ..errors import ClassificationFailure
from ..logging_config import get_logger
from ..models import ClassificationResult, Intent
from .intent_model import IIntentModel
from .model_state import ModelState

logger = get_logger(__name__)


class IIntentClassifier(Protocol):
    """Maps a token sequence to an intent."""

    async def classify(self, tokens: list[str]) -> ClassificationResult:
        """Classify tokens. Raises ModelNotReady before the model is loaded."""
        ...


class IntentClassifier:
    """Arg-max classifier on top of the loaded intent model."""

    def __init__(self, model_state: ModelState):
        self._model_state = model_state

    async def classify(self, tokens: list[str]) -> ClassificationResult:
        """Classify tokens. Raises ModelNotReady before the model is loaded."""
        model = await self._model_state.get()
        text = " ".join(tokens)

        try:
            scores = await asyncio.to_thread(_score, model, text)
        except ClassificationFailure as e:
            logger.warning(
                f"Classification failed, falling back to unknown: {e.message}",
                extra={"context": e.details},
            )
            return ClassificationResult(intent=Intent.UNKNOWN)

        intent = select_intent(scores, model.labels)
        logger.debug(
            f"Classified as {intent.value}",
            extra={"context": {"scores": scores.tolist()}},
        )
        return ClassificationResult(
            intent=intent, raw_scores=tuple(float(s) for s in scores)
        )


def _score(model: IIntentModel, text: str) -> np.ndarray:
    """Embed text and score it, validating both vectors."""
    try:
        embedding = np.asarray(model.embed(text), dtype=float)
        if embedding.ndim != 1 or embedding.size == 0:
            raise ClassificationFailure(
                "Embedding must be a non-empty vector",
                details={"shape": list(embedding.shape)},
            )

        scores = np.asarray(model.predict(embedding), dtype=float)
    except ClassificationFailure:
        raise
    except Exception as e:
        raise ClassificationFailure(
            f"Model inference error: {e}", details={"error": type(e).__name__}
        ) from e

    if scores.ndim != 1 or scores.size == 0:
        raise ClassificationFailure(
            "Prediction must be a non-empty vector",
            details={"shape": list(scores.shape)},
        )
    if not np.all(np.isfinite(scores)):
        raise ClassificationFailure("Prediction contains non-finite scores")
    return scores


def select_intent(scores: np.ndarray, labels: list[str]) -> Intent:
    """Pick the highest scoring label; ties go to the first label."""
    index = int(np.argmax(scores))
    if index >= len(labels):
        return Intent.UNKNOWN

    try:
        intent = Intent(labels[index])
    except ValueError:
        logger.warning(f"Model produced unsupported label: {labels[index]!r}")
        return Intent.UNKNOWN
    return intent
