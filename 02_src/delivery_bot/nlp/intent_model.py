"""Trained intent model artifact.

The model is a joblib bundle produced by scikit-learn tooling::

    {"vectorizer": <fitted transformer>, "model": <fitted classifier>,
     "labels": ["delivery", "payment", "return"], "version": "..."}

``labels`` and ``version`` are optional. Without ``labels`` the estimator's
``classes_`` are used, falling back to the default intent order.
"""

from pathlib import Path
from typing import Any, Protocol, Sequence

import joblib
import numpy as np

from ..logging_config import get_logger
from ..models import CLASSIFIED_INTENTS

logger = get_logger(__name__)


class IIntentModel(Protocol):
    """Inference surface of a loaded intent model."""

    labels: Sequence[str]

    def embed(self, text: str) -> np.ndarray:
        """Return a fixed-length embedding for text."""
        ...

    def predict(self, embedding: np.ndarray) -> np.ndarray:
        """Return a score vector aligned with labels."""
        ...


class IntentModel:
    """Vectorizer + classifier pair loaded from disk."""

    def __init__(
        self,
        vectorizer: Any,
        estimator: Any,
        labels: Sequence[str] | None = None,
        version: str | None = None,
    ):
        self._vectorizer = vectorizer
        self._estimator = estimator
        self.version = version

        if labels is None:
            classes = getattr(estimator, "classes_", None)
            labels = (
                [str(c) for c in classes]
                if classes is not None
                else [intent.value for intent in CLASSIFIED_INTENTS]
            )
        self.labels = list(labels)

    def embed(self, text: str) -> np.ndarray:
        """Vectorize text into a dense 1-D vector."""
        matrix = self._vectorizer.transform([text])
        if hasattr(matrix, "toarray"):
            matrix = matrix.toarray()
        return np.asarray(matrix, dtype=float)[0]

    def predict(self, embedding: np.ndarray) -> np.ndarray:
        """Score an embedding against every label."""
        batch = np.asarray(embedding, dtype=float).reshape(1, -1)
        if hasattr(self._estimator, "predict_proba"):
            scores = self._estimator.predict_proba(batch)
        else:
            scores = self._estimator.decision_function(batch)
        return np.asarray(scores, dtype=float)[0]


def load_intent_model(path: str | Path) -> IntentModel:
    """
    Load an intent model bundle from disk.

    Args:
        path: Path to the joblib bundle

    Returns:
        Loaded IntentModel

    Raises:
        FileNotFoundError: If the bundle does not exist
        ValueError: If the bundle is missing the vectorizer or model
    """
    model_path = Path(path)
    if not model_path.exists():
        raise FileNotFoundError(f"Intent model not found: {model_path}")

    bundle = joblib.load(model_path)
    if not isinstance(bundle, dict):
        raise ValueError(f"Intent model bundle must be a dict, got {type(bundle).__name__}")

    vectorizer = bundle.get("vectorizer")
    estimator = bundle.get("model")
    if vectorizer is None or estimator is None:
        raise ValueError("Intent model bundle requires 'vectorizer' and 'model'")

    model = IntentModel(
        vectorizer=vectorizer,
        estimator=estimator,
        labels=bundle.get("labels"),
        version=bundle.get("version"),
    )
    logger.info(
        "Loaded intent model from %s", model_path,
        extra={"context": {"labels": model.labels, "version": model.version}},
    )
    return model
