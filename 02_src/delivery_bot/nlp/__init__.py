"""Text normalization and intent classification."""

from .classifier import IIntentClassifier, IntentClassifier
from .intent_model import IIntentModel, IntentModel, load_intent_model
from .model_state import LoadState, ModelState
from .normalizer import normalize

__all__ = [
    "normalize",
    "IIntentModel",
    "IntentModel",
    "load_intent_model",
    "LoadState",
    "ModelState",
    "IIntentClassifier",
    "IntentClassifier",
]
