"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import joblib
import numpy as np
import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from delivery_bot.models import DeliveryStatus  # noqa: E402


TRAINING_DATA = [
    ("where is my order", "delivery"),
    ("track my delivery", "delivery"),
    ("when will my package arrive", "delivery"),
    ("order shipping status", "delivery"),
    ("how can i pay", "payment"),
    ("do you accept credit card", "payment"),
    ("payment methods", "payment"),
    ("can i pay with cash", "payment"),
    ("i want to return the item", "return"),
    ("how do i return a product", "return"),
    ("refund policy", "return"),
    ("send the item back for a refund", "return"),
]


class FakeIntentModel:
    """Intent model returning fixed scores."""

    def __init__(self, scores, labels=("delivery", "payment", "return")):
        self.labels = list(labels)
        self.scores = np.asarray(scores, dtype=float)
        self.embedded: list[str] = []

    def embed(self, text: str) -> np.ndarray:
        self.embedded.append(text)
        return np.ones(4)

    def predict(self, embedding: np.ndarray) -> np.ndarray:
        return self.scores


class StubResolver:
    """Resolver returning a fixed status and recording calls."""

    def __init__(self, status: str | None = None):
        self.status = status
        self.calls: list[str | None] = []

    async def resolve_delivery_status(self, order_id):
        self.calls.append(order_id)
        if order_id is None or self.status is None:
            return None
        return DeliveryStatus(order_id=order_id, status=self.status)


class FailingStorage:
    """Storage whose writes always fail."""

    def __init__(self):
        self.attempts = 0

    async def append_dialog_record(self, record) -> None:
        self.attempts += 1
        raise RuntimeError("disk full")


@pytest_asyncio.fixture
async def storage():
    """Create in-memory storage for testing."""
    from delivery_bot.storage import Storage

    st = Storage(":memory:")
    await st.init()
    yield st
    await st.close()


@pytest.fixture
def delivery_model():
    """Model that always favours the delivery intent."""
    return FakeIntentModel([0.8, 0.1, 0.1])


@pytest.fixture
def model_state(delivery_model):
    """ModelState with the delivery model already loaded."""
    from delivery_bot.nlp import ModelState

    state = ModelState(ready_timeout=0.5)
    state.set_model(delivery_model)
    return state


@pytest.fixture
def stub_resolver():
    """Resolver that reports every order as in transit."""
    return StubResolver(status="in transit")


@pytest.fixture
def recorder(storage):
    """DialogRecorder over in-memory storage."""
    from delivery_bot.recorder import DialogRecorder

    return DialogRecorder(storage, timeout=1.0)


@pytest.fixture
def intent_model_path(tmp_path):
    """Train a small scikit-learn model and save it as a joblib bundle."""
    from sklearn.feature_extraction.text import TfidfVectorizer
    from sklearn.linear_model import LogisticRegression

    texts = [text for text, _ in TRAINING_DATA]
    labels = [label for _, label in TRAINING_DATA]

    vectorizer = TfidfVectorizer()
    features = vectorizer.fit_transform(texts)
    classifier = LogisticRegression(C=100.0, max_iter=1000)
    classifier.fit(features, labels)

    path = tmp_path / "intent_model.joblib"
    joblib.dump(
        {"vectorizer": vectorizer, "model": classifier, "version": "test"}, path
    )
    return path
