"""Smart delivery chatbot core."""

from .app import Application, IApplication
from .dispatch import Dispatcher, IDispatcher
from .errors import (
    ChatbotError,
    ClassificationFailure,
    ModelNotReady,
    PersistenceFailure,
    ProcessingError,
    ResolverFailure,
)
from .models import (
    CLASSIFIED_INTENTS,
    ClassificationResult,
    DeliveryStatus,
    DialogRecord,
    ErrorKind,
    Intent,
    Message,
    ReplyResult,
)
from .nlp import IIntentClassifier, IntentClassifier, ModelState, normalize
from .pipeline import IPipeline, Pipeline
from .recorder import DialogRecorder, IDialogRecorder
from .resolver import IStatusResolver, StatusResolver
from .storage import IStorage, Storage

__all__ = [
    # Application
    "Application",
    "IApplication",
    # Models
    "Intent",
    "CLASSIFIED_INTENTS",
    "ClassificationResult",
    "Message",
    "DeliveryStatus",
    "DialogRecord",
    "ErrorKind",
    "ReplyResult",
    # Errors
    "ChatbotError",
    "ModelNotReady",
    "ClassificationFailure",
    "ResolverFailure",
    "PersistenceFailure",
    "ProcessingError",
    # Components
    "normalize",
    "ModelState",
    "IIntentClassifier",
    "IntentClassifier",
    "IStatusResolver",
    "StatusResolver",
    "IDispatcher",
    "Dispatcher",
    "IStorage",
    "Storage",
    "IDialogRecorder",
    "DialogRecorder",
    "IPipeline",
    "Pipeline",
]
