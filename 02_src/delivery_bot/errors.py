"""Error taxonomy for the message pipeline."""

from typing import Any


class ChatbotError(Exception):
    """Base class for pipeline errors."""

    status_code: int = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ModelNotReady(ChatbotError):
    """Classification was requested before the intent model finished loading."""

    status_code = 503

    def __init__(
        self,
        message: str = "Intent model is not ready",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)


class ClassificationFailure(ChatbotError):
    """The model produced a malformed embedding or score vector."""


class ResolverFailure(ChatbotError):
    """The order status service could not be reached or answered badly."""


class PersistenceFailure(ChatbotError):
    """A dialog record could not be written."""


class ProcessingError(ChatbotError):
    """Catch-all for internal faults. Never carries detail to the caller."""

    def __init__(self, message: str = "Internal Server Error"):
        super().__init__(message)
