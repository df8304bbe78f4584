"""Pipeline orchestrator: one invocation per incoming message."""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Protocol

from ..dispatch import IDispatcher
from ..errors import ModelNotReady, PersistenceFailure
from ..logging_config import get_logger
from ..models import ErrorKind, Intent, Message, ReplyResult
from ..nlp import IIntentClassifier, normalize
from ..recorder import IDialogRecorder

logger = get_logger(__name__)


class PipelineStage(str, Enum):
    """Per-request stages, logged at DEBUG."""

    RECEIVED = "received"
    NORMALIZED = "normalized"
    CLASSIFIED = "classified"
    DISPATCHED = "dispatched"
    RECORDED = "recorded"
    COMPLETED = "completed"
    ERRORED = "errored"


class IPipeline(Protocol):
    """Message processing pipeline."""

    async def handle(self, user_id: str, text: str) -> ReplyResult:
        """Process one message and return the reply or an error kind."""
        ...


class Pipeline:
    """Normalize, classify, dispatch, record."""

    def __init__(
        self,
        classifier: IIntentClassifier,
        dispatcher: IDispatcher,
        recorder: IDialogRecorder,
    ):
        self._classifier = classifier
        self._dispatcher = dispatcher
        self._recorder = recorder

    async def handle(self, user_id: str, text: str) -> ReplyResult:
        """
        Process one message and return the reply or an error kind.

        ModelNotReady and unexpected faults become error results without
        internal detail. A failed history write is logged and does not
        change the reply.
        """
        message = Message(
            user_id=user_id, text=text, received_at=datetime.now(timezone.utc)
        )
        request_id = str(uuid.uuid4())
        self._stage(request_id, PipelineStage.RECEIVED)

        try:
            tokens = normalize(message.text)
            self._stage(request_id, PipelineStage.NORMALIZED)
            classification = await self._classifier.classify(tokens)
        except ModelNotReady as e:
            logger.warning(
                f"Rejecting message from {user_id}: {e.message}",
                extra={"context": {"request_id": request_id, **e.details}},
            )
            self._stage(request_id, PipelineStage.ERRORED)
            return ReplyResult.failure(ErrorKind.MODEL_NOT_READY)
        except Exception as e:
            logger.error(
                f"Processing error: {e}",
                exc_info=True,
                extra={"context": {"request_id": request_id}},
            )
            self._stage(request_id, PipelineStage.ERRORED)
            return ReplyResult.failure(ErrorKind.PROCESSING_ERROR)

        intent = classification.intent
        self._stage(request_id, PipelineStage.CLASSIFIED, intent=intent.value)

        try:
            response = await self._dispatcher.dispatch(intent, message.text)
        except Exception as e:
            logger.error(
                f"Processing error: {e}",
                exc_info=True,
                extra={"context": {"request_id": request_id, "intent": intent.value}},
            )
            # Classification completed, so the exchange is still recorded
            await self._record(request_id, message, intent)
            self._stage(request_id, PipelineStage.ERRORED)
            return ReplyResult.failure(ErrorKind.PROCESSING_ERROR)

        self._stage(request_id, PipelineStage.DISPATCHED)
        await self._record(request_id, message, intent)
        self._stage(request_id, PipelineStage.COMPLETED)
        return ReplyResult.success(response)

    async def _record(self, request_id: str, message: Message, intent: Intent) -> None:
        try:
            await self._recorder.record(message.user_id, message.text, intent)
        except PersistenceFailure as e:
            if e.details.get("pending"):
                # Outcome is logged by the recorder once the write settles
                logger.warning(
                    f"Dialog history not confirmed: {e.message}",
                    extra={
                        "context": {
                            "request_id": request_id,
                            "event": "persistence_unconfirmed",
                            **e.details,
                        }
                    },
                )
                return
            logger.error(
                f"Dialog history not saved: {e.message}",
                extra={
                    "context": {
                        "request_id": request_id,
                        "event": "persistence_failure",
                        **e.details,
                    }
                },
            )
            return
        except Exception as e:
            logger.error(
                f"Dialog history not saved: {e}",
                exc_info=True,
                extra={"context": {"request_id": request_id, "event": "persistence_failure"}},
            )
            return
        self._stage(request_id, PipelineStage.RECORDED)

    @staticmethod
    def _stage(request_id: str, stage: PipelineStage, **context) -> None:
        logger.debug(
            f"Pipeline {stage.value}",
            extra={"context": {"request_id": request_id, "stage": stage.value, **context}},
        )
