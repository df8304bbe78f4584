"""DialogRecorder implementation."""

import asyncio
from datetime import datetime, timezone
from functools import partial
from typing import Protocol

from ..errors import PersistenceFailure
from ..logging_config import get_logger
from ..models import DialogRecord, Intent
from ..storage import IStorage

logger = get_logger(__name__)


class IDialogRecorder(Protocol):
    """Appends processed exchanges to the dialog history."""

    async def record(self, user_id: str, text: str, intent: Intent) -> DialogRecord:
        """Persist one exchange. Raises PersistenceFailure on error."""
        ...


class DialogRecorder:
    """Writes DialogRecords to storage with a bounded, cancellation-safe append."""

    def __init__(self, storage: IStorage, timeout: float):
        self._storage = storage
        self._timeout = timeout

    async def record(self, user_id: str, text: str, intent: Intent) -> DialogRecord:
        """
        Persist one exchange.

        Raises:
            PersistenceFailure: If the write fails, or is not confirmed within
                the timeout. An unconfirmed write keeps running and its final
                outcome is logged when it completes.
        """
        record = DialogRecord(
            user_id=user_id,
            message=text,
            intent=intent.value,
            timestamp=datetime.now(timezone.utc),
        )

        # Shielded so a disconnecting caller does not abort the write
        write = asyncio.ensure_future(self._storage.append_dialog_record(record))
        try:
            await asyncio.wait_for(asyncio.shield(write), self._timeout)
        except asyncio.TimeoutError as e:
            write.add_done_callback(partial(_report_late_write, user_id))
            raise PersistenceFailure(
                "Dialog record not confirmed within timeout",
                details={"user_id": user_id, "timeout": self._timeout, "pending": True},
            ) from e
        except asyncio.CancelledError:
            write.add_done_callback(partial(_report_late_write, user_id))
            raise
        except Exception as e:
            raise PersistenceFailure(
                f"Failed to write dialog record: {e}",
                details={"user_id": user_id},
            ) from e

        return record


def _report_late_write(user_id: str, write: asyncio.Future) -> None:
    """Log the final outcome of a write nobody is awaiting any more."""
    if write.cancelled():
        logger.error(
            "Dialog record write cancelled",
            extra={"context": {"user_id": user_id, "event": "persistence_failure"}},
        )
        return

    error = write.exception()
    if error is not None:
        logger.error(
            f"Dialog record write failed after timeout: {error}",
            exc_info=error,
            extra={"context": {"user_id": user_id, "event": "persistence_failure"}},
        )
        return

    logger.info(
        "Dialog record saved after timeout",
        extra={"context": {"user_id": user_id, "event": "persistence_late_success"}},
    )
