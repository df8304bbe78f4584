"""One-time asynchronous loading of the intent model.

Requests that arrive while the model is loading wait for a bounded time and
then fail with ModelNotReady. A failed load is final for the process.
"""

import asyncio
from enum import Enum
from pathlib import Path
from typing import Callable

from ..errors import ModelNotReady
from ..logging_config import get_logger
from .intent_model import IIntentModel

logger = get_logger(__name__)

ModelLoader = Callable[[Path], IIntentModel]


class LoadState(str, Enum):
    """Lifecycle of the process-wide model."""

    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class ModelState:
    """Holds the loaded model and signals readiness to waiting requests."""

    def __init__(self, ready_timeout: float):
        self._ready_timeout = ready_timeout
        self._state = LoadState.UNINITIALIZED
        self._model: IIntentModel | None = None
        self._done = asyncio.Event()
        self._task: asyncio.Task | None = None

    @property
    def state(self) -> LoadState:
        return self._state

    def start_loading(self, loader: ModelLoader, path: Path) -> asyncio.Task:
        """Schedule the model load in a worker thread. Only the first call loads."""
        if self._task is not None:
            return self._task

        self._state = LoadState.LOADING
        self._task = asyncio.create_task(self._load(loader, path))
        return self._task

    async def _load(self, loader: ModelLoader, path: Path) -> None:
        logger.info(f"Loading intent model from {path}")
        try:
            model = await asyncio.to_thread(loader, path)
        except asyncio.CancelledError:
            self._state = LoadState.FAILED
            logger.warning("Intent model load cancelled")
            raise
        except Exception as e:
            self._state = LoadState.FAILED
            logger.error(f"Intent model failed to load: {e}", exc_info=True)
        else:
            self._model = model
            self._state = LoadState.READY
            logger.info("ML model loaded")
        finally:
            self._done.set()

    def set_model(self, model: IIntentModel) -> None:
        """Install an already loaded model."""
        self._model = model
        self._state = LoadState.READY
        self._done.set()

    async def get(self, timeout: float | None = None) -> IIntentModel:
        """
        Return the loaded model, waiting for an in-flight load.

        Args:
            timeout: Seconds to wait; defaults to the configured ready timeout

        Raises:
            ModelNotReady: If the model is not loaded within the timeout,
                was never scheduled, or failed to load
        """
        if self._state is LoadState.READY and self._model is not None:
            return self._model

        if self._state is LoadState.UNINITIALIZED:
            raise ModelNotReady(details={"state": self._state.value})

        wait_for = self._ready_timeout if timeout is None else timeout
        try:
            await asyncio.wait_for(self._done.wait(), wait_for)
        except asyncio.TimeoutError:
            raise ModelNotReady(details={"state": self._state.value}) from None

        if self._model is None:
            raise ModelNotReady(details={"state": self._state.value})
        return self._model

    async def close(self) -> None:
        """Cancel an in-flight load."""
        if self._task and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
