"""Application bootstrap and lifecycle management."""

from dataclasses import replace
from typing import Protocol

import httpx

from .config import Settings, resolve_db_path
from .dispatch import Dispatcher
from .logging_config import get_logger
from .nlp import IntentClassifier, ModelState, load_intent_model
from .nlp.model_state import ModelLoader
from .pipeline import IPipeline, Pipeline
from .recorder import DialogRecorder
from .resolver import StatusResolver
from .storage import IStorage, Storage

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...

    @property
    def pipeline(self) -> IPipeline:
        """Message pipeline."""
        ...

    @property
    def model_state(self) -> ModelState:
        """Intent model load state."""
        ...


class Application:
    """Main application bootstrap."""

    def __init__(
        self,
        settings: Settings | None = None,
        db_path: str | None = None,
        model_loader: ModelLoader = load_intent_model,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._settings = settings or Settings.from_env()
        if db_path is not None:
            self._settings = replace(self._settings, db_path=resolve_db_path(db_path))
        self._model_loader = model_loader
        self._http_client = http_client

        # Components (will be initialized in start())
        self._storage: IStorage | None = None
        self._model_state: ModelState | None = None
        self._resolver: StatusResolver | None = None
        self._pipeline: Pipeline | None = None

    async def start(self) -> None:
        """Initialize components in dependency order."""
        logger.info("Starting application")

        # 1. Storage (no dependencies)
        self._storage = Storage(self._settings.db_path)
        await self._storage.init()
        logger.info("Storage initialized")

        # 2. Model load runs in the background; requests wait on ModelState
        self._model_state = ModelState(self._settings.model_ready_timeout)
        self._model_state.start_loading(self._model_loader, self._settings.model_path)

        # 3. Resolver (no internal dependencies)
        self._resolver = StatusResolver(
            url_template=self._settings.order_status_url,
            timeout=self._settings.resolver_timeout,
            client=self._http_client,
        )

        # 4. Pipeline (depends on all of the above)
        self._pipeline = Pipeline(
            classifier=IntentClassifier(self._model_state),
            dispatcher=Dispatcher(self._resolver),
            recorder=DialogRecorder(self._storage, self._settings.record_timeout),
        )
        logger.info("All components initialized successfully")

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        if self._resolver:
            await self._resolver.close()
        if self._model_state:
            await self._model_state.close()
        if self._storage:
            await self._storage.close()
            logger.info("Storage closed")

    @property
    def settings(self) -> Settings:
        """Get runtime settings."""
        return self._settings

    @property
    def storage(self) -> IStorage:
        """Get storage instance."""
        if not self._storage:
            raise RuntimeError("Application not started")
        return self._storage

    @property
    def model_state(self) -> ModelState:
        """Get model state."""
        if not self._model_state:
            raise RuntimeError("Application not started")
        return self._model_state

    @property
    def pipeline(self) -> IPipeline:
        """Get pipeline instance."""
        if not self._pipeline:
            raise RuntimeError("Application not started")
        return self._pipeline
