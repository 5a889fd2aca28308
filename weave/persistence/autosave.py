"""Debounced auto-save of the graph store to a document backend.

The saver is an explicit state machine per loaded document::

    UNLOADED -> LOADING -> READY -> SAVING -> READY

Loading a document starts a new session; timers and saves that belong to an
earlier session are ignored when they complete, so a save can never write
one document's graph into another.
"""

from __future__ import annotations

import asyncio
import logging
import time
from enum import Enum
from typing import Callable, Protocol

from weave.graph.store import GraphStore
from weave.models.workflow import WorkflowDocument, WorkflowUpdate
from weave.persistence.sanitizer import sanitize_snapshot

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SEC = 2.0
DEFAULT_SETTLE_SEC = 3.0


class SaveState(str, Enum):
    unloaded = "unloaded"
    loading = "loading"
    ready = "ready"
    saving = "saving"


class DocumentLoadError(Exception):
    """Raised when a workflow cannot be loaded; the caller should navigate away."""
    pass


class DocumentBackend(Protocol):
    async def get_workflow(self, workflow_id: str) -> WorkflowDocument: ...

    async def update_workflow(self, workflow_id: str, update: WorkflowUpdate) -> WorkflowDocument: ...


class AutoSaver:
    """Saves the store's graph a short while after the last change.

    A save only happens when all of these hold:
    - a document is loaded and no save is in flight (state READY)
    - the store still shows the loaded document
    - the load finished at least ``settle`` seconds ago
    - no generator node is running
    """

    def __init__(
        self,
        store: GraphStore,
        backend: DocumentBackend,
        debounce: float = DEFAULT_DEBOUNCE_SEC,
        settle: float = DEFAULT_SETTLE_SEC,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.store = store
        self.backend = backend
        self.debounce = debounce
        self.settle = settle
        self.clock = clock

        self.state = SaveState.unloaded
        self.workflow_id: str | None = None
        self.loaded_at: float | None = None

        self._session = 0
        self._timer: asyncio.TimerHandle | None = None
        self._tasks: set[asyncio.Task] = set()
        self._unsubscribe = store.subscribe(self.notify_change)

    # --- Loading ---

    async def load(self, workflow_id: str) -> WorkflowDocument | None:
        """Fetch a document and put it into the store.

        Returns the loaded document, or None when the load was superseded by
        a newer one or the backend answered for a different document.
        Raises DocumentLoadError if the backend call fails.
        """
        self._cancel_timer()
        self._session += 1
        session = self._session
        self.state = SaveState.loading
        self.workflow_id = None
        self.loaded_at = None

        try:
            document = await self.backend.get_workflow(workflow_id)
        except Exception as e:
            if session == self._session:
                self.state = SaveState.unloaded
            raise DocumentLoadError(f"Failed to load workflow {workflow_id}: {e}") from e

        if session != self._session:
            logger.info("Discarding superseded load of workflow %s", workflow_id)
            return None
        if document.id != workflow_id:
            logger.warning("Requested workflow %s but received %s, ignoring", workflow_id, document.id)
            self.state = SaveState.unloaded
            return None

        self.store.replace(document.nodes, document.edges, document.id, document.name)
        self.workflow_id = document.id
        self.loaded_at = self.clock()
        self.state = SaveState.ready
        logger.info("Loaded workflow %s (%d nodes, %d edges)", document.id, len(document.nodes), len(document.edges))
        return document

    # --- Debounce ---

    def notify_change(self, store: GraphStore | None = None) -> None:
        """Store listener: (re)start the debounce timer."""
        if self.state not in (SaveState.ready, SaveState.saving):
            return
        self._cancel_timer()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop, not scheduling a save of %s", self.workflow_id)
            return
        self._timer = loop.call_later(self.debounce, self._fire, self._session)

    def _fire(self, session: int) -> None:
        self._timer = None
        if session != self._session:
            return
        if self.state == SaveState.saving:
            # try again once the running save is done
            self.notify_change()
            return
        remaining = self._settle_remaining()
        if remaining > 0:
            # re-arm until the load has settled
            loop = asyncio.get_running_loop()
            self._timer = loop.call_later(min(remaining, self.debounce), self._fire, session)
            return
        task = asyncio.get_running_loop().create_task(self.save())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _settle_remaining(self) -> float:
        if self.loaded_at is None:
            return 0.0
        return self.settle - (self.clock() - self.loaded_at)

    @property
    def pending(self) -> bool:
        """True while a save is scheduled or running."""
        return self._timer is not None or bool(self._tasks)

    # --- Saving ---

    async def save(self) -> bool:
        """Save now if allowed. Returns True if the backend accepted the save."""
        if self.state != SaveState.ready:
            return False
        if self.workflow_id is None or self.store.workflow_id != self.workflow_id:
            return False
        if self.loaded_at is None or self._settle_remaining() > 0:
            logger.debug("Skipping save of %s, load has not settled", self.workflow_id)
            return False
        if self.store.is_generating():
            logger.debug("Skipping save of %s while a node is generating", self.workflow_id)
            return False

        session = self._session
        workflow_id = self.workflow_id
        self.state = SaveState.saving
        snapshot = sanitize_snapshot(self.store.nodes, self.store.edges)
        update = WorkflowUpdate(
            name=self.store.workflow_name,
            nodes=list(snapshot.nodes),
            edges=list(snapshot.edges),
        )

        saved = False
        try:
            await self.backend.update_workflow(workflow_id, update)
            saved = True
            logger.info("Saved workflow %s", workflow_id)
        except Exception:
            logger.exception("Failed to save workflow %s", workflow_id)
        finally:
            if session == self._session:
                self.state = SaveState.ready
        return saved

    async def flush(self) -> None:
        """Wait for any running save to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    def close(self) -> None:
        """Stop listening to the store and drop any scheduled save."""
        self._cancel_timer()
        self._unsubscribe()
        self._session += 1
        self.state = SaveState.unloaded
