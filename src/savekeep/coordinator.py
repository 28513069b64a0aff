from __future__ import annotations

import logging
import threading
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional

from . import events
from .config import PersistenceConfig
from .contributor import Contributor, ContributorRegistry
from .document import Document
from .errors import CorruptSaveError, PreconditionError
from .events import EventBus
from .paths import validate_profile_id
from .store import FileStore, LoadResult, LoadStatus

logger = logging.getLogger(__name__)


class CoordinatorState(str, Enum):
    UNINITIALIZED = "UNINITIALIZED"
    READY = "READY"


class PersistenceCoordinator:
    """Single entry point for new/load/save cycles of the selected profile.

    Owns the current Document, the selected profile id and the registered
    contributors. Construct it once and hand it to whatever needs persistence.

    Contributor faults are not contained: an exception raised by ``pull``
    aborts the load (the current document is left unchanged) and one raised
    by ``push`` aborts the save before anything is written.
    """

    def __init__(
        self,
        store: FileStore,
        contributors: Optional[Iterable[Contributor]] = None,
        profile_id: Optional[str] = None,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self.store = store
        self.registry = ContributorRegistry(contributors)
        self.events = event_bus or EventBus()
        self._profile_id = validate_profile_id(profile_id or store.config.selected_profile_id)
        self._document: Optional[Document] = None
        self._lock = threading.RLock()

    # Properties

    @property
    def config(self) -> PersistenceConfig:
        return self.store.config

    @property
    def document(self) -> Optional[Document]:
        return self._document

    @property
    def selected_profile_id(self) -> str:
        return self._profile_id

    @property
    def state(self) -> CoordinatorState:
        return CoordinatorState.READY if self._document is not None else CoordinatorState.UNINITIALIZED

    @property
    def autosave_interval_seconds(self) -> float:
        return self.config.autosave_interval_seconds

    # Public API

    def new_game(self) -> Document:
        """Start a fresh document with default values. Nothing is written to disk.

        Every contributor pulls from the fresh document so its local state is
        reset to the defaults and its keys exist before the first save.
        """
        with self._lock:
            document = Document()
            self._pull_all(document, "new game")
            self._document = document
            logger.info("New game started for profile '%s'", self._profile_id)
            return document

    def load_game(self) -> LoadResult:
        """Load the selected profile and let every contributor pull from it.

        A NOT_FOUND result clears the current document; callers are expected
        to follow up with new_game().

        Raises:
            CorruptSaveError if neither primary nor backup can be loaded.
        """
        with self._lock:
            profile_id = self._profile_id
            result = self.store.load(profile_id)
            if result.status is LoadStatus.NOT_FOUND:
                self._document = None
                self.events.publish(events.LOAD_NOT_FOUND, {"profile_id": profile_id})
                return result

            document = result.document
            if document is None:
                raise CorruptSaveError(f"Load of profile '{profile_id}' returned no document")
            self._pull_all(document, "load")
            self._document = document

            if result.status is LoadStatus.RECOVERED_FROM_BACKUP:
                self.events.publish(
                    events.LOAD_RECOVERED_FROM_BACKUP,
                    {"profile_id": profile_id, "path": str(result.path)},
                )
            self.events.publish(events.LOAD_COMPLETED, {"profile_id": profile_id, "status": result.status.value})
            return result

    def save_game(self) -> Path:
        """Let every contributor push into the current document, then persist it.

        Raises:
            PreconditionError if called before new_game()/load_game().
            SaveIOError / CorruptSaveError on write or verification failure.
        """
        with self._lock:
            document = self._document
            if document is None:
                raise PreconditionError("save_game() called with no current document; call new_game() or load_game() first")

            for contributor in self.registry:
                try:
                    contributor.push(document)
                except Exception:
                    logger.exception("Contributor %r failed during push; save aborted", contributor)
                    raise
            document.touch()
            path = self.store.save(self._profile_id, document)
            self.events.publish(events.SAVE_COMPLETED, {"profile_id": self._profile_id, "path": str(path)})
            return path

    def change_selected_profile_id(self, profile_id: str) -> LoadResult:
        """Switch to another profile and load it.

        The outgoing profile is not saved; call save_game() first if needed.
        """
        with self._lock:
            validate_profile_id(profile_id)
            previous = self._profile_id
            self._profile_id = profile_id
            # The outgoing document is never carried over to the new profile
            self._document = None
            logger.info("Selected profile changed from '%s' to '%s'", previous, profile_id)
            self.events.publish(events.PROFILE_CHANGED, {"previous": previous, "profile_id": profile_id})
            return self.load_game()

    def has_save(self, profile_id: Optional[str] = None) -> bool:
        """Return True if a save exists for ``profile_id`` (default: selected profile)."""
        return self.store.exists(profile_id if profile_id is not None else self._profile_id)

    # Internal utilities

    def _pull_all(self, document: Document, cycle: str) -> None:
        for contributor in self.registry:
            try:
                contributor.pull(document)
            except Exception:
                logger.exception("Contributor %r failed during pull; %s aborted", contributor, cycle)
                raise


__all__ = ["CoordinatorState", "PersistenceCoordinator"]
