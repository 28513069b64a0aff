from __future__ import annotations

import logging
from typing import Optional

from . import events
from .coordinator import PersistenceCoordinator
from .errors import ConfigError, PreconditionError, SaveError

logger = logging.getLogger(__name__)


class AutosaveTicker:
    """Calls ``save_game()`` every ``autosave_interval_seconds`` of game time.

    This is not a thread: the host loop drives it through ``update(dt)``, so
    autosaves happen on the same call stack as every other save or load.
    Failures are logged and published as ``autosave.failed`` rather than
    raised, so a bad disk does not take the game loop down.
    """

    def __init__(self, coordinator: PersistenceCoordinator, interval_seconds: Optional[float] = None) -> None:
        self.coordinator = coordinator
        if interval_seconds is None:
            interval_seconds = coordinator.autosave_interval_seconds
        self.interval = float(interval_seconds)
        if self.interval <= 0:
            raise ConfigError("Autosave interval must be positive")
        self._elapsed: float = 0.0
        self._enabled: bool = True
        self.saves: int = 0
        self.failures: int = 0

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def elapsed(self) -> float:
        return self._elapsed

    def enable(self) -> None:
        self._enabled = True

    def disable(self) -> None:
        self._enabled = False

    def reset(self) -> None:
        self._elapsed = 0.0

    def update(self, dt: float) -> bool:
        """Advance the timer by ``dt`` seconds. Returns True if a save was written."""
        if not self._enabled:
            return False
        self._elapsed += dt
        if self._elapsed < self.interval:
            return False
        # One save per trigger even if several intervals elapsed in one frame
        self._elapsed = 0.0
        return self.trigger()

    def trigger(self) -> bool:
        try:
            self.coordinator.save_game()
        except PreconditionError:
            logger.debug("Autosave skipped: no current document")
            return False
        except SaveError as exc:
            self.failures += 1
            logger.error("Autosave failed for profile '%s': %s", self.coordinator.selected_profile_id, exc)
            self.coordinator.events.publish(
                events.AUTOSAVE_FAILED,
                {"profile_id": self.coordinator.selected_profile_id, "error": str(exc)},
            )
            return False
        self.saves += 1
        logger.debug("Autosave #%d written", self.saves)
        return True


__all__ = ["AutosaveTicker"]
