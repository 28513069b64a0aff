"""
savekeep: durable, corruption-resistant save files for game state.

This package provides:
- A Document model with scalar fields and keyed collections
- A reversible XOR obfuscation transform
- A FileStore with verify-after-write and single-generation backup recovery
- A PersistenceCoordinator aggregating contributors into one document per profile
- A cooperative AutosaveTicker driven by the host game loop

UI layers and game objects should import and compose these services.
"""
from importlib.metadata import PackageNotFoundError, version

from .autosave import AutosaveTicker
from .config import PersistenceConfig, load_config
from .contributor import BaseContributor, Contributor, ContributorRegistry
from .coordinator import CoordinatorState, PersistenceCoordinator
from .document import SCHEMA_VERSION, Document
from .errors import (
    ConfigError,
    CorruptSaveError,
    PreconditionError,
    SaveError,
    SaveIOError,
    SaveValidationError,
)
from .events import EventBus
from .store import FileStore, LoadResult, LoadStatus

try:
    __version__ = version("savekeep")
except PackageNotFoundError:  # pragma: no cover - during tests without packaging
    __version__ = "0.0.0"

__all__ = [
    "__version__",
    "AutosaveTicker",
    "PersistenceConfig",
    "load_config",
    "BaseContributor",
    "Contributor",
    "ContributorRegistry",
    "CoordinatorState",
    "PersistenceCoordinator",
    "SCHEMA_VERSION",
    "Document",
    "ConfigError",
    "CorruptSaveError",
    "PreconditionError",
    "SaveError",
    "SaveIOError",
    "SaveValidationError",
    "EventBus",
    "FileStore",
    "LoadResult",
    "LoadStatus",
]
