class SaveError(Exception):
    """Base exception for save/load errors."""


class ConfigError(SaveError, ValueError):
    """Raised when persistence configuration or a profile id is invalid."""


class SaveIOError(SaveError, OSError):
    """Raised when a save file cannot be written, copied or read."""


class CorruptSaveError(SaveIOError):
    """Raised when save files are corrupted and cannot be recovered from backup."""


class SaveValidationError(SaveError):
    """Raised when decoding or validation of save data fails."""


class PreconditionError(SaveError, RuntimeError):
    """Raised when an operation is called before a document exists (programmer error)."""
