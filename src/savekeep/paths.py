from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Optional

from platformdirs import user_data_dir

from .errors import ConfigError

logger = logging.getLogger(__name__)

APP_NAME = "savekeep"

# Environment variable override (useful for tests and power users)
ENV_SAVE_DIR = "SAVEKEEP_SAVE_DIR"

_PROFILE_ID_RE = re.compile(r"^[A-Za-z0-9._-]+$")


def default_save_root() -> Path:
    """Return the root directory for saves.

    Uses $SAVEKEEP_SAVE_DIR when set, otherwise the platform user data dir
    (e.g. ~/.local/share/savekeep on Linux).
    """
    override = os.getenv(ENV_SAVE_DIR)
    if override:
        return Path(override).expanduser()
    return Path(user_data_dir(appname=APP_NAME))


def validate_path_component(value: str, what: str) -> str:
    """Ensure ``value`` is usable as a single directory or file name."""
    if not isinstance(value, str) or not value:
        raise ConfigError(f"{what} must be a non-empty string")
    if value in {".", ".."} or not _PROFILE_ID_RE.match(value):
        raise ConfigError(f"{what} contains invalid characters: {value!r}")
    return value


def validate_profile_id(profile_id: str) -> str:
    return validate_path_component(profile_id, "Profile id")


__all__ = [
    "APP_NAME",
    "ENV_SAVE_DIR",
    "default_save_root",
    "validate_path_component",
    "validate_profile_id",
]
