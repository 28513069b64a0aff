from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .errors import ConfigError
from .paths import validate_path_component, validate_profile_id

logger = logging.getLogger(__name__)

ENV_CONFIG_PATH = "SAVEKEEP_CONFIG"

# camelCase spellings accepted in config files
_ALIASES = {
    "encryptionEnabled": "encryption_enabled",
    "encryptionKey": "encryption_key",
    "autoSaveIntervalSeconds": "autosave_interval_seconds",
    "dataDirectoryName": "data_directory_name",
    "primaryFileName": "primary_file_name",
    "backupFileName": "backup_file_name",
    "selectedProfileId": "selected_profile_id",
}


@dataclass
class PersistenceConfig:
    """
    Persistence configuration with sensible defaults.

    You can override by providing a YAML file with keys:
      - encryption_enabled: bool (default False)
      - encryption_key: non-empty string (default "word")
      - autosave_interval_seconds: positive number (default 60)
      - data_directory_name: str (default "saves")
      - primary_file_name: str (default "data.game")
      - backup_file_name: str (default "data.game.bak")
      - selected_profile_id: str (default "default")
    """

    encryption_enabled: bool = False
    encryption_key: str = "word"
    autosave_interval_seconds: float = 60.0
    data_directory_name: str = "saves"
    primary_file_name: str = "data.game"
    backup_file_name: str = "data.game.bak"
    selected_profile_id: str = "default"

    def __post_init__(self) -> None:
        if not isinstance(self.encryption_key, (str, bytes)) or not self.encryption_key:
            raise ConfigError("encryption_key must be a non-empty string")
        try:
            self.autosave_interval_seconds = float(self.autosave_interval_seconds)
        except (TypeError, ValueError) as e:
            raise ConfigError("autosave_interval_seconds must be a number") from e
        if self.autosave_interval_seconds <= 0:
            raise ConfigError("autosave_interval_seconds must be positive")
        validate_path_component(self.data_directory_name, "data_directory_name")
        validate_path_component(self.primary_file_name, "primary_file_name")
        validate_path_component(self.backup_file_name, "backup_file_name")
        if self.primary_file_name == self.backup_file_name:
            raise ConfigError("primary_file_name and backup_file_name must differ")
        validate_profile_id(self.selected_profile_id)
        self.encryption_enabled = bool(self.encryption_enabled)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PersistenceConfig":
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}
        for key, value in data.items():
            name = _ALIASES.get(key, key)
            if name not in known:
                logger.warning("Ignoring unknown persistence config key: %s", key)
                continue
            values[name] = value
        return cls(**values)


def load_config(path: Optional[Union[str, Path]] = None) -> PersistenceConfig:
    """Load persistence configuration from YAML.

    If ``path`` is None, $SAVEKEEP_CONFIG is used when set. A missing file
    yields the defaults; a file that is not a mapping raises ConfigError.
    """
    if path is None:
        env_path = os.getenv(ENV_CONFIG_PATH)
        if not env_path:
            return PersistenceConfig()
        path = env_path
    path = Path(path)
    if not path.exists():
        logger.info("Config file %s not found; using defaults", path)
        return PersistenceConfig()

    with path.open("r", encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    cfg = PersistenceConfig.from_dict(raw)
    logger.info("Loaded persistence config from %s", path)
    return cfg


__all__ = ["ENV_CONFIG_PATH", "PersistenceConfig", "load_config"]
