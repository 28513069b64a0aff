from pathlib import Path

import pytest

from savekeep.config import PersistenceConfig, load_config
from savekeep.errors import ConfigError


def test_defaults():
    cfg = PersistenceConfig()
    assert cfg.encryption_enabled is False
    assert cfg.encryption_key == "word"
    assert cfg.autosave_interval_seconds == 60.0
    assert cfg.data_directory_name == "saves"
    assert cfg.primary_file_name == "data.game"
    assert cfg.backup_file_name == "data.game.bak"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"encryption_key": ""},
        {"autosave_interval_seconds": 0},
        {"autosave_interval_seconds": -5},
        {"autosave_interval_seconds": "soon"},
        {"data_directory_name": "../escape"},
        {"primary_file_name": ""},
        {"primary_file_name": "same", "backup_file_name": "same"},
        {"selected_profile_id": "a/b"},
    ],
)
def test_invalid_values_rejected(kwargs):
    with pytest.raises(ConfigError):
        PersistenceConfig(**kwargs)


def test_load_yaml_with_camel_case_keys(tmp_path: Path):
    path = tmp_path / "persistence.yaml"
    path.write_text(
        "encryptionEnabled: true\n"
        "encryptionKey: hunter2\n"
        "autoSaveIntervalSeconds: 30\n"
        "dataDirectoryName: slots\n"
        "primaryFileName: save.dat\n"
        "backupFileName: save.bak\n",
        encoding="utf-8",
    )
    cfg = load_config(path)
    assert cfg.encryption_enabled is True
    assert cfg.encryption_key == "hunter2"
    assert cfg.autosave_interval_seconds == 30.0
    assert cfg.data_directory_name == "slots"
    assert cfg.primary_file_name == "save.dat"
    assert cfg.backup_file_name == "save.bak"


def test_load_yaml_with_snake_case_keys(tmp_path: Path):
    path = tmp_path / "persistence.yaml"
    path.write_text("encryption_enabled: true\nselected_profile_id: hero\n", encoding="utf-8")
    cfg = load_config(path)
    assert cfg.encryption_enabled is True
    assert cfg.selected_profile_id == "hero"


def test_unknown_keys_are_ignored_with_warning(tmp_path: Path, caplog):
    path = tmp_path / "persistence.yaml"
    path.write_text("frobnicate: 1\n", encoding="utf-8")
    with caplog.at_level("WARNING", logger="savekeep.config"):
        cfg = load_config(path)
    assert cfg == PersistenceConfig()
    assert any("frobnicate" in r.getMessage() for r in caplog.records)


def test_missing_file_gives_defaults(tmp_path: Path):
    assert load_config(tmp_path / "nope.yaml") == PersistenceConfig()


def test_empty_file_gives_defaults(tmp_path: Path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == PersistenceConfig()


def test_non_mapping_file_rejected(tmp_path: Path):
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path)


def test_malformed_yaml_rejected(tmp_path: Path):
    path = tmp_path / "bad.yaml"
    path.write_text("key: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path)


def test_env_var_points_at_config(tmp_path: Path, monkeypatch):
    path = tmp_path / "env.yaml"
    path.write_text("autoSaveIntervalSeconds: 5\n", encoding="utf-8")
    monkeypatch.setenv("SAVEKEEP_CONFIG", str(path))
    assert load_config().autosave_interval_seconds == 5.0


def test_no_path_and_no_env_gives_defaults(monkeypatch):
    monkeypatch.delenv("SAVEKEEP_CONFIG", raising=False)
    assert load_config() == PersistenceConfig()
