import pytest

from savekeep import events
from savekeep.autosave import AutosaveTicker
from savekeep.coordinator import PersistenceCoordinator
from savekeep.errors import ConfigError, SaveIOError
from savekeep.store import FileStore


def test_saves_once_interval_elapsed(store: FileStore):
    coord = PersistenceCoordinator(store)
    coord.new_game()
    ticker = AutosaveTicker(coord, interval_seconds=1.0)

    assert ticker.update(0.4) is False
    assert ticker.update(0.4) is False
    assert not coord.has_save()
    assert ticker.update(0.3) is True
    assert coord.has_save()
    assert ticker.saves == 1
    assert ticker.elapsed == 0.0


def test_interval_defaults_to_config(store: FileStore):
    ticker = AutosaveTicker(PersistenceCoordinator(store))
    assert ticker.interval == store.config.autosave_interval_seconds


def test_skips_without_document(store: FileStore):
    coord = PersistenceCoordinator(store)
    ticker = AutosaveTicker(coord, interval_seconds=1.0)
    assert ticker.update(2.0) is False
    assert ticker.failures == 0


def test_disabled_ticker_does_not_accumulate(store: FileStore):
    coord = PersistenceCoordinator(store)
    coord.new_game()
    ticker = AutosaveTicker(coord, interval_seconds=1.0)
    ticker.disable()
    assert ticker.update(5.0) is False
    assert ticker.elapsed == 0.0
    ticker.enable()
    assert ticker.update(1.0) is True


def test_failure_is_logged_and_published(store: FileStore, monkeypatch):
    coord = PersistenceCoordinator(store)
    coord.new_game()
    seen = []
    coord.events.subscribe(events.AUTOSAVE_FAILED, seen.append)

    def fail(profile_id, document):
        raise SaveIOError("disk full")

    monkeypatch.setattr(store, "save", fail)
    ticker = AutosaveTicker(coord, interval_seconds=1.0)
    assert ticker.update(1.5) is False
    assert ticker.failures == 1
    assert seen[0]["error"] == "disk full"


@pytest.mark.parametrize("interval", [0, -1])
def test_invalid_interval_rejected(store: FileStore, interval):
    with pytest.raises(ConfigError):
        AutosaveTicker(PersistenceCoordinator(store), interval_seconds=interval)
