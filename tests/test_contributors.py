import pytest

from savekeep.contributor import BaseContributor, Contributor, ContributorRegistry
from savekeep.contributors import CollectibleContributor, CounterContributor, PlayerContributor
from savekeep.document import Document


class DuckContributor:
    def pull(self, document):
        pass

    def push(self, document):
        pass


def test_duck_typed_objects_satisfy_protocol():
    assert isinstance(DuckContributor(), Contributor)
    assert isinstance(CollectibleContributor("c"), Contributor)
    assert not isinstance(object(), Contributor)


def test_base_contributor_is_abstract():
    with pytest.raises(TypeError):
        BaseContributor()


def test_registry_keeps_order_and_ignores_duplicates():
    a, b = DuckContributor(), DuckContributor()
    reg = ContributorRegistry([a, b, a])
    assert list(reg) == [a, b]
    assert len(reg) == 2
    assert reg.register(b) is False


def test_registry_rejects_non_contributors():
    with pytest.raises(TypeError):
        ContributorRegistry([object()])


def test_registry_unregister():
    a = DuckContributor()
    reg = ContributorRegistry([a])
    assert a in reg
    assert reg.unregister(a) is True
    assert reg.unregister(a) is False
    assert len(reg) == 0


def test_collectible_pull_default_fills_missing_key():
    doc = Document()
    coin = CollectibleContributor("coin-42", collected=True)
    coin.pull(doc)
    assert doc.collected == {"coin-42": False}
    assert coin.collected is False


def test_collectible_push_creates_key():
    doc = Document()
    coin = CollectibleContributor("coin-42")
    coin.collect()
    coin.push(doc)
    assert doc.collected["coin-42"] is True


def test_collectible_pull_reads_existing_value():
    doc = Document(collected={"coin-42": True})
    coin = CollectibleContributor("coin-42")
    coin.pull(doc)
    assert coin.collected is True


def test_counter_pull_and_push():
    doc = Document()
    counter = CounterContributor("deaths", count=3)
    counter.pull(doc)
    assert counter.count == 0
    assert doc.counters["deaths"] == 0
    counter.increment(2)
    counter.push(doc)
    assert doc.counters["deaths"] == 2


def test_player_writes_scalars():
    doc = Document()
    player = PlayerContributor(health=7, position=(1, 2), play_time_seconds=9.5)
    player.push(doc)
    assert (doc.health, doc.position, doc.play_time_seconds) == (7, (1.0, 2.0), 9.5)


@pytest.mark.parametrize("cls", [CollectibleContributor, CounterContributor])
def test_empty_keys_rejected(cls):
    with pytest.raises(ValueError):
        cls("")
