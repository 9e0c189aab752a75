import pytest

from tango.domain.learning.models import Deck
from tango.domain.learning.ports import DeckStoreError
from tango.infrastructure.adapters.memory_store import InMemoryDeckStore


def test_changes_only_visible_after_save():
    deck = Deck(name="Swift")
    deck.add_card("enum", "A type with a fixed set of cases")
    store = InMemoryDeckStore([deck])

    loaded = store.load_deck("Swift")
    loaded.cards[0].mastery_level = 2
    assert store.load_deck("Swift").cards[0].mastery_level == 0

    store.save_deck(loaded)
    assert store.load_deck("Swift").cards[0].mastery_level == 2


def test_list_and_missing():
    store = InMemoryDeckStore([Deck(name="b"), Deck(name="a")])
    assert store.list_decks() == ["a", "b"]
    assert store.has_deck("a")
    with pytest.raises(DeckStoreError):
        store.load_deck("c")


def test_delete_deck():
    store = InMemoryDeckStore([Deck(name="a")])
    store.delete_deck("a")
    assert store.list_decks() == []
    with pytest.raises(DeckStoreError):
        store.delete_deck("a")
