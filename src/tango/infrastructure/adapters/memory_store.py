import copy

from tango.domain.learning.models import Deck
from tango.domain.learning.ports import DeckStore, DeckStoreError


class InMemoryDeckStore(DeckStore):
    """
    Dict-backed deck store.

    Decks are deep-copied on the way in and out so callers only see their
    changes after an explicit ``save_deck``.
    """

    def __init__(self, decks: list[Deck] | None = None):
        self._decks: dict[str, Deck] = {}
        for deck in decks or []:
            self.save_deck(deck)

    def list_decks(self) -> list[str]:
        return sorted(self._decks)

    def load_deck(self, name: str) -> Deck:
        if name not in self._decks:
            raise DeckStoreError(f"Deck not found: {name}")
        return copy.deepcopy(self._decks[name])

    def save_deck(self, deck: Deck) -> None:
        self._decks[deck.name] = copy.deepcopy(deck)

    def delete_deck(self, name: str) -> None:
        if self._decks.pop(name, None) is None:
            raise DeckStoreError(f"Deck not found: {name}")
