"""
Ports (interfaces) for the learning engine's collaborators.

These define the contract that infrastructure adapters must implement.
Application services depend on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from .models import Deck


class DeckStoreError(Exception):
    """Raised by store adapters when a deck cannot be read or written."""


class Clock(ABC):
    """
    Port for reading the current time.

    Implementations:
        - SystemClock: Wall clock in UTC.
    """

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time as a timezone-aware UTC datetime."""
        pass


class DeckStore(ABC):
    """
    Port for loading and persisting decks.

    Implementations:
        - InMemoryDeckStore: Dict-backed store for tests and embedding.
        - YamlDeckStore: One YAML file per deck in a directory.
    """

    @abstractmethod
    def list_decks(self) -> list[str]:
        """
        Returns:
            Sorted list of deck names known to the store.
        """
        pass

    @abstractmethod
    def load_deck(self, name: str) -> Deck:
        """
        Load a deck and all of its cards.

        Raises:
            DeckStoreError: If the deck does not exist or cannot be decoded.
        """
        pass

    @abstractmethod
    def save_deck(self, deck: Deck) -> None:
        """
        Persist a deck, including any card mutations made since it was loaded.

        Raises:
            DeckStoreError: If the deck cannot be written.
        """
        pass

    @abstractmethod
    def delete_deck(self, name: str) -> None:
        """
        Remove a deck together with all of its cards.

        Raises:
            DeckStoreError: If the deck does not exist or cannot be removed.
        """
        pass

    def has_deck(self, name: str) -> bool:
        return name in self.list_decks()
