# Domain Learning Package
from .models import LEVEL_TABLE, Card, Deck, LevelPolicy, MasteryLevel
from .ports import Clock, DeckStore, DeckStoreError

__all__ = [
    "Card",
    "Deck",
    "MasteryLevel",
    "LevelPolicy",
    "LEVEL_TABLE",
    "Clock",
    "DeckStore",
    "DeckStoreError",
]
