"""
Domain models for cards, decks and understanding levels.

These are pure data structures with no I/O. The per-level tuning lives in
``LEVEL_TABLE`` so adjusting intervals or weights is a data change.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from enum import IntEnum
from typing import Any

from ulid import ULID


class MasteryLevel(IntEnum):
    """How well a card is known, from 0 (new) to 5 (expert)."""

    NEW = 0
    DIFFICULT = 1
    LEARNING = 2
    FAMILIAR = 3
    MASTERED = 4
    EXPERT = 5

    @classmethod
    def coerce(cls, value: Any) -> "MasteryLevel":
        """
        Clamp an arbitrary stored value into the valid level range.

        Non-numeric values fall back to ``NEW``.
        """
        try:
            level = int(value)
        except (TypeError, ValueError, OverflowError):
            return cls.NEW
        return cls(min(max(level, cls.NEW), cls.EXPERT))

    @property
    def policy(self) -> "LevelPolicy":
        return LEVEL_TABLE[self]

    @property
    def display_name(self) -> str:
        return LEVEL_TABLE[self].display_name

    @property
    def review_interval(self) -> timedelta:
        return LEVEL_TABLE[self].review_interval

    @property
    def weight(self) -> int:
        return LEVEL_TABLE[self].weight


@dataclass(frozen=True)
class LevelPolicy:
    """
    Fixed scheduling properties of a mastery level.

    Attributes:
        display_name: Human readable label.
        review_interval: Delay from the moment of grading until the card is due again.
        weight: Relative selection priority (higher is picked more often).
    """

    display_name: str
    review_interval: timedelta
    weight: int


LEVEL_TABLE: dict[MasteryLevel, LevelPolicy] = {
    MasteryLevel.NEW: LevelPolicy("new", timedelta(0), 5),
    MasteryLevel.DIFFICULT: LevelPolicy("difficult", timedelta(hours=1), 4),
    MasteryLevel.LEARNING: LevelPolicy("learning", timedelta(days=1), 3),
    MasteryLevel.FAMILIAR: LevelPolicy("familiar", timedelta(days=3), 2),
    MasteryLevel.MASTERED: LevelPolicy("mastered", timedelta(days=7), 1),
    MasteryLevel.EXPERT: LevelPolicy("expert", timedelta(days=30), 0),
}


def generate_card_id() -> str:
    """Generate a stable, sortable card ID using ULID."""
    return str(ULID())


def utc_now() -> datetime:
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Interpret naive datetimes as UTC; convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


@dataclass
class Card:
    """
    A term/definition pair with understanding tracking fields.

    Cards are mutable: ``record_answer`` updates the scheduling fields in
    place, so callers must ensure a single writer per card while grading.
    """

    term: str
    definition: str
    id: str = field(default_factory=generate_card_id)
    created_at: datetime = field(default_factory=utc_now)

    # Understanding tracking
    mastery_level: int = MasteryLevel.NEW
    last_reviewed_at: datetime | None = None
    next_review_at: datetime | None = None  # None means never reviewed
    review_count: int = 0

    is_default: bool = False  # Shipped with the bundled glossary

    def __post_init__(self) -> None:
        self.mastery_level = int(MasteryLevel.coerce(self.mastery_level))
        self.created_at = as_utc(self.created_at)
        if self.last_reviewed_at is not None:
            self.last_reviewed_at = as_utc(self.last_reviewed_at)
        if self.next_review_at is not None:
            self.next_review_at = as_utc(self.next_review_at)

    @property
    def level(self) -> MasteryLevel:
        return MasteryLevel.coerce(self.mastery_level)


@dataclass
class Deck:
    """A named collection of cards."""

    name: str
    id: str = field(default_factory=generate_card_id)
    created_at: datetime = field(default_factory=utc_now)
    cards: list[Card] = field(default_factory=list)

    def add_card(self, term: str, definition: str, is_default: bool = False) -> Card:
        card = Card(term=term, definition=definition, is_default=is_default)
        self.cards.append(card)
        return card

    def remove_card(self, card_id: str) -> bool:
        """Remove a card by ID. Returns False if no such card exists."""
        for i, card in enumerate(self.cards):
            if card.id == card_id:
                del self.cards[i]
                return True
        return False

    def update_card(
        self,
        card_id: str,
        term: str | None = None,
        definition: str | None = None,
    ) -> Card | None:
        """
        Change a card's text in place, keeping its learning progress.

        Returns the updated card, or None if no such card exists.
        """
        card = self.get_card(card_id)
        if card is None:
            return None
        if term is not None:
            card.term = term
        if definition is not None:
            card.definition = definition
        return card

    def get_card(self, card_id: str) -> Card | None:
        return next((c for c in self.cards if c.id == card_id), None)

    def find_card(self, term: str) -> Card | None:
        """Look up a card by term, ignoring case."""
        wanted = term.casefold()
        return next((c for c in self.cards if c.term.casefold() == wanted), None)
