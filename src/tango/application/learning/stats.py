"""
Deck summaries derived from card scheduling fields.

Stateless and side-effect free.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime

from tango.domain.learning.models import Card, MasteryLevel

from .selection import is_eligible


@dataclass
class DeckSummary:
    """Aggregate view of a deck's learning progress."""

    total_cards: int
    due_cards: int
    total_reviews: int
    by_level: dict[str, int] = field(default_factory=dict)  # display name -> count


def summarize_deck(cards: Iterable[Card], now: datetime) -> DeckSummary:
    by_level = {level.display_name: 0 for level in MasteryLevel}
    total = due = reviews = 0

    for card in cards:
        total += 1
        reviews += card.review_count
        by_level[card.level.display_name] += 1
        if is_eligible(card, now):
            due += 1

    return DeckSummary(total_cards=total, due_cards=due, total_reviews=reviews, by_level=by_level)


def understanding_rate(correct: int, total: int) -> int:
    """
    Percentage of correct answers, rounded down.

    Returns 0 for an empty session and never exceeds 100.
    """
    if total <= 0:
        return 0
    return min(int(correct / total * 100), 100)
