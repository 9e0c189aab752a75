"""
Card selection for review sessions.

Picks a bounded set of cards from a deck by:
1. Filtering for due cards that were not rejected earlier in the session
2. Falling back to a plain shuffle of the whole deck when too few are due
3. Otherwise admitting shuffled due cards with a probability driven by mastery weight

This is a pure computation module with no I/O.
"""

import logging
import math
import random
import sys
from collections.abc import Collection, Iterable
from datetime import datetime

from tango.domain.constants import ADMISSION_PROBABILITY_FACTOR, DEFAULT_MAX_QUESTIONS
from tango.domain.learning.models import Card, as_utc

logger = logging.getLogger(__name__)


def select_for_review(
    cards: Iterable[Card],
    now: datetime,
    excluded: Collection[str] = frozenset(),
    max_count: int = DEFAULT_MAX_QUESTIONS,
    rng: random.Random | None = None,
) -> list[Card]:
    """
    Select up to ``max_count`` distinct cards for a review session.

    Args:
        cards: The full candidate pool for one deck.
        now: Reference time for due checks.
        excluded: Card IDs rejected earlier in the current session.
        max_count: Upper bound on the result size; capped at the pool size.
            Negative or non-numeric values select nothing.
        rng: Random source. A fresh unseeded generator is used if omitted.

    Returns:
        Exactly ``min(max_count, len(pool))`` cards with no duplicate IDs,
        in presentation order.
    """
    rng = rng or random.Random()
    now = as_utc(now)
    pool = _unique_by_id(cards)
    limit = min(_normalize_max_count(max_count), len(pool))

    if limit == 0:
        return []

    eligible = [card for card in pool if is_eligible(card, now, excluded)]
    logger.debug(f"Selecting {limit} of {len(pool)} cards ({len(eligible)} eligible)")

    # Never present an empty session while the deck has cards
    if not eligible:
        logger.debug("No eligible cards, drawing from the full deck")
        return _shuffled(pool, rng)[:limit]

    # Weighting a small pool hurts variety
    if len(eligible) < limit:
        logger.debug(f"Only {len(eligible)} eligible cards, drawing from the full deck")
        return _shuffled(pool, rng)[:limit]

    return _weighted_pick(eligible, limit, rng)


def is_eligible(card: Card, now: datetime, excluded: Collection[str] = frozenset()) -> bool:
    """A card is eligible when it is not session-excluded and is due (or never reviewed)."""
    if card.id in excluded:
        return False
    if card.next_review_at is None:
        return True
    return card.next_review_at <= as_utc(now)


def _weighted_pick(eligible: list[Card], limit: int, rng: random.Random) -> list[Card]:
    weights = {card.id: card.level.weight for card in eligible}
    total_weight = sum(weights.values())

    chosen: list[Card] = []
    chosen_ids: set[str] = set()

    for card in _shuffled(eligible, rng):
        if len(chosen) >= limit:
            break
        if _admit(weights[card.id], total_weight, len(chosen), limit, rng):
            chosen.append(card)
            chosen_ids.add(card.id)

    # The probabilistic gate can leave slots empty
    if len(chosen) < limit:
        remaining = _shuffled([c for c in eligible if c.id not in chosen_ids], rng)
        topped_up = remaining[: limit - len(chosen)]
        logger.debug(f"Topping up {len(topped_up)} cards after weighted scan")
        chosen.extend(topped_up)

    return chosen


def _admit(
    weight: int,
    total_weight: int,
    chosen_count: int,
    limit: int,
    rng: random.Random,
) -> bool:
    """
    Decide whether the next scanned card joins the selection.

    The first half of the slots are filled unconditionally so the scan always
    makes progress, which also lets zero-weight (expert) cards resurface.
    """
    if chosen_count < limit / 2:
        return True
    if total_weight <= 0:
        return False
    probability = min(1.0, ADMISSION_PROBABILITY_FACTOR * weight / total_weight)
    return rng.random() < probability


def _normalize_max_count(max_count: object) -> int:
    try:
        value = float(max_count)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0
    if math.isnan(value) or value <= 0:
        return 0
    if math.isinf(value):
        return sys.maxsize
    return int(value)


def _unique_by_id(cards: Iterable[Card]) -> list[Card]:
    seen: set[str] = set()
    unique: list[Card] = []
    for card in cards:
        if card.id not in seen:
            seen.add(card.id)
            unique.append(card)
    return unique


def _shuffled(cards: list[Card], rng: random.Random) -> list[Card]:
    result = list(cards)
    rng.shuffle(result)
    return result
