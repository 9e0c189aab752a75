"""
Mastery updates after a graded answer.

A correct answer raises the card one level, a wrong one lowers it one level.
The next review is scheduled from the new level's interval, with failed cards
capped so they come back within the hour.
"""

import logging
from datetime import datetime, timedelta

from tango.domain.constants import (
    FAILED_REVIEW_INTERVAL_CAP,
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
)
from tango.domain.learning.models import Card, MasteryLevel, as_utc

logger = logging.getLogger(__name__)

FAILED_INTERVAL_CAP = timedelta(seconds=FAILED_REVIEW_INTERVAL_CAP)


def record_answer(card: Card, correct: bool, now: datetime) -> None:
    """
    Apply a graded answer to ``card`` in place.

    Adding a failed card to the session exclusion set is the caller's job;
    see ``LearningService.answer``.
    """
    now = as_utc(now)
    previous = card.level

    if correct:
        new_level = MasteryLevel.coerce(previous + 1)
    else:
        new_level = MasteryLevel.coerce(previous - 1)

    interval = new_level.review_interval
    if not correct:
        interval = min(interval, FAILED_INTERVAL_CAP)

    card.mastery_level = int(new_level)
    card.next_review_at = now + interval
    card.last_reviewed_at = now
    card.review_count += 1

    logger.debug(
        f"{card.term!r}: {previous.display_name} -> {new_level.display_name}, "
        f"next review in {int(interval.total_seconds())}s"
    )


def display_name(card: Card) -> str:
    return card.level.display_name


def time_until_next_review(card: Card, now: datetime) -> timedelta | None:
    """
    Time remaining until the card is due.

    Returns None for never-reviewed cards; negative values mean overdue.
    """
    if card.next_review_at is None:
        return None
    return card.next_review_at - as_utc(now)


def describe_time_until_review(card: Card, now: datetime) -> str:
    """Short human readable form, e.g. ``"now"``, ``"in 5 minutes"``, ``"in 3 days"``."""
    remaining = time_until_next_review(card, now)
    if remaining is None:
        return "now"

    seconds = remaining.total_seconds()
    if seconds <= 0:
        return "now"
    if seconds < SECONDS_PER_HOUR:
        return _plural(int(seconds // SECONDS_PER_MINUTE), "minute")
    if seconds < SECONDS_PER_DAY:
        return _plural(int(seconds // SECONDS_PER_HOUR), "hour")
    return _plural(int(seconds // SECONDS_PER_DAY), "day")


def _plural(count: int, unit: str) -> str:
    suffix = "" if count == 1 else "s"
    return f"in {count} {unit}{suffix}"
