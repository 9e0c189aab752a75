import random
from datetime import timedelta

import pytest
from conftest import T0

from tango.application.learning.mastery import (
    describe_time_until_review,
    display_name,
    record_answer,
    time_until_next_review,
)
from tango.domain.learning.models import Card


def card_at(level: int, **kwargs) -> Card:
    return Card(term="closure", definition="A self-contained block", mastery_level=level, **kwargs)


def test_correct_answer_promotes_familiar_to_mastered():
    card = card_at(3)
    record_answer(card, correct=True, now=T0)

    assert card.mastery_level == 4
    assert card.next_review_at == T0 + timedelta(seconds=604800)
    assert card.last_reviewed_at == T0
    assert card.review_count == 1


def test_wrong_answer_on_new_card_stays_new_and_is_due_now():
    card = card_at(0)
    record_answer(card, correct=False, now=T0)

    assert card.mastery_level == 0
    assert card.next_review_at == T0
    assert card.review_count == 1


def test_correct_answer_caps_at_expert():
    card = card_at(5)
    record_answer(card, correct=True, now=T0)
    assert card.mastery_level == 5
    assert card.next_review_at == T0 + timedelta(days=30)


@pytest.mark.parametrize("level", range(6))
def test_wrong_answer_requeues_within_an_hour(level):
    card = card_at(level)
    record_answer(card, correct=False, now=T0)

    assert card.mastery_level == max(level - 1, 0)
    assert card.next_review_at <= T0 + timedelta(seconds=3600)


def test_wrong_answer_from_expert_is_capped_to_one_hour():
    card = card_at(5)
    record_answer(card, correct=False, now=T0)
    # Mastered interval is 7 days; the failure cap wins
    assert card.mastery_level == 4
    assert card.next_review_at == T0 + timedelta(hours=1)


@pytest.mark.parametrize(
    "level,expected",
    [(0, timedelta(hours=1)), (1, timedelta(days=1)), (2, timedelta(days=3))],
)
def test_correct_answer_schedules_next_level_interval(level, expected):
    card = card_at(level)
    record_answer(card, correct=True, now=T0)
    assert card.next_review_at - T0 == expected


def test_mastery_stays_in_range_over_random_answers():
    rng = random.Random(42)
    card = card_at(0)
    now = T0
    for i in range(500):
        record_answer(card, correct=rng.random() < 0.5, now=now)
        now += timedelta(minutes=5)
        assert 0 <= card.mastery_level <= 5
    assert card.review_count == 500


def test_naive_now_is_stored_as_utc():
    card = card_at(1)
    record_answer(card, correct=True, now=T0.replace(tzinfo=None))
    assert card.last_reviewed_at == T0
    assert card.last_reviewed_at.tzinfo is not None


def test_display_name_follows_level():
    assert display_name(card_at(0)) == "new"
    assert display_name(card_at(3)) == "familiar"
    assert display_name(card_at(5)) == "expert"


class TestTimeUntilReview:
    def test_never_reviewed(self):
        card = card_at(0)
        assert time_until_next_review(card, T0) is None
        assert describe_time_until_review(card, T0) == "now"

    def test_overdue_is_now(self):
        card = card_at(2, next_review_at=T0 - timedelta(minutes=1))
        assert time_until_next_review(card, T0) == timedelta(minutes=-1)
        assert describe_time_until_review(card, T0) == "now"

    @pytest.mark.parametrize(
        "delta,text",
        [
            (timedelta(seconds=30), "in 0 minutes"),
            (timedelta(minutes=1), "in 1 minute"),
            (timedelta(minutes=59), "in 59 minutes"),
            (timedelta(hours=1), "in 1 hour"),
            (timedelta(hours=23, minutes=59), "in 23 hours"),
            (timedelta(days=1), "in 1 day"),
            (timedelta(days=30), "in 30 days"),
        ],
    )
    def test_buckets(self, delta, text):
        card = card_at(2, next_review_at=T0 + delta)
        assert describe_time_until_review(card, T0) == text
