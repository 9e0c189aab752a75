"""Tests for the learning domain models."""

from datetime import UTC, datetime, timedelta

import pytest

from tango.domain.learning.models import LEVEL_TABLE, Card, Deck, MasteryLevel


class TestMasteryLevel:
    def test_table_covers_every_level(self):
        assert set(LEVEL_TABLE) == set(MasteryLevel)

    def test_weights_strictly_decrease(self):
        weights = [level.weight for level in MasteryLevel]
        assert weights == [5, 4, 3, 2, 1, 0]
        assert all(a > b for a, b in zip(weights, weights[1:]))

    def test_review_intervals(self):
        assert MasteryLevel.NEW.review_interval == timedelta(0)
        assert MasteryLevel.DIFFICULT.review_interval == timedelta(hours=1)
        assert MasteryLevel.LEARNING.review_interval == timedelta(days=1)
        assert MasteryLevel.FAMILIAR.review_interval == timedelta(days=3)
        assert MasteryLevel.MASTERED.review_interval == timedelta(days=7)
        assert MasteryLevel.EXPERT.review_interval == timedelta(days=30)

    @pytest.mark.parametrize(
        "raw,expected",
        [(-3, MasteryLevel.NEW), (2, MasteryLevel.LEARNING), (9, MasteryLevel.EXPERT), ("x", MasteryLevel.NEW), (None, MasteryLevel.NEW)],
    )
    def test_coerce_clamps(self, raw, expected):
        assert MasteryLevel.coerce(raw) is expected


class TestCard:
    def test_defaults(self):
        card = Card(term="optional", definition="A type that may hold nil")
        assert card.mastery_level == 0
        assert card.review_count == 0
        assert card.next_review_at is None
        assert card.last_reviewed_at is None
        assert card.id
        assert card.created_at.tzinfo is not None

    def test_ids_are_unique(self):
        assert Card(term="a", definition="").id != Card(term="a", definition="").id

    def test_out_of_range_level_is_clamped(self):
        assert Card(term="a", definition="", mastery_level=12).mastery_level == 5
        assert Card(term="a", definition="", mastery_level=-1).mastery_level == 0

    def test_naive_timestamps_become_utc(self):
        card = Card(term="a", definition="", next_review_at=datetime(2026, 1, 1, 12, 0))
        assert card.next_review_at == datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


class TestDeck:
    def test_add_and_remove_card(self):
        deck = Deck(name="Swift")
        card = deck.add_card("struct", "A value type")

        assert deck.get_card(card.id) is card
        assert deck.remove_card(card.id) is True
        assert deck.cards == []
        assert deck.remove_card(card.id) is False

    def test_update_card_keeps_progress(self):
        deck = Deck(name="Swift")
        card = deck.add_card("struct", "A value type")
        card.mastery_level = 3
        card.review_count = 7

        updated = deck.update_card(card.id, definition="A value type with memberwise init")

        assert updated is card
        assert card.term == "struct"
        assert card.definition == "A value type with memberwise init"
        assert card.mastery_level == 3
        assert card.review_count == 7
        assert deck.update_card("missing", term="x") is None

    def test_find_card_ignores_case(self):
        deck = Deck(name="Swift")
        card = deck.add_card("Closure", "A self-contained block")
        assert deck.find_card("closure") is card
        assert deck.find_card("lambda") is None
