import random
from datetime import UTC, datetime, timedelta

import pytest

from tango.domain.learning.models import Card
from tango.domain.learning.ports import Clock

T0 = datetime(2026, 1, 15, 9, 0, tzinfo=UTC)


class FixedClock(Clock):
    """Clock that only moves when told to."""

    def __init__(self, start: datetime = T0):
        self.current = start

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


def make_cards(count: int, level: int = 0, next_review_at: datetime | None = None) -> list[Card]:
    return [
        Card(
            term=f"term{i}",
            definition=f"definition {i}",
            id=f"card-{level}-{i}",
            mastery_level=level,
            next_review_at=next_review_at,
        )
        for i in range(count)
    ]


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config and decks
    monkeypatch.setenv("HOME", str(home))
    for var in ("TANGO_DECK_DIR", "TANGO_MAX_QUESTIONS", "TANGO_SEED", "TANGO_VERBOSE"):
        monkeypatch.delenv(var, raising=False)
    return home
