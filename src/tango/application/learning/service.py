"""
Learning Service: application layer orchestrator.

Owns one review session: the set of cards the learner answered wrong while
the session is active, plus the clock and random source used for selection.
Create one instance per session flow; concurrent sessions need separate instances.
"""

import logging
import random
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from tango.domain.constants import DEFAULT_MAX_QUESTIONS
from tango.domain.learning.models import Card
from tango.domain.learning.ports import Clock

from .mastery import record_answer
from .selection import select_for_review
from .stats import understanding_rate

logger = logging.getLogger(__name__)


class SessionState(Enum):
    IDLE = "idle"
    ACTIVE = "active"


@dataclass(frozen=True)
class SessionSummary:
    """Outcome of a finished session."""

    answered: int
    correct: int
    rejected: int  # distinct cards answered wrong
    understanding_rate: int  # percent


class LearningService:
    """
    Application service for running spaced-repetition review sessions.

    Depends on the Clock abstraction and an injectable random source so the
    selection and scheduling are deterministic under test.
    """

    def __init__(
        self,
        clock: Clock,
        rng: random.Random | None = None,
        max_questions: int = DEFAULT_MAX_QUESTIONS,
    ):
        """
        Args:
            clock: Source of the current time.
            rng: Random source for selection; a fresh generator if not provided.
            max_questions: Default session size for ``select_cards``.
        """
        self._clock = clock
        self._rng = rng or random.Random()
        self.max_questions = max_questions
        self._excluded: set[str] = set()
        self._state = SessionState.IDLE
        self._answered = 0
        self._correct = 0

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def excluded(self) -> frozenset[str]:
        """IDs of cards answered wrong during the active session."""
        return frozenset(self._excluded)

    def start_session(self) -> None:
        """Begin a session. Calling it again while active simply resets the session."""
        self._reset()
        self._state = SessionState.ACTIVE
        logger.info("Learning session started")

    def end_session(self) -> SessionSummary:
        """End the session and clear its exclusions. Safe to call when idle."""
        summary = SessionSummary(
            answered=self._answered,
            correct=self._correct,
            rejected=len(self._excluded),
            understanding_rate=understanding_rate(self._correct, self._answered),
        )
        if self._state is SessionState.ACTIVE:
            logger.info(
                f"Learning session ended: {summary.correct}/{summary.answered} correct, "
                f"{summary.rejected} difficult cards"
            )
        self._reset()
        self._state = SessionState.IDLE
        return summary

    def select_cards(self, cards: Iterable[Card], max_count: int | None = None) -> list[Card]:
        """
        Choose the cards to present next from a deck's full card pool.

        Args:
            cards: Every card in the deck.
            max_count: Session size; defaults to ``max_questions``.
        """
        limit = self.max_questions if max_count is None else max_count
        return select_for_review(
            cards,
            now=self._clock.now(),
            excluded=self._excluded,
            max_count=limit,
            rng=self._rng,
        )

    def answer(self, card: Card, correct: bool) -> None:
        """
        Grade a card and update its mastery.

        Cards answered wrong are excluded from further selections until the
        session ends. Persisting the mutated card is the caller's job.
        """
        record_answer(card, correct, self._clock.now())
        self._answered += 1
        if correct:
            self._correct += 1
        else:
            self._excluded.add(card.id)
            logger.debug(f"Excluding {card.term!r} for the rest of the session")

    def _reset(self) -> None:
        self._excluded.clear()
        self._answered = 0
        self._correct = 0
