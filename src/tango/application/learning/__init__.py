# Application Learning Package
from .mastery import describe_time_until_review, record_answer, time_until_next_review
from .selection import is_eligible, select_for_review
from .service import LearningService, SessionState, SessionSummary
from .stats import DeckSummary, summarize_deck, understanding_rate

__all__ = [
    "select_for_review",
    "is_eligible",
    "record_answer",
    "time_until_next_review",
    "describe_time_until_review",
    "LearningService",
    "SessionState",
    "SessionSummary",
    "DeckSummary",
    "summarize_deck",
    "understanding_rate",
]
