"""
Collaborator Factory
Centralizes wiring of the store, clock and learning service from config.
"""

import random

from tango.application.config import AppConfig
from tango.application.learning.service import LearningService
from tango.domain.learning.ports import Clock, DeckStore
from tango.infrastructure.adapters.yaml_store import YamlDeckStore
from tango.infrastructure.clock import SystemClock


def get_deck_store(config: AppConfig) -> DeckStore:
    return YamlDeckStore(deck_dir=config.deck_dir)


def get_clock() -> Clock:
    return SystemClock()


def get_learning_service(config: AppConfig, clock: Clock | None = None) -> LearningService:
    """
    Returns a fresh LearningService for one review session.

    A configured seed makes card selection reproducible.
    """
    rng = random.Random(config.seed) if config.seed is not None else random.Random()
    return LearningService(
        clock=clock or get_clock(),
        rng=rng,
        max_questions=config.max_questions,
    )
