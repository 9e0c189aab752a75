"""
YAML file deck store.

Each deck lives in ``<deck_dir>/<name>.yaml`` as a plain mapping of the
deck's fields with a ``cards`` list. Timestamps are ISO 8601 strings.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any

import yaml
import yaml.constructor

from tango.domain.constants import DECK_FILE_SUFFIX
from tango.domain.learning.models import Card, Deck
from tango.domain.learning.ports import DeckStore, DeckStoreError

logger = logging.getLogger(__name__)


class UniqueKeyLoader(yaml.SafeLoader):
    """Custom YAML loader that forbids duplicate keys."""

    def construct_mapping(self, node, deep=False):
        mapping = set()
        for key_node, _ in node.value:
            key = self.construct_object(key_node, deep=deep)
            if key in mapping:
                raise yaml.constructor.ConstructorError(
                    None, None, f"found duplicate key '{key}'", key_node.start_mark
                )
            mapping.add(key)
        return super().construct_mapping(node, deep)


class YamlDeckStore(DeckStore):
    def __init__(self, deck_dir: Path):
        self.deck_dir = deck_dir

    def list_decks(self) -> list[str]:
        if not self.deck_dir.is_dir():
            return []
        return sorted(p.stem for p in self.deck_dir.glob(f"*{DECK_FILE_SUFFIX}") if p.is_file())

    def load_deck(self, name: str) -> Deck:
        path = self._path_for(name)
        if not path.exists():
            raise DeckStoreError(f"Deck not found: {name}")

        try:
            raw = yaml.load(path.read_text(encoding="utf-8"), Loader=UniqueKeyLoader) or {}
        except (OSError, yaml.YAMLError) as e:
            raise DeckStoreError(f"Failed to read deck {name!r} from {path}: {e}") from e

        try:
            deck = _deck_from_dict(raw, name=name)
        except (KeyError, TypeError, ValueError) as e:
            raise DeckStoreError(f"Malformed deck file {path}: {e}") from e

        logger.debug(f"Loaded deck {name!r} with {len(deck.cards)} cards")
        return deck

    def save_deck(self, deck: Deck) -> None:
        path = self._path_for(deck.name)
        text = yaml.safe_dump(
            _deck_to_dict(deck),
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )
        tmp_path = path.with_name(path.name + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(text, encoding="utf-8")
            tmp_path.replace(path)
        except OSError as e:
            raise DeckStoreError(f"Failed to write deck {deck.name!r} to {path}: {e}") from e

        logger.debug(f"Saved deck {deck.name!r} to {path}")

    def delete_deck(self, name: str) -> None:
        path = self._path_for(name)
        if not path.exists():
            raise DeckStoreError(f"Deck not found: {name}")
        try:
            path.unlink()
        except OSError as e:
            raise DeckStoreError(f"Failed to delete deck {name!r} at {path}: {e}") from e

        logger.info(f"Deleted deck {name!r}")

    def _path_for(self, name: str) -> Path:
        if not name or name.startswith(".") or "/" in name or "\\" in name:
            raise DeckStoreError(f"Invalid deck name: {name!r}")
        return self.deck_dir / f"{name}{DECK_FILE_SUFFIX}"


def _deck_to_dict(deck: Deck) -> dict[str, Any]:
    return {
        "id": deck.id,
        "name": deck.name,
        "created_at": deck.created_at.isoformat(),
        "cards": [_card_to_dict(c) for c in deck.cards],
    }


def _card_to_dict(card: Card) -> dict[str, Any]:
    return {
        "id": card.id,
        "term": card.term,
        "definition": card.definition,
        "created_at": card.created_at.isoformat(),
        "mastery_level": card.mastery_level,
        "last_reviewed_at": _iso_or_none(card.last_reviewed_at),
        "next_review_at": _iso_or_none(card.next_review_at),
        "review_count": card.review_count,
        "is_default": card.is_default,
    }


def _deck_from_dict(raw: dict[str, Any], name: str) -> Deck:
    if not isinstance(raw, dict):
        raise TypeError("deck file must contain a mapping")

    cards = raw.get("cards") or []
    if not isinstance(cards, list):
        raise TypeError("'cards' must be a list")

    # The file stem is the deck name; saving writes back to the same file
    kwargs: dict[str, Any] = {"name": name}
    if raw.get("id"):
        kwargs["id"] = str(raw["id"])
    if raw.get("created_at"):
        kwargs["created_at"] = _parse_time(raw["created_at"])

    deck = Deck(**kwargs)
    deck.cards = [_card_from_dict(c) for c in cards]
    return deck


def _card_from_dict(raw: dict[str, Any]) -> Card:
    if not isinstance(raw, dict):
        raise TypeError("each card must be a mapping")

    kwargs: dict[str, Any] = {
        "term": str(raw["term"]),
        "definition": str(raw.get("definition") or ""),
        "mastery_level": raw.get("mastery_level", 0),
        "last_reviewed_at": _parse_time(raw.get("last_reviewed_at")),
        "next_review_at": _parse_time(raw.get("next_review_at")),
        "review_count": max(int(raw.get("review_count") or 0), 0),
        "is_default": bool(raw.get("is_default", False)),
    }
    if raw.get("id"):
        kwargs["id"] = str(raw["id"])
    if raw.get("created_at"):
        kwargs["created_at"] = _parse_time(raw["created_at"])
    return Card(**kwargs)


def _parse_time(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def _iso_or_none(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None
