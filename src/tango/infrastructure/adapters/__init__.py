# Deck store adapters
from .memory_store import InMemoryDeckStore
from .yaml_store import YamlDeckStore

__all__ = ["InMemoryDeckStore", "YamlDeckStore"]
