"""Tango: spaced-repetition flashcards for programming terminology."""

from tango.consts import VERSION

__version__ = VERSION
