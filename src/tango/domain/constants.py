"""Centralized constants for the Tango application.

All magic numbers and configuration defaults live here so every layer
imports from a single source of truth.
"""

# ---------- Review Sessions ----------
DEFAULT_MAX_QUESTIONS = 10
FAILED_REVIEW_INTERVAL_CAP = 3600  # seconds
ADMISSION_PROBABILITY_FACTOR = 2.0

# ---------- Time Formatting ----------
SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400

# ---------- Paths ----------
CONFIG_DIR_NAME = ".config/tango"  # relative to the home directory
DECK_FILE_SUFFIX = ".yaml"
