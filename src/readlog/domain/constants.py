"""Centralized constants for the readlog application.

All magic numbers and configuration defaults live here so every layer
imports from a single source of truth.
"""

# ---------- Weekly cycle ----------
# Index matches datetime.date.weekday() (Monday == 0).
WEEK_DAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

# ---------- Ratings ----------
MIN_RATING = 0
MAX_RATING = 10
DEFAULT_RATING = 5

# ---------- Singletons ----------
APP_RATING_ID = 1
APP_SETTINGS_ID = 1

# ---------- Themes ----------
THEMES = {0: "Default", 1: "Ocean", 2: "Sunset", 3: "Lavender"}
DEFAULT_THEME_ID = 0

# ---------- Storage ----------
DEFAULT_DB_FILENAME = "reading.db"
