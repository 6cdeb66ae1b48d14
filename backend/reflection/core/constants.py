"""Shared application constants.

Centralizes values used by the check-in rules and the local storage backend
so we can document and adjust them in one place.
"""

# Labels shown next to each progress rating
RATING_LABELS = {
    1: "Struggling",
    2: "Slow progress",
    3: "On track",
    4: "Doing well",
    5: "Thriving",
}

VALID_RATINGS = frozenset(RATING_LABELS)

# Years a goal or check-in may belong to; week 1 of year 1 and the last week
# of 9998 still fall inside the calendar the date type can represent
MIN_YEAR = 1
MAX_YEAR = 9998

REFLECTION_PROMPT = "What happened this week? Any wins, setbacks, or insights?"

# Per-goal weekly completion weights (percent). Sum is 100.
RATING_WEIGHT = 20
REFLECTION_WEIGHT = 80

# Storage key of the local-only JSON blob (used as its file name)
LOCAL_STORAGE_KEY = "year-reflection-data"

# Default size of a "value in set" batch; the settings value wins when given
DEFAULT_IN_QUERY_BATCH_SIZE = 10
