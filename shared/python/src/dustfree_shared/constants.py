"""
constants.py — shared constants used across the API and the CLI.

Table names, typed literals for enum-like columns and the palette used by
the timeline and analytics views live here so they stay in sync.
"""

from __future__ import annotations

from typing import Final, Literal

# ---------------------------------------------------------------------------
# Typed literals
# ---------------------------------------------------------------------------
Role = Literal["host", "cleaner"]
CleaningStatus = Literal["scheduled", "in_progress", "completed", "cancelled"]
MediaType = Literal["image", "video"]
MediaCategory = Literal["start", "after", "receipt_main", "receipt_extra"]

ROLES: Final[tuple[str, ...]] = ("host", "cleaner")
DEFAULT_ROLE: Final[str] = "host"

# Where each role lands after the auth gate
HOME_PATHS: Final[dict[str, str]] = {
    "host": "/dashboard",
    "cleaner": "/cleaner",
}

# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------
PROFILES: Final = "profiles"
PROPERTIES: Final = "properties"
CLEANERS: Final = "cleaners"
CLEANINGS: Final = "cleanings"
CLEANING_MEDIA: Final = "cleaning_media"
PROPERTY_TASKS: Final = "property_tasks"
CLEANER_PAYOUTS: Final = "cleaner_payouts"

# ---------------------------------------------------------------------------
# Media
# ---------------------------------------------------------------------------
RECEIPT_CATEGORIES: Final[tuple[str, ...]] = ("receipt_main", "receipt_extra")

# Display order of media in a cleaning's gallery; unknown categories last
MEDIA_CATEGORY_ORDER: Final[dict[str, int]] = {
    "start": 0,
    "after": 1,
    "receipt": 2,
    "receipt_main": 2,
    "receipt_extra": 2,
}

# ---------------------------------------------------------------------------
# Charts
# ---------------------------------------------------------------------------
COLOR_PALETTE: Final[tuple[str, ...]] = (
    "#2563eb",  # blue-600
    "#16a34a",  # green-600
    "#f59e0b",  # amber-500
    "#db2777",  # pink-600
    "#7c3aed",  # violet-600
    "#ea580c",  # orange-600
    "#059669",  # emerald-600
    "#0ea5e9",  # sky-500
    "#dc2626",  # red-600
    "#4f46e5",  # indigo-600
)

ANALYTICS_MONTHS: Final[int] = 6
TIMELINE_DEFAULT_DAYS: Final[int] = 30

EMAIL_PATTERN: Final[str] = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"
