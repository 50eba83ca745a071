"""Fixed category name and display color tables."""

from __future__ import annotations

DEFAULT_CATEGORY = "None"
DEFAULT_COLOR = "#9CACAE"

CATEGORY_NAMES = {
    1: "health",
    2: "family",
    3: "mentality",
    4: "finance",
    5: "work and career",
    6: "relax",
    7: "self development and education",
    8: "friends and people",
}

CATEGORY_COLORS = {
    1: "#9DE284",
    2: "#ECAA54",
    3: "#94E5F3",
    4: "#839EF6",
    5: "#FF7676",
    6: "#FFE374",
    7: "#C898DB",
    8: "#EA6591",
}


def category_name(code: int) -> str:
    """Return the category name for ``code``; unknown codes map to "None"."""

    return CATEGORY_NAMES.get(code, DEFAULT_CATEGORY)


def category_color(code: int) -> str:
    """Return the hex display color for ``code``; unknown codes map to gray."""

    return CATEGORY_COLORS.get(code, DEFAULT_COLOR)


def lookup_category(code: int) -> tuple[str, str]:
    """Return the (name, color) pair for ``code``; never raises."""

    return category_name(code), category_color(code)
