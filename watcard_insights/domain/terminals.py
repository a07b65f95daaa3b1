"""Terminal classification - maps raw terminal strings to categories and display names"""

import re
from typing import Callable, List, Tuple
from watcard_insights.domain.models import Category

DINING_TOKENS = (
    "MUDIES", "BRUBAKERS", "TH-", "TH ", "LIQUID", "TERIYAKI", "SUBWAY",
    "WILLIAMS", "FRESH", "JUGO", "PITA", "STARBUCKS", "QUESADA",
    # Bare substring: any terminal containing "DC" lands in Dining.
    "DC",
)

COFFEE_TOKENS = ("STARBUCKS", "TH-", "TH ", "WILLIAMS")


def _contains_any(*tokens: str) -> Callable[[str], bool]:
    return lambda terminal: any(token in terminal for token in tokens)


# Order matters: first match wins.
CATEGORY_RULES: List[Tuple[Callable[[str], bool], Category]] = [
    (_contains_any("MARKET"), Category.GROCERIES),
    (_contains_any("LAUNDRY", "WES"), Category.LAUNDRY),
    (_contains_any("PRINT", "BROWSERS"), Category.ACADEMIC),
    (_contains_any(*DINING_TOKENS), Category.DINING),
]

_POS_PREFIX = re.compile(r"^POS-FS-", re.IGNORECASE)
_NUMERIC_SUFFIX = re.compile(r"-\d+$")
_TRAILING_DASH = re.compile(r"-$")


def categorize(terminal: str) -> Category:
    """
    Assign a category to a raw terminal string.

    Matching is case-insensitive substring search over an ordered rule list;
    the first matching rule decides, anything unmatched is Other.

    Example:
        "UWP MARKET LAUNDRY" -> Groceries (MARKET is checked before LAUNDRY)
    """
    upper = terminal.upper()
    for matches, category in CATEGORY_RULES:
        if matches(upper):
            return category
    return Category.OTHER


def is_coffee_terminal(terminal: str) -> bool:
    """Coffee shops counted towards the coffee tax"""
    return _contains_any(*COFFEE_TOKENS)(terminal.upper())


def clean_terminal(raw: str) -> str:
    """
    Derive a display name from a raw terminal string.

    Example:
        "01481 : POS-FS-UWP MARKET-37" -> "UWP MARKET"
    """
    name = raw.split(":", 1)[1] if ":" in raw else raw
    name = _POS_PREFIX.sub("", name.strip())
    name = _NUMERIC_SUFFIX.sub("", name)
    name = _TRAILING_DASH.sub("", name)
    return name.strip()
