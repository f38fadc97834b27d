"""Quantity, preparation and quality extraction from raw grocery lines."""

import re
from dataclasses import dataclass

from grocerycombiner.normalize.families import DEFAULT_FAMILIES, FamilyRegistry

AS_NEEDED = "as needed"

PREPARATION_KEYWORDS: tuple[str, ...] = (
    "minced",
    "chopped",
    "diced",
    "sliced",
    "crushed",
    "grated",
    "shredded",
    "julienned",
    "cubed",
    "whole",
)

QUALITY_KEYWORDS: tuple[str, ...] = (
    "fresh",
    "dried",
    "canned",
    "frozen",
    "jarred",
    "organic",
)

# Unit tokens that really mean "a count of the ingredient"
COUNT_WORDS = frozenset({"whole", "count", "piece", "pieces", "item", "items"})

# Adjectives that sit where a unit would but describe the ingredient
DESCRIPTIVE_ADJECTIVES = frozenset(
    {
        "large",
        "medium",
        "small",
        "fresh",
        "dried",
        "frozen",
        "raw",
        "cooked",
        "ripe",
        "organic",
        "free-range",
    }
)

# Plural and abbreviated unit spellings folded onto one form
UNIT_ALIASES: dict[str, str] = {
    "cups": "cup",
    "tablespoons": "tablespoon",
    "tbsp": "tablespoon",
    "teaspoons": "teaspoon",
    "tsp": "teaspoon",
    "ounces": "ounce",
    "oz": "ounce",
    "pounds": "pound",
    "lb": "pound",
    "lbs": "pound",
    "grams": "gram",
    "g": "gram",
    "kg": "kilogram",
    "cloves": "clove",
    "heads": "head",
    "sprigs": "sprig",
    "leaves": "leaf",
    "sticks": "stick",
    "quarts": "quart",
    "pints": "pint",
    "gallons": "gallon",
    "cans": "can",
    "cartons": "carton",
}

UNICODE_FRACTIONS: dict[str, float] = {
    "½": 0.5,
    "¼": 0.25,
    "¾": 0.75,
    "⅓": 1 / 3,
    "⅔": 2 / 3,
    "⅛": 0.125,
}

_UNIT = r"(?:\s*([a-z]+(?:-[a-z]+)*))"
_NUMBER = r"(\d+(?:\.\d+)?)"

UNCOUNTABLE_PATTERN = re.compile(r"\b(?:as needed|to taste|optional|garnish|for serving)\b")
RANGE_PATTERN = re.compile(rf"{_NUMBER}\s*-\s*{_NUMBER}{_UNIT}?")
MIXED_PATTERN = re.compile(rf"(\d+)\s+(\d+)\s*/\s*(\d+){_UNIT}?")
UNICODE_PATTERN = re.compile(rf"(?:(\d+)\s*)?([{''.join(UNICODE_FRACTIONS)}]){_UNIT}?")
FRACTION_PATTERN = re.compile(rf"(\d+)\s*/\s*(\d+){_UNIT}?")
NUMBER_UNIT_PATTERN = re.compile(rf"{_NUMBER}{_UNIT}")
NUMBER_PATTERN = re.compile(_NUMBER)


@dataclass(frozen=True)
class ParsedQuantity:
    """An amount and unit read from one grocery line.

    ``unit == ""`` is a bare count. ``amount is None`` marks an uncountable
    quantity such as "salt to taste".
    """

    amount: float | None
    unit: str

    @property
    def is_countable(self) -> bool:
        return self.amount is not None


def normalize_unit(unit: str, families: FamilyRegistry = DEFAULT_FAMILIES) -> str:
    """
    Normalize a unit token read after a number.

    Plurals and abbreviations fold onto one spelling ("tbsp" -> "tablespoon").
    Count words, descriptive adjectives and ingredient names ("6 eggs")
    all become the empty count unit.
    """
    if not unit:
        return ""

    lower = unit.strip().lower()
    if lower in UNIT_ALIASES:
        return UNIT_ALIASES[lower]
    if lower in COUNT_WORDS or lower in DESCRIPTIVE_ADJECTIVES:
        return ""
    if families.is_known_term(lower):
        return ""
    return lower


def _ratio(numerator: str, denominator: str) -> float | None:
    denom = int(denominator)
    if denom == 0:
        return None
    return int(numerator) / denom


def _match_quantity(text: str) -> tuple[float, str] | None:
    """Try each quantity pattern in priority order."""
    if match := RANGE_PATTERN.search(text):
        low, high = float(match.group(1)), float(match.group(2))
        return (low + high) / 2, match.group(3) or ""

    for match in MIXED_PATTERN.finditer(text):
        fraction = _ratio(match.group(2), match.group(3))
        if fraction is not None:
            return int(match.group(1)) + fraction, match.group(4) or ""

    if match := UNICODE_PATTERN.search(text):
        whole = int(match.group(1)) if match.group(1) else 0
        return whole + UNICODE_FRACTIONS[match.group(2)], match.group(3) or ""

    for match in FRACTION_PATTERN.finditer(text):
        fraction = _ratio(match.group(1), match.group(2))
        if fraction is not None:
            return fraction, match.group(3) or ""

    if match := NUMBER_UNIT_PATTERN.search(text):
        return float(match.group(1)), match.group(2)

    if match := NUMBER_PATTERN.search(text):
        return float(match.group(1)), ""

    return None


def extract_quantity(text: str, families: FamilyRegistry = DEFAULT_FAMILIES) -> ParsedQuantity:
    """
    Extract the amount and unit from a raw grocery line.

    Handles formats like:
    - "1-2 cloves garlic" (range, returns average)
    - "1 1/2 cups flour" and "½ cup milk"
    - "1/2 tsp salt"
    - "2 cups rice", "500g beef"
    - "3" (bare count)

    Lines such as "salt to taste" are uncountable. Anything else without a
    number counts as one.
    """
    lower = (text or "").lower()

    if UNCOUNTABLE_PATTERN.search(lower):
        return ParsedQuantity(amount=None, unit=AS_NEEDED)

    matched = _match_quantity(lower)
    if matched is None:
        return ParsedQuantity(amount=1.0, unit="")

    amount, unit = matched
    return ParsedQuantity(amount=amount, unit=normalize_unit(unit, families))


def _scan_keywords(text: str, keywords: tuple[str, ...]) -> tuple[str, ...]:
    lower = (text or "").lower()
    return tuple(kw for kw in keywords if re.search(rf"\b{re.escape(kw)}\b", lower))


def extract_preparations(text: str) -> tuple[str, ...]:
    """Preparation keywords (minced, chopped, ...) found in text."""
    return _scan_keywords(text, PREPARATION_KEYWORDS)


def extract_qualities(text: str) -> tuple[str, ...]:
    """Quality keywords (fresh, canned, ...) found in text."""
    return _scan_keywords(text, QUALITY_KEYWORDS)
