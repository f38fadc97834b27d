"""Resolve raw grocery lines to a canonical ingredient family."""

import re

from grocerycombiner.logging_config import get_logger
from grocerycombiner.normalize.families import DEFAULT_FAMILIES, FamilyRegistry

logger = get_logger(__name__)


# Quantity and unit words that never name an ingredient
QUANTITY_STOPWORDS = frozenset(
    {
        "cup",
        "cups",
        "tablespoon",
        "tablespoons",
        "tbsp",
        "tsp",
        "teaspoon",
        "teaspoons",
        "ounce",
        "ounces",
        "oz",
        "pound",
        "pounds",
        "lb",
        "lbs",
        "gram",
        "grams",
        "kilogram",
        "kg",
        "clove",
        "cloves",
        "head",
        "heads",
        "piece",
        "pieces",
        "can",
        "cans",
        "jar",
        "jars",
        "package",
        "packages",
        "small",
        "medium",
        "large",
        "whole",
        "half",
    }
)

# Descriptors and filler that trail ingredient names ("garlic, finely chopped")
DESCRIPTOR_WORDS = frozenset(
    {
        "finely",
        "chopped",
        "minced",
        "diced",
        "sliced",
        "grated",
        "crushed",
        "fresh",
        "dried",
        "canned",
        "frozen",
        "jarred",
        "ground",
        "boneless",
        "bone-in",
        "scrubbed",
        "well",
        "needed",
        "taste",
        "serving",
        "optional",
        "garnish",
        "as",
        "for",
        "to",
        "of",
        "and",
        "or",
    }
)

_PARENTHETICAL = re.compile(r"\([^)]*\)")
_PUNCTUATION = re.compile(r"[^\w\s-]")


class FamilyMatcher:
    """Maps raw ingredient text onto a family from a FamilyRegistry.

    Families and their variations are tried in declared order; the first hit
    wins. Text no family claims falls back to its main noun, so every line
    resolves to something.
    """

    def __init__(self, registry: FamilyRegistry = DEFAULT_FAMILIES):
        self.registry = registry

    def resolve(self, text: str) -> str:
        """
        Resolve text to a family name.

        Args:
            text: Raw grocery line, e.g. "2 cloves garlic".

        Returns:
            The matching family name, or a fallback token for unknown items.
        """
        lower = (text or "").strip().lower()

        if lower:
            for family in self.registry:
                for variation in family.variations:
                    if self.is_match(lower, variation):
                        return family.name

        fallback = self.fallback_token(lower)
        logger.debug(f"No family for {text!r}, falling back to {fallback!r}")
        return fallback

    @staticmethod
    def is_match(text: str, variation: str) -> bool:
        """Exact, text-contains-variation, or variation-contains-text match."""
        return text == variation or variation in text or text in variation

    @staticmethod
    def fallback_token(text: str) -> str:
        """
        Pick the main noun of an unrecognized line.

        Parenthetical notes and punctuation are dropped, then quantity words,
        descriptors and tokens of two characters or fewer. The last
        remaining word is usually the noun ("saffron threads" -> "threads").
        """
        cleaned = _PUNCTUATION.sub(" ", _PARENTHETICAL.sub(" ", text))
        tokens = [
            token
            for token in cleaned.split()
            if len(token) > 2
            and token not in QUANTITY_STOPWORDS
            and token not in DESCRIPTOR_WORDS
        ]
        return tokens[-1] if tokens else text
