"""Ingredient knowledge base and raw-text normalization."""

from grocerycombiner.normalize.conversions import (
    DEFAULT_CONVERSIONS,
    ConversionRegistry,
    ConversionTable,
)
from grocerycombiner.normalize.families import (
    DEFAULT_FAMILIES,
    FamilyRegistry,
    IngredientFamily,
    RegistryError,
)
from grocerycombiner.normalize.matching import FamilyMatcher
from grocerycombiner.normalize.text import (
    ParsedQuantity,
    extract_preparations,
    extract_qualities,
    extract_quantity,
    normalize_unit,
)

__all__ = [
    "DEFAULT_CONVERSIONS",
    "DEFAULT_FAMILIES",
    "ConversionRegistry",
    "ConversionTable",
    "FamilyMatcher",
    "FamilyRegistry",
    "IngredientFamily",
    "ParsedQuantity",
    "RegistryError",
    "extract_preparations",
    "extract_qualities",
    "extract_quantity",
    "normalize_unit",
]
