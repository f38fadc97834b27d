"""Grocery list combining pipeline."""

from grocerycombiner.combine.display import (
    SECTION_ORDER,
    build_ambiguous_display_name,
    build_display_name,
    format_amount,
    sort_for_shopping,
)
from grocerycombiner.combine.engine import (
    IdGenerator,
    IngredientCombiner,
    SequentialIdGenerator,
    UuidIdGenerator,
    combine_items,
)
from grocerycombiner.combine.grouping import group_by_family
from grocerycombiner.combine.quantities import QuantityMerger, sum_by_unit

__all__ = [
    "SECTION_ORDER",
    "IdGenerator",
    "IngredientCombiner",
    "QuantityMerger",
    "SequentialIdGenerator",
    "UuidIdGenerator",
    "build_ambiguous_display_name",
    "build_display_name",
    "combine_items",
    "format_amount",
    "group_by_family",
    "sort_for_shopping",
    "sum_by_unit",
]
