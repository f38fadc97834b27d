"""Bucket grocery items by ingredient family."""

from collections.abc import Iterable

from grocerycombiner.normalize.matching import FamilyMatcher
from grocerycombiner.schemas import GroceryItem


def group_by_family(
    items: Iterable[GroceryItem],
    matcher: FamilyMatcher,
) -> dict[str, list[GroceryItem]]:
    """
    Partition items into per-family buckets.

    Buckets appear in order of their family's first item and keep input
    order within each bucket.
    """
    groups: dict[str, list[GroceryItem]] = {}
    for item in items:
        family = matcher.resolve(item.raw_name)
        groups.setdefault(family, []).append(item)
    return groups
