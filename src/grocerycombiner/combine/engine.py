"""Combine equivalent grocery list entries into shopping-ready lines."""

import itertools
import re
import uuid
from collections.abc import Iterable, Sequence
from typing import Literal, Protocol

from grocerycombiner.combine.display import (
    build_ambiguous_display_name,
    build_display_name,
    sort_for_shopping,
)
from grocerycombiner.combine.grouping import group_by_family
from grocerycombiner.combine.quantities import QuantityMerger, sum_by_unit
from grocerycombiner.logging_config import get_logger
from grocerycombiner.normalize.conversions import DEFAULT_CONVERSIONS, ConversionRegistry
from grocerycombiner.normalize.families import DEFAULT_FAMILIES, FamilyRegistry
from grocerycombiner.normalize.matching import FamilyMatcher
from grocerycombiner.normalize.text import (
    extract_preparations,
    extract_qualities,
    extract_quantity,
)
from grocerycombiner.schemas import CombinedItem, GroceryItem, MergeStatus

logger = get_logger(__name__)

AmbiguousPolicy = Literal["list", "separate"]


# =============================================================================
# Id Generation
# =============================================================================


class IdGenerator(Protocol):
    """Source of synthetic ids for combined items."""

    def next_id(self, family: str) -> str: ...


def _slug(family: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", family.lower()).strip("-") or "item"


class UuidIdGenerator:
    """Random ids, e.g. "combined-garlic-3f2a9c1d04be"."""

    def __init__(self, prefix: str = "combined"):
        self.prefix = prefix

    def next_id(self, family: str) -> str:
        return f"{self.prefix}-{_slug(family)}-{uuid.uuid4().hex[:12]}"


class SequentialIdGenerator:
    """Deterministic ids, e.g. "combined-garlic-1". Use a fresh one per call."""

    def __init__(self, prefix: str = "combined", start: int = 1):
        self.prefix = prefix
        self._counter = itertools.count(start)

    def next_id(self, family: str) -> str:
        return f"{self.prefix}-{_slug(family)}-{next(self._counter)}"


# =============================================================================
# Combiner
# =============================================================================


def _ordered_union(groups: Iterable[Iterable[str]]) -> list[str]:
    """Union preserving first-seen order."""
    return list(dict.fromkeys(value for group in groups for value in group))


class IngredientCombiner:
    """
    Consolidates grocery items that name the same ingredient.

    Pipeline:
    - resolve each item to an ingredient family
    - bucket items by family
    - merge quantities and annotations per bucket
    - sort the result for shopping

    Registries are read-only, so one combiner can serve concurrent callers.
    """

    def __init__(
        self,
        families: FamilyRegistry = DEFAULT_FAMILIES,
        conversions: ConversionRegistry = DEFAULT_CONVERSIONS,
        id_generator: IdGenerator | None = None,
        ambiguous_policy: AmbiguousPolicy = "list",
    ):
        if ambiguous_policy not in ("list", "separate"):
            raise ValueError(f"Unknown ambiguous merge policy: {ambiguous_policy!r}")

        self.families = families
        self.matcher = FamilyMatcher(families)
        self.merger = QuantityMerger(conversions)
        self.id_generator = id_generator or UuidIdGenerator()
        self.ambiguous_policy = ambiguous_policy

    def combine(
        self,
        items: Sequence[GroceryItem],
        id_generator: IdGenerator | None = None,
    ) -> list[CombinedItem]:
        """
        Combine grocery items into shopping-ready lines.

        Args:
            items: Grocery items in list order. Never modified.
            id_generator: Overrides the combiner's id generator for this call.

        Returns:
            Combined items sorted by section, then name.
        """
        if not items:
            return []

        ids = id_generator or self.id_generator
        groups = group_by_family(items, self.matcher)
        logger.debug(f"Grouped {len(items)} items into {len(groups)} families")

        combined: list[CombinedItem] = []
        for family, members in groups.items():
            if len(members) == 1:
                combined.append(self._single(family, members[0], ids))
            else:
                combined.extend(self._merge_group(family, members, ids))

        logger.info(
            f"Combined {len(items)} items into {len(combined)} "
            f"(reduced by {len(items) - len(combined)})"
        )
        return sort_for_shopping(combined)

    def _single(
        self,
        family: str,
        item: GroceryItem,
        ids: IdGenerator,
        merge_status: MergeStatus = "single",
    ) -> CombinedItem:
        return CombinedItem(
            id=ids.next_id(family),
            display_name=item.raw_name,
            checked=item.checked,
            is_combined=False,
            source_item_ids=[item.id],
            family=family,
            section=item.section or "other",
            recipe_ids=list(dict.fromkeys(item.recipe_ids)),
            merge_status=merge_status,
        )

    def _merge_group(
        self,
        family: str,
        items: Sequence[GroceryItem],
        ids: IdGenerator,
    ) -> list[CombinedItem]:
        names = [item.raw_name for item in items]
        logger.debug(f"Merging {len(items)} items as {family!r}: {names}")

        quantities = [extract_quantity(name, self.families) for name in names]
        preparations = _ordered_union(extract_preparations(name) for name in names)
        qualities = _ordered_union(extract_qualities(name) for name in names)

        merged = self.merger.merge(family, quantities)
        low_confidence = False
        merge_status: MergeStatus = "merged"

        if merged is None:
            if self.ambiguous_policy == "separate":
                logger.debug(f"Keeping {family!r} items separate: units do not reconcile")
                return [self._single(family, item, ids, "ambiguous") for item in items]
            display_name = build_ambiguous_display_name(
                family, sum_by_unit(quantities), preparations, qualities
            )
            merge_status = "ambiguous"
        else:
            display_name = build_display_name(family, merged, preparations, qualities)
            low_confidence = self.merger.has_unknown_units(family, quantities)

        logger.debug(f"{family!r} -> {display_name!r}")

        return [
            CombinedItem(
                id=ids.next_id(family),
                display_name=display_name,
                checked=any(item.checked for item in items),
                is_combined=True,
                source_item_ids=[item.id for item in items],
                family=family,
                section=next((item.section for item in items if item.section), "other"),
                recipe_ids=_ordered_union(item.recipe_ids for item in items),
                low_confidence=low_confidence,
                merge_status=merge_status,
            )
        ]


def combine_items(
    items: Sequence[GroceryItem],
    id_generator: IdGenerator | None = None,
    ambiguous_policy: AmbiguousPolicy = "list",
) -> list[CombinedItem]:
    """Combine items with the default registries."""
    combiner = IngredientCombiner(id_generator=id_generator, ambiguous_policy=ambiguous_policy)
    return combiner.combine(items)
