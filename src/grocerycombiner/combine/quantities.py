"""Merge parsed quantities within one ingredient family."""

from collections.abc import Sequence

from grocerycombiner.logging_config import get_logger
from grocerycombiner.normalize.conversions import (
    DEFAULT_CONVERSIONS,
    ConversionRegistry,
    ConversionTable,
)
from grocerycombiner.normalize.text import AS_NEEDED, ParsedQuantity

logger = get_logger(__name__)


def sum_by_unit(quantities: Sequence[ParsedQuantity]) -> list[ParsedQuantity]:
    """Sum countable quantities per literal unit, in order of first appearance."""
    totals: dict[str, float] = {}
    for quantity in quantities:
        if not quantity.is_countable:
            continue
        totals[quantity.unit] = totals.get(quantity.unit, 0.0) + quantity.amount
    return [ParsedQuantity(amount=amount, unit=unit) for unit, amount in totals.items()]


class QuantityMerger:
    """
    Combines the quantities of one family into a single quantity.

    Families with a conversion table are summed in the table's base unit and
    re-expressed in the largest sensible display unit. Other families can
    only be summed when every quantity shares one unit.
    """

    def __init__(self, conversions: ConversionRegistry = DEFAULT_CONVERSIONS):
        self.conversions = conversions

    def merge(self, family: str, quantities: Sequence[ParsedQuantity]) -> ParsedQuantity | None:
        """
        Merge quantities for a family.

        Args:
            family: Canonical family name.
            quantities: Parsed quantities of the family's items.

        Returns:
            The merged quantity, or None when the units cannot be reconciled.
        """
        if not quantities:
            return None

        countable = [q for q in quantities if q.is_countable]
        if not countable:
            return ParsedQuantity(amount=None, unit=AS_NEEDED)

        table = self.conversions.get(family)
        if table is None:
            return self._merge_same_unit(family, countable)

        total = 0.0
        for quantity in countable:
            factor = table.factor_for(quantity.unit)
            if factor is None:
                logger.warning(
                    f"Unknown unit {quantity.unit!r} for {family!r}, "
                    f"counting it as {table.base_unit or 'a count'}"
                )
                factor = 1.0
            total += quantity.amount * factor

        logger.debug(f"Total for {family!r}: {total} {table.base_unit}".rstrip())
        return self.select_display_unit(total, table)

    def has_unknown_units(self, family: str, quantities: Sequence[ParsedQuantity]) -> bool:
        """True if a countable quantity uses a unit the family's table lacks."""
        table = self.conversions.get(family)
        if table is None:
            return False
        return any(
            q.is_countable and table.factor_for(q.unit) is None for q in quantities
        )

    @staticmethod
    def select_display_unit(total: float, table: ConversionTable) -> ParsedQuantity:
        """
        Express a base-unit total in the first larger unit it fills.

        e.g. 10 cups of stock -> 2.5 quart
        """
        for unit, factor in table.display_candidates():
            amount = total / factor
            if amount >= 1:
                return ParsedQuantity(amount=amount, unit=unit)
        return ParsedQuantity(amount=total, unit=table.base_unit)

    @staticmethod
    def _merge_same_unit(
        family: str, quantities: Sequence[ParsedQuantity]
    ) -> ParsedQuantity | None:
        by_unit = sum_by_unit(quantities)
        if len(by_unit) == 1:
            return by_unit[0]

        logger.debug(
            f"Cannot merge {family!r}: units {[q.unit for q in by_unit]} have no conversion"
        )
        return None
