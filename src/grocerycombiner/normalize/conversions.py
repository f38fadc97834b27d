"""Per-family unit conversion tables."""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from grocerycombiner.normalize.families import RegistryError


@dataclass(frozen=True)
class ConversionTable:
    """Multipliers from a family's units into its base unit.

    ``display_units`` limits which units the merger may switch to when a total
    is large enough. ``None`` allows every unit with a factor above 1; an
    empty set always keeps the base unit.
    """

    base_unit: str
    multipliers: tuple[tuple[str, float], ...]
    display_units: frozenset[str] | None = None

    def __post_init__(self) -> None:
        for unit, factor in self.multipliers:
            if factor <= 0:
                raise RegistryError(f"Factor for {unit!r} must be positive, got {factor}")
        if self.factor_for(self.base_unit) != 1:
            raise RegistryError(f"Base unit {self.base_unit!r} must be declared with factor 1")
        if self.display_units is not None:
            unknown = self.display_units - {unit for unit, _ in self.multipliers}
            if unknown:
                raise RegistryError(f"Display units not in table: {sorted(unknown)}")

    def factor_for(self, unit: str) -> float | None:
        """Return the multiplier for unit, or None if the table does not know it."""
        for candidate, factor in self.multipliers:
            if candidate == unit:
                return factor
        return None

    def display_candidates(self) -> Iterator[tuple[str, float]]:
        """Larger units eligible for display, in declared order."""
        for unit, factor in self.multipliers:
            if factor <= 1:
                continue
            if self.display_units is not None and unit not in self.display_units:
                continue
            yield unit, factor


class ConversionRegistry:
    """Read-only mapping of family name to its conversion table."""

    def __init__(self, tables: Mapping[str, ConversionTable]):
        self._tables = MappingProxyType(dict(tables))

    def get(self, family: str) -> ConversionTable | None:
        return self._tables.get(family)

    def __contains__(self, family: object) -> bool:
        return family in self._tables

    def __len__(self) -> int:
        return len(self._tables)

    @property
    def families(self) -> tuple[str, ...]:
        return tuple(self._tables)


# =============================================================================
# Default Conversion Tables
# =============================================================================

DEFAULT_CONVERSIONS = ConversionRegistry(
    {
        # 1 head ~ 10 cloves, 1 tbsp minced ~ 3 cloves. Totals are reported in "cloves".
        "garlic": ConversionTable(
            base_unit="cloves",
            multipliers=(
                ("clove", 1.0),
                ("cloves", 1.0),
                ("head", 10.0),
                ("tablespoon", 3.0),
                ("teaspoon", 1.0),
            ),
            display_units=frozenset(),
        ),
        # 1 medium onion ~ 1 cup chopped
        "onion": ConversionTable(
            base_unit="",
            multipliers=(
                ("", 1.0),
                ("cup", 1.0),
            ),
        ),
        "butter": ConversionTable(
            base_unit="tablespoon",
            multipliers=(
                ("tablespoon", 1.0),
                ("teaspoon", 0.33),
                ("cup", 16.0),
                ("stick", 8.0),
            ),
            display_units=frozenset(),
        ),
        "milk": ConversionTable(
            base_unit="cup",
            multipliers=(
                ("gallon", 16.0),
                ("quart", 4.0),
                ("pint", 2.0),
                ("cup", 1.0),
                ("tablespoon", 0.0625),
            ),
        ),
        # A 14.5 oz can of broth holds about 1.75 cups
        "stock": ConversionTable(
            base_unit="cup",
            multipliers=(
                ("quart", 4.0),
                ("carton", 4.0),
                ("can", 1.75),
                ("cup", 1.0),
            ),
            display_units=frozenset({"quart"}),
        ),
    }
)
