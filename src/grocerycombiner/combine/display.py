"""Display names and shopping order for combined items."""

from collections.abc import Iterable, Sequence
from decimal import ROUND_HALF_UP, Decimal

from grocerycombiner.normalize.text import ParsedQuantity
from grocerycombiner.schemas import CombinedItem

SECTION_ORDER: tuple[str, ...] = (
    "produce",
    "meat_seafood",
    "dairy",
    "pantry",
    "frozen",
    "bakery",
    "other",
)


def format_amount(amount: float) -> str:
    """Whole numbers without decimals, everything else to one decimal place (halves round up)."""
    if float(amount).is_integer():
        return str(int(amount))
    return str(Decimal(str(amount)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _quantity_text(quantity: ParsedQuantity) -> str:
    amount = format_amount(quantity.amount)
    return f"{amount} {quantity.unit}" if quantity.unit else amount


def _annotation(preparations: Sequence[str], qualities: Sequence[str]) -> str:
    notes = []
    if qualities:
        notes.append(", ".join(qualities))
    if preparations:
        notes.append("some " + ", ".join(preparations))
    return f" ({'; '.join(notes)})" if notes else ""


def _capitalize(name: str) -> str:
    return name[:1].upper() + name[1:]


def build_display_name(
    family: str,
    quantity: ParsedQuantity | None,
    preparations: Sequence[str] = (),
    qualities: Sequence[str] = (),
) -> str:
    """
    Compose a shopping line such as "18 cloves garlic (some minced)".

    Args:
        family: Canonical family name.
        quantity: Merged quantity; None or uncountable renders the family alone.
        preparations: Preparation keywords seen across the merged items.
        qualities: Quality keywords seen across the merged items.
    """
    if quantity is not None and quantity.is_countable:
        amount = format_amount(quantity.amount)
        name = f"{amount} {quantity.unit} {family}" if quantity.unit else f"{amount} {family}"
    else:
        name = family

    return _capitalize(name + _annotation(preparations, qualities))


def build_ambiguous_display_name(
    family: str,
    totals: Sequence[ParsedQuantity],
    preparations: Sequence[str] = (),
    qualities: Sequence[str] = (),
) -> str:
    """
    Family heading with the per-unit totals that could not be reconciled.

    e.g. "Mushroom: 2 cup + 8 ounce (some sliced)"
    """
    name = family
    if totals:
        name += ": " + " + ".join(_quantity_text(q) for q in totals)
    return _capitalize(name + _annotation(preparations, qualities))


def section_rank(section: str | None) -> int:
    """Position of a section in shopping order; unknown sections sort as "other"."""
    if section in SECTION_ORDER:
        return SECTION_ORDER.index(section)
    return SECTION_ORDER.index("other")


def sort_for_shopping(items: Iterable[CombinedItem]) -> list[CombinedItem]:
    """Order items by store section, then alphabetically (case-insensitive)."""
    return sorted(items, key=lambda item: (section_rank(item.section), item.display_name.casefold()))
