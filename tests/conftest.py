"""Pytest configuration and shared fixtures."""

import pytest

from grocerycombiner.combine.engine import IngredientCombiner, SequentialIdGenerator
from grocerycombiner.normalize.matching import FamilyMatcher
from grocerycombiner.schemas import GroceryItem

# =============================================================================
# Grocery Item Fixtures
# =============================================================================


@pytest.fixture
def make_items():
    """Factory turning raw names into GroceryItems with ids "1", "2", ..."""

    def _make(*names: str, checked: tuple[int, ...] = (), sections: dict | None = None):
        sections = sections or {}
        return [
            GroceryItem(
                id=str(i),
                raw_name=name,
                checked=i in checked,
                section=sections.get(i),
            )
            for i, name in enumerate(names, start=1)
        ]

    return _make


@pytest.fixture
def sample_grocery_list(make_items):
    """A merged list from several recipes."""
    return make_items(
        "2 cloves garlic",
        "1 yellow onion",
        "2 tomatoes",
        "1 head garlic",
        "8 tablespoons butter",
        "1 tomato",
        "1 stick butter",
        "1 cup rice",
    )


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def combiner():
    """Combiner with default registries and deterministic ids."""
    return IngredientCombiner(id_generator=SequentialIdGenerator())


@pytest.fixture
def matcher():
    """Matcher over the default family registry."""
    return FamilyMatcher()
