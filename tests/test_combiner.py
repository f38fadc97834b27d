"""Tests for the ingredient combining pipeline."""

import random

import pytest

from grocerycombiner.combine.engine import (
    IngredientCombiner,
    SequentialIdGenerator,
    UuidIdGenerator,
    combine_items,
)
from grocerycombiner.combine.grouping import group_by_family
from grocerycombiner.normalize.conversions import ConversionRegistry
from grocerycombiner.normalize.families import FamilyRegistry
from grocerycombiner.schemas import GroceryItem

# =============================================================================
# Worked Examples
# =============================================================================


class TestWorkedExamples:
    """End-to-end combining of typical grocery lists."""

    def test_garlic_variations(self, combiner, make_items):
        """Test cloves, heads and tablespoons of garlic combine into cloves."""
        result = combiner.combine(
            make_items("2 cloves garlic", "1 head garlic", "minced garlic, 2 tablespoons")
        )

        assert len(result) == 1
        item = result[0]
        assert item.family == "garlic"
        assert item.display_name == "18 cloves garlic (some minced)"
        assert item.is_combined
        assert item.source_item_ids == ["1", "2", "3"]
        assert item.merge_status == "merged"
        assert not item.low_confidence

    def test_different_ingredients_stay_separate(self, combiner, make_items):
        """Test unrelated items are not combined."""
        result = combiner.combine(make_items("garlic", "onion", "tomato"))

        assert len(result) == 3
        assert not any(item.is_combined for item in result)
        assert [item.display_name for item in result] == ["garlic", "onion", "tomato"]
        assert [item.family for item in result] == ["garlic", "onion", "tomato"]

    def test_plural_handling(self, combiner, make_items):
        """Test '2 tomatoes' and '1 tomato' sum as counts."""
        result = combiner.combine(make_items("2 tomatoes", "1 tomato"))

        assert len(result) == 1
        assert result[0].display_name == "3 tomato"

    def test_unit_conversion(self, combiner, make_items):
        """Test tablespoons and sticks of butter."""
        result = combiner.combine(make_items("8 tablespoons butter", "1 stick butter"))

        assert len(result) == 1
        assert result[0].display_name == "16 tablespoon butter"

    def test_empty_list(self, combiner):
        """Test empty input."""
        assert combiner.combine([]) == []

    def test_preparation_tracking(self, combiner, make_items):
        """Test every preparation is noted."""
        result = combiner.combine(make_items("chopped garlic", "minced garlic", "crushed garlic"))

        assert len(result) == 1
        assert result[0].display_name == "3 cloves garlic (some chopped, minced, crushed)"
        # Bare counts are not in the garlic table
        assert result[0].low_confidence

    def test_onion_varieties(self, combiner, make_items):
        """Test onions counted across colours and cups."""
        result = combiner.combine(
            make_items("1 yellow onion", "2 red onions", "chopped onion, 1 cup")
        )

        assert len(result) == 1
        assert result[0].display_name == "4 onion (some chopped)"
        assert result[0].low_confidence

    def test_uncountable_items(self, combiner, make_items):
        """Test 'to taste' does not block a merge."""
        result = combiner.combine(make_items("salt to taste", "1 tsp salt"))

        assert len(result) == 1
        assert result[0].display_name == "1 teaspoon salt"

    def test_unit_spellings_merge(self, combiner, make_items):
        """Test plural and abbreviated units merge without a conversion table."""
        result = combiner.combine(make_items("1 cup rice", "2 cups rice"))

        assert len(result) == 1
        assert result[0].display_name == "3 cup rice"
        assert result[0].merge_status == "merged"

        result = combiner.combine(make_items("1 tbsp salt", "1 tablespoon salt"))

        assert len(result) == 1
        assert result[0].display_name == "2 tablespoon salt"
        assert result[0].merge_status == "merged"

    def test_quarter_amounts_round_up(self, combiner, make_items):
        """Test a merged 0.25 cup displays as 0.3."""
        result = combiner.combine(make_items("1/8 cup sugar", "1/8 cup sugar"))

        assert result[0].display_name == "0.3 cup sugar"

    def test_qualities_noted(self, combiner, make_items):
        """Test quality modifiers are preserved."""
        result = combiner.combine(make_items("fresh spinach", "frozen spinach"))

        assert len(result) == 1
        assert result[0].display_name == "2 spinach (fresh, frozen)"

    def test_real_world_list(self, combiner, sample_grocery_list):
        """Test a list merged from several recipes."""
        result = combiner.combine(sample_grocery_list)

        names = sorted(item.display_name for item in result)
        assert names == [
            "1 cup rice",
            "1 yellow onion",
            "12 cloves garlic",
            "16 tablespoon butter",
            "3 tomato",
        ]


# =============================================================================
# Ambiguous Merges
# =============================================================================


class TestAmbiguousMerge:
    """Tests for families whose units cannot be reconciled."""

    def test_list_policy(self, combiner, make_items):
        """Test per-unit totals listed under one heading."""
        result = combiner.combine(make_items("2 cups mushrooms", "8 ounce mushrooms, sliced"))

        assert len(result) == 1
        item = result[0]
        assert item.display_name == "Mushroom: 2 cup + 8 ounce (some sliced)"
        assert item.merge_status == "ambiguous"
        assert item.is_combined
        assert item.source_item_ids == ["1", "2"]

    def test_separate_policy(self, make_items):
        """Test items kept unmerged under the separate policy."""
        combiner = IngredientCombiner(
            id_generator=SequentialIdGenerator(), ambiguous_policy="separate"
        )
        result = combiner.combine(make_items("2 cups mushrooms", "8 ounce mushrooms", "1 lemon"))

        mushrooms = [item for item in result if item.family == "mushroom"]
        assert [item.display_name for item in mushrooms] == ["2 cups mushrooms", "8 ounce mushrooms"]
        assert all(item.merge_status == "ambiguous" for item in mushrooms)
        assert not any(item.is_combined for item in mushrooms)

    def test_unknown_policy_rejected(self):
        """Test configuration errors surface at construction."""
        with pytest.raises(ValueError):
            IngredientCombiner(ambiguous_policy="guess")


# =============================================================================
# Properties
# =============================================================================


MIXED_LIST = [
    "2 cloves garlic",
    "1 head garlic",
    "2 tomatoes",
    "1 tomato",
    "8 tablespoons butter",
    "1 stick butter",
    "1 cup rice",
    "2 cups mushrooms",
    "8 ounce mushrooms",
    "2 tbsp tahini",
]


class TestCombinerProperties:
    """Invariants that hold for any input."""

    def test_partition(self, combiner, make_items):
        """Test every source id appears in exactly one combined item."""
        items = make_items(*MIXED_LIST)
        result = combiner.combine(items)

        source_ids = [sid for item in result for sid in item.source_item_ids]
        assert sorted(source_ids) == sorted(item.id for item in items)
        assert len(source_ids) == len(set(source_ids))

    def test_partition_separate_policy(self, make_items):
        """Test the partition also holds when ambiguous items stay separate."""
        items = make_items(*MIXED_LIST)
        result = IngredientCombiner(ambiguous_policy="separate").combine(items)

        source_ids = [sid for item in result for sid in item.source_item_ids]
        assert sorted(source_ids) == sorted(item.id for item in items)

    def test_checked_is_any(self, combiner, make_items):
        """Test a combined item is checked iff a source item is."""
        items = make_items("2 tomatoes", "1 tomato", "1 cup rice", "2 cups rice", checked=(2,))
        result = {item.family: item for item in combiner.combine(items)}

        assert result["tomato"].checked
        assert not result["rice"].checked

    def test_order_independence(self, make_items):
        """Test shuffling changes neither families nor totals."""
        items = make_items(*MIXED_LIST)

        def summary(result):
            # Ambiguous entries list units in first-seen order, which shuffling changes
            return {
                item.family: (
                    sorted(item.source_item_ids),
                    item.display_name if item.merge_status != "ambiguous" else None,
                )
                for item in result
            }

        expected = summary(IngredientCombiner().combine(items))
        rng = random.Random(7)
        for _ in range(20):
            shuffled = items[:]
            rng.shuffle(shuffled)
            assert summary(IngredientCombiner().combine(shuffled)) == expected

    def test_distinct_families_not_combined(self, combiner, make_items):
        """Test one output per input when no family repeats."""
        items = make_items("2 cloves garlic", "1 cup rice", "3 eggs", "1 lemon")
        result = combiner.combine(items)

        assert len(result) == len(items)
        assert not any(item.is_combined for item in result)
        assert sorted(item.display_name for item in result) == sorted(i.raw_name for i in items)

    def test_deterministic_with_sequential_ids(self, make_items):
        """Test identical input gives identical output."""
        items = make_items(*MIXED_LIST)
        first = IngredientCombiner(id_generator=SequentialIdGenerator()).combine(items)
        second = IngredientCombiner(id_generator=SequentialIdGenerator()).combine(items)

        assert [i.model_dump() for i in first] == [i.model_dump() for i in second]

    def test_inputs_not_modified(self, combiner, make_items):
        """Test the engine leaves its input untouched."""
        items = make_items(*MIXED_LIST)
        before = [item.model_dump() for item in items]

        combiner.combine(items)

        assert [item.model_dump() for item in items] == before

    def test_ids_unique(self, make_items):
        """Test synthetic ids are unique within one result."""
        result = IngredientCombiner().combine(make_items(*MIXED_LIST))
        assert len({item.id for item in result}) == len(result)


# =============================================================================
# Metadata
# =============================================================================


class TestCombinedMetadata:
    """Tests for sections, recipe ids and ids on combined items."""

    def test_first_section_wins(self, combiner):
        """Test combined items take the first section present."""
        items = [
            GroceryItem(id="a", raw_name="2 tomatoes"),
            GroceryItem(id="b", raw_name="1 tomato", section="produce"),
            GroceryItem(id="c", raw_name="3 tomatoes", section="pantry"),
        ]
        result = combiner.combine(items)

        assert result[0].section == "produce"

    def test_missing_section_is_other(self, combiner, make_items):
        """Test default section."""
        result = combiner.combine(make_items("1 lemon"))
        assert result[0].section == "other"

    def test_sorted_by_section(self, combiner, make_items):
        """Test result follows shopping order."""
        items = make_items(
            "1 cup rice", "2 cups milk", "1 lemon", sections={1: "pantry", 2: "dairy", 3: "produce"}
        )
        result = combiner.combine(items)

        assert [item.section for item in result] == ["produce", "dairy", "pantry"]

    def test_recipe_ids_merged(self, combiner):
        """Test recipe ids are unioned in first-seen order."""
        items = [
            GroceryItem(id="a", raw_name="2 tomatoes", recipe_ids=("r1", "r2")),
            GroceryItem(id="b", raw_name="1 tomato", recipe_ids=("r2", "r3")),
        ]
        result = combiner.combine(items)

        assert result[0].recipe_ids == ["r1", "r2", "r3"]

    def test_sequential_ids(self, combiner, make_items):
        """Test injected id generator is used."""
        result = combiner.combine(make_items("2 tomatoes", "1 tomato"))
        assert result[0].id == "combined-tomato-1"

    def test_per_call_id_generator(self, combiner, make_items):
        """Test an id generator passed to combine overrides the default."""
        result = combiner.combine(
            make_items("1 bell pepper"), id_generator=SequentialIdGenerator(prefix="x", start=5)
        )
        assert result[0].id == "x-bell-pepper-5"

    def test_uuid_ids(self):
        """Test the default id generator."""
        generator = UuidIdGenerator()
        first, second = generator.next_id("garlic"), generator.next_id("garlic")
        assert first.startswith("combined-garlic-")
        assert first != second

    def test_camel_case_input(self):
        """Test items accept the list store's field names."""
        item = GroceryItem.model_validate(
            {"id": "1", "rawName": "2 tomatoes", "checked": True, "recipeIds": ["r1"]}
        )
        assert item.raw_name == "2 tomatoes"
        assert item.recipe_ids == ("r1",)


# =============================================================================
# Injection
# =============================================================================


class TestInjectedRegistries:
    """Tests for combining with alternate registries."""

    def test_custom_registries(self, make_items):
        """Test combining uses the registries it is given."""
        families = FamilyRegistry.from_pairs([("chili", ("chili", "jalapeno", "serrano"))])
        combiner = IngredientCombiner(
            families=families,
            conversions=ConversionRegistry({}),
            id_generator=SequentialIdGenerator(),
        )
        result = combiner.combine(make_items("2 jalapeno", "1 serrano"))

        assert len(result) == 1
        assert result[0].display_name == "3 chili"

    def test_group_by_family_keeps_order(self, combiner, make_items):
        """Test buckets follow first appearance and keep input order."""
        items = make_items("1 tomato", "1 cup rice", "2 tomatoes")
        groups = group_by_family(items, combiner.matcher)

        assert list(groups) == ["tomato", "rice"]
        assert [item.id for item in groups["tomato"]] == ["1", "3"]

    def test_combine_items_helper(self, make_items):
        """Test the module-level helper."""
        result = combine_items(make_items("2 tomatoes", "1 tomato"), id_generator=SequentialIdGenerator())
        assert result[0].display_name == "3 tomato"
