"""Ingredient family registry: canonical names and their textual variations."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass


class RegistryError(ValueError):
    """Raised when registry data is malformed."""


@dataclass(frozen=True)
class IngredientFamily:
    """A canonical ingredient and the strings that refer to it.

    Variation order matters: the matcher tests variations in the order given.
    """

    name: str
    variations: tuple[str, ...]


class FamilyRegistry:
    """Read-only, ordered collection of ingredient families."""

    def __init__(self, families: Iterable[IngredientFamily]):
        self._families: tuple[IngredientFamily, ...] = tuple(families)

        seen: set[str] = set()
        terms: set[str] = set()
        for family in self._families:
            if not family.name or family.name != family.name.strip().lower():
                raise RegistryError(f"Family name must be non-empty lower-case: {family.name!r}")
            if family.name in seen:
                raise RegistryError(f"Duplicate family: {family.name!r}")
            if any(not v or v != v.strip().lower() for v in family.variations):
                raise RegistryError(f"Family {family.name!r} has an invalid variation")
            seen.add(family.name)
            terms.add(family.name)
            terms.update(family.variations)

        self._terms = frozenset(terms)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, Iterable[str]]]) -> "FamilyRegistry":
        """Build a registry from (name, variations) pairs, keeping their order."""
        return cls(IngredientFamily(name, tuple(variations)) for name, variations in pairs)

    def __iter__(self) -> Iterator[IngredientFamily]:
        return iter(self._families)

    def __len__(self) -> int:
        return len(self._families)

    def __contains__(self, name: object) -> bool:
        return any(family.name == name for family in self._families)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(family.name for family in self._families)

    def get(self, name: str) -> IngredientFamily | None:
        for family in self._families:
            if family.name == name:
                return family
        return None

    def is_known_term(self, term: str) -> bool:
        """True if term is a family name or one of the declared variations."""
        return term in self._terms


# =============================================================================
# Default Families
# =============================================================================

DEFAULT_FAMILY_DATA: tuple[tuple[str, tuple[str, ...]], ...] = (
    # Vegetables
    ("garlic", (
        "garlic", "garlic clove", "garlic cloves", "minced garlic",
        "chopped garlic", "crushed garlic", "garlic powder", "garlic head",
    )),
    ("onion", (
        "onion", "onions", "yellow onion", "white onion", "red onion",
        "sweet onion", "vidalia onion", "diced onion", "chopped onion",
        "sliced onion", "green onion", "scallion",
    )),
    ("tomato", (
        "tomato", "tomatoes", "cherry tomatoes", "grape tomatoes",
        "roma tomatoes", "plum tomatoes", "diced tomatoes", "crushed tomatoes",
        "tomato paste", "tomato sauce", "sun-dried tomatoes",
    )),
    ("potato", (
        "potato", "potatoes", "russet potato", "red potato", "yukon gold",
        "sweet potato", "sweet potatoes", "baby potatoes",
    )),
    ("carrot", ("carrot", "carrots", "baby carrots", "shredded carrots")),
    ("celery", ("celery", "celery stalk", "celery stalks", "celery ribs")),
    ("bell pepper", (
        "bell pepper", "bell peppers", "red bell pepper", "green bell pepper",
        "yellow bell pepper", "orange bell pepper", "sweet pepper",
    )),
    ("mushroom", (
        "mushroom", "mushrooms", "button mushroom", "cremini",
        "shiitake", "portobello", "white mushroom",
    )),
    ("spinach", ("spinach", "baby spinach", "fresh spinach", "frozen spinach")),
    ("lettuce", ("lettuce", "romaine", "iceberg", "butter lettuce", "mixed greens")),
    ("cucumber", ("cucumber", "cucumbers", "english cucumber", "persian cucumber")),
    ("zucchini", ("zucchini", "zucchinis", "yellow squash")),
    # Proteins
    ("chicken", (
        "chicken", "chicken breast", "chicken breasts", "chicken thigh",
        "chicken thighs", "whole chicken", "chicken drumsticks", "chicken wings",
    )),
    ("beef", (
        "beef", "ground beef", "beef chuck", "sirloin", "ribeye", "beef stew meat",
        "beef roast", "flank steak", "brisket",
    )),
    ("pork", (
        "pork", "pork chop", "pork chops", "pork loin", "pork shoulder",
        "ground pork", "bacon", "pork tenderloin",
    )),
    ("salmon", ("salmon", "salmon fillet", "salmon fillets", "smoked salmon")),
    ("shrimp", ("shrimp", "prawns", "jumbo shrimp", "medium shrimp")),
    ("egg", ("egg", "eggs", "large eggs", "medium eggs")),
    ("tofu", ("tofu", "firm tofu", "extra firm tofu", "silken tofu")),
    # Dairy
    ("milk", ("milk", "whole milk", "2% milk", "skim milk", "low-fat milk")),
    ("butter", ("butter", "unsalted butter", "salted butter")),
    ("cheese", (
        "cheese", "cheddar", "mozzarella", "parmesan", "swiss cheese",
        "shredded cheese", "cream cheese", "feta", "goat cheese",
    )),
    ("yogurt", ("yogurt", "greek yogurt", "plain yogurt", "vanilla yogurt")),
    ("cream", ("cream", "heavy cream", "whipping cream", "sour cream", "half and half")),
    # Pantry staples
    ("flour", ("flour", "all-purpose flour", "bread flour", "whole wheat flour")),
    ("sugar", ("sugar", "granulated sugar", "white sugar", "brown sugar", "powdered sugar")),
    ("rice", ("rice", "white rice", "brown rice", "jasmine rice", "basmati rice")),
    ("pasta", ("pasta", "spaghetti", "penne", "fettuccine", "macaroni", "linguine")),
    ("oil", ("oil", "olive oil", "vegetable oil", "canola oil", "coconut oil")),
    ("salt", ("salt", "kosher salt", "sea salt", "table salt", "iodized salt")),
    ("pepper", ("pepper", "black pepper", "ground pepper", "peppercorns")),
    ("beans", (
        "beans", "black beans", "kidney beans", "pinto beans", "cannellini beans",
        "chickpeas", "garbanzo beans",
    )),
    ("stock", (
        "stock", "broth", "chicken stock", "beef stock", "vegetable stock",
        "chicken broth", "beef broth", "vegetable broth",
    )),
    # Herbs & spices
    ("basil", ("basil", "fresh basil", "dried basil", "basil leaves")),
    ("parsley", ("parsley", "fresh parsley", "dried parsley", "flat-leaf parsley")),
    ("cilantro", ("cilantro", "fresh cilantro", "coriander", "cilantro leaves")),
    ("thyme", ("thyme", "fresh thyme", "dried thyme")),
    ("rosemary", ("rosemary", "fresh rosemary", "dried rosemary")),
    ("oregano", ("oregano", "dried oregano", "fresh oregano")),
    ("cumin", ("cumin", "ground cumin", "cumin seeds")),
    ("paprika", ("paprika", "smoked paprika", "sweet paprika")),
    ("ginger", ("ginger", "fresh ginger", "ground ginger", "ginger root")),
    # Fruits
    ("apple", ("apple", "apples", "granny smith", "gala apple", "honeycrisp")),
    ("banana", ("banana", "bananas")),
    ("lemon", ("lemon", "lemons", "lemon juice")),
    ("lime", ("lime", "limes", "lime juice")),
    ("orange", ("orange", "oranges", "orange juice")),
    ("berry", (
        "berry", "berries", "strawberry", "strawberries", "blueberry",
        "blueberries", "raspberry", "raspberries", "blackberry", "blackberries",
    )),
)

DEFAULT_FAMILIES = FamilyRegistry.from_pairs(DEFAULT_FAMILY_DATA)
