"""Grocery item schemas shared by the engine and the API."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

MergeStatus = Literal["single", "merged", "ambiguous"]


class GroceryItem(BaseModel):
    """One entry of a grocery list, as supplied by the list store."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    raw_name: str = Field(alias="rawName")
    checked: bool = False
    section: str | None = None
    recipe_ids: tuple[str, ...] = Field(default=(), alias="recipeIds")


class CombinedItem(BaseModel):
    """A shopping-ready line built from one or more grocery items."""

    id: str
    display_name: str
    checked: bool
    is_combined: bool
    source_item_ids: list[str]
    family: str
    section: str = "other"
    recipe_ids: list[str] = Field(default_factory=list)
    low_confidence: bool = Field(
        default=False,
        description="A unit outside the family's conversion table was counted as the base unit",
    )
    merge_status: MergeStatus = "single"
