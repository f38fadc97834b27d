"""API routes for combining grocery list entries."""

import uuid
from functools import lru_cache
from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from grocerycombiner.combine.engine import IngredientCombiner, UuidIdGenerator
from grocerycombiner.config import get_settings
from grocerycombiner.logging_config import LoggingContext, get_logger
from grocerycombiner.normalize.text import (
    extract_preparations,
    extract_qualities,
    extract_quantity,
)
from grocerycombiner.schemas import CombinedItem, GroceryItem

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/grocery", tags=["grocery"])


# =============================================================================
# Request/Response Schemas
# =============================================================================


class CombineRequest(BaseModel):
    """Grocery list to combine."""

    list_id: str | None = Field(None, description="Grocery list id, used for log context")
    items: list[GroceryItem] = Field(default_factory=list)


class CombineResponse(BaseModel):
    """Combined grocery list in shopping order."""

    items: list[CombinedItem]
    input_count: int
    output_count: int


class ParseRequest(BaseModel):
    """A single raw grocery line."""

    text: str


class ParseResponse(BaseModel):
    """How the combiner reads a single grocery line."""

    text: str
    family: str
    amount: float | None
    unit: str
    preparations: list[str]
    qualities: list[str]


# =============================================================================
# Dependencies
# =============================================================================


@lru_cache
def get_combiner() -> IngredientCombiner:
    """Shared combiner built from settings with the default registries."""
    settings = get_settings()
    return IngredientCombiner(
        id_generator=UuidIdGenerator(prefix=settings.combined_id_prefix),
        ambiguous_policy=settings.ambiguous_merge_policy,
    )


CombinerDep = Annotated[IngredientCombiner, Depends(get_combiner)]


# =============================================================================
# Routes
# =============================================================================


@router.post("/combine", response_model=CombineResponse)
def combine_grocery_list(request: CombineRequest, combiner: CombinerDep) -> CombineResponse:
    """
    Combine equivalent grocery entries.

    Every input item id appears in exactly one returned item's
    ``source_item_ids``; check-off actions should be written back to those ids.
    """
    with LoggingContext(request_id=str(uuid.uuid4()), list_id=request.list_id):
        logger.info(f"Combining {len(request.items)} grocery items")
        combined = combiner.combine(request.items)

    return CombineResponse(
        items=combined,
        input_count=len(request.items),
        output_count=len(combined),
    )


@router.post("/parse", response_model=ParseResponse)
def parse_grocery_line(request: ParseRequest, combiner: CombinerDep) -> ParseResponse:
    """Show the family, quantity and annotations read from one line."""
    quantity = extract_quantity(request.text, combiner.families)
    return ParseResponse(
        text=request.text,
        family=combiner.matcher.resolve(request.text),
        amount=quantity.amount,
        unit=quantity.unit,
        preparations=list(extract_preparations(request.text)),
        qualities=list(extract_qualities(request.text)),
    )
