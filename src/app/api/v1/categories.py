"""Category vocabulary endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_category_registry
from app.categorization.registry import CategoryRegistry
from app.schemas.category import CategoryResponse

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get(
    "",
    response_model=list[CategoryResponse],
    summary="List categories",
    description="All known categories, most frequently used first.",
)
async def list_categories(
    registry: CategoryRegistry = Depends(get_category_registry),
) -> list[CategoryResponse]:
    categories = await registry.get_all()
    return [CategoryResponse.model_validate(c) for c in categories]


@router.get(
    "/popular",
    response_model=list[CategoryResponse],
    summary="Most frequently used categories",
)
async def list_popular_categories(
    limit: Annotated[int, Query(ge=1, le=100, description="Number of categories (1-100)")] = 10,
    registry: CategoryRegistry = Depends(get_category_registry),
) -> list[CategoryResponse]:
    categories = await registry.get_most_frequent(limit)
    return [CategoryResponse.model_validate(c) for c in categories]
