"""
Ingredient options API router
"""
from typing import Any, List
from fastapi import APIRouter, Depends, HTTPException, status
from sandwich_api.api.deps import get_catalog_store
from sandwich_api.models.catalog import IngredientCategory, OptionLabel, to_labels
from sandwich_api.services.catalog import CatalogStore

router = APIRouter(prefix="/options", tags=["options"])


@router.get("/{category}", response_model=List[OptionLabel])
async def list_options(
    category: str,
    catalog: CatalogStore = Depends(get_catalog_store),
) -> Any:
    """List the options of one ingredient category"""
    try:
        kind = IngredientCategory(category.lower())
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown option category: {category}"
        )
    return to_labels(catalog.list_all(kind))
