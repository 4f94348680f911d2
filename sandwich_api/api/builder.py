"""
Sandwich builder API router
"""
from typing import Any, Optional
from fastapi import APIRouter, Depends, status
from sandwich_api.api.deps import get_optional_user_id, get_sandwich_service
from sandwich_api.models.sandwich import BuilderRequest, SandwichOrder
from sandwich_api.services.sandwiches import SandwichService

router = APIRouter(prefix="/builder", tags=["builder"])


@router.post("", response_model=SandwichOrder, status_code=status.HTTP_201_CREATED)
async def build_sandwich(
    request: BuilderRequest,
    user_id: Optional[int] = Depends(get_optional_user_id),
    service: SandwichService = Depends(get_sandwich_service),
) -> Any:
    """Create a sandwich from selected ingredient ids.

    Signed-in callers get a private sandwich; anonymous ones a public sandwich
    anyone may edit.
    """
    return service.create(request, owner_user_id=user_id)
