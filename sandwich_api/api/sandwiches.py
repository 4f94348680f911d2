"""
Sandwiches API router
"""
from typing import Any, List, Optional
from fastapi import APIRouter, Depends, Response, status
from sandwich_api.api.deps import get_current_user_id, get_optional_user_id, get_sandwich_service
from sandwich_api.models.sandwich import BackfillResult, SandwichDetail, SandwichOrder, SandwichUpdate
from sandwich_api.services.sandwiches import SandwichService

router = APIRouter(prefix="/sandwiches", tags=["sandwiches"])


@router.get("", response_model=List[SandwichOrder])
async def list_sandwiches(service: SandwichService = Depends(get_sandwich_service)) -> Any:
    return service.list()


@router.get("/mine", response_model=List[SandwichOrder])
async def list_my_sandwiches(
    user_id: int = Depends(get_current_user_id),
    service: SandwichService = Depends(get_sandwich_service),
) -> Any:
    """Sandwiches created by the signed-in user"""
    return service.list_mine(user_id)


@router.post("/backfill-prices", response_model=BackfillResult)
async def backfill_prices(service: SandwichService = Depends(get_sandwich_service)) -> Any:
    """Set any missing prices to 0.00"""
    return {"updated": service.backfill_prices()}


@router.get("/{sandwich_id}", response_model=SandwichDetail)
async def get_sandwich(
    sandwich_id: int,
    service: SandwichService = Depends(get_sandwich_service),
) -> Any:
    """Sandwich with its composition decoded from the description"""
    return service.get_detail(sandwich_id)


@router.put("/{sandwich_id}", response_model=SandwichOrder)
async def update_sandwich(
    sandwich_id: int,
    patch: SandwichUpdate,
    user_id: Optional[int] = Depends(get_optional_user_id),
    service: SandwichService = Depends(get_sandwich_service),
) -> Any:
    return service.update(sandwich_id, patch, caller_id=user_id)


@router.delete("/{sandwich_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_sandwich(
    sandwich_id: int,
    user_id: Optional[int] = Depends(get_optional_user_id),
    service: SandwichService = Depends(get_sandwich_service),
) -> Response:
    service.delete(sandwich_id, caller_id=user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
