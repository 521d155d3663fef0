from fastapi import APIRouter, Depends, HTTPException

from plant_detector.dependencies import get_marketplace
from plant_detector.models import SellListingRequest
from plant_detector.services.marketplace import (
    ALL_CATEGORIES,
    CATEGORIES,
    ListingValidationError,
    Marketplace,
)

router = APIRouter(prefix="/api/market")


@router.get("/categories")
async def list_categories():
    return CATEGORIES


@router.get("/items")
async def list_items(
    category: str = ALL_CATEGORIES,
    search: str = "",
    market: Marketplace = Depends(get_marketplace),
):
    if category not in CATEGORIES:
        raise HTTPException(status_code=400, detail=f"Unknown category: {category}")
    return [item.model_dump(mode="json", by_alias=True) for item in market.search(category, search)]


@router.post("/items", status_code=201)
async def post_item(body: SellListingRequest, market: Marketplace = Depends(get_marketplace)):
    try:
        item = market.post_item(body)
    except ListingValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return item.model_dump(mode="json", by_alias=True)
