import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request

from plant_detector.config import LOCATION_RATE_LIMIT
from plant_detector.dependencies import get_genai_client, get_store
from plant_detector.models import LocationRequest
from plant_detector.services.ai_client import GenAIClient, analyze_farming_location
from plant_detector.state import AppStateStore, GateBusyError
from plant_detector.utils.links import maps_search_url
from plant_detector.utils.rate_limiter import limiter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


@router.post("/location")
@limiter.limit(LOCATION_RATE_LIMIT)
async def analyze_location(
    request: Request,
    body: LocationRequest,
    store: AppStateStore = Depends(get_store),
    client: Optional[GenAIClient] = Depends(get_genai_client),
):
    query = body.query
    if not query.strip():
        raise HTTPException(status_code=400, detail="Please enter a location to search.")

    try:
        with store.gates["location"].hold():
            analysis = await analyze_farming_location(query, client=client)
    except GateBusyError as e:
        raise HTTPException(status_code=409, detail=str(e))

    store.set_location_result(analysis)
    return {
        "result": analysis.model_dump(mode="json", by_alias=True, exclude_none=True),
        "mapsUrl": maps_search_url(query.strip()),
    }


@router.get("/location")
async def last_location(store: AppStateStore = Depends(get_store)):
    if not store.location_result:
        return {"result": None}
    return {"result": store.location_result.model_dump(mode="json", by_alias=True, exclude_none=True)}
