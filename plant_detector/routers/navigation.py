import logging
from fastapi import APIRouter, Depends, HTTPException

from plant_detector.dependencies import get_store
from plant_detector.models import NavigateRequest
from plant_detector.state import AppStateStore, View
from plant_detector.utils.links import result_links, spoken_summary

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


@router.get("/state")
async def get_state(store: AppStateStore = Depends(get_store)):
    return store.snapshot()


@router.post("/navigate")
async def navigate(body: NavigateRequest, store: AppStateStore = Depends(get_store)):
    try:
        view = View(body.view.strip().upper())
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Unknown view: {body.view}")

    moved = store.navigate(view)
    return {"navigated": moved, **store.snapshot()}


@router.get("/result")
async def get_result(store: AppStateStore = Depends(get_store)):
    result = store.result
    if not result:
        raise HTTPException(status_code=404, detail="No analysis is being shown")
    return {
        "result": result.analysis.model_dump(mode="json", by_alias=True),
        "image": result.image,
        "links": result_links(result.analysis),
        "spokenSummary": spoken_summary(result.analysis),
    }


@router.post("/result/dismiss")
async def dismiss_result(store: AppStateStore = Depends(get_store)):
    store.dismiss_result()
    return store.snapshot()
