import logging
from fastapi import APIRouter, Depends, HTTPException

from plant_detector.dependencies import get_store
from plant_detector.state import AppStateStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/history")


@router.get("")
async def list_history(store: AppStateStore = Depends(get_store)):
    return [item.model_dump(mode="json", by_alias=True) for item in store.history.items]


@router.delete("/{item_id}")
async def delete_history_item(item_id: str, store: AppStateStore = Depends(get_store)):
    if not store.history.delete(item_id):
        raise HTTPException(status_code=404, detail="History item not found")
    logger.info(f"✓ Deleted history item {item_id}")
    return {"status": "success", "deleted": item_id}


@router.delete("")
async def clear_history(store: AppStateStore = Depends(get_store)):
    store.history.clear()
    return {"status": "success", "message": "Scan history cleared"}
