from fastapi import APIRouter, Depends

from plant_detector.dependencies import get_store
from plant_detector.services.dashboard import get_dashboard
from plant_detector.state import AppStateStore

router = APIRouter(prefix="/api")


@router.get("/dashboard")
async def dashboard(store: AppStateStore = Depends(get_store)):
    return get_dashboard(store.history.items)
