import logging
from fastapi import APIRouter, Depends

from plant_detector.config import APP_VERSION, GENAI_MODEL
from plant_detector.dependencies import get_genai_client, get_store

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/")
async def root():
    return {
        "status": "online",
        "service": "Plant Detector",
        "version": APP_VERSION,
        "features": [
            "Gemini Vision Plant Diagnosis",
            "Farm Location Suitability",
            "Scan History",
            "Local Marketplace",
            "Farm Dashboard",
        ]
    }


@router.get("/health")
async def health_check(client=Depends(get_genai_client), store=Depends(get_store)):
    return {
        "status": "healthy",
        "version": APP_VERSION,
        "services": {
            "genai": bool(client),
            "model": GENAI_MODEL,
            "storage": type(store.history.storage).__name__,
        },
        "history_items": len(store.history),
        "history_read_only": store.history.read_only,
    }
