import base64
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile

from plant_detector.config import SCAN_RATE_LIMIT
from plant_detector.dependencies import get_genai_client, get_store
from plant_detector.models import ScanRequest
from plant_detector.services.ai_client import GenAIClient, analyze_plant_image
from plant_detector.services.images import InvalidImageError, decode_image, to_data_url
from plant_detector.state import AppStateStore, GateBusyError
from plant_detector.utils.links import result_links
from plant_detector.utils.rate_limiter import limiter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


async def run_scan(image: str, store: AppStateStore, client: Optional[GenAIClient]) -> dict:
    """Analyse one image, enter result mode and record it in history."""
    try:
        decode_image(image)
    except InvalidImageError as e:
        logger.warning(f"Rejected scan upload: {e}")
        raise HTTPException(status_code=400, detail="Please capture or select a clear photo first.")

    try:
        with store.gates["scan"].hold():
            analysis = await analyze_plant_image(image, client=client)
    except GateBusyError as e:
        raise HTTPException(status_code=409, detail=str(e))

    image_url = to_data_url(image)
    history_item = store.complete_scan(analysis, image_url)

    return {
        "result": analysis.model_dump(mode="json", by_alias=True),
        "historyItem": history_item.model_dump(mode="json", by_alias=True),
        "links": result_links(analysis),
        "state": store.snapshot(),
    }


@router.post("/scan")
@limiter.limit(SCAN_RATE_LIMIT)
async def scan(
    request: Request,
    body: ScanRequest,
    store: AppStateStore = Depends(get_store),
    client: Optional[GenAIClient] = Depends(get_genai_client),
):
    return await run_scan(body.image, store, client)


@router.post("/scan/upload")
@limiter.limit(SCAN_RATE_LIMIT)
async def scan_upload(
    request: Request,
    file: UploadFile = File(...),
    store: AppStateStore = Depends(get_store),
    client: Optional[GenAIClient] = Depends(get_genai_client),
):
    image_bytes = await file.read()
    if not image_bytes:
        raise HTTPException(status_code=400, detail="Please capture or select a clear photo first.")

    mime_type = file.content_type or "image/jpeg"
    data_url = f"data:{mime_type};base64,{base64.b64encode(image_bytes).decode('utf-8')}"
    logger.info(f"Received upload {file.filename} ({len(image_bytes)} bytes, {mime_type})")
    return await run_scan(data_url, store, client)
