# Plant Detector API v1.0.0
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.middleware.cors import CORSMiddleware

from plant_detector.config import APP_VERSION, CORS_ORIGINS, GENAI_MODEL, SUPABASE_URL
from plant_detector.dependencies import get_genai_client, get_store
from plant_detector.routers import dashboard, health, history, location, marketplace, navigation, scan
from plant_detector.utils.rate_limiter import limiter

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


# ============================================================================#
# Lifespan Events
# ============================================================================#

@asynccontextmanager
async def lifespan(app_instance: FastAPI):
    # Startup
    client = get_genai_client()
    store = get_store()
    logger.info("=" * 60)
    logger.info("Starting Plant Detector")
    logger.info(f"GenAI ({GENAI_MODEL}): {'✓' if client else '✗'}")
    logger.info(f"Supabase: {'✓' if SUPABASE_URL else '✗'}")
    logger.info(f"History: {len(store.history)} items")
    logger.info("=" * 60)

    yield

    # Shutdown
    logger.info("Shutting down gracefully...")
    if client:
        await client.aclose()


app = FastAPI(
    title="Plant Detector",
    description="AI plant diagnosis, farm location suitability and a local marketplace",
    version=APP_VERSION,
    lifespan=lifespan
)

# Initialize Rate Limiter
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(navigation.router)
app.include_router(scan.router)
app.include_router(location.router)
app.include_router(history.router)
app.include_router(marketplace.router)
app.include_router(dashboard.router)


def main():
    uvicorn.run("plant_detector.main:app", host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
