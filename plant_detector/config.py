import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# ============================================================================#
# ENVIRONMENT / SERVICES
# ============================================================================#
OPENROUTER_API_KEY = os.getenv("OPENROUTER_API_KEY")  # For Gemini (plant + location analysis)
GENAI_BASE_URL = os.getenv("GENAI_BASE_URL", "https://openrouter.ai/api/v1")
GENAI_MODEL = os.getenv("GENAI_MODEL", "google/gemini-2.5-flash")
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_KEY = os.getenv("SUPABASE_KEY")

# Sampling temperature per task (diagnosis is kept more deterministic)
PLANT_TEMPERATURE = float(os.getenv("PLANT_TEMPERATURE", "0.4"))
LOCATION_TEMPERATURE = float(os.getenv("LOCATION_TEMPERATURE", "0.5"))

# Timeouts for the AI gateway
AI_REQUEST_TIMEOUT = float(os.getenv("AI_REQUEST_TIMEOUT", "60"))  # seconds
AI_CONNECT_TIMEOUT = float(os.getenv("AI_CONNECT_TIMEOUT", "15"))  # seconds

# Images larger than this (longest side, px) are downsized before upload
MAX_IMAGE_DIMENSION = int(os.getenv("MAX_IMAGE_DIMENSION", "1600"))

# ============================================================================#
# STORAGE
# ============================================================================#
DATA_DIR = os.getenv("DATA_DIR", os.path.join(os.path.dirname(os.path.dirname(__file__)), "data"))
HISTORY_STORAGE_KEY = os.getenv("HISTORY_STORAGE_KEY", "plant_history")
SUPABASE_KV_TABLE = os.getenv("SUPABASE_KV_TABLE", "kv_store")

# ============================================================================#
# HTTP
# ============================================================================#
SCAN_RATE_LIMIT = os.getenv("SCAN_RATE_LIMIT", "10/minute")
LOCATION_RATE_LIMIT = os.getenv("LOCATION_RATE_LIMIT", "20/minute")
RATE_LIMIT_ENABLED = os.getenv("RATE_LIMIT_ENABLED", "1") == "1"
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

APP_VERSION = "1.0.0"
