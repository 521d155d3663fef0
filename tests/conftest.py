import base64
import os
import sys

import pytest

# Rate limits would trip across tests sharing the "testclient" address
os.environ["RATE_LIMIT_ENABLED"] = "0"
os.environ.pop("OPENROUTER_API_KEY", None)
os.environ.pop("SUPABASE_URL", None)

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from plant_detector.services.history import ScanHistory  # noqa: E402
from plant_detector.services.storage import MemoryStorage  # noqa: E402
from fakes import make_png  # noqa: E402


@pytest.fixture
def png_bytes():
    return make_png()


@pytest.fixture
def png_data_url(png_bytes):
    return "data:image/png;base64," + base64.b64encode(png_bytes).decode("utf-8")


@pytest.fixture
def memory_storage():
    return MemoryStorage()


@pytest.fixture
def history(memory_storage):
    return ScanHistory(memory_storage)
