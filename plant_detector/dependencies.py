"""Process-wide singletons handed to routers through FastAPI ``Depends``."""
from typing import Optional

from plant_detector.services import ai_client
from plant_detector.services.ai_client import GenAIClient
from plant_detector.services.history import ScanHistory
from plant_detector.services.marketplace import Marketplace
from plant_detector.services.storage import create_storage
from plant_detector.state import AppStateStore

_store: Optional[AppStateStore] = None
_marketplace: Optional[Marketplace] = None


def get_store() -> AppStateStore:
    global _store
    if _store is None:
        _store = AppStateStore(ScanHistory(create_storage()))
    return _store


def get_marketplace() -> Marketplace:
    global _marketplace
    if _marketplace is None:
        _marketplace = Marketplace()
    return _marketplace


def get_genai_client() -> Optional[GenAIClient]:
    return ai_client.genai_client
