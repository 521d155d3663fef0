import datetime
import json
import logging
from typing import Callable, List, Optional

from pydantic import ValidationError

from plant_detector.config import HISTORY_STORAGE_KEY
from plant_detector.models import HealthStatus, PlantAnalysis, ScanHistoryItem
from plant_detector.services.storage import KeyValueStorage, StorageReadError

logger = logging.getLogger(__name__)

SEED_HISTORY = [
    ScanHistoryItem(
        id="1",
        date="Today, 10:23 AM",
        image_url="https://images.unsplash.com/photo-1592841200221-a6898f307baa?auto=format&fit=crop&q=80&w=200",
        plant_name="Tomato Plant",
        health_status=HealthStatus.DISEASED,
    ),
    ScanHistoryItem(
        id="2",
        date="Yesterday, 4:15 PM",
        image_url="https://images.unsplash.com/photo-1551754655-cd27e38d2076?auto=format&fit=crop&q=80&w=200",
        plant_name="Corn Maize",
        health_status=HealthStatus.HEALTHY,
    ),
    ScanHistoryItem(
        id="3",
        date="Oct 24, 9:00 AM",
        image_url="https://images.unsplash.com/photo-1518977676605-69f23370dd0d?auto=format&fit=crop&q=80&w=200",
        plant_name="Potato Leaf",
        health_status=HealthStatus.HEALTHY,
    ),
]


def format_display_date(when: datetime.datetime) -> str:
    """'Oct 24, 9:05 AM' style timestamp."""
    hour = when.hour % 12 or 12
    suffix = "AM" if when.hour < 12 else "PM"
    return f"{when.strftime('%b')} {when.day}, {hour}:{when.minute:02d} {suffix}"


class ScanHistory:
    """Most-recent-first scan history mirrored to durable storage.

    Storage is read once on construction; every mutation rewrites the whole
    list under a single key. If that first read fails the history runs from
    the seed list in memory and never writes, so the stored list survives.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        key: str = HISTORY_STORAGE_KEY,
        clock: Callable[[], datetime.datetime] = datetime.datetime.now,
    ):
        self.storage = storage
        self.key = key
        self.clock = clock
        self.read_only = False
        self._items: List[ScanHistoryItem] = self._load()
        self._persist()

    # ------------------------------------------------------------------ io

    def _load(self) -> List[ScanHistoryItem]:
        try:
            saved = self.storage.get_item(self.key)
        except StorageReadError as e:
            logger.error(f"History storage unreadable, using seed history without saving: {e}")
            self.read_only = True
            return list(SEED_HISTORY)

        if saved:
            try:
                raw = json.loads(saved)
                if not isinstance(raw, list):
                    raise ValueError(f"expected a list, got {type(raw).__name__}")
                items = [ScanHistoryItem.model_validate(entry) for entry in raw]
                if len({item.id for item in items}) != len(items):
                    raise ValueError("duplicate history ids")
                logger.info(f"✓ Loaded {len(items)} history items")
                return items
            except (ValueError, ValidationError) as e:
                logger.error(f"Failed to parse history: {e}")
        return list(SEED_HISTORY)

    def _persist(self):
        if self.read_only:
            logger.warning("History not saved: storage was unreadable at startup")
            return
        try:
            payload = json.dumps(
                [item.model_dump(mode="json", by_alias=True) for item in self._items],
                ensure_ascii=False,
            )
            self.storage.set_item(self.key, payload)
        except Exception as e:
            logger.error(f"Failed to persist history: {e}")

    # ------------------------------------------------------------ queries

    @property
    def items(self) -> List[ScanHistoryItem]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def get(self, item_id: str) -> Optional[ScanHistoryItem]:
        return next((item for item in self._items if item.id == item_id), None)

    # ---------------------------------------------------------- mutations

    def _new_id(self, now: datetime.datetime) -> str:
        candidate = int(now.timestamp() * 1000)
        existing = {item.id for item in self._items}
        while str(candidate) in existing:
            candidate += 1
        return str(candidate)

    def add(self, item: ScanHistoryItem) -> ScanHistoryItem:
        if self.get(item.id):
            raise ValueError(f"Duplicate history id: {item.id}")
        self._items = [item] + self._items
        self._persist()
        return item

    def add_from_analysis(self, analysis: PlantAnalysis, image_url: str) -> ScanHistoryItem:
        now = self.clock()
        item = ScanHistoryItem(
            id=self._new_id(now),
            date=format_display_date(now),
            image_url=image_url,
            plant_name=analysis.plant_name,
            health_status=analysis.health_status,
        )
        logger.info(f"✓ History item added: {item.plant_name} ({item.health_status.value})")
        return self.add(item)

    def delete(self, item_id: str) -> bool:
        remaining = [item for item in self._items if item.id != item_id]
        if len(remaining) == len(self._items):
            return False
        self._items = remaining
        self._persist()
        return True

    def clear(self):
        self._items = []
        self._persist()
        logger.info("History cleared")
