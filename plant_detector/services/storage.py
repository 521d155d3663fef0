import logging
import os
from typing import Any, Dict, Optional, Protocol

from supabase import create_client

from plant_detector.config import DATA_DIR, SUPABASE_KEY, SUPABASE_KV_TABLE, SUPABASE_URL

logger = logging.getLogger(__name__)


class StorageReadError(RuntimeError):
    """Stored value exists but could not be read (distinct from a missing key)."""


class KeyValueStorage(Protocol):
    """Durable string storage keyed by name (the browser localStorage contract)."""

    def get_item(self, key: str) -> Optional[str]:
        """Stored value, or None when the key is absent.

        Raises StorageReadError when the backend cannot be read.
        """
        ...

    def set_item(self, key: str, value: str) -> None:
        ...


class MemoryStorage:
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value


class LocalFileStorage:
    """One JSON file per key under ``directory``."""

    def __init__(self, directory: str = DATA_DIR):
        self.directory = directory

    def _path(self, key: str) -> str:
        return os.path.join(self.directory, f"{key}.json")

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not os.path.exists(path):
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Storage read error ({key}): {e}")
            raise StorageReadError(f"Could not read {path}: {e}") from e

    def set_item(self, key: str, value: str) -> None:
        os.makedirs(self.directory, exist_ok=True)
        path = self._path(key)
        tmp_path = f"{path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(value)
        os.replace(tmp_path, path)


class SupabaseStorage:
    """Key/value rows in a Supabase table: (key text primary key, value text)."""

    def __init__(self, client: Any, table: str = SUPABASE_KV_TABLE):
        self.client = client
        self.table = table

    def get_item(self, key: str) -> Optional[str]:
        try:
            result = self.client.table(self.table)\
                .select('value')\
                .eq('key', key)\
                .execute()
        except Exception as e:
            logger.error(f"Supabase storage get error ({key}): {e}")
            raise StorageReadError(f"Could not read {key} from {self.table}: {e}") from e

        if result.data:
            return result.data[0]['value']
        return None

    def set_item(self, key: str, value: str) -> None:
        self.client.table(self.table).upsert({
            'key': key,
            'value': value,
        }).execute()


def create_storage() -> KeyValueStorage:
    """Supabase when configured, otherwise a local JSON file."""
    if SUPABASE_URL and SUPABASE_KEY:
        try:
            storage = SupabaseStorage(create_client(SUPABASE_URL, SUPABASE_KEY))
            logger.info("Supabase storage initialized successfully")
            return storage
        except Exception as e:
            logger.error(f"Failed to initialize Supabase, using local storage: {e}")

    logger.info(f"Local storage at {DATA_DIR}")
    return LocalFileStorage(DATA_DIR)
