import logging
from pathlib import Path
from typing import Dict, Optional, Protocol

# Key-value backends the stores persist their snapshots into.

logger = logging.getLogger(__name__)

INVENTORY_KEY = "inventory"
BRAND_KEY = "brand_settings"
ISSUED_IDS_KEY = "issued_ids"


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> bool: ...


class MemoryStore:
    """Process-local store; what the tests inject."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> bool:
        self.data[key] = value
        return True


class JsonFileStore:
    """One ``<key>.json`` file per key under ``root``."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def _path(self, key: str) -> Path:
        return self.root / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> bool:
        path = self._path(key)
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            tmp = path.with_suffix(".tmp")
            tmp.write_text(value, encoding="utf-8")
            tmp.replace(path)
        except OSError as e:
            logger.warning("could not write %s: %s", path, e)
            return False
        return True
