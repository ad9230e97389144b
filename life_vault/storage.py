"""本地集合存储（每个键一个 JSON 文件）与存储结构版本检查。"""
import json
import logging
from pathlib import Path
from typing import Any, List, Optional
from urllib.parse import quote, unquote

from life_vault.config import COLLECTIONS_DIR, STORAGE_SCHEMA_VERSION, ensure_dirs

logger = logging.getLogger(__name__)

STORAGE_SCHEMA_KEY = "storage_schema_version"
RECORDS_PREFIX = "records_v1:"
VERSIONED_KEYS = ("people_v1", "pets_v1", "households_v1", "documents_v1")


class JsonCollectionStore:
    """键值集合存储：值为任意 JSON，读出时不做任何校验（交给规范化层）。"""

    def __init__(self, base_dir: Optional[Path] = None):
        self.base_dir = base_dir or COLLECTIONS_DIR
        ensure_dirs()
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.base_dir / f"{quote(key, safe='')}.json"

    def read(self, key: str) -> Any:
        """读取原始 JSON；不存在或文件损坏时返回 None。"""
        path = self._path(key)
        if not path.exists():
            return None
        with open(path, "r", encoding="utf-8") as f:
            try:
                return json.load(f)
            except ValueError as e:
                logger.warning("collection %r is not valid UTF-8 JSON, treating as empty: %s", key, e)
                return None

    def write(self, key: str, value: Any) -> None:
        with open(self._path(key), "w", encoding="utf-8") as f:
            json.dump(value, f, indent=2, ensure_ascii=False)

    def remove(self, key: str) -> bool:
        path = self._path(key)
        if not path.exists():
            return False
        path.unlink()
        return True

    def keys(self) -> List[str]:
        return sorted(unquote(p.stem) for p in self.base_dir.glob("*.json"))


def _should_reset(key: str) -> bool:
    return key in VERSIONED_KEYS or key.startswith(RECORDS_PREFIX)


def ensure_storage_schema_version(store: JsonCollectionStore) -> List[str]:
    """存储结构版本变化时清空各版本化集合。返回被清除的键。"""
    current = store.read(STORAGE_SCHEMA_KEY)
    if current == STORAGE_SCHEMA_VERSION:
        return []
    removed = [k for k in store.keys() if _should_reset(k)]
    for key in removed:
        store.remove(key)
    store.write(STORAGE_SCHEMA_KEY, STORAGE_SCHEMA_VERSION)
    logger.info("storage schema %r -> %r, reset %d collections", current, STORAGE_SCHEMA_VERSION, len(removed))
    return removed
