"""密钥键值存储（accessToken、本地模式开关等），接口为异步。"""
import asyncio
import json
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from life_vault.config import SECURE_DIR, ensure_dirs


class SecureStore(ABC):
    """任意支持异步 get / set / remove 的密钥存储。"""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """读取；不存在返回 None。"""

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """写入。"""

    @abstractmethod
    async def remove(self, key: str) -> None:
        """删除；不存在时忽略。"""


class MemorySecureStore(SecureStore):
    """进程内存储，用于测试与纯本地会话。"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.values: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    async def set(self, key: str, value: str) -> None:
        self.values[key] = value

    async def remove(self, key: str) -> None:
        self.values.pop(key, None)


class JsonSecureStore(SecureStore):
    """本地 JSON 文件存储（仅当前用户可读写）。"""
    _file = "secrets.json"

    def __init__(self, base_dir: Optional[Path] = None):
        self.base_dir = base_dir or SECURE_DIR
        ensure_dirs()
        self.base_dir.mkdir(parents=True, exist_ok=True)
        self._lock = asyncio.Lock()

    def _path(self) -> Path:
        return self.base_dir / self._file

    def _load(self) -> Dict[str, str]:
        if not self._path().exists():
            return {}
        with open(self._path(), "r", encoding="utf-8") as f:
            return json.load(f)

    def _save(self, data: Dict[str, str]) -> None:
        path = self._path()
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        os.chmod(path, 0o600)

    async def get(self, key: str) -> Optional[str]:
        async with self._lock:
            data = await asyncio.to_thread(self._load)
        return data.get(key)

    async def set(self, key: str, value: str) -> None:
        async with self._lock:
            data = await asyncio.to_thread(self._load)
            data[key] = value
            await asyncio.to_thread(self._save, data)

    async def remove(self, key: str) -> None:
        async with self._lock:
            data = await asyncio.to_thread(self._load)
            if data.pop(key, None) is not None:
                await asyncio.to_thread(self._save, data)
