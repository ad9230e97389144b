"""数据模式：本地模式（不依赖远端）还是远端模式。

优先级：
1. 环境变量强制本地模式时以其为准，并覆盖已保存的用户开关；
2. 否则使用已保存的用户开关；
3. 都没有时默认远端模式（False），并保存该默认值。
首次解析后结果缓存在内存中；并发的首次调用共享同一个解析任务。
"""
import asyncio
import logging
from typing import Optional

from life_vault.auth.store import JsonSecureStore, SecureStore
from life_vault.config import LOCAL_ONLY

logger = logging.getLogger(__name__)

LOCAL_ONLY_KEY = "localOnlyMode"
ACCESS_TOKEN_KEY = "accessToken"
# 本地模式下写入的占位 token，不算真实凭证
LOCAL_TOKEN = "local"


def _encode(value: bool) -> str:
    return "true" if value else "false"


class DataModeResolver:
    """本地模式解析器（进程内唯一的有状态组件）。"""

    def __init__(self, store: SecureStore, force_local_only: bool = LOCAL_ONLY):
        self.store = store
        self.force_local_only = force_local_only
        self._cached: Optional[bool] = None
        self._pending: Optional["asyncio.Task[bool]"] = None

    async def is_local_only(self) -> bool:
        """解析并缓存本地模式；只有这里会读写存储。"""
        if self._cached is not None:
            return self._cached
        if self._pending is None:
            self._pending = asyncio.ensure_future(self._resolve())
        return await asyncio.shield(self._pending)

    async def _resolve(self) -> bool:
        try:
            if self.force_local_only:
                await self.store.set(LOCAL_ONLY_KEY, _encode(True))
                value = True
            else:
                stored = await self.store.get(LOCAL_ONLY_KEY)
                if stored is not None:
                    value = stored == "true"
                else:
                    value = False
                    await self.store.set(LOCAL_ONLY_KEY, _encode(value))
            if self._pending is asyncio.current_task():
                self._cached = value
            logger.debug("data mode resolved: local_only=%s (forced=%s)", value, self.force_local_only)
            return value
        finally:
            # 失败时清空，下次调用重试；reset() 之后启动的新任务不受影响
            if self._pending is asyncio.current_task():
                self._pending = None

    def is_local_only_sync(self) -> Optional[bool]:
        """已解析时返回缓存值；未解析返回 None（与已解析的 False 区分）。"""
        return self._cached

    async def set_local_only(self, value: bool) -> bool:
        """运行时切换（如设置页）。环境强制本地模式时忽略关闭请求。返回生效值。"""
        await self.is_local_only()
        if self.force_local_only and not value:
            logger.warning("local-only mode is forced by environment, ignoring toggle")
            return True
        await self.store.set(LOCAL_ONLY_KEY, _encode(value))
        self._cached = value
        return value

    async def has_access_token(self) -> bool:
        """是否存有真实的访问凭证（占位 token 不算）。"""
        token = await self.store.get(ACCESS_TOKEN_KEY)
        return bool(token) and token != LOCAL_TOKEN

    def reset(self) -> None:
        """清空内存缓存（下次调用重新解析）。"""
        self._cached = None
        self._pending = None


_default: Optional[DataModeResolver] = None


def get_resolver() -> DataModeResolver:
    """进程内默认解析器：本地 JSON 密钥存储 + 环境变量。"""
    global _default
    if _default is None:
        _default = DataModeResolver(JsonSecureStore())
    return _default


def set_resolver(resolver: Optional[DataModeResolver]) -> None:
    global _default
    _default = resolver


async def is_local_only() -> bool:
    return await get_resolver().is_local_only()


def is_local_only_sync() -> Optional[bool]:
    return _default.is_local_only_sync() if _default is not None else None


async def set_local_only(value: bool) -> bool:
    return await get_resolver().set_local_only(value)


async def has_access_token() -> bool:
    return await get_resolver().has_access_token()
