"""凭证存储与数据模式（本地 / 远端）。"""
from life_vault.auth.data_mode import (
    ACCESS_TOKEN_KEY,
    LOCAL_ONLY_KEY,
    LOCAL_TOKEN,
    DataModeResolver,
    get_resolver,
    has_access_token,
    is_local_only,
    is_local_only_sync,
    set_local_only,
    set_resolver,
)
from life_vault.auth.store import JsonSecureStore, MemorySecureStore, SecureStore

__all__ = [
    "ACCESS_TOKEN_KEY",
    "LOCAL_ONLY_KEY",
    "LOCAL_TOKEN",
    "DataModeResolver",
    "JsonSecureStore",
    "MemorySecureStore",
    "SecureStore",
    "get_resolver",
    "has_access_token",
    "is_local_only",
    "is_local_only_sync",
    "set_local_only",
    "set_resolver",
]
