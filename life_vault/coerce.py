"""宽松解析工具：把来路不明的持久化 JSON 值转成确定类型，从不抛异常。

规范化函数逐条调用这些工具；无法挽救的条目通过 ``on_drop`` 钩子上报后丢弃。
"""
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union

logger = logging.getLogger(__name__)

# (下标, 原始条目, 原因)
DropHook = Callable[[int, Any, str], None]


def now_iso() -> str:
    """当前 UTC 时间 ISO 字符串（Z 结尾）。"""
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def as_string(value: Any) -> str:
    """已是字符串则去首尾空白后返回，否则返回空串。"""
    return value.strip() if isinstance(value, str) else ""


def as_array(value: Any) -> List[Any]:
    """已是序列（list/tuple）则转 list，否则返回空列表。"""
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def as_mapping(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def as_string_list(value: Any) -> List[str]:
    """数组内每项转字符串并去空白，过滤掉空串与 None。"""
    out = []
    for item in as_array(value):
        if item is None:
            continue
        text = str(item).strip()
        if text:
            out.append(text)
    return out


def as_bool(value: Any) -> bool:
    return bool(value)


def as_number(value: Any) -> Optional[Union[int, float]]:
    """仅接受真正的数字（bool 除外），其余返回 None。"""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def parse_iso(value: str) -> Optional[datetime]:
    """解析 ISO-8601 字符串，失败返回 None。"""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def as_timestamp(value: Any) -> str:
    """可解析的 ISO 时间原样保留（便于幂等），缺失或无法解析时取当前时间。"""
    text = as_string(value)
    if parse_iso(text) is None:
        return now_iso()
    return text


def first_non_empty(
    item: Dict[str, Any],
    keys: Iterable[str],
    coerce: Callable[[Any], Any] = as_string,
) -> Any:
    """按候选键顺序取第一个非空值；全为空时返回 coerce(None)。"""
    for key in keys:
        value = coerce(item.get(key))
        if value:
            return value
    return coerce(None)


class DropLog:
    """可作为 ``on_drop`` 钩子传入，记录被丢弃的条目供调用方统计或上报。"""

    def __init__(self) -> None:
        self.entries: List[Tuple[int, str]] = []

    def __call__(self, index: int, raw: Any, reason: str) -> None:
        self.entries.append((index, reason))

    @property
    def count(self) -> int:
        return len(self.entries)


def report_drop(on_drop: Optional[DropHook], kind: str, index: int, raw: Any, reason: str) -> None:
    logger.debug("dropped %s #%d: %s", kind, index, reason)
    if on_drop is not None:
        on_drop(index, raw, reason)
