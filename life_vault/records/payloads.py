"""默认记录内容模板与记录内容读取。"""
import copy
import json
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Union

from life_vault.records.models import LifeVaultRecord, RecordType

PAYLOAD_SHAPES_PATH = Path(__file__).with_name("payload_shapes.json")


def _load_shapes() -> Mapping[str, Dict[str, Any]]:
    with open(PAYLOAD_SHAPES_PATH, "r", encoding="utf-8") as f:
        return MappingProxyType(json.load(f))


DEFAULT_PAYLOADS = _load_shapes()


def default_payload_for(record_type: Union[RecordType, str, None]) -> Dict[str, Any]:
    """返回该类型的默认内容（深拷贝，调用方可随意修改）；无模板时返回空 dict。"""
    key = record_type.value if isinstance(record_type, Enum) else record_type
    base = DEFAULT_PAYLOADS.get(key) if isinstance(key, str) else None
    if not base:
        return {}
    return copy.deepcopy(base)


def get_record_data(record: Any) -> Dict[str, Any]:
    """读取记录内容：兼容 data 与 payload 两种键，非 dict 时返回空 dict。"""
    if isinstance(record, LifeVaultRecord):
        return record.data
    if not isinstance(record, dict):
        return {}
    for key in ("data", "payload"):
        value = record.get(key)
        if isinstance(value, dict):
            return value
    return {}
