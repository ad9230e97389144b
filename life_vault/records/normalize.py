"""记录列表规范化：未注册类型或缺 id 的记录丢弃。"""
from typing import Any, List, Optional

from life_vault.coerce import DropHook, as_array, as_bool, as_mapping, as_string, report_drop
from life_vault.records.attachments import normalize_attachment_refs
from life_vault.records.models import LifeVaultRecord
from life_vault.records.payloads import get_record_data
from life_vault.records.registry import parse_record_type


def normalize_record(item: Any) -> Optional[LifeVaultRecord]:
    raw = as_mapping(item)
    record_id = as_string(raw.get("id"))
    record_type = parse_record_type(raw.get("recordType"))
    if not record_id or record_type is None:
        return None
    return LifeVaultRecord(
        id=record_id,
        entity_id=as_string(raw.get("entityId")) or None,
        record_type=record_type,
        title=as_string(raw.get("title")) or None,
        is_private=as_bool(raw.get("isPrivate")),
        data=get_record_data(raw),
        attachments=normalize_attachment_refs(raw.get("attachments")),
        created_at=as_string(raw.get("createdAt")) or None,
        updated_at=as_string(raw.get("updatedAt")) or None,
    )


def normalize_record_list(raw: Any, on_drop: Optional[DropHook] = None) -> List[LifeVaultRecord]:
    """把任意持久化值转成记录列表，保持输入顺序。"""
    records = []
    for index, item in enumerate(as_array(raw)):
        record = normalize_record(item)
        if record is None:
            report_drop(on_drop, "record", index, item, "missing id or unregistered recordType")
            continue
        records.append(record)
    return records
