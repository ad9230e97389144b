"""记录与文档的关联引用：规范化、关联、取消关联。"""
from typing import Any, List, Optional, TypeVar

from life_vault.coerce import as_array, as_mapping, as_string, now_iso
from life_vault.records.models import AttachmentRole, LifeVaultRecord, RecordAttachmentRef

_ROLES = {r.value for r in AttachmentRole}

R = TypeVar("R", bound=LifeVaultRecord)


def _parse_role(value: Any) -> Optional[str]:
    role = str(value or "").strip().upper()
    return role if role in _ROLES else None


def normalize_attachment_refs(raw: Any) -> List[RecordAttachmentRef]:
    """宽松解析附件引用列表：缺 documentId 的条目丢弃，未知角色置空。"""
    refs = []
    for item in as_array(raw):
        if isinstance(item, RecordAttachmentRef):
            item = item.to_json_dict()
        ref = as_mapping(item)
        document_id = str(ref.get("documentId") or "").strip()
        if not document_id:
            continue
        refs.append(
            RecordAttachmentRef(
                document_id=document_id,
                role=_parse_role(ref.get("role")),
                label=as_string(ref.get("label")) or None,
                added_at=as_string(ref.get("addedAt")) or now_iso(),
            )
        )
    return refs


def link_document_to_record(
    record: R,
    document_id: str,
    role: Optional[AttachmentRole] = None,
    label: Optional[str] = None,
) -> R:
    """返回关联了文档的新记录；已关联时不重复添加。"""
    next_id = str(document_id or "").strip()
    if not next_id:
        return record
    current = normalize_attachment_refs(record.attachments)
    if any(ref.document_id == next_id for ref in current):
        return record.model_copy(update={"attachments": current})
    ref = RecordAttachmentRef(
        document_id=next_id,
        role=role,
        label=(label or "").strip() or None,
        added_at=now_iso(),
    )
    return record.model_copy(update={"attachments": current + [ref]})


def unlink_document_from_record(record: R, document_id: str) -> R:
    """返回移除了该文档引用的新记录。"""
    next_id = str(document_id or "").strip()
    if not next_id:
        return record
    current = normalize_attachment_refs(record.attachments)
    return record.model_copy(
        update={"attachments": [ref for ref in current if ref.document_id != next_id]}
    )
