"""文档列表规范化与迁移：丢弃无 uri 的条目，按 sha256|uri 去重，按创建时间倒序。"""
import hashlib
import secrets
import time
from typing import Any, List, Optional

from life_vault.coerce import (
    DropHook,
    as_array,
    as_mapping,
    as_number,
    as_string_list,
    as_timestamp,
    report_drop,
)
from life_vault.documents.models import (
    DocumentLinkRef,
    DocumentOcrEngine,
    DocumentOcrResult,
    DocumentOcrStatus,
    DocumentV1,
    UNKNOWN_OCR_ERROR,
)

_STATUSES = {s.value for s in DocumentOcrStatus}
_ENGINES = {e.value for e in DocumentOcrEngine}


def new_document_id() -> str:
    return f"doc_{int(time.time() * 1000)}_{secrets.token_hex(4)}"


def _text(value: Any) -> str:
    return str(value or "").strip()


def legacy_document_id(item: Any) -> str:
    """旧数据缺 id 时按内容（sha256|uri|createdAt）派生，每次读取结果相同。"""
    raw = as_mapping(item)
    key = "|".join(_text(raw.get(k)) for k in ("sha256", "uri", "createdAt"))
    return f"doc_{hashlib.sha256(key.encode('utf-8')).hexdigest()[:16]}"


def normalize_ocr(raw: Any) -> Optional[DocumentOcrResult]:
    """旧数据中的识别结果：非法状态视为 FAILED，非法引擎视为 OTHER，并修复 error 与状态的对应关系。"""
    if not isinstance(raw, dict):
        return None
    status = _text(raw.get("status")) or DocumentOcrStatus.FAILED.value
    if status not in _STATUSES:
        status = DocumentOcrStatus.FAILED.value
    engine = _text(raw.get("engine")) or DocumentOcrEngine.OTHER.value
    if engine not in _ENGINES:
        engine = DocumentOcrEngine.OTHER.value
    error = _text(raw.get("error"))
    if status == DocumentOcrStatus.FAILED.value:
        error = error or UNKNOWN_OCR_ERROR
    else:
        error = ""
    lines = raw.get("lines")
    text = raw.get("text")
    return DocumentOcrResult(
        text=text if isinstance(text, str) else "",
        lines=[str(x) for x in lines if x] if isinstance(lines, list) else None,
        extracted_at=as_timestamp(raw.get("extractedAt")),
        engine=engine,
        status=status,
        error=error or None,
    )


def _links(raw: Any) -> Optional[List[DocumentLinkRef]]:
    if not isinstance(raw, list):
        return None
    links = []
    for item in raw:
        link = as_mapping(item)
        record_type = _text(link.get("recordType"))
        record_id = _text(link.get("recordId"))
        if record_type and record_id:
            links.append(DocumentLinkRef(record_type=record_type, record_id=record_id))
    return links


def normalize_document(item: Any) -> Optional[DocumentV1]:
    if not isinstance(item, dict):
        return None
    uri = _text(item.get("uri"))
    if not uri:
        return None
    tags = as_string_list(item.get("tags"))
    return DocumentV1(
        id=_text(item.get("id")) or legacy_document_id(item),
        uri=uri,
        mime_type=_text(item.get("mimeType")) or "application/octet-stream",
        file_name=_text(item.get("fileName")) or None,
        size_bytes=as_number(item.get("sizeBytes")),
        sha256=_text(item.get("sha256")) or None,
        created_at=as_timestamp(item.get("createdAt")),
        title=_text(item.get("title")) or None,
        tags=tags or None,
        note=_text(item.get("note")) or None,
        linked_to=_links(item.get("linkedTo")),
        ocr=normalize_ocr(item.get("ocr")),
    )


def normalize_and_migrate_documents(raw: Any, on_drop: Optional[DropHook] = None) -> List[DocumentV1]:
    """文档列表规范化；重复内容（同 sha256 与 uri）保留第一条。"""
    seen = set()
    documents = []
    for index, item in enumerate(as_array(raw)):
        doc = normalize_document(item)
        if doc is None:
            report_drop(on_drop, "document", index, item, "not an object or missing uri")
            continue
        key = f"{doc.sha256 or ''}|{doc.uri}"
        if key in seen:
            report_drop(on_drop, "document", index, item, "duplicate of an earlier document")
            continue
        seen.add(key)
        documents.append(doc)
    return sorted(documents, key=lambda d: d.created_at, reverse=True)
