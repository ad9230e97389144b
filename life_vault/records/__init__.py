"""记录类型注册表、记录模型与记录存储。"""
from life_vault.records.attachments import (
    link_document_to_record,
    normalize_attachment_refs,
    unlink_document_from_record,
)
from life_vault.records.models import (
    AttachmentRole,
    LifeVaultRecord,
    RecordAttachmentRef,
    RecordCardinality,
    RecordCategory,
    RecordType,
    RecordTypeMeta,
)
from life_vault.records.normalize import normalize_record_list
from life_vault.records.payloads import default_payload_for, get_record_data
from life_vault.records.registry import (
    UnknownRecordTypeError,
    get_record_meta,
    get_types_for_category,
    is_singleton_type,
    parse_record_type,
)
from life_vault.records.store import RecordStore

__all__ = [
    "AttachmentRole",
    "LifeVaultRecord",
    "RecordAttachmentRef",
    "RecordCardinality",
    "RecordCategory",
    "RecordType",
    "RecordTypeMeta",
    "RecordStore",
    "UnknownRecordTypeError",
    "default_payload_for",
    "get_record_data",
    "get_record_meta",
    "get_types_for_category",
    "is_singleton_type",
    "link_document_to_record",
    "normalize_attachment_refs",
    "normalize_record_list",
    "parse_record_type",
    "unlink_document_from_record",
]
