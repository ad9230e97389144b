"""文档、附件与文字识别结果。"""
from life_vault.documents.migrate import normalize_and_migrate_documents
from life_vault.documents.models import (
    DocumentLinkRef,
    DocumentOcrEngine,
    DocumentOcrResult,
    DocumentOcrStatus,
    DocumentPickerInput,
    DocumentV1,
    VaultDocument,
    to_document_model,
)
from life_vault.documents.ocr import (
    classify_extraction,
    extract_document_text,
    is_terminal,
    needs_ocr,
    ocr_failed,
    ocr_ready,
    ocr_unreadable,
    with_ocr_result,
)
from life_vault.documents.store import DocumentStore

__all__ = [
    "DocumentLinkRef",
    "DocumentOcrEngine",
    "DocumentOcrResult",
    "DocumentOcrStatus",
    "DocumentPickerInput",
    "DocumentStore",
    "DocumentV1",
    "VaultDocument",
    "classify_extraction",
    "extract_document_text",
    "is_terminal",
    "needs_ocr",
    "normalize_and_migrate_documents",
    "ocr_failed",
    "ocr_ready",
    "ocr_unreadable",
    "to_document_model",
    "with_ocr_result",
]
