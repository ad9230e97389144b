"""文档规范化、识别结果状态机与文档存储测试。"""
import tempfile
from pathlib import Path

import pytest
from pydantic import ValidationError

from life_vault.coerce import DropLog
from life_vault.documents import (
    DocumentOcrResult,
    DocumentOcrStatus,
    DocumentPickerInput,
    DocumentStore,
    VaultDocument,
    classify_extraction,
    extract_document_text,
    is_terminal,
    needs_ocr,
    normalize_and_migrate_documents,
    ocr_failed,
    ocr_ready,
    with_ocr_result,
)
from life_vault.documents.migrate import UNKNOWN_OCR_ERROR
from life_vault.storage import JsonCollectionStore


def _doc(**kwargs) -> VaultDocument:
    data = {"id": "d1", "uri": "file:///a.jpg", "created_at": "2024-01-01T00:00:00Z"}
    data.update(kwargs)
    return VaultDocument(**data)


def test_error_only_when_failed() -> None:
    with pytest.raises(ValidationError):
        DocumentOcrResult(extracted_at="2024-01-01T00:00:00Z", status="FAILED")
    with pytest.raises(ValidationError):
        DocumentOcrResult(extracted_at="2024-01-01T00:00:00Z", status="READY", error="boom")
    assert ocr_failed("camera offline").error == "camera offline"


def test_classify_extraction() -> None:
    assert classify_extraction("  PASSPORT  ", ["PASSPORT", ""]).status == "READY"
    assert classify_extraction("  \n ").status == "UNREADABLE"
    assert all(is_terminal(s) for s in DocumentOcrStatus)


def test_with_ocr_result_returns_new_document() -> None:
    doc = _doc()
    first = ocr_ready("hello", "VISION")
    updated = with_ocr_result(doc, first)
    assert doc.ocr is None
    assert updated.ocr == first
    assert needs_ocr(doc) is True
    assert needs_ocr(updated) is False
    assert needs_ocr(with_ocr_result(doc, ocr_failed("x"))) is True


def test_extract_document_text() -> None:
    doc = _doc()
    ok = extract_document_text(doc, lambda uri: ("Name: Ann", ["Name: Ann"]), "MLKIT")
    assert ok.ocr.status == "READY"
    assert ok.ocr.engine == "MLKIT"
    assert ok.ocr.lines == ["Name: Ann"]

    def broken(uri: str):
        raise RuntimeError("engine crashed")

    failed = extract_document_text(doc, broken)
    assert failed.ocr.status == "FAILED"
    assert failed.ocr.error == "engine crashed"


def test_migrate_drops_dedupes_and_sorts() -> None:
    drops = DropLog()
    raw = [
        {"id": "old", "uri": "file:///a.jpg", "sha256": "abc", "createdAt": "2023-01-01T00:00:00Z"},
        {"uri": "  "},
        {"id": "dup", "uri": "file:///a.jpg", "sha256": "abc", "createdAt": "2025-01-01T00:00:00Z"},
        {"id": "new", "uri": "file:///b.jpg", "createdAt": "2024-06-01T00:00:00Z", "tags": ["id", "", None]},
        42,
    ]
    docs = normalize_and_migrate_documents(raw, on_drop=drops)
    assert [d.id for d in docs] == ["new", "old"]
    assert docs[0].tags == ["id"]
    assert docs[0].mime_type == "application/octet-stream"
    assert drops.count == 3


def test_migrate_repairs_ocr() -> None:
    docs = normalize_and_migrate_documents(
        [
            {"id": "a", "uri": "u1", "ocr": {"status": "PENDING", "engine": "TESSERACT"}},
            {"id": "b", "uri": "u2", "ocr": {"status": "READY", "text": "hi", "error": "stale"}},
        ]
    )
    by_id = {d.id: d for d in docs}
    assert by_id["a"].ocr.status == "FAILED"
    assert by_id["a"].ocr.engine == "OTHER"
    assert by_id["a"].ocr.error == UNKNOWN_OCR_ERROR
    assert by_id["b"].ocr.error is None


def test_document_store() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        store = DocumentStore(JsonCollectionStore(base_dir=Path(tmp)))
        doc = store.add_from_picker(
            DocumentPickerInput(uri="file:///license.jpg", mime_type="image/jpeg", source="camera"),
            title=" License ",
        )
        assert doc.id.startswith("doc_")
        assert doc.title == "License"
        assert [d.id for d in store.list_all()] == [doc.id]

        linked = store.link(doc.id, "DRIVERS_LICENSE", "r1")
        store.link(doc.id, "DRIVERS_LICENSE", "r1")
        assert len(store.get(doc.id).linked_to) == 1
        assert [d.id for d in store.linked_to("DRIVERS_LICENSE", "r1")] == [linked.id]

        store.set_ocr(doc.id, ocr_ready("DL 123"))
        assert store.get(doc.id).ocr.text == "DL 123"
        assert store.set_ocr("missing", ocr_ready("x")) is None

        assert store.delete(doc.id) is True
        assert store.list_all() == []


def test_blank_failure_message_still_records_failed() -> None:
    assert ocr_failed("   ").error == UNKNOWN_OCR_ERROR

    def blank(uri: str):
        raise RuntimeError("   ")

    failed = extract_document_text(_doc(), blank)
    assert failed.ocr.status == "FAILED"
    assert failed.ocr.error == "RuntimeError"


def test_document_without_id_keeps_same_id_across_reads() -> None:
    raw = [{"uri": "file:///legacy.jpg", "createdAt": "2022-03-04T00:00:00Z"}]
    first = normalize_and_migrate_documents(raw)[0]
    assert first.id.startswith("doc_")
    assert normalize_and_migrate_documents(raw)[0].id == first.id
    assert normalize_and_migrate_documents([first.to_json_dict()])[0].to_json_dict() == first.to_json_dict()

    with tempfile.TemporaryDirectory() as tmp:
        collections = JsonCollectionStore(base_dir=Path(tmp))
        collections.write("documents_v1", raw)
        store = DocumentStore(collections)
        listed = store.list_all()[0]
        assert store.get(listed.id) is not None
        updated = store.set_ocr(listed.id, ocr_ready("old lease"))
        assert updated is not None
        assert store.get(listed.id).ocr.text == "old lease"
