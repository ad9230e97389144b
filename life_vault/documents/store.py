"""文档本地存储（documents_v1 集合）。"""
from typing import List, Optional

from life_vault.coerce import now_iso
from life_vault.documents.migrate import new_document_id, normalize_and_migrate_documents
from life_vault.documents.models import (
    DocumentLinkRef,
    DocumentOcrResult,
    DocumentPickerInput,
    VaultDocument,
    to_document_model,
    to_document_schema,
)
from life_vault.storage import JsonCollectionStore

DOCUMENTS_KEY = "documents_v1"


class DocumentStore:
    """文档存储。读出时去重并按创建时间倒序；删除不清理记录侧的引用。"""

    def __init__(self, collections: Optional[JsonCollectionStore] = None):
        self.collections = collections or JsonCollectionStore()

    def list_all(self) -> List[VaultDocument]:
        """列出全部文档。"""
        raw = self.collections.read(DOCUMENTS_KEY)
        return [to_document_model(d) for d in normalize_and_migrate_documents(raw)]

    def get(self, document_id: str) -> Optional[VaultDocument]:
        for doc in self.list_all():
            if doc.id == document_id:
                return doc
        return None

    def save(self, document: VaultDocument) -> VaultDocument:
        """新增或覆盖文档。"""
        documents = [d for d in self.list_all() if d.id != document.id]
        documents.insert(0, document)
        self._write(documents)
        return document

    def add_from_picker(self, picked: DocumentPickerInput, title: Optional[str] = None) -> VaultDocument:
        """由选择器得到的文件创建文档。"""
        document = VaultDocument(
            id=new_document_id(),
            uri=picked.uri,
            mime_type=picked.mime_type or "application/octet-stream",
            file_name=picked.file_name,
            size_bytes=picked.size_bytes,
            created_at=now_iso(),
            title=(title or "").strip() or None,
        )
        return self.save(document)

    def delete(self, document_id: str) -> bool:
        """删除文档（硬删除）。"""
        documents = self.list_all()
        remaining = [d for d in documents if d.id != document_id]
        if len(remaining) == len(documents):
            return False
        self._write(remaining)
        return True

    def set_ocr(self, document_id: str, result: DocumentOcrResult) -> Optional[VaultDocument]:
        """替换文档的当前识别结果。"""
        document = self.get(document_id)
        if document is None:
            return None
        return self.save(document.model_copy(update={"ocr": result}))

    def link(self, document_id: str, record_type: str, record_id: str) -> Optional[VaultDocument]:
        """把文档关联到记录（不校验记录是否存在）。"""
        document = self.get(document_id)
        if document is None:
            return None
        links = list(document.linked_to or [])
        if any(ref.record_type == record_type and ref.record_id == record_id for ref in links):
            return document
        links.append(DocumentLinkRef(record_type=record_type, record_id=record_id))
        return self.save(document.model_copy(update={"linked_to": links}))

    def linked_to(self, record_type: str, record_id: str) -> List[VaultDocument]:
        """列出关联到某条记录的文档。"""
        return [
            d for d in self.list_all()
            if any(ref.record_type == record_type and ref.record_id == record_id for ref in d.linked_to or [])
        ]

    def _write(self, documents: List[VaultDocument]) -> None:
        self.collections.write(DOCUMENTS_KEY, [to_document_schema(d).to_json_dict() for d in documents])
