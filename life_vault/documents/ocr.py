"""文字识别结果状态机。

每次识别产生一个新的 DocumentOcrResult（READY / UNREADABLE / FAILED 均为终态），
重新识别时替换文档上的当前结果而不修改旧结果；是否保留历史由调用方决定。
"""
import logging
from typing import Callable, List, Optional, Sequence, Tuple, Union

from life_vault.coerce import now_iso
from life_vault.documents.models import (
    DocumentOcrEngine,
    DocumentOcrResult,
    DocumentOcrStatus,
    UNKNOWN_OCR_ERROR,
    VaultDocument,
)

logger = logging.getLogger(__name__)

# 外部识别引擎：输入文件 URI，返回 (全文, 逐行文字)
Extractor = Callable[[str], Tuple[str, Sequence[str]]]

EngineArg = Union[DocumentOcrEngine, str]


def _lines(lines: Optional[Sequence[str]]) -> Optional[List[str]]:
    if lines is None:
        return None
    return [line for line in lines if line]


def ocr_ready(text: str, engine: EngineArg = DocumentOcrEngine.OTHER, lines: Optional[Sequence[str]] = None) -> DocumentOcrResult:
    return DocumentOcrResult(
        text=text,
        lines=_lines(lines),
        extracted_at=now_iso(),
        engine=engine,
        status=DocumentOcrStatus.READY,
    )


def ocr_unreadable(engine: EngineArg = DocumentOcrEngine.OTHER, text: str = "", lines: Optional[Sequence[str]] = None) -> DocumentOcrResult:
    return DocumentOcrResult(
        text=text,
        lines=_lines(lines),
        extracted_at=now_iso(),
        engine=engine,
        status=DocumentOcrStatus.UNREADABLE,
    )


def ocr_failed(error: str, engine: EngineArg = DocumentOcrEngine.OTHER) -> DocumentOcrResult:
    """识别过程出错。error 为空白时使用通用失败说明。"""
    return DocumentOcrResult(
        text="",
        extracted_at=now_iso(),
        engine=engine,
        status=DocumentOcrStatus.FAILED,
        error=(error or "").strip() or UNKNOWN_OCR_ERROR,
    )


def classify_extraction(text: str, lines: Optional[Sequence[str]] = None, engine: EngineArg = DocumentOcrEngine.OTHER) -> DocumentOcrResult:
    """识别完成后的分类：有非空白文字为 READY，否则 UNREADABLE。"""
    if text.strip():
        return ocr_ready(text, engine, lines)
    return ocr_unreadable(engine, text, lines)


def is_terminal(status: Union[DocumentOcrStatus, str]) -> bool:
    """三种状态都是终态，不存在自动迁移。"""
    return DocumentOcrStatus(status) in (
        DocumentOcrStatus.READY,
        DocumentOcrStatus.UNREADABLE,
        DocumentOcrStatus.FAILED,
    )


def with_ocr_result(document: VaultDocument, result: DocumentOcrResult) -> VaultDocument:
    """返回带新识别结果的文档副本，原文档与旧结果不变。"""
    return document.model_copy(update={"ocr": result})


def needs_ocr(document: VaultDocument) -> bool:
    """尚未识别或上次识别失败。"""
    return document.ocr is None or document.ocr.status == DocumentOcrStatus.FAILED


def extract_document_text(
    document: VaultDocument,
    extractor: Extractor,
    engine: EngineArg = DocumentOcrEngine.OTHER,
) -> VaultDocument:
    """调用外部识别引擎，把结果（含失败）写成文档的新当前结果。"""
    try:
        text, lines = extractor(document.uri)
    except Exception as e:
        logger.warning("OCR failed for document %s with %s: %s", document.id, engine, e)
        return with_ocr_result(document, ocr_failed(str(e).strip() or type(e).__name__, engine))
    return with_ocr_result(document, classify_extraction(text or "", list(lines or []), engine))
