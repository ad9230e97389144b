"""文档与文字识别（OCR）结果数据模型。"""
from enum import Enum
from typing import List, Literal, Optional, Union

from pydantic import Field, model_validator

from life_vault.models import VaultModel

UNKNOWN_OCR_ERROR = "unknown OCR failure"


class DocumentOcrStatus(str, Enum):
    """一次识别的结果状态，均为终态。"""
    READY = "READY"             # 已提取到可用文字
    UNREADABLE = "UNREADABLE"   # 识别完成但文字不可用（空白 / 模糊）
    FAILED = "FAILED"           # 识别过程本身出错


class DocumentOcrEngine(str, Enum):
    VISION = "VISION"
    MLKIT = "MLKIT"
    OTHER = "OTHER"


class DocumentSource(str, Enum):
    CAMERA = "camera"
    LIBRARY = "library"
    FILES = "files"


class DocumentLinkRef(VaultModel):
    """文档对记录的弱引用，不保证记录仍存在。"""
    record_type: str = Field(..., description="记录类型")
    record_id: str = Field(..., description="记录 ID")


class DocumentOcrResult(VaultModel):
    """单次识别结果。error 当且仅当 status 为 FAILED 时非空。"""
    text: str = Field("", description="识别文字")
    lines: Optional[List[str]] = Field(None, description="逐行文字")
    extracted_at: str = Field(..., description="识别时间 ISO")
    engine: DocumentOcrEngine = Field(DocumentOcrEngine.OTHER, description="识别引擎")
    status: DocumentOcrStatus = Field(..., description="识别状态")
    error: Optional[str] = Field(None, description="失败原因")

    @model_validator(mode="after")
    def _error_only_when_failed(self) -> "DocumentOcrResult":
        failed = self.status == DocumentOcrStatus.FAILED
        if failed != bool(self.error):
            raise ValueError("error must be set if and only if status is FAILED")
        return self


class DocumentFields(VaultModel):
    id: str = Field(..., description="文档唯一 ID")
    uri: str = Field(..., description="文件路径 / URI")
    mime_type: str = Field("application/octet-stream", description="MIME 类型")
    file_name: Optional[str] = Field(None, description="文件名")
    size_bytes: Optional[Union[int, float]] = Field(None, description="大小（字节）")
    sha256: Optional[str] = Field(None, description="内容哈希，用于去重")
    created_at: str = Field(..., description="创建时间 ISO")
    title: Optional[str] = Field(None, description="标题")
    tags: Optional[List[str]] = Field(None, description="标签")
    note: Optional[str] = Field(None, description="备注")
    linked_to: Optional[List[DocumentLinkRef]] = Field(None, description="关联记录")
    ocr: Optional[DocumentOcrResult] = Field(None, description="当前识别结果")


class DocumentV1(DocumentFields):
    """文档持久化结构。"""
    schema_version: Literal[1] = 1


class VaultDocument(DocumentFields):
    """文档内存模型。"""


class DocumentPickerInput(VaultModel):
    """从相机 / 相册 / 文件选择器得到的新文件。"""
    uri: str = Field(..., description="文件路径 / URI")
    mime_type: Optional[str] = Field(None, description="MIME 类型")
    file_name: Optional[str] = Field(None, description="文件名")
    size_bytes: Optional[Union[int, float]] = Field(None, description="大小（字节）")
    source: Optional[DocumentSource] = Field(None, description="来源")


def to_document_model(schema: DocumentV1) -> VaultDocument:
    return VaultDocument.model_validate(schema.model_dump(exclude={"schema_version"}))


def to_document_schema(document: VaultDocument) -> DocumentV1:
    return DocumentV1.model_validate(document.model_dump())
