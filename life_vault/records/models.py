"""记录类型、分类与记录数据模型。"""
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import ConfigDict, Field

from life_vault.models import VaultModel


class RecordCategory(str, Enum):
    """记录分类。"""
    IDENTIFICATION = "IDENTIFICATION"
    MEDICAL = "MEDICAL"
    PRIVATE_HEALTH = "PRIVATE_HEALTH"
    SCHOOL_INFO = "SCHOOL_INFO"
    EDUCATION = "EDUCATION"
    PREFERENCES = "PREFERENCES"
    SIZES = "SIZES"
    TRAVEL = "TRAVEL"
    LEGAL_PROPERTY = "LEGAL_PROPERTY"
    DOCUMENTS = "DOCUMENTS"
    PETS = "PETS"


class RecordType(str, Enum):
    """记录类型（封闭枚举，注册表必须覆盖全部成员）。"""
    DRIVERS_LICENSE = "DRIVERS_LICENSE"
    BIRTH_CERTIFICATE = "BIRTH_CERTIFICATE"
    SOCIAL_SECURITY_CARD = "SOCIAL_SECURITY_CARD"
    INSURANCE_POLICY = "INSURANCE_POLICY"
    MEDICAL_PROFILE = "MEDICAL_PROFILE"
    MEDICAL_PROCEDURES = "MEDICAL_PROCEDURES"
    PRESCRIPTIONS = "PRESCRIPTIONS"
    VACCINATIONS = "VACCINATIONS"
    VISION_PRESCRIPTION = "VISION_PRESCRIPTION"
    PRIVATE_HEALTH_PROFILE = "PRIVATE_HEALTH_PROFILE"
    SCHOOL_INFO = "SCHOOL_INFO"
    AUTHORIZED_PICKUP = "AUTHORIZED_PICKUP"
    EDUCATION_RECORD = "EDUCATION_RECORD"
    PREFERENCES = "PREFERENCES"
    SIZES = "SIZES"
    PASSPORT = "PASSPORT"
    PASSPORT_CARD = "PASSPORT_CARD"
    TRAVEL_IDS = "TRAVEL_IDS"
    LOYALTY_ACCOUNTS = "LOYALTY_ACCOUNTS"
    LEGAL_PROPERTY_DOCUMENT = "LEGAL_PROPERTY_DOCUMENT"
    OTHER_DOCUMENT = "OTHER_DOCUMENT"
    PET_PROFILE = "PET_PROFILE"
    PET_DOCUMENT = "PET_DOCUMENT"
    PET_INSURANCE = "PET_INSURANCE"


class RecordCardinality(str, Enum):
    """SINGLE：每个档案至多一条；MULTI：不限。"""
    SINGLE = "SINGLE"
    MULTI = "MULTI"


class RecordTypeMeta(VaultModel):
    """注册表中单个记录类型的元数据。"""
    type: RecordType = Field(..., description="记录类型")
    category: RecordCategory = Field(..., description="所属分类")
    label: str = Field(..., description="显示名称")
    icon_key: str = Field(..., description="图标键")
    cardinality: RecordCardinality = Field(..., description="基数")
    sort: int = Field(..., description="分类内排序")
    is_private: bool = Field(False, description="是否私密")
    premium: bool = Field(False, description="是否付费功能")

    model_config = ConfigDict(frozen=True)


class AttachmentRole(str, Enum):
    """附件在记录中的角色（证件正反面等）。"""
    FRONT = "FRONT"
    BACK = "BACK"
    CARD = "CARD"
    PAGE = "PAGE"
    OTHER = "OTHER"


class RecordAttachmentRef(VaultModel):
    """记录对文档的弱引用；文档被删除后引用允许悬空。"""
    document_id: str = Field(..., description="文档 ID")
    role: Optional[AttachmentRole] = Field(None, description="附件角色")
    label: Optional[str] = Field(None, description="附件说明")
    added_at: str = Field(..., description="关联时间 ISO")


class LifeVaultRecord(VaultModel):
    """档案下的一条分类记录；具体内容存于 data。"""
    id: str = Field(..., description="记录唯一 ID")
    entity_id: Optional[str] = Field(None, description="所属档案 ID（人员/宠物）")
    record_type: RecordType = Field(..., description="记录类型")
    title: Optional[str] = Field(None, description="标题")
    is_private: bool = Field(False, description="是否私密")
    data: Dict[str, Any] = Field(default_factory=dict, description="记录内容")
    attachments: List[RecordAttachmentRef] = Field(default_factory=list, description="关联文档")
    created_at: Optional[str] = Field(None, description="创建时间 ISO")
    updated_at: Optional[str] = Field(None, description="更新时间 ISO")
