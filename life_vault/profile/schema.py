"""档案持久化结构（schemaVersion 1）及其旧字段别名表。

别名表：目标字段 → 候选源键（按顺序，第一个非空值生效）。新版本新增别名时
另建一张表，不修改旧版本的表。
"""
from typing import Any, Dict, List, Literal, Mapping, Optional, Tuple

from pydantic import Field

from life_vault.health.models import ChecklistItem, PetMedication, PetVaccination
from life_vault.models import VaultModel

SCHEMA_VERSION = 1

RELATIONSHIP_OPTIONS = (
    "Spouse",
    "Partner",
    "Child",
    "Mother",
    "Father",
    "Parent",
    "Grandparent",
    "Caregiver",
    "Other",
)
SELF_RELATIONSHIP = "Self"

KIND_OPTIONS = (
    "Dog",
    "Cat",
    "Bird",
    "Reptile",
    "Fish",
    "Small Animal",
    "Other",
)

PERSON_V1_ALIASES: Mapping[str, Tuple[str, ...]] = {
    "avatar_uri": ("avatarUri", "avatar"),
}

PET_V1_ALIASES: Mapping[str, Tuple[str, ...]] = {
    "pet_name": ("petName", "name"),
    "avatar_uri": ("avatarUri", "avatar"),
    "dob_or_adoption_date": ("dobOrAdoptionDate", "dob", "adoptionDate"),
    "documents": ("documents", "serviceDocuments"),
    "providers": ("providers", "serviceProviders"),
}

HOUSEHOLD_V1_ALIASES: Mapping[str, Tuple[str, ...]] = {}


class PersonFields(VaultModel):
    """人员档案字段（持久化结构与内存模型共用）。"""
    id: str = Field(..., description="人员唯一 ID")
    first_name: str = Field(..., description="名")
    last_name: str = Field("", description="姓")
    preferred_name: Optional[str] = Field(None, description="常用名")
    relationship: str = Field("Other", description="与主用户关系，或 Self")
    dob: Optional[str] = Field(None, description="出生日期")
    avatar_uri: Optional[str] = Field(None, description="头像路径")
    is_primary: bool = Field(False, description="是否家庭主用户")
    created_at: Optional[str] = Field(None, description="创建时间 ISO")
    updated_at: Optional[str] = Field(None, description="更新时间 ISO")


class PetFields(VaultModel):
    """宠物档案字段：基本信息 + 照护 / 医疗子字段。"""
    id: str = Field(..., description="宠物唯一 ID")
    pet_name: str = Field(..., description="宠物名字")
    kind: str = Field("Other", description="物种，未知时为 Other")
    kind_other_text: Optional[str] = Field(None, description="物种为 Other 时的原始描述")
    breed: Optional[str] = Field(None, description="品种")
    breed_other_text: Optional[str] = Field(None, description="品种补充")
    dob: Optional[str] = Field(None, description="出生日期")
    adoption_date: Optional[str] = Field(None, description="领养日期")
    dob_or_adoption_date: Optional[str] = Field(None, description="出生或领养日期")
    gender: Optional[str] = Field(None, description="性别")
    avatar_uri: Optional[str] = Field(None, description="头像路径")
    microchip_id: Optional[str] = Field(None, description="芯片号")
    vet_contact: Optional[Dict[str, Any]] = Field(None, description="兽医联系方式")
    feeding: Optional[str] = Field(None, description="喂食说明")
    potty: Optional[str] = Field(None, description="如厕说明")
    sleep: Optional[str] = Field(None, description="睡眠说明")
    behavior: Optional[str] = Field(None, description="行为说明")
    medications: List[PetMedication] = Field(default_factory=list, description="用药")
    vaccinations: List[PetVaccination] = Field(default_factory=list, description="疫苗")
    documents: List[Dict[str, Any]] = Field(default_factory=list, description="服务文档")
    providers: List[Dict[str, Any]] = Field(default_factory=list, description="服务机构")
    insurance_provider: Optional[str] = Field(None, description="保险公司")
    policy_number: Optional[str] = Field(None, description="保单号")
    insurance_notes: Optional[str] = Field(None, description="保险备注")
    emergency_instructions: Optional[str] = Field(None, description="紧急情况说明")
    checklist_items: List[ChecklistItem] = Field(default_factory=list, description="照护清单")
    created_at: Optional[str] = Field(None, description="创建时间 ISO")
    updated_at: Optional[str] = Field(None, description="更新时间 ISO")


class HouseholdFields(VaultModel):
    """家庭档案字段。member_ids 为弱引用，不保证成员仍存在。"""
    id: str = Field(..., description="家庭唯一 ID")
    name: str = Field(..., description="家庭名称")
    address: Optional[str] = Field(None, description="地址")
    member_ids: List[str] = Field(default_factory=list, description="成员（人员 / 宠物）ID")
    created_at: Optional[str] = Field(None, description="创建时间 ISO")
    updated_at: Optional[str] = Field(None, description="更新时间 ISO")


class PersonProfileV1(PersonFields):
    schema_version: Literal[1] = SCHEMA_VERSION


class PetProfileV1(PetFields):
    schema_version: Literal[1] = SCHEMA_VERSION


class HouseholdProfileV1(HouseholdFields):
    schema_version: Literal[1] = SCHEMA_VERSION
