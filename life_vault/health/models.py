"""宠物用药、疫苗与照护清单数据模型。"""
from enum import Enum
from typing import Optional

from pydantic import Field

from life_vault.models import VaultModel


class MedicationStatus(str, Enum):
    """用药状态：在用 / 历史。"""
    ACTIVE = "active"
    HISTORY = "history"


class ChecklistCategory(str, Enum):
    GENERAL = "general"
    DOG_OPTIONAL = "dog_optional"
    CAT_OPTIONAL = "cat_optional"
    CUSTOM = "custom"


class PetMedication(VaultModel):
    """单条用药。"""
    id: str = Field(..., description="用药 ID")
    name: str = Field(..., description="药名")
    dosage: Optional[str] = Field(None, description="剂量")
    admin_method: Optional[str] = Field(None, description="给药方式")
    schedule_notes: Optional[str] = Field(None, description="用药时间说明")
    missed_dose_notes: Optional[str] = Field(None, description="漏服处理")
    side_effects_notes: Optional[str] = Field(None, description="副作用")
    status: MedicationStatus = Field(MedicationStatus.ACTIVE, description="在用 / 历史")


class PetVaccination(VaultModel):
    """单条疫苗接种。"""
    id: str = Field(..., description="接种 ID")
    name: str = Field(..., description="疫苗名称")
    date: Optional[str] = Field(None, description="接种日期")
    notes: Optional[str] = Field(None, description="备注")


class ChecklistItem(VaultModel):
    """照护清单条目；is_suggested 为系统建议项，其余为用户自定义。"""
    id: str = Field(..., description="条目 ID")
    label: str = Field(..., description="内容")
    is_checked: bool = Field(False, description="是否已完成")
    is_suggested: bool = Field(False, description="是否系统建议")
    category: ChecklistCategory = Field(ChecklistCategory.CUSTOM, description="分类")
