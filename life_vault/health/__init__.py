"""宠物健康：用药、疫苗与照护清单。"""
from life_vault.health.checklist import build_suggested_checklist, merge_checklist_preserving_custom
from life_vault.health.models import (
    ChecklistCategory,
    ChecklistItem,
    MedicationStatus,
    PetMedication,
    PetVaccination,
)

__all__ = [
    "ChecklistCategory",
    "ChecklistItem",
    "MedicationStatus",
    "PetMedication",
    "PetVaccination",
    "build_suggested_checklist",
    "merge_checklist_preserving_custom",
]
