"""宠物用药、疫苗与照护清单测试。"""
from life_vault.health import (
    ChecklistItem,
    MedicationStatus,
    PetMedication,
    build_suggested_checklist,
    merge_checklist_preserving_custom,
)


def test_medication_defaults_active() -> None:
    med = PetMedication(id="m1", name="Heartgard")
    assert med.status == MedicationStatus.ACTIVE.value
    assert med.to_json_dict() == {"id": "m1", "name": "Heartgard", "status": "active"}


def test_suggested_checklist_by_kind() -> None:
    assert [i.id for i in build_suggested_checklist("Bird")] == [f"g{n}" for n in range(1, 8)]
    dog = build_suggested_checklist("Dog")
    assert len(dog) == 12
    assert dog[-1].id == "d5"
    assert all(i.is_suggested and not i.is_checked for i in dog)
    assert build_suggested_checklist("Cat")[7].category == "cat_optional"


def test_merge_preserves_checked_and_custom() -> None:
    existing = build_suggested_checklist("Dog")
    existing[0] = existing[0].model_copy(update={"is_checked": True})
    existing[8] = existing[8].model_copy(update={"is_checked": True})  # d2
    custom = ChecklistItem(id="x1", label="Buy food", is_checked=True)
    merged = merge_checklist_preserving_custom("Cat", existing + [custom])

    ids = [i.id for i in merged]
    assert ids[:7] == [f"g{n}" for n in range(1, 8)]
    assert ids[7:12] == ["c1", "c2", "c3", "c4", "c5"]
    assert "d2" not in ids
    assert merged[0].is_checked is True
    assert merged[-1] == custom
