"""宠物照护建议清单：按物种生成，切换物种时保留自定义项与勾选状态。"""
from typing import List, Sequence, Tuple

from life_vault.health.models import ChecklistCategory, ChecklistItem

_GENERAL: Tuple[Tuple[str, str], ...] = (
    ("g1", "Vet contact added"),
    ("g2", "Vaccination records uploaded"),
    ("g3", "Microchip ID saved"),
    ("g4", "Medications reviewed/added"),
    ("g5", "Pet insurance info added"),
    ("g6", "Emergency instructions added"),
    ("g7", "Caregiver/sitter added"),
)
_DOG: Tuple[Tuple[str, str], ...] = (
    ("d1", "Rabies tag / proof saved"),
    ("d2", "Heartworm prevention noted"),
    ("d3", "Flea/tick prevention noted"),
    ("d4", "Leash/harness size noted"),
    ("d5", "Boarding/daycare contact added"),
)
_CAT: Tuple[Tuple[str, str], ...] = (
    ("c1", "Rabies tag / proof saved"),
    ("c2", "Flea/tick prevention noted"),
    ("c3", "Carrier location noted"),
    ("c4", "Litter preference noted"),
    ("c5", "Boarding/sitter contact added"),
)


def _items(pairs: Sequence[Tuple[str, str]], category: ChecklistCategory) -> List[ChecklistItem]:
    return [
        ChecklistItem(id=item_id, label=label, is_suggested=True, category=category)
        for item_id, label in pairs
    ]


def build_suggested_checklist(kind: str) -> List[ChecklistItem]:
    """通用建议项 + 狗 / 猫专属项。"""
    items = _items(_GENERAL, ChecklistCategory.GENERAL)
    if kind == "Dog":
        items += _items(_DOG, ChecklistCategory.DOG_OPTIONAL)
    elif kind == "Cat":
        items += _items(_CAT, ChecklistCategory.CAT_OPTIONAL)
    return items


def merge_checklist_preserving_custom(kind: str, existing: Sequence[ChecklistItem]) -> List[ChecklistItem]:
    """按新物种重建建议项，沿用已有勾选状态；自定义项追加在后。

    旧物种的专属建议项（如狗→猫时的 d1..d5）不再保留。
    """
    suggested = build_suggested_checklist(kind)
    checked = {item.id: item.is_checked for item in existing if item.is_suggested}

    custom = [item for item in existing if not item.is_suggested]
    merged = [
        item.model_copy(update={"is_checked": checked[item.id]}) if item.id in checked else item
        for item in suggested
    ]
    return merged + custom
