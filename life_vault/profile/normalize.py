"""档案规范化：任意持久化值 → 当前版本档案列表。

所有函数都是纯函数、从不抛异常：非列表输入视为空列表，缺少 id 或主名称的
条目丢弃（经 ``on_drop`` 上报），其余字段按类型宽松转换并补默认值。
"""
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, TypeVar

from pydantic.alias_generators import to_camel

from life_vault.coerce import (
    DropHook,
    as_array,
    as_bool,
    as_mapping,
    as_string,
    as_string_list,
    as_timestamp,
    first_non_empty,
    now_iso,
    report_drop,
)
from life_vault.health.models import (
    ChecklistCategory,
    ChecklistItem,
    MedicationStatus,
    PetMedication,
    PetVaccination,
)
from life_vault.profile.schema import (
    HOUSEHOLD_V1_ALIASES,
    KIND_OPTIONS,
    PERSON_V1_ALIASES,
    PET_V1_ALIASES,
    RELATIONSHIP_OPTIONS,
    SELF_RELATIONSHIP,
    HouseholdProfileV1,
    PersonProfileV1,
    PetProfileV1,
)

T = TypeVar("T")

_NO_ALIASES: Mapping[str, Tuple[str, ...]] = {}


class _Fields:
    """按别名表读取字段，每个读取方法对应一种类型转换。"""

    def __init__(self, item: Any, aliases: Mapping[str, Tuple[str, ...]] = _NO_ALIASES):
        self.item = as_mapping(item)
        self.aliases = aliases

    def _keys(self, field: str) -> Tuple[str, ...]:
        return self.aliases.get(field) or (to_camel(field),)

    def string(self, field: str) -> str:
        return first_non_empty(self.item, self._keys(field), as_string)

    def optional(self, field: str) -> Optional[str]:
        return self.string(field) or None

    def array(self, field: str) -> List[Any]:
        return first_non_empty(self.item, self._keys(field), as_array)

    def strings(self, field: str) -> List[str]:
        return first_non_empty(self.item, self._keys(field), as_string_list)

    def flag(self, field: str) -> bool:
        return first_non_empty(self.item, self._keys(field), as_bool)

    def mapping(self, field: str) -> Optional[Dict[str, Any]]:
        return first_non_empty(self.item, self._keys(field), as_mapping) or None

    def timestamp(self, field: str) -> str:
        return as_timestamp(self.string(field))


def _normalize_list(
    raw: Any,
    normalize_one: Callable[[Any], Optional[T]],
    kind: str,
    on_drop: Optional[DropHook],
) -> List[T]:
    out = []
    for index, item in enumerate(as_array(raw)):
        value = normalize_one(item)
        if value is None:
            report_drop(on_drop, kind, index, item, "missing id or name")
            continue
        out.append(value)
    return out


def _match_option(value: str, options: Tuple[str, ...]) -> Optional[str]:
    lowered = value.lower()
    for option in options:
        if option.lower() == lowered:
            return option
    return None


def parse_relationship(value: str) -> str:
    """关系：选项之一或 Self（不区分大小写），其余一律 Other。"""
    return _match_option(value, RELATIONSHIP_OPTIONS + (SELF_RELATIONSHIP,)) or "Other"


# ── 人员 ──


def normalize_person(item: Any) -> Optional[PersonProfileV1]:
    f = _Fields(item, PERSON_V1_ALIASES)
    person_id = f.string("id")
    first_name = f.string("first_name")
    if not person_id or not first_name:
        return None
    return PersonProfileV1(
        id=person_id,
        first_name=first_name,
        last_name=f.string("last_name"),
        preferred_name=f.optional("preferred_name"),
        relationship=parse_relationship(f.string("relationship")),
        dob=f.optional("dob"),
        avatar_uri=f.optional("avatar_uri"),
        is_primary=f.flag("is_primary"),
        created_at=f.timestamp("created_at"),
        updated_at=f.timestamp("updated_at"),
    )


def normalize_person_list(raw: Any, on_drop: Optional[DropHook] = None) -> List[PersonProfileV1]:
    """人员列表规范化。已有时间戳保留，因此对已规范化数据幂等。"""
    return _normalize_list(raw, normalize_person, "person", on_drop)


# ── 家庭 ──


def normalize_household(item: Any) -> Optional[HouseholdProfileV1]:
    f = _Fields(item, HOUSEHOLD_V1_ALIASES)
    household_id = f.string("id")
    name = f.string("name")
    if not household_id or not name:
        return None
    return HouseholdProfileV1(
        id=household_id,
        name=name,
        address=f.optional("address"),
        member_ids=f.strings("member_ids"),
        created_at=f.timestamp("created_at"),
        updated_at=f.timestamp("updated_at"),
    )


def normalize_household_list(raw: Any, on_drop: Optional[DropHook] = None) -> List[HouseholdProfileV1]:
    """家庭列表规范化。memberIds 中的空值被过滤，不校验成员是否存在。"""
    return _normalize_list(raw, normalize_household, "household", on_drop)


# ── 宠物 ──


def _parse_kind(f: _Fields) -> Tuple[str, Optional[str]]:
    raw_kind = f.string("kind")
    other_text = f.optional("kind_other_text")
    if not raw_kind:
        return "Other", other_text
    kind = _match_option(raw_kind, KIND_OPTIONS)
    if kind is None:
        # 未知物种归为 Other，原值保留在 kindOtherText
        return "Other", other_text or raw_kind
    return kind, other_text


def _medications(items: List[Any]) -> List[PetMedication]:
    out = []
    for item in items:
        f = _Fields(item)
        med_id, name = f.string("id"), f.string("name")
        if not med_id or not name:
            continue
        status = MedicationStatus.HISTORY if f.string("status") == MedicationStatus.HISTORY.value else MedicationStatus.ACTIVE
        out.append(
            PetMedication(
                id=med_id,
                name=name,
                dosage=f.optional("dosage"),
                admin_method=f.optional("admin_method"),
                schedule_notes=f.optional("schedule_notes"),
                missed_dose_notes=f.optional("missed_dose_notes"),
                side_effects_notes=f.optional("side_effects_notes"),
                status=status,
            )
        )
    return out


def _vaccinations(items: List[Any]) -> List[PetVaccination]:
    out = []
    for item in items:
        f = _Fields(item)
        vac_id, name = f.string("id"), f.string("name")
        if not vac_id or not name:
            continue
        out.append(PetVaccination(id=vac_id, name=name, date=f.optional("date"), notes=f.optional("notes")))
    return out


_CHECKLIST_CATEGORIES = {c.value for c in ChecklistCategory}


def _checklist(items: List[Any]) -> List[ChecklistItem]:
    out = []
    for item in items:
        f = _Fields(item)
        item_id, label = f.string("id"), f.string("label")
        if not item_id or not label:
            continue
        category = f.string("category")
        out.append(
            ChecklistItem(
                id=item_id,
                label=label,
                is_checked=f.flag("is_checked"),
                is_suggested=f.flag("is_suggested"),
                category=category if category in _CHECKLIST_CATEGORIES else ChecklistCategory.CUSTOM,
            )
        )
    return out


def _objects(items: List[Any]) -> List[Dict[str, Any]]:
    return [item for item in items if isinstance(item, dict)]


def _coerce_pet(item: Any, touch: bool) -> Optional[PetProfileV1]:
    f = _Fields(item, PET_V1_ALIASES)
    pet_id = f.string("id")
    pet_name = f.string("pet_name")
    if not pet_id or not pet_name:
        return None
    kind, kind_other_text = _parse_kind(f)
    return PetProfileV1(
        id=pet_id,
        pet_name=pet_name,
        kind=kind,
        kind_other_text=kind_other_text,
        breed=f.optional("breed"),
        breed_other_text=f.optional("breed_other_text"),
        dob=f.optional("dob"),
        adoption_date=f.optional("adoption_date"),
        dob_or_adoption_date=f.optional("dob_or_adoption_date"),
        gender=f.optional("gender"),
        avatar_uri=f.optional("avatar_uri"),
        microchip_id=f.optional("microchip_id"),
        vet_contact=f.mapping("vet_contact"),
        feeding=f.optional("feeding"),
        potty=f.optional("potty"),
        sleep=f.optional("sleep"),
        behavior=f.optional("behavior"),
        medications=_medications(f.array("medications")),
        vaccinations=_vaccinations(f.array("vaccinations")),
        documents=_objects(f.array("documents")),
        providers=_objects(f.array("providers")),
        insurance_provider=f.optional("insurance_provider"),
        policy_number=f.optional("policy_number"),
        insurance_notes=f.optional("insurance_notes"),
        emergency_instructions=f.optional("emergency_instructions"),
        checklist_items=_checklist(f.array("checklist_items")),
        created_at=f.timestamp("created_at"),
        updated_at=now_iso() if touch else f.timestamp("updated_at"),
    )


def normalize_pet(item: Any) -> Optional[PetProfileV1]:
    return _coerce_pet(item, touch=False)


def normalize_pet_list(raw: Any, on_drop: Optional[DropHook] = None) -> List[PetProfileV1]:
    """宠物列表校验式规范化：与人员 / 家庭一样保留已有 updatedAt。"""
    return _normalize_list(raw, normalize_pet, "pet", on_drop)


def migrate_pet(item: Any) -> Optional[PetProfileV1]:
    return _coerce_pet(item, touch=True)


def normalize_and_migrate_pet_list(raw: Any, on_drop: Optional[DropHook] = None) -> List[PetProfileV1]:
    """宠物列表迁移式规范化：每次读取都把 updatedAt 刷新为当前时间（createdAt 保留）。"""
    return _normalize_list(raw, migrate_pet, "pet", on_drop)
