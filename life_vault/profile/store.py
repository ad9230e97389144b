"""档案本地存储：人员、宠物、家庭各一个集合，每次读取都经规范化。"""
import uuid
from typing import Any, Callable, List, Optional, Union

from life_vault.coerce import DropHook, now_iso
from life_vault.profile.models import (
    HouseholdProfile,
    PersonProfile,
    PetProfile,
    Profile,
    ProfileType,
    to_household_profile,
    to_person_profile,
    to_pet_profile,
    to_schema,
)
from life_vault.profile.normalize import (
    normalize_and_migrate_pet_list,
    normalize_household_list,
    normalize_person_list,
)
from life_vault.storage import JsonCollectionStore

PEOPLE_KEY = "people_v1"
PETS_KEY = "pets_v1"
HOUSEHOLDS_KEY = "households_v1"


_KEY_BY_TYPE = {
    ProfileType.PERSON.value: PEOPLE_KEY,
    ProfileType.PET.value: PETS_KEY,
    ProfileType.HOUSEHOLD.value: HOUSEHOLDS_KEY,
}


def new_profile_id(profile_type: Union[ProfileType, str]) -> str:
    """生成新档案 ID，如 person_1a2b3c4d。"""
    prefix = ProfileType(profile_type).value.lower()
    return f"{prefix}_{uuid.uuid4().hex[:8]}"


class ProfileStore:
    """档案存储（JSON 集合）。删除为硬删除，不级联清理家庭的 member_ids。"""

    def __init__(
        self,
        collections: Optional[JsonCollectionStore] = None,
        on_drop: Optional[DropHook] = None,
    ):
        self.collections = collections or JsonCollectionStore()
        self.on_drop = on_drop

    def list_people(self) -> List[PersonProfile]:
        """列出人员档案。"""
        raw = self.collections.read(PEOPLE_KEY)
        return [to_person_profile(p) for p in normalize_person_list(raw, on_drop=self.on_drop)]

    def list_pets(self) -> List[PetProfile]:
        """列出宠物档案（迁移式规范化，updated_at 为读取时间）。"""
        raw = self.collections.read(PETS_KEY)
        return [to_pet_profile(p) for p in normalize_and_migrate_pet_list(raw, on_drop=self.on_drop)]

    def list_households(self) -> List[HouseholdProfile]:
        """列出家庭档案。"""
        raw = self.collections.read(HOUSEHOLDS_KEY)
        return [to_household_profile(h) for h in normalize_household_list(raw, on_drop=self.on_drop)]

    def list_profiles(self) -> List[Profile]:
        """全部档案：人员、宠物、家庭依次排列。"""
        return [*self.list_people(), *self.list_pets(), *self.list_households()]

    def _lister(self, profile_type: str) -> Callable[[], List[Any]]:
        return {
            ProfileType.PERSON.value: self.list_people,
            ProfileType.PET.value: self.list_pets,
            ProfileType.HOUSEHOLD.value: self.list_households,
        }[profile_type]

    def get(self, profile_id: str) -> Optional[Profile]:
        """按 ID 加载档案。"""
        for profile in self.list_profiles():
            if profile.id == profile_id:
                return profile
        return None

    def save(self, profile: Profile) -> Profile:
        """保存档案（按 ID 新增或覆盖），返回带时间戳的档案。"""
        now = now_iso()
        profile = profile.model_copy(update={"created_at": profile.created_at or now, "updated_at": now})
        profiles = self._lister(profile.profile_type)()
        idx = next((i for i, p in enumerate(profiles) if p.id == profile.id), None)
        if idx is None:
            profiles.append(profile)
        else:
            profiles[idx] = profile
        self._write(profile.profile_type, profiles)
        return profile

    def delete(self, profile_id: str) -> bool:
        """删除档案。"""
        for profile_type in _KEY_BY_TYPE:
            profiles = self._lister(profile_type)()
            remaining = [p for p in profiles if p.id != profile_id]
            if len(remaining) != len(profiles):
                self._write(profile_type, remaining)
                return True
        return False

    def households_containing(self, member_id: str) -> List[HouseholdProfile]:
        """列出包含某成员的家庭（成员可能已被删除）。"""
        return [h for h in self.list_households() if member_id in h.member_ids]

    def _write(self, profile_type: str, profiles: List[Profile]) -> None:
        self.collections.write(_KEY_BY_TYPE[profile_type], [to_schema(p).to_json_dict() for p in profiles])

