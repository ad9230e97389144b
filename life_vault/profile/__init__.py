"""人员 / 宠物 / 家庭档案：持久化结构、规范化、内存模型与存储。"""
from life_vault.profile.models import (
    HouseholdProfile,
    PersonProfile,
    PetProfile,
    Profile,
    ProfileSchema,
    ProfileType,
    to_household_profile,
    to_person_profile,
    to_pet_profile,
    to_profile,
    to_schema,
)
from life_vault.profile.normalize import (
    normalize_and_migrate_pet_list,
    normalize_household_list,
    normalize_person_list,
    normalize_pet_list,
)
from life_vault.profile.schema import HouseholdProfileV1, PersonProfileV1, PetProfileV1
from life_vault.profile.store import ProfileStore, new_profile_id

__all__ = [
    "HouseholdProfile",
    "HouseholdProfileV1",
    "PersonProfile",
    "PersonProfileV1",
    "PetProfile",
    "PetProfileV1",
    "Profile",
    "ProfileSchema",
    "ProfileStore",
    "ProfileType",
    "new_profile_id",
    "normalize_and_migrate_pet_list",
    "normalize_household_list",
    "normalize_person_list",
    "normalize_pet_list",
    "to_household_profile",
    "to_person_profile",
    "to_pet_profile",
    "to_profile",
    "to_schema",
]
