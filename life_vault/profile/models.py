"""档案内存模型（人员 / 宠物 / 家庭）及与持久化结构之间的投影。

投影是纯结构映射：每个持久化字段都有对应的内存字段，这里不做任何校验。
"""
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import Field

from life_vault.profile.schema import (
    HouseholdFields,
    HouseholdProfileV1,
    PersonFields,
    PersonProfileV1,
    PetFields,
    PetProfileV1,
)


class ProfileType(str, Enum):
    """档案类型。"""
    PERSON = "PERSON"
    PET = "PET"
    HOUSEHOLD = "HOUSEHOLD"


class PersonProfile(PersonFields):
    """人员档案。"""
    profile_type: Literal["PERSON"] = "PERSON"


class PetProfile(PetFields):
    """宠物档案。"""
    profile_type: Literal["PET"] = "PET"


class HouseholdProfile(HouseholdFields):
    """家庭档案。"""
    profile_type: Literal["HOUSEHOLD"] = "HOUSEHOLD"


Profile = Annotated[
    Union[PersonProfile, PetProfile, HouseholdProfile],
    Field(discriminator="profile_type"),
]

# 当前版本持久化结构
ProfileSchema = Union[PersonProfileV1, PetProfileV1, HouseholdProfileV1]


def to_person_profile(schema: PersonProfileV1) -> PersonProfile:
    return PersonProfile.model_validate(schema.model_dump(exclude={"schema_version"}))


def to_pet_profile(schema: PetProfileV1) -> PetProfile:
    return PetProfile.model_validate(schema.model_dump(exclude={"schema_version"}))


def to_household_profile(schema: HouseholdProfileV1) -> HouseholdProfile:
    return HouseholdProfile.model_validate(schema.model_dump(exclude={"schema_version"}))


def to_profile(schema: ProfileSchema) -> Profile:
    """按持久化结构类型投影为对应的内存档案。"""
    if isinstance(schema, PersonProfileV1):
        return to_person_profile(schema)
    if isinstance(schema, PetProfileV1):
        return to_pet_profile(schema)
    return to_household_profile(schema)


def to_schema(profile: Profile) -> ProfileSchema:
    """内存档案 → 当前版本持久化结构（写入存储前使用）。"""
    data = profile.model_dump(exclude={"profile_type"})
    if isinstance(profile, PersonProfile):
        return PersonProfileV1.model_validate(data)
    if isinstance(profile, PetProfile):
        return PetProfileV1.model_validate(data)
    return HouseholdProfileV1.model_validate(data)
