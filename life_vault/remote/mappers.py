"""远端实体 / 记录与本地档案 / 记录之间的映射。

远端实体只有扁平的表头（displayName、relationshipType 等），本地档案更细
（firstName / lastName、kind / breed 等），两者在这里互相转换。
"""
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import Field

from life_vault.models import VaultModel
from life_vault.profile.models import HouseholdProfile, PersonProfile, PetProfile
from life_vault.records.models import LifeVaultRecord
from life_vault.records.normalize import normalize_record


class ServerRelationshipType(str, Enum):
    PRIMARY = "PRIMARY"
    SPOUSE = "SPOUSE"
    PARTNER = "PARTNER"
    CHILD = "CHILD"
    PARENT = "PARENT"
    GRANDPARENT = "GRANDPARENT"
    SIBLING = "SIBLING"
    OTHER = "OTHER"


class ServerVault(VaultModel):
    id: str
    name: Optional[str] = None
    created_at: Optional[str] = None


class ServerEntity(VaultModel):
    """远端实体表头。"""
    id: str = Field(..., description="实体 ID")
    vault_id: Optional[str] = Field(None, description="所属库 ID")
    entity_type: str = Field(..., description="PERSON / PET / HOUSEHOLD")
    display_name: str = Field("", description="显示名")
    relationship_type: Optional[str] = Field(None, description="关系类型")
    relationship_other_label: Optional[str] = Field(None, description="关系补充说明")
    date_of_birth: Optional[str] = Field(None, description="出生日期")
    adoption_date: Optional[str] = Field(None, description="领养日期")
    photo_file_id: Optional[str] = Field(None, description="头像文件 ID")
    created_at: Optional[str] = Field(None, description="创建时间 ISO")
    updated_at: Optional[str] = Field(None, description="更新时间 ISO")


class ServerRecord(VaultModel):
    """远端记录：payload 与本地记录的 data 结构相同。"""
    id: str = Field(..., description="记录 ID")
    vault_id: Optional[str] = Field(None, description="所属库 ID")
    entity_id: Optional[str] = Field(None, description="所属实体 ID")
    record_type: str = Field(..., description="记录类型")
    payload: Optional[Dict[str, Any]] = Field(None, description="记录内容")
    payload_version: int = Field(1, description="内容版本")
    source: Optional[str] = Field(None, description="来源")
    privacy: str = Field("STANDARD", description="STANDARD / SENSITIVE")
    file_ids: List[str] = Field(default_factory=list, description="附件文件 ID")
    created_at: Optional[str] = Field(None, description="创建时间 ISO")
    updated_at: Optional[str] = Field(None, description="更新时间 ISO")
    deleted_at: Optional[str] = Field(None, description="删除时间 ISO")


# ── 关系映射 ──


def server_rel_to_local(rel_type: Optional[str], rel_label: Optional[str]) -> Tuple[str, bool]:
    """远端关系类型 → (本地关系, 是否主用户)。"""
    if rel_type == ServerRelationshipType.PRIMARY:
        return "Self", True
    simple = {
        ServerRelationshipType.SPOUSE.value: "Spouse",
        ServerRelationshipType.PARTNER.value: "Partner",
        ServerRelationshipType.CHILD.value: "Child",
        ServerRelationshipType.GRANDPARENT.value: "Grandparent",
    }
    if rel_type in simple:
        return simple[rel_type], False
    if rel_type == ServerRelationshipType.PARENT:
        # 远端只有 PARENT，靠 label 还原 Mother / Father
        if rel_label in ("Mother", "Father"):
            return rel_label, False
        return "Parent", False
    if rel_type == ServerRelationshipType.OTHER and rel_label == "Caregiver":
        return "Caregiver", False
    return "Other", False


def local_rel_to_server(relationship: str, is_primary: bool = False) -> Tuple[str, Optional[str]]:
    """本地关系 → (远端关系类型, 补充说明)。"""
    if is_primary:
        return ServerRelationshipType.PRIMARY.value, None
    n = relationship.strip().lower()
    mapping = {
        "self": (ServerRelationshipType.PRIMARY, None),
        "spouse": (ServerRelationshipType.SPOUSE, None),
        "partner": (ServerRelationshipType.PARTNER, None),
        "child": (ServerRelationshipType.CHILD, None),
        "mother": (ServerRelationshipType.PARENT, "Mother"),
        "father": (ServerRelationshipType.PARENT, "Father"),
        "parent": (ServerRelationshipType.PARENT, None),
        "grandparent": (ServerRelationshipType.GRANDPARENT, None),
        "sibling": (ServerRelationshipType.SIBLING, None),
        "caregiver": (ServerRelationshipType.OTHER, "Caregiver"),
    }
    if n in mapping:
        rel_type, label = mapping[n]
        return rel_type.value, label
    return ServerRelationshipType.OTHER.value, relationship.strip() or "Other"


# ── 实体 → 档案 ──


def _date_only(value: Optional[str]) -> Optional[str]:
    return value.split("T")[0] if value else None


def split_display_name(display_name: str) -> Tuple[str, str]:
    """显示名拆分为 (名, 姓)：首个词为名，其余为姓。"""
    parts = display_name.split()
    if len(parts) <= 1:
        return (parts[0] if parts else ""), ""
    return parts[0], " ".join(parts[1:])


def entity_to_person_profile(entity: ServerEntity) -> PersonProfile:
    first_name, last_name = split_display_name(entity.display_name)
    relationship, is_primary = server_rel_to_local(entity.relationship_type, entity.relationship_other_label)
    return PersonProfile(
        id=entity.id,
        first_name=first_name,
        last_name=last_name,
        relationship=relationship,
        dob=_date_only(entity.date_of_birth),
        is_primary=is_primary,
        created_at=entity.created_at,
        updated_at=entity.updated_at,
    )


def entity_to_pet_profile(entity: ServerEntity) -> PetProfile:
    # 物种不在实体表头中，存于 PET_PROFILE 记录
    return PetProfile(
        id=entity.id,
        pet_name=entity.display_name,
        kind="Other",
        dob=_date_only(entity.date_of_birth),
        adoption_date=_date_only(entity.adoption_date),
        created_at=entity.created_at,
        updated_at=entity.updated_at,
    )


def entity_to_household_profile(entity: ServerEntity) -> HouseholdProfile:
    # 远端模式下成员关系在库级别维护
    return HouseholdProfile(
        id=entity.id,
        name=entity.display_name,
        member_ids=[],
        created_at=entity.created_at,
        updated_at=entity.updated_at,
    )


def entity_to_profile(entity: ServerEntity) -> Optional[Union[PersonProfile, PetProfile, HouseholdProfile]]:
    """未知实体类型返回 None。"""
    if entity.entity_type == "PERSON":
        return entity_to_person_profile(entity)
    if entity.entity_type == "PET":
        return entity_to_pet_profile(entity)
    if entity.entity_type == "HOUSEHOLD":
        return entity_to_household_profile(entity)
    return None


def profile_to_entity_input(profile: Union[PersonProfile, PetProfile, HouseholdProfile], vault_id: str) -> Dict[str, Any]:
    """本地档案 → CreateEntityInput。"""
    data: Dict[str, Any] = {"vaultId": vault_id, "entityType": profile.profile_type}
    if isinstance(profile, PersonProfile):
        rel_type, label = local_rel_to_server(profile.relationship, profile.is_primary)
        data.update(
            displayName=" ".join(p for p in (profile.first_name, profile.last_name) if p),
            relationshipType=rel_type,
            relationshipOtherLabel=label,
            dateOfBirth=profile.dob,
        )
    elif isinstance(profile, PetProfile):
        data.update(displayName=profile.pet_name, dateOfBirth=profile.dob, adoptionDate=profile.adoption_date)
    else:
        data.update(displayName=profile.name)
    return {k: v for k, v in data.items() if v is not None}


# ── 记录 ──


def server_record_to_record(server: Union[ServerRecord, Dict[str, Any]]) -> Optional[LifeVaultRecord]:
    """远端记录（含 UpsertRecord 返回的 {id, recordType, updatedAt}）→ 本地记录；类型未注册时返回 None。"""
    if isinstance(server, dict):
        server = ServerRecord.model_validate(server)
    return normalize_record(
        {
            "id": server.id,
            "entityId": server.entity_id,
            "recordType": server.record_type,
            "payload": server.payload,
            "isPrivate": server.privacy == "SENSITIVE",
            "createdAt": server.created_at,
            "updatedAt": server.updated_at,
        }
    )
