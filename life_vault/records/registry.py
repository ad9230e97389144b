"""记录类型注册表：类型 → 分类 / 基数，分类 → 类型。进程内只读。"""
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from life_vault.records.models import (
    RecordCardinality,
    RecordCategory,
    RecordType,
    RecordTypeMeta,
)

_S = RecordCardinality.SINGLE
_M = RecordCardinality.MULTI


def _meta(
    type_: RecordType,
    category: RecordCategory,
    label: str,
    icon_key: str,
    cardinality: RecordCardinality,
    sort: int,
    **extra: Any,
) -> RecordTypeMeta:
    return RecordTypeMeta(
        type=type_,
        category=category,
        label=label,
        icon_key=icon_key,
        cardinality=cardinality,
        sort=sort,
        **extra,
    )


RECORD_TYPE_REGISTRY: Tuple[RecordTypeMeta, ...] = (
    # 证件
    _meta(RecordType.DRIVERS_LICENSE, RecordCategory.IDENTIFICATION, "Driver's License", "drivers-license", _S, 30),
    _meta(RecordType.BIRTH_CERTIFICATE, RecordCategory.IDENTIFICATION, "Birth Certificate", "certificate", _S, 40),
    _meta(RecordType.SOCIAL_SECURITY_CARD, RecordCategory.IDENTIFICATION, "Social Security", "ssn", _S, 50),
    # 医疗
    _meta(RecordType.INSURANCE_POLICY, RecordCategory.MEDICAL, "Insurance Policy", "shield", _S, 10),
    _meta(RecordType.MEDICAL_PROFILE, RecordCategory.MEDICAL, "Medical Profile", "heart", _S, 20),
    _meta(RecordType.MEDICAL_PROCEDURES, RecordCategory.MEDICAL, "Procedures", "stethoscope", _S, 30),
    _meta(RecordType.PRESCRIPTIONS, RecordCategory.MEDICAL, "Prescriptions", "pill", _S, 40),
    _meta(RecordType.VACCINATIONS, RecordCategory.MEDICAL, "Vaccinations", "syringe", _S, 50),
    _meta(RecordType.VISION_PRESCRIPTION, RecordCategory.MEDICAL, "Vision Rx", "eye", _S, 60),
    # 私密健康
    _meta(RecordType.PRIVATE_HEALTH_PROFILE, RecordCategory.PRIVATE_HEALTH, "Private Health", "lock", _S, 10, is_private=True),
    # 学校
    _meta(RecordType.SCHOOL_INFO, RecordCategory.SCHOOL_INFO, "School Info", "school", _S, 10),
    _meta(RecordType.AUTHORIZED_PICKUP, RecordCategory.SCHOOL_INFO, "Authorized Pickup", "users", _S, 20),
    # 教育
    _meta(RecordType.EDUCATION_RECORD, RecordCategory.EDUCATION, "Education Record", "graduation-cap", _M, 10),
    # 偏好 / 尺码
    _meta(RecordType.PREFERENCES, RecordCategory.PREFERENCES, "Favorites", "star", _S, 10),
    _meta(RecordType.SIZES, RecordCategory.SIZES, "Sizes", "ruler", _S, 10),
    # 出行（护照、护照卡、出行证件、会员）
    _meta(RecordType.PASSPORT, RecordCategory.TRAVEL, "Passport", "passport", _M, 10),
    _meta(RecordType.PASSPORT_CARD, RecordCategory.TRAVEL, "Passport Card", "id-card", _M, 20),
    _meta(RecordType.TRAVEL_IDS, RecordCategory.TRAVEL, "Travel IDs", "airplane", _S, 30),
    _meta(RecordType.LOYALTY_ACCOUNTS, RecordCategory.TRAVEL, "Loyalty Accounts", "barcode", _S, 40),
    # 法律 / 房产
    _meta(RecordType.LEGAL_PROPERTY_DOCUMENT, RecordCategory.LEGAL_PROPERTY, "Legal / Property", "scale", _M, 10),
    # 其他文档
    _meta(RecordType.OTHER_DOCUMENT, RecordCategory.DOCUMENTS, "Other Document", "folder", _M, 10),
    # 宠物
    _meta(RecordType.PET_PROFILE, RecordCategory.PETS, "Pet Profile", "paw", _S, 10),
    _meta(RecordType.PET_DOCUMENT, RecordCategory.PETS, "Pet Document", "file", _M, 20),
    _meta(RecordType.PET_INSURANCE, RecordCategory.PETS, "Pet Insurance", "shield", _S, 30),
)

RECORD_META_BY_TYPE: Mapping[str, RecordTypeMeta] = MappingProxyType(
    {m.type: m for m in RECORD_TYPE_REGISTRY}
)


def _group_by_category() -> Dict[str, Tuple[RecordType, ...]]:
    grouped: Dict[str, List[RecordTypeMeta]] = {}
    for meta in RECORD_TYPE_REGISTRY:
        grouped.setdefault(meta.category, []).append(meta)
    return {
        category: tuple(RecordType(m.type) for m in sorted(metas, key=lambda m: m.sort))
        for category, metas in grouped.items()
    }


TYPES_BY_CATEGORY: Mapping[str, Tuple[RecordType, ...]] = MappingProxyType(_group_by_category())


def _key(value: object) -> object:
    return value.value if isinstance(value, Enum) else value


class UnknownRecordTypeError(KeyError):
    """传入未注册的记录类型：属于代码缺陷，而非用户数据问题。"""


def get_record_meta(record_type: Union[RecordType, str]) -> RecordTypeMeta:
    """返回记录类型元数据；未注册时抛 UnknownRecordTypeError。"""
    try:
        return RECORD_META_BY_TYPE[_key(record_type)]
    except KeyError:
        raise UnknownRecordTypeError(record_type) from None


def get_types_for_category(category: Union[RecordCategory, str]) -> List[RecordType]:
    """返回分类下的记录类型（按 sort 排序）；无注册类型时为空列表。"""
    return list(TYPES_BY_CATEGORY.get(_key(category), ()))


def is_singleton_type(record_type: Union[RecordType, str]) -> bool:
    """是否为 SINGLE 类型（每个档案至多一条）。存储层插入前必须查询。"""
    return get_record_meta(record_type).cardinality == RecordCardinality.SINGLE


def parse_record_type(value: object) -> Optional[RecordType]:
    """宽松解析：已注册的类型字符串返回枚举，其余返回 None。"""
    if not isinstance(value, str):
        return None
    key = value.strip()
    if key not in RECORD_META_BY_TYPE:
        return None
    return RecordType(key)
