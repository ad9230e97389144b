"""记录类型注册表与默认内容模板测试。"""
import pytest

from life_vault.records import (
    RecordCategory,
    RecordType,
    UnknownRecordTypeError,
    default_payload_for,
    get_record_meta,
    get_types_for_category,
    is_singleton_type,
    parse_record_type,
)
from life_vault.records.registry import RECORD_TYPE_REGISTRY


def test_registry_covers_every_record_type_once() -> None:
    types = [m.type for m in RECORD_TYPE_REGISTRY]
    assert sorted(types) == sorted(t.value for t in RecordType)


def test_category_lookup_is_sorted_and_consistent() -> None:
    assert get_types_for_category(RecordCategory.TRAVEL) == [
        RecordType.PASSPORT,
        RecordType.PASSPORT_CARD,
        RecordType.TRAVEL_IDS,
        RecordType.LOYALTY_ACCOUNTS,
    ]
    for category in RecordCategory:
        for record_type in get_types_for_category(category):
            assert get_record_meta(record_type).category == category.value


def test_cardinality() -> None:
    assert is_singleton_type(RecordType.MEDICAL_PROFILE) is True
    assert is_singleton_type("PASSPORT") is False
    assert get_record_meta(RecordType.PRIVATE_HEALTH_PROFILE).is_private is True


def test_unknown_type_raises() -> None:
    with pytest.raises(UnknownRecordTypeError):
        get_record_meta("NOT_A_TYPE")
    assert get_types_for_category("NOPE") == []


def test_parse_record_type() -> None:
    assert parse_record_type(" PASSPORT ") == RecordType.PASSPORT
    assert parse_record_type("passport") is None
    assert parse_record_type(7) is None


def test_default_payload_is_isolated_copy() -> None:
    first = default_payload_for(RecordType.VACCINATIONS)
    first["vaccinations"].append({"name": "x"})
    second = default_payload_for(RecordType.VACCINATIONS)
    assert second == {"vaccinations": []}
    assert default_payload_for("UNKNOWN") == {}
    assert default_payload_for(None) == {}
