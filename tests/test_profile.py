"""人员 / 宠物 / 家庭档案规范化与档案存储测试。"""
import tempfile
from pathlib import Path

from life_vault.coerce import DropLog
from life_vault.profile import (
    HouseholdProfile,
    PersonProfile,
    PetProfile,
    ProfileStore,
    new_profile_id,
    normalize_and_migrate_pet_list,
    normalize_household_list,
    normalize_person_list,
    normalize_pet_list,
    to_profile,
    to_schema,
)
from life_vault.storage import JsonCollectionStore


def _dump(items) -> list:
    return [i.to_json_dict() for i in items]


def test_non_list_input_is_empty() -> None:
    for raw in (None, {}, "people", 3):
        assert normalize_person_list(raw) == []
        assert normalize_pet_list(raw) == []
        assert normalize_household_list(raw) == []


def test_person_required_fields_and_defaults() -> None:
    drops = DropLog()
    people = normalize_person_list(
        [
            {"id": "p1", "firstName": "  Ann ", "relationship": "spouse"},
            {"id": "p2", "firstName": ""},
            {"firstName": "NoId"},
            {"id": "p3", "firstName": "Bo", "relationship": "Cousin", "avatar": "file:///bo.png", "isPrimary": 1},
        ],
        on_drop=drops,
    )
    assert [p.id for p in people] == ["p1", "p3"]
    assert drops.count == 2
    ann, bo = people
    assert ann.first_name == "Ann"
    assert ann.last_name == ""
    assert ann.relationship == "Spouse"
    assert ann.created_at and ann.updated_at
    assert bo.relationship == "Other"
    assert bo.avatar_uri == "file:///bo.png"
    assert bo.is_primary is True


def test_person_normalization_is_idempotent() -> None:
    once = normalize_person_list([{"id": "p1", "firstName": "Ann", "relationship": "Self"}])
    twice = normalize_person_list(_dump(once))
    assert _dump(once) == _dump(twice)
    assert once[0].relationship == "Self"


def test_household_member_ids_are_cleaned() -> None:
    households = normalize_household_list(
        [{"id": "h1", "name": "Home", "memberIds": ["p1", "", None, 7, " p2 "]}, {"id": "h2"}]
    )
    assert len(households) == 1
    assert households[0].member_ids == ["p1", "7", "p2"]


def test_pet_aliases_and_kind() -> None:
    pets = normalize_pet_list(
        [
            {
                "id": "pet1",
                "name": "Rex",
                "kind": "dog",
                "avatar": "rex.png",
                "adoptionDate": "2020-01-01",
                "serviceProviders": [{"name": "Groomer"}, "junk"],
                "medications": [{"id": "m1", "name": "Heartgard", "status": "history"}, {"name": "no id"}],
                "vaccinations": [{"id": "v1", "name": "Rabies", "date": "2023-05-01"}],
            },
            {"id": "pet2", "petName": "Slinky", "kind": "Ferret"},
        ]
    )
    rex, slinky = pets
    assert rex.pet_name == "Rex"
    assert rex.kind == "Dog"
    assert rex.avatar_uri == "rex.png"
    assert rex.dob_or_adoption_date == "2020-01-01"
    assert rex.providers == [{"name": "Groomer"}]
    assert [m.id for m in rex.medications] == ["m1"]
    assert rex.medications[0].status == "history"
    assert rex.vaccinations[0].date == "2023-05-01"
    assert slinky.kind == "Other"
    assert slinky.kind_other_text == "Ferret"


def test_pet_validation_keeps_timestamps_but_migration_touches_them() -> None:
    raw = [{"id": "pet1", "petName": "Rex", "createdAt": "2020-01-01T00:00:00Z", "updatedAt": "2020-01-02T00:00:00Z"}]
    assert normalize_pet_list(raw)[0].updated_at == "2020-01-02T00:00:00Z"
    migrated = normalize_and_migrate_pet_list(raw)[0]
    assert migrated.created_at == "2020-01-01T00:00:00Z"
    assert migrated.updated_at != "2020-01-02T00:00:00Z"


def test_projection_round_trip() -> None:
    schema = normalize_pet_list([{"id": "pet1", "petName": "Rex", "kind": "Cat"}])[0]
    profile = to_profile(schema)
    assert isinstance(profile, PetProfile)
    assert profile.profile_type == "PET"
    assert to_schema(profile).to_json_dict() == schema.to_json_dict()


def test_new_profile_id_prefix() -> None:
    assert new_profile_id("PERSON").startswith("person_")
    assert new_profile_id("HOUSEHOLD").startswith("household_")


def test_profile_store_save_load_delete() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        store = ProfileStore(JsonCollectionStore(base_dir=Path(tmp)))
        ann = store.save(PersonProfile(id="person_1", first_name="Ann", relationship="Self", is_primary=True))
        rex = store.save(PetProfile(id="pet_1", pet_name="Rex", kind="Dog"))
        home = store.save(HouseholdProfile(id="household_1", name="Home", member_ids=[ann.id, rex.id]))

        assert ann.created_at and ann.updated_at
        assert [p.id for p in store.list_profiles()] == ["person_1", "pet_1", "household_1"]
        loaded = store.get("pet_1")
        assert isinstance(loaded, PetProfile)
        assert loaded.pet_name == "Rex"

        renamed = store.save(ann.model_copy(update={"first_name": "Anna"}))
        assert renamed.created_at == ann.created_at
        assert [p.first_name for p in store.list_people()] == ["Anna"]

        # 删除不级联：家庭仍引用已删除的成员
        assert store.delete("pet_1") is True
        assert store.delete("pet_1") is False
        assert store.get("pet_1") is None
        assert [h.id for h in store.households_containing("pet_1")] == [home.id]


def test_profile_store_reports_drops() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        collections = JsonCollectionStore(base_dir=Path(tmp))
        collections.write("people_v1", [{"id": "p1", "firstName": "Ann"}, {"id": "p2"}])
        drops = DropLog()
        store = ProfileStore(collections, on_drop=drops)
        assert [p.id for p in store.list_people()] == ["p1"]
        assert drops.entries == [(1, "missing id or name")]


def test_household_normalization_is_idempotent() -> None:
    once = normalize_household_list([{"id": "h1", "name": "Home", "memberIds": ["p1", "  ", "pet1"]}])
    assert once[0].member_ids == ["p1", "pet1"]
    twice = normalize_household_list(_dump(once))
    assert _dump(once) == _dump(twice)


def test_whitespace_required_fields_are_dropped() -> None:
    assert normalize_person_list([{"id": "1", "firstName": "  "}]) == []
    assert normalize_household_list([{"id": "h1", "name": " \t"}]) == []
    drops = DropLog()
    pets = normalize_pet_list(
        [{"id": "pet1"}, {"id": "pet2", "petName": "  ", "name": ""}, {"petName": "NoId"}, {"id": "pet3", "name": "Rex"}],
        on_drop=drops,
    )
    assert [p.id for p in pets] == ["pet3"]
    assert [index for index, _ in drops.entries] == [0, 1, 2]
