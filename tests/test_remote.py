"""远端 GraphQL 客户端与映射测试（以假会话代替网络）。"""
from typing import Any, Dict, List

import pytest
import requests

from life_vault.profile import PersonProfile, PetProfile
from life_vault.records import LifeVaultRecord, RecordType
from life_vault.remote import (
    LifeVaultApi,
    RemoteApiError,
    ServerEntity,
    entity_to_profile,
    local_rel_to_server,
    profile_to_entity_input,
    server_rel_to_local,
)


class FakeResponse:
    def __init__(self, body: Any, status_code: int = 200):
        self._body = body
        self.status_code = status_code
        self.text = str(body)

    def json(self) -> Any:
        if isinstance(self._body, Exception):
            raise self._body
        return self._body


class FakeSession:
    """按顺序返回预置响应，并记录每次请求。"""

    def __init__(self, responses: List[Any]):
        self.responses = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def post(self, url: str, json: Dict[str, Any], headers: Dict[str, str], timeout: float) -> FakeResponse:
        self.calls.append({"url": url, "json": json, "headers": headers})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def _api(*responses: Any) -> LifeVaultApi:
    return LifeVaultApi(url="http://test/graphql", token="tok", session=FakeSession(list(responses)))


def test_relationship_mapping() -> None:
    assert server_rel_to_local("PRIMARY", None) == ("Self", True)
    assert server_rel_to_local("PARENT", "Mother") == ("Mother", False)
    assert server_rel_to_local("PARENT", None) == ("Parent", False)
    assert server_rel_to_local("OTHER", "Caregiver") == ("Caregiver", False)
    assert server_rel_to_local("SIBLING", None) == ("Other", False)
    assert local_rel_to_server("Father") == ("PARENT", "Father")
    assert local_rel_to_server("Neighbor") == ("OTHER", "Neighbor")
    assert local_rel_to_server("Child", is_primary=True) == ("PRIMARY", None)


def test_entity_to_profile() -> None:
    person = entity_to_profile(
        ServerEntity.model_validate(
            {"id": "e1", "entityType": "PERSON", "displayName": "Ann Marie Lee",
             "relationshipType": "SPOUSE", "dateOfBirth": "1990-02-03T00:00:00.000Z"}
        )
    )
    assert isinstance(person, PersonProfile)
    assert (person.first_name, person.last_name) == ("Ann", "Marie Lee")
    assert person.relationship == "Spouse"
    assert person.dob == "1990-02-03"
    assert entity_to_profile(ServerEntity(id="e2", entity_type="ROBOT")) is None


def test_profile_to_entity_input() -> None:
    data = profile_to_entity_input(PetProfile(id="pet_1", pet_name="Rex"), "v1")
    assert data == {"vaultId": "v1", "entityType": "PET", "displayName": "Rex"}


def test_execute_sends_bearer_token() -> None:
    api = _api(FakeResponse({"data": {"ok": True}}))
    assert api.execute("query { ok }") == {"ok": True}
    call = api.session.calls[0]
    assert call["headers"]["Authorization"] == "Bearer tok"
    assert call["json"] == {"query": "query { ok }", "variables": {}}


@pytest.mark.parametrize(
    "response",
    [
        requests.ConnectionError("down"),
        FakeResponse({"data": None}, status_code=500),
        FakeResponse(ValueError("not json")),
        FakeResponse({"errors": [{"message": "Unauthorized"}]}),
    ],
)
def test_execute_errors(response: Any) -> None:
    with pytest.raises(RemoteApiError):
        _api(response).execute("query { ok }")


def test_vault_id_picks_newest_and_caches() -> None:
    api = _api(
        FakeResponse(
            {"data": {"myVaults": [
                {"id": "old", "createdAt": "2023-01-01T00:00:00Z"},
                {"id": "new", "createdAt": "2024-01-01T00:00:00Z"},
            ]}}
        )
    )
    assert api.get_or_create_vault_id() == "new"
    assert api.get_or_create_vault_id() == "new"
    assert len(api.session.calls) == 1


def test_vault_created_when_missing() -> None:
    api = _api(
        FakeResponse({"data": {"myVaults": []}}),
        FakeResponse({"data": {"createVault": {"id": "v9", "name": "My Family Vault"}}}),
    )
    assert api.get_or_create_vault_id() == "v9"
    assert api.session.calls[1]["json"]["variables"] == {"input": {"name": "My Family Vault"}}


def test_list_records_skips_deleted_and_unknown() -> None:
    api = _api(
        FakeResponse({"data": {"myVaults": [{"id": "v1"}]}}),
        FakeResponse(
            {"data": {"records": [
                {"id": "r1", "entityId": "e1", "recordType": "PASSPORT", "payload": {"passportNumber": "X"},
                 "privacy": "SENSITIVE"},
                {"id": "r2", "entityId": "e1", "recordType": "PASSPORT", "deletedAt": "2024-01-01T00:00:00Z"},
                {"id": "r3", "entityId": "e1", "recordType": "HOVERCRAFT"},
            ]}}
        ),
    )
    records = api.list_records("e1")
    assert [r.id for r in records] == ["r1"]
    assert records[0].is_private is True
    assert records[0].data == {"passportNumber": "X"}


def test_upsert_record_merges_server_fields() -> None:
    api = _api(
        FakeResponse({"data": {"myVaults": [{"id": "v1"}]}}),
        FakeResponse(
            {"data": {"upsertRecord": {"id": "srv_1", "recordType": "PASSPORT", "updatedAt": "2024-05-05T00:00:00Z"}}}
        ),
    )
    local = LifeVaultRecord(id="tmp_1", record_type=RecordType.PASSPORT, title="Mine", data={"passportNumber": "X"})
    saved = api.upsert_record("e1", local)
    assert saved.id == "srv_1"
    assert saved.entity_id == "e1"
    assert saved.updated_at == "2024-05-05T00:00:00Z"
    assert saved.data == {"passportNumber": "X"}
    assert saved.title == "Mine"
    sent = api.session.calls[1]["json"]["variables"]["input"]
    assert sent["recordType"] == "PASSPORT"
    assert sent["privacy"] == "STANDARD"
