"""远端 GraphQL 接口：库、实体与记录的查询和写入。

网络或接口错误一律抛 RemoteApiError，由调用方决定重试策略。
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

import requests

from life_vault.coerce import parse_iso
from life_vault.config import DEFAULT_VAULT_NAME, GRAPHQL_URL, REMOTE_TIMEOUT
from life_vault.profile.models import HouseholdProfile, PersonProfile, PetProfile
from life_vault.records.models import LifeVaultRecord
from life_vault.remote.mappers import (
    ServerEntity,
    ServerRecord,
    ServerVault,
    entity_to_profile,
    profile_to_entity_input,
    server_record_to_record,
)

logger = logging.getLogger(__name__)

_VAULT_FIELDS = "id name createdAt"
_ENTITY_FIELDS = (
    "id vaultId entityType displayName relationshipType relationshipOtherLabel "
    "dateOfBirth adoptionDate photoFileId createdAt updatedAt"
)
_RECORD_FIELDS = (
    "id vaultId entityId recordType payload payloadVersion source privacy fileIds createdAt updatedAt"
)

MY_VAULTS = "query MyVaults { myVaults { %s } }" % _VAULT_FIELDS
CREATE_VAULT = "mutation CreateVault($input: CreateVaultInput!) { createVault(input: $input) { %s } }" % _VAULT_FIELDS
ENTITIES_QUERY = "query Entities($vaultId: ID!) { entities(vaultId: $vaultId) { %s } }" % _ENTITY_FIELDS
CREATE_ENTITY = "mutation CreateEntity($input: CreateEntityInput!) { createEntity(input: $input) { %s } }" % _ENTITY_FIELDS
RECORDS_QUERY = (
    "query Records($vaultId: ID!, $entityId: ID) "
    "{ records(vaultId: $vaultId, entityId: $entityId) { %s deletedAt } }" % _RECORD_FIELDS
)
UPSERT_RECORD = "mutation UpsertRecord($input: UpsertRecordInput!) { upsertRecord(input: $input) { %s } }" % _RECORD_FIELDS
DELETE_RECORD = "mutation DeleteRecord($input: DeleteRecordInput!) { deleteRecord(input: $input) { id } }"

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class RemoteApiError(Exception):
    """远端请求失败（网络、HTTP 状态或 GraphQL errors）。"""


def _vault_sort_key(vault: ServerVault) -> datetime:
    # 缺少 createdAt 的库视为最旧
    parsed = parse_iso(vault.created_at or "")
    if parsed is None:
        return _EPOCH
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


class LifeVaultApi:
    """GraphQL 客户端。"""

    def __init__(
        self,
        url: Optional[str] = None,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = REMOTE_TIMEOUT,
    ):
        self.url = url or GRAPHQL_URL
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout
        self._vault_id: Optional[str] = None

    def execute(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """发送一次 GraphQL 请求，返回 data。"""
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        try:
            r = self.session.post(
                self.url,
                json={"query": query, "variables": variables or {}},
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise RemoteApiError(f"request failed: {e}") from e
        if r.status_code != 200:
            raise RemoteApiError(f"HTTP {r.status_code}: {r.text[:200]}")
        try:
            body = r.json()
        except ValueError as e:
            raise RemoteApiError(f"response is not JSON: {r.text[:200]}") from e
        errors = body.get("errors") if isinstance(body, dict) else None
        if errors:
            messages = "; ".join(str(err.get("message", err)) if isinstance(err, dict) else str(err) for err in errors)
            raise RemoteApiError(f"GraphQL error: {messages}")
        data = body.get("data") if isinstance(body, dict) else None
        return data or {}

    # ── 库 ──

    def my_vaults(self) -> List[ServerVault]:
        data = self.execute(MY_VAULTS)
        return [ServerVault.model_validate(v) for v in data.get("myVaults") or []]

    def create_vault(self, name: str = DEFAULT_VAULT_NAME) -> ServerVault:
        data = self.execute(CREATE_VAULT, {"input": {"name": name}})
        created = data.get("createVault") or {}
        if not created.get("id"):
            raise RemoteApiError("createVault did not return an id")
        return ServerVault.model_validate(created)

    def get_or_create_vault_id(self) -> str:
        """使用最新创建的库；没有则新建。结果缓存在客户端上。"""
        if self._vault_id:
            return self._vault_id
        vaults = sorted(self.my_vaults(), key=_vault_sort_key, reverse=True)
        if vaults:
            self._vault_id = vaults[0].id
        else:
            self._vault_id = self.create_vault().id
            logger.info("created vault %s", self._vault_id)
        return self._vault_id

    def clear_vault_cache(self) -> None:
        self._vault_id = None

    # ── 实体 ──

    def list_entities(self) -> List[ServerEntity]:
        data = self.execute(ENTITIES_QUERY, {"vaultId": self.get_or_create_vault_id()})
        return [ServerEntity.model_validate(e) for e in data.get("entities") or []]

    def list_profiles(self) -> List[Union[PersonProfile, PetProfile, HouseholdProfile]]:
        """远端实体转为本地档案（未知实体类型跳过）。"""
        profiles = []
        for entity in self.list_entities():
            profile = entity_to_profile(entity)
            if profile is not None:
                profiles.append(profile)
        return profiles

    def create_entity(self, profile: Union[PersonProfile, PetProfile, HouseholdProfile]) -> ServerEntity:
        payload = profile_to_entity_input(profile, self.get_or_create_vault_id())
        data = self.execute(CREATE_ENTITY, {"input": payload})
        return ServerEntity.model_validate(data.get("createEntity") or {})

    # ── 记录 ──

    def list_records(self, entity_id: Optional[str] = None) -> List[LifeVaultRecord]:
        """列出记录；已删除或类型未注册的记录跳过。"""
        variables = {"vaultId": self.get_or_create_vault_id(), "entityId": entity_id}
        data = self.execute(RECORDS_QUERY, variables)
        records = []
        for raw in data.get("records") or []:
            server = ServerRecord.model_validate(raw)
            if server.deleted_at:
                continue
            record = server_record_to_record(server)
            if record is not None:
                records.append(record)
        return records

    def upsert_record(self, entity_id: str, record: LifeVaultRecord) -> LifeVaultRecord:
        """写入记录，返回服务端确认后的本地记录（id / recordType / updatedAt 以服务端为准）。"""
        variables = {
            "input": {
                "vaultId": self.get_or_create_vault_id(),
                "recordId": record.id,
                "entityId": entity_id,
                "recordType": record.record_type,
                "payload": record.data,
                "privacy": "SENSITIVE" if record.is_private else "STANDARD",
            }
        }
        data = self.execute(UPSERT_RECORD, variables)
        returned = data.get("upsertRecord") or {}
        merged = server_record_to_record({"entityId": entity_id, "payload": record.data, **returned})
        if merged is None:
            raise RemoteApiError(f"upsertRecord returned an unusable record: {returned!r}")
        return merged.model_copy(update={"title": record.title, "attachments": record.attachments})

    def delete_record(self, record_id: str) -> None:
        self.execute(DELETE_RECORD, {"input": {"recordId": record_id}})
