"""远端 GraphQL 接口与实体 / 记录映射。"""
from life_vault.remote.client import LifeVaultApi, RemoteApiError
from life_vault.remote.mappers import (
    ServerEntity,
    ServerRecord,
    ServerVault,
    entity_to_profile,
    local_rel_to_server,
    profile_to_entity_input,
    server_rel_to_local,
    server_record_to_record,
)

__all__ = [
    "LifeVaultApi",
    "RemoteApiError",
    "ServerEntity",
    "ServerRecord",
    "ServerVault",
    "entity_to_profile",
    "local_rel_to_server",
    "profile_to_entity_input",
    "server_rel_to_local",
    "server_record_to_record",
]
