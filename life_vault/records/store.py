"""记录本地存储：每个档案一个集合（records_v1:<档案 ID>）。"""
import logging
from typing import List, Optional

from life_vault.coerce import now_iso
from life_vault.records.models import LifeVaultRecord
from life_vault.records.normalize import normalize_record_list
from life_vault.records.registry import is_singleton_type
from life_vault.storage import RECORDS_PREFIX, JsonCollectionStore

logger = logging.getLogger(__name__)


def records_key(entity_id: str) -> str:
    return f"{RECORDS_PREFIX}{entity_id}"


class RecordStore:
    """记录存储。读出时经规范化；写入时按注册表基数限制 SINGLE 类型。"""

    def __init__(self, collections: Optional[JsonCollectionStore] = None):
        self.collections = collections or JsonCollectionStore()

    def list_for_entity(self, entity_id: str) -> List[LifeVaultRecord]:
        """列出某档案下的全部记录。"""
        return normalize_record_list(self.collections.read(records_key(entity_id)))

    def get(self, entity_id: str, record_id: str) -> Optional[LifeVaultRecord]:
        for record in self.list_for_entity(entity_id):
            if record.id == record_id:
                return record
        return None

    def upsert(self, entity_id: str, record: LifeVaultRecord) -> LifeVaultRecord:
        """新增或更新记录。SINGLE 类型会替换该档案下同类型的其他记录。"""
        now = now_iso()
        record = record.model_copy(
            update={
                "entity_id": entity_id,
                "created_at": record.created_at or now,
                "updated_at": now,
            }
        )
        records = self.list_for_entity(entity_id)
        if is_singleton_type(record.record_type):
            replaced = [r.id for r in records if r.record_type == record.record_type and r.id != record.id]
            if replaced:
                logger.info(
                    "%s is single-instance, replacing %s on entity %s",
                    record.record_type, replaced, entity_id,
                )
                records = [r for r in records if r.id not in replaced]

        idx = next((i for i, r in enumerate(records) if r.id == record.id), None)
        if idx is None:
            records.insert(0, record)
        else:
            records[idx] = record
        self._write(entity_id, records)
        return record

    def delete(self, entity_id: str, record_id: str) -> bool:
        """删除记录（硬删除）。"""
        records = self.list_for_entity(entity_id)
        remaining = [r for r in records if r.id != record_id]
        if len(remaining) == len(records):
            return False
        self._write(entity_id, remaining)
        return True

    def _write(self, entity_id: str, records: List[LifeVaultRecord]) -> None:
        self.collections.write(records_key(entity_id), [r.to_json_dict() for r in records])
