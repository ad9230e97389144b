"""集合存储与存储结构版本检查测试。"""
import tempfile
from pathlib import Path

from life_vault.config import STORAGE_SCHEMA_VERSION
from life_vault.storage import (
    STORAGE_SCHEMA_KEY,
    JsonCollectionStore,
    ensure_storage_schema_version,
)


def test_read_write_remove() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        store = JsonCollectionStore(base_dir=Path(tmp))
        assert store.read("people_v1") is None
        store.write("records_v1:person_1", [{"id": "r1"}])
        assert store.read("records_v1:person_1") == [{"id": "r1"}]
        assert store.keys() == ["records_v1:person_1"]
        assert store.remove("records_v1:person_1") is True
        assert store.remove("records_v1:person_1") is False


def test_corrupt_file_reads_as_none() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        store = JsonCollectionStore(base_dir=Path(tmp))
        (Path(tmp) / "people_v1.json").write_text("{not json", encoding="utf-8")
        assert store.read("people_v1") is None


def test_schema_version_change_resets_versioned_collections() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        store = JsonCollectionStore(base_dir=Path(tmp))
        store.write("people_v1", [{"id": "p"}])
        store.write("records_v1:person_1", [])
        store.write("unrelated", {"keep": True})
        store.write(STORAGE_SCHEMA_KEY, "old")

        removed = ensure_storage_schema_version(store)
        assert sorted(removed) == ["people_v1", "records_v1:person_1"]
        assert store.read("unrelated") == {"keep": True}
        assert store.read(STORAGE_SCHEMA_KEY) == STORAGE_SCHEMA_VERSION
        # 版本一致时不再清理
        store.write("people_v1", [])
        assert ensure_storage_schema_version(store) == []
        assert store.read("people_v1") == []


def test_non_utf8_file_reads_as_none() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        store = JsonCollectionStore(base_dir=Path(tmp))
        (Path(tmp) / "people_v1.json").write_bytes(b"\xff\xfe\x00garbage")
        assert store.read("people_v1") is None
