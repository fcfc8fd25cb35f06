"""local_store.py 테스트"""

import json
from pathlib import Path

import pytest

from flyer_portal.storage.local_store import JsonFileStorage, LocalStore, MemoryStorage, SLOT_KEYS
from flyer_portal.storage.record_store import Tables


@pytest.fixture(params=["memory", "file"])
def store(request, temp_data_dir):
    """메모리/파일 저장 매체로 각각 실행"""
    if request.param == "memory":
        return LocalStore(MemoryStorage())
    return LocalStore(JsonFileStorage(temp_data_dir))


def _products():
    return [
        {"id": "p1", "vendorId": "v1", "name": "셔츠", "sortOrder": 2},
        {"id": "p2", "vendorId": "v1", "name": "바지", "sortOrder": 0},
        {"id": "p3", "vendorId": "v2", "name": "모자", "sortOrder": 1},
        {"id": "p4", "vendorId": "v1", "name": "양말", "sortOrder": None},
    ]


class TestLocalStoreBasic:
    """CRUD 테스트"""

    def test_empty_select(self, store):
        assert store.select(Tables.REQUESTS) == []

    def test_insert_and_select(self, store):
        saved = store.insert(Tables.PRODUCTS, _products())
        assert len(saved) == 4
        assert len(store.select(Tables.PRODUCTS)) == 4

    def test_filter(self, store):
        store.insert(Tables.PRODUCTS, _products())
        rows = store.select(Tables.PRODUCTS, {"vendorId": "v1"})
        assert {r["id"] for r in rows} == {"p1", "p2", "p4"}

    def test_order_none_last(self, store):
        """정렬 시 None은 맨 뒤"""
        store.insert(Tables.PRODUCTS, _products())
        rows = store.select(Tables.PRODUCTS, {"vendorId": "v1"}, order_by="sortOrder")
        assert [r["id"] for r in rows] == ["p2", "p1", "p4"]

    def test_order_desc_and_limit(self, store):
        store.insert(Tables.PRODUCTS, _products()[:3])
        rows = store.select(Tables.PRODUCTS, order_by="sortOrder", desc=True, limit=2)
        assert [r["id"] for r in rows] == ["p1", "p3"]

    def test_get(self, store):
        store.insert(Tables.PRODUCTS, _products())
        assert store.get(Tables.PRODUCTS, {"id": "p3"})["name"] == "모자"
        assert store.get(Tables.PRODUCTS, {"id": "nope"}) is None

    def test_update(self, store):
        store.insert(Tables.PRODUCTS, _products())
        updated = store.update(Tables.PRODUCTS, {"id": "p1"}, {"name": "니트"})
        assert len(updated) == 1
        assert updated[0]["name"] == "니트"
        assert updated[0]["vendorId"] == "v1"
        assert store.get(Tables.PRODUCTS, {"id": "p1"})["name"] == "니트"

    def test_update_missing_is_noop(self, store):
        store.insert(Tables.PRODUCTS, _products())
        assert store.update(Tables.PRODUCTS, {"id": "nope"}, {"name": "x"}) == []
        assert len(store.select(Tables.PRODUCTS)) == 4

    def test_delete(self, store):
        store.insert(Tables.PRODUCTS, _products())
        assert store.delete(Tables.PRODUCTS, {"vendorId": "v1"}) == 3
        assert [r["id"] for r in store.select(Tables.PRODUCTS)] == ["p3"]
        assert store.delete(Tables.PRODUCTS, {"id": "nope"}) == 0

    def test_delete_requires_filter(self, store):
        with pytest.raises(ValueError):
            store.delete(Tables.PRODUCTS, {})

    def test_count(self, store):
        store.insert(Tables.PRODUCTS, _products())
        assert store.count(Tables.PRODUCTS) == 4
        assert store.count(Tables.PRODUCTS, {"vendorId": "v2"}) == 1

    def test_column_values_prefix(self, store):
        store.insert(Tables.VENDORS, [
            {"id": "1", "slug": "myshop"},
            {"id": "2", "slug": "myshop-1"},
            {"id": "3", "slug": "other"},
        ])
        assert set(store.column_values(Tables.VENDORS, "slug")) == {"myshop", "myshop-1", "other"}
        assert set(store.column_values(Tables.VENDORS, "slug", prefix="myshop")) == {"myshop", "myshop-1"}

    def test_clear(self, store):
        store.insert(Tables.PRODUCTS, _products())
        store.clear(Tables.PRODUCTS)
        assert store.select(Tables.PRODUCTS) == []

    def test_unknown_table(self, store):
        with pytest.raises(KeyError):
            store.select("unknown")

    def test_returned_rows_are_copies(self, store):
        """반환값을 수정해도 저장값은 그대로"""
        store.insert(Tables.PRODUCTS, _products())
        row = store.get(Tables.PRODUCTS, {"id": "p1"})
        row["name"] = "변경"
        assert store.get(Tables.PRODUCTS, {"id": "p1"})["name"] == "셔츠"


class TestSlots:
    """슬롯 저장 형식 테스트"""

    def test_slot_keys(self):
        assert SLOT_KEYS[Tables.REQUESTS] == "flyer_requests"
        assert SLOT_KEYS[Tables.VENDORS] == "flyer_vendors"
        assert SLOT_KEYS[Tables.PRODUCTS] == "flyer_products"
        assert SLOT_KEYS[Tables.TICKETS] == "flyer_tickets"
        assert SLOT_KEYS[Tables.TICKET_MESSAGES] == "flyer_ticket_messages"

    def test_whole_list_under_one_key(self):
        storage = MemoryStorage()
        store = LocalStore(storage)
        store.insert(Tables.PRODUCTS, _products())
        data = json.loads(storage.get_item("flyer_products"))
        assert isinstance(data, list)
        assert len(data) == 4

    def test_update_miss_does_not_write(self):
        storage = MemoryStorage()
        LocalStore(storage).update(Tables.REQUESTS, {"id": "x"}, {"status": "approved"})
        assert storage.get_item("flyer_requests") is None

    def test_corrupted_slot_reads_empty(self):
        storage = MemoryStorage()
        storage.set_item("flyer_vendors", "{not json")
        assert LocalStore(storage).select(Tables.VENDORS) == []

    def test_file_persistence(self, temp_data_dir):
        """파일 저장 후 새 인스턴스에서 읽기"""
        LocalStore(JsonFileStorage(temp_data_dir)).insert(Tables.PRODUCTS, _products())

        path = Path(temp_data_dir) / "flyer_products.json"
        assert path.exists()
        assert "셔츠" in path.read_text(encoding="utf-8")

        reopened = LocalStore(JsonFileStorage(temp_data_dir))
        assert len(reopened.select(Tables.PRODUCTS)) == 4

    def test_file_remove_item(self, temp_data_dir):
        storage = JsonFileStorage(temp_data_dir)
        storage.set_item("flyer_tickets", "[]")
        storage.remove_item("flyer_tickets")
        storage.remove_item("flyer_tickets")
        assert storage.get_item("flyer_tickets") is None
