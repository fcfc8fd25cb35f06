"""
local_store.py - 로컬 키-값 저장소 (v1.0)

Supabase 미설정 시 사용하는 저장소
- 테이블마다 슬롯 하나 (JSON 배열)
- 모든 쓰기는 전체 목록 로드 → 메모리에서 수정 → 전체 목록 저장
- 트랜잭션/인덱스 없음 (마지막 쓰기가 이김)
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional

from flyer_portal.storage.record_store import RecordStore, Tables, Filters


# 슬롯 키
SLOT_KEYS: Dict[str, str] = {
    Tables.REQUESTS: "flyer_requests",
    Tables.VENDORS: "flyer_vendors",
    Tables.PRODUCTS: "flyer_products",
    Tables.TICKETS: "flyer_tickets",
    Tables.TICKET_MESSAGES: "flyer_ticket_messages",
    Tables.FLYER_VIEWS: "flyer_views",
    Tables.NOTIFICATIONS: "flyer_notifications",
}


class KeyValueStorage(ABC):
    """문자열 키-값 저장 매체"""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set_item(self, key: str, value: str):
        pass

    @abstractmethod
    def remove_item(self, key: str):
        pass


class MemoryStorage(KeyValueStorage):
    """메모리 저장 매체 (테스트용)"""

    def __init__(self):
        self._items: Dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str):
        self._items[key] = value

    def remove_item(self, key: str):
        self._items.pop(key, None)


class JsonFileStorage(KeyValueStorage):
    """JSON 파일 저장 매체 (키마다 파일 하나, 쓰기 즉시 반영)"""

    def __init__(self, data_dir: str):
        """
        Args:
            data_dir: 데이터 저장 디렉토리
        """
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()

    def set_item(self, key: str, value: str):
        with open(self._path(key), 'w', encoding='utf-8') as f:
            f.write(value)

    def remove_item(self, key: str):
        path = self._path(key)
        if path.exists():
            path.unlink()


def _sort_key(field: str):
    # None은 항상 뒤로
    def key(record: Dict[str, Any]):
        value = record.get(field)
        return (value is None, value if value is not None else 0)
    return key


class LocalStore(RecordStore):
    """로컬 키-값 저장소 기반 RecordStore"""

    name = "local"

    def __init__(self, storage: KeyValueStorage, logger: logging.Logger = None):
        self.storage = storage
        self.logger = logger or logging.getLogger(__name__)

    # ========== 슬롯 입출력 ==========

    def _slot(self, table: str) -> str:
        if table not in SLOT_KEYS:
            raise KeyError(f"알 수 없는 테이블입니다: {table}")
        return SLOT_KEYS[table]

    def _load(self, table: str) -> List[Dict[str, Any]]:
        """슬롯 로드 (없거나 깨졌으면 빈 목록)"""
        raw = self.storage.get_item(self._slot(table))
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            self.logger.warning(f"[LocalStore] {table} 슬롯을 읽을 수 없어 빈 목록으로 처리합니다.")
            return []
        return data if isinstance(data, list) else []

    def _save(self, table: str, items: List[Dict[str, Any]]):
        self.storage.set_item(self._slot(table), json.dumps(items, ensure_ascii=False))

    @staticmethod
    def _matches(record: Dict[str, Any], filters: Filters) -> bool:
        if not filters:
            return True
        return all(record.get(k) == v for k, v in filters.items())

    # ========== RecordStore ==========

    def select(
        self,
        table: str,
        filters: Filters = None,
        order_by: Optional[str] = None,
        desc: bool = False,
        limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        rows = [r for r in self._load(table) if self._matches(r, filters)]

        if order_by:
            rows = sorted(rows, key=_sort_key(order_by), reverse=desc)

        if limit is not None:
            rows = rows[:limit]

        return rows

    def insert(self, table: str, records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        if not records:
            return []
        items = self._load(table)
        new_items = [dict(r) for r in records]
        items.extend(new_items)
        self._save(table, items)
        return [dict(r) for r in new_items]

    def update(self, table: str, filters: Dict[str, Any], changes: Dict[str, Any]) -> List[Dict[str, Any]]:
        items = self._load(table)
        updated = []
        for i, record in enumerate(items):
            if self._matches(record, filters):
                items[i] = {**record, **changes}
                updated.append(dict(items[i]))

        if updated:
            self._save(table, items)
        return updated

    def delete(self, table: str, filters: Dict[str, Any]) -> int:
        if not filters:
            raise ValueError("delete에는 필터가 필요합니다. 전체 삭제는 clear()를 사용하세요.")
        items = self._load(table)
        remaining = [r for r in items if not self._matches(r, filters)]
        deleted = len(items) - len(remaining)
        if deleted:
            self._save(table, remaining)
        return deleted

    def column_values(self, table: str, column: str, prefix: Optional[str] = None) -> List[Any]:
        values = [r.get(column) for r in self._load(table)]
        if prefix is not None:
            values = [v for v in values if isinstance(v, str) and v.startswith(prefix)]
        return values

    # ========== 데이터 초기화 ==========

    def clear(self, table: str):
        """슬롯 삭제 (주의: 테스트/데모용)"""
        self.storage.remove_item(self._slot(table))
