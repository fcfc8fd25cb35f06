"""
base.py - 레코드 저장소 공통 기능

저장소(RecordStore)는 고정 인스턴스 또는 호출 시점에 저장소를 돌려주는
provider(콜러블)로 주입한다. provider를 쓰면 매 호출마다 백엔드가 결정된다.
"""

import logging
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar, Union

from flyer_portal.core.exceptions import ValidationError
from flyer_portal.domain.models import utc_now
from flyer_portal.storage.field_mapping import snake_to_camel
from flyer_portal.storage.record_store import RecordStore

T = TypeVar("T")

StoreProvider = Callable[[], RecordStore]


def serialize_value(value: Any) -> Any:
    """Enum/datetime → 저장 형식"""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def serialize_changes(changes: Dict[str, Any]) -> Dict[str, Any]:
    """변경값 키를 camelCase로, 값은 저장 형식으로"""
    return {snake_to_camel(k): serialize_value(v) for k, v in changes.items()}


class BaseRepository(Generic[T]):
    """단일 테이블 저장소"""

    table: str = ""
    model: Any = None
    updatable_fields: tuple = ()    # update()로 바꿀 수 있는 필드 (camelCase)
    default_order: Optional[str] = "createdAt"
    default_desc: bool = True

    def __init__(self, store: Union[RecordStore, StoreProvider], logger: logging.Logger = None):
        if isinstance(store, RecordStore):
            self._provider: StoreProvider = lambda: store
        else:
            self._provider = store
        self.logger = logger or logging.getLogger(__name__)

    @property
    def store(self) -> RecordStore:
        """현재 저장소 (호출마다 provider에 질의)"""
        return self._provider()

    def _to_model(self, row: Optional[Dict[str, Any]]) -> Optional[T]:
        return self.model.from_dict(row) if row else None

    def _to_models(self, rows: List[Dict[str, Any]]) -> List[T]:
        return [self.model.from_dict(r) for r in rows]

    def _select(self, filters: Dict[str, Any] = None, order_by: str = None, desc: bool = None) -> List[T]:
        order_by = order_by or self.default_order
        desc = self.default_desc if desc is None else desc
        return self._to_models(self.store.select(self.table, filters, order_by=order_by, desc=desc))

    def _check_updatable(self, changes: Dict[str, Any]):
        for key in changes:
            if key not in self.updatable_fields:
                raise ValidationError(
                    f"{self.table}.{key} 필드는 수정할 수 없습니다.",
                    field=key,
                    value=changes[key]
                )

    # ========== 공통 조회/수정 ==========

    def get_all(self) -> List[T]:
        """전체 목록 (기본: 최신순)"""
        return self._select()

    def get_by_id(self, record_id: str) -> Optional[T]:
        """ID로 조회 (없으면 None)"""
        return self._to_model(self.store.get(self.table, {"id": record_id}))

    def update(self, record_id: str, **changes) -> Optional[T]:
        """
        필드 수정 (snake_case 또는 camelCase 키)

        Returns:
            수정된 레코드 (id가 없으면 None)
        """
        data = serialize_changes(changes)
        self._check_updatable(data)
        data["updatedAt"] = utc_now().isoformat()

        rows = self.store.update(self.table, {"id": record_id}, data)
        if not rows:
            self.logger.debug(f"[{self.table}] 수정 대상 없음: {record_id}")
            return None
        return self._to_model(rows[0])

    def delete(self, record_id: str) -> bool:
        """삭제 (없으면 False)"""
        return self.store.delete(self.table, {"id": record_id}) > 0
