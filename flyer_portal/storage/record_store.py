"""
record_store.py - 저장소 공통 인터페이스

LocalStore(로컬 JSON)와 SupabaseStore(원격)가 같은 연산을 제공한다.
레코드는 항상 내부 형식(camelCase dict)으로 주고받는다.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class Tables:
    """테이블(로컬 슬롯) 이름"""
    REQUESTS = "requests"
    VENDORS = "vendors"
    PRODUCTS = "products"
    TICKETS = "tickets"
    TICKET_MESSAGES = "ticket_messages"
    FLYER_VIEWS = "flyer_views"
    NOTIFICATIONS = "notifications"

    ALL = (
        REQUESTS,
        VENDORS,
        PRODUCTS,
        TICKETS,
        TICKET_MESSAGES,
        FLYER_VIEWS,
        NOTIFICATIONS,
    )


Filters = Optional[Dict[str, Any]]


class RecordStore(ABC):
    """레코드 저장소 (필터는 모두 동등 비교)"""

    name: str = "base"

    @abstractmethod
    def select(
        self,
        table: str,
        filters: Filters = None,
        order_by: Optional[str] = None,
        desc: bool = False,
        limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """조건에 맞는 레코드 목록"""

    def get(self, table: str, filters: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """단건 조회 (없으면 None)"""
        rows = self.select(table, filters, limit=1)
        return rows[0] if rows else None

    @abstractmethod
    def insert(self, table: str, records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """레코드 추가, 저장된 레코드 반환"""

    @abstractmethod
    def update(self, table: str, filters: Dict[str, Any], changes: Dict[str, Any]) -> List[Dict[str, Any]]:
        """조건에 맞는 레코드 수정, 수정된 레코드 반환 (없으면 빈 목록)"""

    @abstractmethod
    def delete(self, table: str, filters: Dict[str, Any]) -> int:
        """조건에 맞는 레코드 삭제, 삭제 건수 반환"""

    def count(self, table: str, filters: Filters = None) -> int:
        return len(self.select(table, filters))

    @abstractmethod
    def column_values(self, table: str, column: str, prefix: Optional[str] = None) -> List[Any]:
        """한 컬럼의 값 목록 (prefix 지정 시 해당 접두어로 시작하는 값만)"""
