"""
supabase_store.py - Supabase 기반 저장소 (v1.0)

LocalStore와 동일한 인터페이스 제공
환경변수 SUPABASE_URL, SUPABASE_KEY 필요

사용법:
    store = SupabaseStore()
    rows = store.select("vendors", {"status": "active"}, order_by="createdAt", desc=True)
"""

import logging
import os
from typing import Any, Dict, List, Optional

from supabase import create_client, Client

from flyer_portal.core.exceptions import ConfigurationError, SupabaseError
from flyer_portal.storage.field_mapping import column_name, from_row, to_row
from flyer_portal.storage.record_store import RecordStore, Filters


class SupabaseStore(RecordStore):
    """Supabase(PostgREST) 기반 RecordStore"""

    name = "supabase"

    def __init__(
        self,
        url: str = None,
        key: str = None,
        client: Client = None,
        logger: logging.Logger = None
    ):
        """
        Args:
            url: Supabase 프로젝트 URL
            key: Supabase anon/service key
            client: 이미 만들어진 클라이언트 (주입 시 url/key 무시)
        """
        self.logger = logger or logging.getLogger(__name__)

        if client is None:
            self.url = url or os.getenv("SUPABASE_URL")
            self.key = key or os.getenv("SUPABASE_KEY")

            if not self.url or not self.key:
                raise ConfigurationError(
                    "SUPABASE_URL과 SUPABASE_KEY 환경변수가 필요합니다.",
                    config_key="SUPABASE_URL" if not self.url else "SUPABASE_KEY"
                )

            client = create_client(self.url, self.key)

        self.client = client

    # ========== Private: 쿼리 헬퍼 ==========

    def _execute(self, table: str, operation: str, query):
        """쿼리 실행 (실패 시 SupabaseError)"""
        try:
            return query.execute()
        except Exception as e:
            self.logger.error(f"[Supabase] {table}.{operation} 실패: {e}")
            raise SupabaseError(
                f"Supabase {operation} 실패: {e}",
                table=table,
                operation=operation,
                cause=e
            ) from e

    def _apply_filters(self, table: str, query, filters: Filters):
        for field, value in (filters or {}).items():
            query = query.eq(column_name(table, field), value)
        return query

    # ========== RecordStore ==========

    def select(
        self,
        table: str,
        filters: Filters = None,
        order_by: Optional[str] = None,
        desc: bool = False,
        limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        query = self._apply_filters(table, self.client.table(table).select("*"), filters)

        if order_by:
            query = query.order(column_name(table, order_by), desc=desc)
        if limit is not None:
            query = query.limit(limit)

        response = self._execute(table, "select", query)
        return [from_row(table, row) for row in response.data or []]

    def insert(self, table: str, records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        if not records:
            return []
        rows = [to_row(table, r) for r in records]
        response = self._execute(table, "insert", self.client.table(table).insert(rows))
        if response.data:
            return [from_row(table, row) for row in response.data]
        return [dict(r) for r in records]

    def update(self, table: str, filters: Dict[str, Any], changes: Dict[str, Any]) -> List[Dict[str, Any]]:
        query = self._apply_filters(table, self.client.table(table).update(to_row(table, changes)), filters)
        response = self._execute(table, "update", query)
        return [from_row(table, row) for row in response.data or []]

    def delete(self, table: str, filters: Dict[str, Any]) -> int:
        if not filters:
            raise ValueError("delete에는 필터가 필요합니다.")
        query = self._apply_filters(table, self.client.table(table).delete(), filters)
        response = self._execute(table, "delete", query)
        return len(response.data or [])

    def count(self, table: str, filters: Filters = None) -> int:
        query = self._apply_filters(table, self.client.table(table).select("id", count="exact"), filters)
        response = self._execute(table, "count", query)
        return response.count or 0

    def column_values(self, table: str, column: str, prefix: Optional[str] = None) -> List[Any]:
        col = column_name(table, column)
        query = self.client.table(table).select(col)
        if prefix is not None:
            query = query.like(col, f"{prefix}%")
        response = self._execute(table, "select", query)
        return [row.get(col) for row in response.data or []]
