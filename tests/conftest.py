"""
공통 Fixture

- 메모리/임시 디렉토리 로컬 저장소
- supabase-py 쿼리 빌더를 흉내 내는 메모리 클라이언트
"""

import shutil
import tempfile
from types import SimpleNamespace
from typing import Any, Dict, List

import pytest

from flyer_portal.config import AppSettings
from flyer_portal.repositories.unified import Repositories
from flyer_portal.storage.local_store import JsonFileStorage, LocalStore, MemoryStorage
from flyer_portal.storage.supabase_store import SupabaseStore


# ============================================================
# 메모리 Supabase 클라이언트
# ============================================================

class FakeQuery:
    """client.table(...) 쿼리 빌더"""

    def __init__(self, db: "FakeSupabaseClient", table: str):
        self.db = db
        self.table = table
        self.operation = "select"
        self.columns = "*"
        self.count_mode = None
        self.payload = None
        self.filters: List[tuple] = []
        self.order_by = None
        self.order_desc = False
        self.limit_count = None

    # --- 연산 ---

    def select(self, columns: str = "*", count: str = None):
        self.operation = "select"
        self.columns = columns
        self.count_mode = count
        return self

    def insert(self, rows):
        self.operation = "insert"
        self.payload = rows if isinstance(rows, list) else [rows]
        return self

    def update(self, changes: Dict[str, Any]):
        self.operation = "update"
        self.payload = changes
        return self

    def delete(self):
        self.operation = "delete"
        return self

    # --- 조건 ---

    def eq(self, column: str, value: Any):
        self.filters.append(("eq", column, value))
        return self

    def like(self, column: str, pattern: str):
        self.filters.append(("like", column, pattern))
        return self

    def order(self, column: str, desc: bool = False):
        self.order_by = column
        self.order_desc = desc
        return self

    def limit(self, count: int):
        self.limit_count = count
        return self

    # --- 실행 ---

    def _match(self, row: Dict[str, Any]) -> bool:
        for op, column, value in self.filters:
            if op == "eq" and row.get(column) != value:
                return False
            if op == "like":
                prefix = value.rstrip("%")
                if not str(row.get(column) or "").startswith(prefix):
                    return False
        return True

    def execute(self):
        self.db.calls.append((self.table, self.operation))
        if self.db.fail_on.get(self.table) == self.operation:
            raise RuntimeError(f"{self.table} {self.operation} 실패 (테스트)")

        rows = self.db.tables.setdefault(self.table, [])

        if self.operation == "insert":
            inserted = [dict(r) for r in self.payload]
            rows.extend(inserted)
            return SimpleNamespace(data=[dict(r) for r in inserted], count=None)

        matched = [r for r in rows if self._match(r)]

        if self.operation == "update":
            for r in matched:
                r.update(self.payload)
            return SimpleNamespace(data=[dict(r) for r in matched], count=None)

        if self.operation == "delete":
            self.db.tables[self.table] = [r for r in rows if not self._match(r)]
            return SimpleNamespace(data=[dict(r) for r in matched], count=None)

        if self.order_by:
            matched = sorted(
                matched,
                key=lambda r: (r.get(self.order_by) is None, r.get(self.order_by) if r.get(self.order_by) is not None else 0),
                reverse=self.order_desc
            )
        if self.limit_count is not None:
            matched = matched[:self.limit_count]

        if self.columns != "*":
            cols = [c.strip() for c in self.columns.split(",")]
            matched = [{c: r.get(c) for c in cols} for r in matched]

        count = len(matched) if self.count_mode == "exact" else None
        return SimpleNamespace(data=[dict(r) for r in matched], count=count)


class FakeBucket:
    def __init__(self, storage: "FakeStorage", name: str):
        self.storage = storage
        self.name = name

    def upload(self, path: str, data: bytes, file_options: Dict[str, str] = None):
        if self.storage.fail_upload:
            raise RuntimeError("업로드 실패 (테스트)")
        self.storage.objects[f"{self.name}/{path}"] = (data, file_options or {})
        return SimpleNamespace(path=path)

    def get_public_url(self, path: str) -> str:
        return f"https://fake.supabase.co/storage/v1/object/public/{self.name}/{path}"

    def remove(self, paths: List[str]):
        for path in paths:
            self.storage.objects.pop(f"{self.name}/{path}", None)
        return []


class FakeStorage:
    def __init__(self):
        self.objects: Dict[str, Any] = {}
        self.fail_upload = False

    def from_(self, bucket: str) -> FakeBucket:
        return FakeBucket(self, bucket)


class FakeSupabaseClient:
    """메모리 Supabase 클라이언트 (테이블별 snake_case row 목록)"""

    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.calls: List[tuple] = []
        self.fail_on: Dict[str, str] = {}   # {table: operation} 실패 주입
        self.storage = FakeStorage()

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)


# ============================================================
# Fixtures
# ============================================================

@pytest.fixture
def temp_data_dir():
    """임시 데이터 디렉토리"""
    temp_dir = tempfile.mkdtemp()
    yield temp_dir
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def memory_store():
    return LocalStore(MemoryStorage())


@pytest.fixture
def file_store(temp_data_dir):
    return LocalStore(JsonFileStorage(temp_data_dir))


@pytest.fixture
def fake_client():
    return FakeSupabaseClient()


@pytest.fixture
def supabase_store(fake_client):
    return SupabaseStore(client=fake_client)


@pytest.fixture
def test_settings(temp_data_dir):
    """Supabase 미설정 테스트 설정"""
    return AppSettings(data_dir=temp_data_dir, public_base_url="https://flyer.test")


@pytest.fixture
def repos(memory_store, test_settings):
    """메모리 로컬 저장소 기반 저장소 모음"""
    return Repositories(store=memory_store, settings=test_settings)


@pytest.fixture(params=["local", "supabase"])
def any_repos(request, test_settings):
    """로컬/원격 두 백엔드로 각각 실행"""
    if request.param == "local":
        store = LocalStore(MemoryStorage())
    else:
        store = SupabaseStore(client=FakeSupabaseClient())
    return Repositories(store=store, settings=test_settings)
