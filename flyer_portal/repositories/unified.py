"""
unified.py - 저장소 통합 진입점

Supabase 설정(SUPABASE_URL + SUPABASE_KEY) 여부를 호출마다 확인해서
원격(SupabaseStore) 또는 로컬(LocalStore)로 보낸다.

사용법:
    repos = Repositories()
    vendor = repos.vendors.get_by_slug("myshop")

    # 테스트: 메모리 저장소 고정
    repos = Repositories.in_memory()
"""

import logging
from typing import Callable, Optional, Tuple

from flyer_portal.config import AppSettings, get_settings
from flyer_portal.core.logging import configure_logging
from flyer_portal.repositories.flyer_views import FlyerViewRepository
from flyer_portal.repositories.notifications import NotificationRepository
from flyer_portal.repositories.products import ProductRepository
from flyer_portal.repositories.requests import RequestRepository
from flyer_portal.repositories.tickets import TicketRepository, TicketMessageRepository
from flyer_portal.repositories.vendors import VendorRepository
from flyer_portal.storage.image_uploader import DataUrlUploader, ImageUploader, SupabaseImageUploader
from flyer_portal.storage.local_store import JsonFileStorage, LocalStore, MemoryStorage
from flyer_portal.storage.record_store import RecordStore
from flyer_portal.storage.supabase_store import SupabaseStore


class Repositories:
    """레코드 저장소 모음 (백엔드 선택 포함)"""

    def __init__(
        self,
        store: RecordStore = None,
        settings: AppSettings = None,
        local_store: RecordStore = None,
        remote_factory: Callable[[AppSettings], RecordStore] = None,
        logger: logging.Logger = None
    ):
        """
        Args:
            store: 고정 저장소 (지정 시 설정 확인 없이 항상 사용)
            settings: 설정 (미지정 시 호출마다 get_settings())
            local_store: 로컬 저장소 (미지정 시 settings.data_dir의 JSON 파일)
            remote_factory: 원격 저장소 생성 함수 (미지정 시 SupabaseStore)
        """
        self._settings = settings
        if logger is None:
            configure_logging(self.settings)
        self.logger = logger or logging.getLogger(__name__)
        self._fixed_store = store
        self._local_store = local_store
        self._remote_factory = remote_factory or self._default_remote
        self._remote_store: Optional[RecordStore] = None
        self._remote_key: Optional[Tuple[str, str]] = None
        self._last_backend: Optional[str] = None

        provider = self.current_store
        self.requests = RequestRepository(provider, self.logger)
        self.vendors = VendorRepository(provider, self.logger)
        self.products = ProductRepository(provider, self.logger)
        self.tickets = TicketRepository(provider, self.logger)
        self.ticket_messages = TicketMessageRepository(provider, self.logger)
        self.flyer_views = FlyerViewRepository(provider, self.logger)
        self.notifications = NotificationRepository(provider, self.logger)

    @classmethod
    def in_memory(cls, logger: logging.Logger = None) -> "Repositories":
        """메모리 로컬 저장소 고정 (테스트/데모용)"""
        return cls(store=LocalStore(MemoryStorage(), logger), logger=logger)

    # ========== 백엔드 선택 ==========

    @property
    def settings(self) -> AppSettings:
        return self._settings or get_settings()

    @staticmethod
    def _default_remote(settings: AppSettings) -> RecordStore:
        return SupabaseStore(settings.supabase_url, settings.supabase_key)

    def is_using_supabase(self) -> bool:
        """현재 호출이 원격 백엔드로 가는지"""
        if self._fixed_store is not None:
            return self._fixed_store.name == SupabaseStore.name
        return self.settings.is_supabase_configured()

    def local_store(self) -> RecordStore:
        if self._local_store is None:
            self._local_store = LocalStore(JsonFileStorage(self.settings.data_dir), self.logger)
        return self._local_store

    def remote_store(self) -> RecordStore:
        settings = self.settings
        key = (settings.supabase_url, settings.supabase_key)

        # URL/Key가 바뀌면 클라이언트 재생성
        if self._remote_store is None or self._remote_key != key:
            self._remote_store = self._remote_factory(settings)
            self._remote_key = key

        return self._remote_store

    def current_store(self) -> RecordStore:
        """호출 시점의 저장소 (캐시하지 않고 매번 설정 확인)"""
        if self._fixed_store is not None:
            return self._fixed_store

        store = self.remote_store() if self.settings.is_supabase_configured() else self.local_store()

        if store.name != self._last_backend:
            self.logger.info(f"[저장소] {store.name} 백엔드 사용")
            self._last_backend = store.name

        return store

    # ========== 이미지 ==========

    def image_uploader(self) -> ImageUploader:
        """현재 백엔드에 맞는 이미지 업로더"""
        store = self.current_store()
        if isinstance(store, SupabaseStore):
            return SupabaseImageUploader(store.client, logger=self.logger)
        return DataUrlUploader()
