"""
requests.py - 입점 신청 저장소
"""

from typing import List, Optional

from flyer_portal.domain.models import Request, RequestStatus
from flyer_portal.repositories.base import BaseRepository
from flyer_portal.storage.record_store import Tables


class RequestRepository(BaseRepository[Request]):
    """입점 신청 저장소"""

    table = Tables.REQUESTS
    model = Request
    # 신청 내용은 등록 후 바뀌지 않고 상태만 전이
    updatable_fields = ("status",)

    def get_by_status(self, status: RequestStatus) -> List[Request]:
        """상태별 신청 목록 (최신순)"""
        return self._select({"status": RequestStatus(status).value})

    def get_pending(self) -> List[Request]:
        """검토 대기 목록"""
        return self.get_by_status(RequestStatus.PENDING)

    def create(
        self,
        shop_name: str,
        manager_name: str,
        phone: str = None,
        kakao_url: str = None,
        notes: str = None
    ) -> Request:
        """신청 등록 (항상 pending으로 시작)"""
        request = Request(
            shop_name=shop_name,
            manager_name=manager_name,
            phone=phone,
            kakao_url=kakao_url,
            notes=notes,
            status=RequestStatus.PENDING
        )
        rows = self.store.insert(self.table, [request.to_dict()])
        self.logger.info(f"[신청] 등록: {shop_name} ({request.id})")
        return self._to_model(rows[0]) if rows else request

    def update_status(self, request_id: str, status: RequestStatus) -> Optional[Request]:
        """상태 변경 (없으면 None)"""
        return self.update(request_id, status=RequestStatus(status))
