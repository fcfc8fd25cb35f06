"""
approval.py - 입점 신청 승인/반려

승인 흐름:
    1. 신청 상태 pending 확인 (아니면 None)
    2. 신청 → approved
    3. 거래처 생성 (slug, 편집 토큰 발급)
    4. 관리자 알림 기록

2~3은 UnitOfWork로 묶어서 3이 실패하면 신청을 pending으로 되돌린다.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from flyer_portal.config import AppSettings, get_settings
from flyer_portal.core.logging import PerformanceLogger
from flyer_portal.domain.models import NotificationType, RequestStatus, Vendor
from flyer_portal.repositories.unified import Repositories
from flyer_portal.services.unit_of_work import UnitOfWork


@dataclass
class ApprovalResult:
    """승인 결과"""
    vendor: Vendor
    edit_url: str       # 매장 편집 링크 (토큰 포함, 매장에만 전달)
    public_url: str     # 공개 전단 링크

    def to_dict(self) -> Dict[str, Any]:
        return {
            "vendor": self.vendor.to_dict(),
            "editUrl": self.edit_url,
            "publicUrl": self.public_url
        }


class ApprovalService:
    """입점 신청 승인 서비스"""

    def __init__(
        self,
        repos: Repositories,
        settings: AppSettings = None,
        logger: logging.Logger = None
    ):
        self.repos = repos
        self._settings = settings
        self.logger = logger or logging.getLogger(__name__)
        self.perf = PerformanceLogger(self.logger)

    @property
    def settings(self) -> AppSettings:
        return self._settings or get_settings()

    def approve_request(self, request_id: str) -> Optional[ApprovalResult]:
        """
        신청 승인 → 거래처 생성

        Returns:
            ApprovalResult (신청이 없거나 pending이 아니면 None)

        Raises:
            거래처 생성 실패 시 원래 예외 (신청은 pending으로 복구됨)
            UnitOfWorkError: 복구까지 실패한 경우
        """
        request = self.repos.requests.get_by_id(request_id)
        if request is None or request.status != RequestStatus.PENDING:
            self.logger.info(f"[승인] 대상 아님: {request_id}")
            return None

        requests = self.repos.requests

        with self.perf.track("신청 승인", request_id=request_id):
            with UnitOfWork("신청 승인", self.logger) as uow:
                updated = uow.run(
                    "신청 상태 변경",
                    lambda: requests.update_status(request_id, RequestStatus.APPROVED),
                    compensate=lambda: requests.update_status(request_id, RequestStatus.PENDING)
                )
                if updated is None:
                    return None

                vendor = uow.run(
                    "거래처 생성",
                    lambda: self.repos.vendors.create(
                        shop_name=request.shop_name,
                        manager_name=request.manager_name,
                        kakao_url=request.kakao_url or ""
                    )
                )

        self._notify_approved(vendor)

        return ApprovalResult(
            vendor=vendor,
            edit_url=self.settings.edit_url(vendor.edit_token),
            public_url=self.settings.public_url(vendor.slug)
        )

    def reject_request(self, request_id: str) -> bool:
        """신청 반려 (pending이 아니면 False)"""
        request = self.repos.requests.get_by_id(request_id)
        if request is None or request.status != RequestStatus.PENDING:
            return False

        updated = self.repos.requests.update_status(request_id, RequestStatus.REJECTED)
        if updated is not None:
            self.logger.info(f"[반려] {request.shop_name} ({request_id})")
        return updated is not None

    def _notify_approved(self, vendor: Vendor):
        # 알림 실패는 승인 결과에 영향 없음
        try:
            self.repos.notifications.create(
                NotificationType.REQUEST_APPROVED,
                title="입점 승인",
                message=f"{vendor.shop_name} 매장이 승인되었습니다.",
                target_type="admin",
                target_id=vendor.id
            )
        except Exception as e:
            self.logger.warning(f"[승인] 알림 기록 실패: {vendor.id} - {e}")
