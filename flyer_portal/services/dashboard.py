"""
dashboard.py - 관리자 대시보드 집계
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from flyer_portal.domain.models import Request, RequestStatus, TicketStatus, Vendor, VendorStatus
from flyer_portal.repositories.unified import Repositories
from flyer_portal.storage.record_store import Tables

RECENT_LIMIT = 5


@dataclass
class Badges:
    """메뉴 배지 숫자"""
    pending_requests: int = 0
    open_tickets: int = 0
    unread_notifications: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pendingRequests": self.pending_requests,
            "openTickets": self.open_tickets,
            "unreadNotifications": self.unread_notifications
        }


@dataclass
class DashboardStats:
    """대시보드 요약"""
    pending_requests: int = 0
    total_vendors: int = 0
    active_vendors: int = 0
    open_tickets: int = 0
    recent_requests: List[Request] = field(default_factory=list)      # 최근 대기 신청
    incomplete_vendors: List[Vendor] = field(default_factory=list)    # 상품 미등록 거래처

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pendingRequests": self.pending_requests,
            "totalVendors": self.total_vendors,
            "activeVendors": self.active_vendors,
            "openTickets": self.open_tickets,
            "recentRequests": [r.to_dict() for r in self.recent_requests],
            "incompleteVendors": [v.to_dict() for v in self.incomplete_vendors]
        }


class DashboardService:
    """대시보드 서비스"""

    def __init__(self, repos: Repositories, logger: logging.Logger = None):
        self.repos = repos
        self.logger = logger or logging.getLogger(__name__)

    def get_badges(self) -> Badges:
        store = self.repos.current_store()
        return Badges(
            pending_requests=store.count(Tables.REQUESTS, {"status": RequestStatus.PENDING.value}),
            open_tickets=store.count(Tables.TICKETS, {"status": TicketStatus.OPEN.value}),
            unread_notifications=self.repos.notifications.get_unread_count(target_type="admin")
        )

    def get_stats(self) -> DashboardStats:
        pending = self.repos.requests.get_pending()
        vendors = self.repos.vendors.get_all()
        active = [v for v in vendors if v.status == VendorStatus.ACTIVE]

        incomplete = []
        for vendor in active:
            if len(incomplete) >= RECENT_LIMIT:
                break
            if self.repos.products.count_for_vendor(vendor.id) == 0:
                incomplete.append(vendor)

        return DashboardStats(
            pending_requests=len(pending),
            total_vendors=len(vendors),
            active_vendors=len(active),
            open_tickets=len(self.repos.tickets.get_by_status(TicketStatus.OPEN)),
            recent_requests=pending[:RECENT_LIMIT],
            incomplete_vendors=incomplete
        )
