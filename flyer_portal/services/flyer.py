"""
flyer.py - 공개 전단 조회

active 상태 거래처만 공개, 상품은 메인 노출 우선 → sortOrder 순
"""

import hashlib
import logging
from dataclasses import dataclass, field
from datetime import datetime, time, timedelta, timezone
from typing import Any, Dict, List, Optional

from flyer_portal.domain.flyer import sort_for_flyer
from flyer_portal.domain.models import Product, Vendor, VendorStatus, FlyerView, utc_now
from flyer_portal.repositories.unified import Repositories


@dataclass
class Flyer:
    """공개 전단"""
    vendor: Vendor
    products: List[Product] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        # 편집 토큰은 공개 응답에서 제외
        vendor = self.vendor.to_dict()
        vendor.pop("editToken", None)
        return {
            "vendor": vendor,
            "products": [p.to_dict() for p in self.products]
        }


def hash_ip(ip: Optional[str]) -> Optional[str]:
    """IP 해시 (원본 IP는 저장하지 않음)"""
    if not ip:
        return None
    return hashlib.sha256(ip.encode("utf-8")).hexdigest()


class FlyerService:
    """공개 전단 서비스"""

    def __init__(self, repos: Repositories, logger: logging.Logger = None):
        self.repos = repos
        self.logger = logger or logging.getLogger(__name__)

    def get_flyer(self, slug: str) -> Optional[Flyer]:
        """공개 전단 조회 (없거나 비공개면 None)"""
        vendor = self.repos.vendors.get_by_slug(slug)
        if vendor is None or vendor.status != VendorStatus.ACTIVE:
            return None
        products = self.repos.products.get_by_vendor_id(vendor.id)
        return Flyer(vendor=vendor, products=sort_for_flyer(products))

    def record_view(
        self,
        vendor_id: str,
        user_agent: str = None,
        referrer: str = None,
        ip: str = None
    ) -> FlyerView:
        return self.repos.flyer_views.record(
            vendor_id,
            user_agent=user_agent,
            referrer=referrer or None,
            ip_hash=hash_ip(ip)
        )

    def get_view_count(self, vendor_id: str) -> int:
        return self.repos.flyer_views.count_for_vendor(vendor_id)

    def get_view_stats(self, vendor_id: str, days: int = 7) -> Dict[str, int]:
        """
        최근 N일 일자별 조회수

        Returns:
            {YYYY-MM-DD: count} (조회가 없는 날은 0, 오래된 날부터)
        """
        start = utc_now().date() - timedelta(days=days - 1)
        since = datetime.combine(start, time.min, tzinfo=timezone.utc)

        counts = self.repos.flyer_views.counts_by_day(vendor_id, since=since)
        dates = [(start + timedelta(days=i)).isoformat() for i in range(days)]
        return {d: counts.get(d, 0) for d in dates}
