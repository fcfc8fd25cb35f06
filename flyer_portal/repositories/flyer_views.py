"""
flyer_views.py - 전단 조회 기록 저장소
"""

from collections import Counter
from datetime import datetime
from typing import Dict, List, Optional

from flyer_portal.domain.models import FlyerView
from flyer_portal.repositories.base import BaseRepository
from flyer_portal.storage.record_store import Tables


class FlyerViewRepository(BaseRepository[FlyerView]):
    """전단 조회 기록 (추가 전용)"""

    table = Tables.FLYER_VIEWS
    model = FlyerView
    default_order = "viewedAt"

    def record(
        self,
        vendor_id: str,
        user_agent: str = None,
        referrer: str = None,
        ip_hash: str = None
    ) -> FlyerView:
        view = FlyerView(vendor_id=vendor_id, user_agent=user_agent, referrer=referrer, ip_hash=ip_hash)
        rows = self.store.insert(self.table, [view.to_dict()])
        return self._to_model(rows[0]) if rows else view

    def count_for_vendor(self, vendor_id: str) -> int:
        return self.store.count(self.table, {"vendorId": vendor_id})

    def get_by_vendor_id(self, vendor_id: str, since: Optional[datetime] = None) -> List[FlyerView]:
        """거래처 조회 기록 (since 이후만, 최신순)"""
        views = self._select({"vendorId": vendor_id})
        if since is not None:
            views = [v for v in views if v.viewed_at >= since]
        return views

    def counts_by_day(self, vendor_id: str, since: Optional[datetime] = None) -> Dict[str, int]:
        """일자별 조회수 {YYYY-MM-DD: count}"""
        counter = Counter(v.viewed_at.date().isoformat() for v in self.get_by_vendor_id(vendor_id, since))
        return dict(sorted(counter.items()))
