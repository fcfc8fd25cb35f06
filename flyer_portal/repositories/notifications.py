"""
notifications.py - 알림 저장소
"""

from typing import Any, Dict, List, Optional

from flyer_portal.domain.models import Notification, NotificationType
from flyer_portal.repositories.base import BaseRepository, serialize_changes
from flyer_portal.storage.record_store import Tables


def _target_filters(target_type: str = None, target_id: str = None) -> Dict[str, Any]:
    filters = {}
    if target_type:
        filters["targetType"] = target_type
    if target_id:
        filters["targetId"] = target_id
    return filters


class NotificationRepository(BaseRepository[Notification]):
    """알림 저장소"""

    table = Tables.NOTIFICATIONS
    model = Notification
    updatable_fields = ("isRead",)

    def get_all(self, target_type: str = None, target_id: str = None) -> List[Notification]:
        """알림 목록 (최신순)"""
        return self._select(_target_filters(target_type, target_id) or None)

    def get_unread_count(self, target_type: str = None, target_id: str = None) -> int:
        filters = {**_target_filters(target_type, target_id), "isRead": False}
        return self.store.count(self.table, filters)

    def create(
        self,
        type: NotificationType,
        title: str,
        message: str = None,
        target_type: str = None,
        target_id: str = None
    ) -> Notification:
        notification = Notification(
            type=NotificationType(type),
            title=title,
            message=message,
            target_type=target_type,
            target_id=target_id
        )
        rows = self.store.insert(self.table, [notification.to_dict()])
        return self._to_model(rows[0]) if rows else notification

    def mark_as_read(self, notification_id: str) -> bool:
        rows = self.store.update(self.table, {"id": notification_id}, {"isRead": True})
        return bool(rows)

    def mark_all_as_read(self, target_type: str = None, target_id: str = None) -> int:
        """읽지 않은 알림 모두 읽음 처리, 처리 건수 반환"""
        filters = {**_target_filters(target_type, target_id), "isRead": False}
        return len(self.store.update(self.table, filters, {"isRead": True}))

    def update(self, record_id: str, **changes) -> Optional[Notification]:
        # 알림 테이블에는 updatedAt이 없다
        data = serialize_changes(changes)
        self._check_updatable(data)
        rows = self.store.update(self.table, {"id": record_id}, data)
        return self._to_model(rows[0]) if rows else None
