"""
tickets.py - 문의 티켓 / 메시지 저장소

메시지는 추가 전용 (수정/삭제 없음), 작성 시각 오름차순으로 조회
티켓 상태는 open → in_progress → closed 방향으로만 바뀐다 (open → closed 허용)
"""

from typing import List, Optional

from flyer_portal.core.exceptions import ValidationError, ErrorCodes
from flyer_portal.domain.models import (
    Ticket,
    TicketMessage,
    TicketStatus,
    MessageAuthor,
)
from flyer_portal.repositories.base import BaseRepository
from flyer_portal.storage.record_store import Tables

TICKET_TRANSITIONS = {
    TicketStatus.OPEN: (TicketStatus.IN_PROGRESS, TicketStatus.CLOSED),
    TicketStatus.IN_PROGRESS: (TicketStatus.CLOSED,),
    TicketStatus.CLOSED: (),
}


def check_ticket_transition(current: TicketStatus, new: TicketStatus):
    """상태 전이 검증 (같은 상태는 허용)"""
    if new != current and new not in TICKET_TRANSITIONS[current]:
        raise ValidationError(
            f"문의 상태를 {current.value}에서 {new.value}(으)로 바꿀 수 없습니다.",
            field="status",
            value=new.value,
            error_code=ErrorCodes.INVALID_TRANSITION
        )


class TicketRepository(BaseRepository[Ticket]):
    """문의 티켓 저장소"""

    table = Tables.TICKETS
    model = Ticket
    updatable_fields = ("subject", "status")

    def get_by_vendor_id(self, vendor_id: str) -> List[Ticket]:
        return self._select({"vendorId": vendor_id})

    def get_by_status(self, status: TicketStatus) -> List[Ticket]:
        return self._select({"status": TicketStatus(status).value})

    def create(self, vendor_id: str, subject: str) -> Ticket:
        """티켓 생성 (open)"""
        ticket = Ticket(vendor_id=vendor_id, subject=subject, status=TicketStatus.OPEN)
        rows = self.store.insert(self.table, [ticket.to_dict()])
        return self._to_model(rows[0]) if rows else ticket

    def update(self, ticket_id: str, **changes) -> Optional[Ticket]:
        """티켓 수정 (상태 변경은 전이 규칙 검사)"""
        if "status" in changes:
            current = self.get_by_id(ticket_id)
            if current is None:
                return None
            check_ticket_transition(current.status, TicketStatus(changes["status"]))
        return super().update(ticket_id, **changes)

    def update_status(self, ticket_id: str, status: TicketStatus) -> Optional[Ticket]:
        return self.update(ticket_id, status=TicketStatus(status))

    def delete(self, ticket_id: str) -> bool:
        """티켓 삭제 (메시지도 함께 삭제)"""
        self.store.delete(Tables.TICKET_MESSAGES, {"ticketId": ticket_id})
        return super().delete(ticket_id)


class TicketMessageRepository(BaseRepository[TicketMessage]):
    """문의 메시지 저장소 (추가 전용)"""

    table = Tables.TICKET_MESSAGES
    model = TicketMessage
    default_desc = False

    def get_by_ticket_id(self, ticket_id: str) -> List[TicketMessage]:
        """티켓 메시지 (오래된 순)"""
        return self._select({"ticketId": ticket_id})

    def create(self, ticket_id: str, author: MessageAuthor, message: str) -> TicketMessage:
        msg = TicketMessage(ticket_id=ticket_id, author=MessageAuthor(author), message=message)
        rows = self.store.insert(self.table, [msg.to_dict()])
        return self._to_model(rows[0]) if rows else msg

    def update(self, record_id: str, **changes):
        raise NotImplementedError("문의 메시지는 수정할 수 없습니다.")

    def delete(self, record_id: str) -> bool:
        raise NotImplementedError("문의 메시지는 삭제할 수 없습니다.")
