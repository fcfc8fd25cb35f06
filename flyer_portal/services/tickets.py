"""
tickets.py - 문의 처리

상태 흐름: open → in_progress (관리자 첫 답변) → closed (관리자 완료 처리)
완료된 문의에는 메시지를 추가할 수 없다.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from flyer_portal.core.exceptions import ValidationError, ErrorCodes
from flyer_portal.domain.models import (
    MessageAuthor,
    NotificationType,
    Ticket,
    TicketMessage,
    TicketStatus,
)
from flyer_portal.repositories.unified import Repositories


@dataclass
class TicketThread:
    """문의 + 메시지 목록"""
    ticket: Ticket
    messages: List[TicketMessage] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ticket": self.ticket.to_dict(),
            "messages": [m.to_dict() for m in self.messages]
        }


class TicketService:
    """문의 서비스"""

    def __init__(self, repos: Repositories, logger: logging.Logger = None):
        self.repos = repos
        self.logger = logger or logging.getLogger(__name__)

    def _require_text(self, value: str, field_name: str, error: str) -> str:
        text = (value or "").strip()
        if not text:
            raise ValidationError(error, field=field_name, value=value)
        return text

    def _open_ticket_or_raise(self, ticket_id: str) -> Optional[Ticket]:
        ticket = self.repos.tickets.get_by_id(ticket_id)
        if ticket is not None and ticket.status == TicketStatus.CLOSED:
            raise ValidationError(
                "완료된 문의에는 메시지를 추가할 수 없습니다.",
                field="ticketId",
                value=ticket_id,
                error_code=ErrorCodes.TICKET_CLOSED
            )
        return ticket

    def open_ticket(self, vendor_id: str, subject: str, message: str) -> Optional[TicketThread]:
        """매장 문의 등록 (거래처가 없으면 None)"""
        subject = self._require_text(subject, "subject", "제목을 입력해주세요.")
        message = self._require_text(message, "message", "내용을 입력해주세요.")

        vendor = self.repos.vendors.get_by_id(vendor_id)
        if vendor is None:
            return None

        ticket = self.repos.tickets.create(vendor_id, subject)
        first = self.repos.ticket_messages.create(ticket.id, MessageAuthor.VENDOR, message)

        self.repos.notifications.create(
            NotificationType.NEW_TICKET,
            title="새 문의",
            message=f"{vendor.shop_name}: {subject}",
            target_type="admin",
            target_id=ticket.id
        )
        self.logger.info(f"[문의] 등록: {vendor.shop_name} - {subject}")
        return TicketThread(ticket=ticket, messages=[first])

    def add_vendor_message(self, ticket_id: str, message: str) -> Optional[TicketMessage]:
        """매장 추가 메시지 (상태 변화 없음)"""
        message = self._require_text(message, "message", "내용을 입력해주세요.")
        ticket = self._open_ticket_or_raise(ticket_id)
        if ticket is None:
            return None
        return self.repos.ticket_messages.create(ticket_id, MessageAuthor.VENDOR, message)

    def reply_as_admin(self, ticket_id: str, message: str) -> Optional[TicketMessage]:
        """관리자 답변 (open이면 in_progress로)"""
        message = self._require_text(message, "message", "내용을 입력해주세요.")
        ticket = self._open_ticket_or_raise(ticket_id)
        if ticket is None:
            return None

        reply = self.repos.ticket_messages.create(ticket_id, MessageAuthor.ADMIN, message)
        if ticket.status == TicketStatus.OPEN:
            self.repos.tickets.update_status(ticket_id, TicketStatus.IN_PROGRESS)
        return reply

    def close(self, ticket_id: str) -> Optional[Ticket]:
        """문의 완료 처리"""
        ticket = self.repos.tickets.update_status(ticket_id, TicketStatus.CLOSED)
        if ticket is not None:
            self.logger.info(f"[문의] 완료: {ticket_id}")
        return ticket

    def get_thread(self, ticket_id: str) -> Optional[TicketThread]:
        ticket = self.repos.tickets.get_by_id(ticket_id)
        if ticket is None:
            return None
        return TicketThread(ticket=ticket, messages=self.repos.ticket_messages.get_by_ticket_id(ticket_id))
