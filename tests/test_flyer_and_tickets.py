"""
flyer.py / tickets.py 테스트

1. 공개 전단 (active만, 메인 노출 우선)
2. 조회 기록
3. 문의 상태 흐름
"""

import pytest

from flyer_portal.core.exceptions import ErrorCodes, ValidationError
from flyer_portal.domain.models import (
    MessageAuthor,
    ProductDraft,
    TicketStatus,
    VendorStatus,
    utc_now,
)
from flyer_portal.services.flyer import FlyerService, hash_ip
from flyer_portal.services.tickets import TicketService


@pytest.fixture
def vendor(any_repos):
    vendor = any_repos.vendors.create("MyShop", "Kim", "https://open.kakao.com/x")
    any_repos.products.bulk_save_for_vendor(vendor.id, [
        ProductDraft(name="일반1", original_price=10000, discount_rate=10),
        ProductDraft(name="메인", original_price=20000, discount_rate=50, is_featured=True),
        ProductDraft(name="일반2", original_price=30000, discount_rate=0),
    ])
    return vendor


class TestFlyerService:
    """공개 전단 테스트"""

    def test_get_flyer(self, any_repos, vendor):
        flyer = FlyerService(any_repos).get_flyer("myshop")
        assert flyer.vendor.id == vendor.id
        assert [p.name for p in flyer.products] == ["메인", "일반1", "일반2"]

    def test_hidden_vendor(self, any_repos, vendor):
        any_repos.vendors.set_status(vendor.id, VendorStatus.HIDDEN)
        assert FlyerService(any_repos).get_flyer("myshop") is None

    def test_unknown_slug(self, any_repos, vendor):
        assert FlyerService(any_repos).get_flyer("nope") is None

    def test_public_dict_hides_token(self, any_repos, vendor):
        data = FlyerService(any_repos).get_flyer("myshop").to_dict()
        assert "editToken" not in data["vendor"]
        assert len(data["products"]) == 3

    def test_record_view(self, any_repos, vendor):
        service = FlyerService(any_repos)
        view = service.record_view(vendor.id, user_agent="Mozilla", referrer="", ip="1.2.3.4")

        assert view.ip_hash == hash_ip("1.2.3.4")
        assert len(view.ip_hash) == 64
        assert view.referrer is None

        service.record_view(vendor.id)
        assert service.get_view_count(vendor.id) == 2

    def test_view_stats(self, any_repos, vendor):
        service = FlyerService(any_repos)
        service.record_view(vendor.id)
        service.record_view(vendor.id)

        stats = service.get_view_stats(vendor.id, days=7)
        assert len(stats) == 7
        assert list(stats)[-1] == utc_now().date().isoformat()
        assert stats[utc_now().date().isoformat()] == 2
        assert sum(stats.values()) == 2

    def test_hash_ip_empty(self):
        assert hash_ip(None) is None
        assert hash_ip("") is None


class TestTicketService:
    """문의 상태 흐름 테스트"""

    def test_open_ticket(self, any_repos, vendor):
        thread = TicketService(any_repos).open_ticket(vendor.id, "가격 문의", "할인율 변경 가능한가요?")

        assert thread.ticket.status == TicketStatus.OPEN
        assert [m.author for m in thread.messages] == [MessageAuthor.VENDOR]
        assert any_repos.notifications.get_unread_count(target_type="admin") == 1

    def test_open_ticket_unknown_vendor(self, any_repos):
        assert TicketService(any_repos).open_ticket("nope", "제목", "내용") is None

    def test_open_ticket_blank(self, any_repos, vendor):
        with pytest.raises(ValidationError):
            TicketService(any_repos).open_ticket(vendor.id, "  ", "내용")

    def test_status_flow(self, any_repos, vendor):
        service = TicketService(any_repos)
        ticket_id = service.open_ticket(vendor.id, "문의", "질문").ticket.id

        service.add_vendor_message(ticket_id, "추가 질문")
        assert any_repos.tickets.get_by_id(ticket_id).status == TicketStatus.OPEN

        service.reply_as_admin(ticket_id, "답변")
        assert any_repos.tickets.get_by_id(ticket_id).status == TicketStatus.IN_PROGRESS

        service.reply_as_admin(ticket_id, "추가 답변")
        assert any_repos.tickets.get_by_id(ticket_id).status == TicketStatus.IN_PROGRESS

        assert service.close(ticket_id).status == TicketStatus.CLOSED

        thread = service.get_thread(ticket_id)
        assert [m.author for m in thread.messages] == [
            MessageAuthor.VENDOR,
            MessageAuthor.VENDOR,
            MessageAuthor.ADMIN,
            MessageAuthor.ADMIN,
        ]

    def test_closed_ticket_rejects_messages(self, any_repos, vendor):
        service = TicketService(any_repos)
        ticket_id = service.open_ticket(vendor.id, "문의", "질문").ticket.id
        service.close(ticket_id)

        with pytest.raises(ValidationError) as exc_info:
            service.add_vendor_message(ticket_id, "또 질문")
        assert exc_info.value.error_code == ErrorCodes.TICKET_CLOSED

        with pytest.raises(ValidationError):
            service.reply_as_admin(ticket_id, "답변")

        assert len(service.get_thread(ticket_id).messages) == 1

    def test_missing_ticket(self, any_repos):
        service = TicketService(any_repos)
        assert service.add_vendor_message("nope", "x") is None
        assert service.reply_as_admin("nope", "x") is None
        assert service.close("nope") is None
        assert service.get_thread("nope") is None
