"""dashboard.py / seed.py 테스트"""

from flyer_portal.domain.models import ProductDraft, RequestStatus, TicketStatus, VendorStatus
from flyer_portal.repositories.unified import Repositories
from flyer_portal.services.dashboard import DashboardService
from flyer_portal.services.seed import DEMO_REQUESTS, seed_demo_data


class TestSeed:
    """데모 데이터 테스트"""

    def test_seed_local(self, repos):
        repos.vendors.create("Old Shop", "x")
        created = seed_demo_data(repos)

        assert len(created) == 3
        assert {r.shop_name for r in repos.requests.get_all()} == {d["shop_name"] for d in DEMO_REQUESTS}
        assert all(r.status == RequestStatus.PENDING for r in created)
        assert repos.vendors.get_all() == []

    def test_seed_twice_replaces(self, repos):
        seed_demo_data(repos)
        seed_demo_data(repos)
        assert len(repos.requests.get_all()) == 3

    def test_seed_skipped_on_supabase(self, supabase_store, fake_client):
        repos = Repositories(store=supabase_store)
        assert seed_demo_data(repos) == []
        assert fake_client.calls == []


class TestDashboard:
    """대시보드 테스트"""

    def test_badges(self, any_repos):
        any_repos.requests.create("A shop", "a")
        any_repos.requests.create("B shop", "b")
        rejected = any_repos.requests.create("C shop", "c")
        any_repos.requests.update_status(rejected.id, RequestStatus.REJECTED)

        open_ticket = any_repos.tickets.create("v1", "문의1")
        closed = any_repos.tickets.create("v1", "문의2")
        any_repos.tickets.update_status(closed.id, TicketStatus.CLOSED)
        any_repos.notifications.create("new_ticket", "새 문의", target_type="admin", target_id=open_ticket.id)

        badges = DashboardService(any_repos).get_badges()
        assert badges.to_dict() == {
            "pendingRequests": 2,
            "openTickets": 1,
            "unreadNotifications": 1,
        }

    def test_stats(self, any_repos):
        any_repos.requests.create("A shop", "a")
        with_products = any_repos.vendors.create("Full Shop", "a")
        empty = any_repos.vendors.create("Empty Shop", "b")
        hidden = any_repos.vendors.create("Hidden Shop", "c")
        any_repos.vendors.set_status(hidden.id, VendorStatus.HIDDEN)
        any_repos.products.bulk_save_for_vendor(with_products.id, [ProductDraft(name="p", original_price=1000)])
        any_repos.tickets.create(with_products.id, "문의")

        stats = DashboardService(any_repos).get_stats()
        assert stats.pending_requests == 1
        assert stats.total_vendors == 3
        assert stats.active_vendors == 2
        assert stats.open_tickets == 1
        assert [v.id for v in stats.incomplete_vendors] == [empty.id]
        assert len(stats.to_dict()["recentRequests"]) == 1
