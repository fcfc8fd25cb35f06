"""서비스 모듈 - 저장소를 조합하는 업무 흐름"""
from .unit_of_work import UnitOfWork
from .approval import ApprovalService, ApprovalResult
from .manager import ManagerService, ManagerView, validate_manager_form
from .flyer import FlyerService, Flyer, hash_ip
from .tickets import TicketService, TicketThread
from .dashboard import DashboardService, Badges, DashboardStats
from .seed import seed_demo_data, DEMO_REQUESTS

__all__ = [
    "UnitOfWork",
    "ApprovalService",
    "ApprovalResult",
    "ManagerService",
    "ManagerView",
    "validate_manager_form",
    "FlyerService",
    "Flyer",
    "hash_ip",
    "TicketService",
    "TicketThread",
    "DashboardService",
    "Badges",
    "DashboardStats",
    "seed_demo_data",
    "DEMO_REQUESTS",
]
