"""레코드 저장소 모듈"""
from .base import BaseRepository, serialize_changes
from .requests import RequestRepository
from .vendors import VendorRepository
from .products import ProductRepository, normalize_prices
from .tickets import TicketRepository, TicketMessageRepository
from .flyer_views import FlyerViewRepository
from .notifications import NotificationRepository
from .unified import Repositories

__all__ = [
    "BaseRepository",
    "serialize_changes",
    "RequestRepository",
    "VendorRepository",
    "ProductRepository",
    "normalize_prices",
    "TicketRepository",
    "TicketMessageRepository",
    "FlyerViewRepository",
    "NotificationRepository",
    "Repositories",
]
