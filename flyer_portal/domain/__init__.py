"""도메인 모듈 - 순수 비즈니스 로직"""
from .models import (
    Request,
    Vendor,
    Product,
    Ticket,
    TicketMessage,
    FlyerView,
    Notification,
    RequestStatus,
    VendorStatus,
    TicketStatus,
    MessageAuthor,
    NotificationType,
    CheckResult,
    ProductDraft,
    VendorForm,
)
from .pricing import (
    calculate_sale_price,
    calculate_discount_rate,
    format_price,
    format_discount_rate,
    validate_price_input,
)
from .slug import (
    generate_slug,
    generate_random_slug,
    validate_slug,
    resolve_slug_conflict,
    generate_edit_token,
)
from .flyer import sort_for_flyer, sale_period_label

__all__ = [
    # 모델
    "Request",
    "Vendor",
    "Product",
    "Ticket",
    "TicketMessage",
    "FlyerView",
    "Notification",
    "RequestStatus",
    "VendorStatus",
    "TicketStatus",
    "MessageAuthor",
    "NotificationType",
    "CheckResult",
    "ProductDraft",
    "VendorForm",
    # 가격
    "calculate_sale_price",
    "calculate_discount_rate",
    "format_price",
    "format_discount_rate",
    "validate_price_input",
    # slug / 토큰
    "generate_slug",
    "generate_random_slug",
    "validate_slug",
    "resolve_slug_conflict",
    "generate_edit_token",
    # 전단
    "sort_for_flyer",
    "sale_period_label",
]
