"""
models.py - 전단 포털 도메인 모델

신청 → 승인 → 거래처(전단) → 상품/문의 흐름의 데이터 클래스
to_dict()는 로컬 저장소 형식(camelCase, ISO-8601 문자열)을 따른다.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any
from enum import Enum
from datetime import datetime, timezone
import uuid


def utc_now() -> datetime:
    """현재 시각 (UTC)"""
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


def parse_datetime(value: Optional[str]) -> Optional[datetime]:
    """ISO-8601 문자열 → datetime ('Z' 접미사 허용)"""
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


class RequestStatus(Enum):
    """신청 상태"""
    PENDING = "pending"         # 검토 대기
    APPROVED = "approved"       # 승인됨 (종료)
    REJECTED = "rejected"       # 반려됨 (종료)


class VendorStatus(Enum):
    """거래처 상태"""
    ACTIVE = "active"           # 공개 중
    HIDDEN = "hidden"           # 숨김
    BLOCKED = "blocked"         # 차단


class TicketStatus(Enum):
    """문의 상태"""
    OPEN = "open"               # 접수
    IN_PROGRESS = "in_progress" # 처리중 (관리자 첫 답변 후)
    CLOSED = "closed"           # 완료


class MessageAuthor(Enum):
    """문의 메시지 작성자"""
    VENDOR = "vendor"
    ADMIN = "admin"


class NotificationType(Enum):
    """알림 종류"""
    NEW_REQUEST = "new_request"
    REQUEST_APPROVED = "request_approved"
    NEW_TICKET = "new_ticket"
    SYSTEM = "system"


@dataclass
class CheckResult:
    """비예외 검증 결과 (폼 입력용)"""
    valid: bool = True
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        if self.valid:
            return {"valid": True}
        return {"valid": False, "error": self.error}


@dataclass
class Request:
    """입점 신청"""
    id: str = field(default_factory=new_id)
    shop_name: str = ""
    manager_name: str = ""
    phone: Optional[str] = None
    kakao_url: Optional[str] = None
    notes: Optional[str] = None
    status: RequestStatus = RequestStatus.PENDING
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "shopName": self.shop_name,
            "managerName": self.manager_name,
            "phone": self.phone,
            "kakaoUrl": self.kakao_url,
            "notes": self.notes,
            "status": self.status.value,
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at)
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Request":
        return cls(
            id=data.get("id") or new_id(),
            shop_name=data.get("shopName", ""),
            manager_name=data.get("managerName", ""),
            phone=data.get("phone"),
            kakao_url=data.get("kakaoUrl"),
            notes=data.get("notes"),
            status=RequestStatus(data.get("status") or "pending"),
            created_at=parse_datetime(data.get("createdAt")) or utc_now(),
            updated_at=parse_datetime(data.get("updatedAt")) or utc_now()
        )


@dataclass
class Vendor:
    """거래처 (승인 후 생성)"""
    id: str = field(default_factory=new_id)
    slug: str = ""                      # 공개 URL 식별자 (전역 유일)
    shop_name: str = ""
    manager_name: str = ""
    manager_photo: Optional[str] = None # URL 또는 data URL
    kakao_url: str = ""
    edit_token: str = ""                # 편집 권한 토큰 (전역 유일)
    status: VendorStatus = VendorStatus.ACTIVE
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "slug": self.slug,
            "shopName": self.shop_name,
            "managerName": self.manager_name,
            "managerPhoto": self.manager_photo,
            "kakaoUrl": self.kakao_url,
            "editToken": self.edit_token,
            "status": self.status.value,
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at)
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Vendor":
        return cls(
            id=data.get("id") or new_id(),
            slug=data.get("slug", ""),
            shop_name=data.get("shopName", ""),
            manager_name=data.get("managerName", ""),
            manager_photo=data.get("managerPhoto"),
            kakao_url=data.get("kakaoUrl") or "",
            edit_token=data.get("editToken", ""),
            status=VendorStatus(data.get("status") or "active"),
            created_at=parse_datetime(data.get("createdAt")) or utc_now(),
            updated_at=parse_datetime(data.get("updatedAt")) or utc_now()
        )


@dataclass
class Product:
    """전단 상품"""
    id: str = field(default_factory=new_id)
    vendor_id: str = ""
    name: str = ""
    image: Optional[str] = None
    original_price: int = 0             # 정가 (원)
    discount_rate: float = 0            # 할인율 (0~100)
    sale_price: int = 0                 # 판매가 (정가와 할인율에서 계산)
    sort_order: int = 0
    sale_start_date: Optional[str] = None
    sale_end_date: Optional[str] = None
    is_featured: bool = False           # 메인 노출 (항상 앞에 정렬)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "vendorId": self.vendor_id,
            "name": self.name,
            "image": self.image,
            "originalPrice": self.original_price,
            "discountRate": self.discount_rate,
            "salePrice": self.sale_price,
            "sortOrder": self.sort_order,
            "saleStartDate": self.sale_start_date,
            "saleEndDate": self.sale_end_date,
            "isFeatured": self.is_featured,
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at)
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Product":
        return cls(
            id=data.get("id") or new_id(),
            vendor_id=data.get("vendorId", ""),
            name=data.get("name", ""),
            image=data.get("image") or None,
            original_price=data.get("originalPrice", 0),
            discount_rate=data.get("discountRate", 0),
            sale_price=data.get("salePrice", 0),
            sort_order=data.get("sortOrder") or 0,
            sale_start_date=data.get("saleStartDate") or None,
            sale_end_date=data.get("saleEndDate") or None,
            is_featured=bool(data.get("isFeatured")),
            created_at=parse_datetime(data.get("createdAt")) or utc_now(),
            updated_at=parse_datetime(data.get("updatedAt")) or utc_now()
        )


@dataclass
class Ticket:
    """문의 티켓"""
    id: str = field(default_factory=new_id)
    vendor_id: str = ""
    subject: str = ""
    status: TicketStatus = TicketStatus.OPEN
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "vendorId": self.vendor_id,
            "subject": self.subject,
            "status": self.status.value,
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at)
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Ticket":
        return cls(
            id=data.get("id") or new_id(),
            vendor_id=data.get("vendorId", ""),
            subject=data.get("subject", ""),
            status=TicketStatus(data.get("status") or "open"),
            created_at=parse_datetime(data.get("createdAt")) or utc_now(),
            updated_at=parse_datetime(data.get("updatedAt")) or utc_now()
        )


@dataclass
class TicketMessage:
    """문의 메시지 (추가 전용)"""
    id: str = field(default_factory=new_id)
    ticket_id: str = ""
    author: MessageAuthor = MessageAuthor.VENDOR
    message: str = ""
    created_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "ticketId": self.ticket_id,
            "author": self.author.value,
            "message": self.message,
            "createdAt": _iso(self.created_at)
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TicketMessage":
        return cls(
            id=data.get("id") or new_id(),
            ticket_id=data.get("ticketId", ""),
            author=MessageAuthor(data.get("author") or "vendor"),
            message=data.get("message", ""),
            created_at=parse_datetime(data.get("createdAt")) or utc_now()
        )


@dataclass
class FlyerView:
    """전단 조회 기록"""
    id: str = field(default_factory=new_id)
    vendor_id: str = ""
    viewed_at: datetime = field(default_factory=utc_now)
    user_agent: Optional[str] = None
    referrer: Optional[str] = None
    ip_hash: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "vendorId": self.vendor_id,
            "viewedAt": _iso(self.viewed_at),
            "userAgent": self.user_agent,
            "referrer": self.referrer,
            "ipHash": self.ip_hash
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FlyerView":
        return cls(
            id=data.get("id") or new_id(),
            vendor_id=data.get("vendorId", ""),
            viewed_at=parse_datetime(data.get("viewedAt")) or utc_now(),
            user_agent=data.get("userAgent"),
            referrer=data.get("referrer"),
            ip_hash=data.get("ipHash")
        )


@dataclass
class Notification:
    """알림"""
    id: str = field(default_factory=new_id)
    type: NotificationType = NotificationType.SYSTEM
    title: str = ""
    message: Optional[str] = None
    target_type: Optional[str] = None   # admin / vendor
    target_id: Optional[str] = None
    is_read: bool = False
    created_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "title": self.title,
            "message": self.message,
            "targetType": self.target_type,
            "targetId": self.target_id,
            "isRead": self.is_read,
            "createdAt": _iso(self.created_at)
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Notification":
        return cls(
            id=data.get("id") or new_id(),
            type=NotificationType(data.get("type") or "system"),
            title=data.get("title", ""),
            message=data.get("message"),
            target_type=data.get("targetType"),
            target_id=data.get("targetId"),
            is_read=bool(data.get("isRead")),
            created_at=parse_datetime(data.get("createdAt")) or utc_now()
        )


@dataclass
class ProductDraft:
    """상품 입력값 (저장 전, id/판매가 없음)"""
    name: str = ""
    original_price: Any = 0
    discount_rate: Any = 0
    image: Optional[str] = None
    sale_start_date: Optional[str] = None
    sale_end_date: Optional[str] = None
    is_featured: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProductDraft":
        """camelCase 폼 데이터에서 생성 (salePrice/sortOrder는 무시)"""
        return cls(
            name=data.get("name", ""),
            original_price=data.get("originalPrice", 0),
            discount_rate=data.get("discountRate", 0),
            image=data.get("image") or None,
            sale_start_date=data.get("saleStartDate") or None,
            sale_end_date=data.get("saleEndDate") or None,
            is_featured=bool(data.get("isFeatured"))
        )

    @classmethod
    def from_product(cls, product: "Product") -> "ProductDraft":
        return cls(
            name=product.name,
            original_price=product.original_price,
            discount_rate=product.discount_rate,
            image=product.image,
            sale_start_date=product.sale_start_date,
            sale_end_date=product.sale_end_date,
            is_featured=product.is_featured
        )


@dataclass
class VendorForm:
    """매장 정보 편집값"""
    shop_name: str = ""
    manager_name: str = ""
    kakao_url: str = ""
    manager_photo: Optional[str] = None

    @classmethod
    def from_vendor(cls, vendor: "Vendor") -> "VendorForm":
        return cls(
            shop_name=vendor.shop_name,
            manager_name=vendor.manager_name,
            kakao_url=vendor.kakao_url,
            manager_photo=vendor.manager_photo
        )
