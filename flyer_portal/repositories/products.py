"""
products.py - 전단 상품 저장소

판매가(salePrice)는 항상 정가와 할인율에서 계산해서 저장한다.
호출자가 넘긴 salePrice는 사용하지 않는다.
"""

from typing import Any, Dict, List, Optional, Union

from flyer_portal.core.exceptions import ValidationError, ErrorCodes
from flyer_portal.domain.models import Product, ProductDraft, utc_now
from flyer_portal.domain.pricing import calculate_sale_price, validate_price_input
from flyer_portal.repositories.base import BaseRepository, serialize_changes
from flyer_portal.storage.record_store import Tables

DraftLike = Union[ProductDraft, Dict[str, Any]]

PRICE_FIELDS = ("originalPrice", "discountRate")


def _as_draft(item: DraftLike) -> ProductDraft:
    return item if isinstance(item, ProductDraft) else ProductDraft.from_dict(item)


def _number(value: Any):
    """폼 입력값(문자열 포함) → int/float"""
    number = float(value)
    return int(number) if number.is_integer() else number


def normalize_prices(original_price: Any, discount_rate: Any, position: int = None):
    """
    가격 입력 검증 후 (정가, 할인율, 판매가) 반환

    Raises:
        ValidationError: 숫자가 아니거나 범위를 벗어난 경우
    """
    check = validate_price_input(original_price, discount_rate)
    if not check.valid:
        message = check.error if position is None else f"상품 {position}: {check.error}"
        raise ValidationError(
            message,
            field="originalPrice",
            value=original_price,
            error_code=ErrorCodes.INVALID_PRICE
        )

    price = _number(original_price)
    rate = _number(discount_rate)
    return price, rate, calculate_sale_price(price, rate)


class ProductRepository(BaseRepository[Product]):
    """전단 상품 저장소"""

    table = Tables.PRODUCTS
    model = Product
    updatable_fields = (
        "name",
        "image",
        "originalPrice",
        "discountRate",
        "sortOrder",
        "saleStartDate",
        "saleEndDate",
        "isFeatured",
    )

    def _row(self, vendor_id: str, draft: ProductDraft, sort_order: int, position: int = None) -> Dict[str, Any]:
        price, rate, sale_price = normalize_prices(draft.original_price, draft.discount_rate, position)
        return Product(
            vendor_id=vendor_id,
            name=draft.name,
            image=draft.image or None,
            original_price=price,
            discount_rate=rate,
            sale_price=sale_price,
            sort_order=sort_order,
            sale_start_date=draft.sale_start_date or None,
            sale_end_date=draft.sale_end_date or None,
            is_featured=bool(draft.is_featured)
        ).to_dict()

    # ========== 조회 ==========

    def get_by_vendor_id(self, vendor_id: str) -> List[Product]:
        """거래처 상품 목록 (sortOrder 오름차순)"""
        return self._select({"vendorId": vendor_id}, order_by="sortOrder", desc=False)

    def count_for_vendor(self, vendor_id: str) -> int:
        return self.store.count(self.table, {"vendorId": vendor_id})

    # ========== 쓰기 ==========

    def create(self, vendor_id: str, item: DraftLike, sort_order: int = None) -> Product:
        """상품 추가 (sort_order 미지정 시 맨 뒤)"""
        if sort_order is None:
            sort_order = self.count_for_vendor(vendor_id)

        row = self._row(vendor_id, _as_draft(item), sort_order)
        rows = self.store.insert(self.table, [row])
        return self._to_model(rows[0] if rows else row)

    def update(self, product_id: str, **changes) -> Optional[Product]:
        """상품 수정 (정가/할인율이 바뀌면 판매가 재계산)"""
        data = serialize_changes(changes)
        data.pop("salePrice", None)
        self._check_updatable(data)

        if any(f in data for f in PRICE_FIELDS):
            current = self.get_by_id(product_id)
            if current is None:
                return None
            price, rate, sale_price = normalize_prices(
                data.get("originalPrice", current.original_price),
                data.get("discountRate", current.discount_rate)
            )
            data.update({"originalPrice": price, "discountRate": rate, "salePrice": sale_price})

        data["updatedAt"] = utc_now().isoformat()
        rows = self.store.update(self.table, {"id": product_id}, data)
        return self._to_model(rows[0]) if rows else None

    def delete_by_vendor_id(self, vendor_id: str) -> int:
        """거래처 상품 전체 삭제, 삭제 건수 반환"""
        return self.store.delete(self.table, {"vendorId": vendor_id})

    def bulk_save_for_vendor(self, vendor_id: str, items: List[DraftLike]) -> List[Product]:
        """
        거래처 상품 전체 교체 (기존 전부 삭제 → 새 목록 삽입)

        sortOrder는 목록 순서(0, 1, 2, ...)로 다시 매긴다.
        삭제 전에 모든 항목을 검증하므로 검증 실패 시 기존 목록은 그대로다.
        """
        rows = [
            self._row(vendor_id, _as_draft(item), sort_order=i, position=i + 1)
            for i, item in enumerate(items)
        ]

        deleted = self.delete_by_vendor_id(vendor_id)
        saved = self.store.insert(self.table, rows) if rows else []

        self.logger.info(f"[상품] 일괄 저장: vendor={vendor_id} (삭제 {deleted}, 추가 {len(rows)})")
        return self._to_models(saved)
