"""
flyer.py - 공개 전단 표시 규칙

메인 노출(is_featured) 상품은 sort_order와 관계없이 항상 앞에 온다.
"""

from typing import List, Optional

from flyer_portal.domain.models import Product


def sort_for_flyer(products: List[Product]) -> List[Product]:
    """메인 노출 우선, 그다음 sort_order 순"""
    return sorted(products, key=lambda p: (not p.is_featured, p.sort_order))


def sale_period_label(product: Product) -> Optional[str]:
    """세일 기간 표시 문구 (기간 정보가 없으면 None)"""
    start, end = product.sale_start_date, product.sale_end_date
    if start and end:
        return f"{start} ~ {end}"
    if end:
        return f"~{end}까지"
    if start:
        return f"{start}~"
    return None
