"""
pricing.py - 가격/할인율 계산 (순수 함수)

반올림은 사사오입(ROUND_HALF_UP)으로 통일
    calculate_sale_price(100000, 30)       → 70000
    calculate_sale_price(100000, 66.66666) → 33333
    calculate_discount_rate(30000, 20000)  → 33.3
"""

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Union

from flyer_portal.core.exceptions import ValidationError, ErrorCodes
from flyer_portal.domain.models import CheckResult

Number = Union[int, float]

CURRENCY_SUFFIX = "원"


def _to_decimal(value: Number) -> Decimal:
    # 문자열 경유 (66.66666 → Decimal("66.66666"))
    return Decimal(str(value))


def _is_finite(value: Number) -> bool:
    # inf, NaN 제외 (int는 항상 유한)
    return isinstance(value, int) or math.isfinite(value)


def calculate_sale_price(original_price: Number, discount_rate: Number) -> int:
    """
    판매가 계산: 정가에서 할인율을 적용

    Args:
        original_price: 정가 (원, 0 이상)
        discount_rate: 할인율 (0~100)

    Returns:
        판매가 (원, 반올림)
    """
    if not _is_finite(original_price) or original_price < 0:
        raise ValidationError(
            "정가는 0 이상이어야 합니다.",
            field="original_price",
            value=original_price,
            error_code=ErrorCodes.INVALID_PRICE
        )
    if not _is_finite(discount_rate) or discount_rate < 0 or discount_rate > 100:
        raise ValidationError(
            "할인율은 0에서 100 사이여야 합니다.",
            field="discount_rate",
            value=discount_rate,
            error_code=ErrorCodes.INVALID_DISCOUNT
        )

    multiplier = 1 - _to_decimal(discount_rate) / 100
    sale_price = _to_decimal(original_price) * multiplier
    return int(sale_price.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def calculate_discount_rate(original_price: Number, sale_price: Number) -> float:
    """
    할인율 계산: 정가와 판매가로부터 역산

    Returns:
        할인율 (0~100, 소수점 첫째자리 반올림)
    """
    if not _is_finite(original_price) or original_price <= 0:
        raise ValidationError(
            "정가는 0보다 커야 합니다.",
            field="original_price",
            value=original_price,
            error_code=ErrorCodes.INVALID_PRICE
        )
    if not _is_finite(sale_price) or sale_price < 0:
        raise ValidationError(
            "판매가는 0 이상이어야 합니다.",
            field="sale_price",
            value=sale_price,
            error_code=ErrorCodes.INVALID_PRICE
        )
    if sale_price > original_price:
        raise ValidationError(
            "판매가는 정가보다 클 수 없습니다.",
            field="sale_price",
            value=sale_price,
            error_code=ErrorCodes.INVALID_PRICE
        )

    original = _to_decimal(original_price)
    rate = (original - _to_decimal(sale_price)) / original * 100
    return float(rate.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _format_number(value: Number) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_price(price: Number) -> str:
    """가격 포맷 (예: 29000 → "29,000원")"""
    if isinstance(price, float) and price.is_integer():
        price = int(price)
    return f"{price:,}{CURRENCY_SUFFIX}"


def format_discount_rate(rate: Number) -> str:
    """할인율 포맷 (예: 30 → "30%")"""
    return f"{_format_number(rate)}%"


def _as_number(value: Any) -> float:
    """숫자로 변환 (실패 시 NaN)"""
    if isinstance(value, bool) or value is None:
        return math.nan
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def validate_price_input(original_price: Any, discount_rate: Any) -> CheckResult:
    """
    가격 입력 검증 (예외 없음, 폼 실시간 검사용)

    숫자가 아닌 값(None, 빈 문자열, NaN, inf 등)은 무효로 처리
    """
    price = _as_number(original_price)
    if not math.isfinite(price) or price < 0:
        return CheckResult(valid=False, error="정가를 올바르게 입력해주세요.")

    rate = _as_number(discount_rate)
    if not math.isfinite(rate) or rate < 0 or rate > 100:
        return CheckResult(valid=False, error="할인율은 0에서 100 사이로 입력해주세요.")

    return CheckResult(valid=True)
