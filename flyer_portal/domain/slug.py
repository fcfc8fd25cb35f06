"""
slug.py - slug / 편집 토큰 생성 (순수 함수)

- slug: 공개 전단 URL 식별자 (공개값이라 일반 난수 사용)
- 편집 토큰: 거래처 편집 권한 토큰 (secrets 사용)
"""

import random
import re
import secrets
import string
from typing import Iterable

from flyer_portal.domain.models import CheckResult

SLUG_MIN_LENGTH = 3
SLUG_MAX_LENGTH = 50
RANDOM_SLUG_LENGTH = 8
EDIT_TOKEN_LENGTH = 32

SLUG_CHARS = string.ascii_lowercase + string.digits
TOKEN_CHARS = string.ascii_letters + string.digits

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def generate_slug(shop_name: str) -> str:
    """
    매장명에서 URL-safe slug 생성

    영문 소문자/숫자/공백/하이픈만 남기므로 한글 매장명은 비게 되고,
    이 경우(또는 3자 미만) 랜덤 slug로 대체한다.
    """
    slug = (shop_name or "").lower().strip()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)    # 영문/숫자/공백/하이픈만 유지
    slug = re.sub(r"\s+", "-", slug)             # 공백 → 하이픈
    slug = re.sub(r"-+", "-", slug)              # 연속 하이픈 제거
    slug = slug.strip("-")

    if len(slug) > SLUG_MAX_LENGTH:
        slug = slug[:SLUG_MAX_LENGTH].rstrip("-")

    if len(slug) < SLUG_MIN_LENGTH:
        slug = generate_random_slug()

    return slug


def generate_random_slug(length: int = RANDOM_SLUG_LENGTH) -> str:
    """랜덤 slug ([a-z0-9])"""
    return "".join(random.choice(SLUG_CHARS) for _ in range(length))


def validate_slug(slug: str) -> CheckResult:
    """slug 유효성 검사"""
    if not slug:
        return CheckResult(valid=False, error="slug는 비어있을 수 없습니다.")

    if len(slug) < SLUG_MIN_LENGTH:
        return CheckResult(valid=False, error=f"slug는 {SLUG_MIN_LENGTH}자 이상이어야 합니다.")

    if len(slug) > SLUG_MAX_LENGTH:
        return CheckResult(valid=False, error=f"slug는 {SLUG_MAX_LENGTH}자 이하여야 합니다.")

    if not SLUG_PATTERN.match(slug):
        return CheckResult(
            valid=False,
            error="slug는 영문 소문자, 숫자, 하이픈만 사용할 수 있습니다."
        )

    return CheckResult(valid=True)


def resolve_slug_conflict(base_slug: str, existing_slugs: Iterable[str]) -> str:
    """
    slug 충돌 시 -1, -2, ... 접미사 추가

    Args:
        base_slug: 기본 slug
        existing_slugs: 이미 사용 중인 slug 목록

    Returns:
        existing_slugs에 없는 slug
    """
    existing = set(existing_slugs)
    if base_slug not in existing:
        return base_slug

    counter = 1
    candidate = f"{base_slug}-{counter}"
    while candidate in existing:
        counter += 1
        candidate = f"{base_slug}-{counter}"

    return candidate


def generate_edit_token(length: int = EDIT_TOKEN_LENGTH) -> str:
    """편집 토큰 생성 (32자, [A-Za-z0-9], 암호학적 난수)"""
    return "".join(secrets.choice(TOKEN_CHARS) for _ in range(length))
