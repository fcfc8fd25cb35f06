"""
field_mapping.py - 내부 레코드(camelCase) ↔ Supabase 컬럼(snake_case) 변환

대부분 이름 규칙으로 변환되지만 원격 스키마가 다른 곳이 있다.
- requests: phone ↔ contact, notes ↔ memo, kakaoUrl은 memo에서 추출
- ticket_messages: author ↔ sender
"""

import re
from typing import Any, Dict, Optional

from flyer_portal.storage.record_store import Tables

# 이름 규칙의 예외 (필드 → 컬럼)
FIELD_OVERRIDES: Dict[str, Dict[str, str]] = {
    Tables.REQUESTS: {"phone": "contact", "notes": "memo"},
    Tables.TICKET_MESSAGES: {"author": "sender"},
}

# 원격 테이블에 컬럼이 없는 필드
DERIVED_FIELDS: Dict[str, set] = {
    Tables.REQUESTS: {"kakaoUrl"},
}

KAKAO_URL_PATTERN = re.compile(r"https?://open\.kakao\.com/\S+", re.IGNORECASE)


def camel_to_snake(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


def snake_to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def column_name(table: str, field: str) -> str:
    """필드명 → 컬럼명"""
    return FIELD_OVERRIDES.get(table, {}).get(field) or camel_to_snake(field)


def field_name(table: str, column: str) -> str:
    """컬럼명 → 필드명"""
    for field, col in FIELD_OVERRIDES.get(table, {}).items():
        if col == column:
            return field
    return snake_to_camel(column)


def extract_kakao_url(memo: Optional[str]) -> str:
    """메모에서 카카오톡 오픈채팅 URL 추출"""
    if not memo:
        return ""
    match = KAKAO_URL_PATTERN.search(memo)
    return match.group(0) if match else ""


def to_row(table: str, record: Dict[str, Any]) -> Dict[str, Any]:
    """내부 레코드 → DB row (부분 레코드도 허용)"""
    derived = DERIVED_FIELDS.get(table, set())
    row = {
        column_name(table, k): v
        for k, v in record.items()
        if k not in derived
    }

    if table == Tables.REQUESTS and "notes" in record:
        kakao_url = record.get("kakaoUrl") or ""
        memo = record.get("notes") or ""
        if kakao_url and kakao_url not in memo:
            memo = f"{memo}\n{kakao_url}".strip()
        row["memo"] = memo or None

    return row


def from_row(table: str, row: Dict[str, Any]) -> Dict[str, Any]:
    """DB row → 내부 레코드"""
    record = {field_name(table, k): v for k, v in row.items()}

    if table == Tables.REQUESTS and "notes" in record:
        memo = record.get("notes") or ""
        kakao_url = extract_kakao_url(memo)
        if kakao_url:
            memo = memo.replace(kakao_url, "").strip()
        record["kakaoUrl"] = kakao_url or None
        record["notes"] = memo or None

    return record
