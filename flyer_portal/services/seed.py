"""
seed.py - 데모 데이터

로컬 저장소 전용. 신청/거래처/상품 슬롯을 비우고 샘플 신청 3건을 넣는다.
"""

import logging
from typing import List

from flyer_portal.domain.models import Request
from flyer_portal.repositories.unified import Repositories
from flyer_portal.storage.local_store import LocalStore
from flyer_portal.storage.record_store import Tables

logger = logging.getLogger(__name__)

DEMO_REQUESTS = [
    {
        "shop_name": "롯데백화점 본점",
        "manager_name": "김민수",
        "phone": "010-1234-5678",
        "kakao_url": "https://open.kakao.com/o/sample1",
        "notes": "2층 여성복 매장입니다.",
    },
    {
        "shop_name": "신세계 강남점",
        "manager_name": "이지은",
        "phone": "010-9876-5432",
        "kakao_url": "https://open.kakao.com/o/sample2",
        "notes": None,
    },
    {
        "shop_name": "현대백화점 판교점",
        "manager_name": "박서준",
        "phone": "010-5555-6666",
        "kakao_url": "https://open.kakao.com/o/sample3",
        "notes": "잡화 코너 매장",
    },
]


def seed_demo_data(repos: Repositories) -> List[Request]:
    """
    데모 신청 데이터 생성

    Returns:
        생성된 신청 목록 (원격 백엔드면 아무것도 하지 않고 빈 목록)
    """
    store = repos.current_store()
    if not isinstance(store, LocalStore):
        logger.warning("[시드] 원격 저장소에서는 데모 데이터를 만들지 않습니다.")
        return []

    for table in (Tables.REQUESTS, Tables.VENDORS, Tables.PRODUCTS):
        store.clear(table)

    created = [repos.requests.create(**data) for data in DEMO_REQUESTS]
    logger.info(f"[시드] 데모 신청 {len(created)}건 생성")
    return created
