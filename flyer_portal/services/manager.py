"""
manager.py - 매장 담당자 편집 (편집 토큰 기반)

저장 시 매장 정보 수정과 상품 전체 교체를 한 작업으로 처리한다.
상품 교체가 실패하면 매장 정보와 기존 상품 목록을 복구한다.
(복구된 상품은 새 id로 다시 생성됨)
"""

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Union

from flyer_portal.config import AppSettings, get_settings
from flyer_portal.core.exceptions import ValidationError
from flyer_portal.core.logging import PerformanceLogger
from flyer_portal.domain.models import Product, ProductDraft, Vendor, VendorForm
from flyer_portal.domain.pricing import validate_price_input
from flyer_portal.repositories.unified import Repositories
from flyer_portal.services.unit_of_work import UnitOfWork

DraftLike = Union[ProductDraft, Dict[str, Any]]


@dataclass
class ManagerView:
    """편집 화면 데이터"""
    vendor: Vendor
    products: List[Product] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "vendor": self.vendor.to_dict(),
            "products": [p.to_dict() for p in self.products]
        }


def validate_manager_form(form: VendorForm, drafts: List[ProductDraft]):
    """
    편집 폼 검증 (첫 번째 오류에서 ValidationError)

    상품 번호는 1부터 센다.
    """
    if not (form.shop_name or "").strip():
        raise ValidationError("매장명을 입력해주세요.", field="shopName", value=form.shop_name)
    if not (form.kakao_url or "").strip():
        raise ValidationError("카카오톡 링크를 입력해주세요.", field="kakaoUrl", value=form.kakao_url)

    for i, draft in enumerate(drafts, start=1):
        if not (draft.name or "").strip():
            raise ValidationError(f"상품 {i}의 이름을 입력해주세요.", field="name", value=draft.name)
        check = validate_price_input(draft.original_price, draft.discount_rate)
        if not check.valid:
            raise ValidationError(f"상품 {i}: {check.error}", field="price", value=draft.original_price)


class ManagerService:
    """매장 편집 서비스"""

    def __init__(
        self,
        repos: Repositories,
        settings: AppSettings = None,
        logger: logging.Logger = None
    ):
        self.repos = repos
        self._settings = settings
        self.logger = logger or logging.getLogger(__name__)
        self.perf = PerformanceLogger(self.logger)

    @property
    def settings(self) -> AppSettings:
        return self._settings or get_settings()

    def load(self, edit_token: str) -> Optional[ManagerView]:
        """편집 토큰으로 매장과 상품 조회 (토큰이 틀리면 None)"""
        vendor = self.repos.vendors.get_by_edit_token(edit_token)
        if vendor is None:
            return None
        return ManagerView(vendor=vendor, products=self.repos.products.get_by_vendor_id(vendor.id))

    def save(
        self,
        edit_token: str,
        form: VendorForm,
        items: List[DraftLike]
    ) -> Optional[ManagerView]:
        """
        매장 정보 + 상품 목록 저장

        Returns:
            저장 후 편집 화면 데이터 (토큰이 틀리면 None)

        Raises:
            ValidationError: 입력 오류 (아무것도 저장하지 않음)
        """
        current = self.load(edit_token)
        if current is None:
            return None

        drafts = [d if isinstance(d, ProductDraft) else ProductDraft.from_dict(d) for d in items]
        validate_manager_form(form, drafts)

        vendor_id = current.vendor.id
        previous_form = VendorForm.from_vendor(current.vendor)
        previous_drafts = [ProductDraft.from_product(p) for p in current.products]

        vendors = self.repos.vendors
        products = self.repos.products

        with self.perf.track("매장 저장", vendor_id=vendor_id, products=len(drafts)):
            with UnitOfWork("매장 저장", self.logger) as uow:
                uow.run(
                    "매장 정보 수정",
                    lambda: vendors.update(vendor_id, **asdict(form)),
                    compensate=lambda: vendors.update(vendor_id, **asdict(previous_form))
                )
                uow.run(
                    "상품 저장",
                    lambda: products.bulk_save_for_vendor(vendor_id, drafts),
                    compensate=lambda: products.bulk_save_for_vendor(vendor_id, previous_drafts),
                    partial=True
                )

        return self.load(edit_token)

    def regenerate_edit_token(self, vendor_id: str) -> Optional[str]:
        """편집 토큰 재발급 (관리자), 새 편집 링크 반환"""
        vendor = self.repos.vendors.regenerate_edit_token(vendor_id)
        if vendor is None:
            return None
        return self.settings.edit_url(vendor.edit_token)

    def upload_image(self, data: bytes, filename: str, folder: str = "products") -> str:
        """이미지 업로드 → 레코드에 저장할 참조 문자열"""
        return self.repos.image_uploader().upload(data, filename, folder)
