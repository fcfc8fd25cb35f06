"""
vendors.py - 거래처 저장소

slug 생성 규칙 (두 백엔드 공통):
    base = generate_slug(매장명)
    기존 slug 중 base로 시작하는 값 조회 → resolve_slug_conflict(base, 기존값)
"""

from typing import List, Optional

from flyer_portal.core.exceptions import FlyerPortalError
from flyer_portal.domain.models import Vendor, VendorStatus, utc_now
from flyer_portal.domain.slug import (
    SLUG_MAX_LENGTH,
    generate_slug,
    generate_random_slug,
    resolve_slug_conflict,
    generate_edit_token,
)
from flyer_portal.repositories.base import BaseRepository
from flyer_portal.storage.record_store import Tables

# 토큰 중복 시 재발급 최대 횟수
MAX_TOKEN_ATTEMPTS = 5


class VendorRepository(BaseRepository[Vendor]):
    """거래처 저장소"""

    table = Tables.VENDORS
    model = Vendor
    # slug, editToken은 제외 (slug 불변, 토큰은 regenerate_edit_token으로만 변경)
    updatable_fields = ("shopName", "managerName", "managerPhoto", "kakaoUrl", "status")

    # ========== 조회 ==========

    def get_by_slug(self, slug: str) -> Optional[Vendor]:
        """slug로 조회 (상태 무관, 없으면 None)"""
        return self._to_model(self.store.get(self.table, {"slug": slug}))

    def get_by_edit_token(self, edit_token: str) -> Optional[Vendor]:
        """편집 토큰으로 조회 (없으면 None)"""
        if not edit_token:
            return None
        return self._to_model(self.store.get(self.table, {"editToken": edit_token}))

    def get_by_status(self, status: VendorStatus) -> List[Vendor]:
        return self._select({"status": VendorStatus(status).value})

    def get_all_slugs(self) -> List[str]:
        """사용 중인 slug 전체"""
        return [s for s in self.store.column_values(self.table, "slug") if s]

    # ========== slug / 토큰 ==========

    def _unique_slug(self, shop_name: str) -> str:
        base = generate_slug(shop_name)
        slug = resolve_slug_conflict(base, self.store.column_values(self.table, "slug", prefix=base))

        # 접미사 때문에 최대 길이를 넘으면 랜덤 slug로 다시 시도
        while len(slug) > SLUG_MAX_LENGTH:
            base = generate_random_slug()
            slug = resolve_slug_conflict(base, self.store.column_values(self.table, "slug", prefix=base))

        return slug

    def _unique_edit_token(self) -> str:
        for _ in range(MAX_TOKEN_ATTEMPTS):
            token = generate_edit_token()
            if self.get_by_edit_token(token) is None:
                return token
        raise FlyerPortalError("편집 토큰을 발급하지 못했습니다.")

    # ========== 쓰기 ==========

    def create(
        self,
        shop_name: str,
        manager_name: str,
        kakao_url: str = "",
        manager_photo: str = None,
        status: VendorStatus = VendorStatus.ACTIVE
    ) -> Vendor:
        """거래처 생성 (slug, 편집 토큰 자동 발급)"""
        vendor = Vendor(
            slug=self._unique_slug(shop_name),
            shop_name=shop_name,
            manager_name=manager_name,
            manager_photo=manager_photo,
            kakao_url=kakao_url or "",
            edit_token=self._unique_edit_token(),
            status=VendorStatus(status)
        )
        rows = self.store.insert(self.table, [vendor.to_dict()])
        self.logger.info(f"[거래처] 생성: {shop_name} → /s/{vendor.slug}")
        return self._to_model(rows[0]) if rows else vendor

    def set_status(self, vendor_id: str, status: VendorStatus) -> Optional[Vendor]:
        """공개/숨김/차단 상태 변경"""
        return self.update(vendor_id, status=VendorStatus(status))

    def regenerate_edit_token(self, vendor_id: str) -> Optional[Vendor]:
        """편집 토큰 재발급 (기존 편집 링크 무효화)"""
        if self.get_by_id(vendor_id) is None:
            return None

        changes = {"editToken": self._unique_edit_token(), "updatedAt": utc_now().isoformat()}
        rows = self.store.update(self.table, {"id": vendor_id}, changes)
        self.logger.info(f"[거래처] 편집 토큰 재발급: {vendor_id}")
        return self._to_model(rows[0]) if rows else None

    def delete(self, vendor_id: str) -> bool:
        """거래처 삭제 (소속 상품도 함께 삭제)"""
        deleted_products = self.store.delete(Tables.PRODUCTS, {"vendorId": vendor_id})
        deleted = self.store.delete(self.table, {"id": vendor_id}) > 0
        if deleted:
            self.logger.info(f"[거래처] 삭제: {vendor_id} (상품 {deleted_products}개)")
        return deleted
