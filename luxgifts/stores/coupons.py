"""
Coupon management and server-side coupon validation.

Eligibility is decided by the server only: validate_coupon_code() passes the
code, a line-item summary and the subtotal to the API and reports whatever
discount the server confirms.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from luxgifts.api.catalog import CouponService
from luxgifts.errors import ApiError
from luxgifts.notify import Notifier
from luxgifts.stores.base import ADMIN, SELLER, SUPER_ADMIN, DomainStore, logger
from luxgifts.stores.cache import Entity, EntityStore

COUPON_MANAGER_ROLES = frozenset({ADMIN, SUPER_ADMIN, SELLER})


@dataclass
class CouponValidation:
    valid: bool
    discount_amount: float = 0.0
    coupon: Optional[Dict[str, Any]] = None
    message: Optional[str] = None

    @property
    def code(self) -> Optional[str]:
        if self.coupon:
            return self.coupon.get("code")
        return None


class CouponStore(DomainStore):
    name = "coupons"

    def __init__(self, service: CouponService, notifier: Optional[Notifier] = None) -> None:
        super().__init__(notifier)
        self.service = service
        self.coupons = EntityStore("coupons", notifier=self.notifier)
        self.current_coupon: Optional[Entity] = None
        self.validating = False

    @property
    def can_manage(self) -> bool:
        return self.active and self.role in COUPON_MANAGER_ROLES

    def refresh(self) -> None:
        if self.can_manage:
            self.fetch_coupons()
        else:
            self.coupons.reset()

    def reset(self) -> None:
        self.coupons.reset()
        self.current_coupon = None

    def fetch_coupons(self, params: Optional[Dict[str, Any]] = None) -> Optional[List[Entity]]:
        if not self.can_manage:
            logger.warning("store: name=coupons refused fetch for role=%s", self.role)
            return None
        return self.coupons.fetch(lambda: self.service.get_coupons(params), "Failed to fetch coupons")

    def get_coupon(self, coupon_id: str) -> Optional[Entity]:
        if not self.can_manage:
            return None
        try:
            response = self.service.get_coupon(coupon_id)
        except ApiError as e:
            self.notifier.error(e.message)
            return None
        self.current_coupon = response.get("data")
        return self.current_coupon

    def add_coupon(self, coupon_data: Dict[str, Any]) -> Optional[Entity]:
        if not self.can_manage:
            return None
        response = self._mutate(lambda: self.service.create_coupon(coupon_data), "Failed to create coupon")
        if response is None:
            return None
        coupon = response.get("data")
        if isinstance(coupon, dict):
            self.coupons.created(coupon)
        self.notifier.success("Coupon created successfully")
        return coupon

    def edit_coupon(self, coupon_id: str, coupon_data: Dict[str, Any]) -> Optional[Entity]:
        if not self.can_manage:
            return None
        response = self._mutate(lambda: self.service.update_coupon(coupon_id, coupon_data), "Failed to update coupon")
        if response is None:
            return None
        coupon = response.get("data")
        if isinstance(coupon, dict):
            self.coupons.updated(coupon)
            self.current_coupon = coupon
        self.notifier.success("Coupon updated successfully")
        return coupon

    def remove_coupon(self, coupon_id: str) -> bool:
        if not self.can_manage:
            return False
        if self._mutate(lambda: self.service.delete_coupon(coupon_id), "Failed to delete coupon") is None:
            return False
        self.coupons.deleted(coupon_id)
        self.notifier.success("Coupon deleted successfully")
        return True

    def validate_coupon_code(
        self, code: str, cart_items: List[Dict[str, Any]], cart_total: float
    ) -> CouponValidation:
        """Ask the server whether ``code`` applies to this cart. Rejections come back as data."""
        self.validating = True
        try:
            response = self.service.validate_coupon(code, cart_items, cart_total)
        except ApiError as e:
            logger.info("store: name=coupons code rejected message=%s", e.message)
            return CouponValidation(valid=False, message=e.message or "Invalid coupon")
        finally:
            self.validating = False

        data = response.get("data") or {}
        if not response.get("success") or not isinstance(data, dict):
            return CouponValidation(valid=False, message=response.get("message") or "Invalid coupon")
        return CouponValidation(
            valid=True,
            discount_amount=float(data.get("discountAmount") or 0),
            coupon=data,
            message=response.get("message"),
        )
