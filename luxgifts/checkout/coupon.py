"""Coupon input on the checkout form."""

from typing import Optional

from luxgifts.checkout.cart import Cart
from luxgifts.stores.coupons import CouponStore, CouponValidation
from luxgifts.utils.logger import get_logger

logger = get_logger("checkout.coupon")


class CouponEntry:
    """
    Holds the coupon code field, the applied coupon and its inline error.

    The discount shown is always the one the server confirmed; nothing here
    decides whether a coupon is eligible.
    """

    def __init__(self, coupon_store: CouponStore):
        self.coupon_store = coupon_store
        self.code = ""
        self.applied: Optional[CouponValidation] = None
        self.error: Optional[str] = None

    @property
    def discount(self) -> float:
        return self.applied.discount_amount if self.applied else 0.0

    @property
    def applied_code(self) -> Optional[str]:
        if self.applied is None:
            return None
        return self.applied.code or self.code

    def apply(self, code: str, cart: Cart) -> bool:
        self.code = code
        normalized = code.strip()
        if not normalized:
            self.error = "Please enter a coupon code"
            return False

        result = self.coupon_store.validate_coupon_code(normalized, cart.summary(), cart.subtotal_cents / 100)
        if not result.valid:
            self.applied = None
            self.error = result.message or "Invalid coupon code"
            return False

        logger.info("checkout: coupon applied code=%s discount=%s", normalized, result.discount_amount)
        self.applied = result
        self.error = None
        return True

    def remove(self) -> None:
        self.applied = None
        self.code = ""
        self.error = None
