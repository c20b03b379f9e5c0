"""
Checkout order totals.

All arithmetic is in integer paise (cents):

  subtotal  = sum(price x quantity)
  shipping  = 0 when some item qualifies for the romantic-gift promotion,
              otherwise the flat rate
  tax       = subtotal x tax rate (before any discount)
  total     = subtotal + tax + shipping - discount

The discount is whatever the server confirmed for the applied coupon. It is
capped at subtotal + tax + shipping so the total never goes below zero.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from luxgifts.checkout.cart import CartItem
from luxgifts.core.config import LuxGiftsConfig, get_config

_PROMO_KEYWORDS = ("romantic", "gift")


def _searchable_text(item: CartItem) -> str:
    return " ".join([item.name, " ".join(item.tags), item.description]).lower()


def has_promotional_shipping(items: Iterable[CartItem]) -> bool:
    """True if any single item mentions both "romantic" and "gift" across its name, tags and description."""
    for item in items:
        text = _searchable_text(item)
        if all(keyword in text for keyword in _PROMO_KEYWORDS):
            return True
    return False


@dataclass
class OrderTotals:
    subtotal_cents: int
    shipping_cents: int
    tax_cents: int
    discount_cents: int
    total_cents: int
    promotional_shipping: bool = False

    @property
    def subtotal(self) -> float:
        return self.subtotal_cents / 100

    @property
    def shipping(self) -> float:
        return self.shipping_cents / 100

    @property
    def tax(self) -> float:
        return self.tax_cents / 100

    @property
    def discount(self) -> float:
        return self.discount_cents / 100

    @property
    def total(self) -> float:
        return self.total_cents / 100

    def as_payload(self) -> dict:
        """Order-payload money fields in rupees."""
        return {
            "subtotal": self.subtotal,
            "tax": self.tax,
            "shippingCost": self.shipping,
            "discount": self.discount,
            "total": self.total,
        }


def calculate_totals(
    items: Iterable[CartItem],
    discount: float = 0,
    config: Optional[LuxGiftsConfig] = None,
) -> OrderTotals:
    """
    Compute the order totals for ``items``.

    Args:
        items: Cart lines
        discount: Server-confirmed coupon discount in rupees (0 when none is applied)
        config: Source of the tax rate and flat shipping rate

    Returns:
        OrderTotals in paise
    """
    config = config or get_config()
    items = list(items)

    subtotal_cents = sum(item.line_total_cents for item in items)
    promotional = has_promotional_shipping(items)
    shipping_cents = 0 if promotional else config.flat_shipping_cents
    tax_cents = round(subtotal_cents * config.tax_rate)

    gross_cents = subtotal_cents + tax_cents + shipping_cents
    discount_cents = min(max(round(discount * 100), 0), gross_cents)

    return OrderTotals(
        subtotal_cents=subtotal_cents,
        shipping_cents=shipping_cents,
        tax_cents=tax_cents,
        discount_cents=discount_cents,
        total_cents=gross_cents - discount_cents,
        promotional_shipping=promotional,
    )
