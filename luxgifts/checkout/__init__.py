"""Checkout: cart, totals, coupon entry, form validation and order submission."""
from luxgifts.checkout.cart import Cart, CartItem
from luxgifts.checkout.coupon import CouponEntry
from luxgifts.checkout.form import validate_checkout_form
from luxgifts.checkout.server_cart import ServerCart
from luxgifts.checkout.session import PAYMENT_METHOD_MAP, CheckoutSession, PaymentGateway, confirmation_path
from luxgifts.checkout.totals import OrderTotals, calculate_totals, has_promotional_shipping

__all__ = [
    "Cart",
    "CartItem",
    "CouponEntry",
    "ServerCart",
    "validate_checkout_form",
    "PAYMENT_METHOD_MAP",
    "CheckoutSession",
    "PaymentGateway",
    "confirmation_path",
    "OrderTotals",
    "calculate_totals",
    "has_promotional_shipping",
]
