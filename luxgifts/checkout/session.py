"""
Checkout submission.

submit() validates the form, creates the order, then hands off to the
payment branch for the chosen method:

  razorpay  gateway order -> widget -> server-side verification
  card      direct call to the payment-processing endpoint
  other     order stays payment-pending; nothing else to do client-side

Every failure is reported through the notifier and leaves the session ready
to resubmit. Orders already created are not rolled back here.
"""

from typing import Any, Callable, Dict, Mapping, Optional, Protocol

from luxgifts.api.orders import OrderService
from luxgifts.api.payments import PaymentService
from luxgifts.checkout.cart import Cart
from luxgifts.checkout.coupon import CouponEntry
from luxgifts.checkout.form import CARD_METHODS, card_details, shipping_address, validate_checkout_form
from luxgifts.checkout.totals import OrderTotals, calculate_totals
from luxgifts.core.config import LuxGiftsConfig, get_config
from luxgifts.errors import ApiError, PaymentError
from luxgifts.notify import LoggingNotifier, Notifier
from luxgifts.stores.cache import entity_id_of
from luxgifts.utils.logger import get_logger

logger = get_logger("checkout.session")

# UI payment choice -> backend paymentInfo.method
PAYMENT_METHOD_MAP: Dict[str, str] = {
    "card": "credit_card",
    "credit_card": "credit_card",
    "razorpay": "razorpay",
    "paypal": "paypal",
    "stripe": "stripe",
    "bank_transfer": "bank_transfer",
    "cod": "cash_on_delivery",
}

GENERIC_FAILURE = "Failed to place order. Please try again."


class PaymentGateway(Protocol):
    """Client-side payment widget (Razorpay checkout.js in the browser)."""

    def is_loaded(self) -> bool: ...

    def load_script(self, url: str) -> bool: ...

    def open(
        self,
        options: Dict[str, Any],
        on_success: Callable[[Dict[str, Any]], None],
        on_dismiss: Callable[[], None],
    ) -> None: ...


def confirmation_path(order_id: str) -> str:
    return f"/order-confirmation/{order_id}"


class CheckoutSession:
    """
    One checkout attempt over a cart.

    Args:
        cart: Items being bought
        coupons: Coupon input whose server-confirmed discount is applied
        order_service: Creates the order
        payment_service: Gateway order creation, verification and card processing
        gateway: Payment widget used for Razorpay
        navigate: Called with the confirmation route once the order is complete
        notifier: Toast layer
        user: Signed-in buyer, used to prefill the gateway widget
        config: Pricing and gateway settings
    """

    def __init__(
        self,
        cart: Cart,
        coupons: CouponEntry,
        order_service: OrderService,
        payment_service: PaymentService,
        gateway: Optional[PaymentGateway] = None,
        navigate: Optional[Callable[[str], None]] = None,
        notifier: Optional[Notifier] = None,
        user: Optional[Dict[str, Any]] = None,
        config: Optional[LuxGiftsConfig] = None,
    ):
        self.cart = cart
        self.coupons = coupons
        self.order_service = order_service
        self.payment_service = payment_service
        self.gateway = gateway
        self.navigate = navigate or (lambda path: None)
        self.notifier = notifier or LoggingNotifier()
        self.user = user or {}
        self.config = config or get_config()

        self.form: Dict[str, Any] = {"paymentMethod": "razorpay", "isGift": False, "notes": ""}
        self.errors: Dict[str, str] = {}
        self.submitting = False
        self.order_id: Optional[str] = None

    def update_form(self, **fields: Any) -> None:
        self.form.update(fields)
        for name in fields:
            self.errors.pop(name, None)

    @property
    def totals(self) -> OrderTotals:
        return calculate_totals(self.cart.items, self.coupons.discount, self.config)

    # ------------------------------------------------------------------
    # Payload
    # ------------------------------------------------------------------

    def _line_items(self):
        items = []
        for item in self.cart.items:
            line = {
                "product": item.id,
                "quantity": item.quantity,
                "price": item.price,
                "name": item.name,
                "image": item.image,
            }
            if item.seller:
                line["seller"] = item.seller
            items.append(line)
        return items

    def build_order_payload(self, form: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        form = form if form is not None else self.form
        method = form.get("paymentMethod") or ""
        address = shipping_address(form)
        billing = form.get("billingAddress") or address
        payload = {
            "shippingAddress": address,
            "billingAddress": billing,
            "paymentInfo": {"method": PAYMENT_METHOD_MAP.get(method, method), "status": "pending"},
            "items": self._line_items(),
            **self.totals.as_payload(),
            "couponCode": self.coupons.applied_code,
            "notes": form.get("notes") or "",
            "isGift": bool(form.get("isGift")),
        }
        return payload

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    def submit(self) -> Optional[str]:
        """
        Place the order.

        Returns:
            The created order id, or None when validation or any step failed.
            For Razorpay the id is returned once the widget is open; completion
            happens in the widget callbacks.
        """
        if self.submitting:
            logger.debug("checkout: submit ignored, already submitting")
            return None
        if self.cart.is_empty:
            self.notifier.error("Your cart is empty")
            return None

        self.errors = validate_checkout_form(self.form)
        if self.errors:
            logger.info("checkout: validation failed fields=%s", sorted(self.errors))
            return None

        self.submitting = True
        self.order_id = None
        awaiting_gateway = False
        try:
            payload = self.build_order_payload()
            response = self.order_service.create_order(payload)
            order = response.get("data") or {}
            order_id = entity_id_of(order)
            if not response.get("success") or order_id is None:
                raise ApiError(response.get("message") or GENERIC_FAILURE)
            self.order_id = order_id
            logger.info("checkout: order created order_id=%s method=%s", order_id, self.form.get("paymentMethod"))

            method = self.form.get("paymentMethod")
            if method == "razorpay":
                self._start_razorpay(order_id)
                awaiting_gateway = True
            elif method in CARD_METHODS:
                self._process_card(order_id)
                self._complete(order_id, "Order placed successfully!")
            else:
                self._complete(order_id, "Order placed successfully! Payment is pending.")
            return order_id
        except (ApiError, PaymentError) as e:
            logger.error("checkout: submit failed order_id=%s error=%s", self.order_id, e.message)
            self.notifier.error(e.message or GENERIC_FAILURE)
            return None
        finally:
            if not awaiting_gateway:
                self.submitting = False

    def _process_card(self, order_id: str) -> None:
        response = self.payment_service.process_payment(order_id, card_details(self.form))
        if not response.get("success"):
            raise PaymentError(response.get("message") or "Payment processing failed", order_id)

    def _complete(self, order_id: str, message: str) -> None:
        self.cart.clear()
        self.coupons.remove()
        self.notifier.success(message)
        self.navigate(confirmation_path(order_id))

    # ------------------------------------------------------------------
    # Razorpay
    # ------------------------------------------------------------------

    def _ensure_gateway(self) -> PaymentGateway:
        if self.gateway is None:
            raise PaymentError("Payment gateway is not available")
        if not self.gateway.is_loaded():
            logger.info("checkout: loading gateway script url=%s", self.config.razorpay_script_url)
            if not self.gateway.load_script(self.config.razorpay_script_url):
                raise PaymentError("Failed to load payment gateway. Please try again later.")
        return self.gateway

    def _start_razorpay(self, order_id: str) -> None:
        amount_paise = max(1, self.totals.total_cents)
        response = self.payment_service.create_razorpay_order(order_id, amount_paise, self.config.currency)
        data = response.get("data")
        if not response.get("success") or not isinstance(data, dict):
            raise PaymentError(response.get("message") or "Failed to create payment order", order_id)

        gateway = self._ensure_gateway()
        options = {
            "key": self.config.razorpay_key_id or data.get("key_id"),
            "amount": data.get("amount", amount_paise),
            "currency": data.get("currency", self.config.currency),
            "name": self.config.merchant_name,
            "description": "Payment for your order",
            "order_id": data.get("order_id"),
            "prefill": {
                "name": self.user.get("name", ""),
                "email": self.user.get("email", ""),
                "contact": self.user.get("phone", ""),
            },
            "notes": {"orderId": order_id},
        }
        gateway.open(
            options,
            on_success=lambda result: self._on_gateway_success(order_id, result),
            on_dismiss=lambda: self._on_gateway_dismiss(order_id),
        )

    def _verify(self, order_id: str, result: Dict[str, Any]) -> None:
        verification = {
            "razorpay_order_id": result.get("razorpay_order_id"),
            "razorpay_payment_id": result.get("razorpay_payment_id"),
            "razorpay_signature": result.get("razorpay_signature"),
            "orderId": order_id,
        }
        try:
            response = self.payment_service.verify_razorpay_payment(verification)
        except ApiError as e:
            raise PaymentError(e.message or "Payment verification failed", order_id) from e
        if not response.get("success"):
            raise PaymentError(response.get("message") or "Payment verification failed", order_id)

    def _on_gateway_success(self, order_id: str, result: Dict[str, Any]) -> None:
        try:
            self._verify(order_id, result)
            self._complete(order_id, "Payment successful!")
        except PaymentError as e:
            logger.error("checkout: payment verification failed order_id=%s error=%s", order_id, e.message)
            self.notifier.error(e.message)
        finally:
            self.submitting = False

    def _on_gateway_dismiss(self, order_id: str) -> None:
        logger.info("checkout: gateway dismissed order_id=%s", order_id)
        self.notifier.info("Payment cancelled")
        self.submitting = False
