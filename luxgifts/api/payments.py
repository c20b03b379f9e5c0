"""Payment endpoints: Razorpay order creation/verification and direct card processing."""

from typing import Any, Dict, Optional

from luxgifts.api.client import ApiClient


class PaymentService:
    def __init__(self, api: ApiClient):
        self.api = api

    def create_razorpay_order(self, order_id: str, amount: int, currency: str = "INR") -> Dict[str, Any]:
        """``amount`` is in the gateway's smallest currency unit (paise)."""
        body = {"orderId": order_id, "amount": amount, "currency": currency}
        return self.api.post("/payments/razorpay", body, fallback="Failed to create Razorpay order")

    def verify_razorpay_payment(self, payment_data: Dict[str, Any]) -> Dict[str, Any]:
        return self.api.post("/payments/razorpay/verify", payment_data, fallback="Failed to verify payment")

    def process_payment(self, order_id: str, card_data: Dict[str, Any]) -> Dict[str, Any]:
        body = {"orderId": order_id, **card_data}
        return self.api.post("/payments/process", body, fallback="Payment processing failed")

    def get_payment_history(self, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self.api.get("/payments/history", params=params, fallback="Failed to fetch payment history")
