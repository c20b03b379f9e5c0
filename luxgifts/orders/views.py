"""Read-only order pages: confirmation, history, tracking and documents."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from luxgifts.api.client import Pagination, page_of
from luxgifts.api.orders import OrderService
from luxgifts.errors import ApiError
from luxgifts.notify import LoggingNotifier, Notifier
from luxgifts.orders.tracking import StatusDisplay, TimelineStage, status_display, tracking_timeline
from luxgifts.stores.cache import entity_id_of, parse_timestamp
from luxgifts.utils.formatters import format_currency, format_date
from luxgifts.utils.logger import get_logger

logger = get_logger("orders.views")

HISTORY_PAGE_SIZE = 10


@dataclass
class OrderSummary:
    order_id: str
    order_number: str
    placed_on: str
    display: StatusDisplay
    total: str
    item_count: int
    items: List[Dict[str, Any]] = field(default_factory=list)
    shipping_address: Dict[str, Any] = field(default_factory=dict)
    payment_method: Optional[str] = None
    payment_status: Optional[str] = None


@dataclass
class TrackingView:
    summary: OrderSummary
    timeline: List[TimelineStage]
    tracking_number: Optional[str] = None
    carrier: Optional[str] = None
    estimated_delivery: Optional[str] = None


def summarize(order: Dict[str, Any], currency: str = "INR") -> OrderSummary:
    items = order.get("items") or []
    payment = order.get("paymentInfo") or {}
    order_id = entity_id_of(order) or ""
    return OrderSummary(
        order_id=order_id,
        order_number=str(order.get("orderNumber") or order_id),
        placed_on=format_date(order.get("createdAt")),
        display=status_display(order.get("status")),
        total=format_currency(order.get("total"), currency),
        item_count=sum(int(item.get("quantity") or 0) for item in items if isinstance(item, dict)),
        items=items,
        shipping_address=order.get("shippingAddress") or {},
        payment_method=payment.get("method"),
        payment_status=payment.get("status"),
    )


def _placed_at(order: Dict[str, Any]) -> float:
    parsed = parse_timestamp(order.get("createdAt"))
    return parsed.timestamp() if parsed is not None else 0.0


class OrderViews:
    """
    Data behind the buyer's order pages.

    Fetch failures are reported through the notifier and return None (or an
    empty list for history) so pages fall back to their empty state.
    """

    def __init__(self, service: OrderService, notifier: Optional[Notifier] = None, currency: str = "INR"):
        self.service = service
        self.notifier = notifier or LoggingNotifier()
        self.currency = currency
        self.pagination = Pagination(limit=HISTORY_PAGE_SIZE)

    def _fetch_order(self, order_id: str, failure_message: str) -> Optional[Dict[str, Any]]:
        try:
            response = self.service.get_order(order_id)
        except ApiError as e:
            logger.error("orders: view fetch failed order_id=%s error=%s", order_id, e.message)
            self.notifier.error(failure_message)
            return None
        order = response.get("data")
        if not response.get("success") or not isinstance(order, dict):
            self.notifier.error(failure_message)
            return None
        return order

    def confirmation(self, order_id: str) -> Optional[OrderSummary]:
        order = self._fetch_order(order_id, "Failed to load order details")
        return summarize(order, self.currency) if order else None

    def history(self, search: str = "", page: int = 1, limit: int = HISTORY_PAGE_SIZE) -> List[OrderSummary]:
        """
        One page of the user's orders, newest first, optionally filtered by
        order number. ``self.pagination`` holds the page block of the reply.
        """
        try:
            response = self.service.get_user_orders({"page": page, "limit": limit})
        except ApiError as e:
            logger.error("orders: history fetch failed page=%s error=%s", page, e.message)
            self.notifier.error("Failed to load your orders")
            return []
        orders, self.pagination = page_of(response, page, limit)
        orders = [order for order in orders if isinstance(order, dict)]
        orders.sort(key=_placed_at, reverse=True)
        summaries = [summarize(order, self.currency) for order in orders]
        needle = search.strip().lower()
        if needle:
            summaries = [summary for summary in summaries if needle in summary.order_number.lower()]
        return summaries

    def track(self, order_id: str) -> Optional[TrackingView]:
        order = self._fetch_order(order_id, "Failed to load order details")
        if order is None:
            return None
        tracking: Dict[str, Any] = {}
        try:
            tracking = self.service.get_order_tracking(order_id).get("data") or {}
        except ApiError as e:
            # Tracking details are optional
            logger.warning("orders: tracking lookup failed order_id=%s error=%s", order_id, e.message)
        merged = {**order, **{k: v for k, v in tracking.items() if v is not None}} if isinstance(tracking, dict) else order
        return TrackingView(
            summary=summarize(merged, self.currency),
            timeline=tracking_timeline(merged),
            tracking_number=merged.get("trackingNumber"),
            carrier=merged.get("carrier"),
            estimated_delivery=format_date(merged["estimatedDelivery"]) if merged.get("estimatedDelivery") else None,
        )

    def download_invoice(self, order_id: str) -> Optional[bytes]:
        try:
            return self.service.get_order_invoice(order_id)
        except ApiError as e:
            self.notifier.error(e.message or "Failed to download invoice")
            return None

    def download_receipt(self, order_id: str) -> Optional[bytes]:
        try:
            return self.service.get_order_receipt(order_id)
        except ApiError as e:
            self.notifier.error(e.message or "Failed to download receipt")
            return None
