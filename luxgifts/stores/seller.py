"""Seller dashboard store (seller sessions only)."""

from typing import Any, Dict, Optional

from luxgifts.api.dashboards import SellerService
from luxgifts.api.orders import OrderService
from luxgifts.errors import ApiError
from luxgifts.notify import Notifier
from luxgifts.stores.admin import (
    RECENT_LIMIT,
    DashboardMixin,
    empty_admin_dashboard,
    prepend_unique,
    replace_by_id,
)
from luxgifts.stores.base import SELLER, DomainStore
from luxgifts.stores.cache import Entity, EntityStore, entity_id_of


class SellerStore(DashboardMixin, DomainStore):
    name = "seller"
    required_roles = frozenset({SELLER})

    def __init__(
        self,
        service: SellerService,
        order_service: OrderService,
        notifier: Optional[Notifier] = None,
    ) -> None:
        super().__init__(notifier)
        self.service = service
        self.order_service = order_service
        self.products = EntityStore("seller.products", notifier=self.notifier)
        self.orders = EntityStore("seller.orders", notifier=self.notifier)
        self.dashboard: Dict[str, Any] = empty_admin_dashboard()
        self.analytics: Dict[str, Any] = {}
        self.earnings: Dict[str, Any] = {}
        self.loading = False
        self.error: Optional[str] = None

    @property
    def seller_id(self) -> Optional[str]:
        return entity_id_of(self.user) if self.user else None

    def _owns(self, entity: Any) -> bool:
        if not isinstance(entity, dict):
            return False
        seller = entity.get("seller")
        if isinstance(seller, dict):
            seller = entity_id_of(seller)
        return seller is not None and seller == self.seller_id

    def event_handlers(self):
        return {
            "newOrder": self._on_new_order,
            "orderStatusChanged": self._on_order_status_changed,
            "productUpdated": self._on_product_updated,
        }

    def refresh(self) -> None:
        self.fetch_dashboard_data()

    def reset(self) -> None:
        self.products.reset()
        self.orders.reset()
        with self._lock:
            self.dashboard = empty_admin_dashboard()
            self.analytics = {}
            self.earnings = {}
            self.error = None

    def fetch_dashboard_data(self) -> Optional[Dict[str, Any]]:
        response = self._load("fetch_dashboard_data", self.service.get_dashboard)
        if response and response.get("success") and isinstance(response.get("data"), dict):
            with self._lock:
                self.dashboard = {**empty_admin_dashboard(), **response["data"]}
        return self.dashboard if response else None

    def fetch_products(self, filters: Optional[Dict[str, Any]] = None):
        return self._fetch_collection(self.products, "fetch_products", lambda: self.service.get_products(filters), "Failed to fetch products")

    def fetch_orders(self, filters: Optional[Dict[str, Any]] = None):
        return self._fetch_collection(self.orders, "fetch_orders", lambda: self.service.get_orders(filters), "Failed to fetch orders")

    def fetch_analytics(self, period: str = "month") -> Optional[Dict[str, Any]]:
        response = self._load("fetch_analytics", lambda: self.service.get_analytics(period))
        if response and response.get("success"):
            self.analytics = response.get("data") or {}
        return self.analytics if response else None

    def fetch_earnings(self, period: str = "month") -> Optional[Dict[str, Any]]:
        response = self._load("fetch_earnings", lambda: self.service.get_earnings(period))
        if response and response.get("success"):
            self.earnings = response.get("data") or {}
        return self.earnings if response else None

    def update_order_status(self, order_id: str, status: str) -> Optional[Entity]:
        if not self._authorized("update_order_status"):
            return None
        try:
            response = self.order_service.update_order_status(order_id, {"status": status}, user_role=SELLER)
        except ApiError as e:
            self.notifier.error(e.message)
            return None
        order = response.get("data")
        if isinstance(order, dict):
            self._apply_order_update(order)
        self.notifier.success(f"Order status updated to {status}")
        return order

    def _apply_order_update(self, order: Entity) -> None:
        with self._lock:
            self.orders.updated(order)
            self.dashboard["recentOrders"] = replace_by_id(self.dashboard["recentOrders"], order)

    def _on_new_order(self, order: Entity) -> None:
        if not self._owns(order):
            return
        with self._lock:
            is_new = self._insert(self.orders, order)
            if is_new:
                self._bump("totalOrders")
                self._bump("pendingOrders")
            self.dashboard["recentOrders"] = prepend_unique(self.dashboard["recentOrders"], order, RECENT_LIMIT)
        if is_new:
            self.notifier.info(f"New order received: #{order.get('orderNumber', entity_id_of(order))}")

    def _on_order_status_changed(self, order: Entity) -> None:
        if not self._owns(order):
            return
        self._apply_order_update(order)
        self.notifier.info(f"Order #{order.get('orderNumber', entity_id_of(order))} status updated to {order.get('status')}")

    def _on_product_updated(self, product: Entity) -> None:
        if self._owns(product):
            self.products.updated(product)
