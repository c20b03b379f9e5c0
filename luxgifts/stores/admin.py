"""Admin dashboard store (admin and super_admin sessions)."""

from typing import Any, Callable, Dict, List, Optional

from luxgifts.api.dashboards import AdminService
from luxgifts.errors import ApiError
from luxgifts.notify import Notifier
from luxgifts.stores.base import ADMIN_ROLES, DomainStore, logger, push_recent
from luxgifts.stores.cache import Entity, EntityStore, entity_id_of

RECENT_LIMIT = 4


def empty_admin_dashboard() -> Dict[str, Any]:
    return {"stats": {}, "recentOrders": [], "recentUsers": [], "recentProducts": []}


def replace_by_id(items: List[Entity], entity: Entity) -> List[Entity]:
    entity_id = entity_id_of(entity)
    return [entity if entity_id_of(item) == entity_id else item for item in items]


def prepend_unique(items: List[Entity], entity: Entity, limit: int) -> List[Entity]:
    entity_id = entity_id_of(entity)
    return push_recent([item for item in items if entity_id_of(item) != entity_id], entity, limit)


class DashboardMixin:
    """Shared helpers for stores that keep a dashboard dict next to their collections."""

    dashboard: Dict[str, Any]

    def _bump(self, counter: str, amount: int = 1) -> None:
        stats = dict(self.dashboard.get("stats") or {})
        stats[counter] = (stats.get(counter) or 0) + amount
        self.dashboard["stats"] = stats

    def _load(self, operation: str, call: Callable[[], Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        """Run a role-gated call whose result is a single object rather than a collection."""
        if not self._authorized(operation):
            return None
        self.loading = True
        try:
            response = call()
            self.error = None
            return response
        except ApiError as e:
            logger.error("store: name=%s %s failed: %s", self.name, operation, e.message)
            self.error = e.message
            self.notifier.error(e.message)
            return None
        finally:
            self.loading = False

    def _insert(self, store: EntityStore, entity: Entity) -> bool:
        """Apply a created event; True when it added an entity the cache did not have."""
        entity_id = entity_id_of(entity)
        known = store.get(entity_id) is not None
        store.created(entity)
        return not known and store.get(entity_id) is not None

    def _fetch_collection(self, store: EntityStore, operation: str, loader, message: str):
        if not self._authorized(operation):
            return None
        return store.fetch(loader, message)


class AdminStore(DashboardMixin, DomainStore):
    name = "admin"
    required_roles = ADMIN_ROLES

    def __init__(self, service: AdminService, notifier: Optional[Notifier] = None) -> None:
        super().__init__(notifier)
        self.service = service
        self.users = EntityStore("admin.users", notifier=self.notifier)
        self.products = EntityStore("admin.products", notifier=self.notifier)
        self.orders = EntityStore("admin.orders", notifier=self.notifier)
        self.sellers = EntityStore("admin.sellers", notifier=self.notifier)
        self.reviews = EntityStore("admin.reviews", notifier=self.notifier)
        self.dashboard: Dict[str, Any] = empty_admin_dashboard()
        self.analytics: Dict[str, Any] = {}
        self.loading = False
        self.error: Optional[str] = None

    def event_handlers(self):
        return {
            "userRegistered": self._on_user_registered,
            "newOrder": self._on_new_order,
            "productCreated": self._on_product_created,
            "productUpdated": self._on_product_updated,
            "orderStatusChanged": self._on_order_status_changed,
            "reviewCreated": self._on_review_created,
        }

    def refresh(self) -> None:
        self.fetch_dashboard_data()

    def reset(self) -> None:
        for store in (self.users, self.products, self.orders, self.sellers, self.reviews):
            store.reset()
        with self._lock:
            self.dashboard = empty_admin_dashboard()
            self.analytics = {}
            self.error = None

    # ------------------------------------------------------------------
    # Fetches
    # ------------------------------------------------------------------

    def fetch_dashboard_data(self) -> Optional[Dict[str, Any]]:
        response = self._load("fetch_dashboard_data", self.service.get_dashboard_stats)
        if response and response.get("success") and isinstance(response.get("data"), dict):
            with self._lock:
                self.dashboard = {**empty_admin_dashboard(), **response["data"]}
        return self.dashboard if response else None

    def fetch_users(self, filters: Optional[Dict[str, Any]] = None):
        return self._fetch_collection(self.users, "fetch_users", lambda: self.service.get_users(filters), "Failed to fetch users")

    def fetch_products(self, filters: Optional[Dict[str, Any]] = None):
        return self._fetch_collection(self.products, "fetch_products", lambda: self.service.get_products(filters), "Failed to fetch products")

    def fetch_orders(self, filters: Optional[Dict[str, Any]] = None):
        return self._fetch_collection(self.orders, "fetch_orders", lambda: self.service.get_orders(filters), "Failed to fetch orders")

    def fetch_sellers(self, filters: Optional[Dict[str, Any]] = None):
        return self._fetch_collection(self.sellers, "fetch_sellers", lambda: self.service.get_sellers(filters), "Failed to fetch sellers")

    def fetch_reviews(self, filters: Optional[Dict[str, Any]] = None):
        return self._fetch_collection(self.reviews, "fetch_reviews", lambda: self.service.get_reviews(filters), "Failed to fetch reviews")

    def fetch_analytics(self, period: str = "month") -> Optional[Dict[str, Any]]:
        response = self._load("fetch_analytics", lambda: self.service.get_analytics(period))
        if response and response.get("success"):
            self.analytics = response.get("data") or {}
        return self.analytics if response else None

    # ------------------------------------------------------------------
    # Push events
    # ------------------------------------------------------------------

    def _on_user_registered(self, user: Entity) -> None:
        if not isinstance(user, dict):
            return
        with self._lock:
            is_new = self._insert(self.users, user)
            if is_new:
                self._bump("totalUsers")
            self.dashboard["recentUsers"] = prepend_unique(self.dashboard["recentUsers"], user, RECENT_LIMIT)
        if is_new:
            self.notifier.info(f"New user registered: {user.get('name', '')}")

    def _on_new_order(self, order: Entity) -> None:
        if not isinstance(order, dict):
            return
        with self._lock:
            is_new = self._insert(self.orders, order)
            if is_new:
                self._bump("totalOrders")
                self._bump("pendingOrders")
            self.dashboard["recentOrders"] = prepend_unique(self.dashboard["recentOrders"], order, RECENT_LIMIT)
        if is_new:
            self.notifier.info(f"New order received: #{order.get('orderNumber', entity_id_of(order))}")

    def _on_product_created(self, product: Entity) -> None:
        if not isinstance(product, dict):
            return
        with self._lock:
            is_new = self._insert(self.products, product)
            if is_new:
                self._bump("totalProducts")
                if product.get("status") == "pending":
                    self._bump("pendingProducts")
            self.dashboard["recentProducts"] = prepend_unique(self.dashboard["recentProducts"], product, RECENT_LIMIT)

    def _on_product_updated(self, product: Entity) -> None:
        if not isinstance(product, dict):
            return
        with self._lock:
            self.products.updated(product)
            self.dashboard["recentProducts"] = replace_by_id(self.dashboard["recentProducts"], product)

    def _on_order_status_changed(self, order: Entity) -> None:
        if not isinstance(order, dict):
            return
        with self._lock:
            self.orders.updated(order)
            self.dashboard["recentOrders"] = replace_by_id(self.dashboard["recentOrders"], order)

    def _on_review_created(self, review: Entity) -> None:
        self.reviews.created(review)
