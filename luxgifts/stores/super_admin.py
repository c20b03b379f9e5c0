"""Super-admin console: roles, categories, platform settings and audit trail."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from luxgifts.api.dashboards import SuperAdminService
from luxgifts.errors import ApiError
from luxgifts.notify import Notifier
from luxgifts.stores.admin import DashboardMixin
from luxgifts.stores.base import SUPER_ADMIN, DomainStore, logger, push_recent
from luxgifts.stores.cache import Entity, EntityStore, entity_id_of

ACTIVITY_LIMIT = 10
ALERT_LIMIT = 10


def empty_super_admin_dashboard() -> Dict[str, Any]:
    return {"stats": {}, "systemHealth": {}, "recentActivities": []}


def _activity(kind: str, data: Any) -> Dict[str, Any]:
    return {"type": kind, "data": data, "timestamp": datetime.now(timezone.utc).isoformat()}


class SuperAdminStore(DashboardMixin, DomainStore):
    name = "super_admin"
    required_roles = frozenset({SUPER_ADMIN})

    def __init__(self, service: SuperAdminService, notifier: Optional[Notifier] = None) -> None:
        super().__init__(notifier)
        self.service = service
        self.user_roles = EntityStore("super_admin.user_roles", notifier=self.notifier)
        self.categories = EntityStore("super_admin.categories", notifier=self.notifier)
        self.audit_logs = EntityStore("super_admin.audit_logs", notifier=self.notifier)
        self.dashboard: Dict[str, Any] = empty_super_admin_dashboard()
        self.platform_settings: Dict[str, Any] = {}
        self.featured_products: List[Any] = []
        self.loading = False
        self.error: Optional[str] = None

    def event_handlers(self):
        return {
            "systemAlert": self._on_system_alert,
            "userRoleChanged": self._on_user_role_changed,
            "categoryCreated": self.categories.created,
            "categoryUpdated": self.categories.updated,
            "categoryDeleted": self.categories.deleted,
            "platformSettingsUpdated": self._on_platform_settings_updated,
            "auditLogCreated": self._on_audit_log_created,
        }

    def refresh(self) -> None:
        self.fetch_dashboard_data()

    def reset(self) -> None:
        for store in (self.user_roles, self.categories, self.audit_logs):
            store.reset()
        with self._lock:
            self.dashboard = empty_super_admin_dashboard()
            self.platform_settings = {}
            self.featured_products = []
            self.error = None

    @property
    def recent_activities(self) -> List[Dict[str, Any]]:
        return list(self.dashboard.get("recentActivities") or [])

    @property
    def alerts(self) -> List[Dict[str, Any]]:
        return list((self.dashboard.get("systemHealth") or {}).get("alerts") or [])

    def _record_activity(self, kind: str, data: Any) -> None:
        self.dashboard["recentActivities"] = push_recent(
            self.dashboard.get("recentActivities") or [], _activity(kind, data), ACTIVITY_LIMIT
        )

    # ------------------------------------------------------------------
    # Fetches and mutations
    # ------------------------------------------------------------------

    def fetch_dashboard_data(self) -> Optional[Dict[str, Any]]:
        response = self._load("fetch_dashboard_data", self.service.get_dashboard_stats)
        if response and response.get("success") and isinstance(response.get("data"), dict):
            with self._lock:
                self.dashboard = {**empty_super_admin_dashboard(), **response["data"]}
        return self.dashboard if response else None

    def fetch_user_roles(self, filters: Optional[Dict[str, Any]] = None):
        return self._fetch_collection(
            self.user_roles, "fetch_user_roles", lambda: self.service.get_user_roles(filters), "Failed to fetch user roles"
        )

    def change_user_role(self, user_id: str, role: str) -> Optional[Dict[str, Any]]:
        response = self._load("change_user_role", lambda: self.service.update_user_role(user_id, role))
        if response and response.get("success"):
            self._patch_role(user_id, role)
            self.notifier.success(f"User role updated to {role}")
        return response

    def _patch_role(self, user_id: str, role: str) -> None:
        current = self.user_roles.get(user_id)
        if current is not None:
            self.user_roles.updated({**current, "role": role})

    def fetch_categories(self):
        return self._fetch_collection(self.categories, "fetch_categories", self.service.get_categories, "Failed to fetch categories")

    def add_category(self, category_data: Dict[str, Any]) -> Optional[Entity]:
        response = self._load("add_category", lambda: self.service.create_category(category_data))
        category = response.get("data") if response and response.get("success") else None
        if isinstance(category, dict):
            self.categories.created(category)
            self.notifier.success("Category created successfully")
        return category

    def edit_category(self, category_id: str, category_data: Dict[str, Any]) -> Optional[Entity]:
        response = self._load("edit_category", lambda: self.service.update_category(category_id, category_data))
        category = response.get("data") if response and response.get("success") else None
        if isinstance(category, dict):
            self.categories.updated(category)
            self.notifier.success("Category updated successfully")
        return category

    def remove_category(self, category_id: str) -> bool:
        response = self._load("remove_category", lambda: self.service.delete_category(category_id))
        if not response or not response.get("success"):
            return False
        self.categories.deleted(category_id)
        self.notifier.success("Category deleted successfully")
        return True

    def fetch_platform_settings(self) -> Optional[Dict[str, Any]]:
        response = self._load("fetch_platform_settings", self.service.get_platform_settings)
        if response and response.get("success"):
            self.platform_settings = response.get("data") or {}
        return self.platform_settings if response else None

    def save_platform_settings(self, settings_data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        response = self._load("save_platform_settings", lambda: self.service.update_platform_settings(settings_data))
        if response and response.get("success"):
            self.platform_settings = response.get("data") or {}
            self.notifier.success("Platform settings updated successfully")
            return self.platform_settings
        return None

    def fetch_audit_logs(self, filters: Optional[Dict[str, Any]] = None):
        return self._fetch_collection(
            self.audit_logs, "fetch_audit_logs", lambda: self.service.get_audit_logs(filters), "Failed to fetch audit logs"
        )

    def fetch_featured_products(self) -> Optional[List[Any]]:
        response = self._load("fetch_featured_products", self.service.get_featured_products)
        if response and response.get("success"):
            self.featured_products = list(response.get("data") or [])
        return self.featured_products if response else None

    def save_featured_products(self, product_ids: List[str]) -> Optional[List[Any]]:
        response = self._load("save_featured_products", lambda: self.service.update_featured_products(product_ids))
        if response and response.get("success"):
            self.featured_products = list(response.get("data") or [])
            self.notifier.success("Featured products updated successfully")
            return self.featured_products
        return None

    # ------------------------------------------------------------------
    # Push events
    # ------------------------------------------------------------------

    def _on_system_alert(self, alert: Dict[str, Any]) -> None:
        if not isinstance(alert, dict):
            return
        with self._lock:
            health = dict(self.dashboard.get("systemHealth") or {})
            health["alerts"] = push_recent(health.get("alerts") or [], alert, ALERT_LIMIT)
            self.dashboard["systemHealth"] = health
            self._record_activity("alert", alert)
        logger.warning("store: name=super_admin system alert message=%s", alert.get("message"))
        self.notifier.warning(f"System Alert: {alert.get('message', '')}")

    def _on_user_role_changed(self, user: Entity) -> None:
        user_id = entity_id_of(user)
        if user_id is None or not isinstance(user, dict):
            return
        with self._lock:
            if user.get("role"):
                self._patch_role(user_id, user["role"])
            self._record_activity("roleChange", user)

    def _on_platform_settings_updated(self, settings: Dict[str, Any]) -> None:
        if isinstance(settings, dict):
            self.platform_settings = settings

    def _on_audit_log_created(self, log: Entity) -> None:
        with self._lock:
            self.audit_logs.created(log)
            self._record_activity("audit", log)
