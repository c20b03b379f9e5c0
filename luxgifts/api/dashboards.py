"""Role dashboards: admin, seller and super-admin endpoints."""

from typing import Any, Dict, List, Optional

from luxgifts.api.client import ApiClient


class AdminService:
    def __init__(self, api: ApiClient):
        self.api = api

    def get_dashboard_stats(self) -> Dict[str, Any]:
        return self.api.get("/admin/dashboard", fallback="Failed to fetch dashboard data")

    def get_users(self, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self.api.get("/admin/users", params=filters, fallback="Failed to fetch users")

    def get_products(self, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self.api.get("/admin/products", params=filters, fallback="Failed to fetch products")

    def get_orders(self, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self.api.get("/admin/orders", params=filters, fallback="Failed to fetch orders")

    def get_sellers(self, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self.api.get("/admin/sellers", params=filters, fallback="Failed to fetch sellers")

    def get_reviews(self, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self.api.get("/admin/reviews", params=filters, fallback="Failed to fetch reviews")

    def get_analytics(self, period: str = "month") -> Dict[str, Any]:
        return self.api.get("/admin/analytics", params={"period": period}, fallback="Failed to fetch analytics")


class SellerService:
    def __init__(self, api: ApiClient):
        self.api = api

    def get_dashboard(self) -> Dict[str, Any]:
        return self.api.get("/seller/dashboard", fallback="Failed to fetch dashboard data")

    def get_products(self, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self.api.get("/seller/products", params=filters, fallback="Failed to fetch products")

    def get_orders(self, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self.api.get("/seller/orders", params=filters, fallback="Failed to fetch orders")

    def get_analytics(self, period: str = "month") -> Dict[str, Any]:
        return self.api.get("/seller/analytics", params={"period": period}, fallback="Failed to fetch analytics")

    def get_earnings(self, period: str = "month") -> Dict[str, Any]:
        return self.api.get("/seller/earnings", params={"period": period}, fallback="Failed to fetch earnings")


class SuperAdminService:
    def __init__(self, api: ApiClient):
        self.api = api

    def get_dashboard_stats(self) -> Dict[str, Any]:
        return self.api.get("/super-admin/dashboard", fallback="Failed to fetch dashboard data")

    def get_user_roles(self, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self.api.get("/super-admin/admins", params=filters, fallback="Failed to fetch user roles")

    def update_user_role(self, user_id: str, role: str) -> Dict[str, Any]:
        return self.api.put(f"/super-admin/admins/{user_id}", {"role": role}, fallback="Failed to update user role")

    def get_categories(self) -> Dict[str, Any]:
        return self.api.get("/categories", fallback="Failed to fetch categories")

    def create_category(self, category_data: Dict[str, Any]) -> Dict[str, Any]:
        return self.api.post("/categories", category_data, fallback="Failed to create category")

    def update_category(self, category_id: str, category_data: Dict[str, Any]) -> Dict[str, Any]:
        return self.api.put(f"/categories/{category_id}", category_data, fallback="Failed to update category")

    def delete_category(self, category_id: str) -> Dict[str, Any]:
        return self.api.delete(f"/categories/{category_id}", fallback="Failed to delete category")

    def get_platform_settings(self) -> Dict[str, Any]:
        return self.api.get("/super-admin/settings", fallback="Failed to fetch platform settings")

    def update_platform_settings(self, settings_data: Dict[str, Any]) -> Dict[str, Any]:
        return self.api.put("/super-admin/settings", settings_data, fallback="Failed to update platform settings")

    def get_audit_logs(self, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self.api.get("/super-admin/logs", params=filters, fallback="Failed to fetch audit logs")

    def get_featured_products(self) -> Dict[str, Any]:
        return self.api.get("/super-admin/featured-products", fallback="Failed to fetch featured products")

    def update_featured_products(self, product_ids: List[str]) -> Dict[str, Any]:
        return self.api.put(
            "/super-admin/featured-products", {"productIds": product_ids},
            fallback="Failed to update featured products",
        )
