"""Order endpoints."""

from typing import Any, Dict, Optional

from luxgifts.api.client import ApiClient
from luxgifts.errors import ApiError
from luxgifts.utils.logger import get_logger

logger = get_logger("api.orders")

# Role-specific prefixes for order mutations
_ROLE_PREFIX = {
    "seller": "/seller",
    "admin": "/admin",
    "super_admin": "/super-admin",
}


def _role_path(order_id: str, action: str, user_role: Optional[str]) -> str:
    return f"{_ROLE_PREFIX.get(user_role or '', '')}/orders/{order_id}/{action}"


class OrderService:
    def __init__(self, api: ApiClient):
        self.api = api

    def create_order(self, order_data: Dict[str, Any]) -> Dict[str, Any]:
        logger.info("orders: method=create_order items=%s", len(order_data.get("items", [])))
        return self.api.post("/orders", order_data, fallback="Failed to create order")

    def get_user_orders(self, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """List the signed-in user's orders; older deployments only expose /orders/my-orders."""
        try:
            return self.api.get("/orders/user", params=params, fallback="Failed to fetch orders")
        except ApiError as e:
            logger.warning("orders: method=get_user_orders primary endpoint failed (%s), trying /orders/my-orders", e.message)
            return self.api.get("/orders/my-orders", params=params, fallback="Failed to fetch orders")

    def get_order(self, order_id: str) -> Dict[str, Any]:
        return self.api.get(f"/orders/{order_id}", fallback="Failed to fetch order details")

    def list_orders(self, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self.api.get("/orders", params=params, fallback="Failed to fetch orders")

    def get_seller_orders(self, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self.api.get("/seller/orders", params=params, fallback="Failed to fetch seller orders")

    def get_admin_orders(self, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self.api.get("/admin/orders", params=params, fallback="Failed to fetch admin orders")

    def get_super_admin_orders(self, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self.api.get("/super-admin/orders", params=params, fallback="Failed to fetch super admin orders")

    def update_order_status(
        self, order_id: str, status_data: Dict[str, Any], user_role: Optional[str] = None
    ) -> Dict[str, Any]:
        path = _role_path(order_id, "status", user_role)
        logger.info("orders: method=update_order_status order_id=%s role=%s status=%s", order_id, user_role, status_data.get("status"))
        return self.api.put(path, status_data, fallback="Failed to update order status")

    def add_order_tracking(
        self, order_id: str, tracking_data: Dict[str, Any], user_role: Optional[str] = None
    ) -> Dict[str, Any]:
        path = _role_path(order_id, "tracking", user_role)
        return self.api.put(path, tracking_data, fallback="Failed to add tracking information")

    def cancel_order(self, order_id: str, cancel_data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        logger.info("orders: method=cancel_order order_id=%s", order_id)
        return self.api.put(f"/orders/{order_id}/cancel", cancel_data or {}, fallback="Failed to cancel order")

    def get_order_tracking(self, order_id: str) -> Dict[str, Any]:
        return self.api.get(f"/orders/{order_id}/tracking", fallback="Failed to fetch tracking information")

    def request_return(self, order_id: str, return_data: Dict[str, Any]) -> Dict[str, Any]:
        return self.api.post(f"/orders/{order_id}/return", return_data, fallback="Failed to request return")

    def get_order_invoice(self, order_id: str) -> bytes:
        return self.api.get_bytes(f"/orders/{order_id}/invoice", fallback="Failed to fetch invoice")

    def get_order_receipt(self, order_id: str) -> bytes:
        return self.api.get_bytes(f"/orders/{order_id}/receipt", fallback="Failed to fetch receipt")
