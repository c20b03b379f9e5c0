"""Per-account endpoints: server cart, wishlist and notifications."""

from typing import Any, Dict, List, Optional

from luxgifts.api.client import ApiClient


class CartService:
    def __init__(self, api: ApiClient):
        self.api = api

    def get_cart(self) -> Dict[str, Any]:
        return self.api.get("/cart", fallback="Failed to fetch cart")

    def add_to_cart(self, product_id: str, quantity: int = 1) -> Dict[str, Any]:
        body = {"productId": product_id, "quantity": quantity}
        return self.api.post("/cart", body, fallback="Failed to add item to cart")

    def update_cart_item(self, item_id: str, quantity: int) -> Dict[str, Any]:
        return self.api.put(f"/cart/{item_id}", {"quantity": quantity}, fallback="Failed to update cart item")

    def remove_from_cart(self, item_id: str) -> Dict[str, Any]:
        return self.api.delete(f"/cart/{item_id}", fallback="Failed to remove item from cart")

    def clear_cart(self) -> Dict[str, Any]:
        return self.api.delete("/cart", fallback="Failed to clear cart")

    def apply_coupon(self, code: str) -> Dict[str, Any]:
        return self.api.post("/cart/apply-coupon", {"code": code}, fallback="Failed to apply coupon")

    def remove_coupon(self) -> Dict[str, Any]:
        return self.api.delete("/cart/remove-coupon", fallback="Failed to remove coupon")

    def get_shipping_methods(self) -> Dict[str, Any]:
        return self.api.get("/cart/shipping-methods", fallback="Failed to fetch shipping methods")

    def set_shipping_method(self, shipping_data: Dict[str, Any]) -> Dict[str, Any]:
        return self.api.post("/cart/shipping-method", shipping_data, fallback="Failed to set shipping method")

    def calculate_totals(self) -> Dict[str, Any]:
        return self.api.get("/cart/calculate", fallback="Failed to calculate cart totals")

    def sync_cart(self, items: List[Dict[str, Any]]) -> Dict[str, Any]:
        return self.api.post("/cart/sync", {"items": items}, fallback="Failed to sync cart")


class WishlistService:
    def __init__(self, api: ApiClient):
        self.api = api

    def get_wishlist(self, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self.api.get("/wishlist", params=params, fallback="Failed to fetch wishlist")

    def add_to_wishlist(self, product_id: str) -> Dict[str, Any]:
        return self.api.post("/wishlist", {"productId": product_id}, fallback="Failed to add item to wishlist")

    def remove_from_wishlist(self, product_id: str) -> Dict[str, Any]:
        return self.api.delete(f"/wishlist/{product_id}", fallback="Failed to remove item from wishlist")

    def check_wishlist(self, product_id: str) -> Dict[str, Any]:
        return self.api.get(f"/wishlist/check/{product_id}", fallback="Failed to check wishlist")

    def clear_wishlist(self) -> Dict[str, Any]:
        return self.api.delete("/wishlist", fallback="Failed to clear wishlist")

    def move_to_cart(self, product_id: str, quantity: int = 1) -> Dict[str, Any]:
        return self.api.post(
            f"/wishlist/{product_id}/move-to-cart", {"quantity": quantity}, fallback="Failed to move item to cart"
        )


class NotificationService:
    def __init__(self, api: ApiClient):
        self.api = api

    def get_notifications(self, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """``params`` may carry page, limit, read and type."""
        return self.api.get("/notifications", params=params, fallback="Failed to fetch notifications")

    def get_unread_count(self) -> Dict[str, Any]:
        return self.api.get("/notifications/unread-count", fallback="Failed to fetch unread count")

    def mark_as_read(self, notification_id: str) -> Dict[str, Any]:
        return self.api.put(f"/notifications/{notification_id}/read", fallback="Failed to mark notification as read")

    def mark_all_as_read(self) -> Dict[str, Any]:
        return self.api.put("/notifications/read-all", fallback="Failed to mark all notifications as read")

    def delete_notification(self, notification_id: str) -> Dict[str, Any]:
        return self.api.delete(f"/notifications/{notification_id}", fallback="Failed to delete notification")

    def delete_read_notifications(self) -> Dict[str, Any]:
        return self.api.delete("/notifications/read", fallback="Failed to delete read notifications")
