"""
Server-backed cart for signed-in buyers.

Anonymous sessions keep the Cart purely local. After login, sync() pushes
the local lines to the account cart and reloads the merged result; from then
on every change goes through the API and the local Cart mirrors the reply.
"""

from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from luxgifts.api.account import CartService
from luxgifts.checkout.cart import Cart, CartItem
from luxgifts.errors import ApiError
from luxgifts.notify import LoggingNotifier, Notifier
from luxgifts.utils.logger import get_logger

logger = get_logger("checkout.server_cart")


def _lines(data: Any) -> Optional[List[CartItem]]:
    """Parse ``data.items`` into cart lines; None when the reply carries no item list."""
    if not isinstance(data, dict) or not isinstance(data.get("items"), list):
        return None
    lines = []
    for entry in data["items"]:
        if not isinstance(entry, dict):
            continue
        try:
            lines.append(CartItem.from_server(entry))
        except ValidationError as e:
            logger.warning("cart: skipping malformed server line error=%s", e.errors()[0].get("msg"))
    return lines


class ServerCart:
    def __init__(self, service: CartService, cart: Optional[Cart] = None, notifier: Optional[Notifier] = None):
        self.service = service
        self.cart = cart if cart is not None else Cart()
        self.notifier = notifier or LoggingNotifier()
        self.loading = False
        self.error: Optional[str] = None

    def _apply(self, response: Dict[str, Any]) -> bool:
        lines = _lines(response.get("data"))
        if lines is None:
            return False
        self.cart.replace(lines)
        return True

    def _call(self, operation: str, call, failure_message: str) -> Optional[Dict[str, Any]]:
        self.loading = True
        try:
            response = call()
        except ApiError as e:
            logger.error("cart: %s failed error=%s", operation, e.message)
            self.error = e.message or failure_message
            self.notifier.error(failure_message)
            return None
        finally:
            self.loading = False
        self.error = None
        return response

    def load(self) -> bool:
        """Replace the local lines with the account cart. A failed load keeps the local cart."""
        response = self._call("load", self.service.get_cart, "Failed to fetch cart")
        return response is not None and self._apply(response)

    def sync(self) -> bool:
        """Merge the anonymous cart into the account cart, then mirror the result."""
        if self.cart.is_empty:
            return self.load()
        items = [
            {"productId": item.id, "name": item.name, "price": item.price, "quantity": item.quantity}
            for item in self.cart.items
        ]
        logger.info("cart: syncing lines=%s", len(items))
        if self._call("sync", lambda: self.service.sync_cart(items), "Failed to sync your cart") is None:
            return False
        if not self.load():
            return False
        self.notifier.success("Your cart has been synced")
        return True

    def add(self, product: Dict[str, Any], quantity: int = 1) -> bool:
        product_id = str(product.get("_id") or product.get("id") or "")
        response = self._call(
            "add", lambda: self.service.add_to_cart(product_id, quantity), "Failed to add item to cart"
        )
        if response is None or not self._apply(response):
            return False
        self.notifier.success("Item added to cart")
        return True

    def update(self, item_id: str, quantity: int) -> bool:
        if quantity <= 0:
            return self.remove(item_id)
        response = self._call(
            "update", lambda: self.service.update_cart_item(item_id, quantity), "Failed to update cart item"
        )
        return response is not None and self._apply(response)

    def remove(self, item_id: str) -> bool:
        response = self._call(
            "remove", lambda: self.service.remove_from_cart(item_id), "Failed to remove item from cart"
        )
        if response is None or not self._apply(response):
            return False
        self.notifier.success("Item removed from cart")
        return True

    def clear(self) -> bool:
        if self._call("clear", self.service.clear_cart, "Failed to clear cart") is None:
            return False
        self.cart.clear()
        self.notifier.success("Cart cleared")
        return True
