"""Signed-in user's wishlist."""

from typing import Any, Callable, Dict, List, Optional

from luxgifts.api.account import WishlistService
from luxgifts.errors import ApiError
from luxgifts.notify import Notifier
from luxgifts.stores.base import ALL_ROLES, DomainStore, logger
from luxgifts.stores.cache import Entity, EntityStore

_CONNECTION_LOST = "Unable to connect to the server. Please check your internet connection."
_SESSION_EXPIRED = "Your session has expired. Please log in again."


def flatten_wishlist(response: Dict[str, Any]) -> Dict[str, Any]:
    """{data: {products: [{product, addedAt}]}} -> {data: [product + addedAt]}."""
    data = response.get("data")
    entries = data.get("products") if isinstance(data, dict) else None
    products = [
        {**entry["product"], "addedAt": entry.get("addedAt")}
        for entry in entries or []
        if isinstance(entry, dict) and isinstance(entry.get("product"), dict)
    ]
    return {**response, "data": products}


def wishlist_error(e: ApiError, forbidden: str, fallback: str) -> str:
    if e.status_code is None:
        return _CONNECTION_LOST
    if e.status_code == 401:
        return _SESSION_EXPIRED
    if e.status_code == 403:
        return forbidden
    return e.message or fallback


class WishlistStore(DomainStore):
    """
    Wishlisted products, keyed by product id.

    ``on_moved_to_cart`` is called after a successful move so the cart can
    reload (pass ServerCart.load).
    """

    name = "wishlist"
    required_roles = ALL_ROLES

    def __init__(
        self,
        service: WishlistService,
        notifier: Optional[Notifier] = None,
        on_moved_to_cart: Optional[Callable[[], Any]] = None,
    ) -> None:
        super().__init__(notifier)
        self.service = service
        self.items = EntityStore("wishlist", notifier=self.notifier)
        self.on_moved_to_cart = on_moved_to_cart
        self.error: Optional[str] = None

    @property
    def products(self) -> List[Entity]:
        return self.items.items

    @property
    def count(self) -> int:
        return len(self.items.items)

    def is_in_wishlist(self, product_id: str) -> bool:
        return self.items.get(product_id) is not None

    def refresh(self) -> None:
        self.fetch()

    def reset(self) -> None:
        self.items.reset()
        self.error = None

    def _signed_in(self, prompt: str) -> bool:
        if self.active:
            return True
        self.notifier.info(prompt)
        return False

    def _call(self, call: Callable[[], Dict[str, Any]], forbidden: str, fallback: str) -> Optional[Dict[str, Any]]:
        try:
            response = call()
        except ApiError as e:
            message = wishlist_error(e, forbidden, fallback)
            logger.error("store: name=wishlist call failed status=%s error=%s", e.status_code, e.message)
            self.error = message
            self.notifier.error(message)
            return None
        if not response.get("success"):
            message = response.get("message") or fallback
            logger.warning("store: name=wishlist call rejected: %s", message)
            self.error = message
            self.notifier.error(message)
            return None
        self.error = None
        return response

    def fetch(self) -> Optional[List[Entity]]:
        if not self._authorized("fetch"):
            return None
        return self.items.fetch(lambda: flatten_wishlist(self.service.get_wishlist()), "Failed to fetch wishlist")

    def add(self, product_id: str) -> bool:
        if not self._signed_in("Please login to add items to your wishlist"):
            return False
        if not product_id:
            self.notifier.error("Invalid product ID")
            return False
        if self.is_in_wishlist(product_id):
            self.notifier.info("Item is already in your wishlist")
            return True
        try:
            response = self.service.add_to_wishlist(product_id)
        except ApiError as e:
            if e.status_code == 409:
                message = "This item is already in your wishlist."
            else:
                message = wishlist_error(e, "You do not have permission to add items to this wishlist.",
                                         "Failed to add item to wishlist")
            self.error = message
            self.notifier.error(message)
            return False
        if not response.get("success"):
            self.notifier.error(response.get("message") or "Failed to add item to wishlist")
            return False
        self.notifier.success("Item added to wishlist")
        self.fetch()
        return True

    def remove(self, product_id: str) -> bool:
        if not self._signed_in("Please login to manage your wishlist"):
            return False
        if not self.is_in_wishlist(product_id):
            return True
        try:
            response = self.service.remove_from_wishlist(product_id)
        except ApiError as e:
            if e.status_code == 404:
                # Already gone on the server
                self.items.deleted(product_id)
                return True
            message = wishlist_error(e, "You do not have permission to modify this wishlist.",
                                     "Failed to remove item from wishlist")
            self.error = message
            self.notifier.error(message)
            return False
        if not response.get("success"):
            self.notifier.error(response.get("message") or "Failed to remove item from wishlist")
            return False
        self.items.deleted(product_id)
        self.notifier.success("Item removed from wishlist")
        return True

    def toggle(self, product_id: str) -> bool:
        if self.is_in_wishlist(product_id):
            return self.remove(product_id)
        return self.add(product_id)

    def clear(self) -> bool:
        if not self._signed_in("Please login to manage your wishlist"):
            return False
        if not self.count:
            self.notifier.info("Your wishlist is already empty")
            return True
        response = self._call(
            self.service.clear_wishlist,
            "You do not have permission to clear this wishlist.",
            "Failed to clear wishlist",
        )
        if response is None:
            return False
        self.items.reset()
        self.notifier.success("Wishlist cleared")
        return True

    def move_to_cart(self, product_id: str, quantity: int = 1) -> bool:
        if not self._signed_in("Please login to add items to your cart"):
            return False
        if not product_id:
            self.notifier.error("Invalid product ID")
            return False
        if not self.is_in_wishlist(product_id):
            self.notifier.info("Item is not in your wishlist")
            return False
        if quantity <= 0:
            self.notifier.error("Quantity must be greater than zero")
            return False
        logger.info("store: name=wishlist moving product=%s quantity=%s to cart", product_id, quantity)
        response = self._call(
            lambda: self.service.move_to_cart(product_id, quantity),
            "You do not have permission to move items to cart.",
            "Failed to move item to cart",
        )
        if response is None:
            return False
        self.items.deleted(product_id)
        self.notifier.success("Item moved to cart")
        if self.on_moved_to_cart is not None:
            self.on_moved_to_cart()
        return True
