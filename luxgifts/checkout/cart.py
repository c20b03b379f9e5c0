"""
Cart state read by checkout.

Prices are rupee amounts as the catalogue sends them; totals are worked out
in integer paise by luxgifts.checkout.totals.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from luxgifts.utils.logger import get_logger

logger = get_logger("checkout.cart")


class CartItem(BaseModel):
    """One line in the cart."""
    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., description="Product id")
    name: str = Field("", description="Product name at the time it was added")
    price: float = Field(..., ge=0, description="Unit price in rupees")
    quantity: int = Field(1, ge=1)
    image: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    description: str = ""
    seller: Optional[str] = Field(None, description="Seller id when the catalogue provided one")

    @property
    def price_cents(self) -> int:
        return round(self.price * 100)

    @property
    def line_total_cents(self) -> int:
        return self.price_cents * self.quantity

    @classmethod
    def from_product(cls, product: Dict[str, Any], quantity: int = 1) -> "CartItem":
        seller = product.get("seller")
        if isinstance(seller, dict):
            seller = seller.get("_id") or seller.get("id")
        images = product.get("images") or []
        return cls(
            id=str(product.get("_id") or product.get("id")),
            name=product.get("name", ""),
            price=product.get("price", 0),
            quantity=quantity,
            image=product.get("image") or (images[0] if images else None),
            tags=product.get("tags") or [],
            description=product.get("description") or "",
            seller=str(seller) if seller else None,
        )

    @classmethod
    def from_server(cls, entry: Dict[str, Any]) -> "CartItem":
        """A server cart line: either {product: {...}, quantity, price} or a flat product with productId."""
        product = entry.get("product")
        if isinstance(product, dict):
            merged = dict(product)
            if entry.get("price") is not None:
                merged["price"] = entry["price"]
        else:
            merged = dict(entry)
            product_id = product or entry.get("productId")
            if product_id:
                merged["_id"] = product_id
        return cls.from_product(merged, quantity=int(entry.get("quantity") or 1))


class Cart:
    def __init__(self, items: Optional[List[CartItem]] = None):
        self._items: List[CartItem] = list(items or [])

    @property
    def items(self) -> List[CartItem]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    @property
    def is_empty(self) -> bool:
        return not self._items

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self._items)

    @property
    def subtotal_cents(self) -> int:
        return sum(item.line_total_cents for item in self._items)

    def find(self, product_id: str) -> Optional[CartItem]:
        for item in self._items:
            if item.id == product_id:
                return item
        return None

    def add(self, item: CartItem) -> CartItem:
        """Add ``item``; an item already in the cart has its quantity increased."""
        existing = self.find(item.id)
        if existing is None:
            self._items.append(item)
            logger.debug("cart: added id=%s quantity=%s", item.id, item.quantity)
            return item
        merged = existing.model_copy(update={"quantity": existing.quantity + item.quantity})
        self._replace(merged)
        return merged

    def update_quantity(self, product_id: str, quantity: int) -> Optional[CartItem]:
        """Set the quantity of a line. Zero or less removes it."""
        if quantity <= 0:
            self.remove(product_id)
            return None
        existing = self.find(product_id)
        if existing is None:
            return None
        updated = existing.model_copy(update={"quantity": quantity})
        self._replace(updated)
        return updated

    def remove(self, product_id: str) -> bool:
        before = len(self._items)
        self._items = [item for item in self._items if item.id != product_id]
        return len(self._items) != before

    def clear(self) -> None:
        self._items = []
        logger.debug("cart: cleared")

    def replace(self, items: List[CartItem]) -> None:
        self._items = list(items)
        logger.debug("cart: replaced lines=%s", len(self._items))

    def _replace(self, item: CartItem) -> None:
        self._items = [item if current.id == item.id else current for current in self._items]

    def summary(self) -> List[Dict[str, Any]]:
        """Line-item summary sent with coupon validation requests."""
        return [
            {"productId": item.id, "quantity": item.quantity, "price": item.price}
            for item in self._items
        ]
