"""Public product catalogue with a featured-products index."""

from typing import Any, Dict, List, Optional

from luxgifts.api.catalog import ProductService
from luxgifts.errors import ApiError
from luxgifts.notify import Notifier
from luxgifts.stores.base import DomainStore, logger
from luxgifts.stores.cache import Entity, EntityStore, entity_id_of


def is_featured(product: Entity) -> bool:
    return bool(product.get("featured"))


class ProductStore(DomainStore):
    name = "products"

    def __init__(self, service: ProductService, notifier: Optional[Notifier] = None) -> None:
        super().__init__(notifier)
        self.service = service
        self.products = EntityStore("products", {"featured": is_featured}, self.notifier)

    @property
    def featured_products(self) -> List[Entity]:
        return self.products.index("featured")

    def event_handlers(self):
        return {
            "productCreated": self._on_created,
            "productUpdated": self._on_updated,
            "productDeleted": self._on_deleted,
        }

    def refresh(self) -> None:
        self.fetch_products()

    def reset(self) -> None:
        self.products.reset()

    def fetch_products(self, filters: Optional[Dict[str, Any]] = None) -> Optional[List[Entity]]:
        return self.products.fetch(lambda: self.service.get_products(filters), "Failed to fetch products")

    def fetch_product(self, product_id: str) -> Optional[Entity]:
        try:
            return self.service.get_product(product_id).get("data")
        except ApiError as e:
            self.notifier.error(e.message)
            return None

    def add_product(self, product_data: Dict[str, Any]) -> Optional[Entity]:
        response = self._mutate(lambda: self.service.create_product(product_data), "Failed to add product")
        if response is None:
            return None
        product = response.get("data")
        # The productCreated echo may arrive before or after this; the cache merges either way
        if isinstance(product, dict):
            self.products.created(product)
        self.notifier.success("Product added successfully")
        return product

    def edit_product(self, product_id: str, product_data: Dict[str, Any]) -> Optional[Entity]:
        response = self._mutate(lambda: self.service.update_product(product_id, product_data), "Failed to update product")
        if response is None:
            return None
        product = response.get("data")
        if isinstance(product, dict):
            self.products.updated(product)
        self.notifier.success("Product updated successfully")
        return product

    def remove_product(self, product_id: str) -> bool:
        if self._mutate(lambda: self.service.delete_product(product_id), "Failed to delete product") is None:
            return False
        self.products.deleted(product_id)
        self.notifier.success("Product deleted successfully")
        return True

    def _on_created(self, product: Entity) -> None:
        product_id = entity_id_of(product)
        known = self.products.get(product_id) is not None
        logger.debug("store: name=products event=productCreated id=%s known=%s", product_id, known)
        self.products.created(product)
        if not known and self.products.get(product_id) is not None:
            self.notifier.info(f"New product added: {product.get('name', '')}")

    def _on_updated(self, product: Entity) -> None:
        self.products.updated(product)

    def _on_deleted(self, product_id: Any) -> None:
        self.products.deleted(product_id)
