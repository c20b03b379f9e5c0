"""Tests for the server-backed cart used after login."""

from unittest.mock import MagicMock

import pytest

from luxgifts.api import CartService
from luxgifts.checkout import Cart, CartItem, ServerCart
from luxgifts.errors import ApiError


def cart_reply(*lines):
    return {"success": True, "data": {"items": list(lines)}}


def line(product_id, price, quantity=1, **product):
    return {"_id": f"line-{product_id}", "product": {"_id": product_id, "name": product_id.title(), "price": price, **product},
            "quantity": quantity}


@pytest.fixture
def cart_service():
    service = MagicMock(spec=CartService)
    service.get_cart.return_value = cart_reply(line("rose", 50, 2))
    return service


@pytest.fixture
def local_cart():
    return Cart([CartItem(id="candle", name="Candle", price=20, quantity=1)])


class TestFromServer:
    def test_nested_product_line(self):
        item = CartItem.from_server({"product": {"_id": "p1", "name": "Scarf", "price": 80}, "quantity": 3, "price": 75})
        assert (item.id, item.name, item.price, item.quantity) == ("p1", "Scarf", 75, 3)

    def test_flat_line_with_product_id(self):
        item = CartItem.from_server({"_id": "line-1", "productId": "p2", "name": "Box", "price": 10, "quantity": 2})
        assert item.id == "p2"
        assert item.quantity == 2

    def test_product_reference_only(self):
        item = CartItem.from_server({"product": "p3", "price": 5})
        assert item.id == "p3"
        assert item.quantity == 1


class TestServerCart:
    def test_sync_pushes_local_lines_then_mirrors_server(self, cart_service, local_cart, notifier):
        cart_service.sync_cart.return_value = {"success": True}
        cart_service.get_cart.return_value = cart_reply(line("candle", 20, 1), line("rose", 50, 2))
        server = ServerCart(cart_service, local_cart, notifier)

        assert server.sync() is True
        cart_service.sync_cart.assert_called_once_with(
            [{"productId": "candle", "name": "Candle", "price": 20.0, "quantity": 1}]
        )
        assert [(item.id, item.quantity) for item in local_cart.items] == [("candle", 1), ("rose", 2)]
        assert local_cart.subtotal_cents == 12000
        assert notifier.of("success") == ["Your cart has been synced"]

    def test_sync_with_empty_local_cart_only_loads(self, cart_service, notifier):
        cart = Cart()
        assert ServerCart(cart_service, cart, notifier).sync() is True
        cart_service.sync_cart.assert_not_called()
        assert [item.id for item in cart.items] == ["rose"]
        assert notifier.of("success") == []

    def test_sync_failure_keeps_local_cart(self, cart_service, local_cart, notifier):
        cart_service.sync_cart.side_effect = ApiError("Failed to sync cart", status_code=500)
        server = ServerCart(cart_service, local_cart, notifier)
        assert server.sync() is False
        assert [item.id for item in local_cart.items] == ["candle"]
        assert notifier.of("error") == ["Failed to sync your cart"]
        cart_service.get_cart.assert_not_called()

    def test_load_failure_keeps_local_cart(self, cart_service, local_cart, notifier):
        cart_service.get_cart.side_effect = ApiError("down")
        assert ServerCart(cart_service, local_cart, notifier).load() is False
        assert [item.id for item in local_cart.items] == ["candle"]
        assert notifier.of("error") == ["Failed to fetch cart"]

    def test_malformed_line_skipped(self, cart_service, notifier):
        cart_service.get_cart.return_value = cart_reply(line("rose", 50), line("broken", -5))
        cart = Cart()
        ServerCart(cart_service, cart, notifier).load()
        assert [item.id for item in cart.items] == ["rose"]

    def test_add_mirrors_reply(self, cart_service, notifier):
        cart_service.add_to_cart.return_value = cart_reply(line("rose", 50, 2), line("scarf", 80))
        cart = Cart()
        server = ServerCart(cart_service, cart, notifier)
        assert server.add({"_id": "scarf", "price": 80}) is True
        cart_service.add_to_cart.assert_called_once_with("scarf", 1)
        assert [item.id for item in cart.items] == ["rose", "scarf"]
        assert notifier.of("success") == ["Item added to cart"]

    def test_add_failure(self, cart_service, notifier):
        cart_service.add_to_cart.side_effect = ApiError("Out of stock", status_code=400)
        server = ServerCart(cart_service, Cart(), notifier)
        assert server.add({"_id": "scarf"}) is False
        assert server.error == "Out of stock"
        assert notifier.of("error") == ["Failed to add item to cart"]

    def test_update_quantity(self, cart_service, notifier):
        cart_service.update_cart_item.return_value = cart_reply(line("rose", 50, 5))
        cart = Cart()
        assert ServerCart(cart_service, cart, notifier).update("line-rose", 5) is True
        cart_service.update_cart_item.assert_called_once_with("line-rose", 5)
        assert cart.item_count == 5

    def test_update_to_zero_removes(self, cart_service, notifier):
        cart_service.remove_from_cart.return_value = cart_reply()
        cart = Cart([CartItem(id="rose", price=50)])
        assert ServerCart(cart_service, cart, notifier).update("line-rose", 0) is True
        cart_service.update_cart_item.assert_not_called()
        assert cart.is_empty
        assert notifier.of("success") == ["Item removed from cart"]

    def test_clear(self, cart_service, local_cart, notifier):
        cart_service.clear_cart.return_value = {"success": True}
        assert ServerCart(cart_service, local_cart, notifier).clear() is True
        assert local_cart.is_empty
        assert notifier.of("success") == ["Cart cleared"]

    def test_clear_failure_keeps_lines(self, cart_service, local_cart, notifier):
        cart_service.clear_cart.side_effect = ApiError("down")
        assert ServerCart(cart_service, local_cart, notifier).clear() is False
        assert len(local_cart) == 1
        assert notifier.of("error") == ["Failed to clear cart"]


class TestCartServiceRoutes:
    def test_sync_body(self, api, router):
        router.add("POST", "/api/cart/sync", {"success": True})
        CartService(api).sync_cart([{"productId": "p1", "quantity": 2}])
        assert router.body(router.requests[0]) == {"items": [{"productId": "p1", "quantity": 2}]}

    def test_item_routes(self, api, router):
        router.add("POST", "/api/cart", {"success": True})
        router.add("PUT", "/api/cart/line-1", {"success": True})
        router.add("DELETE", "/api/cart/line-1", {"success": True})
        service = CartService(api)
        service.add_to_cart("p1", 2)
        service.update_cart_item("line-1", 3)
        service.remove_from_cart("line-1")
        assert router.body(router.calls("POST", "/api/cart")[0]) == {"productId": "p1", "quantity": 2}
        assert router.body(router.calls("PUT", "/api/cart/line-1")[0]) == {"quantity": 3}
        assert len(router.calls("DELETE", "/api/cart/line-1")) == 1

    def test_coupon_and_shipping_routes(self, api, router):
        router.add("POST", "/api/cart/apply-coupon", {"success": True})
        router.add("DELETE", "/api/cart/remove-coupon", {"success": True})
        router.add("POST", "/api/cart/shipping-method", {"success": True})
        service = CartService(api)
        service.apply_coupon("LOVE10")
        service.remove_coupon()
        service.set_shipping_method({"method": "express"})
        assert router.body(router.calls("POST", "/api/cart/apply-coupon")[0]) == {"code": "LOVE10"}
        assert router.body(router.calls("POST", "/api/cart/shipping-method")[0]) == {"method": "express"}
        assert len(router.calls("DELETE", "/api/cart/remove-coupon")) == 1
