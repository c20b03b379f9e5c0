"""Tests for SessionManager: one role evaluation drives every store."""

from unittest.mock import MagicMock

import pytest

from luxgifts.api import AdminService, CouponService, ProductService, SellerService, OrderService, UserService
from luxgifts.session import SessionManager
from luxgifts.stores import AdminStore, CouponStore, ProductStore, SellerStore, UserStore


def ok(data=None):
    return {"success": True, "data": data}


@pytest.fixture
def services():
    products = MagicMock(spec=ProductService)
    products.get_products.return_value = ok([])
    users = MagicMock(spec=UserService)
    users.get_profile.return_value = ok({"_id": "u1"})
    coupons = MagicMock(spec=CouponService)
    coupons.get_coupons.return_value = ok([])
    admin = MagicMock(spec=AdminService)
    admin.get_dashboard_stats.return_value = ok({"stats": {}})
    seller = MagicMock(spec=SellerService)
    seller.get_dashboard.return_value = ok({"stats": {}})
    return {"products": products, "users": users, "coupons": coupons, "admin": admin, "seller": seller}


@pytest.fixture
def session(api, channel, services):
    stores = [
        ProductStore(services["products"]),
        UserStore(services["users"]),
        CouponStore(services["coupons"]),
        AdminStore(services["admin"]),
        SellerStore(services["seller"], MagicMock(spec=OrderService)),
    ]
    return SessionManager(api, channel, stores)


class TestSessionManager:
    def test_anonymous_start_only_public_stores(self, session):
        session.start()
        assert session.active_stores() == ["products", "coupons"]

    def test_login_connects_and_activates_role_stores(self, session, socket_factory, api):
        session.login("tok-9", {"_id": "a1", "role": "admin"})
        assert api.token == "tok-9"
        assert socket_factory.last.connect_calls[0]["auth"] == {"token": "tok-9"}
        assert session.active_stores() == ["products", "user", "coupons", "admin"]
        assert session.store("admin").user == {"_id": "a1", "role": "admin"}

    def test_same_role_does_not_resubscribe(self, session, channel, services):
        session.login("tok", {"_id": "a1", "role": "admin"})
        session.set_role("admin")
        assert channel.listener_count("newOrder") == 1
        assert services["admin"].get_dashboard_stats.call_count == 1

    def test_demotion_deactivates_privileged_stores(self, session, channel):
        session.login("tok", {"_id": "a1", "role": "admin"})
        admin = session.store("admin")
        channel.emit_local("newOrder", {"_id": "o1"})
        assert admin.orders.items

        session.set_role("buyer", {"_id": "a1", "role": "buyer"})
        assert not admin.active
        assert admin.orders.items == []
        assert channel.listener_count("newOrder") == 0
        assert session.active_stores() == ["products", "user", "coupons"]

    def test_seller_gets_seller_store_not_admin(self, session, channel):
        session.login("tok", {"_id": "s1", "role": "seller"})
        assert "seller" in session.active_stores()
        assert "admin" not in session.active_stores()
        assert channel.listener_count("newOrder") == 1

    def test_switching_account_with_same_role_rebinds_stores(self, session, channel, services):
        session.login("tok-a", {"_id": "sellerA", "role": "seller"})
        seller = session.store("seller")
        channel.emit_local("newOrder", {"_id": "o1", "seller": "sellerA"})
        assert [order["_id"] for order in seller.orders.items] == ["o1"]

        session.login("tok-b", {"_id": "sellerB", "role": "seller"})
        assert session.user["_id"] == "sellerB"
        assert seller.seller_id == "sellerB"
        assert session.store("user").user["_id"] == "sellerB"
        assert seller.orders.items == []
        assert channel.listener_count("newOrder") == 1
        assert services["users"].get_profile.call_count == 2

        channel.emit_local("newOrder", {"_id": "o2", "seller": {"_id": "sellerB"}})
        assert [order["_id"] for order in seller.orders.items] == ["o2"]

    def test_same_account_again_keeps_stores(self, session, services):
        session.login("tok", {"_id": "u1", "role": "buyer", "name": "Asha"})
        session.set_role("buyer", {"_id": "u1", "role": "buyer", "name": "Asha K"})
        assert services["users"].get_profile.call_count == 1
        assert session.store("user").user["name"] == "Asha K"

    def test_logout_tears_everything_down(self, session, channel, socket_factory, api):
        session.login("tok", {"_id": "a1", "role": "admin"})
        session.logout()
        assert session.active_stores() == []
        assert api.token is None
        assert socket_factory.last.disconnect_calls == 1
        assert channel.listener_count("productCreated") == 0
        assert session.role is None

    def test_register_after_login_activates_if_allowed(self, session, services):
        session.login("tok", {"_id": "a1", "role": "buyer"})
        late = session.register(AdminStore(services["admin"]))
        assert not late.active
