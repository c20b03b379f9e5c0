"""Tests for ApiClient and the REST service wrappers (httpx.MockTransport, no network)."""

import httpx
import pytest

from luxgifts.api import (
    ApiClient,
    CouponService,
    OrderService,
    Pagination,
    PaymentService,
    SuperAdminService,
    normalize_response,
    page_of,
)
from luxgifts.errors import ApiError


class TestNormalizeResponse:
    def test_enveloped_body_kept(self):
        assert normalize_response({"success": True, "data": [1], "message": "ok"}) == {
            "success": True, "data": [1], "message": "ok",
        }

    def test_missing_data_added(self):
        assert normalize_response({"success": False, "message": "nope"})["data"] is None

    def test_bare_body_wrapped(self):
        assert normalize_response([{"_id": "p1"}]) == {"success": True, "data": [{"_id": "p1"}]}


class TestApiClient:
    def test_bearer_token_attached(self, api, router):
        router.add("GET", "/api/products", {"success": True, "data": []})
        api.get("/products")
        assert router.requests[0].headers["Authorization"] == "Bearer test-token"

    def test_no_token_on_login(self, api, router):
        router.add("POST", "/api/auth/login", {"success": True, "data": {}})
        api.post("/auth/login", {"email": "a@b.co", "password": "x"})
        assert "Authorization" not in router.requests[0].headers

    def test_error_uses_server_message(self, api, router):
        router.add("POST", "/api/orders", (400, {"success": False, "message": "Out of stock"}))
        with pytest.raises(ApiError) as exc_info:
            api.post("/orders", {}, fallback="Failed to create order")
        assert exc_info.value.message == "Out of stock"
        assert exc_info.value.status_code == 400
        assert exc_info.value.payload["message"] == "Out of stock"

    def test_error_without_json_uses_fallback(self, api, router):
        router.add("GET", "/api/orders/o1", (500, b"<html>oops</html>"))
        with pytest.raises(ApiError) as exc_info:
            api.get("/orders/o1", fallback="Failed to fetch order details")
        assert exc_info.value.message == "Failed to fetch order details"
        assert exc_info.value.payload == {"message": "Failed to fetch order details"}

    def test_transport_failure_uses_fallback(self, config):
        def boom(request):
            raise httpx.ConnectError("refused", request=request)

        client = ApiClient(config=config, transport=httpx.MockTransport(boom))
        with pytest.raises(ApiError) as exc_info:
            client.get("/products", fallback="Failed to fetch products")
        assert exc_info.value.message == "Failed to fetch products"
        assert exc_info.value.status_code is None

    def test_empty_body_is_success(self, api, router):
        router.add("DELETE", "/api/products/p1", httpx.Response(204))
        assert api.delete("/products/p1") == {"success": True, "data": None}


class TestOrderService:
    def test_user_orders_falls_back_to_my_orders(self, api, router):
        router.add("GET", "/api/orders/user", (404, {"message": "Not found"}))
        router.add("GET", "/api/orders/my-orders", {"success": True, "data": [{"_id": "o1"}]})
        response = OrderService(api).get_user_orders()
        assert response["data"] == [{"_id": "o1"}]
        assert len(router.calls("GET", "/api/orders/my-orders")) == 1

    @pytest.mark.parametrize("role,path", [
        (None, "/api/orders/o1/status"),
        ("seller", "/api/seller/orders/o1/status"),
        ("admin", "/api/admin/orders/o1/status"),
        ("super_admin", "/api/super-admin/orders/o1/status"),
    ])
    def test_status_update_path_by_role(self, api, router, role, path):
        router.add("PUT", path, {"success": True, "data": {"_id": "o1", "status": "shipped"}})
        OrderService(api).update_order_status("o1", {"status": "shipped"}, user_role=role)
        assert router.body(router.calls("PUT", path)[0]) == {"status": "shipped"}

    def test_cancel_order(self, api, router):
        router.add("PUT", "/api/orders/o1/cancel", {"success": True, "data": {"_id": "o1", "status": "cancelled"}})
        response = OrderService(api).cancel_order("o1", {"reason": "changed mind"})
        assert response["data"]["status"] == "cancelled"

    def test_invoice_returns_bytes(self, api, router):
        router.add("GET", "/api/orders/o1/invoice", httpx.Response(200, content=b"%PDF-1.4"))
        assert OrderService(api).get_order_invoice("o1") == b"%PDF-1.4"


class TestPaymentAndCouponServices:
    def test_razorpay_order_body(self, api, router):
        router.add("POST", "/api/payments/razorpay", {"success": True, "data": {"order_id": "rzp_1"}})
        PaymentService(api).create_razorpay_order("o1", 5250)
        assert router.body(router.requests[0]) == {"orderId": "o1", "amount": 5250, "currency": "INR"}

    def test_process_payment_body(self, api, router):
        router.add("POST", "/api/payments/process", {"success": True})
        PaymentService(api).process_payment("o1", {"cardNumber": "4111111111111111"})
        assert router.body(router.requests[0]) == {"orderId": "o1", "cardNumber": "4111111111111111"}

    def test_validate_coupon_body(self, api, router):
        router.add("POST", "/api/coupons/validate", {"success": True, "data": {"discountAmount": 10}})
        CouponService(api).validate_coupon("LOVE10", [{"productId": "p1", "quantity": 1, "price": 50}], 50)
        assert router.body(router.requests[0]) == {
            "code": "LOVE10",
            "cartItems": [{"productId": "p1", "quantity": 1, "price": 50}],
            "cartTotal": 50,
        }

    def test_featured_products_update(self, api, router):
        router.add("PUT", "/api/super-admin/featured-products", {"success": True, "data": []})
        SuperAdminService(api).update_featured_products(["p1", "p2"])
        assert router.body(router.requests[0]) == {"productIds": ["p1", "p2"]}


class TestOrderListings:
    @pytest.mark.parametrize("method_name,path", [
        ("list_orders", "/api/orders"),
        ("get_seller_orders", "/api/seller/orders"),
        ("get_admin_orders", "/api/admin/orders"),
        ("get_super_admin_orders", "/api/super-admin/orders"),
    ])
    def test_listing_route(self, api, router, method_name, path):
        router.add("GET", path, {"success": True, "data": [{"_id": "o1"}]})
        response = getattr(OrderService(api), method_name)({"status": "pending", "page": 2})
        assert response["data"] == [{"_id": "o1"}]
        request = router.calls("GET", path)[0]
        assert request.url.params["status"] == "pending"
        assert request.url.params["page"] == "2"

    @pytest.mark.parametrize("role,path", [
        (None, "/api/orders/o1/tracking"),
        ("seller", "/api/seller/orders/o1/tracking"),
        ("admin", "/api/admin/orders/o1/tracking"),
        ("super_admin", "/api/super-admin/orders/o1/tracking"),
    ])
    def test_add_tracking_path_by_role(self, api, router, role, path):
        router.add("PUT", path, {"success": True, "data": {"_id": "o1", "trackingNumber": "TRK9"}})
        OrderService(api).add_order_tracking("o1", {"trackingNumber": "TRK9", "carrier": "BlueDart"}, user_role=role)
        assert router.body(router.calls("PUT", path)[0]) == {"trackingNumber": "TRK9", "carrier": "BlueDart"}

    def test_request_return(self, api, router):
        router.add("POST", "/api/orders/o1/return", {"success": True, "data": {"_id": "o1", "returnRequested": True}})
        response = OrderService(api).request_return("o1", {"reason": "damaged", "items": ["p1"]})
        assert response["data"]["returnRequested"] is True
        assert router.body(router.requests[0]) == {"reason": "damaged", "items": ["p1"]}

    def test_request_return_error_message(self, api, router):
        router.add("POST", "/api/orders/o1/return", (400, {"success": False, "message": "Return window closed"}))
        with pytest.raises(ApiError) as exc_info:
            OrderService(api).request_return("o1", {"reason": "late"})
        assert exc_info.value.message == "Return window closed"


class TestHistoryAndCouponRoutes:
    def test_payment_history(self, api, router):
        router.add("GET", "/api/payments/history", {"success": True, "data": [{"_id": "pay1"}]})
        response = PaymentService(api).get_payment_history({"page": 1, "limit": 10})
        assert response["data"] == [{"_id": "pay1"}]
        assert router.requests[0].url.params["limit"] == "10"

    def test_user_coupons(self, api, router):
        router.add("GET", "/api/coupons/user", {"success": True, "data": [{"code": "LOVE10"}]})
        assert CouponService(api).get_user_coupons()["data"] == [{"code": "LOVE10"}]
        assert len(router.calls("GET", "/api/coupons/user")) == 1

    def test_coupon_usage_stats(self, api, router):
        router.add("GET", "/api/coupons/c1/stats", {"success": True, "data": {"usageCount": 4}})
        assert CouponService(api).get_coupon_usage_stats("c1")["data"] == {"usageCount": 4}

    def test_usage_stats_fallback_message(self, api, router):
        router.add("GET", "/api/coupons/c1/stats", (500, b""))
        with pytest.raises(ApiError) as exc_info:
            CouponService(api).get_coupon_usage_stats("c1")
        assert exc_info.value.message == "Failed to fetch coupon usage statistics"


class TestPageOf:
    def test_pagination_beside_data(self):
        items, pagination = page_of(
            {"success": True, "data": [{"_id": "o1"}], "pagination": {"page": 2, "limit": 10, "pages": 3, "total": 21}}
        )
        assert items == [{"_id": "o1"}]
        assert pagination == Pagination(page=2, limit=10, total_pages=3, total=21)
        assert pagination.has_next and pagination.has_previous

    def test_unenveloped_reply_with_total_pages(self):
        body = normalize_response({"data": [{"_id": "n1"}], "pagination": {"page": 1, "totalPages": 4}})
        items, pagination = page_of(body)
        assert items == [{"_id": "n1"}]
        assert pagination.total_pages == 4
        assert pagination.total == 1

    def test_missing_block_uses_request(self):
        items, pagination = page_of({"success": True, "data": None}, page=3, limit=5)
        assert items == []
        assert pagination == Pagination(page=3, limit=5, total_pages=1, total=0)
        assert not pagination.has_next

    def test_zero_pages_reads_as_one(self):
        _, pagination = page_of({"success": True, "data": [], "pagination": {"pages": 0}})
        assert pagination.total_pages == 1
