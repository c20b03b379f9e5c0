"""
REST service wrappers for the marketplace API.

Each service method maps one logical operation to one HTTP call made through
ApiClient.
"""
from luxgifts.api.client import ApiClient, Pagination, normalize_response, page_of
from luxgifts.api.account import CartService, NotificationService, WishlistService
from luxgifts.api.auth import AuthService, Credentials, credentials_from
from luxgifts.api.catalog import CouponService, ProductService, UserService
from luxgifts.api.dashboards import AdminService, SellerService, SuperAdminService
from luxgifts.api.orders import OrderService
from luxgifts.api.payments import PaymentService

__all__ = [
    "ApiClient",
    "normalize_response",
    "page_of",
    "Pagination",
    "AdminService",
    "AuthService",
    "CartService",
    "CouponService",
    "Credentials",
    "credentials_from",
    "NotificationService",
    "OrderService",
    "PaymentService",
    "ProductService",
    "SellerService",
    "SuperAdminService",
    "UserService",
    "WishlistService",
]
