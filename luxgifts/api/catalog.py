"""Product, coupon and user-profile endpoints."""

from typing import Any, Dict, List, Optional

from luxgifts.api.client import ApiClient


class ProductService:
    def __init__(self, api: ApiClient):
        self.api = api

    def get_products(self, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self.api.get("/products", params=filters, fallback="Failed to fetch products")

    def get_product(self, product_id: str) -> Dict[str, Any]:
        return self.api.get(f"/products/{product_id}", fallback="Failed to fetch product")

    def get_featured_products(self) -> Dict[str, Any]:
        return self.api.get("/products/featured", fallback="Failed to fetch featured products")

    def create_product(self, product_data: Dict[str, Any]) -> Dict[str, Any]:
        return self.api.post("/products", product_data, fallback="Failed to add product")

    def update_product(self, product_id: str, product_data: Dict[str, Any]) -> Dict[str, Any]:
        return self.api.put(f"/products/{product_id}", product_data, fallback="Failed to update product")

    def delete_product(self, product_id: str) -> Dict[str, Any]:
        return self.api.delete(f"/products/{product_id}", fallback="Failed to delete product")


class CouponService:
    def __init__(self, api: ApiClient):
        self.api = api

    def validate_coupon(self, code: str, cart_items: List[Dict[str, Any]], cart_total: float) -> Dict[str, Any]:
        body = {"code": code, "cartItems": cart_items, "cartTotal": cart_total}
        return self.api.post("/coupons/validate", body, fallback="Failed to validate coupon")

    def get_coupons(self, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self.api.get("/coupons", params=params, fallback="Failed to fetch coupons")

    def get_coupon(self, coupon_id: str) -> Dict[str, Any]:
        return self.api.get(f"/coupons/{coupon_id}", fallback="Failed to fetch coupon details")

    def create_coupon(self, coupon_data: Dict[str, Any]) -> Dict[str, Any]:
        return self.api.post("/coupons", coupon_data, fallback="Failed to create coupon")

    def update_coupon(self, coupon_id: str, coupon_data: Dict[str, Any]) -> Dict[str, Any]:
        return self.api.put(f"/coupons/{coupon_id}", coupon_data, fallback="Failed to update coupon")

    def delete_coupon(self, coupon_id: str) -> Dict[str, Any]:
        return self.api.delete(f"/coupons/{coupon_id}", fallback="Failed to delete coupon")

    def get_user_coupons(self) -> Dict[str, Any]:
        return self.api.get("/coupons/user", fallback="Failed to fetch user coupons")

    def get_coupon_usage_stats(self, coupon_id: str) -> Dict[str, Any]:
        return self.api.get(f"/coupons/{coupon_id}/stats", fallback="Failed to fetch coupon usage statistics")


class UserService:
    def __init__(self, api: ApiClient):
        self.api = api

    def get_profile(self) -> Dict[str, Any]:
        return self.api.get("/users/profile", fallback="Failed to fetch user profile")

    def update_profile(self, profile_data: Dict[str, Any]) -> Dict[str, Any]:
        return self.api.put("/users/profile", profile_data, fallback="Failed to update profile")
