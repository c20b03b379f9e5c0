"""Role-scoped entity caches kept current by push events."""
from luxgifts.stores.admin import AdminStore
from luxgifts.stores.base import ADMIN, ADMIN_ROLES, ALL_ROLES, BUYER, SELLER, SUPER_ADMIN, DomainStore
from luxgifts.stores.cache import Action, ActionType, CacheState, EntityStore, entity_id_of, is_newer, reduce
from luxgifts.stores.coupons import CouponStore, CouponValidation
from luxgifts.stores.notifications import NotificationStore
from luxgifts.stores.products import ProductStore
from luxgifts.stores.seller import SellerStore
from luxgifts.stores.super_admin import SuperAdminStore
from luxgifts.stores.users import UserStore
from luxgifts.stores.wishlist import WishlistStore

__all__ = [
    "Action",
    "ActionType",
    "CacheState",
    "EntityStore",
    "entity_id_of",
    "is_newer",
    "reduce",
    "DomainStore",
    "BUYER",
    "SELLER",
    "ADMIN",
    "SUPER_ADMIN",
    "ALL_ROLES",
    "ADMIN_ROLES",
    "AdminStore",
    "CouponStore",
    "CouponValidation",
    "NotificationStore",
    "ProductStore",
    "SellerStore",
    "SuperAdminStore",
    "UserStore",
    "WishlistStore",
]
