"""
Luxury Gifts marketplace client

Storefront and dashboard logic for the Luxury Gifts marketplace:
- REST service wrappers and a push-event channel
- Role-scoped entity stores kept current by push events
- Checkout totals, coupons and order submission
- Order tracking and admin settings
"""

from luxgifts.core.config import LuxGiftsConfig, get_config, set_config
from luxgifts.errors import ApiError, AuthenticationError, AuthorizationError, LuxGiftsError, PaymentError

__all__ = [
    'LuxGiftsConfig',
    'get_config',
    'set_config',
    'LuxGiftsError',
    'ApiError',
    'AuthenticationError',
    'AuthorizationError',
    'PaymentError',
]

__version__ = '0.1.0'
