"""
Exception types raised by the Luxury Gifts client.

Only failures that abort an operation are raised. Form and coupon validation
problems are returned as data so callers can show them inline.
"""

from typing import Any, Dict, Optional


class LuxGiftsError(Exception):
    """Base class for client errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ApiError(LuxGiftsError):
    """
    A REST call failed, either in transport or with a non-2xx status.

    ``payload`` is the server's JSON body when it sent one, otherwise
    ``{"message": <fallback>}``.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        payload: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload if payload is not None else {"message": message}

    def __repr__(self) -> str:
        return f"ApiError(status_code={self.status_code!r}, message={self.message!r})"


class PaymentError(LuxGiftsError):
    """The payment gateway failed, or the buyer dismissed it."""

    def __init__(self, message: str, order_id: Optional[str] = None):
        super().__init__(message)
        self.order_id = order_id


class AuthorizationError(LuxGiftsError):
    """A role-scoped operation was attempted by a session without that role."""


class AuthenticationError(LuxGiftsError):
    """Credentials were missing, or the server did not issue a session token."""
