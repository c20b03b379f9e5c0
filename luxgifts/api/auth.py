"""
Authentication endpoints: sign-up, login, token refresh and password flows.

Login, register and refresh-token replies carry the session at the top level
({success, token, refreshToken, user}); some deployments nest it under
``data``. credentials_from() reads either shape.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from luxgifts.api.client import ApiClient
from luxgifts.errors import AuthenticationError
from luxgifts.utils.logger import get_logger

logger = get_logger("api.auth")

VALID_ROLES = ("buyer", "seller", "admin", "super_admin")
DEFAULT_ROLE = "buyer"


@dataclass
class Credentials:
    token: str
    user: Dict[str, Any]
    refresh_token: Optional[str] = None


def credentials_from(response: Dict[str, Any]) -> Optional[Credentials]:
    """The session carried by an auth reply, or None when it has no token."""
    nested = response.get("data") if isinstance(response.get("data"), dict) else {}
    token = response.get("token") or nested.get("token")
    if not token:
        return None
    user = response.get("user") or nested.get("user") or {}
    refresh_token = response.get("refreshToken") or nested.get("refreshToken")
    return Credentials(token=token, user=user, refresh_token=refresh_token or None)


class AuthService:
    def __init__(self, api: ApiClient):
        self.api = api

    def register(self, user_data: Dict[str, Any]) -> Dict[str, Any]:
        if not user_data.get("name") or not user_data.get("email") or not user_data.get("password"):
            raise AuthenticationError("Name, email and password are required")
        body = dict(user_data)
        role = body.get("role")
        if role and role not in VALID_ROLES:
            logger.warning("auth: invalid role=%s, defaulting to %s", role, DEFAULT_ROLE)
            body["role"] = DEFAULT_ROLE
        logger.info("auth: method=register role=%s", body.get("role") or DEFAULT_ROLE)
        return self.api.post("/auth/register", body, fallback="Registration failed: Server returned an error")

    def login(self, email: str, password: str) -> Dict[str, Any]:
        if not email or not password:
            raise AuthenticationError("Email and password are required")
        logger.info("auth: method=login")
        return self.api.post("/auth/login", {"email": email, "password": password}, fallback="Invalid credentials")

    def logout(self) -> Dict[str, Any]:
        return self.api.post("/auth/logout", fallback="Logout failed")

    def get_current_user(self) -> Dict[str, Any]:
        return self.api.get("/auth/me", fallback="Failed to get user profile")

    def refresh_token(self, refresh_token: Optional[str] = None) -> Dict[str, Any]:
        body = {"refreshToken": refresh_token} if refresh_token else {}
        return self.api.post("/auth/refresh-token", body, fallback="Token refresh failed")

    def forgot_password(self, email: str) -> Dict[str, Any]:
        return self.api.post("/auth/forgotpassword", {"email": email}, fallback="Forgot password request failed")

    def reset_password(self, reset_token: str, password_data: Dict[str, Any]) -> Dict[str, Any]:
        return self.api.put(f"/auth/resetpassword/{reset_token}", password_data, fallback="Password reset failed")

    def update_password(self, password_data: Dict[str, Any]) -> Dict[str, Any]:
        return self.api.put("/auth/updatepassword", password_data, fallback="Password update failed")

    def verify_email(self, verification_token: str) -> Dict[str, Any]:
        return self.api.get(f"/auth/verify-email/{verification_token}", fallback="Email verification failed")
