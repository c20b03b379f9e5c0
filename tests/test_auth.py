"""Tests for AuthService routes and the credential flows on SessionManager."""

from unittest.mock import MagicMock

import pytest

from luxgifts.api import AuthService, ProductService, UserService, credentials_from
from luxgifts.errors import ApiError, AuthenticationError
from luxgifts.session import SessionManager
from luxgifts.stores import ProductStore, UserStore


def session_reply(token="tok-1", refresh="ref-1", role="buyer", user_id="u1"):
    return {"success": True, "token": token, "refreshToken": refresh, "user": {"_id": user_id, "role": role}}


# ── AuthService ──────────────────────────────────────────────────────────

class TestAuthService:
    def test_login_posts_credentials_without_bearer(self, api, router):
        router.add("POST", "/api/auth/login", session_reply())
        response = AuthService(api).login("asha@example.com", "s3cret")
        request = router.requests[0]
        assert router.body(request) == {"email": "asha@example.com", "password": "s3cret"}
        assert "Authorization" not in request.headers
        assert response["token"] == "tok-1"

    @pytest.mark.parametrize("email,password", [("", "pw"), ("a@b.co", ""), (None, None)])
    def test_login_requires_email_and_password(self, api, router, email, password):
        with pytest.raises(AuthenticationError) as exc_info:
            AuthService(api).login(email, password)
        assert exc_info.value.message == "Email and password are required"
        assert router.requests == []

    def test_login_rejected_by_server(self, api, router):
        router.add("POST", "/api/auth/login", (401, {"success": False, "message": "Invalid email or password"}))
        with pytest.raises(ApiError) as exc_info:
            AuthService(api).login("a@b.co", "wrong")
        assert exc_info.value.message == "Invalid email or password"
        assert exc_info.value.status_code == 401

    def test_register_requires_name_email_password(self, api, router):
        with pytest.raises(AuthenticationError):
            AuthService(api).register({"email": "a@b.co", "password": "pw"})
        assert router.requests == []

    def test_register_unknown_role_becomes_buyer(self, api, router):
        router.add("POST", "/api/auth/register", session_reply())
        user_data = {"name": "Asha", "email": "a@b.co", "password": "pw", "role": "owner"}
        AuthService(api).register(user_data)
        assert router.body(router.requests[0])["role"] == "buyer"
        assert user_data["role"] == "owner"

    def test_register_keeps_valid_role(self, api, router):
        router.add("POST", "/api/auth/register", session_reply(role="seller"))
        AuthService(api).register({"name": "Ravi", "email": "r@b.co", "password": "pw", "role": "seller"})
        assert router.body(router.requests[0])["role"] == "seller"

    def test_refresh_sends_refresh_token_without_bearer(self, api, router):
        router.add("POST", "/api/auth/refresh-token", {"success": True, "token": "tok-2"})
        AuthService(api).refresh_token("ref-1")
        request = router.requests[0]
        assert router.body(request) == {"refreshToken": "ref-1"}
        assert "Authorization" not in request.headers

    @pytest.mark.parametrize("call,method,path", [
        (lambda auth: auth.logout(), "POST", "/api/auth/logout"),
        (lambda auth: auth.get_current_user(), "GET", "/api/auth/me"),
        (lambda auth: auth.forgot_password("a@b.co"), "POST", "/api/auth/forgotpassword"),
        (lambda auth: auth.reset_password("rst-1", {"password": "new"}), "PUT", "/api/auth/resetpassword/rst-1"),
        (lambda auth: auth.update_password({"currentPassword": "a", "newPassword": "b"}), "PUT", "/api/auth/updatepassword"),
        (lambda auth: auth.verify_email("ver-1"), "GET", "/api/auth/verify-email/ver-1"),
    ])
    def test_account_routes(self, api, router, call, method, path):
        router.add(method, path, {"success": True})
        call(AuthService(api))
        assert len(router.calls(method, path)) == 1
        assert router.requests[0].headers["Authorization"] == "Bearer test-token"


class TestCredentialsFrom:
    def test_top_level_session(self):
        credentials = credentials_from(session_reply())
        assert credentials.token == "tok-1"
        assert credentials.refresh_token == "ref-1"
        assert credentials.user == {"_id": "u1", "role": "buyer"}

    def test_session_nested_under_data(self):
        credentials = credentials_from({"success": True, "data": {"token": "t", "user": {"_id": "u"}}})
        assert credentials.token == "t"
        assert credentials.refresh_token is None

    def test_no_token(self):
        assert credentials_from({"success": True, "message": "Check your email"}) is None


# ── SessionManager credential flows ──────────────────────────────────────

@pytest.fixture
def auth():
    return MagicMock(spec=AuthService)


@pytest.fixture
def session(api, channel):
    products = MagicMock(spec=ProductService)
    products.get_products.return_value = {"success": True, "data": []}
    users = MagicMock(spec=UserService)
    users.get_profile.return_value = {"success": True, "data": {"_id": "u1"}}
    session = SessionManager(api, channel, [ProductStore(products), UserStore(users)])
    api.set_token(None)
    return session


class TestCredentialLogin:
    def test_login_starts_session(self, session, auth, api, socket_factory):
        auth.login.return_value = session_reply()
        user = session.login_with_credentials(auth, "a@b.co", "pw")
        auth.login.assert_called_once_with("a@b.co", "pw")
        assert user == {"_id": "u1", "role": "buyer"}
        assert api.token == "tok-1"
        assert session.refresh_token == "ref-1"
        assert socket_factory.last.connect_calls[0]["auth"] == {"token": "tok-1"}
        assert session.active_stores() == ["products", "user"]

    def test_reply_without_token_is_refused(self, session, auth, api):
        auth.login.return_value = {"success": False, "message": "Account locked"}
        with pytest.raises(AuthenticationError):
            session.login_with_credentials(auth, "a@b.co", "pw")
        assert api.token is None
        assert session.active_stores() == []

    def test_server_refusal_propagates(self, session, auth, api):
        auth.login.side_effect = ApiError("Invalid credentials", status_code=401)
        with pytest.raises(ApiError):
            session.login_with_credentials(auth, "a@b.co", "bad")
        assert not session.authenticated

    def test_signup_with_session_logs_in(self, session, auth, api):
        auth.register.return_value = session_reply(token="tok-new", user_id="u9")
        session.signup(auth, "Asha", "a@b.co", "pw")
        auth.register.assert_called_once_with({"name": "Asha", "email": "a@b.co", "password": "pw", "role": "buyer"})
        assert api.token == "tok-new"
        assert session.user["_id"] == "u9"

    def test_signup_pending_verification_stays_anonymous(self, session, auth, api):
        auth.register.return_value = {"success": True, "message": "Please verify your email"}
        response = session.signup(auth, "Asha", "a@b.co", "pw")
        assert response["message"] == "Please verify your email"
        assert api.token is None
        assert session.user is None


class TestRefreshSession:
    def test_refresh_swaps_token_and_reconnects(self, session, auth, api, socket_factory):
        auth.login.return_value = session_reply()
        session.login_with_credentials(auth, "a@b.co", "pw")
        auth.refresh_token.return_value = {"success": True, "token": "tok-2", "refreshToken": "ref-2"}

        assert session.refresh_session(auth) is True
        auth.refresh_token.assert_called_once_with("ref-1")
        assert api.token == "tok-2"
        assert session.refresh_token == "ref-2"
        assert socket_factory.last.connect_calls[0]["auth"] == {"token": "tok-2"}
        assert session.active_stores() == ["products", "user"]

    def test_refresh_keeps_old_refresh_token_when_none_issued(self, session, auth):
        auth.login.return_value = session_reply()
        session.login_with_credentials(auth, "a@b.co", "pw")
        auth.refresh_token.return_value = {"success": True, "token": "tok-2"}
        session.refresh_session(auth)
        assert session.refresh_token == "ref-1"

    def test_failed_refresh_ends_session(self, session, auth, api, socket_factory):
        auth.login.return_value = session_reply()
        session.login_with_credentials(auth, "a@b.co", "pw")
        auth.refresh_token.side_effect = ApiError("Refresh token expired", status_code=401)

        assert session.refresh_session(auth) is False
        assert api.token is None
        assert session.refresh_token is None
        assert session.active_stores() == []
        assert socket_factory.last.disconnect_calls == 1


class TestLogout:
    def test_server_logout_failure_still_clears_locally(self, session, auth, api):
        auth.login.return_value = session_reply()
        session.login_with_credentials(auth, "a@b.co", "pw")
        auth.logout.side_effect = ApiError("Logout failed")
        session.logout(auth)
        auth.logout.assert_called_once_with()
        assert api.token is None
        assert session.active_stores() == []
