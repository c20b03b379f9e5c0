"""
Session lifecycle: token, push connection and which stores are live.

The SessionManager is the single owner of the PushChannel. Logging in
connects it, logging out disconnects it, and every role change walks the
registered stores once, activating the ones the role may use and
deactivating (unbind + reset) the rest.
"""

from typing import Any, Dict, Iterable, List, Optional

from luxgifts.api.auth import AuthService, credentials_from
from luxgifts.api.client import ApiClient
from luxgifts.errors import ApiError, AuthenticationError
from luxgifts.push.channel import PushChannel
from luxgifts.stores.base import DomainStore
from luxgifts.stores.cache import entity_id_of
from luxgifts.utils.logger import get_logger

logger = get_logger("session")

_UNSET = object()


def _user_id(user: Optional[Dict[str, Any]]) -> Optional[str]:
    return entity_id_of(user) if user else None


class SessionManager:
    def __init__(self, api: ApiClient, channel: PushChannel, stores: Iterable[DomainStore] = ()):
        self.api = api
        self.channel = channel
        self.stores: List[DomainStore] = list(stores)
        self.user: Optional[Dict[str, Any]] = None
        self.refresh_token: Optional[str] = None
        self._role: Any = _UNSET

    @property
    def role(self) -> Optional[str]:
        return None if self._role is _UNSET else self._role

    @property
    def authenticated(self) -> bool:
        return self.api.token is not None

    def register(self, store: DomainStore) -> DomainStore:
        self.stores.append(store)
        if self._role is not _UNSET and store.accepts(self._role):
            store.activate(self.channel, self._role, self.user)
        return store

    def store(self, name: str) -> Optional[DomainStore]:
        for store in self.stores:
            if store.name == name:
                return store
        return None

    def active_stores(self) -> List[str]:
        return [store.name for store in self.stores if store.active]

    def start(self) -> None:
        """Anonymous session: only unrestricted stores (the public catalogue) go live."""
        self.set_role(None)

    def login(self, token: str, user: Dict[str, Any]) -> None:
        logger.info("session: login user=%s role=%s", user.get("_id") or user.get("id"), user.get("role"))
        self.api.set_token(token)
        self.channel.connect(token)
        self.set_role(user.get("role"), user)

    def login_with_credentials(self, auth: AuthService, email: str, password: str) -> Dict[str, Any]:
        """
        Sign in with email and password, then start the session.

        Raises AuthenticationError for missing credentials or a reply without
        a token, and ApiError when the server refuses the login.
        """
        credentials = credentials_from(auth.login(email, password))
        if credentials is None:
            raise AuthenticationError("Invalid credentials")
        self.refresh_token = credentials.refresh_token
        self.login(credentials.token, credentials.user)
        return credentials.user

    def signup(
        self, auth: AuthService, name: str, email: str, password: str, role: str = "buyer"
    ) -> Dict[str, Any]:
        """Register an account. Starts the session when the server signs the new user in directly."""
        response = auth.register({"name": name, "email": email, "password": password, "role": role})
        credentials = credentials_from(response)
        if credentials is not None and credentials.user:
            self.refresh_token = credentials.refresh_token
            self.login(credentials.token, credentials.user)
        else:
            logger.info("session: signup pending email verification")
        return response

    def refresh_session(self, auth: AuthService) -> bool:
        """
        Trade the refresh token for a new access token.

        The push connection reconnects with the new token. A failed refresh
        ends the session.
        """
        try:
            credentials = credentials_from(auth.refresh_token(self.refresh_token))
        except ApiError as e:
            logger.warning("session: token refresh failed status=%s error=%s", e.status_code, e.message)
            credentials = None
        if credentials is None:
            self.logout()
            return False
        if credentials.refresh_token:
            self.refresh_token = credentials.refresh_token
        self.api.set_token(credentials.token)
        self.channel.connect(credentials.token)
        user = credentials.user or self.user
        if user:
            self.set_role(user.get("role"), user)
        logger.info("session: token refreshed")
        return True

    def set_role(self, role: Optional[str], user: Optional[Dict[str, Any]] = None) -> None:
        """Activate the stores ``role`` may use and deactivate the others."""
        if self._role is not _UNSET and role == self._role:
            if user is not None and _user_id(user) != _user_id(self.user):
                self._switch_user(user)
                return
            logger.debug("session: role=%s already applied", role)
            if user is not None:
                self.user = user
                for store in self.stores:
                    if store.active:
                        store.user = user
            return

        logger.info("session: applying role=%s previous=%s", role, self.role)
        self._role = role
        self.user = user

        # Revoked stores are cleared before any newly allowed store fetches
        for store in self.stores:
            if store.active and not store.accepts(role):
                store.deactivate()
        for store in self.stores:
            if store.accepts(role):
                store.activate(self.channel, role, user)

    def _switch_user(self, user: Dict[str, Any]) -> None:
        """Same role, different account: every live store drops the old user's data and refetches."""
        logger.info("session: switching user role=%s user=%s previous=%s", self._role, _user_id(user), _user_id(self.user))
        self.user = user
        for store in self.stores:
            if store.active:
                store.deactivate()
                store.activate(self.channel, self._role, user)

    def logout(self, auth: Optional[AuthService] = None) -> None:
        """Tear the session down locally. With ``auth`` the server session is ended too; its failure is only logged."""
        logger.info("session: logout role=%s", self.role)
        if auth is not None and self.authenticated:
            try:
                auth.logout()
            except ApiError as e:
                logger.warning("session: server logout failed error=%s", e.message)
        for store in self.stores:
            if store.active:
                store.deactivate()
        self.channel.disconnect()
        self.api.set_token(None)
        self.user = None
        self.refresh_token = None
        self._role = _UNSET
