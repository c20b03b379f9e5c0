"""
Common lifecycle for domain stores.

A DomainStore groups one or more EntityStores for a role, knows which push
events keep them current, and is switched on and off by the SessionManager.
Stores never open or close the push connection themselves.
"""

import threading
from typing import Any, Callable, Dict, FrozenSet, List, Optional, Tuple

from luxgifts.errors import ApiError, AuthorizationError
from luxgifts.notify import LoggingNotifier, Notifier
from luxgifts.push.channel import PushChannel
from luxgifts.utils.logger import get_logger

logger = get_logger("stores")

BUYER = "buyer"
SELLER = "seller"
ADMIN = "admin"
SUPER_ADMIN = "super_admin"

ALL_ROLES: FrozenSet[str] = frozenset({BUYER, SELLER, ADMIN, SUPER_ADMIN})
ADMIN_ROLES: FrozenSet[str] = frozenset({ADMIN, SUPER_ADMIN})

Handler = Callable[[Any], None]


class DomainStore:
    """
    Base class for the catalogue, account and dashboard stores.

    required_roles = None means the store also serves anonymous sessions.
    """

    name = "store"
    required_roles: Optional[FrozenSet[str]] = None

    def __init__(self, notifier: Optional[Notifier] = None) -> None:
        self.notifier = notifier or LoggingNotifier()
        self.role: Optional[str] = None
        self.user: Optional[Dict[str, Any]] = None
        self.active = False
        self._channel: Optional[PushChannel] = None
        self._bound: List[Tuple[str, Handler]] = []
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Authorization
    # ------------------------------------------------------------------

    @classmethod
    def accepts(cls, role: Optional[str]) -> bool:
        if cls.required_roles is None:
            return True
        return role in cls.required_roles

    def ensure_authorized(self) -> None:
        if not self.active or not self.accepts(self.role):
            raise AuthorizationError(f"{self.name} store is not available for role {self.role!r}")

    def _authorized(self, operation: str) -> bool:
        try:
            self.ensure_authorized()
        except AuthorizationError as e:
            logger.warning("store: name=%s refused %s: %s", self.name, operation, e.message)
            return False
        return True

    def _mutate(self, call: Callable[[], Dict[str, Any]], failure_message: str) -> Optional[Dict[str, Any]]:
        """Run a create/update/delete call. Transport errors and success=false bodies are toasted and give None."""
        try:
            response = call()
        except ApiError as e:
            self.notifier.error(e.message or failure_message)
            return None
        if not response.get("success"):
            message = response.get("message") or failure_message
            logger.warning("store: name=%s mutation rejected: %s", self.name, message)
            self.notifier.error(message)
            return None
        return response

    # ------------------------------------------------------------------
    # Lifecycle driven by the SessionManager
    # ------------------------------------------------------------------

    def event_handlers(self) -> Dict[str, Handler]:
        """Push event name -> handler. Subclasses override."""
        return {}

    def activate(self, channel: PushChannel, role: Optional[str], user: Optional[Dict[str, Any]] = None) -> None:
        if not self.accepts(role):
            raise AuthorizationError(f"{self.name} store requires one of {sorted(self.required_roles)}")
        with self._lock:
            self.unbind()
            self.role = role
            self.user = user
            self.active = True
            self.bind(channel)
        logger.info("store: name=%s activated role=%s", self.name, role)
        self.refresh()

    def deactivate(self) -> None:
        with self._lock:
            self.unbind()
            self.active = False
            self.role = None
            self.user = None
        self.reset()
        logger.info("store: name=%s deactivated", self.name)

    def bind(self, channel: PushChannel) -> None:
        self._channel = channel
        for event, handler in self.event_handlers().items():
            channel.on(event, handler)
            self._bound.append((event, handler))

    def unbind(self) -> None:
        if self._channel is not None:
            for event, handler in self._bound:
                self._channel.off(event, handler)
        self._bound = []
        self._channel = None

    @property
    def bound_events(self) -> List[str]:
        return [event for event, _ in self._bound]

    def refresh(self) -> None:
        """Initial fetch after activation. Subclasses override."""

    def reset(self) -> None:
        """Drop cached data. Subclasses override."""


def push_recent(items: List[Any], item: Any, limit: int) -> List[Any]:
    """Prepend ``item`` and keep at most ``limit`` entries."""
    return ([item] + list(items))[:limit]
