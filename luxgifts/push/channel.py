"""
Push-event channel: one authenticated Socket.IO connection per session.

The SessionManager owns the channel and is the only caller of connect() and
disconnect(). Stores only attach and detach listeners with on()/off(); every
on() must be paired with an off() when the store goes inactive.

Listeners are kept in the channel's own registry and one dispatcher per event
name is attached to the transport, so handlers can be removed individually
and survive a reconnect with a new token.
"""

import threading
from typing import Any, Callable, Dict, List, Optional

import socketio
from socketio.exceptions import ConnectionError as SocketConnectionError

from luxgifts.core.config import LuxGiftsConfig, get_config
from luxgifts.utils.logger import get_logger

logger = get_logger("push.channel")

Handler = Callable[[Any], None]
ClientFactory = Callable[..., Any]

# Transport lifecycle events handled by the channel itself
_LIFECYCLE_EVENTS = ("connect", "disconnect", "connect_error")


class PushChannel:
    """
    Shared, long-lived push connection.

    Args:
        url: Socket.IO server URL (defaults to the config's push URL)
        client_factory: Builds the transport client; defaults to socketio.Client
        config: Reconnection policy source
    """

    def __init__(
        self,
        url: Optional[str] = None,
        client_factory: Optional[ClientFactory] = None,
        config: Optional[LuxGiftsConfig] = None,
    ) -> None:
        self.config = config or get_config()
        self.url = url or self.config.push_url
        self._client_factory = client_factory or socketio.Client
        self._client: Optional[Any] = None
        self._token: Optional[str] = None
        self._handlers: Dict[str, List[Handler]] = {}
        self._attached: set = set()
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------

    @property
    def connected(self) -> bool:
        return bool(self._client is not None and getattr(self._client, "connected", False))

    def connect(self, token: str) -> None:
        """Open the connection with ``token``. Same token while connected is a no-op."""
        with self._lock:
            if self._client is not None:
                if token == self._token:
                    return
                self._teardown("token changed")

            logger.info("push: connecting url=%s", self.url)
            client = self._client_factory(
                reconnection=True,
                reconnection_attempts=self.config.reconnection_attempts,
                reconnection_delay=self.config.reconnection_delay,
            )
            client.on("connect", handler=self._on_connect)
            client.on("disconnect", handler=self._on_disconnect)
            client.on("connect_error", handler=self._on_connect_error)
            self._client = client
            self._token = token
            self._attached = set()
            for event in self._handlers:
                self._attach(event)

        # socketio.Client.connect blocks until the handshake is done; with
        # retry=True a failed first handshake goes through the reconnection policy
        try:
            client.connect(
                self.url,
                auth={"token": token},
                transports=["websocket", "polling"],
                retry=True,
            )
        except SocketConnectionError as e:
            logger.error("push: connect failed url=%s error=%s", self.url, e)
            with self._lock:
                # Forget the dead client so the next connect() starts over
                if self._client is client:
                    self._client = None
                    self._token = None
                    self._attached = set()

    def disconnect(self) -> None:
        with self._lock:
            if self._client is None:
                return
            self._teardown("session ended")

    def _teardown(self, reason: str) -> None:
        logger.info("push: disconnecting reason=%s", reason)
        client = self._client
        self._client = None
        self._token = None
        self._attached = set()
        client.disconnect()

    def _on_connect(self) -> None:
        logger.info("push: connected sid=%s", getattr(self._client, "sid", None))

    def _on_disconnect(self, *args) -> None:
        logger.info("push: disconnected reason=%s", args[0] if args else "unknown")

    def _on_connect_error(self, data: Any = None) -> None:
        logger.error("push: connection error url=%s detail=%s has_token=%s", self.url, data, bool(self._token))

    # ------------------------------------------------------------------
    # Listener registry
    # ------------------------------------------------------------------

    def on(self, event: str, handler: Handler) -> None:
        """Register ``handler`` for ``event``. Registering the same handler twice is a no-op."""
        if event in _LIFECYCLE_EVENTS:
            raise ValueError(f"{event!r} is reserved for the channel")
        with self._lock:
            handlers = self._handlers.setdefault(event, [])
            if handler in handlers:
                return
            handlers.append(handler)
            if self._client is not None:
                self._attach(event)

    def off(self, event: str, handler: Optional[Handler] = None) -> None:
        """Remove ``handler`` from ``event``, or every handler when none is given."""
        with self._lock:
            handlers = self._handlers.get(event)
            if not handlers:
                return
            if handler is None:
                handlers.clear()
            elif handler in handlers:
                handlers.remove(handler)
            if not handlers:
                del self._handlers[event]

    def listener_count(self, event: str) -> int:
        with self._lock:
            return len(self._handlers.get(event, []))

    def _attach(self, event: str) -> None:
        if event in self._attached:
            return
        self._client.on(event, handler=self._make_dispatcher(event))
        self._attached.add(event)

    def _make_dispatcher(self, event: str) -> Handler:
        def dispatch(payload: Any = None) -> None:
            self.emit_local(event, payload)
        return dispatch

    def emit_local(self, event: str, payload: Any = None) -> None:
        """Deliver ``payload`` to the registered handlers of ``event``."""
        with self._lock:
            handlers = list(self._handlers.get(event, []))
        logger.debug("push: event=%s listeners=%s", event, len(handlers))
        for handler in handlers:
            try:
                handler(payload)
            except Exception:
                logger.exception("push: handler failed event=%s", event)
