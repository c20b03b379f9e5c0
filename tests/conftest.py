"""Pytest configuration and shared fakes for the luxgifts tests."""

import json
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx
import pytest

from luxgifts.api.client import ApiClient
from luxgifts.core.config import LuxGiftsConfig, set_config
from luxgifts.push.channel import PushChannel


# ---------------------------------------------------------------------------
# Config isolation: every test sees the same deterministic configuration
# regardless of a developer's .env or LUXGIFTS_* variables.
# ---------------------------------------------------------------------------

@pytest.fixture
def config():
    return LuxGiftsConfig(api_url="http://test.local/api", razorpay_key_id="rzp_test_key")


@pytest.fixture(autouse=True)
def _global_config(config):
    set_config(config)
    yield
    set_config(None)


# ---------------------------------------------------------------------------
# Toasts
# ---------------------------------------------------------------------------

class RecordingNotifier:
    """Notifier that keeps every toast for assertions."""

    def __init__(self):
        self.messages: List[Tuple[str, str]] = []

    def success(self, message: str) -> None:
        self.messages.append(("success", message))

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def warning(self, message: str) -> None:
        self.messages.append(("warning", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))

    def of(self, level: str) -> List[str]:
        return [message for lvl, message in self.messages if lvl == level]


@pytest.fixture
def notifier():
    return RecordingNotifier()


# ---------------------------------------------------------------------------
# HTTP: a small router on top of httpx.MockTransport
# ---------------------------------------------------------------------------

Reply = Any  # dict -> JSON 200, (status, body) tuple, httpx.Response, or callable(request)


class Router:
    """Maps (method, path) to canned replies and records every request."""

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Reply] = {}
        self.requests: List[httpx.Request] = []

    def add(self, method: str, path: str, reply: Reply) -> None:
        self.routes[(method.upper(), path)] = reply

    def calls(self, method: str, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == method.upper() and r.url.path == path]

    def body(self, request: httpx.Request) -> Dict[str, Any]:
        return json.loads(request.content or b"{}")

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        reply = self.routes.get((request.method, request.url.path))
        if reply is None:
            return httpx.Response(404, json={"success": False, "message": f"No route for {request.url.path}"})
        if callable(reply):
            reply = reply(request)
        if isinstance(reply, httpx.Response):
            return reply
        if isinstance(reply, tuple):
            status, body = reply
            if isinstance(body, (bytes, str)):
                return httpx.Response(status, content=body)
            return httpx.Response(status, json=body)
        return httpx.Response(200, json=reply)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def router():
    return Router()


@pytest.fixture
def api(config, router):
    client = ApiClient(config=config, token="test-token", transport=router.transport)
    yield client
    client.close()


# ---------------------------------------------------------------------------
# Push transport: in-memory stand-in for socketio.Client
# ---------------------------------------------------------------------------

class FakeSocketClient:
    def __init__(self, **kwargs):
        self.options = kwargs
        self.handlers: Dict[str, Callable] = {}
        self.connected = False
        self.sid: Optional[str] = None
        self.connect_calls: List[Dict[str, Any]] = []
        self.disconnect_calls = 0

    def on(self, event, handler=None, namespace=None):
        self.handlers[event] = handler

    def connect(self, url, auth=None, transports=None, retry=False, **kwargs):
        self.connect_calls.append({"url": url, "auth": auth, "transports": transports, "retry": retry})
        self.connected = True
        self.sid = "sid-1"
        if "connect" in self.handlers:
            self.handlers["connect"]()

    def disconnect(self):
        self.disconnect_calls += 1
        self.connected = False
        if "disconnect" in self.handlers:
            self.handlers["disconnect"]("client disconnect")

    def server_emit(self, event: str, payload: Any = None) -> None:
        """Simulate the server pushing ``event``."""
        handler = self.handlers.get(event)
        if handler is not None:
            handler(payload)


class FakeSocketFactory:
    def __init__(self):
        self.clients: List[FakeSocketClient] = []

    def __call__(self, **kwargs) -> FakeSocketClient:
        client = FakeSocketClient(**kwargs)
        self.clients.append(client)
        return client

    @property
    def last(self) -> FakeSocketClient:
        return self.clients[-1]


@pytest.fixture
def socket_factory():
    return FakeSocketFactory()


@pytest.fixture
def channel(config, socket_factory):
    return PushChannel(client_factory=socket_factory, config=config)
