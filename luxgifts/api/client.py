"""
HTTP client for the marketplace REST API.

Every call goes through ApiClient so that responses come back in one shape,
{success, data, message?}, and every failure surfaces as ApiError carrying the
server's JSON body (or {message: <fallback>} when there is none).
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import httpx

from luxgifts.core.config import LuxGiftsConfig, get_config
from luxgifts.errors import ApiError
from luxgifts.utils.logger import get_logger
from luxgifts.utils.redact import redact_sensitive_data

logger = get_logger("api.client")

_AUTH_PATHS = ("/auth/login", "/auth/register", "/auth/refresh-token")


def normalize_response(body: Any) -> Dict[str, Any]:
    """Coerce a decoded JSON body into {success, data, message?}."""
    if isinstance(body, dict) and "success" in body:
        normalized = dict(body)
        normalized.setdefault("data", None)
        return normalized
    return {"success": True, "data": body}


@dataclass
class Pagination:
    page: int = 1
    limit: int = 10
    total_pages: int = 1
    total: int = 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1


def _as_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def page_of(response: Dict[str, Any], page: int = 1, limit: int = 10) -> Tuple[List[Any], Pagination]:
    """
    Split a paginated reply into its items and a Pagination.

    The page block may sit beside ``data`` or, for unenveloped replies,
    inside it; its page count may be called ``pages`` or ``totalPages``.
    """
    items = response.get("data")
    meta = response.get("pagination")
    if meta is None and isinstance(items, dict):
        meta = items.get("pagination")
        items = items.get("data")
    if not isinstance(items, list):
        items = []
    if not isinstance(meta, dict):
        meta = {}
    total_pages = meta.get("totalPages", meta.get("pages"))
    return items, Pagination(
        page=_as_int(meta.get("page"), page),
        limit=_as_int(meta.get("limit"), limit),
        total_pages=max(1, _as_int(total_pages, 1)),
        total=_as_int(meta.get("total"), len(items)),
    )


class ApiClient:
    """
    Thin wrapper over one httpx.Client bound to the API base URL.

    The bearer token is attached to every request except login, register and token refresh.
    Pass ``transport`` to route requests somewhere other than the network.
    """

    def __init__(
        self,
        config: Optional[LuxGiftsConfig] = None,
        token: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.config = config or get_config()
        self._token = token
        self._client = httpx.Client(
            base_url=self.config.api_url.rstrip("/"),
            headers={
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
            timeout=self.config.request_timeout,
            transport=transport,
        )

    @property
    def token(self) -> Optional[str]:
        return self._token

    def set_token(self, token: Optional[str]) -> None:
        self._token = token

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _headers(self, path: str) -> Dict[str, str]:
        if self._token and not any(path.startswith(p) for p in _AUTH_PATHS):
            return {"Authorization": f"Bearer {self._token}"}
        return {}

    def _send(
        self,
        method: str,
        path: str,
        fallback: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        if json is not None:
            logger.debug("api: method=%s path=%s body=%s", method, path, redact_sensitive_data(json))
        else:
            logger.debug("api: method=%s path=%s params=%s", method, path, params)
        try:
            resp = self._client.request(
                method, path, params=params, json=json, headers=self._headers(path)
            )
        except httpx.RequestError as e:
            logger.error("api: method=%s path=%s result=unreachable error=%s", method, path, e)
            raise ApiError(fallback) from e

        if resp.is_error:
            try:
                payload = resp.json()
            except ValueError:
                payload = None
            if not isinstance(payload, dict):
                payload = {"message": fallback}
            message = payload.get("message") or fallback
            logger.warning(
                "api: method=%s path=%s result=error status=%s message=%s",
                method, path, resp.status_code, message,
            )
            raise ApiError(message, status_code=resp.status_code, payload=payload)

        logger.debug("api: method=%s path=%s result=success status=%s", method, path, resp.status_code)
        return resp

    def request(
        self,
        method: str,
        path: str,
        fallback: str = "Request failed",
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        resp = self._send(method, path, fallback, params=params, json=json)
        if not resp.content:
            return {"success": True, "data": None}
        try:
            return normalize_response(resp.json())
        except ValueError as e:
            raise ApiError(fallback, status_code=resp.status_code) from e

    def get(self, path: str, params: Optional[Dict[str, Any]] = None, fallback: str = "Request failed") -> Dict[str, Any]:
        return self.request("GET", path, fallback, params=params)

    def post(self, path: str, json: Optional[Dict[str, Any]] = None, fallback: str = "Request failed") -> Dict[str, Any]:
        return self.request("POST", path, fallback, json=json if json is not None else {})

    def put(self, path: str, json: Optional[Dict[str, Any]] = None, fallback: str = "Request failed") -> Dict[str, Any]:
        return self.request("PUT", path, fallback, json=json if json is not None else {})

    def patch(self, path: str, json: Optional[Dict[str, Any]] = None, fallback: str = "Request failed") -> Dict[str, Any]:
        return self.request("PATCH", path, fallback, json=json if json is not None else {})

    def delete(self, path: str, params: Optional[Dict[str, Any]] = None, fallback: str = "Request failed") -> Dict[str, Any]:
        return self.request("DELETE", path, fallback, params=params)

    def get_bytes(self, path: str, fallback: str = "Request failed") -> bytes:
        """GET a binary document (invoice / receipt PDF)."""
        return self._send("GET", path, fallback).content
