"""httpx-backed transport to the Admiral REST API.

This module is the **only** place in the codebase that imports
``httpx``.  Transport failures and non-success responses are mapped to
typed :class:`~admiral_cli.exceptions.AdmiralCliError` subclasses here —
nothing raw escapes the infrastructure boundary.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from admiral_cli.config import Settings
from admiral_cli.exceptions import (
    ApiError,
    AuthenticationError,
    NotFoundError,
    ServerError,
    ServiceUnreachableError,
)
from admiral_cli.version import __version__

logger = logging.getLogger(__name__)

AUTH_HEADER = "x-xenon-auth-token"


def _error_detail(response: httpx.Response) -> tuple[str | None, Any]:
    """Return ``(message, detail)`` extracted from an error response body."""
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        return (text or None), text
    if isinstance(body, dict):
        message = body.get("message") or body.get("detail")
        return (str(message) if message else None), body
    return None, body


def raise_for_status(response: httpx.Response) -> None:
    """Convert HTTP errors into typed API exceptions."""
    if response.is_success:
        return

    status = response.status_code
    message, detail = _error_detail(response)

    if status in (401, 403):
        raise AuthenticationError(
            message or ("Authentication required" if status == 401 else "Access denied"),
            status_code=status,
            detail=detail,
            hint="Set ADMIRAL_TOKEN or pass --token.",
        )
    if status == 404:
        raise NotFoundError(message or "Resource not found", status_code=status, detail=detail)
    if status >= 500:
        raise ServerError(message or f"Server error (HTTP {status})", status_code=status, detail=detail)

    raise ApiError(message or f"HTTP {status}", status_code=status, detail=detail)


class AdmiralClient:
    """Synchronous client for the Admiral REST API.

    Usage::

        with AdmiralClient(settings) as client:
            docs = client.get_json("/resources/group-policies", params={"expand": "true"})

    Parameters
    ----------
    settings:
        Loaded :class:`~admiral_cli.config.Settings`.
    transport:
        Optional httpx transport, used by tests to stub the service.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.settings = settings
        headers = {
            "Accept": "application/json",
            "User-Agent": f"admiral-cli/{__version__}",
        }
        if settings.token:
            headers[AUTH_HEADER] = settings.token
        self._client = httpx.Client(
            base_url=settings.url,
            headers=headers,
            timeout=settings.timeout,
            verify=settings.verify_tls,
            transport=transport,
        )

    def __enter__(self) -> AdmiralClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Closes the HTTP client."""
        self._client.close()

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> httpx.Response:
        """Send a request and return the (successful) response.

        Raises
        ------
        ServiceUnreachableError
            On connection failures and timeouts.
        ApiError
            On any non-success status.
        """
        logger.debug("%s %s params=%s", method, path, params)
        try:
            response = self._client.request(method, path, params=params, json=json)
        except httpx.TimeoutException as exc:
            raise ServiceUnreachableError(
                f"Request to {self.settings.url} timed out.",
                hint="Increase --timeout or check the service load.",
            ) from exc
        except httpx.TransportError as exc:
            raise ServiceUnreachableError(
                f"Cannot reach {self.settings.url}: {exc}",
                hint="Check --url / ADMIRAL_URL and your network.",
            ) from exc

        logger.debug("%s %s -> %s", method, path, response.status_code)
        raise_for_status(response)
        return response

    def get_json(self, path: str, *, params: dict[str, Any] | None = None) -> Any:
        return decode_json(self.request("GET", path, params=params))

    def post_json(self, path: str, body: Any) -> Any:
        return decode_json(self.request("POST", path, json=body))

    def put_json(self, path: str, body: Any) -> Any:
        return decode_json(self.request("PUT", path, json=body))

    def patch_json(self, path: str, body: Any) -> Any:
        return decode_json(self.request("PATCH", path, json=body))

    def delete(self, path: str) -> None:
        self.request("DELETE", path)

    def ping(self) -> int:
        """Return the HTTP status of the service root (any answer counts)."""
        try:
            response = self._client.get("/")
        except httpx.HTTPError as exc:
            raise ServiceUnreachableError(f"Cannot reach {self.settings.url}: {exc}") from exc
        return response.status_code


def iter_documents(body: Any) -> list[dict[str, Any]]:
    """Return the expanded documents of a collection response, in link order.

    Collections answer as ``{"documentLinks": [...], "documents": {link: doc}}``.
    """
    if not isinstance(body, dict):
        return []
    documents = body.get("documents")
    if not isinstance(documents, dict):
        return []
    links = body.get("documentLinks")
    if not isinstance(links, list):
        links = list(documents)
    return [documents[link] for link in links if isinstance(documents.get(link), dict)]


def decode_json(response: httpx.Response) -> Any:
    """Decode a JSON body, tolerating empty responses."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError as exc:
        raise ApiError(
            "The service returned a response that is not valid JSON.",
            status_code=response.status_code,
            detail=response.text,
        ) from exc
