"""In-process stand-in for the Admiral REST API used across the tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import httpx

from admiral_cli.config import Settings
from admiral_cli.infra.http_client import AdmiralClient

BASE_URL = "http://admiral.test"

Handler = Callable[[httpx.Request], httpx.Response]


def make_settings(**overrides: Any) -> Settings:
    values: dict[str, Any] = {"url": BASE_URL}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_client(handler: Handler, **overrides: Any) -> AdmiralClient:
    """Return an AdmiralClient whose requests are answered by *handler*."""
    return AdmiralClient(make_settings(**overrides), transport=httpx.MockTransport(handler))


def request_json(request: httpx.Request) -> Any:
    return json.loads(request.content) if request.content else None


def collection(*docs: dict[str, Any]) -> dict[str, Any]:
    """Build a collection response in the service's expanded shape."""
    links = [doc["documentSelfLink"] for doc in docs]
    return {"documentLinks": links, "documents": {doc["documentSelfLink"]: doc for doc in docs}}


def host_doc(
    host_id: str = "h1",
    address: str = "https://10.0.0.5:2376",
    **extra: Any,
) -> dict[str, Any]:
    doc: dict[str, Any] = {
        "documentSelfLink": f"/resources/compute/{host_id}",
        "address": address,
        "name": f"host-{host_id}",
        "powerState": "ON",
        "resourcePoolLink": "/resources/pools/default-pool",
        "customProperties": {"__Containers": "3", "__computeContainerHost": "true"},
    }
    doc.update(extra)
    return doc


class RecordingService:
    """Route table for MockTransport that records every request.

    ``routes`` maps ``(METHOD, path)`` to a response or a callable
    returning one.  Unknown routes answer 404.
    """

    def __init__(self, routes: dict[tuple[str, str], Any] | None = None) -> None:
        self.routes: dict[tuple[str, str], Any] = dict(routes or {})
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": f"No route {request.method} {request.url.path}"})
        if callable(route):
            return route(request)
        # Fresh copy per request; responses are single-use.
        return httpx.Response(route.status_code, headers=route.headers, content=route.content)

    def calls(self, method: str, path: str | None = None) -> list[httpx.Request]:
        return [
            r for r in self.requests
            if r.method == method and (path is None or r.url.path == path)
        ]

    def client(self, **overrides: Any) -> AdmiralClient:
        return make_client(self, **overrides)
