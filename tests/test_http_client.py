"""Tests for the httpx transport layer (infra/http_client.py).

Requests are answered in-process by ``httpx.MockTransport``.
"""

from __future__ import annotations

import httpx
import pytest

from admiral_cli.exceptions import (
    ApiError,
    AuthenticationError,
    NotFoundError,
    ServerError,
    ServiceUnreachableError,
)
from admiral_cli.infra.http_client import AUTH_HEADER, iter_documents, raise_for_status
from admiral_cli.version import __version__

from service_stub import BASE_URL, collection, make_client


def _response(status: int, **kwargs) -> httpx.Response:
    return httpx.Response(status, request=httpx.Request("GET", BASE_URL), **kwargs)


# ---------------------------------------------------------------------------
# raise_for_status
# ---------------------------------------------------------------------------

class TestRaiseForStatus:
    def test_success_passes(self) -> None:
        raise_for_status(_response(200, json={}))

    @pytest.mark.parametrize("status", [401, 403])
    def test_auth_errors(self, status: int) -> None:
        with pytest.raises(AuthenticationError) as exc_info:
            raise_for_status(_response(status))
        assert exc_info.value.status_code == status
        assert exc_info.value.hint is not None
        assert "ADMIRAL_TOKEN" in exc_info.value.hint

    def test_not_found_uses_body_message(self) -> None:
        with pytest.raises(NotFoundError, match="no such policy"):
            raise_for_status(_response(404, json={"message": "no such policy"}))

    def test_server_error(self) -> None:
        with pytest.raises(ServerError, match="HTTP 503"):
            raise_for_status(_response(503))

    def test_other_client_error(self) -> None:
        with pytest.raises(ApiError) as exc_info:
            raise_for_status(_response(409, text="conflict"))
        assert type(exc_info.value) is ApiError
        assert str(exc_info.value) == "conflict"
        assert exc_info.value.detail == "conflict"


# ---------------------------------------------------------------------------
# AdmiralClient
# ---------------------------------------------------------------------------

class TestAdmiralClient:
    def test_sends_token_and_user_agent(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"ok": True})

        with make_client(handler, token="s3cret") as client:
            assert client.get_json("/resources/compute") == {"ok": True}

        assert seen[0].headers[AUTH_HEADER] == "s3cret"
        assert seen[0].headers["user-agent"] == f"admiral-cli/{__version__}"
        assert str(seen[0].url) == f"{BASE_URL}/resources/compute"

    def test_no_token_header_without_token(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200)

        with make_client(handler) as client:
            client.delete("/resources/group-policies/p1")
        assert AUTH_HEADER not in seen[0].headers

    def test_empty_body_decodes_to_none(self) -> None:
        with make_client(lambda request: httpx.Response(204)) as client:
            assert client.patch_json("/resources/compute/h1", {"powerState": "ON"}) is None

    def test_invalid_json_raises(self) -> None:
        with make_client(lambda request: httpx.Response(200, text="<html>")) as client:
            with pytest.raises(ApiError, match="not valid JSON"):
                client.get_json("/")

    def test_connection_error_is_mapped(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with make_client(handler) as client:
            with pytest.raises(ServiceUnreachableError, match="Cannot reach"):
                client.get_json("/resources/compute")

    def test_timeout_is_mapped(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        with make_client(handler) as client:
            with pytest.raises(ServiceUnreachableError, match="timed out"):
                client.post_json("/requests", {})

    def test_error_status_raises(self) -> None:
        with make_client(lambda request: httpx.Response(500, json={"message": "boom"})) as client:
            with pytest.raises(ServerError, match="boom"):
                client.put_json("/resources/hosts", {})

    def test_ping_returns_any_status(self) -> None:
        with make_client(lambda request: httpx.Response(401)) as client:
            assert client.ping() == 401


# ---------------------------------------------------------------------------
# iter_documents
# ---------------------------------------------------------------------------

class TestIterDocuments:
    def test_preserves_link_order(self) -> None:
        body = collection(
            {"documentSelfLink": "/x/b", "name": "b"},
            {"documentSelfLink": "/x/a", "name": "a"},
        )
        assert [doc["name"] for doc in iter_documents(body)] == ["b", "a"]

    def test_falls_back_to_document_keys(self) -> None:
        body = {"documents": {"/x/a": {"name": "a"}}}
        assert iter_documents(body) == [{"name": "a"}]

    @pytest.mark.parametrize("body", [None, [], {}, {"documentLinks": []}])
    def test_empty_or_unexpected_shapes(self, body: object) -> None:
        assert iter_documents(body) == []
