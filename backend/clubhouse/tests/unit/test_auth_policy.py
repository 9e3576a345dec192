"""Tests for route auth policy markers and startup validation."""

from __future__ import annotations

import pytest
from starlette.applications import Starlette
from starlette.authentication import AuthCredentials
from starlette.exceptions import HTTPException
from starlette.requests import Request
from starlette.routing import Mount, Route

from clubhouse.auth.policy import AUTH_POLICY_ATTR, protected_api, public_route, validate_route_auth_policy


def _make_request(*, authenticated: bool) -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/api/admin/me",
        "query_string": b"",
        "headers": [],
        "auth": AuthCredentials(["authenticated"] if authenticated else []),
    }
    return Request(scope)


def _make_handler() -> object:
    """Return a fresh async handler with no attributes from prior tests."""

    async def handler(request: Request) -> str:
        return "ok"

    return handler


class TestProtectedApi:
    async def test_anonymous_request_gets_401(self) -> None:
        with pytest.raises(HTTPException) as exc_info:
            await protected_api(_make_handler())(_make_request(authenticated=False))
        assert exc_info.value.status_code == 401

    async def test_admin_session_passes_through(self) -> None:
        assert await protected_api(_make_handler())(_make_request(authenticated=True)) == "ok"


class TestPublicRoute:
    async def test_anonymous_request_passes_through(self) -> None:
        assert await public_route(_make_handler())(_make_request(authenticated=False)) == "ok"

    def test_marker_lives_on_wrapper_only(self) -> None:
        handler = _make_handler()
        wrapped = public_route(handler)
        assert getattr(wrapped, AUTH_POLICY_ATTR) == "public"
        assert not hasattr(handler, AUTH_POLICY_ATTR)


class TestValidateRouteAuthPolicy:
    def test_all_routes_classified_passes(self) -> None:
        validate_route_auth_policy(
            [
                Route("/a", public_route(_make_handler()), methods=["GET"], name="a"),
                Route("/b", protected_api(_make_handler()), methods=["GET"], name="b"),
                Mount("/", app=Starlette(), name="client"),
            ],
        )

    def test_unclassified_routes_all_reported(self) -> None:
        routes = [
            Route("/ok", public_route(_make_handler()), methods=["GET"], name="ok"),
            Route("/x", _make_handler(), methods=["GET"], name="x"),
            Route("/y", _make_handler(), methods=["POST"], name="y"),
        ]
        with pytest.raises(RuntimeError, match=r"/x \(x\), /y \(y\)"):
            validate_route_auth_policy(routes)
