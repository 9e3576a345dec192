"""Admin endpoints: session lifecycle, pricing changes, demo-number registry."""

from __future__ import annotations

from http import HTTPStatus
from typing import TYPE_CHECKING

from starlette.exceptions import HTTPException
from starlette.responses import JSONResponse, Response

from clubhouse.auth.backend import SESSION_COOKIE_NAME
from clubhouse.auth.types import LoginRequest
from clubhouse.demo.types import AddDemoNumberRequest
from clubhouse.pricing.types import UpdatePricingRequest
from clubhouse.views.parsing import parse_body_as
from clubhouse.views.serializers import demo_number_json, rate_json

if TYPE_CHECKING:
    from starlette.requests import Request

    from clubhouse.auth.models import AuthenticatedAdmin
    from clubhouse.demo.registry import DemoNumberRegistry
    from clubhouse.pricing.rates import RateTable
    from shared.auth.service import AuthService
    from shared.auth.settings import AuthSettings


async def login(request: Request) -> JSONResponse:
    """POST /api/admin/login - verify credentials and set the session cookie."""
    auth_service: AuthService = request.app.state.auth_service
    auth_settings: AuthSettings = request.app.state.auth_settings

    body = await parse_body_as(request, LoginRequest)
    session = await auth_service.login(body.username, body.password)

    response = JSONResponse(
        {"message": "Login successful", "user": {"id": session.user_id, "username": session.username}},
    )
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=session.session_id,
        httponly=True,
        samesite="lax",
        secure=auth_settings.cookie_secure,
        max_age=auth_settings.session_ttl_seconds,
        path="/",
    )
    return response


async def logout(request: Request) -> Response:
    """POST /api/admin/logout - destroy the session and clear the cookie."""
    auth_service: AuthService = request.app.state.auth_service
    admin: AuthenticatedAdmin = request.user
    auth_service.logout(admin.session_id)
    response = JSONResponse({"message": "Logout successful"})
    response.delete_cookie(SESSION_COOKIE_NAME, path="/")
    return response


async def me(request: Request) -> JSONResponse:
    """GET /api/admin/me - the signed-in account, re-read so a removed admin loses access."""
    auth_service: AuthService = request.app.state.auth_service
    admin: AuthenticatedAdmin = request.user
    account = await auth_service.get_admin(admin.user_id)
    if account is None:
        auth_service.end_admin_sessions(admin.user_id)
        raise HTTPException(status_code=HTTPStatus.UNAUTHORIZED)
    return JSONResponse({"id": account.user_id, "username": account.username})


async def update_pricing(request: Request) -> JSONResponse:
    """POST /api/admin/pricing - append a new rate attributed to the signed-in admin."""
    rate_table: RateTable = request.app.state.rate_table
    admin: AuthenticatedAdmin = request.user
    body = await parse_body_as(request, UpdatePricingRequest)
    rate = await rate_table.set_rate(body.weekday_price, body.weekend_price, set_by=admin.user_id)
    return JSONResponse(rate_json(rate), status_code=HTTPStatus.CREATED)


async def pricing_history(request: Request) -> JSONResponse:
    rate_table: RateTable = request.app.state.rate_table
    history = await rate_table.get_rate_history()
    return JSONResponse({"rates": [rate_json(rate) for rate in history]})


async def list_demo_numbers(request: Request) -> JSONResponse:
    demo_registry: DemoNumberRegistry = request.app.state.demo_registry
    numbers = await demo_registry.list_numbers()
    return JSONResponse({"demoNumbers": [demo_number_json(entry) for entry in numbers]})


async def add_demo_number(request: Request) -> JSONResponse:
    demo_registry: DemoNumberRegistry = request.app.state.demo_registry
    body = await parse_body_as(request, AddDemoNumberRequest)
    entry = await demo_registry.add(body.phone_number)
    return JSONResponse(demo_number_json(entry), status_code=HTTPStatus.CREATED)


async def remove_demo_number(request: Request) -> Response:
    """DELETE /api/admin/demo-numbers/{demo_id}"""
    demo_registry: DemoNumberRegistry = request.app.state.demo_registry
    await demo_registry.remove(request.path_params["demo_id"])
    return Response(status_code=HTTPStatus.NO_CONTENT)
