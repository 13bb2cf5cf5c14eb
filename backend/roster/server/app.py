"""
Stateless HTTP adapter for the roster engine.

Every request carries its own snapshot (pool, assignments, slots) and gets the
recomputed snapshot back. Nothing is stored between requests; committing a
result is up to the caller.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import structlog
from pydantic import BaseModel, ValidationError
from starlette.applications import Starlette
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse
from starlette.routing import Route

from roster.logic import transitions
from roster.logic.auto_fill import auto_fill_for
from roster.logic.exceptions import RosterError
from roster.server.settings import RosterServerSettings
from roster.server.types import (
    ActionRequest,
    AssignAction,
    ClearAction,
    MoveAction,
    RemoveAction,
    RosterAction,
    RosterSnapshot,
)
from shared.build_info import APP_VERSION, GIT_COMMIT
from shared.logging import setup_logging

if TYPE_CHECKING:
    from starlette.requests import Request

    from roster.logic.state import RosterState
    from roster.logic.topology import SlotTopology
    from roster.logic.transitions import TransitionResult

logger = structlog.get_logger()


class RequestRejectedError(Exception):
    def __init__(self, message: str, status_code: int = 400) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


async def _read_request[T: BaseModel](request: Request, model: type[T]) -> T:
    settings: RosterServerSettings = request.app.state.settings
    raw_body = await request.body()
    if len(raw_body) > settings.max_request_bytes:
        raise RequestRejectedError("Request body too large", status_code=413)
    try:
        return model.model_validate(json.loads(raw_body))
    except (ValueError, TypeError, UnicodeDecodeError, ValidationError) as e:  # fmt: skip
        logger.warning("invalid roster request", path=request.url.path, error=str(e))
        raise RequestRejectedError("Invalid request body") from e


def _snapshot(payload: RosterSnapshot) -> tuple[RosterState, SlotTopology]:
    try:
        return payload.to_state(), payload.to_topology()
    except RosterError as e:
        raise RequestRejectedError(str(e)) from e


def _run_action(state: RosterState, topology: SlotTopology, action: RosterAction) -> TransitionResult:
    if isinstance(action, AssignAction):
        return transitions.assign(state, topology, action.signup_id, action.role, action.position)
    if isinstance(action, RemoveAction):
        return transitions.remove_to_pool(state, action.signup_id)
    if isinstance(action, MoveAction):
        return transitions.reassign_or_swap(state, topology, action.signup_id, action.role, action.position)
    if isinstance(action, ClearAction):
        return transitions.clear_all(state)
    raise TypeError(f"Unhandled roster action {action!r}")  # pragma: no cover


def _dump(participants: tuple) -> list[dict]:
    return [participant.model_dump(mode="json") for participant in participants]


async def health(_request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok", "version": APP_VERSION, "commit": GIT_COMMIT})


async def config(request: Request) -> JSONResponse:
    settings: RosterServerSettings = request.app.state.settings
    roster_settings = settings.to_roster_settings()
    return JSONResponse(
        {
            "clear_confirm_ms": int(roster_settings.clear_confirm_seconds * 1000),
            "join_confirm_ms": int(roster_settings.join_confirm_seconds * 1000),
        },
    )


async def auto_fill_preview(request: Request) -> JSONResponse:
    try:
        payload = await _read_request(request, RosterSnapshot)
        state, topology = _snapshot(payload)
    except RequestRejectedError as e:
        return JSONResponse({"error": e.message}, status_code=e.status_code)

    result = auto_fill_for(state, topology)
    return JSONResponse(
        {
            "new_pool": _dump(result.new_pool),
            "new_assignments": _dump(result.new_assignments),
            "summary": [entry.model_dump() for entry in result.summary],
            "summary_text": result.summary_text,
            "total_filled": result.total_filled,
        },
    )


async def apply_action(request: Request) -> JSONResponse:
    try:
        payload = await _read_request(request, ActionRequest)
        state, topology = _snapshot(payload)
    except RequestRejectedError as e:
        return JSONResponse({"error": e.message}, status_code=e.status_code)

    result = _run_action(state, topology, payload.action)
    pool, assignments = result.state.as_lists()
    if result.changed:
        logger.debug("roster action applied", action=payload.action.type, message=result.message)
    return JSONResponse(
        {
            "pool": _dump(pool),
            "assignments": _dump(assignments),
            "message": result.message,
            "changed": result.changed,
        },
    )


def create_app(settings: RosterServerSettings | None = None) -> Starlette:
    if settings is None:  # pragma: no cover
        settings = RosterServerSettings()

    routes = [
        Route("/health", health, methods=["GET"]),
        Route("/config", config, methods=["GET"]),
        Route("/roster/auto-fill", auto_fill_preview, methods=["POST"]),
        Route("/roster/actions", apply_action, methods=["POST"]),
    ]

    app = Starlette(routes=routes)
    app.state.settings = settings
    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_methods=["GET", "POST"],
            allow_headers=["Content-Type"],
        )
    logger.info("roster server ready")
    return app


def get_app() -> Starlette:  # pragma: no cover
    """ASGI application factory for production use (e.g., uvicorn --factory roster.server.app:get_app)."""
    settings = RosterServerSettings()
    setup_logging(log_dir=settings.log_dir)
    return create_app(settings=settings)
