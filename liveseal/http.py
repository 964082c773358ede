from __future__ import annotations

from collections.abc import Callable

from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from signing.errors import SignatureError, UnknownEventError

from .constants import APP_VERSION, DEFAULT_EVENTS_PATH, SESSION_COOKIE, SESSION_HEADER
from .dispatch import EventDispatcher

SessionIdFn = Callable[[Request], str | None]


def session_id_from_request(request: Request) -> str | None:
    session_id = request.cookies.get(SESSION_COOKIE) or request.headers.get(SESSION_HEADER)
    if not session_id or not session_id.strip():
        return None
    return session_id.strip()


def error_response(code: str, description: str, status_code: int) -> Response:
    return JSONResponse(
        {"error": code, "error_description": description},
        status_code=status_code,
    )


def build_event_route(
    dispatcher: EventDispatcher,
    *,
    path: str = DEFAULT_EVENTS_PATH,
    session_id_fn: SessionIdFn = session_id_from_request,
) -> Route:
    async def event_route(request: Request) -> Response:
        session_id = session_id_fn(request)
        if session_id is None:
            return error_response("missing_session", "No session is bound to this request.", 401)

        try:
            payload = await request.json()
        except Exception:
            return error_response("invalid_request", "Invalid JSON body.", 400)

        if not isinstance(payload, dict):
            return error_response("invalid_request", "Request body must be a JSON object.", 400)

        event = payload.get("event")
        params = payload.get("params", {})
        if not isinstance(event, str) or not event:
            return error_response("invalid_request", "event is required.", 400)
        if not isinstance(params, dict):
            return error_response("invalid_request", "params must be a JSON object.", 400)

        try:
            result = await dispatcher.adispatch(event, params, session_id)
        except UnknownEventError as error:
            return error_response(error.kind, str(error), error.status_code)
        except SignatureError as error:
            return error_response(error.kind, str(error), error.status_code)

        return JSONResponse({"result": result})

    return Route(path, event_route, methods=["POST"])


def build_health_route() -> Route:
    async def health_route(request: Request) -> Response:
        del request
        return JSONResponse({"status": "ok", "version": APP_VERSION})

    return Route("/health", health_route, methods=["GET"])
