from __future__ import annotations

import os

import uvicorn
from starlette.applications import Starlette

from liveseal.constants import APP_VERSION, DEFAULT_EVENTS_PATH, LOGGER
from liveseal.dispatch import EventDispatcher
from liveseal.env import get_env_int, load_env, load_secret_key, setup_logging, validate_env
from liveseal.http import build_event_route, build_health_route, session_id_from_request
from signing.errors import (
    SignatureError,
    UnknownEventError,
    UnsignedInvocationError,
    raise_for,
)
from signing.signer import Signer

__all__ = [
    "APP_VERSION",
    "EventDispatcher",
    "Signer",
    "SignatureError",
    "UnknownEventError",
    "UnsignedInvocationError",
    "build_event_route",
    "create_app",
    "create_dispatcher",
    "load_env",
    "main",
    "raise_for",
    "session_id_from_request",
    "setup_logging",
    "validate_env",
]


def create_dispatcher() -> EventDispatcher:
    load_env()
    setup_logging()
    return EventDispatcher(Signer(load_secret_key()))


def create_app(dispatcher: EventDispatcher | None = None) -> Starlette:
    if dispatcher is None:
        dispatcher = create_dispatcher()

    events_path = os.getenv("LIVESEAL_EVENTS_PATH", DEFAULT_EVENTS_PATH)
    app = Starlette(
        routes=[
            build_health_route(),
            build_event_route(dispatcher, path=events_path),
        ]
    )
    app.state.dispatcher = dispatcher
    LOGGER.info(
        "Serving %s secure event(s) at %s", len(dispatcher.events), events_path
    )
    return app


def main() -> None:
    host = os.getenv("LIVESEAL_HOST", "127.0.0.1")
    port = get_env_int("LIVESEAL_PORT", 8000)
    app = create_app()
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
