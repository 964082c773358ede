import pytest
from starlette.testclient import TestClient

import server
from liveseal.dispatch import EventDispatcher
from signing.signer import Signer


class _RunRecorder:
    def __init__(self) -> None:
        self.calls: list[dict] = []

    def __call__(self, app, **kwargs) -> None:
        self.calls.append({"app": app, **kwargs})


def _prepare_env(monkeypatch) -> None:
    monkeypatch.setattr(server, "load_env", lambda: None)
    monkeypatch.setattr(server, "setup_logging", lambda: False)
    monkeypatch.setenv("LIVESEAL_SECRET_KEY", "k" * 32)
    monkeypatch.delenv("LIVESEAL_EVENTS_PATH", raising=False)


def test_create_dispatcher_uses_configured_key(monkeypatch) -> None:
    _prepare_env(monkeypatch)

    dispatcher = server.create_dispatcher()

    expected = Signer(b"k" * 32).sign_event("sess-1", "delete_user")
    assert dispatcher.signer.sign_event("sess-1", "delete_user") == expected


def test_create_dispatcher_fails_without_key(monkeypatch) -> None:
    _prepare_env(monkeypatch)
    monkeypatch.delenv("LIVESEAL_SECRET_KEY")

    with pytest.raises(RuntimeError):
        server.create_dispatcher()


def test_create_app_mounts_routes(monkeypatch) -> None:
    _prepare_env(monkeypatch)

    app = server.create_app()
    paths = {route.path for route in app.routes}

    assert paths == {"/health", "/events"}
    assert isinstance(app.state.dispatcher, EventDispatcher)


def test_create_app_custom_events_path(monkeypatch) -> None:
    _prepare_env(monkeypatch)
    monkeypatch.setenv("LIVESEAL_EVENTS_PATH", "/live/events")

    app = server.create_app(EventDispatcher(Signer(b"k" * 32)))

    assert "/live/events" in {route.path for route in app.routes}


def test_health_returns_200(monkeypatch) -> None:
    _prepare_env(monkeypatch)

    response = TestClient(server.create_app()).get("/health")

    assert response.status_code == 200
    assert response.json()["version"] == server.APP_VERSION


def test_main_uses_local_defaults(monkeypatch) -> None:
    _prepare_env(monkeypatch)
    recorder = _RunRecorder()
    monkeypatch.setattr(server.uvicorn, "run", recorder)
    monkeypatch.delenv("LIVESEAL_HOST", raising=False)
    monkeypatch.delenv("LIVESEAL_PORT", raising=False)

    server.main()

    assert len(recorder.calls) == 1
    assert recorder.calls[0]["host"] == "127.0.0.1"
    assert recorder.calls[0]["port"] == 8000


def test_main_reads_host_and_port_from_env(monkeypatch) -> None:
    _prepare_env(monkeypatch)
    recorder = _RunRecorder()
    monkeypatch.setattr(server.uvicorn, "run", recorder)
    monkeypatch.setenv("LIVESEAL_HOST", "0.0.0.0")
    monkeypatch.setenv("LIVESEAL_PORT", "9100")

    server.main()

    assert recorder.calls[0]["host"] == "0.0.0.0"
    assert recorder.calls[0]["port"] == 9100
