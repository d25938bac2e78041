from __future__ import annotations

from typing import Any

import pytest

from blog_service import server as server_module
from blog_service.config import Settings
from blog_service.server import BlogServer, build_server


class _FakeMongoManager:
    def __init__(self, events: list[str], fail_connect: bool = False) -> None:
        self._events = events
        self._fail_connect = fail_connect
        self.close_calls = 0

    def connect(self) -> Any:
        self._events.append("mongo.connect")
        if self._fail_connect:
            raise ConnectionError("mongo down")
        return object()

    def close(self) -> None:
        self.close_calls += 1
        self._events.append("mongo.close")


class _StopFuture:
    def wait(self, timeout: float | None = None) -> bool:
        return True


class _FakeGrpcServer:
    def __init__(self, events: list[str], fail_start: bool = False) -> None:
        self._events = events
        self._fail_start = fail_start
        self.grace: float | None = None

    def start(self) -> None:
        self._events.append("server.start")
        if self._fail_start:
            raise RuntimeError("listener failed to start")

    def stop(self, grace: float | None) -> _StopFuture:
        self.grace = grace
        self._events.append("server.stop")
        return _StopFuture()


def _settings(**overrides: Any) -> Settings:
    values = {"server_host": "localhost", "server_port": 0, "shutdown_grace_seconds": 1.5}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def test_build_server_binds_ephemeral_port(fake_store) -> None:
    grpc_server, port = build_server(fake_store, _settings())
    try:
        grpc_server.start()
    finally:
        grpc_server.stop(None).wait()

    assert port > 0


def test_lifecycle_stops_listener_before_store(monkeypatch) -> None:
    events: list[str] = []
    fake_grpc = _FakeGrpcServer(events)
    monkeypatch.setattr(server_module, "build_server", lambda store, settings: (fake_grpc, 50051))
    mongo = _FakeMongoManager(events)

    blog_server = BlogServer(_settings(), mongo=mongo)
    blog_server.start()
    blog_server.stop()
    blog_server.stop()
    blog_server.wait()

    assert events == ["mongo.connect", "server.start", "server.stop", "mongo.close"]
    assert blog_server.port == 50051
    assert fake_grpc.grace == 1.5
    assert mongo.close_calls == 1


def test_store_is_closed_when_server_cannot_be_built(monkeypatch) -> None:
    events: list[str] = []

    def failing_build(store, settings):
        raise RuntimeError("error while listening on tcp localhost:0")

    monkeypatch.setattr(server_module, "build_server", failing_build)
    mongo = _FakeMongoManager(events)

    with pytest.raises(RuntimeError, match="listening"):
        BlogServer(_settings(), mongo=mongo).start()

    assert events == ["mongo.connect", "mongo.close"]


def test_store_connect_failure_never_starts_listener(monkeypatch) -> None:
    events: list[str] = []
    monkeypatch.setattr(
        server_module, "build_server", lambda store, settings: (_FakeGrpcServer(events), 50051)
    )

    with pytest.raises(ConnectionError):
        BlogServer(_settings(), mongo=_FakeMongoManager(events, fail_connect=True)).start()

    assert events == ["mongo.connect"]


def test_store_is_closed_when_listener_fails_to_start(monkeypatch) -> None:
    events: list[str] = []
    monkeypatch.setattr(
        server_module,
        "build_server",
        lambda store, settings: (_FakeGrpcServer(events, fail_start=True), 50051),
    )
    mongo = _FakeMongoManager(events)

    with pytest.raises(RuntimeError, match="failed to start"):
        BlogServer(_settings(), mongo=mongo).start()

    assert events == ["mongo.connect", "server.start", "mongo.close"]
    assert mongo.close_calls == 1
