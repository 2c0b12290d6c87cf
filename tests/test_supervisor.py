from __future__ import annotations

import asyncio

import pytest
from telethon import errors

import app
from core.reconnect import ReconnectPolicy


class FakeClient:
    def __init__(self, runs, connect_failures: int = 0, authorized: bool = True) -> None:
        self._runs = list(runs)
        self._connect_failures = connect_failures
        self._authorized = authorized
        self.run_calls = 0
        self.connect_calls = 0

    async def run_until_disconnected(self) -> None:
        self.run_calls += 1
        outcome = self._runs.pop(0)
        if outcome is not None:
            raise outcome

    async def connect(self) -> None:
        self.connect_calls += 1
        if self._connect_failures:
            self._connect_failures -= 1
            raise ConnectionError("still offline")

    async def is_user_authorized(self) -> bool:
        return self._authorized


NO_DELAY = ReconnectPolicy(max_restarts=3, base_delay=0.0, max_delay=0.0)


def test_reconnects_after_disconnect() -> None:
    client = FakeClient([None, errors.AuthKeyUnregisteredError(request=None)])

    asyncio.run(app._supervise(client, NO_DELAY))

    assert client.run_calls == 2
    assert client.connect_calls == 1


def test_retries_failed_connects_until_limit() -> None:
    client = FakeClient([OSError("dropped")], connect_failures=10)

    asyncio.run(app._supervise(client, NO_DELAY))

    assert client.run_calls == 1
    assert client.connect_calls == 3


def test_stops_when_session_is_no_longer_authorized() -> None:
    client = FakeClient([None], authorized=False)

    asyncio.run(app._supervise(client, NO_DELAY))

    assert client.run_calls == 1
    assert client.connect_calls == 1


def test_main_dispatches_subcommands(monkeypatch) -> None:
    calls: list[str] = []
    monkeypatch.setattr(app, "_run", lambda: calls.append("run"))
    monkeypatch.setattr(app, "_setup", lambda: calls.append("config"))
    monkeypatch.setattr(app, "_login", lambda: calls.append("login"))

    app.main([])
    app.main(["run"])
    app.main(["config"])
    app.main(["login"])

    assert calls == ["run", "run", "config", "login"]


def test_reconnects_after_connection_reset() -> None:
    client = FakeClient([ConnectionResetError("reset"), errors.AuthKeyUnregisteredError(request=None)])

    asyncio.run(app._supervise(client, NO_DELAY))

    assert client.run_calls == 2
    assert client.connect_calls == 1


def test_unregistered_subcommand_is_rejected(monkeypatch) -> None:
    calls: list[str] = []
    monkeypatch.setattr(app, "_setup", lambda: calls.append("config"))

    with pytest.raises(SystemExit):
        app.main(["setup"])

    assert calls == []
