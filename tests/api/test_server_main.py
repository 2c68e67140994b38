from __future__ import annotations

import pytest

import code_beautifier.server as server


def test_server_main_parses_and_calls_uvicorn(monkeypatch: pytest.MonkeyPatch):
    captured: dict[str, object] = {}

    def fake_run(app, *, host, port, log_level, reload):
        captured["app"] = app
        captured["host"] = host
        captured["port"] = port
        captured["log_level"] = log_level
        captured["reload"] = reload

    monkeypatch.setattr(server.uvicorn, "run", fake_run)
    assert server.main(["--host", "127.0.0.1", "--port", "12345", "--log-level", "warning"]) == 0
    assert captured["app"] == "code_beautifier.api:app"
    assert captured["host"] == "127.0.0.1"
    assert captured["port"] == 12345
    assert captured["log_level"] == "warning"
    assert captured["reload"] is False


def test_server_main_defaults(monkeypatch: pytest.MonkeyPatch):
    captured: dict[str, object] = {}
    monkeypatch.setattr(server.uvicorn, "run", lambda app, **kw: captured.update(kw))
    assert server.main([]) == 0
    assert captured["port"] == 18080
    assert captured["host"] == "127.0.0.1"
