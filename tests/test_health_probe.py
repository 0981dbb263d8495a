from __future__ import annotations

from types import SimpleNamespace

import pytest
import requests

from check_engine.health_probe import probe


class FakeGet:
    def __init__(self, status_code=None, error=None):
        self.status_code = status_code
        self.error = error
        self.calls = []

    def __call__(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return SimpleNamespace(status_code=self.status_code)


@pytest.mark.parametrize("status_code", [200, 301, 502])
def test_status_code_is_returned_as_is(monkeypatch, status_code) -> None:
    fake_get = FakeGet(status_code=status_code)
    monkeypatch.setattr(requests, "get", fake_get)

    assert probe("http://alb.example/health", 5.0) == status_code
    assert fake_get.calls == [
        ("http://alb.example/health", {"timeout": 5.0, "allow_redirects": False})
    ]


@pytest.mark.parametrize(
    "error",
    [
        requests.ConnectionError("connection refused"),
        requests.Timeout("timed out"),
        requests.exceptions.SSLError("bad certificate"),
    ],
)
def test_request_errors_mean_unreachable(monkeypatch, error) -> None:
    monkeypatch.setattr(requests, "get", FakeGet(error=error))

    assert probe("https://alb.example/health", 1.0) is None
