import json
import os
import sys

# Ensure project root is on sys.path for imports when running tests directly
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import pytest
import requests

from src.config import load_config


class FakeResponse:
    def __init__(self, status_code=200, body=None, reason="OK"):
        self.status_code = status_code
        self.reason = reason
        if body is None:
            self.text = ""
        elif isinstance(body, str):
            self.text = body
        else:
            self.text = json.dumps(body)
        self.content = self.text.encode("utf-8")

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        return json.loads(self.text)

    def raise_for_status(self):
        if not self.ok:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class FakeBackend:
    """Routes ``requests.request`` calls to per-(method, path) handlers."""

    def __init__(self, base_url):
        self.base_url = base_url
        self.routes = {}
        self.calls = []

    def on(self, method, path, handler):
        self.routes[(method, path)] = handler

    def calls_to(self, method, path):
        return [c for c in self.calls if c["method"] == method and c["path"] == path]

    def __call__(self, method, url, headers=None, json=None, timeout=None, **kwargs):
        path = url[len(self.base_url):]
        self.calls.append({"method": method, "path": path, "json": json, "headers": headers})
        handler = self.routes.get((method, path))
        if handler is None:
            return FakeResponse(404, {"message": f"No route for {method} {path}"}, reason="Not Found")
        result = handler(json) if callable(handler) else handler
        if isinstance(result, FakeResponse):
            return result
        if isinstance(result, Exception):
            raise result
        status, body = result
        return FakeResponse(status, body)


@pytest.fixture(autouse=True)
def _isolated_reports(tmp_path, monkeypatch):
    # reports/ is written relative to the working directory
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def config():
    return load_config(
        {
            "admin": {"base_url": "http://admin.test", "session_cookie": "s3ss10n", "api_token": ""},
            "wordpress": {"url": "https://blog.example.com", "username": "editor", "password": "secret"},
            "imports": {"transcript_interval_seconds": 1.0, "reveal_interval_seconds": 0.2},
            "gemini": {"api_key": "test-key"},
        }
    )


@pytest.fixture
def backend(config, monkeypatch):
    fake = FakeBackend(config["admin"]["base_url"])
    monkeypatch.setattr(requests, "request", fake)
    return fake


class FakeClock:
    def __init__(self, start=1000.0):
        self.now = start
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()
