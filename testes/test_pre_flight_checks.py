import pytest
import requests

from src.utils.pre_flight_checks import PreFlightCheckError, run_admin_pre_flight_checks
from conftest import FakeResponse


def fake_get(statuses):
    def get(url, headers=None, timeout=None):
        for suffix, status in statuses.items():
            if url.endswith(suffix):
                return FakeResponse(status, {"message": "x"})
        raise requests.ConnectionError("unreachable")

    return get


def test_checks_pass_for_youtube(config, monkeypatch):
    monkeypatch.setattr(requests, "get", fake_get({"/blog/posts": 200, "/youtube/channels": 200}))

    run_admin_pre_flight_checks(config, source="youtube")


def test_expired_session_is_reported(config, monkeypatch):
    monkeypatch.setattr(requests, "get", fake_get({"/blog/posts": 401}))

    with pytest.raises(PreFlightCheckError, match="expired"):
        run_admin_pre_flight_checks(config)


def test_missing_credentials(config):
    config["admin"]["session_cookie"] = ""

    with pytest.raises(PreFlightCheckError):
        run_admin_pre_flight_checks(config)


def test_wordpress_requires_site_settings(config, monkeypatch):
    monkeypatch.setattr(requests, "get", fake_get({"/blog/posts": 200}))
    config["wordpress"]["url"] = ""

    with pytest.raises(PreFlightCheckError, match="WordPress"):
        run_admin_pre_flight_checks(config, source="wordpress")


def test_unreachable_backend(config, monkeypatch):
    monkeypatch.setattr(requests, "get", fake_get({}))

    with pytest.raises(PreFlightCheckError, match="Network error"):
        run_admin_pre_flight_checks(config)


def test_checks_use_configured_timeout(config, monkeypatch):
    seen = []

    def get(url, headers=None, timeout=None):
        seen.append(timeout)
        return FakeResponse(200, [])

    config["admin"]["timeout"] = 7.5
    monkeypatch.setattr(requests, "get", get)

    run_admin_pre_flight_checks(config, source="youtube")

    assert seen == [7.5, 7.5]
