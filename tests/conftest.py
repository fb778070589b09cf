"""Shared fixtures: fake HTTP responses, a fake requests session and SMTP."""

import json
from unittest.mock import MagicMock, patch

import pytest
import requests


def make_response(
    body: bytes = b"",
    status_code: int = 200,
    reason: str = "OK",
    content_type: str = "text/plain",
) -> requests.Response:
    """Build a real requests.Response with an already-consumed body."""
    resp = requests.Response()
    resp.status_code = status_code
    resp.reason = reason
    resp.url = "http://example.test/"
    resp.headers["Content-Type"] = content_type
    resp._content = body
    resp._content_consumed = True
    return resp


@pytest.fixture
def session():
    """A stand-in for requests.Session with GET/POST returning 200 OK."""
    fake = MagicMock()
    fake.__enter__.return_value = fake
    fake.get.return_value = make_response(b"")
    fake.post.return_value = make_response(b"")
    return fake


@pytest.fixture
def patched_session(session):
    """Make integrator runs use the fake session."""
    with patch("integrator.requests.Session", return_value=session):
        yield session


@pytest.fixture
def smtp_server():
    """Patch smtplib.SMTP in the notifier; yields the connected server mock."""
    with patch("notifier.smtplib.SMTP") as smtp_cls:
        server = MagicMock()
        server.has_extn.return_value = False
        smtp_cls.return_value.__enter__.return_value = server
        server.smtp_cls = smtp_cls
        yield server


@pytest.fixture
def write_config(tmp_path):
    """Write a config dict to tmp_path/config.json and return the path."""
    def _write(data) -> str:
        path = tmp_path / "config.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return str(path)
    return _write


def base_config(sources=None, targets=None) -> dict:
    return {
        "data_sources": sources or [],
        "data_targets": targets or [],
        "notifications": {
            "email": {
                "smtp": {
                    "server": "smtp.example.test",
                    "port": 587,
                    "username": "bot",
                    "password": "secret",
                },
                "recipient": "ops@example.test",
            }
        },
    }
