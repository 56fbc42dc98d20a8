"""Tests for the retrying HTTP client."""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import MagicMock

import pytest
import requests

from ffxiv_tracker.clients.http_client import HttpClient
from ffxiv_tracker.config.settings import HttpSettings
from ffxiv_tracker.errors import HttpClientError


def make_response(
    status: int = 200,
    body: Any = None,
    content_type: str = "application/json",
    reason: str = "OK",
) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response.reason = reason
    if body is None:
        response._content = b""
    elif isinstance(body, (dict, list)):
        response._content = json.dumps(body).encode()
    else:
        response._content = str(body).encode()
    response.headers["content-type"] = content_type
    response.encoding = "utf-8"
    return response


@pytest.fixture
def session():
    s = MagicMock(spec=requests.Session)
    s.headers = {}
    return s


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def client(session, sleeps):
    return HttpClient(
        timeout_ms=2500,
        max_retries=2,
        retry_delay_ms=100,
        settings=HttpSettings(),
        session=session,
        sleep_func=sleeps.append,
    )


class TestConfiguration:
    def test_defaults_come_from_settings(self, session):
        c = HttpClient(settings=HttpSettings(), session=session)
        assert c.timeout_ms == 5000
        assert c.max_retries == 3
        assert c.retry_delay_ms == 1000

    def test_explicit_options_win(self, client):
        assert client.timeout_ms == 2500
        assert client.max_retries == 2
        assert client.retry_delay_ms == 100

    def test_sets_user_agent(self, session):
        HttpClient(settings=HttpSettings(user_agent="Test/1.0"), session=session)
        assert session.headers["User-Agent"] == "Test/1.0"


class TestGet:
    def test_returns_parsed_json(self, client, session):
        session.request.return_value = make_response(body={"name": "Paladin"})
        assert client.get("https://xivapi.com/classjob/19") == {"name": "Paladin"}

        args, kwargs = session.request.call_args
        assert args == ("GET", "https://xivapi.com/classjob/19")
        assert kwargs["timeout"] == 2.5
        assert kwargs["headers"]["Accept"] == "application/json"

    def test_relative_url_uses_base_url(self, session, sleeps):
        c = HttpClient(
            base_url="https://xivapi.com",
            settings=HttpSettings(),
            session=session,
            sleep_func=sleeps.append,
        )
        session.request.return_value = make_response(body=[])
        c.get("/item")
        assert session.request.call_args[0][1] == "https://xivapi.com/item"

    def test_text_response(self, client, session):
        session.request.return_value = make_response(body="pong", content_type="text/plain")
        assert client.get("https://x.test/ping") == "pong"

    def test_empty_body_is_empty_string(self, client, session):
        session.request.return_value = make_response(body=None, content_type="text/plain")
        assert client.get("https://x.test/empty") == ""

    def test_malformed_json_falls_back_to_text(self, client, session):
        session.request.return_value = make_response(body="{not json")
        assert client.get("https://x.test/bad") == "{not json"


class TestErrors:
    def test_client_error_is_not_retried(self, client, session, sleeps):
        session.request.return_value = make_response(
            status=404, body={"error": "missing"}, reason="Not Found"
        )

        with pytest.raises(HttpClientError) as exc_info:
            client.get("https://x.test/item/1")

        err = exc_info.value
        assert str(err) == "HTTP 404: Not Found"
        assert err.status == 404
        assert err.status_text == "Not Found"
        assert err.response_body == {"error": "missing"}
        assert session.request.call_count == 1
        assert sleeps == []

    def test_server_error_retried_then_succeeds(self, client, session, sleeps):
        session.request.side_effect = [
            make_response(status=503, body="busy", content_type="text/plain", reason="Service Unavailable"),
            make_response(body={"ok": True}),
        ]
        assert client.get("https://x.test/a") == {"ok": True}
        assert session.request.call_count == 2
        assert sleeps == [0.1]

    def test_gives_up_after_max_retries(self, client, session, sleeps):
        session.request.return_value = make_response(
            status=500, body="oops", content_type="text/plain", reason="Internal Server Error"
        )
        with pytest.raises(HttpClientError) as exc_info:
            client.get("https://x.test/a")

        assert exc_info.value.status == 500
        assert exc_info.value.response_body == "oops"
        assert session.request.call_count == 3
        assert sleeps == [0.1, 0.1]

    def test_timeout(self, client, session):
        session.request.side_effect = requests.Timeout("slow")
        with pytest.raises(HttpClientError, match="Request timeout") as exc_info:
            client.get("https://x.test/a")
        assert exc_info.value.status is None
        assert session.request.call_count == 3

    def test_network_error(self, client, session):
        session.request.side_effect = requests.ConnectionError("refused")
        with pytest.raises(HttpClientError, match="Network error: refused"):
            client.get("https://x.test/a")

    def test_zero_retries_tries_once(self, session, sleeps):
        c = HttpClient(max_retries=0, settings=HttpSettings(), session=session, sleep_func=sleeps.append)
        session.request.side_effect = requests.ConnectionError("down")
        with pytest.raises(HttpClientError):
            c.get("https://x.test/a")
        assert session.request.call_count == 1
        assert sleeps == []


def test_close_closes_session(client, session):
    client.close()
    session.close.assert_called_once()
