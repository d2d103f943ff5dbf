"""Tests for structured logging helpers."""

from __future__ import annotations

import json
import logging

from flask import g

from authflow.core.logger import (
    JSONFormatter,
    RequestContextFilter,
    bind_actor,
    ensure_request_id,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("authflow.test", logging.INFO, __file__, 1, "hello %s", ("ada",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_renders_message_and_extras():
    payload = json.loads(JSONFormatter().format(_record(user_id="u1", request_id="r1")))

    assert payload["message"] == "hello ada"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "authflow.test"
    assert payload["user_id"] == "u1"
    assert payload["request_id"] == "r1"


def test_json_formatter_drops_unlisted_extras():
    payload = json.loads(JSONFormatter().format(_record(password="s3cret", refresh_token="t")))

    assert "password" not in payload
    assert "refresh_token" not in payload


def test_filter_outside_request_sets_none():
    record = _record()
    assert RequestContextFilter().filter(record) is True
    assert record.request_id is None
    assert not hasattr(record, "user_id")


def test_filter_stamps_bound_actor(app):
    with app.test_request_context(headers={"X-Request-ID": "req-9"}):
        g.pop("request_id", None)
        bind_actor("user-42")
        record = _record()
        RequestContextFilter().filter(record)
        g.pop("actor_id", None)

    assert record.request_id == "req-9"
    assert record.user_id == "user-42"


def test_explicit_user_id_wins_over_actor(app):
    with app.test_request_context():
        bind_actor("user-42")
        record = _record(user_id="other")
        RequestContextFilter().filter(record)
        g.pop("actor_id", None)

    assert record.user_id == "other"


def test_request_id_taken_from_header(app):
    with app.test_request_context(headers={"X-Correlation-ID": "corr-1"}):
        g.pop("request_id", None)
        assert ensure_request_id() == "corr-1"


def test_request_id_generated_when_absent(app):
    with app.test_request_context():
        g.pop("request_id", None)
        first = ensure_request_id()
        assert first
        assert ensure_request_id() == first


def test_responses_echo_request_id(client):
    response = client.get("/api/v1/healthcheck", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"
