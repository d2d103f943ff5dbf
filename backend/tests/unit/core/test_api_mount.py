"""Tests for mounting the versioned blueprints."""

from __future__ import annotations

import pytest

from authflow.api import join_prefix


@pytest.mark.parametrize(
    ("segments", "expected"),
    [
        (("/api", "v1", ""), "/api/v1"),
        (("/api/", "/v1/", "/users"), "/api/v1/users"),
        (("", "v1"), "/v1"),
    ],
)
def test_join_prefix(segments, expected):
    assert join_prefix(*segments) == expected


def test_session_routes_are_mounted_under_v1(app):
    rules = {rule.rule for rule in app.url_map.iter_rules()}
    assert "/api/v1/healthcheck" in rules
    assert "/api/v1/users/register" in rules
    assert "/api/v1/users/login" in rules
    assert "/api/v1/users/logout" in rules
