"""Tests for environment-driven configuration."""

from __future__ import annotations

import pytest

from authflow.core import config as cfg


def test_env_bool(monkeypatch):
    monkeypatch.setenv("FLAG", "Yes")
    assert cfg.env_bool("FLAG") is True
    monkeypatch.setenv("FLAG", "0")
    assert cfg.env_bool("FLAG", default=True) is False
    monkeypatch.delenv("FLAG")
    assert cfg.env_bool("FLAG", default=True) is True


def test_env_int(monkeypatch):
    monkeypatch.setenv("NUM", "42")
    assert cfg.env_int("NUM", 1) == 42
    monkeypatch.setenv("NUM", " ")
    assert cfg.env_int("NUM", 7) == 7


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("testing", cfg.TestingConfig),
        ("PRODUCTION", cfg.ProductionConfig),
        ("unknown", cfg.DevelopmentConfig),
    ],
)
def test_get_config_selects_by_app_env(monkeypatch, name, expected):
    monkeypatch.setenv(cfg.ENV_VAR, name)
    assert cfg.get_config() is expected


def test_production_refuses_placeholder_secrets(monkeypatch):
    monkeypatch.setattr(cfg.ProductionConfig, "SECRET_KEY", "real-secret")
    monkeypatch.setattr(cfg.ProductionConfig, "JWT_SECRET_KEY", "CHANGE_ME_JWT")
    with pytest.raises(RuntimeError, match="JWT_SECRET_KEY"):
        cfg.ProductionConfig.validate()


def test_production_accepts_real_secrets(monkeypatch):
    monkeypatch.setattr(cfg.ProductionConfig, "SECRET_KEY", "real-secret")
    monkeypatch.setattr(cfg.ProductionConfig, "JWT_SECRET_KEY", "real-jwt-secret")
    cfg.ProductionConfig.validate()


def test_session_cookies_are_secure_by_default():
    assert cfg.BaseConfig.JWT_ACCESS_COOKIE_NAME == "accessToken"
    assert cfg.BaseConfig.JWT_REFRESH_COOKIE_NAME == "refreshToken"
    assert cfg.ProductionConfig.AUTH_COOKIE_SECURE is True


def test_production_refuses_placeholder_flask_secret(monkeypatch):
    monkeypatch.setattr(cfg.ProductionConfig, "SECRET_KEY", "CHANGE_ME")
    monkeypatch.setattr(cfg.ProductionConfig, "JWT_SECRET_KEY", "real-jwt-secret")
    with pytest.raises(RuntimeError, match="^SECRET_KEY"):
        cfg.ProductionConfig.validate()


def test_app_keeps_envelope_key_order(app):
    assert app.json.sort_keys is False
