"""Unit tests for the User model."""

from __future__ import annotations

import pytest

from authflow.models.user import User
from tests.factories.user import UserFactory


def _user(**overrides) -> User:
    fields = {
        "username": "ada",
        "email": "ada@x.com",
        "full_name": "Ada Lovelace",
        "avatar_url": "https://media.test/avatars/a.png",
    }
    fields.update(overrides)
    return User(**fields)


def test_username_and_email_are_normalized():
    user = _user(username="  Ada ", email=" ADA@X.com ")
    assert user.username == "ada"
    assert user.email == "ada@x.com"


@pytest.mark.parametrize("email", ["", "no-at-sign", "ada@nodot"])
def test_invalid_email_rejected(email):
    with pytest.raises(ValueError):
        _user(email=email)


@pytest.mark.parametrize("field", ["username", "full_name", "avatar_url"])
def test_blank_required_fields_rejected(field):
    with pytest.raises(ValueError):
        _user(**{field: "   "})


def test_password_is_hashed_and_write_only():
    user = _user()
    user.password = "s3cret"
    assert user.password_hash
    assert user.password_hash != "s3cret"
    assert user.verify_password("s3cret") is True
    assert user.verify_password("wrong") is False
    with pytest.raises(AttributeError):
        _ = user.password


def test_empty_password_rejected():
    user = _user()
    with pytest.raises(ValueError):
        user.password = ""


def test_verify_password_with_no_candidate_is_false():
    user = _user()
    user.password = "s3cret"
    assert user.verify_password(None) is False
    assert user.verify_password("") is False


def test_persisted_user_gets_opaque_id_and_no_refresh_token(session):
    user = UserFactory()
    assert isinstance(user.id, str) and len(user.id) == 32
    assert user.refresh_token is None
    assert user.cover_image_url == ""
    assert user.created_at is not None


def test_username_with_at_sign_rejected():
    with pytest.raises(ValueError, match="cannot contain"):
        _user(username="bob@x.com")


@pytest.mark.parametrize(
    ("field", "value"),
    [
        ("username", "a" * 51),
        ("email", "a" * 250 + "@x.com"),
        ("full_name", "A" * 101),
        ("avatar_url", "https://m/" + "a" * 510),
    ],
)
def test_overlong_values_rejected(field, value):
    with pytest.raises(ValueError, match="at most"):
        _user(**{field: value})
