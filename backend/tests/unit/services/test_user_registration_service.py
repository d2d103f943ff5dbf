# tests/unit/services/test_user_registration_service.py
from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from authflow.models import User
from authflow.repositories.user import UserRepository
from authflow.services._shared.errors import (
    ConflictError,
    InternalError,
    ValidationError,
)
from authflow.services._shared.ports.media_uploader import InMemoryMediaUploader
from authflow.services.identity.dto import UserPublicOut
from authflow.services.registration.dto import UserRegistrationIn
from authflow.services.registration.service import UserRegistrationService
from tests.factories.user import UserFactory


# ------------------------------ Fixtures ---------------------------------- #
@pytest.fixture()
def media_store() -> InMemoryMediaUploader:
    return InMemoryMediaUploader(base_url="https://media.test")


@pytest.fixture()
def service(media_store) -> UserRegistrationService:
    return UserRegistrationService(uploader=media_store)


@pytest.fixture()
def ada(make_media):
    def _build(**overrides) -> UserRegistrationIn:
        fields = {
            "full_name": "Ada Lovelace",
            "email": "Ada@X.com",
            "username": "Ada",
            "password": "s3cret",
            "avatar": make_media(),
            "cover_image": None,
        }
        fields.update(overrides)
        return UserRegistrationIn(**fields)

    return _build


def _count(session) -> int:
    return session.query(User).count()


# -------------------------------- Happy path ------------------------------ #
def test_register_persists_normalized_user(service, media_store, session, ada):
    out = service.register(ada())

    assert isinstance(out, UserPublicOut)
    assert out.username == "ada"
    assert out.email == "ada@x.com"
    assert out.full_name == "Ada Lovelace"
    assert out.avatar_url.startswith("https://media.test/avatars/")
    assert out.avatar_url.endswith(".png")
    assert out.cover_image_url == ""
    assert len(media_store.objects) == 1

    stored = session.get(User, out.id)
    assert stored.verify_password("s3cret")
    assert stored.password_hash != "s3cret"
    assert stored.refresh_token is None


def test_register_uploads_cover_when_given(service, media_store, session, ada, make_media):
    out = service.register(ada(cover_image=make_media(filename="cover.JPG")))

    assert out.cover_image_url.startswith("https://media.test/covers/")
    assert out.cover_image_url.endswith(".jpg")
    assert len(media_store.objects) == 2


def test_projection_never_exposes_secrets(service, ada):
    out = service.register(ada())
    assert not hasattr(out, "password_hash")
    assert not hasattr(out, "refresh_token")
    assert not hasattr(out, "password")


# -------------------------------- Validation ------------------------------ #
@pytest.mark.parametrize("field", ["full_name", "email", "username", "password"])
@pytest.mark.parametrize("blank", [None, "", "   "])
def test_blank_field_is_rejected_without_side_effects(
    service, media_store, session, ada, field, blank
):
    before = _count(session)

    with pytest.raises(ValidationError, match="All fields are required"):
        service.register(ada(**{field: blank}))

    assert _count(session) == before
    assert media_store.objects == {}


def test_missing_avatar_is_rejected(service, session, ada):
    with pytest.raises(ValidationError, match="Avatar file is required"):
        service.register(ada(avatar=None))
    assert _count(session) == 0


def test_empty_avatar_counts_as_missing(service, ada, make_media):
    with pytest.raises(ValidationError, match="Avatar file is required"):
        service.register(ada(avatar=make_media(content=b"")))


def test_failed_avatar_upload_is_validation_error(service, media_store, session, ada):
    media_store.fail_folders.add("avatars")

    with pytest.raises(ValidationError, match="Avatar file is required"):
        service.register(ada())
    assert _count(session) == 0


def test_failed_cover_upload_stores_empty_url(service, media_store, ada, make_media):
    media_store.fail_folders.add("covers")

    out = service.register(ada(cover_image=make_media(filename="c.png")))

    assert out.cover_image_url == ""


def test_malformed_email_is_rejected_before_upload(service, media_store, session, ada):
    with pytest.raises(ValidationError, match="Email format"):
        service.register(ada(email="not-an-email"))

    assert media_store.objects == {}
    assert _count(session) == 0


@pytest.mark.parametrize(
    ("field", "value"),
    [("username", "a" * 51), ("full_name", "A" * 101), ("email", "a" * 250 + "@x.com")],
)
def test_overlong_field_is_rejected_before_upload(service, media_store, ada, field, value):
    with pytest.raises(ValidationError, match="at most"):
        service.register(ada(**{field: value}))

    assert media_store.objects == {}


def test_username_shaped_like_email_is_rejected(service, media_store, ada):
    with pytest.raises(ValidationError, match="cannot contain"):
        service.register(ada(username="bob@x.com"))

    assert media_store.objects == {}


# -------------------------------- Conflicts ------------------------------- #
@pytest.mark.parametrize(
    "overrides",
    [{"username": "ADA", "email": "other@x.com"}, {"username": "other", "email": "ada@x.com"}],
)
def test_duplicate_identity_conflicts_before_upload(
    service, media_store, session, ada, overrides
):
    UserFactory(username="ada", email="ada@x.com")
    before = _count(session)

    with pytest.raises(ConflictError, match="User already exists"):
        service.register(ada(**overrides))

    assert _count(session) == before
    assert media_store.objects == {}


def test_insert_race_surfaces_as_conflict(service, ada, monkeypatch):
    def _lose_race(self, instance):
        raise IntegrityError("INSERT INTO users", {}, Exception("UNIQUE constraint failed"))

    monkeypatch.setattr(UserRepository, "add", _lose_race)

    with pytest.raises(ConflictError):
        service.register(ada())


def test_missing_row_after_insert_is_internal_error(service, ada, monkeypatch):
    monkeypatch.setattr(UserRepository, "get", lambda self, entity_id: None)

    with pytest.raises(InternalError, match="Something went wrong while registering the user"):
        service.register(ada())
