"""Session endpoints: register, login and logout."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint

from authflow.api.cookies import clear_session_cookies, set_session_cookies
from authflow.api.deps import (
    current_user_id,
    get_media_uploader,
    get_token_issuer,
    media_from_request,
    request_payload,
    require_auth,
    service_context,
    timing,
)
from authflow.api.envelope import Ok
from authflow.schemas import (
    LoginResponseSchema,
    LoginSchema,
    RegisterSchema,
    UserPublicSchema,
)
from authflow.services.auth.dto import LoginIn, LogoutIn
from authflow.services.auth.service import AuthService
from authflow.services.registration.dto import UserRegistrationIn
from authflow.services.registration.service import UserRegistrationService

bp = Blueprint("users", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
user_schema = UserPublicSchema()
login_response_schema = LoginResponseSchema()


@bp.post("/register")
@timing
def register():
    """Register a new user from form fields plus avatar / cover uploads."""

    data = register_schema.load(request_payload())
    dto = UserRegistrationIn(
        full_name=data["full_name"],
        email=data["email"],
        username=data["username"],
        password=data["password"],
        avatar=media_from_request("avatar"),
        cover_image=media_from_request("coverImage") or media_from_request("cover_image"),
    )
    service = UserRegistrationService(uploader=get_media_uploader(), ctx=service_context())
    user = service.register(dto)
    return Ok(
        status=HTTPStatus.CREATED,
        data=user_schema.dump(user),
        message="User registered successfully",
    ).to_response()


@bp.post("/login")
@timing
def login():
    """Authenticate credentials, issue a token pair and set session cookies."""

    data = login_schema.load(request_payload())
    ctx = service_context()
    service = AuthService(issuer=get_token_issuer(ctx), ctx=ctx)
    result = service.login(LoginIn(**data))
    response = Ok(
        status=HTTPStatus.OK,
        data=login_response_schema.dump(result),
        message="User logged in successfully",
    ).to_response()
    set_session_cookies(response, result.access_token, result.refresh_token)
    return response


@bp.post("/logout")
@require_auth
@timing
def logout():
    """Drop the stored refresh token and clear the session cookies."""

    user_id = current_user_id()
    ctx = service_context(actor_id=user_id)
    service = AuthService(issuer=get_token_issuer(ctx), ctx=ctx)
    service.logout(LogoutIn(user_id=user_id))
    response = Ok(status=HTTPStatus.OK, data={}, message="User logged out").to_response()
    clear_session_cookies(response)
    return response
