"""Authentication endpoints: signup, login, refresh and logout."""

from __future__ import annotations

from flask import Blueprint

from blog.api.deps import bearer_token, json_response, load_json, timing, translate_service_errors
from blog.schemas import (
    LoginSchema,
    LogoutSchema,
    RefreshSchema,
    SignupResponseSchema,
    SignupSchema,
    TokenPairSchema,
)
from blog.services.auth import LoginIn, LogoutIn, RefreshIn, SignupIn
from blog.wiring import get_components

bp = Blueprint("auth", __name__)

signup_schema = SignupSchema()
signup_response_schema = SignupResponseSchema()
login_schema = LoginSchema()
refresh_schema = RefreshSchema()
logout_schema = LogoutSchema()
token_schema = TokenPairSchema()


@bp.post("/signup")
@timing
@translate_service_errors
def signup():
    """Register an account. No token is issued."""

    data = load_json(signup_schema)
    out = get_components().auth.signup(SignupIn(**data))
    return json_response(signup_response_schema.dump(out), status=201)


@bp.post("/login")
@timing
@translate_service_errors
def login():
    """Authenticate credentials and issue an access/refresh pair."""

    data = load_json(login_schema)
    pair = get_components().auth.login(LoginIn(**data))
    return json_response(token_schema.dump(pair))


@bp.post("/refresh")
@timing
@translate_service_errors
def refresh():
    """Rotate a refresh token into a new pair."""

    data = load_json(refresh_schema)
    pair = get_components().auth.refresh(RefreshIn(**data))
    return json_response(token_schema.dump(pair))


@bp.post("/logout")
@timing
@translate_service_errors
def logout():
    """Blacklist the presented access token, optionally ending all sessions."""

    data = load_json(logout_schema)
    get_components().auth.logout(
        LogoutIn(token=bearer_token(), all_sessions=data["all_sessions"])
    )
    return json_response({"loggedOut": True})
