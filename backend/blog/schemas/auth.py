"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

PASSWORD_PATTERN = r"^(?=.*[A-Za-z])(?=.*\d)[A-Za-z\d@$!%*#?&]+$"


class SignupSchema(Schema):
    """Input payload for account registration."""

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(
        required=True,
        validate=[
            validate.Length(min=8, max=128),
            validate.Regexp(
                PASSWORD_PATTERN,
                error="Password must mix letters and digits (allowed symbols: @$!%*#?&).",
            ),
        ],
    )
    nickname = fields.String(required=True, validate=validate.Length(min=1, max=50))


class LoginSchema(Schema):
    """Input payload for authenticating a user."""

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))


class RefreshSchema(Schema):
    refresh_token = fields.String(
        required=True, data_key="refreshToken", validate=validate.Length(min=1)
    )


class LogoutSchema(Schema):
    all_sessions = fields.Boolean(load_default=False, data_key="allSessions")


class SignupResponseSchema(Schema):
    user_id = fields.Integer(required=True, data_key="userId")


class TokenPairSchema(Schema):
    """Response payload with both tokens and the access token lifetime."""

    access_token = fields.String(required=True, data_key="accessToken")
    refresh_token = fields.String(required=True, data_key="refreshToken")
    expires_in = fields.Integer(required=True, data_key="expiresIn")
