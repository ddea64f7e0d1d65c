"""Schemas for the authenticated account endpoints."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class UserSchema(Schema):
    """Public representation of the current account."""

    id = fields.Integer(required=True, data_key="userId")
    email = fields.Email(required=True)
    nickname = fields.String(required=True)
    created_at = fields.DateTime(data_key="createdAt")


class WithdrawSchema(Schema):
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))
