"""Tests for the Flask-JWT-Extended token codec."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt as pyjwt
import pytest
from freezegun import freeze_time

from blog.infra.jwt import FlaskJWTTokenCodec
from blog.services._shared.ports import (
    TokenExpiredError,
    TokenMalformedError,
    TokenSignatureError,
)

SUBJECT = "reader@example.com"


@pytest.fixture()
def codec() -> FlaskJWTTokenCodec:
    return FlaskJWTTokenCodec()


def test_verify_returns_subject_of_issued_token(codec):
    token = codec.issue(SUBJECT, timedelta(minutes=5))
    assert codec.verify(token) == SUBJECT


def test_claims_expose_type_jti_and_expiry(codec):
    before = datetime.now(UTC)
    token = codec.issue(SUBJECT, timedelta(minutes=5), token_type="refresh")

    claims = codec.claims(token, expected_type="refresh")

    assert claims.subject == SUBJECT
    assert claims.token_type == "refresh"
    assert claims.jti
    assert before + timedelta(minutes=4) < claims.expires_at <= before + timedelta(minutes=6)


def test_two_tokens_for_same_subject_differ(codec):
    first = codec.issue(SUBJECT, timedelta(minutes=5))
    second = codec.issue(SUBJECT, timedelta(minutes=5))
    assert first != second
    assert codec.claims(first).jti != codec.claims(second).jti


def test_negative_ttl_is_expired(codec):
    token = codec.issue(SUBJECT, timedelta(seconds=-1))
    with pytest.raises(TokenExpiredError) as info:
        codec.verify(token)
    assert info.value.reason == "expired"


def test_token_expires_once_its_lifetime_passes(codec):
    with freeze_time("2026-03-01 12:00:00") as frozen:
        token = codec.issue(SUBJECT, timedelta(seconds=60))
        assert codec.verify(token) == SUBJECT

        frozen.tick(timedelta(seconds=61))
        with pytest.raises(TokenExpiredError):
            codec.verify(token)


def test_token_signed_with_other_key_has_bad_signature(codec):
    now = datetime.now(UTC)
    forged = pyjwt.encode(
        {
            "sub": SUBJECT,
            "jti": "forged",
            "type": "access",
            "iat": now,
            "nbf": now,
            "exp": now + timedelta(minutes=5),
            "fresh": False,
        },
        "another-secret-with-plenty-of-entropy-0123456789",
        algorithm="HS256",
    )
    with pytest.raises(TokenSignatureError) as info:
        codec.verify(forged)
    assert info.value.reason == "bad_signature"


def test_swapped_payload_has_bad_signature(codec):
    mine = codec.issue(SUBJECT, timedelta(minutes=5))
    theirs = codec.issue("victim@example.com", timedelta(minutes=5))
    header, _, signature = mine.split(".")
    tampered = ".".join([header, theirs.split(".")[1], signature])

    with pytest.raises(TokenSignatureError):
        codec.verify(tampered)


@pytest.mark.parametrize("garbage", ["", "not-a-token", "a.b.c"])
def test_garbage_is_malformed(codec, garbage):
    with pytest.raises(TokenMalformedError) as info:
        codec.verify(garbage)
    assert info.value.reason == "malformed"


def test_wrong_token_type_is_malformed(codec):
    access = codec.issue(SUBJECT, timedelta(minutes=5))
    with pytest.raises(TokenMalformedError):
        codec.verify(access, expected_type="refresh")
