"""
Session token tests: issuance, verification and the 401/403 split.

Run with:
    pytest tests/test_tokens.py -v
"""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import jwt
import pytest

from app.api.auth.dependencies import extract_bearer_token, get_current_user
from app.api.auth.tokens import TokenService
from app.api.errors import ForbiddenException, UnauthorizedException

SECRET = "unit-test-secret-0123456789abcdef"


@pytest.fixture
def tokens() -> TokenService:
    return TokenService(SECRET)


# ============================================================================
# TESTS: Issue / Verify
# ============================================================================


def test_verified_claims_match_issued_identity(tokens: TokenService):
    token = tokens.issue("user-1", "al", "al@x.com")

    claims = tokens.verify(token)

    assert claims.id == "user-1"
    assert claims.username == "al"
    assert claims.email == "al@x.com"


def test_token_is_valid_for_24_hours(tokens: TokenService):
    now = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
    token = tokens.issue("user-1", "al", "al@x.com", now=now)

    payload = jwt.decode(token, options={"verify_signature": False})

    assert payload["iat"] == int(now.timestamp())
    assert payload["exp"] - payload["iat"] == 86400


def test_expired_token_is_forbidden(tokens: TokenService):
    two_days_ago = datetime.now(timezone.utc) - timedelta(days=2)
    token = tokens.issue("user-1", "al", "al@x.com", now=two_days_ago)

    with pytest.raises(ForbiddenException) as exc_info:
        tokens.verify(token)

    assert exc_info.value.status_code == 403
    assert exc_info.value.details == {"token_expired": True}


def test_token_signed_with_other_secret_is_forbidden(tokens: TokenService):
    foreign = TokenService("another-secret-0123456789abcdef").issue("user-1", "al", "al@x.com")

    with pytest.raises(ForbiddenException):
        tokens.verify(foreign)


def test_tampered_payload_is_forbidden(tokens: TokenService):
    header, _, signature = tokens.issue("user-1", "al", "al@x.com").split(".")
    _, other_payload, _ = tokens.issue("user-2", "eve", "eve@x.com").split(".")

    with pytest.raises(ForbiddenException):
        tokens.verify(f"{header}.{other_payload}.{signature}")


@pytest.mark.parametrize("garbage", ["", "abc", "a.b.c", "Bearer"])
def test_malformed_token_is_forbidden(tokens: TokenService, garbage: str):
    with pytest.raises(ForbiddenException):
        tokens.verify(garbage)


def test_token_without_id_claim_is_forbidden(tokens: TokenService):
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"username": "al", "email": "al@x.com", "iat": now, "exp": now + timedelta(hours=1)},
        SECRET,
        algorithm="HS256",
    )

    with pytest.raises(ForbiddenException):
        tokens.verify(token)


def test_unsigned_token_is_forbidden(tokens: TokenService):
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"id": "user-1", "username": "al", "email": "al@x.com", "iat": now, "exp": now + timedelta(hours=1)},
        None,
        algorithm="none",
    )

    with pytest.raises(ForbiddenException):
        tokens.verify(token)


def test_empty_secret_is_rejected():
    with pytest.raises(ValueError):
        TokenService("")


# ============================================================================
# TESTS: Authorization header
# ============================================================================


@pytest.mark.parametrize(
    "header,expected",
    [
        (None, None),
        ("", None),
        ("Bearer", None),
        ("Bearer   ", None),
        ("Basic dXNlcjpwYXNz", None),
        ("Bearer a b", "a b"),
        ("  Bearer  abc.def.ghi ", "abc.def.ghi"),
        ("Bearer abc.def.ghi", "abc.def.ghi"),
        ("bearer abc.def.ghi", "abc.def.ghi"),
    ],
)
def test_extract_bearer_token(header, expected):
    assert extract_bearer_token(header) == expected


@pytest.mark.asyncio
async def test_missing_header_is_unauthorized(tokens: TokenService):
    context = SimpleNamespace(tokens=tokens)

    with pytest.raises(UnauthorizedException) as exc_info:
        await get_current_user(context=context, authorization=None)

    assert exc_info.value.status_code == 401


@pytest.mark.asyncio
async def test_invalid_token_is_forbidden_not_unauthorized(tokens: TokenService):
    context = SimpleNamespace(tokens=tokens)

    with pytest.raises(ForbiddenException):
        await get_current_user(context=context, authorization="Bearer not-a-token")


@pytest.mark.asyncio
async def test_valid_header_resolves_user(tokens: TokenService):
    context = SimpleNamespace(tokens=tokens)
    token = tokens.issue("user-1", "al", "al@x.com")

    user = await get_current_user(context=context, authorization=f"Bearer {token}")

    assert user.id == "user-1"
