"""
Auth dependencies.
Owns: Bearer token extraction, user resolution.
"""

from typing import Annotated

from fastapi import Depends, Header

from app.api.context import AppContext, get_context
from app.api.errors import UnauthorizedException
from .models import AuthenticatedUser


def extract_bearer_token(authorization: str | None) -> str | None:
    """
    Return whatever follows the ``Bearer`` scheme, or None when no bearer
    credential was supplied.

    The remainder is returned unparsed; a malformed one is left for
    token verification to reject (403).
    """
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        return None
    return token


async def get_current_user(
    context: Annotated[AppContext, Depends(get_context)],
    authorization: Annotated[str | None, Header()] = None,
) -> AuthenticatedUser:
    """
    Resolve the caller from the Authorization header.

    Raises:
        UnauthorizedException: No bearer token supplied (401)
        ForbiddenException: Token supplied but invalid or expired (403)
    """
    token = extract_bearer_token(authorization)
    if token is None:
        raise UnauthorizedException("Missing bearer token")

    return context.tokens.verify(token)
