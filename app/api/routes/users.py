"""
User routes.
Owns: Registration and login.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from app.api.context import AppContext, get_context
from app.api.errors import StoreException
from shared.logging import hash_user_id
from .models import LoginFailureResponse, LoginRequest, MessageResponse, RegisterRequest

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/users", tags=["users"])

LOGIN_FAILED_MESSAGE = "email or password is incorrect"


@router.post("/register", response_model=MessageResponse, status_code=201)
def register(
    request: Request,
    body: RegisterRequest,
    context: Annotated[AppContext, Depends(get_context)],
) -> MessageResponse:
    """
    Create a user account.

    Flow:
    1. Validate input (422 on failure)
    2. Hash password
    3. Insert user record

    Email uniqueness is not checked.
    """
    correlation_id = getattr(request.state, "correlation_id", None)

    password_hash = context.hasher.hash(body.password)
    user = context.store.users.insert(
        {
            "username": body.username,
            "email": body.email,
            "password_hash": password_hash,
            "joined_on": body.joined_on,
        }
    )

    logger.info(
        "User registered",
        extra={
            "user_id_hash": hash_user_id(user["id"]),
            "correlation_id": correlation_id,
        },
    )
    return MessageResponse(message="success")


@router.post(
    "/login",
    response_class=PlainTextResponse,
    responses={200: {"model": LoginFailureResponse, "description": "Token, or a generic failure"}},
)
def login(
    request: Request,
    body: LoginRequest,
    context: Annotated[AppContext, Depends(get_context)],
):
    """
    Exchange credentials for a session token.

    Every failure (unknown email, wrong password, store error) yields the
    same response so callers cannot tell which check failed.
    """
    correlation_id = getattr(request.state, "correlation_id", None)

    try:
        user = context.store.users.find_one({"email": body.email})
    except StoreException:
        user = None
        reason = "store_error"
    else:
        reason = "unknown_email"

    if user is None:
        context.hasher.verify_absent(body.password)
    elif context.hasher.verify(body.password, user.get("password_hash") or ""):
        token = context.tokens.issue(user["id"], user["username"], user["email"])
        logger.info(
            "User logged in",
            extra={
                "user_id_hash": hash_user_id(user["id"]),
                "correlation_id": correlation_id,
            },
        )
        return PlainTextResponse(token)
    else:
        reason = "password_mismatch"

    logger.warning(
        "Login failed",
        extra={"reason": reason, "correlation_id": correlation_id},
    )
    return JSONResponse(status_code=200, content={"error": LOGIN_FAILED_MESSAGE})
