"""
Todo routes.
Owns: Per-user todo CRUD.

Every read, update and delete filters on both the todo id and the
caller's user_id; a todo owned by someone else is indistinguishable
from one that does not exist.
"""

import logging
from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Request, Response
from fastapi.responses import JSONResponse

from app.api.auth import AuthenticatedUser
from app.api.auth.dependencies import get_current_user
from app.api.context import AppContext, get_context
from app.api.errors import NotFoundException
from shared.logging import hash_user_id
from .models import (
    CreateTodoRequest,
    MessageResponse,
    TodoEnvelope,
    TodoListResponse,
    TodoResponse,
    UpdateTodoRequest,
    utcnow,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/todos", tags=["todos"])

EMPTY_UPDATE_MESSAGE = "nothing to update: provide item and/or completed"

CurrentUser = Annotated[AuthenticatedUser, Depends(get_current_user)]
Context = Annotated[AppContext, Depends(get_context)]


def owned_filter(todo_id: str, user: AuthenticatedUser) -> dict[str, Any]:
    """
    Build the id+owner filter for a todo.

    Ids that are not UUIDs cannot name a stored todo and are reported as 404.
    """
    try:
        normalized = str(UUID(todo_id))
    except ValueError:
        raise NotFoundException(f"Todo {todo_id} not found")
    return {"id": normalized, "user_id": user.id}


@router.get("", response_model=TodoListResponse)
def list_todos(user: CurrentUser, context: Context) -> TodoListResponse:
    rows = context.store.todos.find_many({"user_id": user.id})
    return TodoListResponse(data=[TodoResponse.model_validate(row) for row in rows])


@router.post("", response_model=TodoResponse, status_code=201)
def create_todo(
    request: Request,
    body: CreateTodoRequest,
    user: CurrentUser,
    context: Context,
) -> TodoResponse:
    correlation_id = getattr(request.state, "correlation_id", None)

    todo = context.store.todos.insert(
        {
            "item": body.item,
            "completed": body.completed,
            "created_at": utcnow(),
            "user_id": user.id,
        }
    )

    logger.info(
        "Todo created",
        extra={
            "todo_id": todo["id"],
            "user_id_hash": hash_user_id(user.id),
            "correlation_id": correlation_id,
        },
    )
    return TodoResponse.model_validate(todo)


@router.get("/{todo_id}", response_model=TodoEnvelope)
def get_todo(todo_id: str, user: CurrentUser, context: Context) -> TodoEnvelope:
    todo = context.store.todos.find_one(owned_filter(todo_id, user))
    if todo is None:
        raise NotFoundException(f"Todo {todo_id} not found")
    return TodoEnvelope(data=TodoResponse.model_validate(todo))


@router.put(
    "/{todo_id}",
    status_code=204,
    responses={200: {"model": MessageResponse, "description": "Empty update, nothing changed"}},
)
def update_todo(
    request: Request,
    todo_id: str,
    user: CurrentUser,
    context: Context,
    body: Annotated[UpdateTodoRequest | None, Body()] = None,
) -> Response:
    """
    Apply a partial update.

    An update that names neither ``item`` nor ``completed`` (or has no
    body at all) is answered with a message and never reaches the store.
    """
    patch = body.patch() if body is not None else {}
    if not patch:
        return JSONResponse(status_code=200, content={"message": EMPTY_UPDATE_MESSAGE})

    updated = context.store.todos.update_one(owned_filter(todo_id, user), patch)
    if updated is None:
        raise NotFoundException(f"Todo {todo_id} not found")

    logger.info(
        "Todo updated",
        extra={
            "todo_id": updated["id"],
            "user_id_hash": hash_user_id(user.id),
            "correlation_id": getattr(request.state, "correlation_id", None),
        },
    )
    return Response(status_code=204)


@router.delete("/{todo_id}", response_model=MessageResponse)
def delete_todo(
    request: Request,
    todo_id: str,
    user: CurrentUser,
    context: Context,
) -> MessageResponse:
    deleted = context.store.todos.delete_one(owned_filter(todo_id, user))
    if deleted is None:
        raise NotFoundException(f"Todo {todo_id} not found")

    logger.info(
        "Todo deleted",
        extra={
            "todo_id": deleted["id"],
            "user_id_hash": hash_user_id(user.id),
            "correlation_id": getattr(request.state, "correlation_id", None),
        },
    )
    return MessageResponse(message="success")
