"""
Input validator tests: request schemas and violation formatting.

Run with:
    pytest tests/test_validation.py -v
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from app.api.errors import format_validation_errors
from app.api.routes.models import (
    CreateTodoRequest,
    LoginRequest,
    RegisterRequest,
    UpdateTodoRequest,
)


def _fields(exc: ValidationError) -> set[str]:
    return {v["field"] for v in format_validation_errors(exc.errors())}


# =============================================================================
# Registration
# =============================================================================


def test_registration_defaults_joined_on_to_now():
    before = datetime.now(timezone.utc)
    body = RegisterRequest(username="al", email="al@x.com", password="longpass1")

    assert body.joined_on >= before
    assert body.joined_on.tzinfo is not None


def test_registration_reports_every_violation():
    with pytest.raises(ValidationError) as exc_info:
        RegisterRequest(username="", email="not-an-email", password="short")

    assert _fields(exc_info.value) == {"username", "email", "password"}


def test_registration_requires_all_fields():
    with pytest.raises(ValidationError) as exc_info:
        RegisterRequest()

    assert _fields(exc_info.value) == {"username", "email", "password"}


def test_registration_rejects_blank_username():
    with pytest.raises(ValidationError) as exc_info:
        RegisterRequest(username="   ", email="al@x.com", password="longpass1")

    assert _fields(exc_info.value) == {"username"}


def test_password_minimum_length_is_eight():
    RegisterRequest(username="al", email="al@x.com", password="12345678")
    with pytest.raises(ValidationError):
        RegisterRequest(username="al", email="al@x.com", password="1234567")


def test_password_longer_than_bcrypt_limit_is_rejected():
    with pytest.raises(ValidationError) as exc_info:
        RegisterRequest(username="al", email="al@x.com", password="é" * 40)

    assert _fields(exc_info.value) == {"password"}


# =============================================================================
# Login
# =============================================================================


def test_login_requires_valid_email_and_password():
    with pytest.raises(ValidationError) as exc_info:
        LoginRequest(email="al-at-x.com", password="short")

    assert _fields(exc_info.value) == {"email", "password"}


# =============================================================================
# Todos
# =============================================================================


def test_create_todo_defaults():
    body = CreateTodoRequest(item="buy milk")

    assert body.completed is False
    assert body.model_dump() == {"item": "buy milk", "completed": False}


def test_create_todo_ignores_client_user_id():
    body = CreateTodoRequest.model_validate({"item": "buy milk", "user_id": "someone-else"})

    assert "user_id" not in body.model_dump()


@pytest.mark.parametrize("item", ["", "   "])
def test_create_todo_rejects_empty_item(item: str):
    with pytest.raises(ValidationError):
        CreateTodoRequest(item=item)


def test_create_todo_requires_item():
    with pytest.raises(ValidationError) as exc_info:
        CreateTodoRequest.model_validate({"completed": True})

    assert _fields(exc_info.value) == {"item"}


def test_completed_must_be_boolean():
    with pytest.raises(ValidationError):
        CreateTodoRequest.model_validate({"item": "buy milk", "completed": "yes"})
    with pytest.raises(ValidationError):
        UpdateTodoRequest.model_validate({"completed": 1})


def test_update_patch_contains_only_supplied_fields():
    assert UpdateTodoRequest(completed=True).patch() == {"completed": True}
    assert UpdateTodoRequest(item="oat milk").patch() == {"item": "oat milk"}
    assert UpdateTodoRequest(item="oat milk", completed=False).patch() == {
        "item": "oat milk",
        "completed": False,
    }


def test_update_patch_is_empty_without_fields():
    assert UpdateTodoRequest().patch() == {}
    assert UpdateTodoRequest.model_validate({"item": None, "completed": None}).patch() == {}


# =============================================================================
# Violation formatting
# =============================================================================


def test_format_strips_request_location_prefix():
    errors = [
        {"loc": ("body", "email"), "msg": "value is not a valid email address"},
        {"loc": ("body",), "msg": "Field required"},
        {"loc": ("path", "todo_id"), "msg": "bad"},
    ]

    assert format_validation_errors(errors) == [
        {"field": "email", "reason": "value is not a valid email address"},
        {"field": "body", "reason": "Field required"},
        {"field": "todo_id", "reason": "bad"},
    ]
