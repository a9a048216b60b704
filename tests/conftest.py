# Test configuration: build the FastAPI app against the in-process
# record store and provide an HTTP helper client.

from typing import Any, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from httpx import Response

from app.api.config import Settings
from app.api.context import AppContext
from app.api.main import create_app

TEST_SECRET = "test-secret-key-0123456789abcdef"
DEFAULT_PASSWORD = "longpass1"


@pytest.fixture
def settings() -> Settings:
    """Settings with STORE_BACKEND=local and a cheap bcrypt cost."""
    return Settings(
        _env_file=None,
        db_uri="memory://",
        store_backend="local",
        secret_key=TEST_SECRET,
        bcrypt_rounds=4,
        service_env="dev",
    )


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    """TestClient with the lifespan running (context built, store pinged)."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def context(app: FastAPI, client: TestClient) -> AppContext:
    return app.state.context


class ApiClient:
    def __init__(self, client: TestClient):
        self.client = client

    def register(self, username: str, email: str, password: str = DEFAULT_PASSWORD) -> Response:
        return self.client.post(
            "/users/register",
            json={"username": username, "email": email, "password": password},
        )

    def login(self, email: str, password: str = DEFAULT_PASSWORD) -> Response:
        return self.client.post("/users/login", json={"email": email, "password": password})

    def signup(self, username: str, email: str, password: str = DEFAULT_PASSWORD) -> str:
        """Register then log in; returns the session token."""
        assert self.register(username, email, password).status_code == 201
        r = self.login(email, password)
        assert r.status_code == 200
        assert r.headers["content-type"].startswith("text/plain")
        return r.text

    @staticmethod
    def auth_headers(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}

    def create_todo(self, token: str, payload: dict[str, Any]) -> Response:
        return self.client.post("/todos", headers=self.auth_headers(token), json=payload)

    def list_todos(self, token: str) -> Response:
        return self.client.get("/todos", headers=self.auth_headers(token))

    def get_todo(self, token: str, todo_id: str) -> Response:
        return self.client.get(f"/todos/{todo_id}", headers=self.auth_headers(token))

    def update_todo(self, token: str, todo_id: str, payload: dict[str, Any] | None) -> Response:
        return self.client.put(f"/todos/{todo_id}", headers=self.auth_headers(token), json=payload)

    def delete_todo(self, token: str, todo_id: str) -> Response:
        return self.client.delete(f"/todos/{todo_id}", headers=self.auth_headers(token))


@pytest.fixture
def api(client: TestClient) -> ApiClient:
    return ApiClient(client)


@pytest.fixture
def alice_token(api: ApiClient) -> str:
    return api.signup("al", "al@x.com")


@pytest.fixture
def bob_token(api: ApiClient) -> str:
    return api.signup("bob", "bob@x.com")
