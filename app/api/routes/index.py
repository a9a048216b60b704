"""
Index routes.
Owns: Root greeting and liveness probe.
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from .models import HealthResponse

router = APIRouter(tags=["index"])


@router.get("/", response_class=PlainTextResponse)
def index() -> str:
    return "hello world"


@router.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="ok")
