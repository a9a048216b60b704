from .index import router as index_router
from .todos import router as todos_router
from .users import router as users_router

__all__ = ["index_router", "todos_router", "users_router"]
