"""
Auth models.
Owns: Token claim structures.
"""

from pydantic import BaseModel


class AuthenticatedUser(BaseModel):
    """Claims carried by a verified session token."""
    id: str
    username: str
    email: str
    iat: int
    exp: int
