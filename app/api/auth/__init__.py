from .models import AuthenticatedUser
from .passwords import PasswordHasher
from .tokens import TokenService

__all__ = ["AuthenticatedUser", "PasswordHasher", "TokenService"]
