from knowledge_hub.domains.identity.entities import User, UserRef, UserRole
from knowledge_hub.domains.identity.schemas import (
    UserCreate, UserLogin, UserResponse, UserRefResponse, RoleUpdate, Token
)

__all__ = [
    "User", "UserRef", "UserRole",
    "UserCreate", "UserLogin", "UserResponse", "UserRefResponse", "RoleUpdate", "Token",
]
