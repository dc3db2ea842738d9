from typing import Optional, Tuple
import uuid

from knowledge_hub.core.errors import AuthenticationError, NotFoundError, ValidationError
from knowledge_hub.core.security import create_access_token, verify_token
from knowledge_hub.db.repositories.user_repository import UserRepository
from knowledge_hub.domains.identity.entities import User, UserRole


class IdentityService:
    """Сервис для работы с идентификацией и аутентификацией пользователей"""

    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    async def register_user(self, name: str, email: str, password: str) -> Tuple[User, str]:
        """Регистрация нового пользователя, сразу с токеном"""
        if await self.user_repository.email_exists(email):
            raise ValidationError("User already exists")

        user = await self.user_repository.create(
            User.create_user(name=name, email=email, password=password)
        )
        return user, self.issue_token(user)

    async def login_user(self, email: str, password: str) -> Tuple[User, str]:
        """Вход пользователя и создание JWT токена"""
        user = await self.user_repository.get_by_email(email)

        if not user or not user.authenticate(password):
            raise AuthenticationError("Invalid credentials")

        return user, self.issue_token(user)

    @staticmethod
    def issue_token(user: User) -> str:
        return create_access_token(data={"sub": str(user.id), "role": user.role.value})

    async def get_current_user_from_token(self, token: str) -> Optional[User]:
        """Получение текущего пользователя из JWT токена"""
        payload = verify_token(token)
        if not payload or not payload.get("sub"):
            return None

        try:
            user_id = uuid.UUID(payload["sub"])
        except (TypeError, ValueError):
            return None

        return await self.user_repository.get_by_id(user_id)

    async def get_user(self, user_id: uuid.UUID) -> User:
        user = await self.user_repository.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    async def list_users(self, limit: int = 100, offset: int = 0) -> list[User]:
        """Получение списка пользователей"""
        return await self.user_repository.get_all(limit, offset)

    async def change_role(self, user_id: uuid.UUID, role: UserRole) -> User:
        """Назначение роли (только для администраторов)"""
        user = await self.get_user(user_id)
        user.change_role(role)
        return await self.user_repository.update(user)

    async def ensure_admin(self, name: str, email: str, password: str) -> User:
        """Создаёт администратора или повышает существующего пользователя"""
        user = await self.user_repository.get_by_email(email)
        if user is None:
            return await self.user_repository.create(
                User.create_user(name=name, email=email, password=password, role=UserRole.ADMIN)
            )
        if not user.is_admin:
            user.change_role(UserRole.ADMIN)
            user = await self.user_repository.update(user)
        return user
