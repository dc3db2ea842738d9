import enum
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from knowledge_hub.core.security import get_password_hash, verify_password


class UserRole(str, enum.Enum):
    MEMBER = "member"
    ADMIN = "admin"


@dataclass(frozen=True)
class UserRef:
    """Ссылка на пользователя внутри документа (автор, редактор)"""
    id: uuid.UUID
    name: str = ""
    email: str = ""


class User:
    """Сущность пользователя домена Identity"""

    def __init__(
        self,
        id: uuid.UUID,
        name: str,
        email: str,
        password_hash: str,
        role: UserRole = UserRole.MEMBER,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.id = id
        self.name = name
        self.email = email
        self.password_hash = password_hash
        self.role = UserRole(role)
        self.created_at = created_at or datetime.now(timezone.utc)
        self.updated_at = updated_at or datetime.now(timezone.utc)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def authenticate(self, password: str) -> bool:
        """Проверка пароля пользователя"""
        return verify_password(password, self.password_hash)

    def can_modify(self, document) -> bool:
        """Владелец документа или администратор"""
        return self.is_admin or document.created_by.id == self.id

    def change_role(self, role: UserRole) -> None:
        self.role = UserRole(role)
        self.updated_at = datetime.now(timezone.utc)

    def to_ref(self) -> UserRef:
        return UserRef(id=self.id, name=self.name, email=self.email)

    @classmethod
    def create_user(cls, name: str, email: str, password: str, role: UserRole = UserRole.MEMBER) -> "User":
        """Создание нового пользователя с хешированием пароля"""
        return cls(
            id=uuid.uuid4(),
            name=name,
            email=email,
            password_hash=get_password_hash(password),
            role=role
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, User):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email}, role={self.role.value})"
