from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel
from datetime import datetime
import uuid

from knowledge_hub.domains.identity.entities import UserRole


class CamelModel(BaseModel):
    """Базовая схема API: camelCase в JSON, snake_case в Python"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class UserRefResponse(CamelModel):
    """Краткие данные пользователя внутри документа"""
    id: uuid.UUID
    name: str
    email: str


class UserCreate(CamelModel):
    """Схема для регистрации пользователя"""
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('Name cannot be empty')
        return v.strip()


class UserLogin(CamelModel):
    """Схема для входа пользователя"""
    email: EmailStr
    password: str


class UserResponse(CamelModel):
    """Схема для ответа с данными пользователя"""
    id: uuid.UUID
    name: str
    email: str
    role: UserRole
    created_at: datetime
    updated_at: datetime


class RoleUpdate(CamelModel):
    """Схема для смены роли пользователя"""
    role: UserRole


class Token(CamelModel):
    """Схема для JWT токена"""
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
