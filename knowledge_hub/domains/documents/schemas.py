from pydantic import Field, field_validator
from typing import Optional, List
from datetime import datetime
import uuid

from knowledge_hub.domains.identity.schemas import CamelModel, UserRefResponse


def _require_text(value: str, field_name: str) -> str:
    if not value.strip():
        raise ValueError(f'{field_name} cannot be empty')
    return value


class DocumentBase(CamelModel):
    """Базовая схема документа"""
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1, max_length=1000000)

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        return _require_text(v, 'Title').strip()

    @field_validator('content')
    @classmethod
    def validate_content(cls, v):
        # содержимое сохраняется как есть, без обрезки пробелов
        return _require_text(v, 'Content')


class DocumentCreate(DocumentBase):
    """Схема для создания документа"""
    pass


class DocumentUpdate(DocumentBase):
    """Схема для обновления документа (заголовок и содержимое целиком)"""
    pass


class DocumentVersionResponse(CamelModel):
    """Схема версии документа"""
    content: str
    edited_by: UserRefResponse
    edited_at: datetime


class DocumentResponse(CamelModel):
    """Схема для ответа с данными документа"""
    id: uuid.UUID
    title: str
    content: str
    tags: List[str]
    summary: Optional[str] = None
    created_by: UserRefResponse
    last_edited_by: Optional[UserRefResponse] = None
    created_at: datetime
    updated_at: datetime


class DocumentDetailResponse(DocumentResponse):
    """Документ вместе с историей версий"""
    versions: List[DocumentVersionResponse]


class DocumentListResponse(CamelModel):
    """Схема для постраничного списка документов"""
    documents: List[DocumentResponse]
    total_pages: int
    current_page: int
    total: int


class DocumentVersionsResponse(CamelModel):
    """История версий, от старых к новым"""
    versions: List[DocumentVersionResponse]


class SummaryResponse(CamelModel):
    summary: str


class TagsResponse(CamelModel):
    tags: List[str]


class MessageResponse(CamelModel):
    message: str
