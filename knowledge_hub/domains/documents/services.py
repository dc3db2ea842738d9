import asyncio
import logging
import math
from typing import List, Optional, Tuple
import uuid

from knowledge_hub.core.errors import NotFoundError, ValidationError
from knowledge_hub.db.repositories.document_repository import DocumentRepository
from knowledge_hub.domains.ai.gateway import GeminiGateway
from knowledge_hub.domains.documents.entities import Document, DocumentVersion
from knowledge_hub.domains.identity.entities import User

logger = logging.getLogger(__name__)

SORT_FIELDS = ("createdAt", "updatedAt", "title")
SORT_ORDERS = ("asc", "desc")


def require_text(value: Optional[str], field_name: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0


class DocumentService:
    """Сервис документов: единственный путь изменения содержимого.

    Каждое изменение содержимого сначала сохраняет прежний текст в историю
    версий, затем заново генерирует summary и теги. Сбой AI не отменяет
    правку: шлюз возвращает fallback-значения.
    """

    def __init__(self, document_repository: DocumentRepository, ai_gateway: GeminiGateway):
        self.document_repository = document_repository
        self.ai_gateway = ai_gateway

    async def create_document(self, title: str, content: str, author: User) -> Document:
        """Создание документа с AI-аннотацией"""
        title = require_text(title, "Title").strip()
        content = require_text(content, "Content")

        summary, tags = await self._augment(content)

        document = Document.create_document(
            title=title,
            content=content,
            author=author.to_ref(),
            summary=summary,
            tags=tags
        )
        created = await self.document_repository.create(document)

        logger.info(f"Document {created.id} created by {author.id}")
        return created

    async def get_document(self, document_id: uuid.UUID) -> Document:
        document = await self.document_repository.get_by_id(document_id)
        if not document:
            raise NotFoundError("Document not found")
        return document

    async def update_document(
        self,
        document_id: uuid.UUID,
        title: str,
        content: str,
        editor: User
    ) -> Document:
        """Обновление документа с сохранением прежней версии"""
        title = require_text(title, "Title").strip()
        content = require_text(content, "Content")

        document = await self.get_document(document_id)

        version = document.add_version(content, editor.to_ref())
        document.update_title(title)

        summary, tags = await self._augment(content)
        document.apply_augmentation(summary=summary, tags=tags)

        updated = await self.document_repository.save_revision(document, version)

        logger.info(
            f"Document {document_id} updated by {editor.id}, "
            f"{len(updated.versions)} versions in history"
        )
        return updated

    async def regenerate_summary(self, document_id: uuid.UUID) -> str:
        document = await self.get_document(document_id)
        document.apply_augmentation(summary=await self.ai_gateway.generate_summary(document.content))
        await self.document_repository.update_augmentation(document)
        return document.summary

    async def regenerate_tags(self, document_id: uuid.UUID) -> List[str]:
        document = await self.get_document(document_id)
        document.apply_augmentation(tags=await self.ai_gateway.generate_tags(document.content))
        await self.document_repository.update_augmentation(document)
        return document.tags

    async def delete_document(self, document_id: uuid.UUID) -> None:
        """Удаление документа вместе с историей"""
        if not await self.document_repository.delete(document_id):
            raise NotFoundError("Document not found")
        logger.info(f"Document {document_id} deleted")

    async def list_versions(self, document_id: uuid.UUID) -> List[DocumentVersion]:
        """История версий от старых к новым"""
        document = await self.get_document(document_id)
        return document.versions

    async def list_documents(
        self,
        page: int = 1,
        limit: int = 10,
        tag: Optional[str] = None,
        search: Optional[str] = None,
        sort_by: str = "createdAt",
        sort_order: str = "desc"
    ) -> Tuple[List[Document], int]:
        """Постраничный список документов"""
        if sort_by not in SORT_FIELDS:
            raise ValidationError(f"sortBy must be one of: {', '.join(SORT_FIELDS)}")
        if sort_order not in SORT_ORDERS:
            raise ValidationError(f"sortOrder must be one of: {', '.join(SORT_ORDERS)}")

        return await self.document_repository.list_documents(
            limit=limit,
            offset=(page - 1) * limit,
            tag=tag.strip() if tag and tag.strip() else None,
            search=search.strip() if search and search.strip() else None,
            sort_by=sort_by,
            descending=sort_order == "desc"
        )

    async def activity_feed(self, limit: int = 5) -> List[Document]:
        """Последние изменения команды"""
        return await self.document_repository.list_recent(limit=limit)

    async def _augment(self, content: str) -> Tuple[str, List[str]]:
        # оба вызова независимы, шлюз сам подставляет fallback
        summary, tags = await asyncio.gather(
            self.ai_gateway.generate_summary(content),
            self.ai_gateway.generate_tags(content),
        )
        return summary, tags
