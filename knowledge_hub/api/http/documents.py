from fastapi import APIRouter, Depends, Query, status
from typing import Optional
import uuid

from knowledge_hub.core.auth import get_current_user, get_editable_document
from knowledge_hub.core.dependencies import get_ai_gateway, get_document_repository
from knowledge_hub.db.repositories import DocumentRepository
from knowledge_hub.domains.ai.gateway import GeminiGateway
from knowledge_hub.domains.documents.entities import Document
from knowledge_hub.domains.documents.schemas import (
    DocumentCreate, DocumentUpdate, DocumentResponse, DocumentDetailResponse,
    DocumentListResponse, DocumentVersionResponse, DocumentVersionsResponse,
    SummaryResponse, TagsResponse, MessageResponse
)
from knowledge_hub.domains.documents.services import DocumentService, total_pages
from knowledge_hub.domains.identity.entities import User

router = APIRouter(prefix="/documents", tags=["documents"])


def get_document_service(
    document_repository: DocumentRepository = Depends(get_document_repository),
    ai_gateway: GeminiGateway = Depends(get_ai_gateway)
) -> DocumentService:
    return DocumentService(document_repository, ai_gateway)


@router.get("", response_model=DocumentListResponse)
async def list_documents(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    tag: Optional[str] = None,
    search: Optional[str] = None,
    sort_by: str = Query("createdAt", alias="sortBy"),
    sort_order: str = Query("desc", alias="sortOrder"),
    current_user: User = Depends(get_current_user),
    document_service: DocumentService = Depends(get_document_service)
):
    """Получение списка документов"""
    documents, total = await document_service.list_documents(
        page=page,
        limit=limit,
        tag=tag,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order
    )

    return DocumentListResponse(
        documents=[DocumentResponse.model_validate(doc) for doc in documents],
        total_pages=total_pages(total, limit),
        current_page=page,
        total=total
    )


@router.get("/activity/feed", response_model=list[DocumentResponse])
async def get_activity_feed(
    current_user: User = Depends(get_current_user),
    document_service: DocumentService = Depends(get_document_service)
):
    """Лента последних изменений команды"""
    documents = await document_service.activity_feed()
    return [DocumentResponse.model_validate(doc) for doc in documents]


@router.post("", response_model=DocumentDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_document(
    document_data: DocumentCreate,
    current_user: User = Depends(get_current_user),
    document_service: DocumentService = Depends(get_document_service)
):
    """Создание нового документа"""
    document = await document_service.create_document(
        document_data.title,
        document_data.content,
        current_user
    )
    return DocumentDetailResponse.model_validate(document)


@router.get("/{document_id}", response_model=DocumentDetailResponse)
async def get_document(
    document_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    document_service: DocumentService = Depends(get_document_service)
):
    """Получение документа по id"""
    document = await document_service.get_document(document_id)
    return DocumentDetailResponse.model_validate(document)


@router.put("/{document_id}", response_model=DocumentDetailResponse)
async def update_document(
    update_data: DocumentUpdate,
    document: Document = Depends(get_editable_document),
    current_user: User = Depends(get_current_user),
    document_service: DocumentService = Depends(get_document_service)
):
    """Обновление документа"""
    updated = await document_service.update_document(
        document.id,
        update_data.title,
        update_data.content,
        current_user
    )
    return DocumentDetailResponse.model_validate(updated)


@router.delete("/{document_id}", response_model=MessageResponse)
async def delete_document(
    document: Document = Depends(get_editable_document),
    document_service: DocumentService = Depends(get_document_service)
):
    """Удаление документа"""
    await document_service.delete_document(document.id)
    return MessageResponse(message="Document deleted successfully")


# Версии документов
@router.get("/{document_id}/versions", response_model=DocumentVersionsResponse)
async def get_document_versions(
    document_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    document_service: DocumentService = Depends(get_document_service)
):
    """Получение версий документа, от старых к новым"""
    versions = await document_service.list_versions(document_id)
    return DocumentVersionsResponse(
        versions=[DocumentVersionResponse.model_validate(v) for v in versions]
    )


@router.post("/{document_id}/regenerate-summary", response_model=SummaryResponse)
async def regenerate_summary(
    document: Document = Depends(get_editable_document),
    document_service: DocumentService = Depends(get_document_service)
):
    """Повторная генерация summary"""
    summary = await document_service.regenerate_summary(document.id)
    return SummaryResponse(summary=summary)


@router.post("/{document_id}/regenerate-tags", response_model=TagsResponse)
async def regenerate_tags(
    document: Document = Depends(get_editable_document),
    document_service: DocumentService = Depends(get_document_service)
):
    """Повторная генерация тегов"""
    tags = await document_service.regenerate_tags(document.id)
    return TagsResponse(tags=tags)
