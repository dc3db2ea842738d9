from fastapi import APIRouter, Depends, Query
from typing import Optional

from knowledge_hub.core.auth import get_current_user
from knowledge_hub.core.config import settings
from knowledge_hub.core.dependencies import get_ai_gateway, get_document_repository
from knowledge_hub.db.repositories import DocumentRepository
from knowledge_hub.domains.ai.gateway import GeminiGateway
from knowledge_hub.domains.identity.entities import User
from knowledge_hub.domains.search.schemas import SearchResponse, TagListResponse
from knowledge_hub.domains.search.services import SearchService

router = APIRouter(prefix="/search", tags=["search"])


def get_search_service(
    document_repository: DocumentRepository = Depends(get_document_repository),
    ai_gateway: GeminiGateway = Depends(get_ai_gateway)
) -> SearchService:
    return SearchService(document_repository, ai_gateway, corpus_limit=settings.semantic_corpus_limit)


@router.get("/text", response_model=SearchResponse)
async def text_search(
    q: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    search_service: SearchService = Depends(get_search_service)
):
    """Полнотекстовый поиск"""
    return SearchResponse.from_page(await search_service.text_search(q, page, limit))


@router.get("/semantic", response_model=SearchResponse)
async def semantic_search(
    q: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    search_service: SearchService = Depends(get_search_service)
):
    """Семантический поиск через Gemini"""
    return SearchResponse.from_page(await search_service.semantic_search(q, page, limit))


@router.get("/tags/all", response_model=TagListResponse)
async def all_tags(
    current_user: User = Depends(get_current_user),
    search_service: SearchService = Depends(get_search_service)
):
    """Все теги базы знаний"""
    return TagListResponse(tags=await search_service.all_tags())


@router.get("/tags", response_model=SearchResponse)
async def tag_search(
    tags: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    search_service: SearchService = Depends(get_search_service)
):
    """Поиск по тегам (через запятую)"""
    return SearchResponse.from_page(await search_service.tag_search(tags, page, limit))


@router.get("/combined", response_model=SearchResponse)
async def combined_search(
    q: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    search_service: SearchService = Depends(get_search_service)
):
    """Текстовый и семантический поиск вместе"""
    return SearchResponse.from_page(await search_service.combined_search(q, page, limit))
