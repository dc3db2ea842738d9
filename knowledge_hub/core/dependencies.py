from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from knowledge_hub.core.db import get_db
from knowledge_hub.db.repositories import DocumentRepository, UserRepository
from knowledge_hub.domains.ai.gateway import GeminiGateway


def get_document_repository(db: AsyncSession = Depends(get_db)) -> DocumentRepository:
    return DocumentRepository(db)


def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_ai_gateway(request: Request) -> GeminiGateway:
    """Шлюз создаётся один раз при старте приложения"""
    return request.app.state.ai_gateway
