from fastapi import APIRouter, Depends

from knowledge_hub.core.auth import get_current_user
from knowledge_hub.core.config import settings
from knowledge_hub.core.dependencies import get_ai_gateway, get_document_repository
from knowledge_hub.db.repositories import DocumentRepository
from knowledge_hub.domains.ai.gateway import GeminiGateway
from knowledge_hub.domains.ai.schemas import (
    QuestionRequest, AnswerResponse, InsightsResponse, RecommendationsResponse
)
from knowledge_hub.domains.ai.services import AssistantService
from knowledge_hub.domains.documents.schemas import DocumentResponse
from knowledge_hub.domains.identity.entities import User

router = APIRouter(prefix="/ai", tags=["ai"])


def get_assistant_service(
    document_repository: DocumentRepository = Depends(get_document_repository),
    ai_gateway: GeminiGateway = Depends(get_ai_gateway)
) -> AssistantService:
    return AssistantService(document_repository, ai_gateway, corpus_limit=settings.semantic_corpus_limit)


@router.post("/qa", response_model=AnswerResponse)
async def ask_question(
    request: QuestionRequest,
    current_user: User = Depends(get_current_user),
    assistant: AssistantService = Depends(get_assistant_service)
):
    """Вопрос к документам команды"""
    answer = await assistant.ask(request.question)
    return AnswerResponse.model_validate(answer)


@router.get("/insights", response_model=InsightsResponse)
async def get_insights(
    current_user: User = Depends(get_current_user),
    assistant: AssistantService = Depends(get_assistant_service)
):
    """Ключевые наблюдения по базе знаний"""
    return InsightsResponse.model_validate(await assistant.insights())


@router.get("/recommendations", response_model=RecommendationsResponse)
async def get_recommendations(
    current_user: User = Depends(get_current_user),
    assistant: AssistantService = Depends(get_assistant_service)
):
    """Рекомендации на основе последних документов пользователя"""
    result = await assistant.recommendations(current_user)
    return RecommendationsResponse(
        recommendations=[DocumentResponse.model_validate(doc) for doc in result.recommendations],
        type=result.type,
        based_on=result.based_on
    )
