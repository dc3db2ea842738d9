from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

from knowledge_hub.core.errors import NotFoundError, ValidationError
from knowledge_hub.db.repositories.document_repository import DocumentRepository
from knowledge_hub.domains.ai.gateway import GeminiGateway
from knowledge_hub.domains.documents.entities import Document
from knowledge_hub.domains.identity.entities import User
from knowledge_hub.domains.search.services import load_corpus

RECOMMENDATION_LIMIT = 5


@dataclass
class Answer:
    question: str
    answer: str
    documents_used: int
    timestamp: datetime


@dataclass
class Insights:
    insights: str
    total_documents: int
    timestamp: datetime


@dataclass
class Recommendations:
    recommendations: List[Document]
    type: str
    based_on: Optional[int] = None


class AssistantService:
    """Вопросы к базе знаний, обзор корпуса и рекомендации"""

    def __init__(
        self,
        document_repository: DocumentRepository,
        ai_gateway: GeminiGateway,
        corpus_limit: int = 500
    ):
        self.document_repository = document_repository
        self.ai_gateway = ai_gateway
        self.corpus_limit = corpus_limit

    async def ask(self, question: str) -> Answer:
        """Ответ на вопрос по всем документам"""
        if not question or not question.strip():
            raise ValidationError("Question is required")

        documents = await load_corpus(self.document_repository, self.corpus_limit)
        if not documents:
            raise NotFoundError("No documents found. Please create some documents first.")

        answer = await self.ai_gateway.answer_question(question.strip(), documents)
        return Answer(
            question=question.strip(),
            answer=answer,
            documents_used=len(documents),
            timestamp=datetime.now(timezone.utc)
        )

    async def insights(self) -> Insights:
        documents = await load_corpus(self.document_repository, self.corpus_limit)
        if not documents:
            raise NotFoundError("No documents found")

        return Insights(
            insights=await self.ai_gateway.summarize_corpus_insights(documents),
            total_documents=len(documents),
            timestamp=datetime.now(timezone.utc)
        )

    async def recommendations(self, user: User) -> Recommendations:
        """Рекомендации по последним документам пользователя"""
        own_documents = await self.document_repository.list_recent(
            limit=RECOMMENDATION_LIMIT, created_by=user.id
        )

        if not own_documents:
            recent = await self.document_repository.list_recent(limit=RECOMMENDATION_LIMIT)
            return Recommendations(recommendations=recent, type="recent")

        corpus = await load_corpus(self.document_repository, self.corpus_limit)
        reference_text = " ".join(doc.content for doc in own_documents)
        related = await self.ai_gateway.find_related(reference_text, corpus)

        return Recommendations(
            recommendations=related[:RECOMMENDATION_LIMIT],
            type="personalized",
            based_on=len(own_documents)
        )
