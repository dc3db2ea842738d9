from pydantic import Field, field_validator
from typing import List, Optional
from datetime import datetime

from knowledge_hub.domains.documents.schemas import DocumentResponse
from knowledge_hub.domains.identity.schemas import CamelModel


class QuestionRequest(CamelModel):
    """Вопрос к базе знаний"""
    question: str = Field(..., max_length=2000)

    @field_validator('question')
    @classmethod
    def validate_question(cls, v):
        if not v.strip():
            raise ValueError('Question is required')
        return v.strip()


class AnswerResponse(CamelModel):
    question: str
    answer: str
    documents_used: int
    timestamp: datetime


class InsightsResponse(CamelModel):
    insights: str
    total_documents: int
    timestamp: datetime


class RecommendationsResponse(CamelModel):
    recommendations: List[DocumentResponse]
    type: str
    based_on: Optional[int] = None
