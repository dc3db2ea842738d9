from knowledge_hub.domains.ai.schemas import (
    QuestionRequest, AnswerResponse, InsightsResponse, RecommendationsResponse
)

__all__ = [
    "QuestionRequest", "AnswerResponse", "InsightsResponse", "RecommendationsResponse",
]
