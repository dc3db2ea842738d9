from knowledge_hub.api.http.health import router as health_router
from knowledge_hub.api.http.auth import router as auth_router
from knowledge_hub.api.http.users import router as users_router
from knowledge_hub.api.http.documents import router as documents_router
from knowledge_hub.api.http.search import router as search_router
from knowledge_hub.api.http.ai import router as ai_router

__all__ = [
    "health_router",
    "auth_router",
    "users_router",
    "documents_router",
    "search_router",
    "ai_router",
]
