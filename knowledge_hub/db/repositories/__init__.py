from knowledge_hub.db.repositories.user_repository import UserRepository
from knowledge_hub.db.repositories.document_repository import DocumentRepository

__all__ = [
    "UserRepository",
    "DocumentRepository",
]
