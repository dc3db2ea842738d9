from knowledge_hub.db.models.user import User
from knowledge_hub.db.models.document import Document, DocumentVersion

__all__ = [
    "User",
    "Document",
    "DocumentVersion",
]
