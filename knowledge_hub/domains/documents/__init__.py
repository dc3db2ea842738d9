from knowledge_hub.domains.documents.entities import Document, DocumentVersion
from knowledge_hub.domains.documents.schemas import (
    DocumentBase, DocumentCreate, DocumentUpdate, DocumentResponse,
    DocumentDetailResponse, DocumentListResponse, DocumentVersionResponse,
    DocumentVersionsResponse, SummaryResponse, TagsResponse, MessageResponse
)

__all__ = [
    "Document", "DocumentVersion",
    "DocumentBase", "DocumentCreate", "DocumentUpdate", "DocumentResponse",
    "DocumentDetailResponse", "DocumentListResponse", "DocumentVersionResponse",
    "DocumentVersionsResponse", "SummaryResponse", "TagsResponse", "MessageResponse",
]
