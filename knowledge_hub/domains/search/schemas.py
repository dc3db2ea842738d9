from typing import List, Optional

from knowledge_hub.domains.documents.schemas import DocumentResponse
from knowledge_hub.domains.identity.schemas import CamelModel


class SearchResponse(CamelModel):
    """Схема для ответа с результатами поиска"""
    documents: List[DocumentResponse]
    total_pages: int
    current_page: int
    total: int
    query: Optional[str] = None
    tags: Optional[List[str]] = None
    search_type: Optional[str] = None

    @classmethod
    def from_page(cls, page) -> "SearchResponse":
        return cls(
            documents=[DocumentResponse.model_validate(doc) for doc in page.documents],
            total_pages=page.total_pages,
            current_page=page.current_page,
            total=page.total,
            query=page.query,
            tags=page.tags or None,
            search_type=page.search_type
        )


class TagListResponse(CamelModel):
    tags: List[str]
