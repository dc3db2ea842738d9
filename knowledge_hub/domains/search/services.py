import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from knowledge_hub.core.errors import ValidationError
from knowledge_hub.db.repositories.document_repository import DocumentRepository
from knowledge_hub.domains.ai.gateway import GeminiGateway
from knowledge_hub.domains.documents.entities import Document
from knowledge_hub.domains.documents.services import total_pages as page_count

logger = logging.getLogger(__name__)


@dataclass
class SearchPage:
    """Страница результатов поиска"""
    documents: List[Document]
    total: int
    current_page: int
    limit: int
    query: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    search_type: Optional[str] = None

    @property
    def total_pages(self) -> int:
        return page_count(self.total, self.limit)


def paginate(documents: Sequence[Document], page: int, limit: int) -> List[Document]:
    start = (page - 1) * limit
    return list(documents[start:start + limit])


def merge_results(primary: Sequence[Document], secondary: Sequence[Document]) -> List[Document]:
    """Объединение без дублей: сначала primary, затем новые из secondary"""
    seen = {doc.id for doc in primary}
    merged = list(primary)
    for doc in secondary:
        if doc.id not in seen:
            seen.add(doc.id)
            merged.append(doc)
    return merged


async def load_corpus(document_repository: DocumentRepository, corpus_limit: int) -> List[Document]:
    """Корпус для AI-запросов: не больше corpus_limit свежих документов"""
    documents = await document_repository.list_all(limit=corpus_limit + 1)
    if len(documents) > corpus_limit:
        logger.warning(
            f"Corpus exceeds {corpus_limit} documents, "
            "only the most recently updated ones are sent to the AI provider"
        )
        documents = documents[:corpus_limit]
    return documents


def parse_tags(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


class SearchService:
    """Поиск документов: по тексту, по тегам, семантический и комбинированный"""

    def __init__(
        self,
        document_repository: DocumentRepository,
        ai_gateway: GeminiGateway,
        corpus_limit: int = 500
    ):
        self.document_repository = document_repository
        self.ai_gateway = ai_gateway
        self.corpus_limit = corpus_limit

    async def text_search(self, query: Optional[str], page: int = 1, limit: int = 10) -> SearchPage:
        """Полнотекстовый поиск по индексу хранилища"""
        query = self._require_query(query)
        documents, total = await self.document_repository.search_text(
            query, limit=limit, offset=(page - 1) * limit
        )
        return SearchPage(documents=documents, total=total, current_page=page, limit=limit, query=query)

    async def tag_search(self, raw_tags: Optional[str], page: int = 1, limit: int = 10) -> SearchPage:
        """Документы с любым из тегов, свежие первыми"""
        tags = parse_tags(raw_tags)
        if not tags:
            raise ValidationError("Tags are required")

        documents, total = await self.document_repository.search_by_tags(
            tags, limit=limit, offset=(page - 1) * limit
        )
        return SearchPage(documents=documents, total=total, current_page=page, limit=limit, tags=tags)

    async def semantic_search(self, query: Optional[str], page: int = 1, limit: int = 10) -> SearchPage:
        """Ранжирование корпуса моделью; пагинация в памяти"""
        query = self._require_query(query)
        relevant = await self._semantic_matches(query)
        return SearchPage(
            documents=paginate(relevant, page, limit),
            total=len(relevant),
            current_page=page,
            limit=limit,
            query=query,
            search_type="semantic"
        )

    async def combined_search(self, query: Optional[str], page: int = 1, limit: int = 10) -> SearchPage:
        """Объединение текстового и семантического поиска"""
        query = self._require_query(query)
        text_results, _ = await self.document_repository.search_text(query)
        semantic_results = await self._semantic_matches(query)

        combined = merge_results(text_results, semantic_results)
        return SearchPage(
            documents=paginate(combined, page, limit),
            total=len(combined),
            current_page=page,
            limit=limit,
            query=query,
            search_type="combined"
        )

    async def all_tags(self) -> List[str]:
        return await self.document_repository.list_tags()

    async def _semantic_matches(self, query: str) -> List[Document]:
        corpus = await load_corpus(self.document_repository, self.corpus_limit)
        return await self.ai_gateway.semantic_rank(query, corpus)

    @staticmethod
    def _require_query(query: Optional[str]) -> str:
        if not query or not query.strip():
            raise ValidationError("Search query is required")
        return query.strip()
