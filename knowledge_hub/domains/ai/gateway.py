"""Шлюз к Gemini.

Единственная точка обращения к внешнему генеративному API. Каждый метод
при сбое провайдера возвращает безопасное значение по умолчанию, поэтому
вызывающий код никогда не получает исключение от провайдера.
"""

import asyncio
import logging
from typing import List, Optional, Sequence

from google import genai

from knowledge_hub.core.errors import AIProviderFailure
from knowledge_hub.domains.ai import prompts
from knowledge_hub.domains.documents.entities import Document, MAX_TAG_LENGTH

logger = logging.getLogger(__name__)

SUMMARY_FALLBACK = "Summary generation failed"
ANSWER_FALLBACK = "Sorry, I encountered an error while processing your question."
INSIGHTS_FALLBACK = "Unable to generate insights at this time."
RELATED_FALLBACK_LIMIT = 5


def split_list(text: str) -> List[str]:
    """Разбор ответа вида "a, b, c" без пустых элементов"""
    return [item.strip() for item in text.split(",") if item.strip()]


def match_titles(titles: Sequence[str], documents: Sequence[Document]) -> List[Document]:
    """Сопоставление заголовков из ответа модели с документами.

    Документ попадает в результат, если его заголовок содержит любой из
    возвращённых заголовков (без учёта регистра). Эвристика неоднозначна
    для пересекающихся заголовков; порядок корпуса сохраняется.
    """
    needles = [title.lower() for title in titles]
    return [
        doc for doc in documents
        if any(needle in doc.title.lower() for needle in needles)
    ]


class GeminiGateway:
    """Генерация summary, тегов, семантического ранжирования и ответов"""

    def __init__(self, client: Optional[genai.Client], model: str, timeout: float = 30.0):
        self.client = client
        self.model = model
        self.timeout = timeout

    async def generate_summary(self, content: str) -> str:
        try:
            return await self._generate(prompts.summary_prompt(content))
        except AIProviderFailure as e:
            logger.warning(f"Summary generation failed: {e}")
            return SUMMARY_FALLBACK

    async def generate_tags(self, content: str) -> List[str]:
        try:
            tags = split_list(await self._generate(prompts.tags_prompt(content)))
        except AIProviderFailure as e:
            logger.warning(f"Tag generation failed: {e}")
            return []

        # Длинный "тег" обычно означает, что модель ответила прозой
        too_long = [tag for tag in tags if len(tag) > MAX_TAG_LENGTH]
        if too_long:
            logger.warning(f"Dropping {len(too_long)} generated tag(s) longer than {MAX_TAG_LENGTH} characters")
        return [tag for tag in tags if len(tag) <= MAX_TAG_LENGTH]

    async def semantic_rank(self, query: str, documents: Sequence[Document]) -> List[Document]:
        if not documents:
            return []
        try:
            text = await self._generate(prompts.semantic_search_prompt(query, documents))
        except AIProviderFailure as e:
            logger.warning(f"Semantic search failed, returning unfiltered corpus: {e}")
            return list(documents)
        return match_titles(split_list(text), documents)

    async def answer_question(self, question: str, documents: Sequence[Document]) -> str:
        try:
            return await self._generate(prompts.question_prompt(question, documents))
        except AIProviderFailure as e:
            logger.warning(f"Question answering failed: {e}")
            return ANSWER_FALLBACK

    async def summarize_corpus_insights(self, documents: Sequence[Document]) -> str:
        try:
            return await self._generate(prompts.insights_prompt(documents))
        except AIProviderFailure as e:
            logger.warning(f"Insight generation failed: {e}")
            return INSIGHTS_FALLBACK

    async def find_related(self, reference_text: str, documents: Sequence[Document]) -> List[Document]:
        try:
            text = await self._generate(prompts.related_documents_prompt(reference_text, documents))
        except AIProviderFailure as e:
            logger.warning(f"Related document lookup failed: {e}")
            return list(documents[:RELATED_FALLBACK_LIMIT])
        return match_titles(split_list(text), documents)

    async def _generate(self, prompt: str) -> str:
        """Один вызов модели; любой сбой превращается в AIProviderFailure"""
        if self.client is None:
            raise AIProviderFailure("Gemini API key is not configured")

        try:
            response = await asyncio.wait_for(
                self.client.aio.models.generate_content(model=self.model, contents=prompt),
                timeout=self.timeout,
            )
            text = response.text
        except asyncio.TimeoutError as e:
            raise AIProviderFailure(f"Gemini call timed out after {self.timeout}s") from e
        except Exception as e:
            raise AIProviderFailure(f"{type(e).__name__}: {e}") from e

        if not text or not text.strip():
            raise AIProviderFailure("Gemini returned an empty response")
        return text.strip()


def create_gateway(api_key: str, model: str, timeout: float) -> GeminiGateway:
    """Создание шлюза; без ключа все вызовы уходят в fallback"""
    client = None
    if api_key:
        client = genai.Client(api_key=api_key)
        logger.info(f"Gemini gateway created, model={model}")
    else:
        logger.warning("GEMINI_API_KEY is not set, AI features will return fallback values")
    return GeminiGateway(client, model=model, timeout=timeout)
