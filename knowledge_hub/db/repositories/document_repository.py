from typing import Optional, List, Sequence, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload
import uuid

from knowledge_hub.db.models.document import (
    Document as DocumentModel,
    DocumentVersion as DocumentVersionModel,
    SEARCH_CONFIG,
)
from knowledge_hub.domains.documents.entities import Document, DocumentVersion
from knowledge_hub.domains.identity.entities import UserRef


def build_search_vector(title: str, content: str, tags: Sequence[str]):
    """tsvector по заголовку, содержимому и тегам"""
    return func.to_tsvector(SEARCH_CONFIG, " ".join([title, content, *tags]))


def text_query(query: str):
    """tsquery, совпадающий с любым из слов запроса"""
    terms = query.split() or [query]
    ts_query = func.plainto_tsquery(SEARCH_CONFIG, terms[0])
    for term in terms[1:]:
        ts_query = ts_query.op("||")(func.plainto_tsquery(SEARCH_CONFIG, term))
    return ts_query


def text_match(query: str):
    """Условие полнотекстового совпадения и его ранг"""
    ts_query = text_query(query)
    condition = DocumentModel.search_vector.op("@@")(ts_query)
    rank = func.ts_rank(DocumentModel.search_vector, ts_query)
    return condition, rank


class DocumentRepository:
    """Репозиторий документов и их истории версий"""

    SORT_COLUMNS = {
        "createdAt": DocumentModel.created_at,
        "updatedAt": DocumentModel.updated_at,
        "title": DocumentModel.title,
    }

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, document: Document) -> Document:
        """Создание нового документа"""
        db_document = DocumentModel(
            id=document.id,
            title=document.title,
            content=document.content,
            tags=document.tags,
            summary=document.summary,
            created_by_id=document.created_by.id,
            search_vector=build_search_vector(document.title, document.content, document.tags),
            created_at=document.created_at,
            updated_at=document.updated_at
        )

        self.session.add(db_document)
        await self._commit()
        return await self.get_by_id(document.id)

    async def get_by_id(self, document_id: uuid.UUID) -> Optional[Document]:
        """Получение документа вместе с версиями"""
        result = await self.session.execute(
            select(DocumentModel)
            .where(DocumentModel.id == document_id)
            .options(*self._load_options(with_versions=True))
            .execution_options(populate_existing=True)
        )
        db_document = result.scalar_one_or_none()
        return self._to_domain(db_document, with_versions=True) if db_document else None

    async def save_revision(self, document: Document, version: DocumentVersion) -> Document:
        """Добавление версии и перезапись документа одной транзакцией"""
        self.session.add(
            DocumentVersionModel(
                id=version.id,
                document_id=document.id,
                content=version.content,
                edited_by_id=version.edited_by.id,
                edited_at=version.edited_at
            )
        )
        await self.session.execute(
            update(DocumentModel)
            .where(DocumentModel.id == document.id)
            .values(
                title=document.title,
                content=document.content,
                summary=document.summary,
                tags=document.tags,
                last_edited_by_id=document.last_edited_by.id if document.last_edited_by else None,
                search_vector=build_search_vector(document.title, document.content, document.tags),
                updated_at=document.updated_at
            )
            .execution_options(synchronize_session=False)
        )
        await self._commit()
        return await self.get_by_id(document.id)

    async def update_augmentation(self, document: Document) -> Document:
        """Сохранение summary и тегов без изменения истории"""
        await self.session.execute(
            update(DocumentModel)
            .where(DocumentModel.id == document.id)
            .values(
                summary=document.summary,
                tags=document.tags,
                search_vector=build_search_vector(document.title, document.content, document.tags),
                updated_at=document.updated_at
            )
            .execution_options(synchronize_session=False)
        )
        await self._commit()
        return await self.get_by_id(document.id)

    async def delete(self, document_id: uuid.UUID) -> bool:
        """Удаление документа; версии удаляются каскадно"""
        result = await self.session.execute(
            delete(DocumentModel).where(DocumentModel.id == document_id)
        )
        await self._commit()
        return result.rowcount > 0

    async def list_documents(
        self,
        limit: int = 10,
        offset: int = 0,
        tag: Optional[str] = None,
        search: Optional[str] = None,
        sort_by: str = "createdAt",
        descending: bool = True
    ) -> Tuple[List[Document], int]:
        """Постраничный список с фильтрами по тегу и тексту"""
        conditions = []
        if tag:
            conditions.append(DocumentModel.tags.contains([tag]))
        if search:
            conditions.append(text_match(search)[0])

        sort_column = self.SORT_COLUMNS[sort_by]
        order = sort_column.desc() if descending else sort_column.asc()

        return await self._page(conditions, [order], limit, offset)

    async def list_all(self, limit: Optional[int] = None) -> List[Document]:
        """Корпус документов, свежие первыми"""
        stmt = (
            select(DocumentModel)
            .options(*self._load_options())
            .order_by(DocumentModel.updated_at.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)

        result = await self.session.execute(stmt)
        return [self._to_domain(doc) for doc in result.scalars().all()]

    async def list_recent(self, limit: int = 5, created_by: Optional[uuid.UUID] = None) -> List[Document]:
        """Последние изменённые документы, опционально одного автора"""
        stmt = select(DocumentModel).options(*self._load_options())
        if created_by:
            stmt = stmt.where(DocumentModel.created_by_id == created_by)

        result = await self.session.execute(
            stmt.order_by(DocumentModel.updated_at.desc()).limit(limit)
        )
        return [self._to_domain(doc) for doc in result.scalars().all()]

    async def search_text(
        self,
        query: str,
        limit: Optional[int] = None,
        offset: int = 0
    ) -> Tuple[List[Document], int]:
        """Полнотекстовый поиск, по убыванию ранга"""
        condition, rank = text_match(query)
        return await self._page(
            [condition], [rank.desc(), DocumentModel.updated_at.desc()], limit, offset
        )

    async def search_by_tags(
        self,
        tags: List[str],
        limit: Optional[int] = None,
        offset: int = 0
    ) -> Tuple[List[Document], int]:
        """Документы, у которых есть хотя бы один из тегов"""
        condition = DocumentModel.tags.overlap(list(tags))
        return await self._page([condition], [DocumentModel.updated_at.desc()], limit, offset)

    async def list_tags(self) -> List[str]:
        """Все различные теги корпуса"""
        tag = func.unnest(DocumentModel.tags).label("tag")
        result = await self.session.execute(select(tag).distinct())
        return sorted(t for t in result.scalars().all() if t and t.strip())

    async def _page(self, conditions, order_by, limit, offset) -> Tuple[List[Document], int]:
        stmt = select(DocumentModel).options(*self._load_options())
        count_stmt = select(func.count(DocumentModel.id))
        for condition in conditions:
            stmt = stmt.where(condition)
            count_stmt = count_stmt.where(condition)

        stmt = stmt.order_by(*order_by).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)

        result = await self.session.execute(stmt)
        documents = [self._to_domain(doc) for doc in result.scalars().all()]
        total = (await self.session.execute(count_stmt)).scalar()
        return documents, total

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise

    @staticmethod
    def _load_options(with_versions: bool = False) -> list:
        options = [
            selectinload(DocumentModel.creator),
            selectinload(DocumentModel.last_editor),
        ]
        if with_versions:
            options.append(
                selectinload(DocumentModel.versions).selectinload(DocumentVersionModel.editor)
            )
        return options

    @staticmethod
    def _user_ref(db_user) -> Optional[UserRef]:
        if db_user is None:
            return None
        return UserRef(id=db_user.id, name=db_user.name, email=db_user.email)

    def _to_domain(self, db_document: DocumentModel, with_versions: bool = False) -> Document:
        """Преобразование модели БД в доменную сущность"""
        versions = []
        if with_versions:
            versions = [
                DocumentVersion(
                    id=v.id,
                    content=v.content,
                    edited_by=self._user_ref(v.editor),
                    edited_at=v.edited_at
                )
                for v in db_document.versions
            ]

        return Document(
            id=db_document.id,
            title=db_document.title,
            content=db_document.content,
            created_by=self._user_ref(db_document.creator),
            tags=db_document.tags or [],
            summary=db_document.summary,
            last_edited_by=self._user_ref(db_document.last_editor),
            versions=versions,
            created_at=db_document.created_at,
            updated_at=db_document.updated_at
        )
