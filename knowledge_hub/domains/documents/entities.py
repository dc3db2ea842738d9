import uuid
from datetime import datetime, timezone
from typing import Optional, List

from knowledge_hub.domains.identity.entities import UserRef

# Предел длины одного тега, совпадает с колонкой documents.tags
MAX_TAG_LENGTH = 100


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DocumentVersion:
    """Снимок прежнего содержимого документа"""

    def __init__(
        self,
        content: str,
        edited_by: UserRef,
        edited_at: Optional[datetime] = None,
        id: Optional[uuid.UUID] = None
    ):
        self.id = id or uuid.uuid4()
        self.content = content
        self.edited_by = edited_by
        self.edited_at = edited_at or utcnow()

    def __eq__(self, other) -> bool:
        if not isinstance(other, DocumentVersion):
            return False
        return self.id == other.id

    def __repr__(self) -> str:
        return f"DocumentVersion(id={self.id}, edited_by={self.edited_by.id}, edited_at={self.edited_at})"


class Document:
    """Сущность документа базы знаний.

    ``versions`` хранит только вытесненные редакции, от старых к новым;
    текущее ``content`` в историю не попадает.
    """

    def __init__(
        self,
        id: uuid.UUID,
        title: str,
        content: str,
        created_by: UserRef,
        tags: Optional[List[str]] = None,
        summary: Optional[str] = None,
        last_edited_by: Optional[UserRef] = None,
        versions: Optional[List[DocumentVersion]] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.id = id
        self.title = title
        self.content = content
        self.created_by = created_by
        self.tags = list(tags or [])
        self.summary = summary
        self.last_edited_by = last_edited_by
        self.versions = list(versions or [])
        self.created_at = created_at or utcnow()
        self.updated_at = updated_at or self.created_at

    @property
    def current_author(self) -> UserRef:
        """Кто написал текущее содержимое"""
        return self.last_edited_by or self.created_by

    def add_version(self, new_content: str, editor: UserRef) -> DocumentVersion:
        """Сохраняет текущее содержимое в историю и заменяет его новым"""
        now = utcnow()
        version = DocumentVersion(
            content=self.content,
            edited_by=self.current_author,
            edited_at=now
        )
        self.versions.append(version)
        self.content = new_content
        self.last_edited_by = editor
        self.updated_at = now
        return version

    def update_title(self, new_title: str) -> None:
        self.title = new_title
        self.updated_at = utcnow()

    def apply_augmentation(self, summary: Optional[str] = None, tags: Optional[List[str]] = None) -> None:
        """Обновление производных AI-полей"""
        if summary is not None:
            self.summary = summary
        if tags is not None:
            self.tags = list(tags)
        self.updated_at = utcnow()

    def has_any_tag(self, tags: List[str]) -> bool:
        return bool(set(self.tags) & set(tags))

    @classmethod
    def create_document(
        cls,
        title: str,
        content: str,
        author: UserRef,
        summary: Optional[str] = None,
        tags: Optional[List[str]] = None
    ) -> "Document":
        """Создание нового документа без истории версий"""
        return cls(
            id=uuid.uuid4(),
            title=title,
            content=content,
            created_by=author,
            summary=summary,
            tags=tags
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Document):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"Document(id={self.id}, title={self.title}, versions={len(self.versions)})"
