from sqlalchemy import Column, String, Text, ForeignKey, UUID, DateTime, Index
from sqlalchemy.dialects.postgresql import ARRAY, TSVECTOR
from sqlalchemy.orm import relationship

from knowledge_hub.db.base import BaseModel
from knowledge_hub.domains.documents.entities import MAX_TAG_LENGTH

# Конфигурация полнотекстового поиска PostgreSQL
SEARCH_CONFIG = "english"


class Document(BaseModel):
    __tablename__ = "documents"

    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    tags = Column(ARRAY(String(MAX_TAG_LENGTH)), nullable=False, default=list)
    summary = Column(Text, nullable=True)
    created_by_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    last_edited_by_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=True)
    # Пересчитывается репозиторием при каждой записи title/content/tags
    search_vector = Column(TSVECTOR, nullable=True)

    # Relationships
    creator = relationship("User", foreign_keys=[created_by_id], back_populates="authored_documents")
    last_editor = relationship("User", foreign_keys=[last_edited_by_id])
    versions = relationship(
        "DocumentVersion",
        back_populates="document",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="DocumentVersion.edited_at",
    )

    __table_args__ = (
        Index("ix_documents_search_vector", "search_vector", postgresql_using="gin"),
        Index("ix_documents_tags", "tags", postgresql_using="gin"),
        Index("ix_documents_updated_at", "updated_at"),
    )


class DocumentVersion(BaseModel):
    __tablename__ = "document_versions"

    document_id = Column(
        UUID(as_uuid=True), ForeignKey("documents.id", ondelete="CASCADE"), nullable=False, index=True
    )
    content = Column(Text, nullable=False)
    edited_by_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False)
    edited_at = Column(DateTime(timezone=True), nullable=False)

    # Relationships
    document = relationship("Document", back_populates="versions")
    editor = relationship("User")
