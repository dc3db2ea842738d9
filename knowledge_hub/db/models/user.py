from sqlalchemy import Column, String, Enum
from sqlalchemy.orm import relationship

from knowledge_hub.db.base import BaseModel
from knowledge_hub.domains.identity.entities import UserRole


class User(BaseModel):
    __tablename__ = "users"

    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        Enum(UserRole, name="user_role", values_callable=lambda roles: [r.value for r in roles]),
        nullable=False,
        default=UserRole.MEMBER,
    )

    # Relationships
    authored_documents = relationship(
        "Document", back_populates="creator", foreign_keys="Document.created_by_id"
    )
