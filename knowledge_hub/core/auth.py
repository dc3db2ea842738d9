from typing import Optional
import uuid

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from knowledge_hub.core.dependencies import get_document_repository, get_user_repository
from knowledge_hub.core.errors import AuthenticationError, NotFoundError, PermissionDeniedError
from knowledge_hub.db.repositories import DocumentRepository, UserRepository
from knowledge_hub.domains.documents.entities import Document
from knowledge_hub.domains.identity.entities import User
from knowledge_hub.domains.identity.services import IdentityService

# auto_error=False: отсутствие заголовка должно давать 401, а не 403
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    user_repository: UserRepository = Depends(get_user_repository)
) -> User:
    """Зависимость для получения текущего пользователя"""
    if credentials is None:
        raise AuthenticationError("No token, authorization denied")

    user = await IdentityService(user_repository).get_current_user_from_token(credentials.credentials)
    if user is None:
        raise AuthenticationError("Token is not valid")

    return user


async def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Только для администраторов"""
    if not current_user.is_admin:
        raise PermissionDeniedError("Access denied. Admin only.")
    return current_user


async def get_editable_document(
    document_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    document_repository: DocumentRepository = Depends(get_document_repository)
) -> Document:
    """Документ из пути, если текущий пользователь - владелец или администратор"""
    document = await document_repository.get_by_id(document_id)
    if document is None:
        raise NotFoundError("Document not found")

    if not current_user.can_modify(document):
        raise PermissionDeniedError("Access denied. You can only edit your own documents.")

    return document
