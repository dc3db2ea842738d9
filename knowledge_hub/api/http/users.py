from fastapi import APIRouter, Depends, Query
from typing import List
import uuid

from knowledge_hub.api.http.auth import get_identity_service
from knowledge_hub.core.auth import require_admin
from knowledge_hub.domains.identity.entities import User
from knowledge_hub.domains.identity.schemas import UserResponse, RoleUpdate
from knowledge_hub.domains.identity.services import IdentityService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=List[UserResponse])
async def get_users(
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=100),
    admin: User = Depends(require_admin),
    identity_service: IdentityService = Depends(get_identity_service)
):
    """Получение списка пользователей"""
    users = await identity_service.list_users(limit=limit, offset=(page - 1) * limit)
    return [UserResponse.model_validate(user) for user in users]


@router.patch("/{user_id}/role", response_model=UserResponse)
async def change_user_role(
    user_id: uuid.UUID,
    role_data: RoleUpdate,
    admin: User = Depends(require_admin),
    identity_service: IdentityService = Depends(get_identity_service)
):
    """Смена роли пользователя"""
    user = await identity_service.change_role(user_id, role_data.role)
    return UserResponse.model_validate(user)
