from fastapi import APIRouter, Depends, status

from knowledge_hub.core.auth import get_current_user
from knowledge_hub.core.dependencies import get_user_repository
from knowledge_hub.db.repositories import UserRepository
from knowledge_hub.domains.identity.entities import User
from knowledge_hub.domains.identity.schemas import UserCreate, UserLogin, UserResponse, Token
from knowledge_hub.domains.identity.services import IdentityService

router = APIRouter(prefix="/auth", tags=["authentication"])


def get_identity_service(
    user_repository: UserRepository = Depends(get_user_repository)
) -> IdentityService:
    return IdentityService(user_repository)


@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserCreate,
    identity_service: IdentityService = Depends(get_identity_service)
):
    """Регистрация нового пользователя"""
    user, token = await identity_service.register_user(
        user_data.name,
        user_data.email,
        user_data.password
    )
    return Token(access_token=token, user=UserResponse.model_validate(user))


@router.post("/login", response_model=Token)
async def login(
    login_data: UserLogin,
    identity_service: IdentityService = Depends(get_identity_service)
):
    """Вход пользователя"""
    user, token = await identity_service.login_user(login_data.email, login_data.password)
    return Token(access_token=token, user=UserResponse.model_validate(user))


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Получение информации о текущем пользователе"""
    return UserResponse.model_validate(current_user)
