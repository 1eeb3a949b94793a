from fastapi import APIRouter, Depends, status

from app.core.dependencies import get_current_user, get_user_repository
from app.core.errors import Unauthenticated
from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.services.auth_service import auth_service
from app.schemas.auth import UserLogin, UserRegister, AuthResponse, RefreshTokenRequest, UserRead

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=AuthResponse)
async def login(user: UserLogin, repo: UserRepository = Depends(get_user_repository)):
    """Аутентификация пользователя и выдача JWT токенов"""
    authenticated_user = await auth_service.authenticate_user(repo, user)
    if not authenticated_user:
        raise Unauthenticated("Invalid email or password")

    return await auth_service.issue_tokens(repo, authenticated_user)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(user: UserRegister, repo: UserRepository = Depends(get_user_repository)):
    """Регистрация нового клиента и выдача JWT токенов"""
    new_user = await auth_service.register_user(repo, user)
    return await auth_service.issue_tokens(repo, new_user)


@router.post("/refresh", response_model=AuthResponse)
async def refresh_token(request: RefreshTokenRequest, repo: UserRepository = Depends(get_user_repository)):
    """Ротация refresh token: старый токен после использования недействителен"""
    tokens = await auth_service.rotate_refresh_token(repo, request.refresh_token)
    if tokens is None:
        raise Unauthenticated("Invalid or expired refresh token")
    return tokens


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(request: RefreshTokenRequest, repo: UserRepository = Depends(get_user_repository)):
    await auth_service.logout_user(repo, request.refresh_token)


@router.get("/me", response_model=UserRead)
async def me(current_user: User = Depends(get_current_user)):
    return current_user
