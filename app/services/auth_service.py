from datetime import datetime, timedelta
from typing import Optional
import uuid
import bcrypt
from jose import jwt, JWTError

from app.core.config import settings
from app.core.errors import ConflictError
from app.models.user import User, RoleEnum
from app.repositories.user_repository import UserRepository
from app.schemas.auth import AuthResponse, UserLogin, UserRegister


class AuthService:
    def __init__(self):
        self.SECRET_KEY = settings.SECRET_KEY
        self.REFRESH_SECRET_KEY = settings.REFRESH_SECRET_KEY
        self.ALGORITHM = settings.ALGORITHM
        self.ACCESS_TOKEN_EXPIRE_MINUTES = settings.ACCESS_TOKEN_EXPIRE_MINUTES
        self.REFRESH_TOKEN_EXPIRE_DAYS = settings.REFRESH_TOKEN_EXPIRE_DAYS

    def hash_password(self, password: str) -> str:
        salt = bcrypt.gensalt()
        hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
        return hashed.decode('utf-8')  # Декодируем bytes в string для хранения в БД

    def verify_password(self, plain_password: str, hashed_password: Optional[str]) -> bool:
        if not hashed_password:
            return False
        try:
            return bcrypt.checkpw(
                plain_password.encode('utf-8'),
                hashed_password.encode('utf-8')
            )
        except ValueError:
            # В БД лежит не bcrypt-хэш
            return False

    def create_access_token(self, data: dict, expires_delta: Optional[timedelta] = None):
        to_encode = data.copy()
        if expires_delta:
            expire = datetime.utcnow() + expires_delta
        else:
            expire = datetime.utcnow() + timedelta(minutes=self.ACCESS_TOKEN_EXPIRE_MINUTES)
        to_encode.update({"exp": expire, "type": "access"})
        return jwt.encode(to_encode, self.SECRET_KEY, algorithm=self.ALGORITHM)

    def create_refresh_token(self, data: dict):
        to_encode = data.copy()
        expire = datetime.utcnow() + timedelta(days=self.REFRESH_TOKEN_EXPIRE_DAYS)
        # jti делает токены уникальными даже при выдаче в одну секунду
        to_encode.update({"exp": expire, "type": "refresh", "jti": uuid.uuid4().hex})
        return jwt.encode(to_encode, self.REFRESH_SECRET_KEY, algorithm=self.ALGORITHM)

    def decode_access_token(self, token: str) -> Optional[dict]:
        try:
            payload = jwt.decode(token, self.SECRET_KEY, algorithms=[self.ALGORITHM])
        except JWTError:
            return None
        if payload.get("sub") is None or payload.get("type", "access") != "access":
            return None
        return payload

    def _decode_refresh_token(self, token: str) -> Optional[int]:
        try:
            payload = jwt.decode(token, self.REFRESH_SECRET_KEY, algorithms=[self.ALGORITHM])
        except JWTError:
            return None
        user_id = payload.get("sub")
        if user_id is None or payload.get("type") != "refresh":
            return None
        return int(user_id)

    async def issue_tokens(self, repo: UserRepository, user: User) -> AuthResponse:
        access_token = self.create_access_token(
            data={"sub": str(user.id), "role": user.role.value}
        )
        refresh_token = self.create_refresh_token(data={"sub": str(user.id)})
        await repo.save_refresh_token(
            user,
            refresh_token,
            datetime.utcnow() + timedelta(days=self.REFRESH_TOKEN_EXPIRE_DAYS),
        )
        return AuthResponse(
            access_token=access_token,
            refresh_token=refresh_token,
            token_type="bearer",
            role=user.role,
        )

    async def authenticate_user(self, repo: UserRepository, login_data: UserLogin) -> Optional[User]:
        user = await repo.get_by_email(login_data.email)
        if not user or not self.verify_password(login_data.password, user.password):
            return None
        return user

    async def register_user(self, repo: UserRepository, user_data: UserRegister) -> User:
        """Самостоятельная регистрация: всегда клиент, профиль создаётся позже."""
        if await repo.get_by_email(user_data.email):
            raise ConflictError("A user with this email already exists")

        new_user = User(
            email=user_data.email,
            password=self.hash_password(user_data.password),
            first_name=user_data.first_name,
            last_name=user_data.last_name,
            phone=user_data.phone,
            role=RoleEnum.client,
            created_at=datetime.utcnow()
        )
        return await repo.create_user(new_user)

    async def rotate_refresh_token(self, repo: UserRepository, refresh_token: str) -> Optional[AuthResponse]:
        user_id = self._decode_refresh_token(refresh_token)
        if user_id is None:
            return None

        user = await repo.get_by_refresh_token(refresh_token)
        if user is None:
            # Подпись верна, но токена уже нет в БД: его кто-то использовал повторно
            victim = await repo.get_by_id(user_id)
            if victim is not None:
                await repo.revoke_refresh_token(victim)
            return None

        if user.refresh_token_expires is None or user.refresh_token_expires < datetime.utcnow():
            return None

        return await self.issue_tokens(repo, user)

    async def logout_user(self, repo: UserRepository, refresh_token: str) -> bool:
        user_id = self._decode_refresh_token(refresh_token)
        if user_id is None:
            return False
        user = await repo.get_by_id(user_id)
        if user is None:
            return False
        await repo.revoke_refresh_token(user)
        return True


# Создаем экземпляр сервиса для импорта
auth_service = AuthService()
