from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.core.errors import Unauthenticated
from app.models.user import User
from app.repositories.client_repository import ClientRepository
from app.repositories.measurement_repository import MeasurementRepository
from app.repositories.notification_repository import NotificationRepository
from app.repositories.session_repository import SessionRepository
from app.repositories.user_repository import UserRepository
from app.repositories.workout_repository import WorkoutRepository
from app.services.access_policy import Actor, actor_for
from app.services.auth_service import auth_service
from app.services.client_service import ClientService
from app.services.measurement_service import MeasurementService
from app.services.notification_service import NotificationService
from app.services.session_service import SessionService
from app.services.workout_service import WorkoutService


# auto_error=False: без заголовка отвечаем 401 сами, а не 403 от HTTPBearer
security = HTTPBearer(auto_error=False)


def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    """Фабрика репозитория, инжектируется в эндпоинты через Depends."""
    return UserRepository(db)


def get_client_repository(db: AsyncSession = Depends(get_db)) -> ClientRepository:
    return ClientRepository(db)


def get_workout_repository(db: AsyncSession = Depends(get_db)) -> WorkoutRepository:
    return WorkoutRepository(db)


def get_session_repository(db: AsyncSession = Depends(get_db)) -> SessionRepository:
    return SessionRepository(db)


def get_measurement_repository(db: AsyncSession = Depends(get_db)) -> MeasurementRepository:
    return MeasurementRepository(db)


def get_notification_repository(db: AsyncSession = Depends(get_db)) -> NotificationRepository:
    return NotificationRepository(db)


async def get_current_user(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
        repo: UserRepository = Depends(get_user_repository),
) -> User:
    if credentials is None:
        raise Unauthenticated("Not authenticated")

    payload = auth_service.decode_access_token(credentials.credentials)
    if payload is None:
        raise Unauthenticated("Invalid access token")

    user = await repo.get_by_id(int(payload["sub"]))
    if user is None:
        raise Unauthenticated("Invalid access token")

    return user


async def get_current_actor(current_user: User = Depends(get_current_user)) -> Actor:
    return actor_for(current_user)


def get_notification_service(
        notifications: NotificationRepository = Depends(get_notification_repository),
        users: UserRepository = Depends(get_user_repository),
) -> NotificationService:
    return NotificationService(notifications, users)


def get_client_service(
        clients: ClientRepository = Depends(get_client_repository),
        users: UserRepository = Depends(get_user_repository),
) -> ClientService:
    return ClientService(clients, users)


def get_workout_service(
        workouts: WorkoutRepository = Depends(get_workout_repository),
        users: UserRepository = Depends(get_user_repository),
) -> WorkoutService:
    return WorkoutService(workouts, users)


def get_session_service(
        sessions: SessionRepository = Depends(get_session_repository),
        workouts: WorkoutRepository = Depends(get_workout_repository),
        users: UserRepository = Depends(get_user_repository),
        notifications: NotificationService = Depends(get_notification_service),
) -> SessionService:
    return SessionService(sessions, workouts, users, notifications)


def get_measurement_service(
        measurements: MeasurementRepository = Depends(get_measurement_repository),
        users: UserRepository = Depends(get_user_repository),
        notifications: NotificationService = Depends(get_notification_service),
) -> MeasurementService:
    return MeasurementService(measurements, users, notifications)
