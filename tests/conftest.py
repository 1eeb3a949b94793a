"""
Общие фикстуры для всех тестов PT CRM backend.

Стратегия:
- Тестовое FastAPI-приложение создаётся без startup-событий (нет подключения к БД).
- Все репозитории заменяются на AsyncMock(spec=...) через dependency_overrides;
  сервисы собираются настоящие, поверх моков.
- get_current_user переопределяется лямбдой с нужным пользователем
  (тренер, клиент, другой клиент).
- JWT-токены создаются через auth_service.create_access_token() для проверки middleware.
"""

import pytest
from unittest.mock import AsyncMock
from httpx import AsyncClient, ASGITransport
from fastapi import FastAPI
from datetime import datetime
from typing import AsyncGenerator

from app.api.router import api_router
from app.core.errors import register_exception_handlers
from app.models.user import User, RoleEnum
from app.services.auth_service import auth_service
from app.repositories.client_repository import ClientRepository
from app.repositories.measurement_repository import MeasurementRepository
from app.repositories.notification_repository import NotificationRepository
from app.repositories.session_repository import SessionRepository
from app.repositories.user_repository import UserRepository
from app.repositories.workout_repository import WorkoutRepository
from app.core.dependencies import (
    get_client_repository,
    get_current_user,
    get_measurement_repository,
    get_notification_repository,
    get_session_repository,
    get_user_repository,
    get_workout_repository,
)


# ---------------------------------------------------------------------------
# Вспомогательные функции
# ---------------------------------------------------------------------------

def create_test_app() -> FastAPI:
    """Тестовое FastAPI-приложение без startup-событий."""
    test_app = FastAPI(title="PT CRM Test App")
    register_exception_handlers(test_app)
    test_app.include_router(api_router, prefix="/api/v1")
    return test_app


def make_auth_headers(user: User) -> dict:
    """Создать заголовки авторизации с валидным JWT для указанного пользователя."""
    access_token = auth_service.create_access_token(
        data={"sub": str(user.id), "role": user.role.value}
    )
    return {"Authorization": f"Bearer {access_token}"}


# ---------------------------------------------------------------------------
# Фикстуры пользователей
# ---------------------------------------------------------------------------

@pytest.fixture
def trainer_fixture() -> User:
    """Единственный тренер."""
    return User(
        id=1,
        email="trainer@ptcrm.com",
        first_name="Marco",
        last_name="Fitness",
        password=auth_service.hash_password("password123"),
        role=RoleEnum.trainer,
        created_at=datetime.utcnow(),
    )


@pytest.fixture
def client_user_fixture() -> User:
    """Клиент тренера."""
    return User(
        id=2,
        email="luca@example.com",
        first_name="Luca",
        last_name="Bianchi",
        password=auth_service.hash_password("client123"),
        role=RoleEnum.client,
        created_at=datetime.utcnow(),
    )


@pytest.fixture
def other_client_user_fixture() -> User:
    """Другой клиент - для проверок чужих данных."""
    return User(
        id=3,
        email="giulia@example.com",
        first_name="Giulia",
        last_name="Verdi",
        password=auth_service.hash_password("client456"),
        role=RoleEnum.client,
        created_at=datetime.utcnow(),
    )


# ---------------------------------------------------------------------------
# Фикстуры для зависимостей
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_repo() -> AsyncMock:
    """Мокированный UserRepository."""
    return AsyncMock(spec=UserRepository)


@pytest.fixture
def client_repo() -> AsyncMock:
    return AsyncMock(spec=ClientRepository)


@pytest.fixture
def workout_repo() -> AsyncMock:
    return AsyncMock(spec=WorkoutRepository)


@pytest.fixture
def session_repo() -> AsyncMock:
    return AsyncMock(spec=SessionRepository)


@pytest.fixture
def measurement_repo() -> AsyncMock:
    return AsyncMock(spec=MeasurementRepository)


@pytest.fixture
def notification_repo() -> AsyncMock:
    return AsyncMock(spec=NotificationRepository)


@pytest.fixture
def repos(mock_repo, client_repo, workout_repo, session_repo, measurement_repo, notification_repo) -> dict:
    return {
        get_user_repository: mock_repo,
        get_client_repository: client_repo,
        get_workout_repository: workout_repo,
        get_session_repository: session_repo,
        get_measurement_repository: measurement_repo,
        get_notification_repository: notification_repo,
    }


def _build_app(repos: dict, current_user: User = None) -> FastAPI:
    app = create_test_app()
    for dependency, repo in repos.items():
        app.dependency_overrides[dependency] = (lambda r: lambda: r)(repo)
    if current_user is not None:
        app.dependency_overrides[get_current_user] = lambda: current_user
    return app


# ---------------------------------------------------------------------------
# HTTP-клиенты
# ---------------------------------------------------------------------------

@pytest.fixture
async def client(repos) -> AsyncGenerator[AsyncClient, None]:
    """
    Базовый клиент без подменённого пользователя.
    Используется для auth-эндпоинтов и проверок 401.
    """
    async with AsyncClient(
        transport=ASGITransport(app=_build_app(repos)),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
async def trainer_client(trainer_fixture, repos) -> AsyncGenerator[AsyncClient, None]:
    """Клиент, аутентифицированный как тренер."""
    async with AsyncClient(
        transport=ASGITransport(app=_build_app(repos, trainer_fixture)),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
async def client_user_client(client_user_fixture, repos) -> AsyncGenerator[AsyncClient, None]:
    """Клиент, аутентифицированный как клиент тренера (id=2)."""
    async with AsyncClient(
        transport=ASGITransport(app=_build_app(repos, client_user_fixture)),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
async def other_client_user_client(other_client_user_fixture, repos) -> AsyncGenerator[AsyncClient, None]:
    """Клиент, аутентифицированный как другой клиент (id=3)."""
    async with AsyncClient(
        transport=ASGITransport(app=_build_app(repos, other_client_user_fixture)),
        base_url="http://test",
    ) as ac:
        yield ac
