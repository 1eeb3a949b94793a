import logging

from app.core.config import settings
from app.core.base import Base
from app.core.db import engine

# Импортируем ВСЕ модели напрямую, чтобы metadata знала о таблицах
from app.models.user import User
from app.models.client_profile import ClientProfile
from app.models.workout import Workout, Exercise
from app.models.workout_session import WorkoutSession
from app.models.measurement import Measurement
from app.models.notification import Notification

logger = logging.getLogger(__name__)


async def init_database():
    """Инициализация базы данных"""
    async with engine.begin() as conn:
        # Удаляем все таблицы если RESET_DATABASE=true
        if settings.RESET_DATABASE:
            logger.warning("RESET_DATABASE=true - пересоздаем БД")
            await conn.run_sync(Base.metadata.drop_all)

        # Создаем все таблицы
        await conn.run_sync(Base.metadata.create_all)
        logger.info("Таблицы БД созданы/проверены")
