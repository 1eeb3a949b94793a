import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.models.user import User, RoleEnum
from app.services.auth_service import auth_service

logger = logging.getLogger(__name__)


async def ensure_trainer_account(session: AsyncSession) -> User:
    """Создать учётную запись тренера, если в системе её ещё нет."""
    result = await session.execute(
        select(User).where(User.role == RoleEnum.trainer).order_by(User.id).limit(1)
    )
    trainer = result.scalar_one_or_none()
    if trainer is not None:
        logger.info("Trainer account already exists: %s (ID: %s)", trainer.email, trainer.id)
        return trainer

    trainer = User(
        email=settings.TRAINER_EMAIL,
        password=auth_service.hash_password(settings.TRAINER_PASSWORD),
        first_name=settings.TRAINER_FIRST_NAME,
        last_name=settings.TRAINER_LAST_NAME,
        role=RoleEnum.trainer,
    )
    session.add(trainer)
    await session.commit()
    await session.refresh(trainer)

    logger.info("Trainer account created: %s (ID: %s)", trainer.email, trainer.id)
    return trainer
