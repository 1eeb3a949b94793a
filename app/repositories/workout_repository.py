"""
Репозиторий тренировок.

В отличие от остальных репозиториев, методы здесь только делают flush:
создание/обновление тренировки (ленивый профиль, активация, замена упражнений)
коммитится одним куском через commit() из WorkoutService.
"""

from typing import Iterable, List, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.client_profile import ClientProfile
from app.models.workout import Workout, Exercise


class WorkoutRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, workout_id: int) -> Optional[Workout]:
        result = await self.db.execute(
            select(Workout)
            .where(Workout.id == workout_id)
            .options(selectinload(Workout.exercises), selectinload(Workout.client_profile))
        )
        return result.scalar_one_or_none()

    async def list_for_profile(self, client_profile_id: int) -> List[Workout]:
        result = await self.db.execute(
            select(Workout)
            .where(Workout.client_profile_id == client_profile_id)
            .options(selectinload(Workout.exercises))
            .order_by(Workout.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_profile_by_user_id(self, user_id: int) -> Optional[ClientProfile]:
        result = await self.db.execute(select(ClientProfile).where(ClientProfile.user_id == user_id))
        return result.scalar_one_or_none()

    async def get_or_create_profile(self, user_id: int) -> ClientProfile:
        """Профиль создаётся лениво при назначении первой тренировки."""
        profile = await self.get_profile_by_user_id(user_id)
        if profile is None:
            profile = ClientProfile(user_id=user_id)
            self.db.add(profile)
            await self.db.flush()
        return profile

    async def lock_client_profile(self, client_profile_id: int) -> None:
        """Строковая блокировка профиля: активации одного клиента идут по очереди."""
        await self.db.execute(
            select(ClientProfile.id)
            .where(ClientProfile.id == client_profile_id)
            .with_for_update()
        )

    async def deactivate_others(self, client_profile_id: int, exclude_id: Optional[int]) -> int:
        stmt = (
            update(Workout)
            .where(Workout.client_profile_id == client_profile_id, Workout.is_active.is_(True))
            .values(is_active=False)
            .execution_options(synchronize_session="fetch")
        )
        if exclude_id is not None:
            stmt = stmt.where(Workout.id != exclude_id)
        result = await self.db.execute(stmt)
        await self.db.flush()
        return result.rowcount or 0

    async def set_active(self, workout: Workout, is_active: bool) -> None:
        workout.is_active = is_active
        await self.db.flush()

    async def add_workout(self, workout: Workout, exercises: Iterable[Exercise]) -> Workout:
        workout.exercises = list(exercises)
        self.db.add(workout)
        await self.db.flush()
        return workout

    async def update_fields(self, workout: Workout, fields: dict) -> Workout:
        for key, value in fields.items():
            setattr(workout, key, value)
        await self.db.flush()
        return workout

    async def replace_exercises(self, workout: Workout, exercises: Iterable[Exercise]) -> Workout:
        # старые упражнения удаляются каскадом delete-orphan
        workout.exercises = list(exercises)
        await self.db.flush()
        return workout

    async def delete(self, workout: Workout) -> None:
        await self.db.delete(workout)
        await self.db.commit()

    async def commit(self) -> None:
        await self.db.commit()

    async def rollback(self) -> None:
        await self.db.rollback()

    async def reload(self, workout_id: int) -> Optional[Workout]:
        """Свежая копия после коммита (с упражнениями в порядке order)."""
        self.db.expire_all()
        return await self.get_by_id(workout_id)
