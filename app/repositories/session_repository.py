from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.workout import Workout
from app.models.workout_session import WorkoutSession


class SessionRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, session_id: int) -> Optional[WorkoutSession]:
        """Сессия вместе с планом тренировки (упражнения по order) и клиентом."""
        result = await self.db.execute(
            select(WorkoutSession)
            .where(WorkoutSession.id == session_id)
            .options(
                selectinload(WorkoutSession.workout).selectinload(Workout.exercises),
                selectinload(WorkoutSession.client),
            )
        )
        return result.scalar_one_or_none()

    async def list_for_client(self, client_id: int, limit: int) -> List[WorkoutSession]:
        result = await self.db.execute(
            select(WorkoutSession)
            .where(WorkoutSession.client_id == client_id)
            .options(selectinload(WorkoutSession.workout))
            .order_by(WorkoutSession.date.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def create(self, workout_session: WorkoutSession) -> WorkoutSession:
        self.db.add(workout_session)
        await self.db.commit()
        await self.db.refresh(workout_session)
        return workout_session

    async def update(self, workout_session: WorkoutSession, fields: dict) -> WorkoutSession:
        for key, value in fields.items():
            setattr(workout_session, key, value)
        await self.db.commit()
        await self.db.refresh(workout_session)
        return workout_session
