from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.client_profile import ClientProfile
from app.models.measurement import Measurement
from app.models.user import User, RoleEnum
from app.models.workout import Workout
from app.models.workout_session import WorkoutSession


@dataclass
class ClientListRow:
    user: User
    last_session_date: Optional[datetime]
    session_count: int
    measurement_count: int


class ClientRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_clients(self) -> List[ClientListRow]:
        sessions = (
            select(
                WorkoutSession.client_id.label("client_id"),
                func.max(WorkoutSession.date).label("last_session_date"),
                func.count(WorkoutSession.id).label("session_count"),
            )
            .group_by(WorkoutSession.client_id)
            .subquery()
        )
        measurements = (
            select(
                Measurement.client_id.label("client_id"),
                func.count(Measurement.id).label("measurement_count"),
            )
            .group_by(Measurement.client_id)
            .subquery()
        )
        result = await self.db.execute(
            select(
                User,
                sessions.c.last_session_date,
                func.coalesce(sessions.c.session_count, 0),
                func.coalesce(measurements.c.measurement_count, 0),
            )
            .outerjoin(sessions, sessions.c.client_id == User.id)
            .outerjoin(measurements, measurements.c.client_id == User.id)
            .where(User.role == RoleEnum.client)
            .options(selectinload(User.client_profile))
            .order_by(User.first_name.asc(), User.last_name.asc())
        )
        return [
            ClientListRow(user=user, last_session_date=last, session_count=sessions_n, measurement_count=measurements_n)
            for user, last, sessions_n, measurements_n in result.all()
        ]

    async def get_client(self, user_id: int) -> Optional[User]:
        result = await self.db.execute(
            select(User)
            .where(User.id == user_id, User.role == RoleEnum.client)
            .options(selectinload(User.client_profile))
        )
        return result.scalar_one_or_none()

    async def get_client_detail(self, user_id: int) -> Optional[User]:
        """Клиент со всем агрегатом: профиль, тренировки с упражнениями, сессии, замеры."""
        result = await self.db.execute(
            select(User)
            .where(User.id == user_id, User.role == RoleEnum.client)
            .options(
                selectinload(User.client_profile)
                .selectinload(ClientProfile.workouts)
                .selectinload(Workout.exercises),
                selectinload(User.workout_sessions),
                selectinload(User.measurements),
            )
        )
        client = result.scalar_one_or_none()
        if client is not None:
            client.workout_sessions.sort(key=lambda s: s.date, reverse=True)
            client.measurements.sort(key=lambda m: m.date, reverse=True)
        return client

    async def create_client(self, user: User, profile: ClientProfile) -> User:
        """Пользователь и его профиль сохраняются одним коммитом."""
        user.client_profile = profile
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user, attribute_names=["client_profile"])
        return user

    async def update_client(self, user: User, user_fields: dict, profile_fields: dict) -> User:
        for key, value in user_fields.items():
            setattr(user, key, value)
        if profile_fields:
            if user.client_profile is None:
                user.client_profile = ClientProfile(user_id=user.id)
            for key, value in profile_fields.items():
                setattr(user.client_profile, key, value)
        await self.db.commit()
        await self.db.refresh(user, attribute_names=["client_profile"])
        return user
