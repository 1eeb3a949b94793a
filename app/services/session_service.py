import logging
from datetime import datetime
from typing import List, Optional

from app.core.config import settings
from app.core.errors import NotFound, ValidationError
from app.models.workout_session import WorkoutSession
from app.repositories.session_repository import SessionRepository
from app.repositories.user_repository import UserRepository
from app.repositories.workout_repository import WorkoutRepository
from app.schemas.session import SessionCreate, SessionUpdate
from app.services.access_policy import Action, Actor, Resource, ensure_allowed
from app.services.exercise_data import dump_exercise_data
from app.services.notification_service import NotificationService

logger = logging.getLogger(__name__)

MAX_SESSION_LIST_LIMIT = 200


def session_resource(workout_session: Optional[WorkoutSession]) -> Resource:
    if workout_session is None:
        return Resource.missing()
    return Resource(client_id=workout_session.client_id)


class SessionService:
    def __init__(
        self,
        sessions: SessionRepository,
        workouts: WorkoutRepository,
        users: UserRepository,
        notifications: NotificationService,
    ):
        self.sessions = sessions
        self.workouts = workouts
        self.users = users
        self.notifications = notifications

    async def create_session(self, actor: Actor, payload: SessionCreate) -> WorkoutSession:
        # Сессию записывает только сам клиент, тренер за клиента не может
        ensure_allowed(actor, Action.CREATE_SESSION, Resource(client_id=payload.client_id))

        if payload.workout_id is not None:
            workout = await self.workouts.get_by_id(payload.workout_id)
            if workout is None:
                raise NotFound("Workout not found")
            if workout.client_profile is not None and workout.client_profile.user_id != payload.client_id:
                raise ValidationError("Workout is not assigned to this client")

        workout_session = await self.sessions.create(
            WorkoutSession(
                client_id=payload.client_id,
                workout_id=payload.workout_id,
                date=payload.date or datetime.utcnow(),
                duration=payload.duration,
                completed=payload.completed,
                rating=payload.rating,
                feedback=payload.feedback,
                exercise_data=dump_exercise_data(payload.exercise_data),
            )
        )
        logger.info("Session %s recorded by client %s", workout_session.id, payload.client_id)

        if workout_session.completed:
            client = await self.users.get_by_id(payload.client_id)
            if client is not None:
                await self.notifications.workout_completed(client)
        return workout_session

    async def list_sessions(self, actor: Actor, client_id: int, limit: Optional[int] = None) -> List[WorkoutSession]:
        ensure_allowed(actor, Action.LIST_SESSIONS, Resource(client_id=client_id))
        if limit is None:
            limit = settings.SESSION_LIST_LIMIT
        if limit < 1:
            raise ValidationError("limit must be positive")
        return await self.sessions.list_for_client(client_id, min(limit, MAX_SESSION_LIST_LIMIT))

    async def get_session(self, actor: Actor, session_id: int) -> WorkoutSession:
        workout_session = await self.sessions.get_by_id(session_id)
        ensure_allowed(actor, Action.READ_SESSION, session_resource(workout_session))
        return workout_session

    async def update_session(self, actor: Actor, session_id: int, payload: SessionUpdate) -> WorkoutSession:
        workout_session = await self.sessions.get_by_id(session_id)
        ensure_allowed(actor, Action.UPDATE_SESSION, session_resource(workout_session))

        fields = payload.model_dump(exclude_unset=True)
        if "exercise_data" in fields:
            fields["exercise_data"] = dump_exercise_data(fields["exercise_data"] or [])
        if not fields:
            return workout_session
        return await self.sessions.update(workout_session, fields)
