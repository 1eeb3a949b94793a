import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from app.core.errors import ActivationConflictError, NotFound, ValidationError
from app.models.user import RoleEnum
from app.models.workout import Workout, Exercise
from app.repositories.user_repository import UserRepository
from app.repositories.workout_repository import WorkoutRepository
from app.schemas.workout import ExerciseInput, WorkoutCreate, WorkoutUpdate
from app.services.access_policy import Action, Actor, Resource, ensure_allowed
from app.services.workout_activation import WorkoutActivationRule

logger = logging.getLogger(__name__)


def build_exercises(items: List[ExerciseInput]) -> List[Exercise]:
    """Порядок упражнений всегда пересчитывается как 1..N."""
    return [
        Exercise(
            name=item.name,
            sets=item.sets,
            reps=item.reps,
            weight=item.weight,
            rest=item.rest,
            notes=item.notes,
            video_url=item.video_url,
            order=index,
        )
        for index, item in enumerate(items, start=1)
    ]


def workout_resource(workout: Optional[Workout]) -> Resource:
    if workout is None:
        return Resource.missing()
    client_id = workout.client_profile.user_id if workout.client_profile is not None else None
    return Resource(client_id=client_id)


class WorkoutService:
    def __init__(self, workouts: WorkoutRepository, users: UserRepository):
        self.workouts = workouts
        self.users = users
        self.activation = WorkoutActivationRule(workouts)

    async def list_workouts(self, actor: Actor, client_id: int) -> List[Workout]:
        ensure_allowed(actor, Action.LIST_WORKOUTS, Resource(client_id=client_id))
        profile = await self.workouts.get_profile_by_user_id(client_id)
        if profile is None:
            return []
        return await self.workouts.list_for_profile(profile.id)

    async def get_workout(self, actor: Actor, workout_id: int) -> Workout:
        workout = await self.workouts.get_by_id(workout_id)
        ensure_allowed(actor, Action.READ_WORKOUT, workout_resource(workout))
        return workout

    async def create_workout(self, actor: Actor, payload: WorkoutCreate) -> Workout:
        ensure_allowed(actor, Action.CREATE_WORKOUT)
        if not payload.exercises:
            raise ValidationError("A workout needs at least one exercise")

        client = await self.users.get_by_id(payload.client_id)
        if client is None or client.role != RoleEnum.client:
            raise NotFound("Client not found")

        try:
            profile = await self.workouts.get_or_create_profile(client.id)
            workout = await self.workouts.add_workout(
                Workout(
                    client_profile_id=profile.id,
                    name=payload.name,
                    description=payload.description,
                    expiry_date=payload.expiry_date,
                    is_active=False,
                ),
                build_exercises(payload.exercises),
            )
            await self.activation.apply(profile.id, workout, payload.is_active)
            await self.workouts.commit()
        except SQLAlchemyError as exc:
            await self.workouts.rollback()
            logger.error("Creating workout for client %s failed: %s", client.id, exc)
            if payload.is_active:
                raise ActivationConflictError("Could not activate the new workout") from exc
            raise

        logger.info("Workout %s created for client %s", workout.id, client.id)
        return await self.workouts.reload(workout.id)

    async def update_workout(self, actor: Actor, workout_id: int, payload: WorkoutUpdate) -> Workout:
        workout = await self.workouts.get_by_id(workout_id)
        ensure_allowed(actor, Action.UPDATE_WORKOUT, workout_resource(workout))

        changes = payload.model_dump(exclude_unset=True, exclude={"exercises", "is_active"})
        if "name" in changes and not changes["name"]:
            raise ValidationError("Workout name cannot be empty")
        if payload.exercises is not None and not payload.exercises:
            raise ValidationError("A workout needs at least one exercise")

        try:
            if changes:
                await self.workouts.update_fields(workout, changes)
            if payload.is_active:
                await self.activation.apply(workout.client_profile_id, workout, True)
            elif payload.is_active is False:
                await self.workouts.set_active(workout, False)
            if payload.exercises is not None:
                await self.workouts.replace_exercises(workout, build_exercises(payload.exercises))
            await self.workouts.commit()
        except SQLAlchemyError as exc:
            # Ни активация, ни замена упражнений не должны остаться применёнными наполовину
            await self.workouts.rollback()
            logger.error("Updating workout %s failed: %s", workout_id, exc)
            if payload.is_active:
                raise ActivationConflictError("Could not activate the workout") from exc
            raise

        return await self.workouts.reload(workout_id)

    async def delete_workout(self, actor: Actor, workout_id: int) -> None:
        workout = await self.workouts.get_by_id(workout_id)
        ensure_allowed(actor, Action.DELETE_WORKOUT, workout_resource(workout))
        await self.workouts.delete(workout)
        logger.info("Workout %s deleted", workout_id)
