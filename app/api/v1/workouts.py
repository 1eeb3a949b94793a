from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from app.core.dependencies import get_current_actor, get_workout_service
from app.core.rbac import require_trainer
from app.models.user import User
from app.schemas.workout import ExerciseTemplate, WorkoutCreate, WorkoutResponse, WorkoutUpdate
from app.services.access_policy import Actor
from app.services.exercise_library import get_exercise_library
from app.services.workout_service import WorkoutService

router = APIRouter(prefix="/workouts", tags=["workouts"])


@router.get("", response_model=List[WorkoutResponse])
async def list_workouts(
        client_id: int = Query(...),
        actor: Actor = Depends(get_current_actor),
        service: WorkoutService = Depends(get_workout_service),
):
    """Программы клиента, новые сверху"""
    return await service.list_workouts(actor, client_id)


@router.get("/library", response_model=List[ExerciseTemplate])
async def exercise_library(
        category: Optional[str] = None,
        current_user: User = Depends(require_trainer),
):
    """Готовые шаблоны упражнений для конструктора программ"""
    return get_exercise_library(category)


@router.get("/{workout_id}", response_model=WorkoutResponse)
async def get_workout(
        workout_id: int,
        actor: Actor = Depends(get_current_actor),
        service: WorkoutService = Depends(get_workout_service),
):
    return await service.get_workout(actor, workout_id)


@router.post("", response_model=WorkoutResponse, status_code=status.HTTP_201_CREATED)
async def create_workout(
        payload: WorkoutCreate,
        actor: Actor = Depends(get_current_actor),
        service: WorkoutService = Depends(get_workout_service),
):
    """Создание программы; профиль клиента создаётся при первой программе"""
    return await service.create_workout(actor, payload)


@router.put("/{workout_id}", response_model=WorkoutResponse)
async def update_workout(
        workout_id: int,
        payload: WorkoutUpdate,
        actor: Actor = Depends(get_current_actor),
        service: WorkoutService = Depends(get_workout_service),
):
    return await service.update_workout(actor, workout_id, payload)


@router.delete("/{workout_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_workout(
        workout_id: int,
        actor: Actor = Depends(get_current_actor),
        service: WorkoutService = Depends(get_workout_service),
):
    await service.delete_workout(actor, workout_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
