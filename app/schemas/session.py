from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Any, Dict
from datetime import datetime

from app.schemas.workout import WorkoutResponse
from app.services.exercise_data import RecordedExercise, normalize_exercise_data


class SessionCreate(BaseModel):
    client_id: int
    workout_id: Optional[int] = None
    date: Optional[datetime] = None
    duration: Optional[int] = Field(default=None, ge=0)
    completed: bool = False
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    feedback: Optional[str] = None
    exercise_data: List[Dict[str, Any]] = []


class SessionUpdate(BaseModel):
    feedback: Optional[str] = None
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    exercise_data: Optional[List[Dict[str, Any]]] = None


class SessionResponse(BaseModel):
    id: int
    client_id: int
    workout_id: Optional[int] = None
    date: datetime
    duration: Optional[int] = None
    completed: bool
    rating: Optional[int] = None
    feedback: Optional[str] = None
    exercise_data: List[RecordedExercise] = []

    @field_validator("exercise_data", mode="before")
    @classmethod
    def _normalize(cls, value):
        # Старые и новые форматы приводятся к одному виду
        return normalize_exercise_data(value)

    class Config:
        from_attributes = True


class SessionListItem(SessionResponse):
    workout_name: Optional[str] = None


class SessionDetail(SessionResponse):
    """Сессия с планом тренировки: exercise_data сопоставляется с упражнениями по exercise_id."""
    client_name: Optional[str] = None
    workout: Optional[WorkoutResponse] = None
