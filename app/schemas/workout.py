from pydantic import BaseModel, Field, computed_field, field_validator
from typing import Optional, List
from datetime import date, datetime

from app.services.duration_parser import parse_rest


class ExerciseInput(BaseModel):
    name: str = Field(min_length=1)
    sets: int = Field(default=3, ge=1)
    reps: str = Field(min_length=1)
    weight: Optional[str] = None
    rest: Optional[str] = None
    notes: Optional[str] = None
    video_url: Optional[str] = None


class WorkoutCreate(BaseModel):
    client_id: int
    name: str = Field(min_length=1)
    description: Optional[str] = None
    expiry_date: Optional[date] = None
    is_active: bool = False
    exercises: List[ExerciseInput]


class WorkoutUpdate(BaseModel):
    """exercises=None оставляет список упражнений как есть, список заменяет целиком."""
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    expiry_date: Optional[date] = None
    is_active: Optional[bool] = None
    exercises: Optional[List[ExerciseInput]] = None


class ExerciseResponse(BaseModel):
    id: int
    name: str
    sets: int
    reps: str
    weight: Optional[str] = None
    rest: Optional[str] = None
    notes: Optional[str] = None
    video_url: Optional[str] = None
    order: int

    @computed_field
    @property
    def rest_seconds(self) -> Optional[int]:
        # None => таймер отдыха в UI не показывается
        return parse_rest(self.rest)

    class Config:
        from_attributes = True


class WorkoutResponse(BaseModel):
    id: int
    client_profile_id: int
    name: str
    description: Optional[str] = None
    expiry_date: Optional[date] = None
    is_active: bool
    created_at: Optional[datetime] = None
    exercises: List[ExerciseResponse] = []

    @field_validator("exercises")
    @classmethod
    def _by_order(cls, value):
        return sorted(value, key=lambda exercise: exercise.order)

    class Config:
        from_attributes = True


class ExerciseTemplate(BaseModel):
    name: str
    category: str
    sets: int
    reps: str
    weight: Optional[str] = None
    rest: Optional[str] = None
    notes: Optional[str] = None
