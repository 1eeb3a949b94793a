from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List
from datetime import date, datetime

from app.schemas.workout import WorkoutResponse
from app.schemas.session import SessionResponse
from app.schemas.measurement import MeasurementResponse


class ClientProfileRead(BaseModel):
    id: int
    goals: Optional[str] = None
    notes: Optional[str] = None
    card_expiry: Optional[date] = None
    start_date: Optional[date] = None

    class Config:
        from_attributes = True


class ClientCreate(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    phone: Optional[str] = None
    goals: Optional[str] = None
    notes: Optional[str] = None


class ClientUpdate(BaseModel):
    """Частичное обновление: учитываются только переданные поля."""
    first_name: Optional[str] = Field(default=None, min_length=1)
    last_name: Optional[str] = Field(default=None, min_length=1)
    phone: Optional[str] = None
    goals: Optional[str] = None
    notes: Optional[str] = None
    card_expiry: Optional[date] = None


class ClientRead(BaseModel):
    id: int
    email: EmailStr
    first_name: str
    last_name: str
    phone: Optional[str] = None
    created_at: Optional[datetime] = None
    client_profile: Optional[ClientProfileRead] = None

    class Config:
        from_attributes = True


class ClientSummary(ClientRead):
    last_session_date: Optional[datetime] = None
    session_count: int = 0
    measurement_count: int = 0


class ClientProfileDetail(ClientProfileRead):
    workouts: List[WorkoutResponse] = []


class ClientDetail(ClientRead):
    client_profile: Optional[ClientProfileDetail] = None
    workout_sessions: List[SessionResponse] = []
    measurements: List[MeasurementResponse] = []
