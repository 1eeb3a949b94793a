from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import datetime


def _to_float(value):
    """Десятичная строка ("72.5", "72,5") или число -> float, пустое -> None."""
    if value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value).strip().replace(",", ".")
    if not text:
        return None
    return float(text)


class MeasurementFields(BaseModel):
    weight: Optional[float] = None
    height: Optional[float] = None
    chest: Optional[float] = None
    shoulders: Optional[float] = None
    waist: Optional[float] = None
    hips: Optional[float] = None
    bicep_relaxed: Optional[float] = None
    bicep_contracted: Optional[float] = None
    quad_relaxed: Optional[float] = None
    quad_contracted: Optional[float] = None
    calf_contracted: Optional[float] = None
    body_fat_percentage: Optional[float] = None
    notes: Optional[str] = None

    @field_validator(
        "weight", "height", "chest", "shoulders", "waist", "hips",
        "bicep_relaxed", "bicep_contracted", "quad_relaxed", "quad_contracted",
        "calf_contracted", "body_fat_percentage",
        mode="before",
    )
    @classmethod
    def _parse_decimal(cls, value):
        return _to_float(value)


class MeasurementCreate(MeasurementFields):
    client_id: int
    date: Optional[datetime] = None


class MeasurementUpdate(MeasurementFields):
    date: Optional[datetime] = None


class MeasurementResponse(MeasurementFields):
    id: int
    client_id: int
    date: datetime

    class Config:
        from_attributes = True
