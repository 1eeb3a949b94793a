from datetime import datetime
from sqlalchemy import Column, Integer, Float, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from app.core.base import Base

MEASUREMENT_METRICS = (
    "weight",
    "height",
    "chest",
    "shoulders",
    "waist",
    "hips",
    "bicep_relaxed",
    "bicep_contracted",
    "quad_relaxed",
    "quad_contracted",
    "calf_contracted",
    "body_fat_percentage",
)


class Measurement(Base):
    __tablename__ = "measurements"

    id = Column(Integer, primary_key=True)
    client_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(DateTime, default=datetime.utcnow, nullable=False)
    weight = Column(Float, nullable=True)
    height = Column(Float, nullable=True)
    chest = Column(Float, nullable=True)
    shoulders = Column(Float, nullable=True)
    waist = Column(Float, nullable=True)
    hips = Column(Float, nullable=True)
    bicep_relaxed = Column(Float, nullable=True)
    bicep_contracted = Column(Float, nullable=True)
    quad_relaxed = Column(Float, nullable=True)
    quad_contracted = Column(Float, nullable=True)
    calf_contracted = Column(Float, nullable=True)
    body_fat_percentage = Column(Float, nullable=True)
    notes = Column(String, nullable=True)

    client = relationship("User", back_populates="measurements")
