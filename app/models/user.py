import enum
from sqlalchemy import Column, Integer, String, Enum, DateTime
from sqlalchemy.orm import relationship
from app.core.base import Base
from datetime import datetime


class RoleEnum(str, enum.Enum):
    trainer = "TRAINER"
    client = "CLIENT"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, nullable=False)
    password = Column(String, nullable=False)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    # Роль задаётся при создании и больше не меняется
    role = Column(Enum(RoleEnum), nullable=False, default=RoleEnum.client)
    refresh_token = Column(String, nullable=True, index=True)
    refresh_token_expires = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    client_profile = relationship(
        "ClientProfile", back_populates="user", uselist=False, cascade="all, delete"
    )
    workout_sessions = relationship("WorkoutSession", back_populates="client", cascade="all, delete")
    measurements = relationship("Measurement", back_populates="client", cascade="all, delete")
    notifications = relationship("Notification", back_populates="user", cascade="all, delete")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
