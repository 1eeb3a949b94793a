from datetime import datetime
from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, Boolean, Index
from sqlalchemy.orm import relationship
from app.core.base import Base

class Workout(Base):
    __tablename__ = "workouts"

    id = Column(Integer, primary_key=True)
    client_profile_id = Column(
        Integer, ForeignKey("client_profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    expiry_date = Column(Date, nullable=True)
    is_active = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    client_profile = relationship("ClientProfile", back_populates="workouts")
    exercises = relationship(
        "Exercise",
        back_populates="workout",
        cascade="all, delete-orphan",
        order_by="Exercise.order",
    )
    sessions = relationship("WorkoutSession", back_populates="workout", passive_deletes=True)

    __table_args__ = (
        # Не больше одной активной тренировки на клиента
        Index(
            "uq_workouts_one_active_per_client",
            "client_profile_id",
            unique=True,
            postgresql_where=is_active.is_(True),
            sqlite_where=is_active.is_(True),
        ),
    )

class Exercise(Base):
    __tablename__ = "exercises"

    id = Column(Integer, primary_key=True)
    workout_id = Column(Integer, ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    sets = Column(Integer, default=3, nullable=False)
    reps = Column(String, nullable=False)  # "8-12" тоже допустимо
    weight = Column(String, nullable=True)
    rest = Column(String, nullable=True)   # свободный текст, см. duration_parser
    notes = Column(String, nullable=True)
    video_url = Column(String, nullable=True)
    order = Column(Integer, nullable=False)

    workout = relationship("Workout", back_populates="exercises")
