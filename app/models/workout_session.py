from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Boolean, JSON
from sqlalchemy.orm import relationship
from app.core.base import Base


class WorkoutSession(Base):
    __tablename__ = "workout_sessions"

    id = Column(Integer, primary_key=True)
    client_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # История сессий переживает удаление тренировки
    workout_id = Column(Integer, ForeignKey("workouts.id", ondelete="SET NULL"), nullable=True, index=True)
    date = Column(DateTime, default=datetime.utcnow, nullable=False)
    duration = Column(Integer, nullable=True)  # минуты
    completed = Column(Boolean, default=False, nullable=False)
    rating = Column(Integer, nullable=True)
    feedback = Column(String, nullable=True)
    exercise_data = Column(JSON, nullable=True)

    client = relationship("User", back_populates="workout_sessions")
    workout = relationship("Workout", back_populates="sessions")

    # Связи должны быть загружены заранее (selectinload в SessionRepository)
    @property
    def workout_name(self):
        return self.workout.name if self.workout is not None else None

    @property
    def client_name(self):
        return self.client.full_name if self.client is not None else None
