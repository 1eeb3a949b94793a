import enum
from datetime import datetime
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum, ForeignKey
from sqlalchemy.orm import relationship
from app.core.base import Base


class NotificationType(str, enum.Enum):
    WORKOUT_COMPLETED = "WORKOUT_COMPLETED"
    WORKOUT_REMINDER = "WORKOUT_REMINDER"
    APPOINTMENT_SCHEDULED = "APPOINTMENT_SCHEDULED"
    APPOINTMENT_REMINDER = "APPOINTMENT_REMINDER"
    MEASUREMENT_ADDED = "MEASUREMENT_ADDED"
    CHECKPOINT_DUE = "CHECKPOINT_DUE"
    FEEDBACK_RECEIVED = "FEEDBACK_RECEIVED"
    INACTIVITY_WARNING = "INACTIVITY_WARNING"


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(Enum(NotificationType), nullable=False)
    message = Column(String, nullable=False)
    read = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="notifications")
