from datetime import date
from sqlalchemy import Column, Integer, String, Date, ForeignKey
from sqlalchemy.orm import relationship
from app.core.base import Base


class ClientProfile(Base):
    __tablename__ = "client_profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    goals = Column(String, nullable=True)
    notes = Column(String, nullable=True)
    card_expiry = Column(Date, nullable=True)
    start_date = Column(Date, default=date.today, nullable=False)

    user = relationship("User", back_populates="client_profile")
    workouts = relationship(
        "Workout",
        back_populates="client_profile",
        cascade="all, delete-orphan",
        order_by="Workout.created_at.desc()",
    )
