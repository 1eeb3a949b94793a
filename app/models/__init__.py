from app.models.user import User, RoleEnum
from app.models.client_profile import ClientProfile
from app.models.workout import Workout, Exercise
from app.models.workout_session import WorkoutSession
from app.models.measurement import Measurement
from app.models.notification import Notification, NotificationType

__all__ = [
    "User", "RoleEnum",
    "ClientProfile",
    "Workout", "Exercise",
    "WorkoutSession",
    "Measurement",
    "Notification", "NotificationType",
]
