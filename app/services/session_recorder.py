"""
Пошаговая запись тренировки клиентом.

RECORDING(exercise_index, collected) -> SUMMARY(rating, feedback) -> SAVED.
Рекордер держит таймер отдыха текущего упражнения и перезагружает его при
каждой смене упражнения. Сохранение делегируется сервису сессий, который
проверяет доступ и создаёт уведомление тренеру.
"""

import enum
import logging
from typing import Any, List, Optional, Sequence

from pydantic import BaseModel, Field

from app.core.errors import InvalidTransitionError, ValidationError
from app.schemas.session import SessionCreate
from app.services.access_policy import Action, Actor, Resource, ensure_allowed
from app.services.rest_timer import RestTimer

logger = logging.getLogger(__name__)


class RecorderState(str, enum.Enum):
    RECORDING = "recording"
    SUMMARY = "summary"
    SAVED = "saved"


class ExerciseEntry(BaseModel):
    """Данные, которые клиент вводит по одному упражнению."""
    exercise_id: int
    sets_completed: int = Field(default=0, ge=0)
    weight_used: Optional[str] = None
    notes: str = ""


class SessionRecorder:
    def __init__(
        self,
        exercises: Sequence[Any],
        client_id: int,
        workout_id: Optional[int] = None,
        timer: Optional[RestTimer] = None,
    ):
        if not exercises:
            raise ValidationError("Workout has no exercises to record")
        self.exercises = list(exercises)
        self.client_id = client_id
        self.workout_id = workout_id
        self.timer = timer or RestTimer()
        self.state = RecorderState.RECORDING
        self.exercise_index = 0
        self.collected: List[ExerciseEntry] = []
        self.current_entry: ExerciseEntry = self._default_entry(0)
        self.rating = 0
        self.feedback = ""
        self.last_error: Optional[Exception] = None
        self.saved_session = None
        self.timer.load(self.current_exercise.rest)

    @property
    def current_exercise(self):
        return self.exercises[self.exercise_index]

    @property
    def progress(self) -> float:
        """Доля пройденных упражнений, 0..1."""
        if self.state != RecorderState.RECORDING:
            return 1.0
        return (self.exercise_index + 1) / len(self.exercises)

    def _default_entry(self, index: int) -> ExerciseEntry:
        exercise = self.exercises[index]
        return ExerciseEntry(
            exercise_id=exercise.id,
            sets_completed=exercise.sets,
            weight_used=exercise.weight,
            notes="",
        )

    def _require(self, state: RecorderState) -> None:
        if self.state != state:
            raise InvalidTransitionError(f"Recorder is {self.state.value}, expected {state.value}")

    def _move_to(self, index: int) -> None:
        self.exercise_index = index
        self.timer.load(self.current_exercise.rest)

    def update_current(self, **fields) -> ExerciseEntry:
        self._require(RecorderState.RECORDING)
        self.current_entry = self.current_entry.model_copy(update=fields)
        return self.current_entry

    def submit_current_exercise(self, entry: Optional[ExerciseEntry] = None) -> RecorderState:
        self._require(RecorderState.RECORDING)
        entry = entry or self.current_entry
        if entry.exercise_id != self.current_exercise.id:
            entry = entry.model_copy(update={"exercise_id": self.current_exercise.id})
        self.collected.append(entry)

        if self.exercise_index == len(self.exercises) - 1:
            self.timer.close()
            self.state = RecorderState.SUMMARY
            self.rating = 0
            self.feedback = ""
            return self.state

        self._move_to(self.exercise_index + 1)
        self.current_entry = self._default_entry(self.exercise_index)
        return self.state

    def go_to_previous(self) -> None:
        self._require(RecorderState.RECORDING)
        if self.exercise_index == 0:
            raise InvalidTransitionError("Already at the first exercise")
        self._move_to(self.exercise_index - 1)
        self.current_entry = self.collected.pop()

    def edit_again(self) -> None:
        """Из сводки заново с первого упражнения, записанное отбрасывается."""
        self._require(RecorderState.SUMMARY)
        self.state = RecorderState.RECORDING
        self.collected = []
        self._move_to(0)
        self.current_entry = self._default_entry(0)

    def set_rating(self, rating: int) -> None:
        self._require(RecorderState.SUMMARY)
        if not 0 <= rating <= 5:
            raise ValidationError("Rating must be between 0 and 5")
        self.rating = rating

    def set_feedback(self, feedback: str) -> None:
        self._require(RecorderState.SUMMARY)
        self.feedback = feedback or ""

    @property
    def can_finalize(self) -> bool:
        return self.state == RecorderState.SUMMARY and self.rating >= 1

    def build_payload(self) -> SessionCreate:
        return SessionCreate(
            client_id=self.client_id,
            workout_id=self.workout_id,
            completed=True,
            rating=self.rating,
            feedback=self.feedback or None,
            exercise_data=[entry.model_dump() for entry in self.collected],
        )

    async def finalize(self, actor: Actor, sessions):
        """
        Сохранить сессию через sessions.create_session(actor, payload).

        Пока сохранение не прошло, рекордер остаётся в SUMMARY: ошибка
        запоминается в last_error и пробрасывается вызывающему.
        """
        self._require(RecorderState.SUMMARY)
        if self.rating < 1:
            raise ValidationError("Choose a rating before saving the session")
        ensure_allowed(actor, Action.CREATE_SESSION, Resource(client_id=self.client_id))

        self.last_error = None
        try:
            saved = await sessions.create_session(actor, self.build_payload())
        except Exception as exc:
            self.last_error = exc
            logger.warning("Saving recorded session for client %s failed: %s", self.client_id, exc)
            raise

        self.saved_session = saved
        self.state = RecorderState.SAVED
        return saved
