"""
Нормализация exercise_data сессии.

В базе лежат два исторических формата записи по упражнению:
- текущий: {"exerciseId": .., "sets": [{"reps": .., "weight": ..}], "notes": ..}
- старый (из первой версии рекордера): {"exerciseId": .., "serieCompletate": ..,
  "pesoUtilizzato": .., "note": ..}, он же setsCompleted/weightUsed.

Всё, что читает exercise_data, проходит через normalize_exercise_data() и дальше
работает только с RecordedExercise.
"""

import logging
from typing import Any, Iterable, List, Optional, Union

from pydantic import BaseModel

logger = logging.getLogger(__name__)

_ID_KEYS = ("exercise_id", "exerciseId")
_SETS_COMPLETED_KEYS = ("sets_completed", "setsCompleted", "serieCompletate")
_WEIGHT_USED_KEYS = ("weight_used", "weightUsed", "pesoUtilizzato")
_NOTES_KEYS = ("notes", "note")


class RecordedSet(BaseModel):
    reps: Optional[int] = None
    weight: Optional[str] = None


class RecordedExercise(BaseModel):
    exercise_id: Union[int, str]
    sets_completed: Optional[int] = None
    weight_used: Optional[str] = None
    sets: List[RecordedSet] = []
    notes: Optional[str] = None


def _first(entry: dict, keys: Iterable[str]) -> Any:
    for key in keys:
        if entry.get(key) is not None:
            return entry[key]
    return None


def _as_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value)
    return text or None


def normalize_entry(entry: Any) -> Optional[RecordedExercise]:
    if isinstance(entry, RecordedExercise):
        return entry
    if isinstance(entry, BaseModel):
        entry = entry.model_dump()
    if not isinstance(entry, dict):
        return None

    exercise_id = _first(entry, _ID_KEYS)
    if exercise_id is None:
        return None

    raw_sets = entry.get("sets")
    sets: List[RecordedSet] = []
    if isinstance(raw_sets, list):
        for item in raw_sets:
            if isinstance(item, dict):
                sets.append(RecordedSet(reps=_as_int(item.get("reps")), weight=_as_text(item.get("weight"))))

    sets_completed = _as_int(_first(entry, _SETS_COMPLETED_KEYS))
    weight_used = _as_text(_first(entry, _WEIGHT_USED_KEYS))
    if sets:
        if sets_completed is None:
            sets_completed = len(sets)
        if weight_used is None:
            weight_used = sets[-1].weight

    return RecordedExercise(
        exercise_id=exercise_id,
        sets_completed=sets_completed,
        weight_used=weight_used,
        sets=sets,
        notes=_as_text(_first(entry, _NOTES_KEYS)),
    )


def normalize_exercise_data(raw: Any) -> List[RecordedExercise]:
    """Привести сохранённый список к каноническому виду, мусорные записи отбрасываются."""
    if not raw:
        return []
    if not isinstance(raw, list):
        logger.warning("exercise_data is not a list: %r", type(raw).__name__)
        return []

    result = []
    for entry in raw:
        normalized = normalize_entry(entry)
        if normalized is None:
            logger.warning("Skipping malformed exercise_data entry: %r", entry)
            continue
        result.append(normalized)
    return result


def dump_exercise_data(entries: Iterable[Any]) -> List[dict]:
    """Канонический JSON для записи в WorkoutSession.exercise_data."""
    return [
        normalized.model_dump()
        for normalized in (normalize_entry(entry) for entry in entries)
        if normalized is not None
    ]
