from typing import List, Optional

from app.schemas.workout import ExerciseTemplate

CATEGORIES = ("chest", "back", "legs", "shoulders", "arms", "core", "cardio")

EXERCISE_LIBRARY: List[ExerciseTemplate] = [
    # CHEST
    ExerciseTemplate(name="Barbell bench press", category="chest", sets=3, reps="8-12", weight="60kg",
                     rest="90s", notes="Keep elbows at about 45 degrees from the torso"),
    ExerciseTemplate(name="Incline dumbbell press", category="chest", sets=3, reps="10-12", weight="2x20kg",
                     rest="90s"),
    ExerciseTemplate(name="Cable fly", category="chest", sets=3, reps="12-15", weight="15kg", rest="60s"),
    ExerciseTemplate(name="Push-up", category="chest", sets=3, reps="10-20", weight="Bodyweight", rest="60s"),
    # BACK
    ExerciseTemplate(name="Pull-up", category="back", sets=3, reps="6-10", weight="Bodyweight",
                     rest="120s", notes="Overhand grip, shoulder width"),
    ExerciseTemplate(name="Lat pulldown", category="back", sets=3, reps="10-12", weight="40kg", rest="90s"),
    ExerciseTemplate(name="Barbell row", category="back", sets=3, reps="8-10", weight="50kg", rest="90s"),
    ExerciseTemplate(name="Seated cable row", category="back", sets=3, reps="12", weight="35kg", rest="60s"),
    # LEGS
    ExerciseTemplate(name="Squat", category="legs", sets=4, reps="8-12", weight="70kg",
                     rest="2m", notes="Go down to parallel or 90 degrees"),
    ExerciseTemplate(name="Leg press", category="legs", sets=3, reps="12-15", weight="100kg", rest="90s"),
    ExerciseTemplate(name="Lunge", category="legs", sets=3, reps="10 per leg", weight="2x15kg", rest="60s"),
    ExerciseTemplate(name="Leg curl", category="legs", sets=3, reps="12", weight="30kg", rest="60s"),
    ExerciseTemplate(name="Leg extension", category="legs", sets=3, reps="12-15", weight="35kg", rest="60s"),
    ExerciseTemplate(name="Calf raise", category="legs", sets=3, reps="15-20", weight="50kg", rest="45s"),
    # SHOULDERS
    ExerciseTemplate(name="Military press", category="shoulders", sets=3, reps="8-12", weight="40kg", rest="90s"),
    ExerciseTemplate(name="Lateral raise", category="shoulders", sets=3, reps="12-15", weight="2x10kg", rest="60s"),
    ExerciseTemplate(name="Face pull", category="shoulders", sets=3, reps="15", weight="20kg",
                     rest="60s", notes="Great for rear delts"),
    # ARMS
    ExerciseTemplate(name="Barbell curl", category="arms", sets=3, reps="10-12", weight="25kg", rest="60s"),
    ExerciseTemplate(name="Hammer curl", category="arms", sets=3, reps="12", weight="2x12kg", rest="60s"),
    ExerciseTemplate(name="Triceps pushdown", category="arms", sets=3, reps="12-15", weight="25kg", rest="60s"),
    # CORE
    ExerciseTemplate(name="Plank", category="core", sets=3, reps="45s", weight="Bodyweight", rest="1:00"),
    ExerciseTemplate(name="Hanging leg raise", category="core", sets=3, reps="10-15", weight="Bodyweight",
                     rest="60s"),
    # CARDIO
    ExerciseTemplate(name="Rowing machine", category="cardio", sets=1, reps="10 minutes", rest="2 min"),
    ExerciseTemplate(name="Jump rope", category="cardio", sets=5, reps="1 minute", rest="30s"),
]


def get_exercise_library(category: Optional[str] = None) -> List[ExerciseTemplate]:
    if category is None:
        return list(EXERCISE_LIBRARY)
    return [item for item in EXERCISE_LIBRARY if item.category == category]
