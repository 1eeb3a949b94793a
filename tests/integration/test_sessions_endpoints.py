"""
Интеграционные тесты эндпоинтов /api/v1/sessions.

Покрываемые сценарии:
- POST /sessions: клиент записывает свою сессию, тренер и чужой клиент - 403
- уведомление тренеру только о завершённой тренировке
- GET /sessions: лимит по умолчанию и явный, limit=0 - 400, имя тренировки в строках
- GET /sessions/{id}: план тренировки с упражнениями по order и имя клиента
- PUT /sessions/{id}: отзыв правит только владелец, 404 раньше 403
"""

import pytest
from datetime import datetime

from app.core.config import settings
from app.models.client_profile import ClientProfile
from app.models.notification import NotificationType
from app.models.workout import Exercise, Workout
from app.models.workout_session import WorkoutSession

pytestmark = pytest.mark.integration


def _session(session_id=7, client_id=2, **overrides) -> WorkoutSession:
    data = dict(
        id=session_id,
        client_id=client_id,
        workout_id=10,
        date=datetime(2024, 3, 5, 9, 30),
        duration=55,
        completed=True,
        rating=4,
        feedback="Good",
        exercise_data=[],
    )
    data.update(overrides)
    return WorkoutSession(**data)


def _assigned_workout(owner_id=2) -> Workout:
    workout = Workout(id=10, client_profile_id=5, name="Upper body", is_active=True)
    workout.client_profile = ClientProfile(id=5, user_id=owner_id)
    return workout


async def _echo_create(workout_session):
    workout_session.id = 7
    return workout_session


# ---------------------------------------------------------------------------
# POST /sessions
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_client_records_completed_session_and_trainer_is_notified(
        client_user_client, session_repo, workout_repo, mock_repo, notification_repo,
        client_user_fixture, trainer_fixture,
):
    workout_repo.get_by_id.return_value = _assigned_workout()
    session_repo.create.side_effect = _echo_create
    mock_repo.get_by_id.return_value = client_user_fixture
    mock_repo.get_first_trainer.return_value = trainer_fixture

    response = await client_user_client.post("/api/v1/sessions", json={
        "client_id": 2,
        "workout_id": 10,
        "completed": True,
        "rating": 5,
        "feedback": "Tough but fun",
        "exercise_data": [
            {"exerciseId": 1, "serieCompletate": 3, "pesoUtilizzato": "60kg"},
            {"exercise_id": 2, "sets": [{"reps": 8, "weight": "20kg"}]},
        ],
    })

    assert response.status_code == 201
    data = response.json()
    assert data["exercise_data"][0]["sets_completed"] == 3
    assert data["exercise_data"][1]["weight_used"] == "20kg"

    stored = session_repo.create.call_args.args[0]
    assert stored.exercise_data[0]["weight_used"] == "60kg"

    notification = notification_repo.create.call_args.args[0]
    assert notification.user_id == trainer_fixture.id
    assert notification.type == NotificationType.WORKOUT_COMPLETED
    assert "Luca Bianchi" in notification.message


@pytest.mark.asyncio
async def test_incomplete_session_does_not_notify(client_user_client, session_repo, notification_repo):
    session_repo.create.side_effect = _echo_create

    response = await client_user_client.post("/api/v1/sessions", json={"client_id": 2, "completed": False})

    assert response.status_code == 201
    notification_repo.create.assert_not_called()


@pytest.mark.asyncio
async def test_trainer_cannot_record_session_for_client(trainer_client, session_repo):
    response = await trainer_client.post("/api/v1/sessions", json={"client_id": 2, "completed": True})
    assert response.status_code == 403
    session_repo.create.assert_not_called()


@pytest.mark.asyncio
async def test_client_cannot_record_session_for_other_client(other_client_user_client, session_repo):
    response = await other_client_user_client.post("/api/v1/sessions", json={"client_id": 2, "completed": True})
    assert response.status_code == 403
    session_repo.create.assert_not_called()


@pytest.mark.asyncio
async def test_session_for_workout_of_other_client_returns_400(client_user_client, session_repo, workout_repo):
    workout_repo.get_by_id.return_value = _assigned_workout(owner_id=3)

    response = await client_user_client.post("/api/v1/sessions", json={"client_id": 2, "workout_id": 10})

    assert response.status_code == 400
    session_repo.create.assert_not_called()


@pytest.mark.asyncio
async def test_session_with_unknown_workout_returns_404(client_user_client, session_repo, workout_repo):
    workout_repo.get_by_id.return_value = None
    response = await client_user_client.post("/api/v1/sessions", json={"client_id": 2, "workout_id": 404})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_invalid_rating_returns_400(client_user_client, session_repo):
    response = await client_user_client.post("/api/v1/sessions", json={"client_id": 2, "rating": 9})
    assert response.status_code == 400
    session_repo.create.assert_not_called()


# ---------------------------------------------------------------------------
# GET /sessions
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_list_sessions_uses_default_limit(trainer_client, session_repo):
    session_repo.list_for_client.return_value = [_session()]

    response = await trainer_client.get("/api/v1/sessions", params={"client_id": 2})

    assert response.status_code == 200
    assert len(response.json()) == 1
    session_repo.list_for_client.assert_awaited_once_with(2, settings.SESSION_LIST_LIMIT)


@pytest.mark.asyncio
async def test_list_sessions_explicit_limit(client_user_client, session_repo):
    session_repo.list_for_client.return_value = []
    response = await client_user_client.get("/api/v1/sessions", params={"client_id": 2, "limit": 5})
    assert response.status_code == 200
    session_repo.list_for_client.assert_awaited_once_with(2, 5)


@pytest.mark.asyncio
async def test_list_sessions_zero_limit_returns_400(client_user_client, session_repo):
    response = await client_user_client.get("/api/v1/sessions", params={"client_id": 2, "limit": 0})
    assert response.status_code == 400
    session_repo.list_for_client.assert_not_called()


@pytest.mark.asyncio
async def test_list_sessions_include_workout_name(trainer_client, session_repo):
    with_plan = _session()
    with_plan.workout = _assigned_workout()
    without_plan = _session(session_id=8, workout_id=None)
    session_repo.list_for_client.return_value = [with_plan, without_plan]

    response = await trainer_client.get("/api/v1/sessions", params={"client_id": 2})

    assert response.status_code == 200
    assert [row["workout_name"] for row in response.json()] == ["Upper body", None]


@pytest.mark.asyncio
async def test_other_client_cannot_list_sessions(other_client_user_client, session_repo):
    response = await other_client_user_client.get("/api/v1/sessions", params={"client_id": 2})
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_get_session_normalizes_legacy_data(trainer_client, session_repo):
    session_repo.get_by_id.return_value = _session(
        exercise_data=[{"exerciseId": 3, "setsCompleted": 4, "weightUsed": "30kg", "note": "ok"}, "junk"],
    )

    response = await trainer_client.get("/api/v1/sessions/7")

    assert response.status_code == 200
    assert response.json()["exercise_data"] == [{
        "exercise_id": 3,
        "sets_completed": 4,
        "weight_used": "30kg",
        "sets": [],
        "notes": "ok",
    }]


@pytest.mark.asyncio
async def test_get_session_includes_plan_and_client_name(trainer_client, session_repo, client_user_fixture):
    workout = _assigned_workout()
    workout.exercises = [
        Exercise(id=2, workout_id=10, name="Row", sets=3, reps="10", rest="60", order=1),
        Exercise(id=1, workout_id=10, name="Bench press", sets=4, reps="8", rest="1:30", order=0),
    ]
    workout_session = _session(exercise_data=[{"exercise_id": 1, "sets_completed": 4}])
    workout_session.workout = workout
    workout_session.client = client_user_fixture
    session_repo.get_by_id.return_value = workout_session

    response = await trainer_client.get("/api/v1/sessions/7")

    assert response.status_code == 200
    data = response.json()
    assert data["client_name"] == "Luca Bianchi"
    assert data["workout"]["name"] == "Upper body"
    assert [exercise["id"] for exercise in data["workout"]["exercises"]] == [1, 2]
    assert data["workout"]["exercises"][0]["rest_seconds"] == 90
    assert data["exercise_data"][0]["exercise_id"] == data["workout"]["exercises"][0]["id"]


@pytest.mark.asyncio
async def test_get_session_of_deleted_workout_has_no_plan(client_user_client, session_repo):
    session_repo.get_by_id.return_value = _session(workout_id=None)

    response = await client_user_client.get("/api/v1/sessions/7")

    assert response.status_code == 200
    assert response.json()["workout"] is None


# ---------------------------------------------------------------------------
# PUT /sessions/{id}
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_owner_updates_feedback(client_user_client, session_repo):
    workout_session = _session()
    session_repo.get_by_id.return_value = workout_session
    session_repo.update.return_value = _session(feedback="Actually great")

    response = await client_user_client.put("/api/v1/sessions/7", json={"feedback": "Actually great"})

    assert response.status_code == 200
    assert response.json()["feedback"] == "Actually great"
    session_repo.update.assert_awaited_once_with(workout_session, {"feedback": "Actually great"})


@pytest.mark.asyncio
async def test_trainer_cannot_update_feedback(trainer_client, session_repo):
    session_repo.get_by_id.return_value = _session()
    response = await trainer_client.put("/api/v1/sessions/7", json={"feedback": "x"})
    assert response.status_code == 403
    session_repo.update.assert_not_called()


@pytest.mark.asyncio
async def test_other_client_cannot_update_feedback(other_client_user_client, session_repo):
    session_repo.get_by_id.return_value = _session()
    response = await other_client_user_client.put("/api/v1/sessions/7", json={"feedback": "x"})
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_update_missing_session_returns_404(other_client_user_client, session_repo):
    session_repo.get_by_id.return_value = None
    response = await other_client_user_client.put("/api/v1/sessions/999", json={"feedback": "x"})
    assert response.status_code == 404
