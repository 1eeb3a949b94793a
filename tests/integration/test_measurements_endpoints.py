"""
Интеграционные тесты эндпоинтов /api/v1/measurements.

Покрываемые сценарии:
- десятичные строки с запятой, пустые строки -> null
- дата по умолчанию - текущий момент
- уведомление тренеру, только если замер внёс клиент
- чужие замеры: 403, несуществующие: 404
"""

import pytest
from datetime import datetime

from app.models.measurement import Measurement
from app.models.notification import NotificationType

pytestmark = pytest.mark.integration


def _measurement(measurement_id=4, client_id=2, **overrides) -> Measurement:
    data = dict(id=measurement_id, client_id=client_id, date=datetime(2024, 3, 10), weight=80.0, waist=85.5)
    data.update(overrides)
    return Measurement(**data)


async def _echo_create(measurement):
    measurement.id = 4
    return measurement


@pytest.mark.asyncio
async def test_client_adds_measurement_with_decimal_strings(
        client_user_client, measurement_repo, mock_repo, notification_repo, client_user_fixture, trainer_fixture,
):
    mock_repo.get_by_id.return_value = client_user_fixture
    mock_repo.get_first_trainer.return_value = trainer_fixture
    measurement_repo.create.side_effect = _echo_create

    response = await client_user_client.post("/api/v1/measurements", json={
        "client_id": 2,
        "weight": "72,5",
        "chest": "101.2",
        "waist": "",
        "body_fat_percentage": 18,
    })

    assert response.status_code == 201
    data = response.json()
    assert data["weight"] == 72.5
    assert data["chest"] == 101.2
    assert data["waist"] is None
    assert data["body_fat_percentage"] == 18.0
    assert data["date"]

    notification = notification_repo.create.call_args.args[0]
    assert notification.type == NotificationType.MEASUREMENT_ADDED
    assert notification.user_id == trainer_fixture.id


@pytest.mark.asyncio
async def test_trainer_adds_measurement_without_notification(
        trainer_client, measurement_repo, mock_repo, notification_repo, client_user_fixture,
):
    mock_repo.get_by_id.return_value = client_user_fixture
    measurement_repo.create.side_effect = _echo_create

    response = await trainer_client.post("/api/v1/measurements", json={
        "client_id": 2,
        "weight": 81,
        "date": "2024-03-01T08:00:00",
    })

    assert response.status_code == 201
    assert response.json()["date"].startswith("2024-03-01")
    notification_repo.create.assert_not_called()


@pytest.mark.asyncio
async def test_measurement_for_unknown_client_returns_404(trainer_client, measurement_repo, mock_repo):
    mock_repo.get_by_id.return_value = None
    response = await trainer_client.post("/api/v1/measurements", json={"client_id": 99, "weight": 70})
    assert response.status_code == 404
    measurement_repo.create.assert_not_called()


@pytest.mark.asyncio
async def test_non_numeric_value_returns_400(client_user_client, measurement_repo):
    response = await client_user_client.post("/api/v1/measurements", json={"client_id": 2, "weight": "heavy"})
    assert response.status_code == 400
    measurement_repo.create.assert_not_called()


@pytest.mark.asyncio
async def test_client_cannot_add_measurement_for_other_client(other_client_user_client, measurement_repo):
    response = await other_client_user_client.post("/api/v1/measurements", json={"client_id": 2, "weight": 70})
    assert response.status_code == 403
    measurement_repo.create.assert_not_called()


@pytest.mark.asyncio
async def test_list_measurements(trainer_client, measurement_repo):
    measurement_repo.list_for_client.return_value = [_measurement(4), _measurement(3)]
    response = await trainer_client.get("/api/v1/measurements", params={"client_id": 2})
    assert response.status_code == 200
    assert [m["id"] for m in response.json()] == [4, 3]


@pytest.mark.asyncio
async def test_update_measurement_partial(client_user_client, measurement_repo):
    measurement = _measurement()
    measurement_repo.get_by_id.return_value = measurement
    measurement_repo.update.return_value = _measurement(weight=79.3)

    response = await client_user_client.put("/api/v1/measurements/4", json={"weight": "79,3"})

    assert response.status_code == 200
    assert response.json()["weight"] == 79.3
    measurement_repo.update.assert_awaited_once_with(measurement, {"weight": 79.3})


@pytest.mark.asyncio
async def test_other_client_cannot_delete_measurement(other_client_user_client, measurement_repo):
    measurement_repo.get_by_id.return_value = _measurement()
    response = await other_client_user_client.delete("/api/v1/measurements/4")
    assert response.status_code == 403
    measurement_repo.delete.assert_not_called()


@pytest.mark.asyncio
async def test_delete_missing_measurement_returns_404(trainer_client, measurement_repo):
    measurement_repo.get_by_id.return_value = None
    response = await trainer_client.delete("/api/v1/measurements/404")
    assert response.status_code == 404
