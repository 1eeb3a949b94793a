import logging
from datetime import datetime
from typing import List, Optional

from app.core.errors import NotFound
from app.models.measurement import Measurement, MEASUREMENT_METRICS
from app.models.user import RoleEnum
from app.repositories.measurement_repository import MeasurementRepository
from app.repositories.user_repository import UserRepository
from app.schemas.measurement import MeasurementCreate, MeasurementUpdate
from app.services.access_policy import Action, Actor, ClientActor, Resource, ensure_allowed
from app.services.notification_service import NotificationService

logger = logging.getLogger(__name__)


def measurement_resource(measurement: Optional[Measurement]) -> Resource:
    if measurement is None:
        return Resource.missing()
    return Resource(client_id=measurement.client_id)


class MeasurementService:
    def __init__(
        self,
        measurements: MeasurementRepository,
        users: UserRepository,
        notifications: NotificationService,
    ):
        self.measurements = measurements
        self.users = users
        self.notifications = notifications

    async def list_measurements(self, actor: Actor, client_id: int) -> List[Measurement]:
        ensure_allowed(actor, Action.LIST_MEASUREMENTS, Resource(client_id=client_id))
        return await self.measurements.list_for_client(client_id)

    async def create_measurement(self, actor: Actor, payload: MeasurementCreate) -> Measurement:
        ensure_allowed(actor, Action.CREATE_MEASUREMENT, Resource(client_id=payload.client_id))

        client = await self.users.get_by_id(payload.client_id)
        if client is None or client.role != RoleEnum.client:
            raise NotFound("Client not found")

        values = {name: getattr(payload, name) for name in MEASUREMENT_METRICS}
        measurement = await self.measurements.create(
            Measurement(
                client_id=payload.client_id,
                date=payload.date or datetime.utcnow(),
                notes=payload.notes,
                **values,
            )
        )

        # Тренеру сообщаем только о замерах, которые внёс сам клиент
        if isinstance(actor, ClientActor):
            await self.notifications.measurement_added(client)
        return measurement

    async def get_measurement(self, actor: Actor, measurement_id: int) -> Measurement:
        measurement = await self.measurements.get_by_id(measurement_id)
        ensure_allowed(actor, Action.READ_MEASUREMENT, measurement_resource(measurement))
        return measurement

    async def update_measurement(self, actor: Actor, measurement_id: int, payload: MeasurementUpdate) -> Measurement:
        measurement = await self.measurements.get_by_id(measurement_id)
        ensure_allowed(actor, Action.UPDATE_MEASUREMENT, measurement_resource(measurement))

        fields = payload.model_dump(exclude_unset=True)
        if fields.get("date") is None:
            fields.pop("date", None)
        if not fields:
            return measurement
        return await self.measurements.update(measurement, fields)

    async def delete_measurement(self, actor: Actor, measurement_id: int) -> None:
        measurement = await self.measurements.get_by_id(measurement_id)
        ensure_allowed(actor, Action.DELETE_MEASUREMENT, measurement_resource(measurement))
        await self.measurements.delete(measurement)
        logger.info("Measurement %s deleted", measurement_id)
