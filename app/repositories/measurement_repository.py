from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.measurement import Measurement


class MeasurementRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, measurement_id: int) -> Optional[Measurement]:
        result = await self.db.execute(select(Measurement).where(Measurement.id == measurement_id))
        return result.scalar_one_or_none()

    async def list_for_client(self, client_id: int) -> List[Measurement]:
        result = await self.db.execute(
            select(Measurement)
            .where(Measurement.client_id == client_id)
            .order_by(Measurement.date.desc())
        )
        return list(result.scalars().all())

    async def create(self, measurement: Measurement) -> Measurement:
        self.db.add(measurement)
        await self.db.commit()
        await self.db.refresh(measurement)
        return measurement

    async def update(self, measurement: Measurement, fields: dict) -> Measurement:
        for key, value in fields.items():
            setattr(measurement, key, value)
        await self.db.commit()
        await self.db.refresh(measurement)
        return measurement

    async def delete(self, measurement: Measurement) -> None:
        await self.db.delete(measurement)
        await self.db.commit()
