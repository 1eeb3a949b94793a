from typing import List

from fastapi import APIRouter, Depends, Query, Response, status

from app.core.dependencies import get_current_actor, get_measurement_service
from app.schemas.measurement import MeasurementCreate, MeasurementResponse, MeasurementUpdate
from app.services.access_policy import Actor
from app.services.measurement_service import MeasurementService

router = APIRouter(prefix="/measurements", tags=["measurements"])


@router.get("", response_model=List[MeasurementResponse])
async def list_measurements(
        client_id: int = Query(...),
        actor: Actor = Depends(get_current_actor),
        service: MeasurementService = Depends(get_measurement_service),
):
    return await service.list_measurements(actor, client_id)


@router.post("", response_model=MeasurementResponse, status_code=status.HTTP_201_CREATED)
async def create_measurement(
        payload: MeasurementCreate,
        actor: Actor = Depends(get_current_actor),
        service: MeasurementService = Depends(get_measurement_service),
):
    return await service.create_measurement(actor, payload)


@router.get("/{measurement_id}", response_model=MeasurementResponse)
async def get_measurement(
        measurement_id: int,
        actor: Actor = Depends(get_current_actor),
        service: MeasurementService = Depends(get_measurement_service),
):
    return await service.get_measurement(actor, measurement_id)


@router.put("/{measurement_id}", response_model=MeasurementResponse)
async def update_measurement(
        measurement_id: int,
        payload: MeasurementUpdate,
        actor: Actor = Depends(get_current_actor),
        service: MeasurementService = Depends(get_measurement_service),
):
    return await service.update_measurement(actor, measurement_id, payload)


@router.delete("/{measurement_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_measurement(
        measurement_id: int,
        actor: Actor = Depends(get_current_actor),
        service: MeasurementService = Depends(get_measurement_service),
):
    await service.delete_measurement(actor, measurement_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
