from typing import List

from fastapi import APIRouter, Depends, status

from app.core.dependencies import get_client_service, get_current_actor
from app.schemas.client import ClientCreate, ClientDetail, ClientRead, ClientSummary, ClientUpdate
from app.services.access_policy import Actor
from app.services.client_service import ClientService

router = APIRouter(prefix="/clients", tags=["clients"])


@router.get("", response_model=List[ClientSummary])
async def list_clients(
        actor: Actor = Depends(get_current_actor),
        service: ClientService = Depends(get_client_service),
):
    """Список клиентов тренера с датой последней тренировки и счётчиками"""
    rows = await service.list_clients(actor)
    return [
        ClientSummary(
            **ClientRead.model_validate(row.user).model_dump(),
            last_session_date=row.last_session_date,
            session_count=row.session_count,
            measurement_count=row.measurement_count,
        )
        for row in rows
    ]


@router.post("", response_model=ClientRead, status_code=status.HTTP_201_CREATED)
async def create_client(
        payload: ClientCreate,
        actor: Actor = Depends(get_current_actor),
        service: ClientService = Depends(get_client_service),
):
    return await service.create_client(actor, payload)


@router.get("/{client_id}", response_model=ClientDetail)
async def get_client(
        client_id: int,
        actor: Actor = Depends(get_current_actor),
        service: ClientService = Depends(get_client_service),
):
    """Карточка клиента: профиль, программы, сессии и замеры"""
    return await service.get_client(actor, client_id)


@router.put("/{client_id}", response_model=ClientRead)
async def update_client(
        client_id: int,
        payload: ClientUpdate,
        actor: Actor = Depends(get_current_actor),
        service: ClientService = Depends(get_client_service),
):
    return await service.update_client(actor, client_id, payload)
