from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from app.core.dependencies import get_current_actor, get_session_service
from app.schemas.session import SessionCreate, SessionDetail, SessionListItem, SessionResponse, SessionUpdate
from app.services.access_policy import Actor
from app.services.session_service import SessionService

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.post("", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def create_session(
        payload: SessionCreate,
        actor: Actor = Depends(get_current_actor),
        service: SessionService = Depends(get_session_service),
):
    """Записать выполненную тренировку (только сам клиент)"""
    return await service.create_session(actor, payload)


@router.get("", response_model=List[SessionListItem])
async def list_sessions(
        client_id: int = Query(...),
        limit: Optional[int] = Query(default=None),
        actor: Actor = Depends(get_current_actor),
        service: SessionService = Depends(get_session_service),
):
    return await service.list_sessions(actor, client_id, limit)


@router.get("/{session_id}", response_model=SessionDetail)
async def get_session(
        session_id: int,
        actor: Actor = Depends(get_current_actor),
        service: SessionService = Depends(get_session_service),
):
    return await service.get_session(actor, session_id)


@router.put("/{session_id}", response_model=SessionResponse)
async def update_session(
        session_id: int,
        payload: SessionUpdate,
        actor: Actor = Depends(get_current_actor),
        service: SessionService = Depends(get_session_service),
):
    """Отзыв, оценка и данные упражнений правит только владелец сессии"""
    return await service.update_session(actor, session_id, payload)
