from fastapi import APIRouter, Depends

from app.core.dependencies import get_current_actor, get_notification_service
from app.schemas.notification import NotificationListResponse, NotificationRead, NotificationReadUpdate
from app.services.access_policy import Actor
from app.services.notification_service import NotificationService

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=NotificationListResponse)
async def list_notifications(
        actor: Actor = Depends(get_current_actor),
        service: NotificationService = Depends(get_notification_service),
):
    items, unread = await service.list_notifications(actor)
    return NotificationListResponse(
        items=[NotificationRead.model_validate(item) for item in items],
        unread_count=unread,
    )


@router.patch("/{notification_id}", response_model=NotificationRead)
async def set_notification_read(
        notification_id: int,
        payload: NotificationReadUpdate,
        actor: Actor = Depends(get_current_actor),
        service: NotificationService = Depends(get_notification_service),
):
    return await service.set_read(actor, notification_id, payload.read)


@router.post("/read-all")
async def mark_all_read(
        actor: Actor = Depends(get_current_actor),
        service: NotificationService = Depends(get_notification_service),
):
    updated = await service.mark_all_read(actor)
    return {"updated": updated}
