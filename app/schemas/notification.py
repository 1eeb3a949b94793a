from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime

from app.models.notification import NotificationType


class NotificationRead(BaseModel):
    id: int
    type: NotificationType
    message: str
    read: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class NotificationListResponse(BaseModel):
    items: List[NotificationRead]
    unread_count: int


class NotificationReadUpdate(BaseModel):
    read: bool
