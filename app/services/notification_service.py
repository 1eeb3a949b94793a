import logging
from typing import List, Optional, Tuple

from app.models.notification import Notification, NotificationType
from app.models.user import User
from app.repositories.notification_repository import NotificationRepository
from app.repositories.user_repository import UserRepository
from app.services.access_policy import Action, Actor, Resource, ensure_allowed

logger = logging.getLogger(__name__)


class NotificationService:
    def __init__(self, notifications: NotificationRepository, users: UserRepository):
        self.notifications = notifications
        self.users = users

    async def notify_trainer(self, type_: NotificationType, message: str) -> Optional[Notification]:
        """
        Уведомление "тренеру". Предполагается единственный тренер в системе,
        берётся первый найденный; без тренера уведомление просто не создаётся.
        """
        trainer = await self.users.get_first_trainer()
        if trainer is None:
            logger.warning("No trainer account, dropping %s notification", type_.value)
            return None
        return await self.notifications.create(
            Notification(user_id=trainer.id, type=type_, message=message, read=False)
        )

    async def workout_completed(self, client: User) -> Optional[Notification]:
        return await self.notify_trainer(
            NotificationType.WORKOUT_COMPLETED,
            f"{client.full_name} completed a workout",
        )

    async def measurement_added(self, client: User) -> Optional[Notification]:
        return await self.notify_trainer(
            NotificationType.MEASUREMENT_ADDED,
            f"{client.full_name} added a new measurement",
        )

    async def list_notifications(self, actor: Actor) -> Tuple[List[Notification], int]:
        ensure_allowed(actor, Action.LIST_NOTIFICATIONS)
        items = await self.notifications.list_for_user(actor.id)
        unread = sum(1 for item in items if not item.read)
        return items, unread

    async def set_read(self, actor: Actor, notification_id: int, read: bool) -> Notification:
        notification = await self.notifications.get_by_id(notification_id)
        resource = Resource(owner_id=notification.user_id) if notification else Resource.missing()
        ensure_allowed(actor, Action.UPDATE_NOTIFICATION, resource)
        return await self.notifications.set_read(notification, read)

    async def mark_all_read(self, actor: Actor) -> int:
        ensure_allowed(actor, Action.LIST_NOTIFICATIONS)
        return await self.notifications.mark_all_read(actor.id)
