"""
Политика доступа PT CRM.

authorize() это чистая функция от явных входов (актор, действие, ресурс),
без обращения к БД или к текущему запросу. Роутеры и сервисы вызывают её
до любых изменений данных; ensure_allowed() превращает отказ в доменную ошибку.
"""

import enum
from dataclasses import dataclass
from typing import Optional, Union

from app.core.errors import Forbidden, NotFound, Unauthenticated
from app.models.user import RoleEnum


@dataclass(frozen=True)
class TrainerActor:
    id: int


@dataclass(frozen=True)
class ClientActor:
    id: int


Actor = Union[TrainerActor, ClientActor]


def actor_for(user) -> Optional[Actor]:
    """Собрать актора из пользователя (None -> None)."""
    if user is None:
        return None
    if user.role == RoleEnum.trainer:
        return TrainerActor(id=user.id)
    return ClientActor(id=user.id)


class Action(str, enum.Enum):
    LIST_CLIENTS = "list_clients"
    CREATE_CLIENT = "create_client"
    READ_CLIENT = "read_client"
    UPDATE_CLIENT = "update_client"

    LIST_WORKOUTS = "list_workouts"
    READ_WORKOUT = "read_workout"
    CREATE_WORKOUT = "create_workout"
    UPDATE_WORKOUT = "update_workout"
    DELETE_WORKOUT = "delete_workout"

    CREATE_SESSION = "create_session"
    LIST_SESSIONS = "list_sessions"
    READ_SESSION = "read_session"
    UPDATE_SESSION = "update_session"

    LIST_MEASUREMENTS = "list_measurements"
    CREATE_MEASUREMENT = "create_measurement"
    READ_MEASUREMENT = "read_measurement"
    UPDATE_MEASUREMENT = "update_measurement"
    DELETE_MEASUREMENT = "delete_measurement"

    LIST_NOTIFICATIONS = "list_notifications"
    UPDATE_NOTIFICATION = "update_notification"


@dataclass(frozen=True)
class Resource:
    """Цель операции: id клиента-владельца и, для уведомлений, id получателя."""
    client_id: Optional[int] = None
    owner_id: Optional[int] = None
    exists: bool = True

    @classmethod
    def missing(cls) -> "Resource":
        return cls(exists=False)


class DenyKind(str, enum.Enum):
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class Allow:
    allowed = True


@dataclass(frozen=True)
class Deny:
    kind: DenyKind
    reason: str
    allowed = False


Decision = Union[Allow, Deny]

ALLOW = Allow()

# Действия над существующей записью: для них отсутствие ресурса проверяется раньше роли
_TARGETED_ACTIONS = frozenset({
    Action.READ_CLIENT,
    Action.UPDATE_CLIENT,
    Action.READ_WORKOUT,
    Action.UPDATE_WORKOUT,
    Action.DELETE_WORKOUT,
    Action.READ_SESSION,
    Action.UPDATE_SESSION,
    Action.READ_MEASUREMENT,
    Action.UPDATE_MEASUREMENT,
    Action.DELETE_MEASUREMENT,
    Action.UPDATE_NOTIFICATION,
})

_TRAINER_ONLY = frozenset({
    Action.LIST_CLIENTS,
    Action.CREATE_CLIENT,
    Action.UPDATE_CLIENT,
    Action.CREATE_WORKOUT,
    Action.UPDATE_WORKOUT,
    Action.DELETE_WORKOUT,
})

_TRAINER_OR_OWNER = frozenset({
    Action.READ_CLIENT,
    Action.LIST_WORKOUTS,
    Action.READ_WORKOUT,
    Action.LIST_SESSIONS,
    Action.READ_SESSION,
    Action.LIST_MEASUREMENTS,
    Action.CREATE_MEASUREMENT,
    Action.READ_MEASUREMENT,
    Action.UPDATE_MEASUREMENT,
    Action.DELETE_MEASUREMENT,
})

# Только сам клиент, тренер не может действовать от его имени
_OWNER_ONLY = frozenset({
    Action.CREATE_SESSION,
    Action.UPDATE_SESSION,
})

_NOT_FOUND_MESSAGES = {
    Action.READ_CLIENT: "Client not found",
    Action.UPDATE_CLIENT: "Client not found",
    Action.READ_WORKOUT: "Workout not found",
    Action.UPDATE_WORKOUT: "Workout not found",
    Action.DELETE_WORKOUT: "Workout not found",
    Action.READ_SESSION: "Session not found",
    Action.UPDATE_SESSION: "Session not found",
    Action.READ_MEASUREMENT: "Measurement not found",
    Action.UPDATE_MEASUREMENT: "Measurement not found",
    Action.DELETE_MEASUREMENT: "Measurement not found",
    Action.UPDATE_NOTIFICATION: "Notification not found",
}


def _is_owner(actor: Actor, resource: Optional[Resource]) -> bool:
    return resource is not None and resource.client_id is not None and actor.id == resource.client_id


def authorize(actor: Optional[Actor], action: Action, resource: Optional[Resource] = None) -> Decision:
    if actor is None:
        return Deny(DenyKind.UNAUTHENTICATED, "Not authenticated")

    if action in _TARGETED_ACTIONS and (resource is None or not resource.exists):
        return Deny(DenyKind.NOT_FOUND, _NOT_FOUND_MESSAGES[action])

    is_trainer = isinstance(actor, TrainerActor)

    if action in _TRAINER_ONLY:
        if is_trainer:
            return ALLOW
        return Deny(DenyKind.FORBIDDEN, "Only the trainer can perform this action")

    if action in _TRAINER_OR_OWNER:
        if is_trainer or _is_owner(actor, resource):
            return ALLOW
        return Deny(DenyKind.FORBIDDEN, "Clients can only access their own data")

    if action in _OWNER_ONLY:
        if _is_owner(actor, resource):
            return ALLOW
        return Deny(DenyKind.FORBIDDEN, "Only the client who owns the session can do this")

    if action == Action.LIST_NOTIFICATIONS:
        return ALLOW

    if action == Action.UPDATE_NOTIFICATION:
        if resource.owner_id == actor.id:
            return ALLOW
        return Deny(DenyKind.FORBIDDEN, "Notification belongs to another user")

    raise ValueError(f"Unhandled action: {action}")


_ERRORS = {
    DenyKind.UNAUTHENTICATED: Unauthenticated,
    DenyKind.FORBIDDEN: Forbidden,
    DenyKind.NOT_FOUND: NotFound,
}


def ensure_allowed(actor: Optional[Actor], action: Action, resource: Optional[Resource] = None) -> None:
    decision = authorize(actor, action, resource)
    if isinstance(decision, Deny):
        raise _ERRORS[decision.kind](decision.reason)
