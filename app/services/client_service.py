import logging
from typing import List

from app.core.errors import ConflictError, ValidationError
from app.models.client_profile import ClientProfile
from app.models.user import User, RoleEnum
from app.repositories.client_repository import ClientListRow, ClientRepository
from app.repositories.user_repository import UserRepository
from app.schemas.client import ClientCreate, ClientUpdate
from app.services.access_policy import Action, Actor, Resource, ensure_allowed
from app.services.auth_service import auth_service

logger = logging.getLogger(__name__)

_USER_FIELDS = ("first_name", "last_name", "phone")
_PROFILE_FIELDS = ("goals", "notes", "card_expiry")


class ClientService:
    def __init__(self, clients: ClientRepository, users: UserRepository):
        self.clients = clients
        self.users = users

    async def list_clients(self, actor: Actor) -> List[ClientListRow]:
        ensure_allowed(actor, Action.LIST_CLIENTS)
        return await self.clients.list_clients()

    async def create_client(self, actor: Actor, payload: ClientCreate) -> User:
        ensure_allowed(actor, Action.CREATE_CLIENT)

        if await self.users.get_by_email(payload.email):
            raise ConflictError("A user with this email already exists")

        user = User(
            email=payload.email,
            password=auth_service.hash_password(payload.password),
            first_name=payload.first_name,
            last_name=payload.last_name,
            phone=payload.phone,
            role=RoleEnum.client,
        )
        client = await self.clients.create_client(
            user, ClientProfile(goals=payload.goals, notes=payload.notes)
        )
        logger.info("Client %s created", client.id)
        return client

    async def get_client(self, actor: Actor, client_id: int) -> User:
        client = await self.clients.get_client_detail(client_id)
        resource = Resource(client_id=client.id) if client else Resource.missing()
        ensure_allowed(actor, Action.READ_CLIENT, resource)
        return client

    async def update_client(self, actor: Actor, client_id: int, payload: ClientUpdate) -> User:
        client = await self.clients.get_client(client_id)
        resource = Resource(client_id=client.id) if client else Resource.missing()
        ensure_allowed(actor, Action.UPDATE_CLIENT, resource)

        changes = payload.model_dump(exclude_unset=True)
        user_fields = {k: v for k, v in changes.items() if k in _USER_FIELDS}
        profile_fields = {k: v for k, v in changes.items() if k in _PROFILE_FIELDS}
        for required in ("first_name", "last_name"):
            if required in user_fields and not user_fields[required]:
                raise ValidationError(f"{required} cannot be empty")
        return await self.clients.update_client(client, user_fields, profile_fields)
