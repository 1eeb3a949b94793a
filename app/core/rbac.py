from fastapi import Depends

from app.core.dependencies import get_current_user
from app.core.errors import Forbidden
from app.models.user import User, RoleEnum


def require_role(*allowed_roles: RoleEnum):
    """Фабрика зависимостей для проверки роли пользователя."""
    async def role_checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in allowed_roles:
            raise Forbidden("Only the trainer can perform this action")
        return current_user
    return role_checker


require_trainer = require_role(RoleEnum.trainer)
