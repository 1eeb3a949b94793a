import logging
from typing import Optional

from app.models.workout import Workout

logger = logging.getLogger(__name__)


class WorkoutActivationRule:
    """
    "Не больше одной активной тренировки на клиента".

    apply() выполняется внутри единицы работы вызывающего: блокирует профиль
    клиента, снимает флаг со всех остальных тренировок и только потом
    ставит его целевой. Коммит и откат делает вызывающий.
    """

    def __init__(self, repo):
        self.repo = repo

    async def apply(self, client_profile_id: int, workout: Workout, is_active: Optional[bool]) -> None:
        if not is_active:
            # Деактивация одной тренировки соседей не трогает
            return
        await self.repo.lock_client_profile(client_profile_id)
        deactivated = await self.repo.deactivate_others(client_profile_id, exclude_id=workout.id)
        await self.repo.set_active(workout, True)
        logger.info(
            "Workout %s activated for profile %s (%s deactivated)",
            workout.id, client_profile_id, deactivated,
        )
