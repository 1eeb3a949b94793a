"""
Модульные тесты правила "не больше одной активной тренировки на клиента".

Репозиторий подменяется in-memory реализацией с блокировкой профиля,
которая снимается на commit() - как строковая блокировка в транзакции.
"""

import asyncio
from collections import defaultdict
from types import SimpleNamespace

import pytest

from app.services.workout_activation import WorkoutActivationRule

pytestmark = pytest.mark.unit


class InMemoryWorkoutRepo:
    def __init__(self, workouts):
        self.workouts = {w.id: w for w in workouts}
        self._locks = defaultdict(asyncio.Lock)
        self._held = []

    async def lock_client_profile(self, client_profile_id):
        lock = self._locks[client_profile_id]
        await lock.acquire()
        self._held.append(lock)

    async def deactivate_others(self, client_profile_id, exclude_id):
        await asyncio.sleep(0)
        count = 0
        for workout in self.workouts.values():
            if workout.client_profile_id == client_profile_id and workout.id != exclude_id and workout.is_active:
                workout.is_active = False
                count += 1
        return count

    async def set_active(self, workout, is_active):
        await asyncio.sleep(0)
        workout.is_active = is_active

    async def commit(self):
        while self._held:
            self._held.pop().release()

    def active_for(self, client_profile_id):
        return [w.id for w in self.workouts.values() if w.client_profile_id == client_profile_id and w.is_active]


def _workout(workout_id, profile_id=1, is_active=False):
    return SimpleNamespace(id=workout_id, client_profile_id=profile_id, is_active=is_active)


@pytest.mark.asyncio
async def test_activation_deactivates_previous_active():
    old, new = _workout(1, is_active=True), _workout(2)
    repo = InMemoryWorkoutRepo([old, new])

    await WorkoutActivationRule(repo).apply(1, new, True)
    await repo.commit()

    assert repo.active_for(1) == [2]


@pytest.mark.asyncio
async def test_other_clients_are_untouched():
    mine, theirs = _workout(1, profile_id=1), _workout(2, profile_id=2, is_active=True)
    repo = InMemoryWorkoutRepo([mine, theirs])

    await WorkoutActivationRule(repo).apply(1, mine, True)
    await repo.commit()

    assert repo.active_for(1) == [1]
    assert repo.active_for(2) == [2]


@pytest.mark.asyncio
@pytest.mark.parametrize("flag", [False, None])
async def test_falsy_flag_is_noop(flag):
    active, other = _workout(1, is_active=True), _workout(2)
    repo = InMemoryWorkoutRepo([active, other])

    await WorkoutActivationRule(repo).apply(1, other, flag)

    assert repo.active_for(1) == [1]


@pytest.mark.asyncio
async def test_reactivating_active_workout_keeps_it_active():
    active = _workout(1, is_active=True)
    repo = InMemoryWorkoutRepo([active])

    await WorkoutActivationRule(repo).apply(1, active, True)
    await repo.commit()

    assert repo.active_for(1) == [1]


@pytest.mark.asyncio
async def test_concurrent_activations_leave_exactly_one_active():
    workouts = [_workout(i) for i in range(1, 6)]
    repo = InMemoryWorkoutRepo(workouts)
    rule = WorkoutActivationRule(repo)

    async def activate(workout):
        await rule.apply(1, workout, True)
        await asyncio.sleep(0)
        await repo.commit()

    await asyncio.gather(*(activate(w) for w in workouts))

    assert len(repo.active_for(1)) == 1
