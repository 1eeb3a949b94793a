"""
Таймер отдыха между подходами.

Состояния: IDLE -> RUNNING -> COMPLETED. Начальное значение берётся из
текстового поля rest текущего упражнения через parse_rest(). Тик может
подаваться вручную (tick()) или фоновой asyncio-задачей, если задан interval;
у таймера никогда не бывает больше одной живой задачи-тикера.
"""

import asyncio
import enum
import logging
from typing import Callable, Optional

from app.services.duration_parser import format_seconds, parse_rest

logger = logging.getLogger(__name__)


class TimerState(str, enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"


class RestTimer:
    def __init__(
        self,
        rest: Optional[str] = None,
        on_complete: Optional[Callable[[], None]] = None,
        interval: Optional[float] = None,
    ):
        self.on_complete = on_complete
        self.interval = interval
        self._task: Optional[asyncio.Task] = None
        self._notified = False
        self.rest = rest
        self.initial = 0
        self.remaining = 0
        self.available = False
        self.state = TimerState.IDLE
        self.reset()

    @property
    def running(self) -> bool:
        return self.state == TimerState.RUNNING

    @property
    def label(self) -> str:
        """Оставшееся время для отображения, "MM:SS"."""
        return format_seconds(self.remaining)

    @property
    def has_ticker(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.state == TimerState.RUNNING:
            return
        if self.state == TimerState.COMPLETED or self.remaining == 0:
            self.remaining = self.initial
            self._notified = False
        if self.remaining <= 0:
            return
        self.state = TimerState.RUNNING
        if self.interval:
            self._spawn_ticker()

    def pause(self) -> None:
        if self.state != TimerState.RUNNING:
            return
        self.state = TimerState.IDLE
        self._stop_ticker()

    def tick(self) -> None:
        if self.state != TimerState.RUNNING:
            return
        self.remaining = max(self.remaining - 1, 0)
        if self.remaining == 0:
            self.state = TimerState.COMPLETED
            self._stop_ticker()
            self._fire_complete()

    def reset(self) -> None:
        self._stop_ticker()
        parsed = parse_rest(self.rest)
        self.available = parsed is not None
        self.initial = parsed or 0
        self.remaining = self.initial
        self.state = TimerState.IDLE
        self._notified = False

    def load(self, rest: Optional[str]) -> None:
        """Переключение на другое упражнение."""
        self.rest = rest
        self.reset()

    def close(self) -> None:
        self._stop_ticker()
        if self.state == TimerState.RUNNING:
            self.state = TimerState.IDLE

    def _fire_complete(self) -> None:
        if self._notified:
            return
        self._notified = True
        logger.debug("Rest timer completed (%s)", self.rest)
        if self.on_complete is not None:
            self.on_complete()

    def _spawn_ticker(self) -> None:
        self._stop_ticker()
        self._task = asyncio.get_running_loop().create_task(self._run())

    def _stop_ticker(self) -> None:
        task = self._task
        self._task = None
        if task is None or task.done():
            return
        # Внутри самого тикера (завершение на tick()) задачу не отменяем, она выйдет сама
        try:
            current = asyncio.current_task()
        except RuntimeError:
            current = None
        if task is not current:
            task.cancel()

    async def _run(self) -> None:
        while self.state == TimerState.RUNNING:
            await asyncio.sleep(self.interval)
            if self._task is not asyncio.current_task():
                return
            self.tick()
