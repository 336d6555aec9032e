from __future__ import annotations

import time
from typing import Callable, Optional


class IdleTimer:
    """Wall-clock idle countdown, advanced cooperatively with ``tick``.

    ``on_prompt`` fires once when ``prompt_seconds`` remain, ``on_idle`` fires
    once when the full ``idle_seconds`` have passed without a ``reset``. The
    timer disables itself after firing ``on_idle``.
    """

    def __init__(
        self,
        *,
        on_idle: Callable[[], None],
        on_prompt: Callable[[], None],
        idle_seconds: float,
        prompt_seconds: float,
        clock: Callable[[], float] = time.time,
    ):
        if prompt_seconds > idle_seconds:
            raise ValueError("prompt_seconds cannot exceed idle_seconds")
        self._on_idle = on_idle
        self._on_prompt = on_prompt
        self._idle_seconds = float(idle_seconds)
        self._prompt_seconds = float(prompt_seconds)
        self._clock = clock
        self._enabled = False
        self._prompted = False
        self._last_activity = clock()

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def prompted(self) -> bool:
        return self._prompted

    def enable(self) -> None:
        self._enabled = True
        self.reset()

    def disable(self) -> None:
        self._enabled = False
        self._prompted = False

    def reset(self) -> None:
        self._last_activity = self._clock()
        self._prompted = False

    def remaining(self, now: Optional[float] = None) -> float:
        now = self._clock() if now is None else now
        return max(self._idle_seconds - (now - self._last_activity), 0.0)

    def tick(self, now: Optional[float] = None) -> None:
        if not self._enabled:
            return
        remaining = self.remaining(now)
        if remaining <= 0:
            self.disable()
            self._on_idle()
            return
        if remaining <= self._prompt_seconds and not self._prompted:
            self._prompted = True
            self._on_prompt()
