"""One-shot timers driven by the game loop's frame delta."""

from __future__ import annotations

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


class Timer:
    """A single pending callback that fires after a delay.

    Time only advances through :meth:`update`, so the timer runs on the same
    thread as everything else. Arming an already-armed timer replaces the
    pending callback; two callbacks are never outstanding at once.
    """

    def __init__(self, name: str = "timer") -> None:
        self.name = name
        self._remaining_s: float | None = None
        self._on_fire: Callable[[], None] | None = None

    @property
    def pending(self) -> bool:
        return self._on_fire is not None

    @property
    def remaining_ms(self) -> float | None:
        if self._remaining_s is None:
            return None
        return self._remaining_s * 1000.0

    def arm(self, duration_ms: float, on_fire: Callable[[], None]) -> None:
        if duration_ms < 0:
            raise ValueError(f"timer duration must be >= 0, got {duration_ms}")
        self._remaining_s = duration_ms / 1000.0
        self._on_fire = on_fire

    def cancel(self) -> None:
        self._remaining_s = None
        self._on_fire = None

    def update(self, dt: float) -> bool:
        """Advance by *dt* seconds. Returns True if the callback fired."""
        if self._on_fire is None or self._remaining_s is None:
            return False
        self._remaining_s -= dt
        if self._remaining_s > 0:
            return False
        callback = self._on_fire
        self.cancel()
        logger.debug("%s fired", self.name)
        callback()
        return True
