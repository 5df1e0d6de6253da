"""Scale practice — play the selected scale's seven degrees in order, again and again."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto

from scaleviz.config import PRACTICE_TIMEOUT_MS
from scaleviz.pitch import Note, transpose, validate_pitch_class
from scaleviz.scheduler import Timer

logger = logging.getLogger(__name__)

LAST_STEP = 6


class ResetReason(Enum):
    WRONG_NOTE = auto()
    TIMEOUT = auto()
    SELECTION_CHANGED = auto()


@dataclass(frozen=True)
class PracticeStats:
    expected_step_index: int = 0
    completed_count: int = 0
    best_completed_count: int = 0
    expected_pitch_class: int | None = None


class ScalePracticeSession:
    """Tracks a learner's run through the scale.

    A correct note advances one step; the seventh correct note counts a
    completed pass and starts over. A wrong note, an idle timeout, or a new
    root folds the current count into the best count and starts over from 0.
    """

    def __init__(self, timer: Timer | None = None, timeout_ms: float = PRACTICE_TIMEOUT_MS) -> None:
        self._timer = timer or Timer("practice-idle")
        self._timeout_ms = timeout_ms
        self.expected_step_index = 0
        self.completed_count = 0
        self.best_completed_count = 0
        self._root: Note | None = None
        self._offsets: tuple[int, ...] = ()

    @property
    def timer(self) -> Timer:
        return self._timer

    def expected_pitch_class(self) -> int | None:
        if self._root is None:
            return None
        return transpose(self._root.pitch_class, self._offsets[self.expected_step_index])

    def set_scale(self, root: Note | None, offsets: tuple[int, ...]) -> None:
        """Point the session at a new scale. Any change of root or offsets resets progress."""
        offsets = tuple(offsets)
        changed = root != self._root or offsets != self._offsets
        self._root = root
        self._offsets = offsets
        if changed:
            self.reset(ResetReason.SELECTION_CHANGED)
            self._timer.cancel()

    def feed(self, pitch_class: int) -> bool:
        """Handle one played note. Returns True if it was the expected note."""
        validate_pitch_class(pitch_class)
        expected = self.expected_pitch_class()
        if expected is None:
            return False

        self._timer.arm(self._timeout_ms, self._on_timeout)

        if pitch_class != expected:
            self.reset(ResetReason.WRONG_NOTE)
            return False

        if self.expected_step_index == LAST_STEP:
            self.completed_count += 1
            self.expected_step_index = 0
            logger.info("Scale completed (%d in a row)", self.completed_count)
        else:
            self.expected_step_index += 1
        return True

    def reset(self, reason: ResetReason = ResetReason.SELECTION_CHANGED) -> None:
        self.best_completed_count = max(self.best_completed_count, self.completed_count)
        if self.completed_count or self.expected_step_index:
            logger.debug(
                "Practice reset (%s) at step %d, completed %d, best %d",
                reason.name.lower(), self.expected_step_index,
                self.completed_count, self.best_completed_count,
            )
        self.completed_count = 0
        self.expected_step_index = 0

    def _on_timeout(self) -> None:
        self.reset(ResetReason.TIMEOUT)

    def close(self) -> None:
        self._timer.cancel()

    @property
    def stats(self) -> PracticeStats:
        return PracticeStats(
            expected_step_index=self.expected_step_index,
            completed_count=self.completed_count,
            best_completed_count=self.best_completed_count,
            expected_pitch_class=self.expected_pitch_class(),
        )
