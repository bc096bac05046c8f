from __future__ import annotations

from typing import Callable

ProgressCallback = Callable[[int], None]


class ProgressThrottle:
    """Turn a running symbol count into sparse percentage notifications.

    A percentage is emitted only once it moved by at least ``step`` points
    since the last emission; 100 is always emitted exactly once.
    """

    def __init__(self, total: int, step: int = 5) -> None:
        if step < 1:
            raise ValueError("progress step must be at least 1")
        self.total = total
        self.step = step
        self._last_sent = -step
        self._done = False

    def update(self, processed: int) -> int | None:
        if self._done:
            return None
        if self.total <= 0:
            return None
        progress = min(100, 100 * processed // self.total)
        if progress == 100 or progress - self._last_sent >= self.step:
            self._last_sent = progress
            self._done = progress == 100
            return progress
        return None

    def finish(self) -> int | None:
        if self._done:
            return None
        self._done = True
        self._last_sent = 100
        return 100


def notify(callback: ProgressCallback | None, progress: int | None) -> None:
    if callback is not None and progress is not None:
        callback(progress)
