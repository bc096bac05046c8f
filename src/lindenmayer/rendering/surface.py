from __future__ import annotations

import threading
from typing import Protocol

import numpy as np
import pygame

IVORY = (255, 255, 240)
BLACK = (0, 0, 0)
RED = (255, 0, 0)


class DrawingSurface(Protocol):
    """Sink for the segments produced by a draw pass."""

    @property
    def size(self) -> tuple[int, int]: ...

    def draw(self, segments: np.ndarray) -> None: ...


def to_screen(segments: np.ndarray, height: int) -> np.ndarray:
    """Flip cartesian ``(n, 2, 2)`` segments into screen space (y grows down)."""

    screen = np.array(segments, dtype=float, copy=True)
    if screen.size:
        screen[..., 1] = height - screen[..., 1]
    return screen


class PygameSurface:
    """Rasterise draw passes into a pygame surface.

    Every pass paints a fresh canvas and swaps it in under a lock, so a
    reader blitting ``frame()`` from another thread never sees a half-drawn
    image.
    """

    def __init__(
        self,
        surface: pygame.Surface,
        background: tuple[int, int, int] = IVORY,
        line_color: tuple[int, int, int] = BLACK,
        debug_axes: bool = False,
    ) -> None:
        self._lock = threading.Lock()
        self._surface = surface
        self.background = background
        self.line_color = line_color
        self.debug_axes = debug_axes

    @property
    def surface(self) -> pygame.Surface:
        return self.frame()

    @property
    def size(self) -> tuple[int, int]:
        with self._lock:
            return self._surface.get_size()

    def frame(self) -> pygame.Surface:
        with self._lock:
            return self._surface

    def draw(self, segments: np.ndarray) -> None:
        width, height = self.size
        canvas = pygame.Surface((width, height))
        canvas.fill(self.background)
        for start, end in to_screen(segments, height).tolist():
            pygame.draw.aaline(canvas, self.line_color, start, end)
        if self.debug_axes:
            _draw_axes(canvas, width, height)
        with self._lock:
            self._surface = canvas


def _draw_axes(canvas: pygame.Surface, width: int, height: int) -> None:
    origin = (0, height - 1)
    pygame.draw.line(canvas, RED, origin, (width // 2, height - 1))
    pygame.draw.line(canvas, RED, origin, (0, height // 2))


class RecordingSurface:
    """Keep the last drawn segments in memory instead of rasterising them."""

    def __init__(self, width: int, height: int) -> None:
        self._size = (width, height)
        self.segments: np.ndarray = np.empty((0, 2, 2), dtype=float)
        self.draw_count = 0

    @property
    def size(self) -> tuple[int, int]:
        return self._size

    def resize(self, width: int, height: int) -> None:
        self._size = (width, height)

    def draw(self, segments: np.ndarray) -> None:
        self.segments = segments
        self.draw_count += 1
