"""Replay a symbol sequence against a :class:`VirtualTurtle`.

The same pass serves two purposes: a dry ``BOUNDS`` run that only measures
the figure, and a ``DRAW`` run that records line segments.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

import numpy as np

from lindenmayer.errors import StackUnderflowError
from lindenmayer.progress import ProgressCallback, ProgressThrottle, notify
from lindenmayer.turtle import ORIGIN, Point, TurtleFrame, VirtualTurtle

TURN_LEFT = "+"
TURN_RIGHT = "-"
PUSH = "["
POP = "]"
FORWARD = "F"


class InterpretMode(StrEnum):
    BOUNDS = "bounds"
    DRAW = "draw"


@dataclass(slots=True)
class BoundingBox:
    min_x: float = 0.0
    min_y: float = 0.0
    max_x: float = 0.0
    max_y: float = 0.0

    def include(self, point: Point) -> None:
        x, y = point
        if x < self.min_x:
            self.min_x = x
        if x > self.max_x:
            self.max_x = x
        if y < self.min_y:
            self.min_y = y
        if y > self.max_y:
            self.max_y = y

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def bottom_left(self) -> Point:
        return (self.min_x, self.min_y)


def _empty_segments() -> np.ndarray:
    return np.empty((0, 2, 2), dtype=float)


@dataclass(frozen=True)
class InterpretResult:
    mode: InterpretMode
    symbols: int
    bounds: BoundingBox | None = None
    segments: np.ndarray = field(default_factory=_empty_segments)


class TurtleInterpreter:
    def __init__(self, turn_angle: float = 20.0, progress_step: int = 5) -> None:
        self.turn_angle = turn_angle
        self.progress_step = progress_step

    def run(
        self,
        sequence: str,
        mode: InterpretMode,
        distance: float,
        origin: Point = ORIGIN,
        on_progress: ProgressCallback | None = None,
    ) -> InterpretResult:
        """Execute ``sequence`` from a fresh turtle heading north.

        Raises :class:`StackUnderflowError` on a ``]`` with nothing to pop;
        nothing computed before the failure is returned.
        """

        turtle = VirtualTurtle(origin)
        stack: list[TurtleFrame] = []
        drawing = mode is InterpretMode.DRAW
        bounds = None if drawing else BoundingBox(origin[0], origin[1], origin[0], origin[1])
        segments: list[tuple[Point, Point]] = []
        throttle = ProgressThrottle(len(sequence), self.progress_step)

        for index, symbol in enumerate(sequence):
            if symbol == FORWARD:
                start = turtle.position
                end = turtle.forward(distance)
                if drawing:
                    segments.append((start, end))
                else:
                    bounds.include(end)
            elif symbol == TURN_LEFT:
                turtle.left(self.turn_angle)
            elif symbol == TURN_RIGHT:
                turtle.right(self.turn_angle)
            elif symbol == PUSH:
                stack.append(turtle.frame())
            elif symbol == POP:
                if not stack:
                    raise StackUnderflowError(index)
                turtle.restore(stack.pop())
            notify(on_progress, throttle.update(index + 1))

        notify(on_progress, throttle.finish())

        if drawing:
            array = (
                np.asarray(segments, dtype=float).reshape(-1, 2, 2)
                if segments
                else _empty_segments()
            )
            return InterpretResult(mode=mode, symbols=len(sequence), segments=array)
        return InterpretResult(mode=mode, symbols=len(sequence), bounds=bounds)
