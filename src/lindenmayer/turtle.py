"""A drawing-free turtle: position and heading only.

Angles follow the logo convention and are clockwise-positive, so turning
left decreases the heading.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

Point = tuple[float, float]

ORIGIN: Point = (0.0, 0.0)
NORTH = 90.0


@dataclass(frozen=True, slots=True)
class TurtleFrame:
    position: Point
    heading: float


class VirtualTurtle:
    def __init__(self, position: Point = ORIGIN, heading: float = NORTH) -> None:
        self.position: Point = (float(position[0]), float(position[1]))
        self.heading = float(heading)

    def __repr__(self) -> str:
        return f"VirtualTurtle(position={self.position!r}, heading={self.heading!r})"

    def forward(self, distance: float) -> Point:
        theta = math.radians(self.heading)
        x, y = self.position
        self.position = (x + distance * math.cos(theta), y + distance * math.sin(theta))
        return self.position

    def left(self, angle: float) -> None:
        self.heading -= angle

    def right(self, angle: float) -> None:
        self.heading += angle

    def frame(self) -> TurtleFrame:
        return TurtleFrame(self.position, self.heading)

    def restore(self, frame: TurtleFrame) -> None:
        self.position = frame.position
        self.heading = frame.heading

    def reset(self, position: Point = ORIGIN) -> None:
        self.position = (float(position[0]), float(position[1]))
        self.heading = NORTH
