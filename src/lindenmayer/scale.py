from __future__ import annotations

from dataclasses import dataclass

from lindenmayer.interpreter import BoundingBox
from lindenmayer.turtle import Point
from lindenmayer.utilities.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ScaleContext:
    distance: float
    offset: Point
    base_distance: float

    @property
    def factor(self) -> float:
        return self.distance / self.base_distance

    def canvas_origin(self) -> Point:
        """Start position of the draw pass.

        Shifting the turtle by the scaled offset lands the lower-left corner
        of the bounding box on the canvas origin.
        """

        return (-self.offset[0] * self.factor, -self.offset[1] * self.factor)


def resolve_scale(
    bbox: BoundingBox,
    canvas_width: float,
    canvas_height: float,
    base_distance: float,
) -> ScaleContext:
    """Pick a step distance so the figure spans the canvas along its larger axis."""

    if canvas_width <= 0 or canvas_height <= 0:
        raise ValueError(
            f"canvas size must be positive, got {canvas_width}x{canvas_height}"
        )
    if base_distance <= 0:
        raise ValueError(f"base distance must be positive, got {base_distance}")

    if bbox.width > bbox.height:
        extent, dimension = bbox.width, canvas_width
    else:
        extent, dimension = bbox.height, canvas_height

    if extent <= 0:
        logger.debug("Degenerate bounding box %s; keeping base distance", bbox)
        distance = base_distance
    else:
        distance = dimension * base_distance / extent

    return ScaleContext(
        distance=distance, offset=bbox.bottom_left, base_distance=base_distance
    )
