from typing import Tuple

from .frame_data import Point2D


def map_to_surface(landmark, width: float, height: float, mirror: bool = True) -> Point2D:
    """
    Converts a normalized landmark into surface pixel coordinates.
    With mirror=True the x axis is flipped to match a front camera self-view.
    """
    nx = 1.0 - landmark.x if mirror else landmark.x
    return Point2D(nx * width, landmark.y * height)


class CoordinateMapper:
    """Keeps the current logical size of the drawing surface."""

    def __init__(self, width: float = 0, height: float = 0, mirror: bool = True):
        self.width = width
        self.height = height
        self.mirror = mirror

    def resize(self, width: float, height: float):
        self.width = width
        self.height = height

    @property
    def size(self) -> Tuple[float, float]:
        return self.width, self.height

    @property
    def is_valid(self) -> bool:
        return self.width > 0 and self.height > 0

    def map(self, landmark) -> Point2D:
        return map_to_surface(landmark, self.width, self.height, self.mirror)
