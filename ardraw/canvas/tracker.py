from typing import NamedTuple, Optional

from ardraw.vision.frame_data import Point2D, PointerState


class StrokeSegment(NamedTuple):
    start: Point2D
    end: Point2D


class StrokeTracker:
    """
    Turns per-frame pointer states into line segments.

    The last anchored point is the only state carried between frames.
    Losing the gesture (or the hand) drops the anchor, so a re-acquired
    hand always starts a fresh stroke instead of bridging the gap.
    """

    def __init__(self):
        self.last_point: Optional[Point2D] = None

    def update(self, state: PointerState) -> Optional[StrokeSegment]:
        if not state.pointing or state.position is None:
            self.last_point = None
            return None

        current = state.position
        previous = self.last_point
        self.last_point = current

        if previous is None:
            return None
        return StrokeSegment(previous, current)

    def reset(self):
        self.last_point = None

    @property
    def is_anchored(self) -> bool:
        return self.last_point is not None
