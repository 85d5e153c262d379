from dataclasses import dataclass
from typing import NamedTuple, Optional, Sequence, Tuple
import numpy as np

# MediaPipe hand skeleton indices consulted by the gesture classifier
INDEX_MCP = 5
INDEX_TIP = 8
MIDDLE_PIP = 10
MIDDLE_TIP = 12

NUM_HAND_LANDMARKS = 21


class Landmark(NamedTuple):
    """Normalized point; (0, 0) is the top-left of the image seen by the detector."""
    x: float
    y: float
    z: float = 0.0


class Point2D(NamedTuple):
    """Point in target-surface pixel space."""
    x: float
    y: float


# 21 landmarks in MediaPipe order. Entries may be any object with x/y/z attributes.
HandPose = Sequence[Landmark]


@dataclass(frozen=True)
class PointerState:
    pointing: bool = False
    position: Optional[Point2D] = None


@dataclass
class FrameDetection:
    # Detected hands in detection order
    hands: Tuple[HandPose, ...] = ()

    # Source image dimensions in pixels
    width: int = 0
    height: int = 0

    # Raw frame (BGR, numpy array), not mirrored
    raw_frame: Optional[np.ndarray] = None

    # Metrics
    fps: float = 0.0
    latency_ms: float = 0.0

    @property
    def first_hand(self) -> Optional[HandPose]:
        return self.hands[0] if self.hands else None


def to_landmarks(points) -> Tuple[Landmark, ...]:
    """Copies MediaPipe (or any x/y/z) landmarks into immutable Landmark tuples."""
    return tuple(Landmark(float(p.x), float(p.y), float(getattr(p, "z", 0.0))) for p in points)
