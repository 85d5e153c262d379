from typing import Optional

from .frame_data import (
    FrameDetection, HandPose, PointerState,
    INDEX_MCP, INDEX_TIP, MIDDLE_PIP, MIDDLE_TIP,
)
from .mapper import CoordinateMapper


def _landmark(hand: HandPose, idx: int):
    """Landmark at idx, or None if the hand does not carry it."""
    if hand is None or idx >= len(hand):
        return None
    return hand[idx]


def is_pointing(hand: Optional[HandPose]) -> bool:
    """
    Index finger up, middle finger folded.
    Image y grows downward: "above" means a smaller y.
    """
    index_tip = _landmark(hand, INDEX_TIP)
    index_mcp = _landmark(hand, INDEX_MCP)
    middle_tip = _landmark(hand, MIDDLE_TIP)
    middle_pip = _landmark(hand, MIDDLE_PIP)

    if index_tip is None or index_mcp is None or middle_tip is None or middle_pip is None:
        return False

    index_extended = index_tip.y < index_mcp.y
    middle_folded = middle_tip.y > middle_pip.y
    return index_extended and middle_folded


class GestureDetector:
    """
    Single-frame pointing classifier. Holds no memory between frames;
    continuity is the stroke tracker's job.
    """

    def __init__(self, mapper: CoordinateMapper):
        self.mapper = mapper

    def classify(self, hand: Optional[HandPose]) -> PointerState:
        if not is_pointing(hand):
            return PointerState()
        return PointerState(pointing=True, position=self.mapper.map(hand[INDEX_TIP]))

    def classify_detection(self, detection: Optional[FrameDetection]) -> PointerState:
        # Only the first hand in detection order may draw
        if detection is None:
            return PointerState()
        return self.classify(detection.first_hand)
