"""
Tests for the single-frame pointing classifier.
"""
import unittest
from types import SimpleNamespace

from ardraw.vision.frame_data import FrameDetection, Landmark, Point2D, PointerState
from ardraw.vision.gesture_detector import GestureDetector, is_pointing
from ardraw.vision.mapper import CoordinateMapper


def make_hand(tip=(0.5, 0.3), pointing=True):
    """21 landmarks with the index tip at `tip`; middle finger folded when pointing."""
    hand = [Landmark(0.5, 0.5, 0.0) for _ in range(21)]
    hand[5] = Landmark(0.5, 0.7, 0.0)   # index MCP, below any tip used here
    hand[8] = Landmark(tip[0], tip[1], 0.0)
    hand[10] = Landmark(0.55, 0.6, 0.0)  # middle PIP
    if pointing:
        hand[12] = Landmark(0.55, 0.75, 0.0)  # folded: tip below PIP
    else:
        hand[12] = Landmark(0.55, 0.2, 0.0)   # extended
    return hand


class TestIsPointing(unittest.TestCase):
    """Test the two-comparison pointing heuristic."""

    def test_index_up_middle_folded(self):
        self.assertTrue(is_pointing(make_hand()))

    def test_middle_extended_is_not_pointing(self):
        self.assertFalse(is_pointing(make_hand(pointing=False)))

    def test_index_below_mcp_is_not_pointing(self):
        """Index tip lower in the image than its base means the finger is curled."""
        hand = make_hand(tip=(0.5, 0.9))
        self.assertFalse(is_pointing(hand))

    def test_equal_heights_are_not_pointing(self):
        hand = make_hand()
        hand[8] = Landmark(0.5, hand[5].y, 0.0)
        self.assertFalse(is_pointing(hand))

    def test_missing_landmarks_never_point(self):
        """Removing any consulted index yields False without raising."""
        for idx in (5, 8, 10, 12):
            hand = make_hand()
            hand[idx] = None
            self.assertFalse(is_pointing(hand), f"index {idx}")

    def test_truncated_hands_never_point(self):
        for length in (0, 1, 6, 9, 11, 12):
            self.assertFalse(is_pointing(make_hand()[:length]), f"length {length}")

    def test_no_hand(self):
        self.assertFalse(is_pointing(None))

    def test_accepts_mediapipe_style_objects(self):
        hand = [SimpleNamespace(x=p.x, y=p.y, z=p.z) for p in make_hand()]
        self.assertTrue(is_pointing(hand))


class TestGestureDetector(unittest.TestCase):
    """Test classification into pointer states."""

    def setUp(self):
        self.mapper = CoordinateMapper(640, 480)
        self.detector = GestureDetector(self.mapper)

    def test_pointing_state_has_mapped_position(self):
        state = self.detector.classify(make_hand(tip=(0.25, 0.5)))

        self.assertTrue(state.pointing)
        self.assertAlmostEqual(state.position.x, 480.0)
        self.assertAlmostEqual(state.position.y, 240.0)

    def test_not_pointing_has_no_position(self):
        state = self.detector.classify(make_hand(pointing=False))
        self.assertEqual(state, PointerState(pointing=False, position=None))

    def test_missing_landmark_state(self):
        hand = make_hand()
        hand[8] = None
        state = self.detector.classify(hand)
        self.assertFalse(state.pointing)
        self.assertIsNone(state.position)

    def test_empty_detection(self):
        state = self.detector.classify_detection(FrameDetection())
        self.assertFalse(state.pointing)
        self.assertIsNone(state.position)

    def test_none_detection(self):
        self.assertFalse(self.detector.classify_detection(None).pointing)

    def test_only_first_hand_is_used(self):
        """A pointing second hand is ignored when the first hand is not pointing."""
        detection = FrameDetection(hands=(make_hand(pointing=False), make_hand()))
        self.assertFalse(self.detector.classify_detection(detection).pointing)

        detection = FrameDetection(hands=(make_hand(tip=(0.5, 0.5)), make_hand(tip=(0.1, 0.1))))
        state = self.detector.classify_detection(detection)
        self.assertTrue(state.pointing)
        self.assertEqual(state.position, Point2D(320.0, 240.0))

    def test_position_follows_surface_resize(self):
        hand = make_hand(tip=(0.5, 0.5))
        self.assertEqual(self.detector.classify(hand).position, Point2D(320.0, 240.0))

        self.mapper.resize(100, 50)
        self.assertEqual(self.detector.classify(hand).position, Point2D(50.0, 25.0))


if __name__ == '__main__':
    unittest.main()
