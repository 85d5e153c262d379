# ardraw/vision/camera_service.py
import logging
import time
from typing import Iterable, Optional

import cv2
import mediapipe as mp
import numpy as np

from ardraw.config import CameraConfig, MediaPipeConfig
from ardraw.errors import CameraUnavailableError
from .frame_data import FrameDetection, HandPose, to_landmarks
from .metrics import MetricsCollector

logger = logging.getLogger(__name__)

CONNECTION_COLOR = (255, 255, 0)  # BGR cyan
JOINT_COLOR = (255, 0, 255)       # BGR magenta


class CameraService:
    """
    Landmark frame source: webcam frames plus MediaPipe hand landmarks.

    Frames are NOT mirrored here; landmarks stay in the detector's own
    image space and mirroring happens when mapping and compositing.
    """

    def __init__(self, camera: Optional[CameraConfig] = None, hands: Optional[MediaPipeConfig] = None,
                 capture_factory=cv2.VideoCapture, hands_factory=None):
        self.cap = None
        self.hands = None

        self.camera_cfg = camera or CameraConfig()
        self.hands_cfg = hands or MediaPipeConfig()
        self._capture_factory = capture_factory
        self._hands_factory = hands_factory or mp.solutions.hands.Hands

        self.metrics = MetricsCollector()
        self.last_frame_time = 0.0

    @property
    def is_running(self) -> bool:
        return self.cap is not None

    def start(self):
        """Opens the camera and the MediaPipe session."""
        if self.is_running:
            return

        cap = self._capture_factory(self.camera_cfg.index)
        if not cap.isOpened():
            cap.release()
            raise CameraUnavailableError(f"Failed to open camera {self.camera_cfg.index}")

        cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.camera_cfg.width)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.camera_cfg.height)
        cap.set(cv2.CAP_PROP_FPS, self.camera_cfg.fps)

        self.hands = self._hands_factory(
            static_image_mode=False,
            max_num_hands=self.hands_cfg.max_num_hands,
            model_complexity=self.hands_cfg.model_complexity,
            min_detection_confidence=self.hands_cfg.min_detection_confidence,
            min_tracking_confidence=self.hands_cfg.min_tracking_confidence,
        )
        self.cap = cap
        self.metrics.reset()
        self.last_frame_time = time.perf_counter()
        logger.info("Camera %s opened", self.camera_cfg.index)

    def stop(self):
        """Releases the camera and the MediaPipe session."""
        if self.cap is not None:
            self.cap.release()
            self.cap = None
            logger.info("Camera %s released", self.camera_cfg.index)
        if self.hands is not None:
            self.hands.close()
            self.hands = None

    def get_frame_data(self) -> Optional[FrameDetection]:
        """
        Reads one frame and runs hand detection on it.
        Returns None when the service is stopped.
        """
        if not self.is_running:
            return None

        detection = FrameDetection()

        current_time = time.perf_counter()
        detection.latency_ms = (current_time - self.last_frame_time) * 1000
        self.last_frame_time = current_time

        ret, frame = self.cap.read()
        if not ret or frame is None:
            logger.debug("Camera returned no frame")
            return detection

        detection.raw_frame = frame
        detection.height, detection.width = frame.shape[:2]

        rgb_frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        results = self.hands.process(rgb_frame)

        if results.multi_hand_landmarks:
            detection.hands = tuple(
                to_landmarks(hand_landmarks.landmark) for hand_landmarks in results.multi_hand_landmarks
            )

        detection.fps = self.metrics.update()
        return detection

    def release(self):
        self.stop()

    def __del__(self):
        self.release()


def draw_hand_skeleton(frame: np.ndarray, hands: Iterable[HandPose]) -> np.ndarray:
    """Draws landmark connections and joints onto the (unmirrored) frame in place."""
    h, w = frame.shape[:2]
    for hand in hands:
        points = [(int(lm.x * w), int(lm.y * h)) for lm in hand]
        for start, end in mp.solutions.hands.HAND_CONNECTIONS:
            if start < len(points) and end < len(points):
                cv2.line(frame, points[start], points[end], CONNECTION_COLOR, 2, cv2.LINE_AA)
        for point in points:
            cv2.circle(frame, point, 3, JOINT_COLOR, -1, cv2.LINE_AA)
    return frame
