import logging
from typing import Callable, Optional

import numpy as np
from PySide6.QtGui import QImage

from ardraw.canvas.canvas import BrushConfig, InkSurface
from ardraw.canvas.compositor import composite
from ardraw.canvas.tracker import StrokeTracker
from ardraw.vision.frame_data import FrameDetection
from ardraw.vision.gesture_detector import GestureDetector
from ardraw.vision.mapper import CoordinateMapper

logger = logging.getLogger(__name__)


class DrawingSession:
    """
    Frame-driven drawing engine.

    on_frame() runs classification, stroke tracking and drawing for one
    frame synchronously. Configuration calls only write plain fields; the
    brush is picked up at the start of the next frame so a change never
    lands in the middle of a draw.
    """

    def __init__(self, brush: Optional[BrushConfig] = None, mirror: bool = True, frame_source=None):
        self.mapper = CoordinateMapper(mirror=mirror)
        self.detector = GestureDetector(self.mapper)
        self.tracker = StrokeTracker()
        self.surface = InkSurface(brush=brush)

        # Object with start()/stop(), e.g. CameraService
        self.frame_source = frame_source

        self._brush = self.surface.brush
        self._tracking_enabled = False
        self._drawing_enabled = False
        self._pointing = False
        self._alive = True
        self._last_frame: Optional[np.ndarray] = None

    # --- frame callback ---

    def on_frame(self, detection: Optional[FrameDetection]) -> bool:
        """Processes one frame and returns whether the hand is pointing."""
        if not self._alive:
            logger.debug("Frame delivered after close, ignoring")
            return False
        if not self._tracking_enabled:
            return False

        if detection is not None and detection.raw_frame is not None:
            self._last_frame = detection.raw_frame

        self.surface.configure(self._brush)

        try:
            state = self.detector.classify_detection(detection)
            self._pointing = state.pointing

            if self._drawing_enabled:
                segment = self.tracker.update(state)
                if segment is not None:
                    self.surface.draw_segment(segment)
        except Exception:
            logger.warning("Failed to process frame, dropping it", exc_info=True)
            self.tracker.reset()
            self._pointing = False

        return self._pointing

    # --- configuration events ---

    def set_tracking_enabled(self, enabled: bool):
        if enabled == self._tracking_enabled:
            return

        self.tracker.reset()
        self._pointing = False

        if enabled:
            if self.frame_source is not None:
                # CameraUnavailableError leaves tracking off
                self.frame_source.start()
            self._tracking_enabled = True
            logger.info("Hand tracking started")
        else:
            self._tracking_enabled = False
            if self.frame_source is not None:
                self.frame_source.stop()
            logger.info("Hand tracking paused")

    def set_drawing_enabled(self, enabled: bool):
        if enabled == self._drawing_enabled:
            return
        self._drawing_enabled = enabled
        self.tracker.reset()
        logger.info("Drawing mode %s", "activated" if enabled else "deactivated")

    def set_brush_color(self, color: str):
        self._brush = BrushConfig(color=color, width=self._brush.width)

    def set_brush_width(self, width: float):
        self._brush = BrushConfig(color=self._brush.color, width=float(width))

    def request_clear(self):
        self.surface.clear()
        self.tracker.reset()
        logger.info("Drawing cleared")

    def request_capture(self, sink: Callable[[QImage], object]) -> QImage:
        """Flattens the last frame with the ink and hands it to sink. Raises CaptureError."""
        image = composite(self._last_frame, self.surface, mirror=self.mapper.mirror)
        sink(image)
        return image

    def on_surface_resized(self, width: int, height: int, device_pixel_ratio: float = 1.0):
        self.mapper.resize(width, height)
        self.surface.resize(width, height, device_pixel_ratio)
        self.tracker.reset()

    def close(self):
        if not self._alive:
            return
        self._alive = False
        self.tracker.reset()
        self._tracking_enabled = False
        if self.frame_source is not None:
            self.frame_source.stop()
        logger.info("Drawing session closed")

    # --- state for UI ---

    @property
    def tracking_enabled(self) -> bool:
        return self._tracking_enabled

    @property
    def drawing_enabled(self) -> bool:
        return self._drawing_enabled

    @property
    def pointing(self) -> bool:
        return self._pointing

    @property
    def brush(self) -> BrushConfig:
        return self._brush

    @property
    def is_alive(self) -> bool:
        return self._alive

    @property
    def last_frame(self) -> Optional[np.ndarray]:
        return self._last_frame

    def status_text(self) -> str:
        if not self._tracking_enabled:
            return "Tracking Paused"
        if self._drawing_enabled:
            return "Drawing" if self._pointing else "Point to Draw"
        return "Tracking Active"
