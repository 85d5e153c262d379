import logging
import time
from pathlib import Path
from typing import Optional, Union

import cv2
import numpy as np
from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import QImage, QPainter

from ardraw.errors import CaptureError
from .canvas import InkSurface

logger = logging.getLogger(__name__)


def frame_to_qimage(frame: np.ndarray, mirror: bool = True) -> QImage:
    """BGR (or grayscale) OpenCV frame -> detached RGB QImage, optionally mirrored."""
    if mirror:
        frame = cv2.flip(frame, 1)

    if frame.ndim == 2:
        rgb = cv2.cvtColor(frame, cv2.COLOR_GRAY2RGB)
    else:
        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)

    h, w, ch = rgb.shape
    # copy() detaches from the numpy buffer
    return QImage(rgb.data, w, h, ch * w, QImage.Format.Format_RGB888).copy()


def composite(video_frame: Optional[np.ndarray], ink: Optional[InkSurface],
              mirror: bool = True) -> QImage:
    """
    Flattens the live frame and the ink layer into one image.

    The mirrored video is the base layer, stretched to the surface's logical
    size; the ink buffer goes on top unscaled. Neither input is modified.
    """
    if video_frame is None or video_frame.size == 0:
        raise CaptureError("No camera frame available to capture")
    if ink is None or not ink.is_available:
        raise CaptureError("Drawing surface is not ready")

    base = frame_to_qimage(video_frame, mirror)
    ink_image = ink.image

    result = QImage(ink_image.size(), QImage.Format.Format_ARGB32)
    result.setDevicePixelRatio(ink.device_pixel_ratio)
    result.fill(Qt.GlobalColor.black)

    painter = QPainter(result)
    painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
    painter.drawImage(QRectF(0, 0, ink.width, ink.height), base)
    painter.drawImage(QPointF(0, 0), ink_image)
    painter.end()

    return result


def save_capture(image: QImage, directory: Union[str, Path], prefix: str = "ar-drawing") -> Path:
    """Writes a PNG named <prefix>-<epoch millis>.png and returns its path."""
    target_dir = Path(directory)
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise CaptureError(f"Cannot create capture directory {target_dir}: {e}") from e

    path = target_dir / f"{prefix}-{int(time.time() * 1000)}.png"
    if not image.save(str(path), "PNG"):
        raise CaptureError(f"Failed to write {path}")

    logger.info("Capture saved to %s", path)
    return path
