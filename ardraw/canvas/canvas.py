import logging
from dataclasses import dataclass
from typing import Optional

from PySide6.QtCore import QPointF, Qt
from PySide6.QtGui import QColor, QImage, QPainter, QPen

from .tracker import StrokeSegment

logger = logging.getLogger(__name__)

DEFAULT_COLOR = "#00FFFF"
DEFAULT_WIDTH = 4.0


@dataclass(frozen=True)
class BrushConfig:
    """Stroke colour (#RRGGBB or any name QColor understands) and width in logical pixels."""
    color: str = DEFAULT_COLOR
    width: float = DEFAULT_WIDTH

    def __post_init__(self):
        if not QColor(self.color).isValid():
            raise ValueError(f"Invalid brush color: {self.color!r}")
        if not self.width > 0:
            raise ValueError(f"Brush width must be positive, got {self.width!r}")

    def qcolor(self) -> QColor:
        return QColor(self.color)


class InkSurface:
    """
    Persistent raster layer holding everything drawn so far.

    The buffer is transparent outside strokes and lives independently of
    the camera feed. Coordinates passed in are logical pixels; the backing
    QImage is allocated at logical size * device pixel ratio.
    """

    def __init__(self, width: int = 0, height: int = 0,
                 device_pixel_ratio: float = 1.0, brush: Optional[BrushConfig] = None):
        self.brush = brush or BrushConfig()
        self.width = 0
        self.height = 0
        self.device_pixel_ratio = 1.0
        self._image: Optional[QImage] = None
        self.resize(width, height, device_pixel_ratio)

    @property
    def is_available(self) -> bool:
        return self._image is not None

    @property
    def image(self) -> Optional[QImage]:
        return self._image

    def configure(self, brush: BrushConfig):
        self.brush = brush

    def resize(self, width: int, height: int, device_pixel_ratio: float = 1.0):
        """Reallocates the buffer. Existing ink is discarded, not resampled."""
        if self._image is not None and not self.is_empty():
            logger.debug("Surface resized to %sx%s, discarding existing ink", width, height)

        if width <= 0 or height <= 0 or device_pixel_ratio <= 0:
            self.width = 0
            self.height = 0
            self._image = None
            return

        self.width = width
        self.height = height
        self.device_pixel_ratio = device_pixel_ratio

        physical_w = max(1, round(width * device_pixel_ratio))
        physical_h = max(1, round(height * device_pixel_ratio))
        image = QImage(physical_w, physical_h, QImage.Format.Format_ARGB32_Premultiplied)
        image.setDevicePixelRatio(device_pixel_ratio)
        image.fill(Qt.GlobalColor.transparent)
        self._image = image

    def draw_segment(self, segment: StrokeSegment):
        if self._image is None:
            return

        painter = QPainter(self._image)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        pen = QPen(self.brush.qcolor())
        pen.setWidthF(self.brush.width)
        pen.setCapStyle(Qt.PenCapStyle.RoundCap)
        pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
        painter.setPen(pen)

        painter.drawLine(QPointF(*segment.start), QPointF(*segment.end))
        painter.end()

    def clear(self):
        if self._image is not None:
            self._image.fill(Qt.GlobalColor.transparent)

    def is_empty(self) -> bool:
        if self._image is None:
            return True
        blank = QImage(self._image.size(), self._image.format())
        blank.fill(Qt.GlobalColor.transparent)
        return self._image == blank

    def pixel(self, x: int, y: int) -> QColor:
        """Colour of a physical pixel of the buffer."""
        if self._image is None:
            return QColor(Qt.GlobalColor.transparent)
        return self._image.pixelColor(x, y)
