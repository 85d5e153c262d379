import logging
from typing import Callable, List, Optional

from PySide6.QtCore import QRectF, Qt
from PySide6.QtGui import QColor, QImage, QKeyEvent, QPainter, QPaintEvent, QResizeEvent, QCloseEvent
from PySide6.QtWidgets import QMainWindow, QSizePolicy, QStatusBar, QWidget

from ardraw.config import BrushDefaults
from ardraw.core.session import DrawingSession
from ardraw.errors import ArDrawError

logger = logging.getLogger(__name__)

HELP_TEXT = "T: tracking | D: drawing | 1-8: color | [ ]: size | C: clear | S: capture | Q: quit"


# --- DRAWING VIEW ---
class DrawingView(QWidget):
    """Live camera frame with the ink layer on top. Its size is the drawing surface."""

    def __init__(self, session: DrawingSession, parent=None):
        super().__init__(parent)
        self._session = session
        self._video: Optional[QImage] = None
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setMinimumSize(320, 240)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)

    def set_video_frame(self, image: QImage):
        self._video = image
        self.update()

    def resizeEvent(self, event: QResizeEvent):
        super().resizeEvent(event)
        size = event.size()
        self._session.on_surface_resized(size.width(), size.height(), self.devicePixelRatioF())

    def paintEvent(self, event: QPaintEvent):
        painter = QPainter(self)
        painter.fillRect(self.rect(), Qt.GlobalColor.black)

        if self._video is not None:
            painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
            painter.drawImage(QRectF(self.rect()), self._video)

        ink = self._session.surface.image
        if ink is not None:
            painter.drawImage(0, 0, ink)

        self._draw_status(painter)
        painter.end()

    def _draw_status(self, painter: QPainter):
        session = self._session
        if not session.tracking_enabled:
            dot = QColor(120, 120, 120)
        elif session.pointing and session.drawing_enabled:
            dot = QColor(0, 255, 0)
        else:
            dot = QColor(0, 255, 255)

        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QColor(0, 0, 0, 140))
        painter.drawRoundedRect(QRectF(12, 12, 190, 32), 8, 8)
        painter.setBrush(dot)
        painter.drawEllipse(QRectF(24, 24, 8, 8))
        painter.setPen(Qt.GlobalColor.white)
        painter.drawText(QRectF(40, 12, 160, 32), Qt.AlignmentFlag.AlignVCenter, session.status_text())


# --- MAIN WINDOW ---
class MainWindow(QMainWindow):
    def __init__(self, session: DrawingSession, brush: BrushDefaults,
                 capture_sink: Callable[[QImage], object], title: str = "AR Hand Drawing"):
        super().__init__()
        self._session = session
        self._palette: List[str] = list(brush.palette)
        self._sizes: List[float] = sorted(brush.sizes)
        self._capture_sink = capture_sink
        self.on_close: Optional[Callable[[], None]] = None

        self.setWindowTitle(title)
        self.view = DrawingView(session, self)
        self.setCentralWidget(self.view)

        self.status_bar = QStatusBar()
        self.setStatusBar(self.status_bar)
        self.status_bar.showMessage(HELP_TEXT)

    def keyPressEvent(self, event: QKeyEvent):
        key = event.key()
        text = event.text()

        if key == Qt.Key.Key_T:
            self.toggle_tracking()
        elif key == Qt.Key.Key_D:
            self.toggle_drawing()
        elif key == Qt.Key.Key_C:
            self.clear()
        elif key == Qt.Key.Key_S:
            self.capture()
        elif key == Qt.Key.Key_BracketLeft:
            self._step_size(-1)
        elif key == Qt.Key.Key_BracketRight:
            self._step_size(1)
        elif text and text in "123456789"[:len(self._palette)]:
            self.set_color(self._palette[int(text) - 1])
        elif key in (Qt.Key.Key_Q, Qt.Key.Key_Escape):
            self.close()
        else:
            super().keyPressEvent(event)

    def toggle_tracking(self):
        enable = not self._session.tracking_enabled
        try:
            self._session.set_tracking_enabled(enable)
        except ArDrawError as e:
            logger.error("Cannot start tracking: %s", e)
            self.status_bar.showMessage(f"Failed to start camera: {e}", 5000)
            return

        if not enable and self._session.drawing_enabled:
            self._session.set_drawing_enabled(False)
        self.status_bar.showMessage("Hand tracking started!" if enable else "Hand tracking paused", 3000)
        self.view.update()

    def toggle_drawing(self):
        if not self._session.tracking_enabled:
            self.status_bar.showMessage("Start tracking first (T)", 3000)
            return
        enable = not self._session.drawing_enabled
        self._session.set_drawing_enabled(enable)
        self.status_bar.showMessage(
            "Drawing mode activated! Point with your index finger to draw."
            if enable else "Drawing mode deactivated", 3000)
        self.view.update()

    def set_color(self, color: str):
        self._session.set_brush_color(color)
        self.status_bar.showMessage(f"Color: {color}", 2000)

    def _step_size(self, direction: int):
        current = self._session.brush.width
        if direction > 0:
            larger = [s for s in self._sizes if s > current]
            new_size = larger[0] if larger else self._sizes[-1]
        else:
            smaller = [s for s in self._sizes if s < current]
            new_size = smaller[-1] if smaller else self._sizes[0]
        self._session.set_brush_width(new_size)
        self.status_bar.showMessage(f"Brush size: {new_size:g}", 2000)

    def clear(self):
        self._session.request_clear()
        self.status_bar.showMessage("Drawing cleared!", 3000)
        self.view.update()

    def capture(self):
        try:
            self._session.request_capture(self._capture_sink)
        except ArDrawError as e:
            logger.warning("Capture failed: %s", e)
            self.status_bar.showMessage(f"Capture failed: {e}", 5000)
            return
        self.status_bar.showMessage("AR drawing saved!", 3000)

    def closeEvent(self, event: QCloseEvent):
        if self.on_close is not None:
            self.on_close()
        super().closeEvent(event)
