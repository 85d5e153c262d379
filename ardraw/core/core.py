import logging

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import QApplication

from ardraw.canvas.canvas import BrushConfig
from ardraw.canvas.compositor import frame_to_qimage, save_capture
from ardraw.config import Cfg, load_config
from ardraw.core.session import DrawingSession
from ardraw.ui.ui import MainWindow
from ardraw.vision.camera_service import CameraService, draw_hand_skeleton

logger = logging.getLogger(__name__)


class AppCore:
    def __init__(self, sys_argv, config: Cfg = None):
        self.app = QApplication(sys_argv)
        self.app.setStyle("Fusion")

        self.config = config or load_config()

        self.camera = CameraService(self.config.camera, self.config.mediapipe)
        self.session = DrawingSession(
            brush=BrushConfig(self.config.brush.color, self.config.brush.width),
            mirror=self.config.display.mirror,
            frame_source=self.camera,
        )

        self.window = MainWindow(
            self.session,
            self.config.brush,
            capture_sink=self._save_capture,
            title=self.config.display.window_name,
        )
        self.window.on_close = self.shutdown
        self.window.resize(self.config.camera.width, self.config.camera.height)
        self.window.show()

        self.timer = QTimer()
        self.timer.timeout.connect(self._game_loop)
        self.timer.start(self.config.display.frame_interval_ms)

    def run(self):
        return self.app.exec()

    def shutdown(self):
        self.timer.stop()
        self.session.close()

    def _save_capture(self, image):
        return save_capture(image, self.config.capture.directory, self.config.capture.prefix)

    def _game_loop(self):
        if not self.session.tracking_enabled:
            return

        detection = self.camera.get_frame_data()
        if detection is None:
            return

        self.session.on_frame(detection)

        if detection.raw_frame is not None:
            # Skeleton goes on a copy so captures keep the clean frame
            display_frame = detection.raw_frame.copy()
            if self.config.display.show_landmarks and detection.hands:
                draw_hand_skeleton(display_frame, detection.hands)
            self.window.view.set_video_frame(frame_to_qimage(display_frame, self.config.display.mirror))
        else:
            self.window.view.update()
