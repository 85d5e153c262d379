import time
from collections import deque


class MetricsCollector:
    def __init__(self, window: int = 30, clock=time.perf_counter):
        # ~1 second of frames at 30 FPS
        self.frame_times = deque(maxlen=window)
        self.clock = clock

    def update(self) -> float:
        """Called once per frame. Returns the current FPS."""
        self.frame_times.append(self.clock())

        if len(self.frame_times) < 2:
            return 0.0

        elapsed = self.frame_times[-1] - self.frame_times[0]
        if elapsed <= 0:
            return 0.0
        return (len(self.frame_times) - 1) / elapsed

    def reset(self):
        self.frame_times.clear()
