"""
Frame Ticker (Main-Thread Loop)
===============================
Drives the field engine from a QTimer: one camera frame, one engine pass.

Why is this file needed?
------------------------
1. Cadence: The engine is tick-driven and never blocks. This class owns the
   schedule (start/stop, FPS) so the engine does not have to.
2. Signals: It hands every FrameResult to the GUI through Qt Signals, and
   reports capture failures without crashing the event loop.

Classes:
    FrameTicker: Timer-driven capture -> engine loop.
"""
from __future__ import annotations

import logging

from PySide6.QtCore import QObject, QTimer, Signal

from hamiltonianfield.capture.camera import CameraUnavailableError, FrameSource
from hamiltonianfield.engine.engine import FieldEngine

logger = logging.getLogger(__name__)


class FrameTicker(QObject):
    # Signals to update the UI
    frame_processed = Signal(object)  # FrameResult
    capture_failed = Signal(str)
    stopped = Signal()

    def __init__(self, engine: FieldEngine, source: FrameSource, fps: int = 30) -> None:
        super().__init__()
        self.engine = engine
        self.source = source

        self.timer = QTimer(self)
        self.timer.timeout.connect(self.tick)
        self.set_fps(fps)

    @property
    def is_running(self) -> bool:
        return self.timer.isActive()

    def set_fps(self, fps: int) -> None:
        fps = max(1, int(fps))
        self.timer.setInterval(int(1000 / fps))

    def start(self) -> None:
        if self.is_running:
            return
        try:
            self.source.open()
        except CameraUnavailableError as e:
            self.capture_failed.emit(str(e))
            return
        logger.info(f"Ticker started ({self.timer.interval()} ms per frame).")
        self.timer.start()

    def stop(self) -> None:
        if not self.is_running:
            return
        self.timer.stop()
        self.source.close()
        logger.info(f"Ticker stopped after {self.engine.frame_count} frames.")
        self.stopped.emit()

    def tick(self) -> None:
        try:
            canvas = self.source.read_frame()
        except CameraUnavailableError as e:
            logger.error(f"Capture failed: {e}")
            self.stop()
            self.capture_failed.emit(str(e))
            return

        if canvas is None:
            logger.info("Capture source reached the end of the stream.")
            self.stop()
            return

        result = self.engine.submit_frame(canvas)
        self.frame_processed.emit(result)
