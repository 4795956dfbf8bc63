"""
Main Application Window
=======================
The primary GUI container: control panel on the left, point cloud on the right.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It connects the control panel, the frame ticker and the 3D view so
   that each engine tick ends up on screen.
"""
from __future__ import annotations

import logging

from PySide6.QtCore import Qt
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import QMainWindow, QMessageBox, QSplitter

from hamiltonianfield.capture.camera import FrameSource
from hamiltonianfield.config import DEFAULT_PRESET, THRESHOLD_PRESETS
from hamiltonianfield.controller.ticker import FrameTicker
from hamiltonianfield.engine.engine import FieldEngine, FrameResult
from hamiltonianfield.view.panels.stream_panel import StreamControlPanel
from hamiltonianfield.view.widgets.point_cloud import PointCloudWidget

logger = logging.getLogger(__name__)

VISIBLE_APP_NAME = "Hamiltonian Field"


class MainWindow(QMainWindow):
    def __init__(self, engine: FieldEngine, source: FrameSource, fps: int, preset: str = DEFAULT_PRESET) -> None:
        super().__init__()
        self.engine = engine
        self.ticker = FrameTicker(engine, source, fps=fps)

        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1400, 900)

        splitter = QSplitter(Qt.Horizontal)
        self.setCentralWidget(splitter)

        # --- LEFT SIDE: Controls + Status ---
        self.panel = StreamControlPanel(resolution=engine.resolution, preset=preset)
        splitter.addWidget(self.panel)

        # --- RIGHT SIDE: 3D Visualization ---
        self.visualizer = PointCloudWidget()
        splitter.addWidget(self.visualizer)

        splitter.setSizes([350, 1050])

        # --- SIGNAL CONNECTIONS ---
        self.panel.resolution_changed.connect(self.on_resolution_changed)
        self.panel.preset_changed.connect(self.on_preset_changed)
        self.panel.start_requested.connect(self.ticker.start)
        self.panel.stop_requested.connect(self.ticker.stop)

        self.ticker.frame_processed.connect(self.on_frame_processed)
        self.ticker.capture_failed.connect(self.on_capture_failed)
        self.ticker.stopped.connect(lambda: self.panel.set_running(False))

        self.visualizer.update_from_engine(self.engine)

    def start(self) -> None:
        self.panel.set_running(True)
        self.ticker.start()
        if not self.ticker.is_running:
            self.panel.set_running(False)

    # --- Slots ---

    def on_frame_processed(self, result: FrameResult) -> None:
        self.visualizer.update_from_engine(self.engine)
        self.panel.show_report(result.report)

    def on_resolution_changed(self, resolution: int) -> None:
        self.engine.set_resolution(resolution)
        if not self.ticker.is_running:
            self.visualizer.update_from_engine(self.engine)

    def on_preset_changed(self, name: str) -> None:
        buckets, states = THRESHOLD_PRESETS[name]
        self.engine.set_bucket_thresholds(buckets.low, buckets.high)
        self.engine.set_state_thresholds(states.motion, states.energy)

    def on_capture_failed(self, message: str) -> None:
        self.panel.set_running(False)
        QMessageBox.critical(self, "Camera", message)

    def closeEvent(self, event: QCloseEvent) -> None:
        self.ticker.stop()
        self.visualizer.close_plotter()
        super().closeEvent(event)
