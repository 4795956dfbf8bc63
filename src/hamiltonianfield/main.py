"""
Application Initialization
==========================
This module wires the engine, the capture source and the GUI together and
starts either the Qt event loop or a headless capture loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Parses the command line and sets up logging.
2. Instantiates the field engine (Model) and the capture source.
3. Passes both into the Main Window (View), or runs them without a GUI.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from hamiltonianfield.capture.camera import CameraSource, CameraUnavailableError, FrameSource, parse_source
from hamiltonianfield.config import (
    DEFAULT_CANVAS_SIZE, DEFAULT_FPS, DEFAULT_PRESET, DEFAULT_RESOLUTION, THRESHOLD_PRESETS, EngineConfig
)
from hamiltonianfield.engine.engine import FieldEngine
from hamiltonianfield.engine.errors import InvalidConfigurationError
from hamiltonianfield.logging_config import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="hamiltonianfield",
        description="Live camera -> Hamiltonian energy field point cloud.",
    )
    p.add_argument("--source", default="0", help="Camera index or video file path (default: 0)")
    p.add_argument("--resolution", type=int, default=DEFAULT_RESOLUTION, help="Grid size N (N x N points)")
    p.add_argument("--canvas-size", type=int, default=DEFAULT_CANVAS_SIZE, help="Capture canvas size S (S x S pixels)")
    p.add_argument("--fps", type=int, default=DEFAULT_FPS, help="Ticks per second")
    p.add_argument("--preset", choices=sorted(THRESHOLD_PRESETS), default=DEFAULT_PRESET, help="Threshold preset")
    p.add_argument("--no-mirror", action="store_true", help="Do not mirror the camera image")
    p.add_argument("--headless", action="store_true", help="Run without a window and log every report")
    p.add_argument("--frames", type=int, default=0, help="Headless: stop after this many frames (0 = until the stream ends)")
    p.add_argument("--log-level", default="INFO", help="DEBUG, INFO, WARNING, ...")
    p.add_argument("--log-file", default=None, help="Optional log file")
    return p


def run_headless(engine: FieldEngine, source: FrameSource, frames: int = 0) -> int:
    """
    Feed frames from `source` into `engine` until the stream ends or `frames`
    frames were processed. Every report is logged.

    Returns:
        Number of processed frames.

    Raises:
        CameraUnavailableError: If the source cannot be opened.
    """
    source.open()
    processed = 0
    try:
        while frames <= 0 or processed < frames:
            canvas = source.read_frame()
            if canvas is None:
                logger.info("Capture source reached the end of the stream.")
                break
            result = engine.submit_frame(canvas)
            logger.info("\n" + result.report)
            processed += 1
    finally:
        source.close()
    return processed


def run_gui(engine: FieldEngine, source: FrameSource, fps: int, preset: str) -> int:
    # Qt is only imported when a window is actually needed
    from PySide6.QtWidgets import QApplication

    from hamiltonianfield.view.main_window import MainWindow

    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName("Hamiltonian Field")

    window = MainWindow(engine, source, fps=fps, preset=preset)
    window.show()
    window.start()

    return app.exec()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    # 1. Setup Logging (Console + Optional File)
    setup_logging(level=args.log_level, log_file=args.log_file)

    # 2. Initialize the Engine
    try:
        config = EngineConfig.from_preset(args.preset, canvas_size=args.canvas_size, resolution=args.resolution)
        engine = FieldEngine(config)
    except InvalidConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    # 3. Capture source
    source = CameraSource(parse_source(args.source), canvas_size=args.canvas_size, mirror=not args.no_mirror)

    # 4. Run
    if args.headless:
        try:
            count = run_headless(engine, source, frames=args.frames)
        except CameraUnavailableError as e:
            logger.error(str(e))
            return 1
        logger.info(f"Processed {count} frames.")
        return 0

    return run_gui(engine, source, fps=args.fps, preset=args.preset)
