"""
Camera Capture (OpenCV Adapter)
===============================
This module delivers the S x S RGBA canvases consumed by the field engine.

Why is this file needed?
------------------------
1. Acquisition: It wraps cv2.VideoCapture for webcams (device index) and video
   files (path), so the rest of the app never touches OpenCV.
2. Translation: It converts OpenCV's BGR frames of arbitrary size into the
   fixed-size, horizontally mirrored RGBA canvas the engine expects.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Protocol, Union

import cv2 as cv
import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

Source = Union[int, str]


class CameraUnavailableError(RuntimeError):
    """The capture device or video file could not be opened."""


class FrameSource(Protocol):
    """Anything that can be opened, read frame by frame as RGBA canvases, and closed."""
    def open(self) -> None: ...
    def read_frame(self) -> Optional[npt.NDArray[np.uint8]]: ...
    def close(self) -> None: ...


def parse_source(text: str) -> Source:
    """'0' -> device 0, anything else is treated as a file path / URL."""
    text = text.strip()
    return int(text) if text.isdigit() else text


def to_pixel_buffer(frame: npt.NDArray[np.uint8], size: int, mirror: bool = True) -> npt.NDArray[np.uint8]:
    """
    Convert an OpenCV frame into an (S, S, 4) RGBA canvas.

    The whole frame is stretched onto the square canvas (aspect ratio is not
    preserved) and mirrored horizontally so the preview behaves like a mirror.

    Args:
        frame: BGR (H, W, 3), BGRA (H, W, 4) or grayscale (H, W) uint8 frame.
        size: Canvas size S.
        mirror: Flip left/right.

    Returns:
        Contiguous (S, S, 4) uint8 RGBA array.
    """
    if frame.ndim == 2:
        code = cv.COLOR_GRAY2RGBA
    elif frame.shape[2] == 4:
        code = cv.COLOR_BGRA2RGBA
    elif frame.shape[2] == 3:
        code = cv.COLOR_BGR2RGBA
    else:
        raise ValueError(f"Unsupported frame shape {frame.shape}.")

    resized = cv.resize(frame, (size, size), interpolation=cv.INTER_AREA)
    if mirror:
        resized = cv.flip(resized, 1)
    return np.ascontiguousarray(cv.cvtColor(resized, code))


class CameraSource:
    """
    Frame source backed by cv2.VideoCapture.

    Usage:
        with CameraSource(0, canvas_size=256) as cam:
            canvas = cam.read_frame()
    """

    def __init__(self, source: Source = 0, canvas_size: int = 256, mirror: bool = True) -> None:
        self.source: Source = source
        self.canvas_size: int = canvas_size
        self.mirror: bool = mirror
        self._cap: Optional[cv.VideoCapture] = None

    @property
    def is_open(self) -> bool:
        return self._cap is not None and self._cap.isOpened()

    @property
    def fps(self) -> float:
        """Nominal frame rate reported by the device, 0.0 if unknown."""
        if not self.is_open:
            return 0.0
        return float(self._cap.get(cv.CAP_PROP_FPS) or 0.0)

    def open(self) -> None:
        """
        Raises:
            CameraUnavailableError: If the source cannot be opened.
        """
        if self.is_open:
            return
        cap = cv.VideoCapture(self.source)
        if not cap.isOpened():
            cap.release()
            logger.error(f"Could not open capture source: {self.source!r}")
            raise CameraUnavailableError(
                f"Could not access the camera ({self.source!r}). "
                "Please ensure a camera is connected and permission is granted."
            )
        self._cap = cap
        logger.info(f"Capture source opened: {self.source!r}")

    def read_frame(self) -> Optional[npt.NDArray[np.uint8]]:
        """
        Grab the next frame as an RGBA canvas.

        Returns:
            (S, S, 4) uint8 array, or None when the stream has ended.
        """
        if not self.is_open:
            raise CameraUnavailableError("Capture source is not open.")
        ok, frame = self._cap.read()
        if not ok or frame is None:
            return None
        return to_pixel_buffer(frame, self.canvas_size, mirror=self.mirror)

    def close(self) -> None:
        if self._cap is not None:
            self._cap.release()
            self._cap = None
            logger.info(f"Capture source closed: {self.source!r}")

    def __enter__(self) -> CameraSource:
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
