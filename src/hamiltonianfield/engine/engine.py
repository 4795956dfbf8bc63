"""
Hamiltonian Field Engine
========================
The per-tick pipeline that turns a camera canvas into an energy field.

Why is this file needed?
------------------------
1. Orchestration: It runs Sampler -> Field -> Aggregator -> Colors -> Render
   Buffers -> Report once per submitted frame, to completion.
2. State: It owns everything that lives across ticks (the current/previous
   brightness double buffer, the frame counter, the render buffers) as plain
   instance state with an explicit reset().
3. Reconfiguration: Resolution changes rebuild the grid and buffers atomically
   and raise a one-shot "geometry dirty" flag for the renderer.

Note: This module is pure NumPy and must NOT import PySide6 or PyVista.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, List, Optional

import numpy as np

from hamiltonianfield.config import BucketThresholds, EngineConfig, StateThresholds
from hamiltonianfield.engine.aggregate import FrameAggregate, aggregate_field
from hamiltonianfield.engine.buffers import RenderBuffers
from hamiltonianfield.engine.errors import InvalidConfigurationError
from hamiltonianfield.engine.field import EnergyField, compute_field
from hamiltonianfield.engine.report import format_report
from hamiltonianfield.engine.sampler import as_pixel_array, sample_brightness

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameResult:
    """Everything one tick produced."""
    frame: int
    field: EnergyField
    aggregate: FrameAggregate
    report: str


FrameListener = Callable[[FrameResult], None]


def _validate_size(value: object, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidConfigurationError(f"{name} must be an integer, got {value!r}.")
    if value <= 0:
        raise InvalidConfigurationError(f"{name} must be >= 1, got {value}.")
    return int(value)


class FieldEngine:
    """
    Single-threaded, tick-driven field engine.

    Usage:
        engine = FieldEngine(EngineConfig(canvas_size=256, resolution=128))
        result = engine.submit_frame(rgba_canvas)
        renderer.update(engine.positions, engine.colors)
        status.setText(engine.latest_report)
    """

    def __init__(self, config: Optional[EngineConfig] = None) -> None:
        config = config or EngineConfig()
        self._canvas_size: int = _validate_size(config.canvas_size, "Canvas size")
        self._buckets: BucketThresholds = BucketThresholds(config.buckets.low, config.buckets.high)
        self._check_buckets(self._buckets)
        self._states: StateThresholds = config.states

        self._listeners: List[FrameListener] = []
        self._in_pass: bool = False
        self._pending_resolution: Optional[int] = None

        self._frame_count: int = 0
        self._latest: Optional[FrameResult] = None

        self._resolution: int = 0
        self._rebuild_grid(_validate_size(config.resolution, "Resolution"))

        logger.info(
            f"Field engine ready: canvas {self._canvas_size}x{self._canvas_size}, "
            f"grid {self._resolution}x{self._resolution}."
        )

    # ------------------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------------------

    @property
    def canvas_size(self) -> int:
        return self._canvas_size

    @property
    def resolution(self) -> int:
        return self._resolution

    @property
    def pending_resolution(self) -> Optional[int]:
        """Resolution requested mid-pass, applied at the start of the next tick."""
        return self._pending_resolution

    @property
    def bucket_thresholds(self) -> BucketThresholds:
        return self._buckets

    @property
    def state_thresholds(self) -> StateThresholds:
        return self._states

    @property
    def frame_count(self) -> int:
        """Number of frames processed since construction or the last reset()."""
        return self._frame_count

    @property
    def has_previous(self) -> bool:
        return self._has_previous

    @property
    def buffers(self) -> RenderBuffers:
        return self._buffers

    @property
    def positions(self) -> npt.NDArray[np.float32]:
        return self._buffers.positions

    @property
    def depth(self) -> npt.NDArray[np.float32]:
        return self._buffers.depth

    @property
    def colors(self) -> npt.NDArray[np.float32]:
        return self._buffers.colors

    @property
    def geometry_dirty(self) -> bool:
        """True once per topology change until the renderer acknowledges it."""
        return self._geometry_dirty

    @property
    def latest_result(self) -> Optional[FrameResult]:
        return self._latest

    @property
    def latest_report(self) -> str:
        return self._latest.report if self._latest is not None else ""

    # ------------------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------------------

    def set_resolution(self, resolution: int) -> None:
        """
        Switch the grid to resolution x resolution cells.

        Applied immediately between ticks. Requested during a pass (e.g. from a
        frame listener) it is deferred to the start of the next submit_frame.

        Raises:
            InvalidConfigurationError: If resolution is not a positive integer.
        """
        resolution = _validate_size(resolution, "Resolution")

        if self._in_pass:
            self._pending_resolution = resolution
            logger.info(f"Resolution change to {resolution} deferred to the next tick.")
            return

        self._pending_resolution = None
        if resolution == self._resolution:
            logger.debug(f"Resolution already {resolution}, nothing to do.")
            return
        self._rebuild_grid(resolution)

    def set_bucket_thresholds(self, low: float, high: float) -> None:
        """
        Set the H cut-points of the energy distribution.

        Raises:
            InvalidConfigurationError: If low > high.
        """
        buckets = BucketThresholds(float(low), float(high))
        self._check_buckets(buckets)
        self._buckets = buckets
        logger.info(f"Bucket thresholds set to low < {buckets.low}, high >= {buckets.high}.")

    def set_state_thresholds(self, motion: float, energy: float) -> None:
        """Set the avg T / avg V limits used for the status label."""
        self._states = StateThresholds(float(motion), float(energy))
        logger.info(f"State thresholds set to motion > {motion}, energy > {energy}.")

    def acknowledge_geometry(self) -> None:
        """Called by the renderer after it re-read the grid topology."""
        self._geometry_dirty = False

    def add_listener(self, listener: FrameListener) -> None:
        """Register a callback invoked with each FrameResult at the end of the pass."""
        self._listeners.append(listener)

    def remove_listener(self, listener: FrameListener) -> None:
        self._listeners.remove(listener)

    def reset(self) -> None:
        """
        Forget everything learned from previous frames: frame counter, previous
        sample, latest report. Configuration (resolution, thresholds) is kept.
        """
        if self._in_pass:
            raise RuntimeError("Cannot reset the engine while a frame is being processed.")
        self._frame_count = 0
        self._latest = None
        self._pending_resolution = None
        self._rebuild_grid(self._resolution)
        logger.info("Field engine has been reset.")

    # ------------------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------------------

    def submit_frame(self, pixels: npt.ArrayLike) -> FrameResult:
        """
        Process one canvas frame.

        Args:
            pixels: S x S RGBA uint8 canvas, either (S, S, 4), flat S*S*4 or raw bytes.

        Returns:
            FrameResult of this tick. Render buffers and latest_report are updated too.

        Raises:
            InvalidConfigurationError: If the canvas does not match the configured size.
            RuntimeError: If called from inside a pass.
        """
        if self._in_pass:
            raise RuntimeError("submit_frame() is not reentrant.")

        # Tick boundary: apply a resolution change requested during the last pass
        if self._pending_resolution is not None:
            pending, self._pending_resolution = self._pending_resolution, None
            if pending != self._resolution:
                self._rebuild_grid(pending)

        canvas = as_pixel_array(pixels, self._canvas_size)

        self._in_pass = True
        try:
            current = sample_brightness(canvas, self._resolution, out=self._current)
            previous = self._previous if self._has_previous else None

            field = compute_field(current, previous)
            aggregate = aggregate_field(field, self._buckets)
            self._buffers.write(field)

            frame = self._frame_count
            report = format_report(aggregate, frame, self._states)
            result = FrameResult(frame=frame, field=field, aggregate=aggregate, report=report)

            # The tick is complete before listeners run: this sample becomes `previous`
            self._latest = result
            self._current, self._previous = self._previous, self._current
            self._has_previous = True
            self._frame_count += 1

            logger.debug(f"Frame {frame}: avg H {aggregate.avg_h:.3f}, max H {aggregate.max_h:.3f}")

            for listener in list(self._listeners):
                listener(result)
        finally:
            self._in_pass = False

        return result

    # ------------------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------------------

    @staticmethod
    def _check_buckets(buckets: BucketThresholds) -> None:
        if buckets.low > buckets.high:
            raise InvalidConfigurationError(
                f"Low threshold ({buckets.low}) must not exceed high threshold ({buckets.high})."
            )

    def _rebuild_grid(self, resolution: int) -> None:
        """Replace grid, brightness buffers and render buffers for a new resolution."""
        old = self._resolution
        self._resolution = resolution
        self._current: npt.NDArray[np.float64] = np.zeros((resolution, resolution), dtype=np.float64)
        self._previous: npt.NDArray[np.float64] = np.zeros((resolution, resolution), dtype=np.float64)
        self._has_previous: bool = False
        self._buffers: RenderBuffers = RenderBuffers(resolution)
        self._geometry_dirty: bool = True
        if old and old != resolution:
            logger.info(f"Grid rebuilt: {old}x{old} -> {resolution}x{resolution} ({resolution * resolution} points).")
