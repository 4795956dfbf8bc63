"""
Frame Aggregator
================
Summarises one EnergyField: averages of H/T/V, the peak H and where it sits,
and how the cells split between the low / med / high energy buckets.

Scan order is row-major (k = i * N + j). The peak keeps the first cell that
reaches the maximum, later cells with an equal H do not replace it.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from hamiltonianfield.config import BucketThresholds
from hamiltonianfield.engine.field import EnergyField


@dataclass(frozen=True)
class BucketCounts:
    low: int
    med: int
    high: int

    @property
    def total(self) -> int:
        return self.low + self.med + self.high

    def percentages(self) -> Tuple[float, float, float]:
        """(low, med, high) as percentages of all cells."""
        total = self.total
        if total == 0:
            return 0.0, 0.0, 0.0
        return (
            self.low / total * 100.0,
            self.med / total * 100.0,
            self.high / total * 100.0,
        )


@dataclass(frozen=True)
class FrameAggregate:
    """Statistics of a single frame. Created every tick, never updated."""
    avg_h: float
    avg_t: float
    avg_v: float
    max_h: float
    max_coords: Tuple[float, float]
    counts: BucketCounts
    total_cells: int


def grid_offset(i: int, j: int, resolution: int) -> Tuple[float, float]:
    """
    Grid-space (x, y) of cell (i, j), centered on the origin.
    Rows run downwards in the canvas but upwards in grid space.
    """
    half = resolution / 2
    return j - half, half - i


def count_buckets(total: np.ndarray, thresholds: BucketThresholds) -> BucketCounts:
    low = int(np.count_nonzero(total < thresholds.low))
    high = int(np.count_nonzero(total >= thresholds.high))
    # Anything not low and not high is med, so the three always add up to N^2
    med = int(total.size) - low - high
    return BucketCounts(low=low, med=med, high=high)


def aggregate_field(field: EnergyField, thresholds: BucketThresholds) -> FrameAggregate:
    """
    Reduce an EnergyField to its FrameAggregate.

    Args:
        field: The frame's T/V/H arrays.
        thresholds: Bucket cut-points (low < thresholds.low <= med < thresholds.high <= high).

    Returns:
        FrameAggregate for the frame.
    """
    n_cells = field.n_cells
    flat_h = field.total.ravel()

    # argmax returns the first index of the maximum -> first-occurrence tie-break
    k = int(np.argmax(flat_h))
    i, j = divmod(k, field.resolution)

    return FrameAggregate(
        avg_h=float(flat_h.sum() / n_cells),
        avg_t=float(field.kinetic.sum() / n_cells),
        avg_v=float(field.potential.sum() / n_cells),
        max_h=float(flat_h[k]),
        max_coords=grid_offset(i, j, field.resolution),
        counts=count_buckets(flat_h, thresholds),
        total_cells=n_cells,
    )
