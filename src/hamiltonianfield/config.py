"""
Configuration & Constants
=========================
This module serves as the central registry for engine parameters and global
constants.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (scales, thresholds, grid limits)
   from being scattered throughout the engine and the viewer.
2. Presets: The status panel thresholds exist in two flavours. Both are
   registered here as named presets and every value stays overridable.

Exports:
    BucketThresholds, StateThresholds, EngineConfig: Engine parameters.
    THRESHOLD_PRESETS (dict): Named threshold sets.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple


# Capture / grid
DEFAULT_CANVAS_SIZE: int = 256
DEFAULT_RESOLUTION: int = 128
MIN_RESOLUTION: int = 32
MAX_RESOLUTION: int = 256
RESOLUTION_STEP: int = 16
DEFAULT_FPS: int = 30

# Field
ENERGY_SCALE: float = 10.0  # V and T both live in [0, ENERGY_SCALE]
MAX_ENERGY: float = 2 * ENERGY_SCALE
DEPTH_SCALE: float = 1.5

# Colors (HSL)
HUE_COLD: float = 0.7
SATURATION: float = 1.0
LIGHTNESS: float = 0.5

# Report
BAR_LENGTH: int = 12


@dataclass(frozen=True)
class BucketThresholds:
    """
    Cut-points for the low / med / high energy distribution.
    low if H < low, high if H >= high, med otherwise.
    """
    low: float = 3.0
    high: float = 8.0


@dataclass(frozen=True)
class StateThresholds:
    """Averages above which the status panel reports motion / energy."""
    motion: float = 0.8
    energy: float = 5.0


THRESHOLD_PRESETS: Dict[str, Tuple[BucketThresholds, StateThresholds]] = {
    "standard": (BucketThresholds(3.0, 8.0), StateThresholds(0.8, 5.0)),
    "wide": (BucketThresholds(5.0, 12.0), StateThresholds(0.8, 5.0)),
}
DEFAULT_PRESET: str = "standard"


@dataclass
class EngineConfig:
    """Construction parameters of the field engine."""
    canvas_size: int = DEFAULT_CANVAS_SIZE
    resolution: int = DEFAULT_RESOLUTION
    buckets: BucketThresholds = field(default_factory=BucketThresholds)
    states: StateThresholds = field(default_factory=StateThresholds)

    @classmethod
    def from_preset(
        cls,
        name: str = DEFAULT_PRESET,
        canvas_size: int = DEFAULT_CANVAS_SIZE,
        resolution: Optional[int] = None,
    ) -> EngineConfig:
        """
        Build a config from one of THRESHOLD_PRESETS.

        Raises:
            KeyError: If the preset name is unknown.
        """
        if name not in THRESHOLD_PRESETS:
            raise KeyError(f"Unknown threshold preset '{name}'. Available: {sorted(THRESHOLD_PRESETS)}")
        buckets, states = THRESHOLD_PRESETS[name]
        return cls(
            canvas_size=canvas_size,
            resolution=DEFAULT_RESOLUTION if resolution is None else resolution,
            buckets=buckets,
            states=states,
        )


def snap_resolution(value: int) -> int:
    """Snap a resolution onto the MIN..MAX range with RESOLUTION_STEP spacing."""
    steps = round((value - MIN_RESOLUTION) / RESOLUTION_STEP)
    snapped = MIN_RESOLUTION + steps * RESOLUTION_STEP
    return max(MIN_RESOLUTION, min(MAX_RESOLUTION, snapped))
