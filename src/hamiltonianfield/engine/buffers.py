"""
Render Buffers
==============
Vertex positions and colors handed by reference to the point-cloud renderer.

One vertex per grid cell in row-major order (k = i * N + j). x/y never change
for a given N; only the z column (depth = H * 1.5) and the colors are rewritten
every tick. A new N means a new RenderBuffers instance.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from hamiltonianfield.config import DEPTH_SCALE
from hamiltonianfield.engine.colors import energy_to_rgb
from hamiltonianfield.engine.errors import InvalidConfigurationError

if TYPE_CHECKING:
    import numpy.typing as npt

    from hamiltonianfield.engine.field import EnergyField


def grid_positions(resolution: int) -> npt.NDArray[np.float32]:
    """
    (N^2, 3) grid-space positions at z = 0.
    x = j - N/2, y = -(i - N/2), matching the aggregator's peak coordinates.
    """
    half = resolution / 2
    i, j = np.meshgrid(np.arange(resolution), np.arange(resolution), indexing="ij")
    positions = np.zeros((resolution * resolution, 3), dtype=np.float32)
    positions[:, 0] = (j - half).ravel()
    positions[:, 1] = (half - i).ravel()
    return positions


class RenderBuffers:
    """Preallocated position/color arrays for one grid resolution."""

    def __init__(self, resolution: int) -> None:
        if resolution <= 0:
            raise InvalidConfigurationError(f"Resolution must be positive, got {resolution}.")
        self.resolution: int = resolution
        self.positions: npt.NDArray[np.float32] = grid_positions(resolution)
        self.colors: npt.NDArray[np.float32] = np.zeros((resolution * resolution, 3), dtype=np.float32)

    @property
    def n_points(self) -> int:
        return self.resolution * self.resolution

    @property
    def depth(self) -> npt.NDArray[np.float32]:
        """View of the z column. Writing to it moves the points."""
        return self.positions[:, 2]

    def write(self, field: EnergyField) -> None:
        """
        Rewrite depth and color in place from a frame's field.

        Raises:
            InvalidConfigurationError: If the field belongs to another resolution.
        """
        if field.resolution != self.resolution:
            raise InvalidConfigurationError(
                f"Field of resolution {field.resolution} written into buffers of resolution {self.resolution}."
            )
        flat_h = field.total.ravel()
        self.positions[:, 2] = flat_h * DEPTH_SCALE
        energy_to_rgb(flat_h, out=self.colors)
