"""
Field Computer
==============
Derives the per-cell energy terms from two generations of sampled brightness.

    V = (b / 255) * 10                   potential: how bright the cell is
    T = (|b - b_prev| / 255) * 10        kinetic: how much it changed
    H = T + V

Every cell depends only on its own two samples. H is a per-frame diagnostic,
nothing is integrated over time.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

import numpy as np

from hamiltonianfield.config import ENERGY_SCALE

if TYPE_CHECKING:
    import numpy.typing as npt

MAX_BRIGHTNESS = 255.0


@dataclass
class EnergyField:
    """Per-cell T, V and H for one frame, each an (N, N) float64 array."""
    kinetic: npt.NDArray[np.float64]
    potential: npt.NDArray[np.float64]
    total: npt.NDArray[np.float64]

    @property
    def resolution(self) -> int:
        return self.total.shape[0]

    @property
    def n_cells(self) -> int:
        return self.total.size


def potential_energy(brightness: npt.ArrayLike) -> npt.NDArray[np.float64]:
    return np.asarray(brightness, dtype=np.float64) / MAX_BRIGHTNESS * ENERGY_SCALE


def kinetic_energy(
    current: npt.ArrayLike,
    previous: Optional[npt.ArrayLike],
) -> npt.NDArray[np.float64]:
    """
    Kinetic term of each cell. Without a previous sample there is no valid
    delta and T is zero everywhere.
    """
    current = np.asarray(current, dtype=np.float64)
    if previous is None:
        return np.zeros_like(current)
    delta = np.abs(current - np.asarray(previous, dtype=np.float64))
    return delta / MAX_BRIGHTNESS * ENERGY_SCALE


def compute_field(
    current: npt.NDArray[np.float64],
    previous: Optional[npt.NDArray[np.float64]] = None,
) -> EnergyField:
    """
    Compute T, V and H for every cell.

    Args:
        current: (N, N) brightness of this tick.
        previous: (N, N) brightness of the previous tick, or None after
                  construction / a resolution change.

    Returns:
        EnergyField with arrays shaped like `current`.

    Raises:
        ValueError: If `previous` is given with a different shape.
    """
    if previous is not None and previous.shape != current.shape:
        raise ValueError(f"Previous sample shape {previous.shape} does not match current {current.shape}.")

    v = potential_energy(current)
    t = kinetic_energy(current, previous)
    return EnergyField(kinetic=t, potential=v, total=t + v)
