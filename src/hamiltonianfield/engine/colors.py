"""
Color Mapper
============
Encodes H as a hue ramp: still/cold cells are blue-violet (hue 0.7), hot/active
cells are red (hue 0.0). Saturation and lightness are fixed.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import numpy as np
from matplotlib.colors import hsv_to_rgb

from hamiltonianfield.config import HUE_COLD, LIGHTNESS, MAX_ENERGY, SATURATION

if TYPE_CHECKING:
    import numpy.typing as npt


def energy_to_hue(h: npt.ArrayLike) -> npt.NDArray[np.float64]:
    """hue = 0.7 - (H / 20) * 0.7, strictly decreasing in H."""
    return HUE_COLD - np.asarray(h, dtype=np.float64) / MAX_ENERGY * HUE_COLD


def hsl_to_rgb(
    hue: npt.ArrayLike,
    saturation: float = SATURATION,
    lightness: float = LIGHTNESS,
) -> npt.NDArray[np.float64]:
    """
    Standard HSL -> RGB for an array of hues (all components in [0, 1]).

    HSL is converted to HSV first and matplotlib does the rest:
        V = L + S * min(L, 1 - L)
        S_v = 0 if V == 0 else 2 * (1 - L / V)

    Returns:
        (..., 3) float64 array of RGB.
    """
    hue = np.mod(np.asarray(hue, dtype=np.float64), 1.0)
    value = lightness + saturation * min(lightness, 1.0 - lightness)
    sat_v = 0.0 if value == 0.0 else 2.0 * (1.0 - lightness / value)

    hsv = np.empty(hue.shape + (3,), dtype=np.float64)
    hsv[..., 0] = hue
    hsv[..., 1] = sat_v
    hsv[..., 2] = value
    return hsv_to_rgb(hsv)


def energy_to_rgb(
    h: npt.ArrayLike,
    out: Optional[npt.NDArray] = None,
) -> npt.NDArray:
    """
    Map H values to RGB colors.

    Args:
        h: Array of H values (any shape).
        out: Optional preallocated (..., 3) array written in place.

    Returns:
        (..., 3) RGB array in [0, 1].
    """
    rgb = hsl_to_rgb(energy_to_hue(h))
    if out is None:
        return rgb
    out[...] = rgb
    return out
