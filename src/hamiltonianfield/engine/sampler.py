"""
Pixel Sampler
=============
Maps the fixed-size S x S RGBA canvas onto the N x N logical grid.

Each grid cell reads exactly one source pixel picked with a fixed integer
stride (nearest pixel, no filtering). When N does not divide S the trailing
rows/columns of the canvas are never read. When S < N the stride drops to zero
and every cell reads pixel (0, 0).
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import numpy as np

from hamiltonianfield.engine.errors import InvalidConfigurationError

if TYPE_CHECKING:
    import numpy.typing as npt

CHANNELS = 4


def as_pixel_array(pixels: npt.ArrayLike, canvas_size: int) -> npt.NDArray[np.uint8]:
    """
    View a submitted pixel buffer as an (S, S, 4) array without copying.

    Args:
        pixels: Either an (S, S, 4) uint8 array, a flat uint8 array of S*S*4
                values, or raw bytes (RGBA interleaved, row-major).
        canvas_size: The configured canvas size S.

    Returns:
        (S, S, 4) uint8 array sharing memory with the input where possible.

    Raises:
        InvalidConfigurationError: If the buffer is not 8-bit or does not hold
            exactly S*S RGBA pixels.
    """
    if isinstance(pixels, (bytes, bytearray, memoryview)):
        arr = np.frombuffer(pixels, dtype=np.uint8)
    else:
        arr = np.asarray(pixels)
    expected = (canvas_size, canvas_size, CHANNELS)

    if arr.dtype != np.uint8:
        raise InvalidConfigurationError(f"Pixel buffer must be uint8, got {arr.dtype}.")
    if arr.shape == expected:
        return arr
    if arr.ndim == 1 and arr.size == canvas_size * canvas_size * CHANNELS:
        return arr.reshape(expected)

    raise InvalidConfigurationError(
        f"Pixel buffer of shape {arr.shape} does not match canvas {expected} "
        f"(or flat length {canvas_size * canvas_size * CHANNELS})."
    )


def sample_stride(canvas_size: int, resolution: int) -> int:
    """Integer distance between sampled source pixels."""
    return canvas_size // resolution


def source_indices(canvas_size: int, resolution: int) -> npt.NDArray[np.intp]:
    """Source row (or column) read by each grid row (or column)."""
    return np.arange(resolution, dtype=np.intp) * sample_stride(canvas_size, resolution)


def sample_brightness(
    pixels: npt.NDArray,
    resolution: int,
    out: Optional[npt.NDArray[np.float64]] = None,
) -> npt.NDArray[np.float64]:
    """
    Extract the N x N brightness grid from an (S, S, 4) canvas.

    Brightness is the plain mean of R, G and B at the sampled pixel. Alpha is ignored.

    Args:
        pixels: (S, S, 4) RGBA array (see as_pixel_array).
        resolution: Grid size N.
        out: Optional preallocated (N, N) float64 array to write into.

    Returns:
        (N, N) float64 array with values in [0, 255].
    """
    canvas_size = pixels.shape[0]
    idx = source_indices(canvas_size, resolution)

    # Row i reads canvas row idx[i], column j reads canvas column idx[j]
    picked = pixels[np.ix_(idx, idx)]
    rgb = picked[..., :3].astype(np.float64)

    if out is None:
        out = np.empty((resolution, resolution), dtype=np.float64)
    np.sum(rgb, axis=2, out=out)
    out /= 3.0
    return out
