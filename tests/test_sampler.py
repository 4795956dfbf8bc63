import numpy as np
import pytest

from hamiltonianfield.engine.errors import InvalidConfigurationError
from hamiltonianfield.engine.sampler import as_pixel_array, sample_brightness, sample_stride, source_indices


def _indexed_canvas(size: int) -> np.ndarray:
    """Canvas whose R/G/B all equal row * size + col, so brightness names the pixel."""
    values = np.arange(size * size, dtype=np.uint8).reshape(size, size)
    canvas = np.zeros((size, size, 4), dtype=np.uint8)
    canvas[..., 0] = values
    canvas[..., 1] = values
    canvas[..., 2] = values
    canvas[..., 3] = 255
    return canvas


def test_brightness_is_mean_of_rgb_ignoring_alpha():
    canvas = np.zeros((2, 2, 4), dtype=np.uint8)
    canvas[...] = (10, 20, 30, 0)

    out = sample_brightness(canvas, 2)

    np.testing.assert_allclose(out, np.full((2, 2), 20.0))


def test_fixed_stride_picks_top_left_of_each_block():
    canvas = _indexed_canvas(4)

    out = sample_brightness(canvas, 2)

    # stride 2 -> rows/cols 0 and 2
    np.testing.assert_allclose(out, [[0.0, 2.0], [8.0, 10.0]])


def test_trailing_rows_and_columns_are_not_sampled():
    canvas = _indexed_canvas(5)

    assert sample_stride(5, 2) == 2
    np.testing.assert_array_equal(source_indices(5, 2), [0, 2])
    np.testing.assert_allclose(sample_brightness(canvas, 2), [[0.0, 2.0], [10.0, 12.0]])


def test_more_cells_than_pixels_alias_to_origin():
    canvas = _indexed_canvas(2)
    canvas[0, 0, :3] = 100

    out = sample_brightness(canvas, 4)

    assert sample_stride(2, 4) == 0
    np.testing.assert_allclose(out, np.full((4, 4), 100.0))


def test_sample_writes_into_preallocated_buffer():
    canvas = _indexed_canvas(4)
    buf = np.full((2, 2), -1.0)

    out = sample_brightness(canvas, 2, out=buf)

    assert out is buf
    assert buf[1, 1] == 10.0


def test_flat_buffer_is_accepted():
    canvas = _indexed_canvas(4)

    arr = as_pixel_array(canvas.ravel(), 4)

    assert arr.shape == (4, 4, 4)
    np.testing.assert_array_equal(arr, canvas)


@pytest.mark.parametrize("shape", [(4, 4, 3), (3, 4, 4), (5, 5, 4), (63,)])
def test_shape_mismatch_is_rejected(shape):
    with pytest.raises(InvalidConfigurationError):
        as_pixel_array(np.zeros(shape, dtype=np.uint8), 4)


@pytest.mark.parametrize("wrap", [bytes, bytearray, memoryview])
def test_raw_bytes_are_accepted(wrap):
    canvas = _indexed_canvas(4)

    arr = as_pixel_array(wrap(canvas.tobytes()), 4)

    assert arr.dtype == np.uint8
    np.testing.assert_array_equal(arr, canvas)


def test_raw_bytes_of_wrong_length_are_rejected():
    with pytest.raises(InvalidConfigurationError):
        as_pixel_array(bytes(63), 4)


@pytest.mark.parametrize("dtype", [np.float32, np.float64, np.int16, np.int64, np.uint16])
def test_non_uint8_buffer_is_rejected(dtype):
    with pytest.raises(InvalidConfigurationError):
        as_pixel_array(np.zeros((4, 4, 4), dtype=dtype), 4)
