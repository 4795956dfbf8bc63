from typing import Callable, Tuple

import numpy as np
import pytest

from hamiltonianfield.config import BucketThresholds, EngineConfig, StateThresholds
from hamiltonianfield.engine.engine import FieldEngine


@pytest.fixture
def make_canvas() -> Callable[..., np.ndarray]:
    """Solid (S, S, 4) RGBA canvas."""
    def _make(size: int, rgb: Tuple[int, int, int] = (0, 0, 0), alpha: int = 255) -> np.ndarray:
        canvas = np.empty((size, size, 4), dtype=np.uint8)
        canvas[..., :3] = rgb
        canvas[..., 3] = alpha
        return canvas
    return _make


@pytest.fixture
def make_engine() -> Callable[..., FieldEngine]:
    def _make(canvas_size: int = 4, resolution: int = 2, **kwargs) -> FieldEngine:
        config = EngineConfig(
            canvas_size=canvas_size,
            resolution=resolution,
            buckets=kwargs.pop("buckets", BucketThresholds()),
            states=kwargs.pop("states", StateThresholds()),
        )
        return FieldEngine(config)
    return _make


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)
