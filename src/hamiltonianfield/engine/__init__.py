"""
The ENGINE layer turns camera canvases into an energy field.
It has NO knowledge of the GUI (Qt), the renderer (PyVista) or the camera (OpenCV).
"""
from hamiltonianfield.engine.aggregate import BucketCounts, FrameAggregate, aggregate_field
from hamiltonianfield.engine.buffers import RenderBuffers
from hamiltonianfield.engine.colors import energy_to_hue, energy_to_rgb
from hamiltonianfield.engine.engine import FieldEngine, FrameResult
from hamiltonianfield.engine.errors import InvalidConfigurationError
from hamiltonianfield.engine.field import EnergyField, compute_field
from hamiltonianfield.engine.report import format_report, system_state
from hamiltonianfield.engine.sampler import sample_brightness

__all__ = [
    "BucketCounts",
    "EnergyField",
    "FieldEngine",
    "FrameAggregate",
    "FrameResult",
    "InvalidConfigurationError",
    "RenderBuffers",
    "aggregate_field",
    "compute_field",
    "energy_to_hue",
    "energy_to_rgb",
    "format_report",
    "sample_brightness",
    "system_state",
]
