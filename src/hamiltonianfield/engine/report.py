"""
Stats Snapshot Formatter
========================
Renders a FrameAggregate as the fixed-layout text shown in the status panel.
"""
from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal

from hamiltonianfield.config import BAR_LENGTH, StateThresholds
from hamiltonianfield.engine.aggregate import FrameAggregate

STATE_STABLE = "System Stable"
STATE_MOTION = "High Motion Detected!"
STATE_ENERGY = "High Energy Concentration"

SEPARATOR = "-" * 33
BAR_CHAR = "█"


def system_state(aggregate: FrameAggregate, thresholds: StateThresholds) -> str:
    """Motion wins over energy; stable when neither average is exceeded."""
    if aggregate.avg_t > thresholds.motion:
        return STATE_MOTION
    if aggregate.avg_v > thresholds.energy:
        return STATE_ENERGY
    return STATE_STABLE


def percent_bar(percent: float, length: int = BAR_LENGTH) -> str:
    """Bar of `length` characters, filled to the nearest whole segment (halves round up)."""
    filled = int(math.floor(percent / 100.0 * length + 0.5))
    filled = max(0, min(length, filled))
    return (BAR_CHAR * filled).ljust(length)


def _fixed(value: float, digits: int) -> str:
    """Fixed-point text with exact halves rounded away from zero (6.25 -> '6.3')."""
    # Decimal(float) is the exact binary value, so 1.005 (really 1.00499...) still gives '1.00'
    quantum = Decimal(1).scaleb(-digits)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def _format_coord(value: float) -> str:
    """Whole-number coordinate, halves rounded up (-0.5 -> 0, 0.5 -> 1)."""
    return str(int(math.floor(value + 0.5)))


def format_report(aggregate: FrameAggregate, frame: int, thresholds: StateThresholds) -> str:
    """
    Build the multi-line status report for one frame.

    Args:
        aggregate: Statistics of the frame.
        frame: Frame counter to display.
        thresholds: Motion / energy limits for the state label.

    Returns:
        Report text without a trailing newline.
    """
    low_pct, med_pct, high_pct = aggregate.counts.percentages()
    x, y = aggregate.max_coords

    lines = [
        f"SYSTEM STATE: {system_state(aggregate, thresholds)}",
        SEPARATOR,
        f"Frame: {frame}",
        f"Avg H: {_fixed(aggregate.avg_h, 3)} | Max H: {_fixed(aggregate.max_h, 3)}",
        f"Peak H at: (x:{_format_coord(x)}, y:{_format_coord(y)})",
        SEPARATOR,
        "Energy Distribution:",
        f"Low:  [{percent_bar(low_pct)}] {_fixed(low_pct, 1)}%",
        f"Med:  [{percent_bar(med_pct)}] {_fixed(med_pct, 1)}%",
        f"High: [{percent_bar(high_pct)}] {_fixed(high_pct, 1)}%",
    ]
    return "\n".join(lines)
