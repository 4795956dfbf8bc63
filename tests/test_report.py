import pytest

from hamiltonianfield.config import StateThresholds
from hamiltonianfield.engine.aggregate import BucketCounts, FrameAggregate
from hamiltonianfield.engine.report import (
    STATE_ENERGY, STATE_MOTION, STATE_STABLE, format_report, percent_bar, system_state
)


def _aggregate(avg_t=0.0, avg_v=0.0, counts=BucketCounts(low=4, med=0, high=0), max_coords=(-1.0, 1.0)):
    return FrameAggregate(
        avg_h=avg_t + avg_v,
        avg_t=avg_t,
        avg_v=avg_v,
        max_h=avg_t + avg_v,
        max_coords=max_coords,
        counts=counts,
        total_cells=counts.total,
    )


@pytest.mark.parametrize(
    "avg_t, avg_v, expected",
    [
        (0.0, 0.0, STATE_STABLE),
        (0.8, 5.0, STATE_STABLE),
        (0.81, 0.0, STATE_MOTION),
        (0.5, 6.0, STATE_ENERGY),
        (0.9, 9.0, STATE_MOTION),
    ],
)
def test_system_state(avg_t, avg_v, expected):
    assert system_state(_aggregate(avg_t, avg_v), StateThresholds(motion=0.8, energy=5.0)) == expected


def test_energy_threshold_is_configurable():
    agg = _aggregate(avg_t=0.0, avg_v=6.0)

    assert system_state(agg, StateThresholds(motion=0.8, energy=8.0)) == STATE_STABLE


@pytest.mark.parametrize(
    "percent, expected_filled",
    [(0.0, 0), (100.0, 12), (50.0, 6), (37.5, 5), (4.0, 0), (12.5, 2)],
)
def test_percent_bar(percent, expected_filled):
    bar = percent_bar(percent)

    assert len(bar) == 12
    assert bar.count("█") == expected_filled
    assert bar == "█" * expected_filled + " " * (12 - expected_filled)


def test_report_layout():
    agg = FrameAggregate(
        avg_h=10.0,
        avg_t=0.0,
        avg_v=10.0,
        max_h=10.0,
        max_coords=(-1.0, 1.0),
        counts=BucketCounts(low=0, med=0, high=4),
        total_cells=4,
    )

    report = format_report(agg, frame=0, thresholds=StateThresholds())

    assert report.splitlines() == [
        "SYSTEM STATE: High Energy Concentration",
        "---------------------------------",
        "Frame: 0",
        "Avg H: 10.000 | Max H: 10.000",
        "Peak H at: (x:-1, y:1)",
        "---------------------------------",
        "Energy Distribution:",
        "Low:  [            ] 0.0%",
        "Med:  [            ] 0.0%",
        "High: [████████████] 100.0%",
    ]


def test_report_mixed_distribution():
    agg = _aggregate(counts=BucketCounts(low=1, med=1, high=2), max_coords=(0.0, 0.0))

    lines = format_report(agg, frame=42, thresholds=StateThresholds()).splitlines()

    assert lines[2] == "Frame: 42"
    assert lines[4] == "Peak H at: (x:0, y:0)"
    assert lines[7] == "Low:  [███         ] 25.0%"
    assert lines[8] == "Med:  [███         ] 25.0%"
    assert lines[9] == "High: [██████      ] 50.0%"


def test_percentages_round_halves_up():
    # 64 of 1024 cells is exactly 6.25 %
    agg = _aggregate(counts=BucketCounts(low=64, med=960, high=0))

    lines = format_report(agg, frame=0, thresholds=StateThresholds()).splitlines()

    assert lines[7] == "Low:  [█           ] 6.3%"
    assert lines[8] == "Med:  [███████████ ] 93.8%"
    assert lines[9] == "High: [            ] 0.0%"


def test_energy_values_round_halves_up():
    agg = _aggregate(avg_t=0.0, avg_v=0.0625)

    lines = format_report(agg, frame=0, thresholds=StateThresholds()).splitlines()

    assert lines[3] == "Avg H: 0.063 | Max H: 0.063"


@pytest.mark.parametrize(
    "coords, expected",
    [
        ((-0.5, 0.5), "Peak H at: (x:0, y:1)"),
        ((-1.5, 1.5), "Peak H at: (x:-1, y:2)"),
        ((-2.0, 0.0), "Peak H at: (x:-2, y:0)"),
    ],
)
def test_peak_coordinates_are_whole_numbers(coords, expected):
    lines = format_report(_aggregate(max_coords=coords), frame=0, thresholds=StateThresholds()).splitlines()

    assert lines[4] == expected
