import numpy as np
import pytest

from hamiltonianfield.config import BucketThresholds
from hamiltonianfield.engine.aggregate import BucketCounts, aggregate_field, count_buckets, grid_offset
from hamiltonianfield.engine.field import EnergyField


def _field_from_total(total, kinetic=None) -> EnergyField:
    total = np.asarray(total, dtype=np.float64)
    kinetic = np.zeros_like(total) if kinetic is None else np.asarray(kinetic, dtype=np.float64)
    return EnergyField(kinetic=kinetic, potential=total - kinetic, total=total)


def test_averages():
    field = _field_from_total([[2.0, 4.0], [6.0, 8.0]], kinetic=[[1.0, 1.0], [1.0, 1.0]])

    agg = aggregate_field(field, BucketThresholds())

    assert agg.avg_h == pytest.approx(5.0)
    assert agg.avg_t == pytest.approx(1.0)
    assert agg.avg_v == pytest.approx(4.0)
    assert agg.total_cells == 4


def test_peak_keeps_first_cell_in_scan_order():
    field = _field_from_total([[1.0, 5.0], [5.0, 2.0]])

    agg = aggregate_field(field, BucketThresholds())

    assert agg.max_h == 5.0
    # cell (0, 1) in a 2x2 grid
    assert agg.max_coords == (0.0, 1.0)


def test_uniform_frame_reports_first_cell():
    agg = aggregate_field(_field_from_total(np.full((4, 4), 7.0)), BucketThresholds())

    assert agg.max_coords == (-2.0, 2.0)


@pytest.mark.parametrize(
    "i, j, n, expected",
    [
        (0, 0, 2, (-1.0, 1.0)),
        (1, 1, 2, (0.0, 0.0)),
        (3, 0, 4, (-2.0, -1.0)),
        (0, 2, 5, (-0.5, 2.5)),
    ],
)
def test_grid_offset(i, j, n, expected):
    assert grid_offset(i, j, n) == expected


def test_bucket_boundaries():
    total = np.array([0.0, 2.999, 3.0, 7.999, 8.0, 20.0])

    counts = count_buckets(total, BucketThresholds(low=3.0, high=8.0))

    assert counts == BucketCounts(low=2, med=2, high=2)


def test_wide_bucket_boundaries():
    total = np.array([4.9, 5.0, 11.9, 12.0])

    counts = count_buckets(total, BucketThresholds(low=5.0, high=12.0))

    assert counts == BucketCounts(low=1, med=2, high=1)


@pytest.mark.parametrize("n", [1, 2, 7, 32])
def test_bucket_counts_cover_every_cell(n, rng):
    field = _field_from_total(rng.uniform(0.0, 20.0, size=(n, n)))

    agg = aggregate_field(field, BucketThresholds())

    assert agg.counts.total == n * n


def test_percentages():
    low, med, high = BucketCounts(low=1, med=1, high=2).percentages()

    assert (low, med, high) == (25.0, 25.0, 50.0)
