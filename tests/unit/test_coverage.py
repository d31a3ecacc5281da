"""Unit tests for the NWS coverage check."""

import pytest

from app.services.coverage import COVERAGE_BOXES, coverage_region, is_covered


@pytest.mark.parametrize(
    "lat, lon, region",
    [
        (40.7128, -74.0060, "continental_us"),
        (47.6062, -122.3321, "continental_us"),
        (61.2181, -149.9003, "alaska"),
        (21.3069, -157.8583, "hawaii"),
        (18.2208, -70.0, "puerto_rico_caribbean"),
    ],
)
def test_coverage_region(lat, lon, region):
    """Known cities map to their coverage box."""
    assert coverage_region(lat, lon) == region


def test_san_juan_is_east_of_caribbean_box():
    assert coverage_region(18.4655, -66.1057) is None


@pytest.mark.parametrize(
    "lat, lon",
    [
        (51.5074, -0.1278),  # London
        (35.6762, 139.6503),  # Tokyo
        (-33.8688, 151.2093),  # Sydney
        (0.0, 0.0),
        (90.0, 180.0),
        (-90.0, -180.0),
    ],
)
def test_outside_coverage(lat, lon):
    """Points outside every box are rejected."""
    assert is_covered(lat, lon) is False


def test_box_edges_are_inclusive():
    """Every corner of every box counts as covered."""
    for box in COVERAGE_BOXES:
        for lat in (box.min_lat, box.max_lat):
            for lon in (box.min_lon, box.max_lon):
                assert is_covered(lat, lon), (box.region, lat, lon)


def test_just_outside_continental_box():
    """Points a hair past the continental edges are not covered."""
    assert is_covered(37.0, -64.9999) is False
    assert is_covered(24.9999, -100.0) is False
