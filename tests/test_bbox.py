"""
Bounding box computation tests.

  1. Radius clamping to [1, 4] km
  2. Rounding to 4 decimals
  3. OpenSky query parameters
"""
from __future__ import annotations

import pytest

from flight_proxy.ingestion.bbox import BoundingBox, clamp_radius, compute


def _delta(box: BoundingBox, lat: float) -> float:
    return box.lat_max - lat


class TestRadiusClamp:
    @pytest.mark.parametrize('radius', [-10, 0, 0.2, 1, 2.5, 4, 10, 100, 5000])
    def test_delta_stays_within_bounds(self, radius):
        box = compute(0.0, 0.0, radius)
        delta = _delta(box, 0.0)
        assert round(1 / 111, 4) <= delta <= round(4 / 111, 4)

    def test_non_positive_radius_clamps_to_one_km(self):
        assert compute(10.0, 20.0, 0) == compute(10.0, 20.0, 1)
        assert compute(10.0, 20.0, -5) == compute(10.0, 20.0, 1)

    def test_large_radius_clamps_to_four_km(self):
        assert compute(10.0, 20.0, 100) == compute(10.0, 20.0, 4)
        assert compute(10.0, 20.0, 250) == compute(10.0, 20.0, 4)

    def test_clamp_radius(self):
        assert clamp_radius(0.5) == 1.0
        assert clamp_radius(3) == 3
        assert clamp_radius(12) == 4.0


class TestWindowShape:
    def test_symmetric_window_rounded_to_four_places(self):
        box = compute(35.68, 139.76, 2)
        delta = 2 / 111
        assert box.lat_min == round(35.68 - delta, 4)
        assert box.lat_max == round(35.68 + delta, 4)
        assert box.lon_min == round(139.76 - delta, 4)
        assert box.lon_max == round(139.76 + delta, 4)

    def test_same_delta_for_latitude_and_longitude(self):
        box = compute(60.0, 10.0, 3)
        assert box.lat_max - box.lat_min == pytest.approx(box.lon_max - box.lon_min, abs=1e-4)

    def test_to_params(self):
        box = BoundingBox(lat_min=1.0, lat_max=2.0, lon_min=3.0, lon_max=4.0)
        assert box.to_params() == {'lamin': 1.0, 'lomin': 3.0, 'lamax': 2.0, 'lomax': 4.0}
