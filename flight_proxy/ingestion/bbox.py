"""
Bounding box computation for area queries.

The query radius is clamped to [1, 4] km before it is converted to
degrees (1 degree ~ 111 km), so the window never exceeds +/- 4/111
degrees no matter how large a radius the caller asks for. The same
delta is applied to latitude and longitude.
"""

from dataclasses import dataclass

KM_PER_DEGREE = 111.0
MIN_RADIUS_KM = 1.0
MAX_RADIUS_KM = 4.0


@dataclass(frozen=True)
class BoundingBox:
    """
    Geographic bounding box for API queries.

    OpenSky expects: lamin, lomin, lamax, lomax
    (latitude min, longitude min, latitude max, longitude max)
    """
    lat_min: float
    lat_max: float
    lon_min: float
    lon_max: float

    @classmethod
    def from_center_radius(
        cls,
        center_lat: float,
        center_lon: float,
        radius_km: float
    ) -> 'BoundingBox':
        """Create bounding box from center point and (clamped) radius."""
        delta = clamp_radius(radius_km) / KM_PER_DEGREE

        return cls(
            lat_min=round(center_lat - delta, 4),
            lat_max=round(center_lat + delta, 4),
            lon_min=round(center_lon - delta, 4),
            lon_max=round(center_lon + delta, 4),
        )

    def to_params(self) -> dict:
        """Convert to OpenSky API query parameters."""
        return {
            'lamin': self.lat_min,
            'lomin': self.lon_min,
            'lamax': self.lat_max,
            'lomax': self.lon_max,
        }


def clamp_radius(radius_km: float) -> float:
    return max(MIN_RADIUS_KM, min(MAX_RADIUS_KM, radius_km))


def compute(lat: float, lon: float, radius_km: float) -> BoundingBox:
    """Bounding box around (lat, lon) for the given radius in km."""
    return BoundingBox.from_center_radius(lat, lon, radius_km)
