"""
Data model for flight snapshots and chat exchanges.

Snapshots are immutable once built: a FlightSnapshot holds a tuple of
frozen FlightState records, so a cached snapshot can be handed to any
number of requests without copying.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional, Tuple

SOURCE_MOCK = 'mock'
SOURCE_OPENSKY = 'opensky'

PROVIDER_STUB = 'stub'
PROVIDER_GEMINI = 'gemini'


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def is_finite_number(value: Any) -> bool:
    """True for real ints/floats that are neither NaN nor infinite."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # ints beyond float range
        return False


def _number_or_zero(value: Any) -> float:
    return float(value) if is_finite_number(value) else 0.0


@dataclass(frozen=True)
class FlightState:
    """
    Normalized position of a single aircraft.

    Fields:
        id: ICAO24 hex address (or fixture identifier)
        callsign: Trimmed callsign, empty string when unknown
        lat/lon: WGS84 degrees, always finite
        alt: Altitude in meters (0 when unavailable)
        speed: Ground speed in m/s
        heading: Track angle in degrees, 0=north
    """
    id: str
    callsign: str
    lat: float
    lon: float
    alt: float = 0.0
    speed: float = 0.0
    heading: float = 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Optional['FlightState']:
        """
        Build a FlightState from its JSON form.

        Returns None when latitude or longitude are not finite numbers.
        """
        lat = data.get('lat')
        lon = data.get('lon')
        if not (is_finite_number(lat) and is_finite_number(lon)):
            return None

        return cls(
            id=str(data.get('id') or ''),
            callsign=str(data.get('callsign') or '').strip(),
            lat=float(lat),
            lon=float(lon),
            alt=_number_or_zero(data.get('alt')),
            speed=_number_or_zero(data.get('speed')),
            heading=_number_or_zero(data.get('heading')),
        )

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict for API responses."""
        return {
            'id': self.id,
            'callsign': self.callsign,
            'lat': self.lat,
            'lon': self.lon,
            'alt': self.alt,
            'speed': self.speed,
            'heading': self.heading,
        }


@dataclass(frozen=True)
class FlightSnapshot:
    """Point-in-time list of flights produced by one provider."""
    source: str
    generated_at: str
    flights: Tuple[FlightState, ...] = field(default_factory=tuple)

    @classmethod
    def build(cls, source: str, flights: List[FlightState]) -> 'FlightSnapshot':
        """Wrap freshly normalized flights with the current timestamp."""
        return cls(source=source, generated_at=utc_now_iso(), flights=tuple(flights))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'FlightSnapshot':
        """
        Parse the JSON form of a snapshot.

        Raises ValueError if the document is not shaped like a snapshot.
        Individual flights without a finite position are dropped.
        """
        if not isinstance(data, Mapping):
            raise ValueError('snapshot must be a JSON object')

        raw_flights = data.get('flights')
        if not isinstance(raw_flights, list):
            raise ValueError('snapshot.flights must be a list')

        flights = []
        for raw in raw_flights:
            if not isinstance(raw, Mapping):
                continue
            flight = FlightState.from_dict(raw)
            if flight is not None:
                flights.append(flight)

        return cls(
            source=str(data.get('source') or SOURCE_MOCK),
            generated_at=str(data.get('generatedAt') or utc_now_iso()),
            flights=tuple(flights),
        )

    def to_dict(self) -> dict:
        return {
            'source': self.source,
            'generatedAt': self.generated_at,
            'flights': [f.to_dict() for f in self.flights],
        }


@dataclass(frozen=True)
class ChatResponse:
    """Reply from the chat relay, tagged with the provider that produced it."""
    provider: str
    text: str

    def to_dict(self) -> dict:
        return {'provider': self.provider, 'text': self.text}
