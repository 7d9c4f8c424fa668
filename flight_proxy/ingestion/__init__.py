"""
Flight data providers.

Each provider exposes fetch_snapshot(bbox) -> FlightSnapshot and raises
a ProviderError subclass when it cannot answer.
"""

from flight_proxy.ingestion.bbox import BoundingBox, compute
from flight_proxy.ingestion.mock_source import MockDataSource
from flight_proxy.ingestion.opensky_client import OpenSkyClient

__all__ = ['BoundingBox', 'compute', 'MockDataSource', 'OpenSkyClient']
