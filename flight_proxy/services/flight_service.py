"""
Flight service - orchestrates cache, provider and fallback.

Request flow:
1. Look up the quantized query in the response cache
2. On a miss, ask the configured provider for a snapshot
3. Cache and return a successful primary result
4. If the primary provider fails, serve the mock fixture uncached
5. If that fails too, raise ServiceUnavailable

Each request makes at most one primary call and one fallback call.
Fallback results are never cached, so the next request goes back to
the primary provider instead of being pinned to degraded data. Two
concurrent misses for the same key both fetch; the last write wins.
"""

import logging
from typing import Dict, Optional

from flight_proxy.cache import CacheKey, ResponseCache
from flight_proxy.config import AppConfig, Provider
from flight_proxy.errors import ProviderError, ServiceUnavailable
from flight_proxy.ingestion import bbox as bbox_calculator
from flight_proxy.ingestion.mock_source import MockDataSource
from flight_proxy.ingestion.opensky_client import OpenSkyClient
from flight_proxy.models import FlightSnapshot

logger = logging.getLogger(__name__)


class FlightService:
    """Answers "flights near a point" queries with caching and fallback."""

    def __init__(
        self,
        provider: Provider,
        providers: Dict[Provider, object],
        fallback: MockDataSource,
        cache: ResponseCache,
    ):
        if provider not in providers:
            raise ValueError(f'No implementation registered for provider {provider.value!r}')

        self.provider = provider
        self._primary = providers[provider]
        self.fallback = fallback
        self.cache = cache

    @classmethod
    def from_config(
        cls,
        app_config: AppConfig,
        cache: Optional[ResponseCache] = None,
    ) -> 'FlightService':
        """Wire the service from application configuration."""
        mock = MockDataSource(app_config.mock_data_path)
        providers = {Provider.MOCK: mock}
        if app_config.provider is Provider.OPENSKY:
            providers[Provider.OPENSKY] = OpenSkyClient.from_config(app_config.opensky)

        return cls(
            provider=app_config.provider,
            providers=providers,
            fallback=mock,
            cache=cache if cache is not None else ResponseCache(ttl_ms=app_config.cache.ttl_ms),
        )

    def get_flights(self, lat: float, lon: float, radius: float) -> FlightSnapshot:
        """
        Get flights around (lat, lon) within radius km.

        Raises:
            ServiceUnavailable if both the primary provider and the
            fallback dataset fail.
        """
        key = CacheKey.from_query(self.provider.value, lat, lon, radius)

        cached = self.cache.get(key)
        if cached is not None:
            return cached

        bbox = bbox_calculator.compute(lat, lon, radius)

        try:
            snapshot = self._primary.fetch_snapshot(bbox)
        except ProviderError as primary_error:
            logger.warning(
                f'Provider {self.provider.value} failed for {key}: {primary_error}; '
                f'serving fallback data'
            )
            return self._load_fallback()

        self.cache.set(key, snapshot)
        logger.info(f'Fetched {len(snapshot.flights)} flights from {self.provider.value} for {key}')
        return snapshot

    def _load_fallback(self) -> FlightSnapshot:
        """Load the fixture without touching the cache."""
        try:
            return self.fallback.load()
        except ProviderError as fallback_error:
            logger.error(f'Fallback data failed: {fallback_error}')
            raise ServiceUnavailable('Failed to load flight data') from fallback_error
