"""
In-memory response cache for flight snapshots.

Stores the result of each successful primary-provider fetch keyed by
the quantized query (provider, lat/lon to 3 decimals, radius), so
near-duplicate queries within ~111 m share one slot.

Staleness is checked lazily on read: an entry older than the TTL is
treated as a miss but left in place until the next set() for its key
replaces it. There is no capacity bound; growth is limited by the
number of distinct rounded keys actually requested.
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from flight_proxy.models import FlightSnapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheKey:
    """Quantized flight query."""
    provider: str
    lat: str
    lon: str
    radius: float

    @classmethod
    def from_query(cls, provider: str, lat: float, lon: float, radius: float) -> 'CacheKey':
        return cls(
            provider=provider,
            lat=f'{lat:.3f}',
            lon=f'{lon:.3f}',
            radius=radius,
        )

    def __str__(self) -> str:
        return f'{self.provider}|{self.lat},{self.lon}|{self.radius}'


@dataclass(frozen=True)
class CacheEntry:
    key: CacheKey
    inserted_at: float
    snapshot: FlightSnapshot


class ResponseCache:
    """
    Thread-safe TTL cache for flight snapshots.

    The clock is injectable (seconds, monotonic by default) so tests can
    simulate time passing without sleeping.
    """

    def __init__(
        self,
        ttl_ms: int = 5000,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_ms / 1000.0
        self._clock = clock

        self._entries: Dict[CacheKey, CacheEntry] = {}
        self._lock = threading.RLock()

        # Statistics
        self._hits = 0
        self._misses = 0

    def get(self, key: CacheKey) -> Optional[FlightSnapshot]:
        """
        Get cached snapshot for a key.

        Returns None if not cached or expired.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and self._clock() - entry.inserted_at < self.ttl_seconds:
                self._hits += 1
                logger.debug(f'Cache hit for {key}')
                return entry.snapshot

            self._misses += 1

        logger.debug(f'Cache miss for {key}')
        return None

    def set(self, key: CacheKey, snapshot: FlightSnapshot) -> None:
        """Store a snapshot, replacing any previous entry for the key."""
        entry = CacheEntry(key=key, inserted_at=self._clock(), snapshot=snapshot)
        with self._lock:
            self._entries[key] = entry

    def clear(self) -> None:
        """Clear entire cache."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    @property
    def stats(self) -> dict:
        """Get cache statistics."""
        with self._lock:
            total = self._hits + self._misses
            return {
                'entries': len(self._entries),
                'hits': self._hits,
                'misses': self._misses,
                'hit_rate': self._hits / total if total > 0 else 0,
                'ttl_ms': int(self.ttl_seconds * 1000),
            }
