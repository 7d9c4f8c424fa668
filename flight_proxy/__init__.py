"""
Flight Proxy Package.

Aggregation and caching proxy for "aircraft near a point" queries,
built with Flask and requests.

Modules:
    api/         REST endpoints for flights and the chat relay
    ingestion/   Bounding boxes, OpenSky client and the mock fixture source
    services/    FlightService (cache + fallback chain) and ChatRelay
    cache.py     TTL response cache keyed by quantized query
    config.py    Configuration resolved once from environment variables
    errors.py    Exception hierarchy mapped onto HTTP responses
    models.py    FlightState, FlightSnapshot and ChatResponse
"""

__version__ = '1.0.0'
