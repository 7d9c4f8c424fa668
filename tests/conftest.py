"""
Shared pytest fixtures used across the flight proxy tests.
"""
from __future__ import annotations

import json
from typing import List, Optional

import pytest

from flight_proxy.app import create_app
from flight_proxy.cache import ResponseCache
from flight_proxy.config import DEFAULT_MOCK_DATA_PATH, AppConfig, ChatConfig, Provider
from flight_proxy.errors import UpstreamUnavailable
from flight_proxy.ingestion.mock_source import MockDataSource
from flight_proxy.models import SOURCE_OPENSKY, FlightSnapshot, FlightState
from flight_proxy.services import ChatRelay, FlightService


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------

class FakeClock:
    """Manually advanced clock, in seconds."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: float) -> None:
        self.now += ms / 1000.0


class RecordingProvider:
    """Provider double that records every bbox and can be told to fail."""

    def __init__(self, snapshot: Optional[FlightSnapshot] = None):
        self.snapshot = snapshot or FlightSnapshot.build(
            SOURCE_OPENSKY,
            [FlightState(id='abc123', callsign='TEST1', lat=35.7, lon=139.8, alt=1000.0)],
        )
        self.calls: List = []
        self.fail = False

    def fetch_snapshot(self, bbox):
        self.calls.append(bbox)
        if self.fail:
            raise UpstreamUnavailable('provider down')
        return self.snapshot


# ---------------------------------------------------------------------------
# Building blocks
# ---------------------------------------------------------------------------

@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock) -> ResponseCache:
    """5 second TTL cache driven by the fake clock."""
    return ResponseCache(ttl_ms=5000, clock=clock)


@pytest.fixture
def fixture_data() -> dict:
    """Raw content of the packaged fallback fixture."""
    with open(DEFAULT_MOCK_DATA_PATH, encoding='utf-8') as f:
        return json.load(f)


@pytest.fixture
def mock_source() -> MockDataSource:
    return MockDataSource()


@pytest.fixture
def missing_source(tmp_path) -> MockDataSource:
    return MockDataSource(tmp_path / 'does_not_exist.json')


@pytest.fixture
def primary() -> RecordingProvider:
    return RecordingProvider()


@pytest.fixture
def flight_service(primary, mock_source, cache) -> FlightService:
    """OpenSky-configured service whose primary is a RecordingProvider."""
    return FlightService(
        provider=Provider.OPENSKY,
        providers={Provider.OPENSKY: primary, Provider.MOCK: mock_source},
        fallback=mock_source,
        cache=cache,
    )


# ---------------------------------------------------------------------------
# Flask application
# ---------------------------------------------------------------------------

@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig(provider=Provider.OPENSKY, chat=ChatConfig(api_key=None))


@pytest.fixture
def app(app_config, flight_service):
    return create_app(
        app_config,
        flight_service=flight_service,
        chat_relay=ChatRelay(app_config.chat),
    )


@pytest.fixture
def client(app):
    return app.test_client()
