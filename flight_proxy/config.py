"""
Configuration management for the flight proxy.

Loads settings from environment variables with sensible defaults.
Everything is resolved once at startup into immutable dataclasses that
are passed explicitly to the services; nothing re-reads the environment
per request.
"""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_MOCK_DATA_PATH = Path(__file__).parent / 'data' / 'sample_flights.json'


class Provider(str, Enum):
    """Flight data providers the orchestrator can dispatch to."""
    MOCK = 'mock'
    OPENSKY = 'opensky'

    @classmethod
    def parse(cls, value: Optional[str]) -> 'Provider':
        """Resolve a provider name, falling back to MOCK for unknown values."""
        name = (value or '').strip().lower()
        if not name:
            return cls.MOCK
        try:
            return cls(name)
        except ValueError:
            logger.warning(f'Unknown FLIGHT_PROVIDER {value!r}, using mock data')
            return cls.MOCK


@dataclass(frozen=True)
class OpenSkyConfig:
    """OpenSky API configuration."""
    username: Optional[str] = None
    password: Optional[str] = None
    base_url: str = 'https://opensky-network.org/api'
    timeout_seconds: float = 10.0

    @property
    def is_authenticated(self) -> bool:
        return bool(self.username and self.password)


@dataclass(frozen=True)
class CacheConfig:
    """Response cache settings."""
    ttl_ms: int = 5000


@dataclass(frozen=True)
class ChatConfig:
    """Gemini text-generation relay configuration."""
    api_key: Optional[str] = None
    model: str = 'gemini-pro'
    base_url: str = 'https://generativelanguage.googleapis.com/v1beta'
    timeout_seconds: float = 15.0

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration."""
    provider: Provider = Provider.MOCK
    opensky: OpenSkyConfig = field(default_factory=OpenSkyConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    chat: ChatConfig = field(default_factory=ChatConfig)
    mock_data_path: Path = DEFAULT_MOCK_DATA_PATH

    # Server settings
    port: int = 8000
    environment: str = 'development'
    debug: bool = False

    @property
    def is_production(self) -> bool:
        return self.environment == 'production'


def load_config(environ: Optional[Mapping[str, str]] = None) -> AppConfig:
    """Load and validate all configuration."""
    env = os.environ if environ is None else environ

    return AppConfig(
        provider=Provider.parse(env.get('FLIGHT_PROVIDER')),
        opensky=OpenSkyConfig(
            username=env.get('OPENSKY_USERNAME') or None,
            password=env.get('OPENSKY_PASSWORD') or None,
            base_url=env.get('OPENSKY_BASE_URL') or OpenSkyConfig.base_url,
            timeout_seconds=float(env.get('OPENSKY_TIMEOUT_SECONDS', '10')),
        ),
        cache=CacheConfig(
            ttl_ms=int(float(env.get('CACHE_TTL_MS', '5000'))),
        ),
        chat=ChatConfig(
            api_key=env.get('GEMINI_API_KEY') or None,
            model=env.get('GEMINI_MODEL') or ChatConfig.model,
            timeout_seconds=float(env.get('CHAT_TIMEOUT_SECONDS', '15')),
        ),
        mock_data_path=Path(env.get('MOCK_DATA_PATH') or DEFAULT_MOCK_DATA_PATH),
        port=int(env.get('PORT', '8000')),
        environment=(env.get('APP_ENV') or 'development').strip().lower(),
        debug=env.get('FLASK_DEBUG', '0') == '1',
    )
