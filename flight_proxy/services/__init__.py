"""
Request-facing services.

FlightService handles flight queries with caching and fallback;
ChatRelay handles the Gemini chat relay with stub degradation.
"""

from flight_proxy.services.chat_relay import ChatRelay
from flight_proxy.services.flight_service import FlightService

__all__ = ['ChatRelay', 'FlightService']
