"""
API module for the flight proxy.

Provides REST endpoints for:
- Flight queries around a point
- The chat relay
"""

from flight_proxy.api.chat import chat_bp
from flight_proxy.api.flights import flights_bp

__all__ = ['chat_bp', 'flights_bp']
