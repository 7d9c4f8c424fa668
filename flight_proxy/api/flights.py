"""
Flight data API endpoints.

Provides endpoints for:
- GET /flights - Flights near a point (lat, lon, radius in km)
"""

import math

from flask import Blueprint, current_app, jsonify, request

from flight_proxy.errors import ValidationError

flights_bp = Blueprint('flights', __name__)

DEFAULT_LAT = 35.68
DEFAULT_LON = 139.76
DEFAULT_RADIUS_KM = 2.0


def _float_arg(name: str, default: float) -> float:
    """Parse a numeric query parameter, rejecting non-finite values."""
    raw = request.args.get(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValidationError(f'{name} must be a number')
    if not math.isfinite(value):
        raise ValidationError(f'{name} must be finite')
    return value


@flights_bp.route('/flights', methods=['GET'])
def list_flights():
    """
    Flights currently near a geographic point.

    Query parameters:
    - lat: float, center latitude (default 35.68)
    - lon: float, center longitude (default 139.76)
    - radius: float, radius in km (default 2)
    """
    lat = _float_arg('lat', DEFAULT_LAT)
    lon = _float_arg('lon', DEFAULT_LON)
    radius = _float_arg('radius', DEFAULT_RADIUS_KM)

    snapshot = current_app.config['FLIGHT_SERVICE'].get_flights(lat, lon, radius)
    return jsonify(snapshot.to_dict())
