"""
OpenSky Network API client.

Handles communication with the OpenSky REST API, including:
- Authentication (optional, only when both username and password are set)
- Bounding box queries for geographic filtering
- Normalizing raw state vectors into FlightState records

OpenSky state vector format (array indices used here):
0: icao24          - ICAO24 hex address
1: callsign        - Callsign (8 chars max)
5: longitude       - WGS84 longitude
6: latitude        - WGS84 latitude
7: baro_altitude   - Barometric altitude (meters)
9: velocity        - Ground speed (m/s)
10: true_track     - Track angle (degrees, 0=north)
13: geo_altitude   - Geometric altitude (meters)
"""

import logging
import threading
from typing import Any, List, Optional

import requests
from requests.auth import HTTPBasicAuth

from flight_proxy.config import OpenSkyConfig
from flight_proxy.errors import MalformedResponse, UpstreamUnavailable
from flight_proxy.ingestion.bbox import BoundingBox
from flight_proxy.models import SOURCE_OPENSKY, FlightSnapshot, FlightState, is_finite_number

logger = logging.getLogger(__name__)

IDX_ICAO24 = 0
IDX_CALLSIGN = 1
IDX_LONGITUDE = 5
IDX_LATITUDE = 6
IDX_BARO_ALTITUDE = 7
IDX_VELOCITY = 9
IDX_TRUE_TRACK = 10
IDX_GEO_ALTITUDE = 13


def _field(arr: List[Any], index: int) -> Any:
    return arr[index] if index < len(arr) else None


def _first_present(*values: Any) -> Any:
    """First value that is not None (0 counts as present)."""
    for value in values:
        if value is not None:
            return value
    return None


def state_from_vector(arr: Any) -> Optional[FlightState]:
    """
    Map a raw OpenSky state vector onto a FlightState.

    Returns None if the vector has no finite latitude/longitude.
    Altitude prefers geometric over barometric and defaults to 0.
    """
    if not isinstance(arr, list):
        return None

    lat = _field(arr, IDX_LATITUDE)
    lon = _field(arr, IDX_LONGITUDE)
    if not (is_finite_number(lat) and is_finite_number(lon)):
        return None

    alt = _first_present(_field(arr, IDX_GEO_ALTITUDE), _field(arr, IDX_BARO_ALTITUDE), 0)
    speed = _first_present(_field(arr, IDX_VELOCITY), 0)
    heading = _first_present(_field(arr, IDX_TRUE_TRACK), 0)

    return FlightState(
        id=str(_field(arr, IDX_ICAO24) or ''),
        callsign=str(_field(arr, IDX_CALLSIGN) or '').strip(),
        lat=float(lat),
        lon=float(lon),
        alt=float(alt) if is_finite_number(alt) else 0.0,
        speed=float(speed) if is_finite_number(speed) else 0.0,
        heading=float(heading) if is_finite_number(heading) else 0.0,
    )


class OpenSkyClient:
    """
    Client for OpenSky Network API.

    Handles:
    - GET requests to /states/all endpoint
    - Optional HTTP Basic authentication
    - Bounding box filtering
    - Bounded timeouts on every request
    """

    def __init__(
        self,
        username: Optional[str] = None,
        password: Optional[str] = None,
        base_url: str = 'https://opensky-network.org/api',
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.auth = None
        if username and password:
            self.auth = HTTPBasicAuth(username, password)
            logger.info('OpenSky client initialized with authentication')
        else:
            logger.info('OpenSky client running without authentication (lower rate limits)')

        self._session = session
        self._local = threading.local()

    @property
    def session(self) -> requests.Session:
        """Injected session, or one requests.Session per calling thread."""
        if self._session is not None:
            return self._session
        session = getattr(self._local, 'session', None)
        if session is None:
            session = self._local.session = requests.Session()
        return session

    @classmethod
    def from_config(cls, opensky: OpenSkyConfig) -> 'OpenSkyClient':
        """Create client from application configuration."""
        return cls(
            username=opensky.username,
            password=opensky.password,
            base_url=opensky.base_url,
            timeout=opensky.timeout_seconds,
        )

    def fetch_snapshot(self, bbox: BoundingBox) -> FlightSnapshot:
        """
        Fetch current flights inside the bounding box.

        Raises:
            UpstreamUnavailable on network errors, timeouts and non-2xx statuses
            MalformedResponse if the body is not a JSON states document
        """
        url = f'{self.base_url}/states/all'
        params = bbox.to_params()

        logger.debug(f'Fetching states: {url} params={params}')

        try:
            response = self.session.get(
                url,
                params=params,
                auth=self.auth,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.Timeout as e:
            logger.error('OpenSky API timeout')
            raise UpstreamUnavailable('OpenSky request timed out') from e
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            if status == 429:
                logger.warning('OpenSky rate limit exceeded')
            else:
                logger.error(f'OpenSky API error: {status}')
            raise UpstreamUnavailable(f'OpenSky returned HTTP {status}') from e
        except requests.exceptions.RequestException as e:
            logger.error(f'OpenSky request failed: {e}')
            raise UpstreamUnavailable(f'OpenSky request failed: {e}') from e

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f'OpenSky returned a non-JSON body: {e}')
            raise MalformedResponse('OpenSky returned a non-JSON body') from e

        if not isinstance(data, dict):
            raise MalformedResponse('OpenSky response is not a JSON object')

        states_raw = data.get('states') or []
        if not isinstance(states_raw, list):
            raise MalformedResponse('OpenSky states field is not a list')

        logger.info(f'Received {len(states_raw)} state vectors from OpenSky')

        flights = []
        for arr in states_raw:
            state = state_from_vector(arr)
            if state is not None:
                flights.append(state)

        logger.debug(f'Parsed {len(flights)} valid state vectors with positions')

        return FlightSnapshot.build(SOURCE_OPENSKY, flights)
