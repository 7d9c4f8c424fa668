"""
Static fallback dataset.

Reads a fixed JSON fixture of flights. It doubles as the "mock"
provider and as the last line of defense when the live provider is
down, so a missing or corrupt fixture is a configuration error.
"""

import json
import logging
from pathlib import Path
from typing import Union

from flight_proxy.config import DEFAULT_MOCK_DATA_PATH
from flight_proxy.errors import FixtureError
from flight_proxy.ingestion.bbox import BoundingBox
from flight_proxy.models import FlightSnapshot

logger = logging.getLogger(__name__)


class MockDataSource:
    """Loads the fallback flight fixture from disk on every call."""

    def __init__(self, path: Union[str, Path] = DEFAULT_MOCK_DATA_PATH):
        self.path = Path(path)

    def load(self) -> FlightSnapshot:
        """
        Read and parse the fixture.

        Raises FixtureError if the file is missing or not a valid snapshot.
        """
        # Flights are re-normalized: numbers come back as floats and keys
        # outside the FlightState fields are dropped.
        try:
            with open(self.path, encoding='utf-8') as f:
                data = json.load(f)
            return FlightSnapshot.from_dict(data)
        except (OSError, ValueError, OverflowError) as e:
            logger.error(f'Mock fixture {self.path} unusable: {e}')
            raise FixtureError(f'Mock fixture unusable: {self.path}') from e

    def fetch_snapshot(self, bbox: BoundingBox) -> FlightSnapshot:
        # The fixture is not geographic; the box is ignored.
        return self.load()
