import os
import sys
from datetime import date

import pytest
from fastapi.testclient import TestClient

from straymap.main import app
from straymap.schemas.geo import Coordinates
from straymap.schemas.sighting import Sighting

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def _make_sighting(latitude: float, longitude: float, observed_at: date = date(2025, 3, 1)) -> Sighting:
    return Sighting(
        coordinates=Coordinates(latitude=latitude, longitude=longitude),
        observed_at=observed_at,
    )


@pytest.fixture
def make_sighting():
    """Factory for sightings from a latitude and longitude."""
    return _make_sighting


@pytest.fixture
def small_cluster():
    """Three sightings a few tens of meters apart, near the equator."""
    return [
        _make_sighting(0.0, 0.0),
        _make_sighting(0.0, 0.001),
        _make_sighting(0.001, 0.0),
    ]


@pytest.fixture
def cluster_with_outlier():
    """Ten sightings within about 100 m of each other, plus one about 5 km north."""
    near = [_make_sighting(60.17 + i * 0.0001, 24.94) for i in range(10)]
    outlier = _make_sighting(60.215, 24.94)
    return near, outlier


@pytest.fixture(scope="function")
def client():
    """Provides a FastAPI test client."""
    with TestClient(app) as c:
        yield c
