"""Shared test fixtures."""

import sys
from pathlib import Path

import pytest
import respx

# Add src/ to path so tests can import agromonitoring
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from agromonitoring.core.client import AgroClient  # noqa: E402
from agromonitoring.provider import AgroProvider  # noqa: E402

API_KEY = "test-key"
POLY_ID = "5aaa8052cbbbb5000b73ff66"


@pytest.fixture
def mock_agro():
    """Mock Agro Monitoring API responses."""
    with respx.mock(base_url="https://api.agromonitoring.com") as mock:
        yield mock


@pytest.fixture
def client():
    return AgroClient(API_KEY)


@pytest.fixture
def provider(client):
    return AgroProvider(client=client)


@pytest.fixture
def sample_ring():
    """A closed ring of [lon, lat] positions."""
    return [
        [-121.1958, 37.6683],
        [-121.1779, 37.6687],
        [-121.1773, 37.6792],
        [-121.1958, 37.6792],
        [-121.1958, 37.6683],
    ]


@pytest.fixture
def sample_polygon_response(sample_ring):
    """Sample polygons endpoint response for one polygon."""
    return {
        "id": POLY_ID,
        "geo_json": {
            "type": "Feature",
            "properties": {},
            "geometry": {"type": "Polygon", "coordinates": [sample_ring]},
        },
        "name": "Polygon Sample",
        "center": [-121.1867, 37.67385],
        "area": 190.6343,
        "user_id": "5a8bbc2a4c9b4b0007b1e0b2",
        "created_at": 1521127506,
    }


@pytest.fixture
def sample_imagery_response():
    """Sample image/search response."""
    base = "https://api.agromonitoring.com"
    return [
        {
            "dt": 1500940800,
            "type": "Landsat 8",
            "dc": 100,
            "cl": 1.56,
            "sun": {"azimuth": 126.742, "elevation": 63.572},
            "image": {
                "truecolor": f"{base}/image/1.0/00059768a00/5ac22f004b1ae4000b5b97cf?appid={API_KEY}",
                "ndvi": f"{base}/image/1.0/02059768a00/5ac22f004b1ae4000b5b97cf?appid={API_KEY}",
            },
            "tile": {
                "truecolor": f"{base}/tile/1.0/{{z}}/{{x}}/{{y}}/00059768a00/5ac22f004b1ae4000b5b97cf?appid={API_KEY}",
            },
            "stats": {
                "ndvi": f"{base}/stats/1.0/02059768a00/5ac22f004b1ae4000b5b97cf?appid={API_KEY}",
            },
            "data": {
                "ndvi": f"{base}/data/1.0/02059768a00/5ac22f004b1ae4000b5b97cf?appid={API_KEY}",
            },
        }
    ]


@pytest.fixture
def sample_stats_response():
    """Sample stats URL response."""
    return {
        "std": 0.0475,
        "p25": 0.5185,
        "num": 57,
        "min": 0.4125,
        "max": 0.6577,
        "median": 0.5529,
        "p75": 0.5779,
        "mean": 0.5499,
    }


@pytest.fixture
def sample_ndvi_history_response(sample_stats_response):
    """Sample ndvi/history response."""
    return [
        {"dt": 1530403200, "source": "s2", "zoom": 12, "dc": 100, "cl": 0.0, "data": sample_stats_response},
        {"dt": 1530835200, "source": "l8", "zoom": 12, "dc": 86, "cl": 12.5, "data": sample_stats_response},
    ]


@pytest.fixture
def sample_current_weather():
    """Sample current weather response."""
    return {
        "dt": 1485703465,
        "weather": [{"id": 500, "main": "Rain", "description": "light rain", "icon": "10d"}],
        "main": {
            "temp": 284.949,
            "feels_like": 283.3,
            "pressure": 1008,
            "humidity": 87,
            "temp_min": 284.949,
            "temp_max": 284.949,
            "sea_level": 1015.9,
            "grnd_level": 1008.0,
        },
        "wind": {"speed": 3.21, "deg": 224},
        "clouds": {"all": 92},
        "rain": {"3h": 1.25},
        "snow": {},
    }
