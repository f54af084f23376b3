"""Agro Monitoring API client.

Async access to the agromonitoring.com REST API: polygons, satellite
imagery search, NDVI history and weather for a polygon.

Subpackages:
- agromonitoring.core: Configuration, HTTP client and error types
- agromonitoring.polygons: Polygon models and ring validation
- agromonitoring.satellite: Imagery search options and models
- agromonitoring.weather: Weather options and models
- agromonitoring.provider: High-level operations with cancellation
- agromonitoring.cli: Command-line tool
"""

# Re-export common items for convenience
from agromonitoring.core import (
    AgroAPIError,
    AgroClient,
    APIError,
    NetworkError,
    ParserError,
    UnknownError,
    settings,
)
from agromonitoring.polygons import Polygon, PolygonResponse
from agromonitoring.provider import AgroProvider
from agromonitoring.satellite import ImageryOptions
from agromonitoring.weather import WeatherOptions

__all__ = [
    "settings",
    "AgroClient",
    "AgroProvider",
    "AgroAPIError",
    "APIError",
    "NetworkError",
    "ParserError",
    "UnknownError",
    "Polygon",
    "PolygonResponse",
    "ImageryOptions",
    "WeatherOptions",
]

__version__ = "0.1.0"
