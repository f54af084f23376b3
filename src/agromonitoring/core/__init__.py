"""Core module - configuration and API client."""

from agromonitoring.core import client, timestamps
from agromonitoring.core.client import (
    IMAGE_URL,
    NDVI_HISTORY_URL,
    POLYGONS_URL,
    WEATHER_URL,
    AgroAPIError,
    AgroClient,
    APIError,
    HttpMethod,
    NetworkError,
    ParserError,
    UnknownError,
    classify_status,
    decode,
)
from agromonitoring.core.config import Settings, settings
from agromonitoring.core.timestamps import from_utc, to_utc

__all__ = [
    "client",
    "timestamps",
    "settings",
    "Settings",
    "AgroClient",
    "HttpMethod",
    "classify_status",
    "decode",
    "POLYGONS_URL",
    "IMAGE_URL",
    "WEATHER_URL",
    "NDVI_HISTORY_URL",
    # Errors
    "AgroAPIError",
    "APIError",
    "NetworkError",
    "ParserError",
    "UnknownError",
    # Timestamp helpers
    "from_utc",
    "to_utc",
]
