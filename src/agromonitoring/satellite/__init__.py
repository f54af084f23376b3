"""Satellite modules - imagery search options, imagery and NDVI models."""

from agromonitoring.satellite.models import (
    Imagery,
    ImageryStats,
    NDVIHistory,
    SatelliteUrls,
    StatsInfo,
    Sun,
)
from agromonitoring.satellite.options import ImageryOptions

__all__ = [
    "ImageryOptions",
    "Imagery",
    "ImageryStats",
    "NDVIHistory",
    "SatelliteUrls",
    "StatsInfo",
    "Sun",
]
