"""Satellite imagery models.

``Imagery`` entries come back from ``image/search``; each carries URLs for
the rendered images (``image``), map tiles (``tile``), raw GeoTIFF data
(``data``) and statistics (``stats``). Fetching a ``stats`` URL returns a
``StatsInfo``.

API Documentation: https://agromonitoring.com/api/images
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from agromonitoring.core.timestamps import from_utc


class _Model(BaseModel):
    model_config = ConfigDict(extra="ignore")


class SatelliteUrls(_Model):
    """URLs for each band/index rendering of a scene."""

    truecolor: str | None = None
    falsecolor: str | None = None
    ndvi: str | None = None
    evi: str | None = None
    dswi: str | None = None
    ndwi: str | None = None
    nri: str | None = None
    evi2: str | None = None


class ImageryStats(_Model):
    """URLs of the per-index statistics of a scene."""

    ndvi: str | None = None
    evi: str | None = None


class Sun(_Model):
    azimuth: float | None = None
    elevation: float | None = None


class Imagery(_Model):
    """One satellite scene covering a polygon."""

    dt: int | None = None  # acquisition time, unix seconds
    type: str | None = None  # "Landsat 8", "Sentinel-2", ...
    dc: int | None = None  # valid data coverage, %
    cl: float | None = None  # cloud coverage, %
    sun: Sun | None = None
    stats: ImageryStats | None = None
    image: SatelliteUrls | None = None
    tile: SatelliteUrls | None = None
    data: SatelliteUrls | None = None

    @property
    def date(self) -> datetime | None:
        return from_utc(self.dt) if self.dt is not None else None


class StatsInfo(_Model):
    """Summary statistics of an index over a polygon."""

    std: float | None = None
    p25: float | None = None
    num: int | None = None
    min: float | None = None
    max: float | None = None
    median: float | None = None
    p75: float | None = None
    mean: float | None = None


class NDVIHistory(_Model):
    """One entry of the ``ndvi/history`` response."""

    dt: int | None = None
    source: str | None = None
    zoom: int | None = None
    dc: int | None = None
    cl: float | None = None
    data: StatsInfo | None = None

    @property
    def date(self) -> datetime | None:
        return from_utc(self.dt) if self.dt is not None else None
