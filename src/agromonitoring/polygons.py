"""Polygon models for the ``polygons`` endpoint.

A polygon is a geofence registered with the service. It is created from a
GeoJSON Feature whose geometry rings are closed: the first and last positions
of every ring MUST be identical.

API Documentation: https://agromonitoring.com/api/polygons
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from agromonitoring.core.timestamps import from_utc


class _Model(BaseModel):
    model_config = ConfigDict(extra="ignore")


class Properties(_Model):
    """GeoJSON Feature properties."""

    name: str | None = None


class Geometry(_Model):
    """GeoJSON Polygon geometry: a list of rings of [lon, lat] positions."""

    type: str = "Polygon"
    coordinates: list[list[list[float]]]


class Feature(_Model):
    """GeoJSON Feature."""

    type: str = "Feature"
    properties: Properties = Properties()
    geometry: Geometry


class PolygonResponse(_Model):
    """A polygon as returned by the server."""

    id: str
    name: str
    user_id: str
    area: float  # hectares
    center: list[float]  # mean [lon, lat] over all points
    geo_json: Feature
    created_at: int | None = None  # unix seconds

    @property
    def created(self) -> datetime | None:
        return from_utc(self.created_at) if self.created_at is not None else None


class Polygon(_Model):
    """Request body for creating a polygon."""

    name: str
    geo_json: Feature

    @classmethod
    def from_coordinates(cls, name: str, coordinates: list[list[list[float]]]) -> "Polygon":
        """Build a polygon from raw rings, e.g. ``[[[lon, lat], ...]]``."""
        geometry = Geometry(type="Polygon", coordinates=coordinates)
        return cls(name=name, geo_json=Feature(properties=Properties(name=None), geometry=geometry))

    def is_valid(self) -> bool:
        """Check that there is at least one ring and every ring has 3+ points and is closed."""
        if not self.geo_json.geometry.coordinates:
            return False
        for ring in self.geo_json.geometry.coordinates:
            if len(ring) < 3:
                return False
            if ring[0] != ring[-1]:
                return False
        return True


class PolygonUpdate(_Model):
    """Request body for renaming a polygon (PUT)."""

    name: str
