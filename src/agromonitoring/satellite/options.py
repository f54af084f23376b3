"""Search options for the satellite imagery and NDVI history endpoints."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ImageryOptions:
    """Options for searching satellite images of a polygon.

    ``start`` and ``end`` are unix timestamps in seconds. Optional bounds are
    only sent when set.
    """

    polygon_id: str
    start: int
    end: int

    resolution_min: int | None = None
    resolution_max: int | None = None
    type: str | None = None
    coverage_max: float | None = None
    coverage_min: float | None = None
    clouds_max: float | None = None
    clouds_min: float | None = None

    def to_query(self) -> str:
        """Serialize to the ``image/search`` query string (without the api key).

        Values are not URL-encoded here; that happens when the URL is built.
        """
        params = [
            f"polygon_id={self.polygon_id}",
            f"start={self.start}",
            f"end={self.end}",
        ]
        optionals = (
            ("resolution_min", self.resolution_min),
            ("resolution_max", self.resolution_max),
            ("type", self.type),
            ("coverage_max", self.coverage_max),
            ("coverage_min", self.coverage_min),
            ("clouds_max", self.clouds_max),
            ("clouds_min", self.clouds_min),
        )
        params.extend(f"{key}={value}" for key, value in optionals if value is not None)
        return "&".join(params)

    def to_history_query(self) -> str:
        """Serialize to the ``ndvi/history`` query string (without the api key)."""
        return f"polyid={self.polygon_id}&start={self.start}&end={self.end}"
