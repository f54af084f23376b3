"""Options for the historical weather endpoint."""

from dataclasses import dataclass


@dataclass(frozen=True)
class WeatherOptions:
    """Polygon id and time range (unix seconds) for ``weather/history``."""

    polygon_id: str
    start: int
    end: int

    def to_query(self) -> str:
        return f"polyid={self.polygon_id}&start={self.start}&end={self.end}"
