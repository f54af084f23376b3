"""Weather models for the current, forecast and history endpoints.

The current endpoint returns a single ``Current``; forecast and history
return a list of them.

API Documentation: https://agromonitoring.com/api/current-weather
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from agromonitoring.core.timestamps import from_utc

DEFAULT_ICON = "smiley"

# (low, high, icon) inclusive ranges of OpenWeather condition codes
_ICON_RANGES = (
    (200, 232, "cloud.bolt.rain"),  # thunderstorm
    (300, 301, "cloud.drizzle"),
    (500, 531, "cloud.rain"),
    (600, 622, "cloud.snow"),
    (701, 781, "cloud.fog"),  # fog, haze, dust
    (800, 800, "sun.max"),  # clear sky
    (801, 804, "cloud.sun"),
)


class _Model(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class Clouds(_Model):
    all: int


class Wind(_Model):
    speed: float
    deg: int


class MainData(_Model):
    temp_min: float
    temp_max: float
    humidity: int
    feels_like: float | None = None
    temp: float | None = None
    pressure: int

    sea_level: float | None = None
    grnd_level: float | None = None
    temp_kf: float | None = None


class Precipitation(_Model):
    """Rain or snow volume (mm) over the last 1h and 3h.

    The server may send an empty object (``"rain": {}``) meaning no data.
    """

    one_hour: float | None = Field(default=None, alias="1h")
    three_hour: float | None = Field(default=None, alias="3h")

    @field_validator("one_hour", "three_hour", mode="before")
    @classmethod
    def _numbers_only(cls, value):
        if isinstance(value, bool) or not isinstance(value, int | float):
            return None
        return value


class Condition(_Model):
    """A weather condition code with its description."""

    id: int
    main: str
    description: str
    icon: str

    @property
    def icon_name(self) -> str:
        """Display icon for the condition code."""
        for low, high, name in _ICON_RANGES:
            if low <= self.id <= high:
                return name
        return "cloud.sun"


class Current(_Model):
    """A weather snapshot for a polygon."""

    dt: int
    main: MainData | None = None
    wind: Wind | None = None
    clouds: Clouds | None = None
    weather: list[Condition] = []
    rain: Precipitation | None = None
    snow: Precipitation | None = None

    @property
    def date(self) -> datetime:
        return from_utc(self.dt)

    def weather_icon_name(self) -> str:
        return self.weather[0].icon_name if self.weather else DEFAULT_ICON
