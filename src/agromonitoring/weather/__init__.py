"""Weather modules - current, forecast and history models and options."""

from agromonitoring.weather.models import (
    Clouds,
    Condition,
    Current,
    MainData,
    Precipitation,
    Wind,
)
from agromonitoring.weather.options import WeatherOptions

__all__ = [
    "WeatherOptions",
    "Current",
    "Condition",
    "Clouds",
    "MainData",
    "Precipitation",
    "Wind",
]
