"""High-level access to the Agro Monitoring API.

``AgroProvider`` exposes one async operation per domain action. Operations
never raise API errors: a failure is logged and the result is None.

Two adapters are layered on top of the operations:

- ``submit(operation, callback)`` schedules the operation as a tracked task
  and calls ``callback`` once with its result. Every tracked task can be
  cancelled with ``cancel_all()``.
- ``stream(operation)`` is an async iterator yielding the result zero or one times.

Usage:
    provider = AgroProvider(api_key)
    polygons = await provider.get_poly_list()

    request_id = provider.submit(provider.get_current_weather(poly_id), show_weather)
    ...
    provider.cancel_all()
"""

import asyncio
import logging
import threading
import uuid
from collections.abc import AsyncIterator, Awaitable, Callable
from functools import partial
from typing import Any, TypeVar

from agromonitoring.core.client import AgroAPIError, AgroClient
from agromonitoring.polygons import Polygon, PolygonResponse, PolygonUpdate
from agromonitoring.satellite.models import Imagery, NDVIHistory, StatsInfo
from agromonitoring.satellite.options import ImageryOptions
from agromonitoring.weather.models import Current
from agromonitoring.weather.options import WeatherOptions

logger = logging.getLogger(__name__)

T = TypeVar("T")

TILE_PLACEHOLDER = "{z}/{x}/{y}"


class AgroProvider:
    """Provides access to the Agro API.

    Args:
        api_key: API key (defaults to settings); ignored when ``client`` is given
        client: A preconfigured AgroClient
    """

    def __init__(self, api_key: str | None = None, *, client: AgroClient | None = None):
        self.client = client or AgroClient(api_key)
        self._tasks: dict[str, asyncio.Task] = {}
        self._lock = threading.Lock()

    async def __aenter__(self) -> "AgroProvider":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _call(self, operation: Awaitable[T]) -> T | None:
        try:
            return await operation
        except AgroAPIError as e:
            logger.error("Agro API request failed: %s", e.description)
            return None

    # =========================================================================
    # Polygons
    # =========================================================================

    async def create_poly(self, poly: Polygon) -> PolygonResponse | None:
        """Send a polygon to the server and return the created polygon."""
        if not poly.is_valid():
            logger.error("Polygon %r is not valid: every ring needs 3+ points and must be closed", poly.name)
            return None
        return await self._call(self.client.post(poly, PolygonResponse))

    async def get_poly(self, id: str) -> PolygonResponse | None:
        """Get the polygon with the given id."""
        if not id:
            logger.error("get_poly needs a polygon id")
            return None
        return await self._call(self.client.fetch_polygon(id, PolygonResponse))

    async def get_poly_list(self) -> list[PolygonResponse] | None:
        """Get every polygon of the account."""
        return await self._call(self.client.fetch_polygon("", list[PolygonResponse]))

    async def update_poly(self, id: str, name: str) -> PolygonResponse | None:
        """Rename the polygon with the given id."""
        if not id:
            logger.error("update_poly needs a polygon id")
            return None
        return await self._call(self.client.put(id, PolygonUpdate(name=name), PolygonResponse))

    async def delete_poly(self, id: str) -> bool:
        """Delete the polygon with the given id. Returns True on success."""
        if not id:
            logger.error("delete_poly needs a polygon id")
            return False
        return bool(await self._call(self.client.delete(id)))

    # =========================================================================
    # Satellite imagery
    # =========================================================================

    async def get_imagery(self, options: ImageryOptions) -> list[Imagery] | None:
        """Search the satellite images available for a polygon."""
        return await self._call(self.client.fetch_imagery(options, list[Imagery]))

    async def get_stats_info(self, url: str) -> StatsInfo | None:
        """Fetch statistics from an ``Imagery.stats`` URL."""
        return await self._call(self.client.fetch_url(url, StatsInfo))

    async def get_ndvi_history(self, options: ImageryOptions) -> list[NDVIHistory] | None:
        """Fetch historical NDVI statistics for a polygon."""
        return await self._call(self.client.fetch_ndvi_history(options, list[NDVIHistory]))

    async def get_tile(self, url: str, z: int, x: int, y: int) -> bytes | None:
        """Fetch a map tile from an ``Imagery.tile`` URL template.

        The literal ``{z}/{x}/{y}`` in ``url`` is replaced with the coordinates.
        """
        return await self._call(self.client.fetch_data(url.replace(TILE_PLACEHOLDER, f"{z}/{x}/{y}")))

    async def get_png_image_data(self, url: str, paletteid: int) -> bytes | None:
        """Fetch PNG image bytes from an ``Imagery.image`` URL with the given palette."""
        return await self._call(self.client.fetch_data(f"{url}&paletteid={paletteid}"))

    async def get_geotiff_data(self, url: str, paletteid: int) -> bytes | None:
        """Fetch GeoTIFF bytes from an ``Imagery.data`` URL with the given palette."""
        return await self.get_png_image_data(url, paletteid)

    # =========================================================================
    # Weather
    # =========================================================================

    async def get_current_weather(self, polygon_id: str) -> Current | None:
        return await self._call(self.client.fetch_weather(polygon_id, False, Current))

    async def get_forecast_weather(self, polygon_id: str) -> list[Current] | None:
        return await self._call(self.client.fetch_weather(polygon_id, True, list[Current]))

    async def get_history_weather(self, options: WeatherOptions) -> list[Current] | None:
        return await self._call(self.client.fetch_weather_history(options, list[Current]))

    # =========================================================================
    # Adapters and in-flight tracking
    # =========================================================================

    @property
    def pending(self) -> int:
        """Number of tracked operations still in flight."""
        with self._lock:
            return len(self._tasks)

    def submit(
        self,
        operation: Awaitable[T],
        callback: Callable[[T | None], Any] | None = None,
    ) -> str:
        """Schedule ``operation`` on the running loop and track it.

        ``callback`` is called at most once, on the event loop, with the result.
        It is not called if the operation is cancelled.

        Returns:
            The request id, usable with ``cancel()``
        """
        request_id = uuid.uuid4().hex
        task = asyncio.ensure_future(operation)
        with self._lock:
            self._tasks[request_id] = task
        task.add_done_callback(partial(self._finish, request_id, callback))
        return request_id

    def _finish(self, request_id: str, callback: Callable | None, task: asyncio.Task) -> None:
        # Deliver only if cancel()/cancel_all() has not already removed the entry.
        with self._lock:
            tracked = self._tasks.pop(request_id, None) is task
        if not tracked or task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error("Operation %s failed: %r", request_id, error)
            return
        if callback is not None:
            callback(task.result())

    async def stream(self, operation: Awaitable[T]) -> AsyncIterator[T]:
        """Yield the result of ``operation`` once, or nothing if it is None."""
        value = await operation
        if value is not None:
            yield value

    def cancel(self, request_id: str) -> bool:
        """Cancel one tracked operation and drop its callback. Returns False if it is no longer tracked."""
        with self._lock:
            task = self._tasks.pop(request_id, None)
        if task is None:
            return False
        task.cancel()
        return True

    def cancel_all(self) -> list[asyncio.Task]:
        """Cancel every tracked operation and clear the tracking set."""
        with self._lock:
            tasks = list(self._tasks.values())
            self._tasks.clear()
        for task in tasks:
            task.cancel()
        if tasks:
            logger.debug("Cancelled %d in-flight operation(s)", len(tasks))
        return tasks

    async def aclose(self) -> None:
        """Cancel outstanding operations and wait for them to unwind."""
        tasks = self.cancel_all()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
