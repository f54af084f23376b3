"""Agro Monitoring API client - URL building, requests, error mapping, decoding."""

import json
import logging
import re
from enum import Enum
from typing import Any

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from agromonitoring.core.config import settings

logger = logging.getLogger(__name__)

API_ROOT = "https://api.agromonitoring.com/agro/1.0"
POLYGONS_URL = f"{API_ROOT}/polygons"
IMAGE_URL = f"{API_ROOT}/image"
WEATHER_URL = f"{API_ROOT}/weather"
NDVI_HISTORY_URL = f"{API_ROOT}/ndvi/history"

MEDIA_TYPE = "application/json; charset=utf-8"
JSON_HEADERS = {"Accept": MEDIA_TYPE, "Content-Type": MEDIA_TYPE}

_APPID_RE = re.compile(r"appid=[^&]*")


class HttpMethod(str, Enum):
    GET = "GET"
    PUT = "PUT"
    POST = "POST"
    DELETE = "DELETE"


# =============================================================================
# Exceptions
# =============================================================================


class AgroAPIError(Exception):
    """Base class for every failure of an Agro API exchange."""

    kind = "unknown"

    @property
    def description(self) -> str:
        return str(self)


class UnknownError(AgroAPIError):
    """Failure that could not be classified."""

    def __init__(self, message: str = "Unknown error"):
        super().__init__(message)


class APIError(AgroAPIError):
    """The server rejected the request (4xx/5xx)."""

    kind = "api"

    def __init__(self, reason: str, status_code: int | None = None):
        self.reason = reason
        self.status_code = status_code
        super().__init__(reason)


class ParserError(AgroAPIError):
    """The response body did not match the expected schema."""

    kind = "parser"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class NetworkError(AgroAPIError):
    """Transport failure: DNS, TLS, connection reset, timeout."""

    kind = "network"

    def __init__(self, cause: httpx.TransportError):
        self.cause = cause
        super().__init__(str(cause) or type(cause).__name__)


# =============================================================================
# Response handling
# =============================================================================


def classify_status(status_code: int | None) -> AgroAPIError | None:
    """Map an HTTP status code to an error, or None when the body should be decoded."""
    if status_code is None:
        return UnknownError()
    if status_code == 401:
        return APIError("Unauthorized", status_code)
    if status_code == 403:
        return APIError("Resource forbidden", status_code)
    if status_code == 404:
        return APIError("Resource not found", status_code)
    if 405 <= status_code < 500:
        return APIError("client error", status_code)
    if 500 <= status_code < 600:
        return APIError("server error", status_code)
    return None


def decode(data: bytes, model: Any, *, strict: bool = False) -> Any:
    """Decode a JSON body into ``model`` (a pydantic model or any type pydantic accepts).

    An undecodable body yields None, which callers treat as "no data".
    With ``strict`` it raises ParserError instead.
    """
    if not data.strip():
        return None
    try:
        return TypeAdapter(model).validate_json(data)
    except ValidationError as e:
        if strict:
            raise ParserError(f"Could not decode response: {e.error_count()} error(s)") from e
        logger.warning("Undecodable response body for %s: %s", model, e.errors()[0]["msg"])
        return None


def _encode_body(body: Any) -> bytes:
    if isinstance(body, bytes):
        return body
    if isinstance(body, BaseModel):
        return body.model_dump_json(exclude_none=True).encode("utf-8")
    return json.dumps(body).encode("utf-8")


# =============================================================================
# Client
# =============================================================================


class AgroClient:
    """A connection to the Agro Monitoring API server.

    Each method issues exactly one request: no retries, no caching. Failures
    are raised as AgroAPIError subclasses.

    Args:
        api_key: API key (defaults to ``settings.agro_api_key``)
        timeout: Request timeout in seconds (defaults to ``settings.request_timeout``)
        strict: Raise ParserError on undecodable bodies (defaults to ``settings.strict_decoding``)
        http_client: Optional shared ``httpx.AsyncClient``; when omitted a client
            is opened per request
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        timeout: float | None = None,
        strict: bool | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        api_key = api_key or settings.agro_api_key
        if not api_key:
            raise ValueError("No API key configured (pass api_key or set AGRO_API_KEY)")
        self.api_key = api_key
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self.strict = strict if strict is not None else settings.strict_decoding
        self.http_client = http_client

    @property
    def _appid(self) -> str:
        return f"appid={self.api_key}"

    # -------------------------------------------------------------------------
    # URL builders
    # -------------------------------------------------------------------------

    def polygon_url(self, method: HttpMethod, param: str = "") -> str:
        """URL for the polygons resource.

        GET with an empty param lists all polygons, GET with an id fetches one.
        POST never takes a param; PUT and DELETE always need one.
        """
        method = HttpMethod(method)
        if method is HttpMethod.POST or (method is HttpMethod.GET and not param):
            return f"{POLYGONS_URL}?{self._appid}"
        if not param:
            raise ValueError(f"{method.value} requires a polygon id")
        return f"{POLYGONS_URL}/{param}?{self._appid}"

    def imagery_search_url(self, options) -> str:
        return f"{IMAGE_URL}/search?{options.to_query()}&{self._appid}"

    def ndvi_history_url(self, options) -> str:
        return f"{NDVI_HISTORY_URL}?{options.to_history_query()}&{self._appid}"

    def weather_url(self, polygon_id: str, forecast: bool = False) -> str:
        base = f"{WEATHER_URL}/forecast" if forecast else WEATHER_URL
        return f"{base}?polyid={polygon_id}&{self._appid}"

    def weather_history_url(self, options) -> str:
        return f"{WEATHER_URL}/history?{options.to_query()}&{self._appid}"

    # -------------------------------------------------------------------------
    # Request execution
    # -------------------------------------------------------------------------

    async def request(
        self,
        method: HttpMethod,
        url: str | httpx.URL,
        *,
        body: Any = None,
        raw: bool = False,
    ) -> httpx.Response:
        """Send one request and return the response once its status is accepted.

        JSON requests carry the Accept/Content-Type headers; raw requests carry none.

        Raises:
            APIError: On a 4xx/5xx status
            NetworkError: On a transport failure
            UnknownError: On any other httpx failure
        """
        method = HttpMethod(method)
        headers = {} if raw else JSON_HEADERS
        content = _encode_body(body) if body is not None else None
        logger.debug("%s %s", method.value, _redact(url))

        try:
            if self.http_client is not None:
                response = await self.http_client.request(
                    method.value, url, headers=headers, content=content, timeout=self.timeout
                )
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.request(method.value, url, headers=headers, content=content)
        except httpx.TransportError as e:
            raise NetworkError(e) from e
        except httpx.HTTPError as e:
            raise UnknownError(f"Unknown error: {e}") from e

        error = classify_status(response.status_code)
        if error is not None:
            raise error
        return response

    async def _send(self, method: HttpMethod, url: str, model: Any, body: Any = None) -> Any:
        target = _parse_url(url)
        if target is None:
            return None
        response = await self.request(method, target, body=body)
        return decode(response.content, model, strict=self.strict)

    async def post(self, body: Any, model: Any) -> Any:
        """POST a new polygon. The response is decoded into ``model``."""
        return await self._send(HttpMethod.POST, self.polygon_url(HttpMethod.POST), model, body)

    async def put(self, param: str, body: Any, model: Any) -> Any:
        """PUT changes to polygon ``param``."""
        return await self._send(HttpMethod.PUT, self.polygon_url(HttpMethod.PUT, param), model, body)

    async def delete(self, param: str, model: Any = None) -> Any:
        """DELETE polygon ``param``.

        Without a ``model`` the body is not decoded and the result is whether
        the request was sent.
        """
        url = self.polygon_url(HttpMethod.DELETE, param)
        if model is None:
            target = _parse_url(url)
            if target is None:
                return False
            await self.request(HttpMethod.DELETE, target)
            return True
        return await self._send(HttpMethod.DELETE, url, model)

    async def fetch_polygon(self, param: str, model: Any) -> Any:
        """GET polygon ``param``, or the list of all polygons when ``param`` is empty."""
        return await self._send(HttpMethod.GET, self.polygon_url(HttpMethod.GET, param), model)

    async def fetch_imagery(self, options, model: Any) -> Any:
        """Search satellite imagery with ImageryOptions."""
        return await self._send(HttpMethod.GET, self.imagery_search_url(options), model)

    async def fetch_ndvi_history(self, options, model: Any) -> Any:
        """Fetch historical NDVI statistics with ImageryOptions."""
        return await self._send(HttpMethod.GET, self.ndvi_history_url(options), model)

    async def fetch_weather(self, polygon_id: str, forecast: bool, model: Any) -> Any:
        """Fetch current (or forecast) weather for a polygon."""
        return await self._send(HttpMethod.GET, self.weather_url(polygon_id, forecast), model)

    async def fetch_weather_history(self, options, model: Any) -> Any:
        """Fetch historical weather with WeatherOptions."""
        return await self._send(HttpMethod.GET, self.weather_history_url(options), model)

    async def fetch_url(self, url: str, model: Any) -> Any:
        """GET an arbitrary URL (e.g. an imagery ``stats`` link) and decode it."""
        return await self._send(HttpMethod.GET, url, model)

    async def fetch_data(self, url: str) -> bytes | None:
        """GET an arbitrary URL and return the body unparsed (tiles, PNG, GeoTIFF)."""
        target = _parse_url(url)
        if target is None:
            return None
        response = await self.request(HttpMethod.GET, target, raw=True)
        return response.content


def _parse_url(url: str) -> httpx.URL | None:
    try:
        return httpx.URL(url)
    except httpx.InvalidURL as e:
        logger.warning("Invalid URL %r: %s", _redact(url), e)
        return None


def _redact(url: str | httpx.URL) -> str:
    """Hide the api key when logging a URL."""
    return _APPID_RE.sub("appid=***", str(url))
