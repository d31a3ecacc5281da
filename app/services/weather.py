"""Forecast resolution against the National Weather Service API."""

from typing import Any

import httpx
from prometheus_client import Counter, Histogram
from pydantic import ValidationError

from app.core.config import settings
from app.core.logging import get_logger
from app.models.weather import ForecastPeriod, ForecastResult
from app.services.coverage import coverage_region
from app.services.errors import (
    ForecastUnavailableError,
    GridNotFoundError,
    MalformedUpstreamResponseError,
    NoForecastPeriodsError,
    OutOfCoverageError,
    UpstreamError,
    UpstreamUnreachableError,
)

logger = get_logger(__name__)

UPSTREAM_REQUESTS = Counter(
    "weather_proxy_upstream_requests_total",
    "Total number of NWS API calls",
    ["call", "outcome"],
)
UPSTREAM_DURATION = Histogram(
    "weather_proxy_upstream_request_duration_seconds",
    "NWS API call duration in seconds",
    ["call"],
)


def to_fahrenheit(value: int, unit: str) -> int:
    """Convert a forecast temperature to whole degrees Fahrenheit.

    Celsius values are converted and truncated toward zero. Any other unit
    is assumed to already be Fahrenheit and passed through unchanged.
    """
    if unit.upper() == "C":
        return int(value * 9 / 5 + 32)
    return value


class WeatherService:
    """Resolves a coordinate to its current forecast in two NWS calls."""

    def __init__(self):
        """Initialize weather service with a pooled HTTP client."""
        self.client = httpx.AsyncClient(
            timeout=settings.request_timeout,
            follow_redirects=True,
            headers={
                "User-Agent": settings.user_agent,
                "Accept": "application/geo+json",
            },
        )

    async def close(self) -> None:
        """Close HTTP client."""
        await self.client.aclose()

    def _points_url(self, lat: float, lon: float) -> str:
        return f"{settings.nws_api_url.rstrip('/')}/points/{lat:.4f},{lon:.4f}"

    async def _get(self, call: str, url: str) -> httpx.Response:
        """Issue a single GET to the NWS API.

        Args:
            call: Metric label for the call ("points" or "forecast")
            url: Absolute URL to fetch

        Returns:
            The upstream response, whatever its status

        Raises:
            UpstreamUnreachableError: On connection failure or timeout
            MalformedUpstreamResponseError: If the URL itself is unusable
        """
        try:
            with UPSTREAM_DURATION.labels(call=call).time():
                response = await self.client.get(url)
        except httpx.InvalidURL as e:
            UPSTREAM_REQUESTS.labels(call=call, outcome="invalid_url").inc()
            raise MalformedUpstreamResponseError(f"invalid {call} URL {url!r}: {e}")
        except httpx.HTTPError as e:
            UPSTREAM_REQUESTS.labels(call=call, outcome="unreachable").inc()
            raise UpstreamUnreachableError(f"failed to get {call}: {e}")

        UPSTREAM_REQUESTS.labels(call=call, outcome=str(response.status_code)).inc()
        logger.info("nws_response", call=call, status=response.status_code)
        return response

    @staticmethod
    def _parse_json(call: str, response: httpx.Response) -> dict[str, Any]:
        try:
            data = response.json()
        except ValueError as e:
            raise MalformedUpstreamResponseError(f"failed to parse {call} response: {e}")

        if not isinstance(data, dict):
            raise MalformedUpstreamResponseError(f"{call} response is not a JSON object")
        return data

    async def _lookup_forecast_url(self, lat: float, lon: float) -> str:
        """Resolve the forecast URL for a coordinate via the points service.

        Raises:
            GridNotFoundError: If the points service returns 404
            UpstreamError: On any other non-200 status
            MalformedUpstreamResponseError: If no forecast URL can be read
        """
        url = self._points_url(lat, lon)
        logger.info("points_lookup", url=url)

        response = await self._get("points", url)

        if response.status_code == 404:
            raise GridNotFoundError(
                f"coordinates ({lat:.4f}, {lon:.4f}) not found in NWS grid system"
                " - may be outside coverage area"
            )
        if response.status_code != 200:
            raise UpstreamError(f"grid points API returned status: {response.status_code}")

        properties = self._parse_json("grid points", response).get("properties")
        forecast_url = properties.get("forecast") if isinstance(properties, dict) else None

        if not forecast_url or not isinstance(forecast_url, str):
            raise MalformedUpstreamResponseError("no forecast URL found in grid response")

        logger.info("forecast_url_resolved", forecast_url=forecast_url)
        return forecast_url

    async def _fetch_first_period(self, forecast_url: str) -> ForecastPeriod:
        """Fetch a forecast and return its first period.

        Raises:
            ForecastUnavailableError: If the forecast service returns non-200
            MalformedUpstreamResponseError: If the body cannot be parsed
            NoForecastPeriodsError: If the forecast has no periods
        """
        logger.info("forecast_fetch", url=forecast_url)

        response = await self._get("forecast", forecast_url)

        if response.status_code != 200:
            raise ForecastUnavailableError(
                f"forecast API returned status: {response.status_code}"
            )

        properties = self._parse_json("forecast", response).get("properties") or {}
        if not isinstance(properties, dict):
            raise MalformedUpstreamResponseError("forecast properties is not a JSON object")

        periods = properties.get("periods") or []
        if not isinstance(periods, list):
            raise MalformedUpstreamResponseError("forecast periods is not a list")

        if not periods:
            raise NoForecastPeriodsError("no forecast periods found")

        try:
            return ForecastPeriod.model_validate(periods[0])
        except ValidationError as e:
            raise MalformedUpstreamResponseError(f"failed to parse forecast period: {e}")

    async def resolve(self, lat: float, lon: float) -> ForecastResult:
        """Get the current forecast for a coordinate.

        Args:
            lat: Latitude in degrees
            lon: Longitude in degrees

        Returns:
            Short forecast and temperature in Fahrenheit

        Raises:
            WeatherServiceError: Tagged with the kind of failure
        """
        region = coverage_region(lat, lon)
        if region is None:
            raise OutOfCoverageError(
                f"coordinates ({lat:.4f}, {lon:.4f}) are outside NWS coverage area"
                " (US and territories only)"
            )

        logger.info("weather_request", latitude=lat, longitude=lon, region=region)

        forecast_url = await self._lookup_forecast_url(lat, lon)
        period = await self._fetch_first_period(forecast_url)

        logger.info(
            "forecast_retrieved",
            forecast=period.short_forecast,
            temperature=period.temperature,
            unit=period.temperature_unit,
        )

        temperature = to_fahrenheit(period.temperature, period.temperature_unit)
        if period.temperature_unit.upper() == "C":
            logger.info(
                "temperature_converted",
                celsius=period.temperature,
                fahrenheit=temperature,
            )

        return ForecastResult(
            short_forecast=period.short_forecast,
            temperature=temperature,
            temperature_unit=period.temperature_unit,
        )


# Global weather service instance
weather_service = WeatherService()
