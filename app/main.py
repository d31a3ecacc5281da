"""FastAPI application exposing NWS forecasts by coordinate."""

import math
import signal
import sys
import uuid
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

from app.core.config import settings
from app.core.logging import configure_logging, get_logger
from app.models.weather import Coordinate, WeatherResponse
from app.services.classifier import classify_temperature
from app.services.errors import BadRequestError, WeatherServiceError
from app.services.weather import weather_service

# Configure logging
configure_logging()
logger = get_logger(__name__)

GENERIC_FAILURE_MESSAGE = "Failed to retrieve weather data"

# Prometheus metrics
REQUEST_COUNT = Counter(
    "weather_proxy_requests_total",
    "Total number of requests",
    ["method", "endpoint", "status"],
)
REQUEST_DURATION = Histogram(
    "weather_proxy_request_duration_seconds",
    "Request duration in seconds",
    ["method", "endpoint"],
)
TEMPERATURE_CATEGORIES = Counter(
    "weather_proxy_temperature_category_total",
    "Forecasts served by temperature category",
    ["category"],
)

USAGE_PAGE = """<!DOCTYPE html>
<html>
<head><title>Weather Service</title></head>
<body>
    <h1>Weather Service</h1>
    <p>Use the /weather endpoint with latitude and longitude parameters:</p>
    <p><code>/weather?lat=40.7128&amp;lon=-74.0060</code></p>

    <h2>Example US Cities:</h2>
    <p>Example: <a href="/weather?lat=40.7128&amp;lon=-74.0060">New York City</a></p>
    <p>Example: <a href="/weather?lat=34.0522&amp;lon=-118.2437">Los Angeles</a></p>
    <p>Example: <a href="/weather?lat=41.8781&amp;lon=-87.6298">Chicago</a></p>
    <p>Example: <a href="/weather?lat=25.7617&amp;lon=-80.1918">Miami</a></p>
    <p>Example: <a href="/weather?lat=47.6062&amp;lon=-122.3321">Seattle</a></p>

    <h2>Important Note:</h2>
    <p><strong>This service only works for US locations.</strong> The National Weather
    Service API covers the United States and its territories only.</p>
    <p>For international locations, coordinates outside the US will return an error.</p>
</body>
</html>
"""


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown."""
    logger.info("application_starting", version=settings.app_version, port=settings.port)

    yield

    logger.info("application_shutting_down")
    await weather_service.close()
    logger.info("application_stopped")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Weather proxy translating coordinates into NWS forecast summaries",
    lifespan=lifespan,
)


@app.middleware("http")
async def add_correlation_id(request: Request, call_next):
    """Add correlation ID to each request for tracing."""
    correlation_id = request.headers.get("X-Correlation-ID", str(uuid.uuid4()))

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(correlation_id=correlation_id)

    response = await call_next(request)
    response.headers["X-Correlation-ID"] = correlation_id

    return response


@app.middleware("http")
async def metrics_middleware(request: Request, call_next):
    """Track request metrics."""
    method = request.method
    path = request.url.path

    with REQUEST_DURATION.labels(method=method, endpoint=path).time():
        response = await call_next(request)

    REQUEST_COUNT.labels(method=method, endpoint=path, status=response.status_code).inc()

    return response


def error_response(message: str, status_code: int) -> JSONResponse:
    """Build a JSON error body carrying only the ``error`` field."""
    return JSONResponse(
        status_code=status_code,
        content=WeatherResponse(error=message).model_dump(exclude_none=True),
    )


@app.exception_handler(BadRequestError)
async def bad_request_handler(request: Request, exc: BadRequestError):
    logger.warning("bad_request", path=request.url.path, error=exc.message)
    return error_response(exc.message, 400)


@app.exception_handler(WeatherServiceError)
async def weather_service_error_handler(request: Request, exc: WeatherServiceError):
    """Expose location problems verbatim; hide upstream failures."""
    logger.error("weather_request_failed", kind=exc.kind, error=exc.message)

    if exc.client_error:
        return error_response(exc.message, 400)
    return error_response(GENERIC_FAILURE_MESSAGE, 500)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled errors."""
    logger.error("unhandled_exception", error=str(exc), path=request.url.path, exc_info=True)
    return error_response("Internal server error", 500)


def parse_coordinate(lat: str | None, lon: str | None) -> Coordinate:
    """Validate raw query parameters into a coordinate.

    Raises:
        BadRequestError: With the first problem found, latitude before longitude
    """
    if not lat or not lon:
        raise BadRequestError("Missing required parameters: lat and lon")

    latitude = _parse_degrees(lat, "Invalid latitude format")
    longitude = _parse_degrees(lon, "Invalid longitude format")

    if latitude < -90 or latitude > 90:
        raise BadRequestError("Latitude must be between -90 and 90")
    if longitude < -180 or longitude > 180:
        raise BadRequestError("Longitude must be between -180 and 180")

    return Coordinate(latitude=latitude, longitude=longitude)


def _parse_degrees(raw: str, error_message: str) -> float:
    # float() tolerates padding and digit separators; the query value must not
    if raw != raw.strip() or "_" in raw:
        raise BadRequestError(error_message)
    try:
        value = float(raw)
    except ValueError:
        raise BadRequestError(error_message)
    if math.isnan(value):
        raise BadRequestError(error_message)
    return value


@app.get(
    "/",
    response_class=HTMLResponse,
    summary="Usage page",
    tags=["Docs"],
)
async def index():
    """HTML page describing the weather endpoint with example links."""
    return USAGE_PAGE


@app.get(
    "/health",
    response_class=PlainTextResponse,
    summary="Health check",
    description="Returns a plain text message while the service is up",
    tags=["Health"],
)
async def health_check():
    logger.info("health_check")
    return "Weather service is running"


@app.get(
    "/weather",
    response_model=WeatherResponse,
    response_model_exclude_none=True,
    summary="Get weather for a coordinate",
    description="""Fetch the current NWS forecast for a US latitude/longitude.

    The temperature of the first forecast period is reported as a category:
    `hot` (80°F and above), `cold` (40°F and below) or `moderate`.
    """,
    tags=["Weather"],
    responses={
        200: {
            "description": "Successful response",
            "content": {
                "application/json": {
                    "example": {
                        "forecast": "Sunny",
                        "temperature": "hot",
                        "coordinates": "40.7128, -74.0060",
                    }
                }
            },
        },
        400: {
            "model": WeatherResponse,
            "description": "Invalid coordinates or location outside NWS coverage",
        },
        500: {
            "model": WeatherResponse,
            "description": "Weather data could not be retrieved",
        },
    },
)
async def get_weather(lat: str | None = None, lon: str | None = None):
    """Get the current forecast summary for a coordinate.

    Args:
        lat: Latitude in degrees (e.g. "40.7128")
        lon: Longitude in degrees (e.g. "-74.0060")

    Returns:
        Forecast text, temperature category and formatted coordinates

    Raises:
        BadRequestError: If the parameters are missing or invalid
        WeatherServiceError: If the forecast cannot be resolved
    """
    coordinate = parse_coordinate(lat, lon)

    forecast = await weather_service.resolve(coordinate.latitude, coordinate.longitude)

    category = classify_temperature(forecast.temperature)
    TEMPERATURE_CATEGORIES.labels(category=category).inc()
    logger.info(
        "weather_served",
        coordinates=str(coordinate),
        temperature_f=forecast.temperature,
        category=category,
    )

    return WeatherResponse(
        forecast=forecast.short_forecast,
        temperature=category,
        coordinates=str(coordinate),
    )


@app.get(
    "/metrics",
    summary="Prometheus metrics",
    description="Exposes application metrics in Prometheus format for monitoring and alerting",
    tags=["Monitoring"],
)
async def metrics():
    """Prometheus metrics endpoint.

    Returns metrics in Prometheus format including:
    - Request counts by endpoint and status code
    - Request duration histograms
    - NWS API call counts and durations
    - Served temperature categories
    """
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


def handle_shutdown_signal(signum, frame):
    """Handle shutdown signals for graceful shutdown."""
    logger.info("shutdown_signal_received", signal=signum)
    sys.exit(0)


# Register signal handlers
signal.signal(signal.SIGTERM, handle_shutdown_signal)
signal.signal(signal.SIGINT, handle_shutdown_signal)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
