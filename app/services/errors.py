"""Error taxonomy for weather resolution and request validation."""


class BadRequestError(Exception):
    """Invalid client input."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class WeatherServiceError(Exception):
    """Base class for failures while resolving a forecast.

    ``kind`` tags the failure. ``client_error`` marks failures caused by the
    requested location, whose message may be shown to the caller as-is.
    """

    kind = "WeatherServiceError"
    client_error = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class OutOfCoverageError(WeatherServiceError):
    """Coordinates fall outside every NWS coverage box."""

    kind = "OutOfCoverage"
    client_error = True


class GridNotFoundError(WeatherServiceError):
    """Points service has no grid for the coordinates."""

    kind = "GridNotFound"
    client_error = True


class UpstreamUnreachableError(WeatherServiceError):
    """Connection failure or timeout talking to the NWS API."""

    kind = "UpstreamUnreachable"


class UpstreamError(WeatherServiceError):
    """Points service answered with an unexpected status."""

    kind = "UpstreamError"


class ForecastUnavailableError(WeatherServiceError):
    """Forecast service answered with a non-200 status."""

    kind = "ForecastUnavailable"


class MalformedUpstreamResponseError(WeatherServiceError):
    """Upstream body could not be parsed or lacks required fields."""

    kind = "MalformedUpstreamResponse"


class NoForecastPeriodsError(WeatherServiceError):
    """Forecast contained no periods."""

    kind = "NoForecastPeriods"
