"""Error taxonomy for the forecast proxy.

Each error carries the HTTP status and the public ``error``/``message`` pair
rendered to clients. Internal details (exception text, tracebacks) are logged
where the error is raised and never attached here.
"""

from typing import Any, Optional


class WeatherServiceError(Exception):
    """Base class for errors translated into a JSON error response."""

    status_code: int = 500
    error: str = "Server error"

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ConfigurationError(WeatherServiceError):
    """Raised when the upstream API key is not configured."""

    status_code = 500
    error = "Server configuration error"


class UnknownCityError(WeatherServiceError):
    """Raised when a city slug is not in the lookup table."""

    status_code = 404
    error = "Invalid city code"

    def __init__(self, slug: str):
        super().__init__(f"City code ({slug}) is not supported")
        self.slug = slug


class LocationNotFoundError(WeatherServiceError):
    """Raised when the upstream returns no location record for a name."""

    status_code = 404
    error = "No data found"

    def __init__(self, location_name: str):
        super().__init__(
            f"Unable to get weather data for {location_name}, please check the city name"
        )
        self.location_name = location_name


class UpstreamHttpError(WeatherServiceError):
    """Raised when the upstream responds with a non-success status.

    The status code is mirrored to the client and ``details`` holds the
    upstream's error body as-is.
    """

    error = "CWA API error"

    def __init__(self, status_code: int, message: str, details: Optional[Any] = None):
        super().__init__(message, details=details)
        self.status_code = status_code


class TransportError(WeatherServiceError):
    """Raised when the upstream cannot be reached at all."""

    status_code = 500
    error = "Server error"

    def __init__(self):
        super().__init__("Unable to get weather data, please try again later")


class MalformedUpstreamDataError(WeatherServiceError):
    """Raised when the upstream payload does not have the expected shape."""

    status_code = 500
    error = "Malformed upstream data"

    def __init__(self):
        super().__init__("Weather data from the upstream service could not be processed")
