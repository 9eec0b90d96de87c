"""HTTP client for the CWA open data forecast API."""

import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from cwa_forecast.config import (
    CWA_API_BASE_URL, CWA_API_KEY, CWA_FORECAST_PATH, UPSTREAM_TIMEOUT_SECONDS
)
from cwa_forecast.weather.errors import (
    ConfigurationError, LocationNotFoundError, MalformedUpstreamDataError,
    TransportError, UpstreamHttpError
)
from cwa_forecast.weather.models import CwaLocation, LocationForecast

logger = logging.getLogger(__name__)


class CwaWeatherClient:
    """Async client for the CWA 36-hour general forecast dataset."""

    def __init__(
        self,
        api_key: Optional[str] = CWA_API_KEY,
        base_url: str = CWA_API_BASE_URL,
        timeout: float = UPSTREAM_TIMEOUT_SECONDS
    ):
        """Initialize the weather client.

        The API key is not validated here; a missing key is reported on the
        first fetch so the server can still start and answer health checks.

        Args:
            api_key: CWA open data authorization key
            base_url: Base URL for the CWA API
            timeout: Timeout in seconds for the upstream request
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.client = httpx.AsyncClient(timeout=timeout)

    async def fetch_forecast(self, location_name: str) -> LocationForecast:
        """Fetch the forecast for a localized location name.

        Args:
            location_name: City name as expected by the CWA API

        Returns:
            The first matching location and the dataset description

        Raises:
            ConfigurationError: If no API key is configured
            UpstreamHttpError: If the upstream responds with a non-success status
            TransportError: If the upstream cannot be reached
            LocationNotFoundError: If the upstream returns no location
            MalformedUpstreamDataError: If the response has an unexpected shape
        """
        if not self.api_key:
            logger.error("CWA_API_KEY is not set, refusing to call upstream")
            raise ConfigurationError("Please set CWA_API_KEY in the .env file")

        url = f"{self.base_url}{CWA_FORECAST_PATH}"
        params = {"Authorization": self.api_key, "locationName": location_name}

        logger.info(f"Fetching forecast for {location_name}")

        try:
            response = await self.client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            details = _error_body(e.response)
            logger.error(f"HTTP error from CWA API for {location_name}: {status} - {e.response.text}")
            message = None
            if isinstance(details, dict) and isinstance(details.get("message"), str):
                message = details["message"]
            raise UpstreamHttpError(
                status,
                message or f"Unable to get weather data for {location_name}",
                details=details
            )
        except httpx.RequestError as e:
            logger.error(f"Request error to CWA API for {location_name}: {e!r}")
            raise TransportError()

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"CWA API returned a non-JSON body for {location_name}: {e}")
            raise MalformedUpstreamDataError()

        records = data.get("records") if isinstance(data, dict) else None
        locations = records.get("location") if isinstance(records, dict) else None
        if not isinstance(locations, list) or not locations:
            logger.warning(f"CWA API returned no location record for {location_name}")
            raise LocationNotFoundError(location_name)

        try:
            location = CwaLocation(**locations[0])
        except (TypeError, ValidationError) as e:
            logger.error(f"Invalid location record for {location_name}: {e}")
            raise MalformedUpstreamDataError()

        description = records.get("datasetDescription") or ""
        if not isinstance(description, str):
            description = str(description)

        logger.info(
            f"Fetched {len(location.weather_element)} weather elements for {location.location_name}"
        )
        return LocationForecast(dataset_description=description, location=location)

    async def aclose(self):
        """Close the async HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()


def _error_body(response: httpx.Response) -> Any:
    """Return the upstream error body as parsed JSON, or raw text if it is not JSON."""
    try:
        return response.json()
    except ValueError:
        return response.text or None
