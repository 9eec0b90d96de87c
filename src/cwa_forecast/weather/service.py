"""Weather service tying together city lookup, upstream fetch and normalization."""

import logging
from typing import Optional

from cwa_forecast.weather.cities import resolve_city
from cwa_forecast.weather.client import CwaWeatherClient
from cwa_forecast.weather.errors import WeatherServiceError
from cwa_forecast.weather.models import WeatherResponse
from cwa_forecast.weather.normalizer import normalize_location

logger = logging.getLogger(__name__)


class WeatherService:
    """Service answering forecast requests for a city slug."""

    def __init__(self, client: Optional[CwaWeatherClient] = None):
        """Initialize the weather service.

        Args:
            client: Upstream client instance (creates default if None)
        """
        self.client = client or CwaWeatherClient()

    async def get_city_forecast(self, city_slug: str) -> WeatherResponse:
        """Get the normalized forecast for a city slug.

        Args:
            city_slug: City slug from the request path

        Returns:
            WeatherResponse for the resolved city

        Raises:
            WeatherServiceError: If any stage of the pipeline fails
        """
        try:
            location_name = resolve_city(city_slug)
            logger.info(f"Resolved city slug '{city_slug}' to {location_name}")

            forecast = await self.client.fetch_forecast(location_name)
            weather = normalize_location(forecast.location, forecast.dataset_description)

        except WeatherServiceError as e:
            logger.warning(
                f"Forecast for '{city_slug}' failed with {e.status_code} {type(e).__name__}: {e.message}"
            )
            raise

        logger.info(f"Built {len(weather.forecasts)} forecast slots for {weather.city}")
        return weather

    async def aclose(self):
        """Close the upstream client."""
        if self.client:
            try:
                await self.client.aclose()
            except Exception as e:
                logger.error(f"Error closing weather client: {e}")

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()
