"""API endpoints for the CWA forecast proxy."""

import logging
from datetime import datetime, timezone
from typing import AsyncGenerator

from fastapi import APIRouter, Depends

from cwa_forecast.weather.models import HealthResponse, WeatherEnvelope
from cwa_forecast.weather.service import WeatherService

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix="/api", tags=["weather"])


async def get_weather_service() -> AsyncGenerator[WeatherService, None]:
    """Dependency providing a weather service for the duration of a request."""
    async with WeatherService() as service:
        yield service


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint.

    Does not contact the upstream, so it reports OK whenever the process is up.
    """
    return HealthResponse(timestamp=datetime.now(timezone.utc).isoformat())


@router.get("/weather/{city_slug}", response_model=WeatherEnvelope)
async def get_city_weather(
    city_slug: str,
    weather_service: WeatherService = Depends(get_weather_service)
) -> WeatherEnvelope:
    """Get the flattened forecast for a supported city.

    Args:
        city_slug: City slug such as ``taipei``, case insensitive

    Returns:
        WeatherEnvelope wrapping the normalized forecast

    Raises:
        WeatherServiceError: Rendered by the application's exception handler
    """
    weather = await weather_service.get_city_forecast(city_slug)
    logger.info(f"Returning {len(weather.forecasts)} forecasts for '{city_slug}'")
    return WeatherEnvelope(data=weather)
