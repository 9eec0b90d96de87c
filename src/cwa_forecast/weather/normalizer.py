"""Flattening of CWA weather element time series into per-slot forecasts."""

import logging
from typing import Callable, Dict, List

from cwa_forecast.weather.errors import MalformedUpstreamDataError
from cwa_forecast.weather.models import (
    CwaLocation, CwaParameter, ForecastSlot, WeatherResponse
)

logger = logging.getLogger(__name__)

PERCENT_UNIT = "百分比"
CELSIUS_UNIT = "C"


def _raw(parameter: CwaParameter) -> str:
    return parameter.name


def _percent(parameter: CwaParameter) -> str:
    return parameter.name + ("%" if parameter.unit == PERCENT_UNIT else "")


def _degrees(parameter: CwaParameter) -> str:
    return parameter.name + ("°" if parameter.unit == CELSIUS_UNIT else "")


# Element code -> (ForecastSlot field, value formatter)
ELEMENT_FIELDS: Dict[str, tuple[str, Callable[[CwaParameter], str]]] = {
    "Wx": ("weather", _raw),
    "PoP": ("rain", _percent),
    "MinT": ("min_temp", _degrees),
    "MaxT": ("max_temp", _degrees),
    "CI": ("comfort", _raw),
    "WS": ("wind_speed", _raw),
}


def normalize_location(location: CwaLocation, dataset_description: str) -> WeatherResponse:
    """Build the flattened forecast for one upstream location.

    The number of slots and each slot's time window come from the first
    weather element in upstream order. Every element is then read at the
    same index and mapped onto its field; unknown element codes are ignored
    and fields with no matching element stay empty.

    Args:
        location: Location record from the upstream
        dataset_description: Upstream dataset description, used as update time

    Returns:
        WeatherResponse with one ForecastSlot per time slot

    Raises:
        MalformedUpstreamDataError: If the location has no weather elements or
            an element has fewer time slots than the first one
    """
    elements = location.weather_element
    if not elements:
        logger.error(f"Location {location.location_name} has no weather elements")
        raise MalformedUpstreamDataError()

    time_slots = elements[0].time
    time_count = len(time_slots)

    for element in elements:
        if len(element.time) < time_count:
            logger.error(
                f"Element {element.element_name} of {location.location_name} has "
                f"{len(element.time)} time slots, expected {time_count}"
            )
            raise MalformedUpstreamDataError()

    forecasts: List[ForecastSlot] = []
    for i in range(time_count):
        values = {
            "start_time": time_slots[i].start_time,
            "end_time": time_slots[i].end_time,
        }
        for element in elements:
            target = ELEMENT_FIELDS.get(element.element_name)
            if target is None:
                continue
            field_name, formatter = target
            values[field_name] = formatter(element.time[i].parameter)

        forecasts.append(ForecastSlot(**values))

    return WeatherResponse(
        city=location.location_name,
        update_time=dataset_description,
        forecasts=forecasts
    )
