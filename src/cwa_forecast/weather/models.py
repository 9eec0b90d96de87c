"""Data models for the CWA forecast proxy."""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CwaModel(BaseModel):
    """Base for raw upstream models: camelCase aliases, unknown keys ignored, numbers read as strings."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)


class CwaParameter(CwaModel):
    """Value of one weather element for one time slot."""
    name: str = Field("", alias="parameterName", description="Parameter value")
    unit: Optional[str] = Field(None, alias="parameterUnit", description="Declared unit")


class CwaTimeEntry(CwaModel):
    """One time slot of a weather element."""
    start_time: str = Field(..., alias="startTime")
    end_time: str = Field(..., alias="endTime")
    parameter: CwaParameter = Field(default_factory=CwaParameter)


class CwaWeatherElement(CwaModel):
    """Time series of a single weather attribute, such as Wx or PoP."""
    element_name: str = Field(..., alias="elementName", description="Element code")
    time: List[CwaTimeEntry] = Field(default_factory=list)


class CwaLocation(CwaModel):
    """Location record returned by the CWA forecast dataset."""
    location_name: str = Field(..., alias="locationName")
    weather_element: List[CwaWeatherElement] = Field(default_factory=list, alias="weatherElement")


class LocationForecast(BaseModel):
    """First matching location together with the dataset description."""
    dataset_description: str = Field("", description="Upstream dataset description")
    location: CwaLocation


class ApiModel(BaseModel):
    """Base for public response models, serialized with camelCase aliases."""
    model_config = ConfigDict(populate_by_name=True)


class ForecastSlot(ApiModel):
    """Forecast for one time window."""
    start_time: str = Field(..., alias="startTime")
    end_time: str = Field(..., alias="endTime")
    weather: str = ""
    rain: str = ""
    min_temp: str = Field("", alias="minTemp")
    max_temp: str = Field("", alias="maxTemp")
    comfort: str = ""
    wind_speed: str = Field("", alias="windSpeed")


class WeatherResponse(ApiModel):
    """Normalized forecast for a city."""
    city: str = Field(..., description="Location name returned by the upstream")
    update_time: str = Field(..., alias="updateTime", description="Upstream dataset description")
    forecasts: List[ForecastSlot] = Field(default_factory=list)


class WeatherEnvelope(ApiModel):
    """Successful weather response body."""
    success: bool = True
    data: WeatherResponse


class ErrorResponse(ApiModel):
    """Error response body."""
    success: bool = False
    error: str = Field(..., description="Short error label")
    message: Optional[str] = Field(None, description="Human readable error message")
    details: Optional[Any] = Field(
        None,
        description="Opaque upstream error body, forwarded unvalidated"
    )


class HealthResponse(ApiModel):
    """Health check response body."""
    status: str = "OK"
    timestamp: str = Field(..., description="ISO-8601 UTC timestamp")
