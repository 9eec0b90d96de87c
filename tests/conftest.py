"""Shared test fixtures."""

from typing import AsyncGenerator, List, Optional

import pytest
from fastapi.testclient import TestClient

from cwa_forecast.api.endpoints import get_weather_service
from cwa_forecast.config import CWA_FORECAST_PATH
from cwa_forecast.main import create_app
from cwa_forecast.weather.client import CwaWeatherClient
from cwa_forecast.weather.service import WeatherService

BASE_URL = "https://test-cwa.example.com/api"
FORECAST_URL = f"{BASE_URL}{CWA_FORECAST_PATH}"
TEST_API_KEY = "test-key"

SLOT_TIMES = [
    ("2024-01-01T06:00:00+08:00", "2024-01-01T18:00:00+08:00"),
    ("2024-01-01T18:00:00+08:00", "2024-01-02T06:00:00+08:00"),
    ("2024-01-02T06:00:00+08:00", "2024-01-02T18:00:00+08:00"),
]


def make_element(name: str, values: List[str], unit: Optional[str] = None) -> dict:
    """Build a raw CWA weather element with one time entry per value."""
    parameter_unit = {"parameterUnit": unit} if unit is not None else {}
    return {
        "elementName": name,
        "time": [
            {
                "startTime": start,
                "endTime": end,
                "parameter": {"parameterName": value, **parameter_unit},
            }
            for (start, end), value in zip(SLOT_TIMES, values)
        ],
    }


def make_payload(location_name: str, elements: List[dict], description: str = "三十六小時天氣預報") -> dict:
    """Wrap weather elements in the CWA dataset envelope."""
    return {
        "success": "true",
        "records": {
            "datasetDescription": description,
            "location": [{"locationName": location_name, "weatherElement": elements}],
        },
    }


@pytest.fixture
def taipei_payload() -> dict:
    """Three-slot Taipei forecast with every known element plus an unknown one."""
    return make_payload("臺北市", [
        make_element("Wx", ["多雲", "陰短暫雨", "晴時多雲"]),
        make_element("PoP", ["20", "60", "10"], unit="百分比"),
        make_element("MinT", ["15", "14", "16"], unit="C"),
        make_element("CI", ["寒冷", "寒冷", "稍有寒意"]),
        make_element("MaxT", ["19", "17", "22"], unit="C"),
        make_element("UVI", ["3", "0", "5"]),
        make_element("WS", ["3", "2", "4"]),
    ])


@pytest.fixture
def cwa_client() -> CwaWeatherClient:
    return CwaWeatherClient(api_key=TEST_API_KEY, base_url=BASE_URL, timeout=1.0)


def build_test_client(api_key: str = TEST_API_KEY, **kwargs) -> TestClient:
    """Create a TestClient whose weather service talks to the test base URL."""
    app = create_app()

    async def override_weather_service() -> AsyncGenerator[WeatherService, None]:
        client = CwaWeatherClient(api_key=api_key, base_url=BASE_URL, timeout=1.0)
        async with WeatherService(client=client) as service:
            yield service

    app.dependency_overrides[get_weather_service] = override_weather_service
    return TestClient(app, **kwargs)


@pytest.fixture
def api_client() -> TestClient:
    return build_test_client()
