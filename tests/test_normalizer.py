"""Tests for flattening weather elements into forecast slots."""

import pytest

from cwa_forecast.weather.errors import MalformedUpstreamDataError
from cwa_forecast.weather.models import CwaLocation
from cwa_forecast.weather.normalizer import normalize_location

from conftest import SLOT_TIMES, make_element


def location(*elements: dict, name: str = "臺北市") -> CwaLocation:
    return CwaLocation(locationName=name, weatherElement=list(elements))


class TestNormalizeLocation:
    def test_full_payload(self, taipei_payload: dict):
        raw = taipei_payload["records"]["location"][0]
        result = normalize_location(CwaLocation(**raw), "三十六小時天氣預報")

        assert result.city == "臺北市"
        assert result.update_time == "三十六小時天氣預報"
        assert len(result.forecasts) == 3

        first = result.forecasts[0]
        assert first.start_time == SLOT_TIMES[0][0]
        assert first.end_time == SLOT_TIMES[0][1]
        assert first.weather == "多雲"
        assert first.rain == "20%"
        assert first.min_temp == "15°"
        assert first.max_temp == "19°"
        assert first.comfort == "寒冷"
        assert first.wind_speed == "3"

    def test_preserves_time_order(self, taipei_payload: dict):
        raw = taipei_payload["records"]["location"][0]
        result = normalize_location(CwaLocation(**raw), "")

        assert [(f.start_time, f.end_time) for f in result.forecasts] == SLOT_TIMES
        assert [f.weather for f in result.forecasts] == ["多雲", "陰短暫雨", "晴時多雲"]

    def test_slot_count_follows_first_element(self):
        result = normalize_location(
            location(make_element("Wx", ["晴"]), make_element("PoP", ["0", "10"], unit="百分比")),
            "",
        )
        assert len(result.forecasts) == 1
        assert result.forecasts[0].rain == "0%"

    def test_first_element_need_not_be_wx(self):
        result = normalize_location(
            location(make_element("CI", ["舒適", "悶熱"]), make_element("Wx", ["晴", "雨"])),
            "",
        )
        assert [f.comfort for f in result.forecasts] == ["舒適", "悶熱"]
        assert [f.weather for f in result.forecasts] == ["晴", "雨"]

    @pytest.mark.parametrize("unit,expected", [
        ("百分比", "30%"),
        ("percent", "30"),
        (None, "30"),
    ])
    def test_rain_percent_suffix(self, unit, expected):
        result = normalize_location(location(make_element("PoP", ["30"], unit=unit)), "")
        assert result.forecasts[0].rain == expected

    @pytest.mark.parametrize("unit,expected", [
        ("C", "25°"),
        ("F", "25"),
        (None, "25"),
    ])
    def test_temperature_degree_suffix(self, unit, expected):
        result = normalize_location(
            location(make_element("MinT", ["25"], unit=unit), make_element("MaxT", ["25"], unit=unit)),
            "",
        )
        assert result.forecasts[0].min_temp == expected
        assert result.forecasts[0].max_temp == expected

    def test_missing_elements_stay_empty(self):
        result = normalize_location(location(make_element("Wx", ["多雲"])), "")
        slot = result.forecasts[0]
        assert slot.weather == "多雲"
        assert slot.rain == ""
        assert slot.min_temp == ""
        assert slot.max_temp == ""
        assert slot.comfort == ""
        assert slot.wind_speed == ""

    def test_unknown_elements_ignored(self):
        result = normalize_location(
            location(make_element("UVI", ["5", "6"]), make_element("Wx", ["晴", "陰"])),
            "",
        )
        assert [f.weather for f in result.forecasts] == ["晴", "陰"]
        dumped = result.forecasts[0].model_dump(by_alias=True)
        assert "5" not in dumped.values()

    def test_zero_time_slots(self):
        result = normalize_location(location({"elementName": "Wx", "time": []}), "desc")
        assert result.forecasts == []
        assert result.city == "臺北市"

    def test_shorter_element_is_malformed(self):
        with pytest.raises(MalformedUpstreamDataError):
            normalize_location(
                location(make_element("Wx", ["晴", "陰"]), make_element("PoP", ["10"], unit="百分比")),
                "",
            )

    def test_no_elements_is_malformed(self):
        with pytest.raises(MalformedUpstreamDataError):
            normalize_location(location(), "")

    def test_serializes_camel_case(self, taipei_payload: dict):
        raw = taipei_payload["records"]["location"][0]
        dumped = normalize_location(CwaLocation(**raw), "desc").model_dump(by_alias=True)

        assert set(dumped) == {"city", "updateTime", "forecasts"}
        assert set(dumped["forecasts"][0]) == {
            "startTime", "endTime", "weather", "rain",
            "minTemp", "maxTemp", "comfort", "windSpeed",
        }
