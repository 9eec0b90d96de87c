"""City slug lookup for the CWA forecast dataset."""

from types import MappingProxyType
from typing import List, Mapping

from cwa_forecast.weather.errors import UnknownCityError

# Slug -> localized county/city name expected by the CWA API
CITY_MAP: Mapping[str, str] = MappingProxyType({
    "taipei": "臺北市",
    "newtaipei": "新北市",
    "taoyuan": "桃園市",
    "taichung": "臺中市",
    "tainan": "臺南市",
    "kaohsiung": "高雄市",
    "keelung": "基隆市",
    "hsinchu": "新竹市",
    "hsinchucounty": "新竹縣",
    "miaoli": "苗栗縣",
    "changhua": "彰化縣",
    "nantou": "南投縣",
    "yunlin": "雲林縣",
    "chiayi": "嘉義市",
    "chiayicounty": "嘉義縣",
    "pingtung": "屏東縣",
    "yilan": "宜蘭縣",
    "hualien": "花蓮縣",
    "taitung": "臺東縣",
    "penghu": "澎湖縣",
    "kinmen": "金門縣",
    "lianjiang": "連江縣",
})


def resolve_city(slug: str) -> str:
    """Resolve a city slug to the localized name used by the CWA API.

    Args:
        slug: City slug from the request path, any case

    Returns:
        Localized city name

    Raises:
        UnknownCityError: If the slug is not supported. The error echoes the
            slug exactly as it was given.
    """
    location_name = CITY_MAP.get(slug.lower())
    if location_name is None:
        raise UnknownCityError(slug)
    return location_name


def supported_slugs() -> List[str]:
    """Return all supported city slugs in alphabetical order."""
    return sorted(CITY_MAP)
