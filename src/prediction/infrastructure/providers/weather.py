"""
WeatherProvider implementations.
"""
import logging
import random
from typing import Optional

import httpx

from ....common.exceptions import ExternalLookupError
from ...domain.entities import WeatherCondition
from ...domain.protocols import WeatherProvider

logger = logging.getLogger(__name__)

OPENWEATHERMAP_URL = "https://api.openweathermap.org/data/2.5/weather"

# OpenWeatherMap "main" groups
_OWM_GROUPS = {
    "clear": WeatherCondition.CLEAR,
    "clouds": WeatherCondition.CLOUDY,
    "drizzle": WeatherCondition.RAIN,
    "rain": WeatherCondition.RAIN,
    "snow": WeatherCondition.SNOW,
    "mist": WeatherCondition.FOG,
    "fog": WeatherCondition.FOG,
    "haze": WeatherCondition.FOG,
    "smoke": WeatherCondition.FOG,
    "thunderstorm": WeatherCondition.STORM,
    "squall": WeatherCondition.STORM,
    "tornado": WeatherCondition.STORM,
}


class StaticWeatherProvider(WeatherProvider):
    """Always reports the same condition."""

    def __init__(self, condition: WeatherCondition = WeatherCondition.CLEAR):
        self.condition = condition

    async def current_weather(self, location: str) -> WeatherCondition:
        return self.condition


class SimulatedWeatherProvider(WeatherProvider):
    """Random weather for demos, drawn from the conditions a live feed reports most."""

    CONDITIONS = [
        WeatherCondition.CLEAR,
        WeatherCondition.CLOUDY,
        WeatherCondition.RAIN,
        WeatherCondition.HEAVY_RAIN,
        WeatherCondition.SNOW,
        WeatherCondition.FOG,
    ]

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    async def current_weather(self, location: str) -> WeatherCondition:
        return self.rng.choice(self.CONDITIONS)


def parse_openweathermap(data: dict) -> WeatherCondition:
    """Maps an OpenWeatherMap current-weather payload to a WeatherCondition."""
    weather = (data.get("weather") or [{}])[0]
    main = (weather.get("main") or "").lower()
    description = (weather.get("description") or "").lower()

    if "freezing" in description or "sleet" in description:
        return WeatherCondition.ICE
    if main == "rain" and ("heavy" in description or "extreme" in description):
        return WeatherCondition.HEAVY_RAIN
    return _OWM_GROUPS.get(main, WeatherCondition.UNKNOWN)


class OpenWeatherMapProvider(WeatherProvider):
    """
    Current weather from OpenWeatherMap, queried by city name.
    Failures raise ExternalLookupError; the ContextGatherer degrades them.
    """

    def __init__(
        self,
        api_key: str,
        url: str = OPENWEATHERMAP_URL,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ):
        self.api_key = api_key
        self.url = url
        self.timeout = timeout
        self._client = client

    async def current_weather(self, location: str) -> WeatherCondition:
        params = {"q": location, "appid": self.api_key, "units": "metric"}
        try:
            if self._client is not None:
                response = await self._client.get(self.url, params=params, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(self.url, params=params)
            response.raise_for_status()
            return parse_openweathermap(response.json())
        except (httpx.HTTPError, ValueError) as e:
            raise ExternalLookupError(f"Weather lookup for '{location}' failed: {e}") from e
