import random
from datetime import datetime

import httpx
import pytest

from src.common.exceptions import ExternalLookupError
from src.prediction.domain.entities import WeatherCondition
from src.prediction.infrastructure.persistence.seeding import ROUTES
from src.prediction.infrastructure.providers import (
    OpenWeatherMapProvider, SimulatedDelayFeed, SimulatedEventProvider,
    SimulatedWeatherProvider, StaticDelayFeed
)
from src.prediction.infrastructure.providers.weather import parse_openweathermap


@pytest.mark.parametrize("payload,expected", [
    ({"weather": [{"main": "Clear", "description": "clear sky"}]}, WeatherCondition.CLEAR),
    ({"weather": [{"main": "Rain", "description": "light rain"}]}, WeatherCondition.RAIN),
    ({"weather": [{"main": "Rain", "description": "heavy intensity rain"}]}, WeatherCondition.HEAVY_RAIN),
    ({"weather": [{"main": "Rain", "description": "freezing rain"}]}, WeatherCondition.ICE),
    ({"weather": [{"main": "Mist", "description": "mist"}]}, WeatherCondition.FOG),
    ({"weather": [{"main": "Thunderstorm", "description": "thunderstorm"}]}, WeatherCondition.STORM),
    ({"weather": []}, WeatherCondition.UNKNOWN),
])
def test_parse_openweathermap(payload, expected):
    assert parse_openweathermap(payload) == expected


@pytest.mark.asyncio
async def test_openweathermap_provider():
    def handler(request):
        assert request.url.params["q"] == "Utrecht"
        assert request.url.params["appid"] == "secret"
        return httpx.Response(200, json={"weather": [{"main": "Snow", "description": "snow"}]})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        provider = OpenWeatherMapProvider("secret", client=client)
        assert await provider.current_weather("Utrecht") == WeatherCondition.SNOW


@pytest.mark.asyncio
async def test_openweathermap_error_raises_lookup_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(503))
    async with httpx.AsyncClient(transport=transport) as client:
        provider = OpenWeatherMapProvider("secret", client=client)
        with pytest.raises(ExternalLookupError):
            await provider.current_weather("Utrecht")


@pytest.mark.asyncio
async def test_simulated_providers():
    rng = random.Random(5)
    weather = await SimulatedWeatherProvider(rng=rng).current_weather("Assen")
    assert weather in SimulatedWeatherProvider.CONDITIONS

    always = SimulatedEventProvider(probability=1.0, rng=rng)
    never = SimulatedEventProvider(probability=0.0, rng=rng)
    assert await always.has_local_events("Assen", datetime(2024, 1, 8)) is True
    assert await never.has_local_events("Assen", datetime(2024, 1, 8)) is False


@pytest.mark.asyncio
async def test_delay_feeds():
    records = await SimulatedDelayFeed(rng=random.Random(1)).fetch()
    assert len(records) == 1
    assert records[0].route in ROUTES[records[0].transport_type]
    assert 300 <= records[0].duration <= 1800

    feed = StaticDelayFeed([records])
    assert await feed.fetch() == records
    assert await feed.fetch() == []
