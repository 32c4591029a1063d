from .weather import StaticWeatherProvider, SimulatedWeatherProvider, OpenWeatherMapProvider
from .events import StaticEventProvider, SimulatedEventProvider
from .delay_feed import StaticDelayFeed, SimulatedDelayFeed
