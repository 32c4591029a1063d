"""
Domain protocols for the Delay Prediction module.
External collaborators the engine consumes.
"""
from datetime import datetime
from typing import List, Protocol

from .entities import LiveDelayRecord, WeatherCondition


class WeatherProvider(Protocol):
    """
    Current weather at a location. May raise; callers degrade to UNKNOWN.
    """
    async def current_weather(self, location: str) -> WeatherCondition:
        ...


class EventProvider(Protocol):
    """
    Whether a local event (concert, match, fair) affects a location on a date.
    """
    async def has_local_events(self, location: str, date: datetime) -> bool:
        ...


class DelayFeed(Protocol):
    """
    Source of fresh delay signals from the live transit layer.
    """
    async def fetch(self) -> List[LiveDelayRecord]:
        ...
