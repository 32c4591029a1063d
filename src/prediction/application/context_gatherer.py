"""
Builds the PredictionContext for a query.
"""
import asyncio
import logging
from datetime import date, datetime, tzinfo
from typing import Iterable, Optional, Set

from ...common.metrics import MetricsCollector
from ..domain.calendar import day_of_week, is_rush_hour, is_weekend, to_local
from ..domain.entities import PassengerLoad, PredictionContext, WeatherCondition
from ..domain.protocols import EventProvider, WeatherProvider

logger = logging.getLogger(__name__)


def estimate_passenger_load(time: datetime) -> PassengerLoad:
    """
    Load estimate from the clock alone: weekends are quiet, rush hours busy.
    """
    if is_weekend(time):
        return PassengerLoad.LOW
    if is_rush_hour(time.hour):
        return PassengerLoad.HIGH
    return PassengerLoad.NORMAL


class ContextGatherer:
    """
    Assembles a PredictionContext from the query time and location.
    External lookups run concurrently, each bounded by `timeout`; any
    failure or timeout degrades to a neutral default instead of failing
    the query. No retries.
    """

    def __init__(
        self,
        weather_provider: WeatherProvider,
        event_provider: EventProvider,
        timeout: float = 2.0,
        tz: Optional[tzinfo] = None,
        holidays: Optional[Iterable[date]] = None,
        metrics_collector: Optional[MetricsCollector] = None,
    ):
        self.weather_provider = weather_provider
        self.event_provider = event_provider
        self.timeout = timeout
        self.tz = tz
        self.holidays: Set[date] = set(holidays or [])
        self.metrics_collector = metrics_collector

    async def gather(self, location: str, time: datetime) -> PredictionContext:
        local_time = to_local(time, self.tz)

        weather, has_events = await asyncio.gather(
            self._lookup_weather(location),
            self._lookup_events(location, local_time),
        )

        return PredictionContext(
            timestamp=local_time,
            day_of_week=day_of_week(local_time),
            hour_of_day=local_time.hour,
            month_of_year=local_time.month,
            weather_condition=weather,
            passenger_load=estimate_passenger_load(local_time),
            is_holiday=self.is_holiday(local_time),
            has_local_events=has_events,
            location=location,
        )

    def is_holiday(self, time: datetime) -> bool:
        return is_weekend(time) or time.date() in self.holidays

    async def _lookup_weather(self, location: str) -> WeatherCondition:
        try:
            return await asyncio.wait_for(self.weather_provider.current_weather(location), self.timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Weather lookup for '{location}' timed out after {self.timeout}s, using unknown")
        except Exception as e:
            logger.warning(f"Weather lookup for '{location}' failed, using unknown: {e}")
        self._record_failure()
        return WeatherCondition.UNKNOWN

    async def _lookup_events(self, location: str, time: datetime) -> bool:
        try:
            return bool(await asyncio.wait_for(self.event_provider.has_local_events(location, time), self.timeout))
        except asyncio.TimeoutError:
            logger.warning(f"Event lookup for '{location}' timed out after {self.timeout}s, assuming none")
        except Exception as e:
            logger.warning(f"Event lookup for '{location}' failed, assuming none: {e}")
        self._record_failure()
        return False

    def _record_failure(self):
        if self.metrics_collector:
            self.metrics_collector.record_lookup_failure()
