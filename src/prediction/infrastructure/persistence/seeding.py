"""
Synthetic cold-start corpus for an empty knowledge base.
"""
import logging
import uuid
from datetime import datetime, timedelta
from typing import List, Optional, Sequence, TypeVar

import numpy as np

from ....common.logging import log_execution_time
from ...domain.calendar import day_of_week, is_rush_hour, is_weekend
from ...domain.entities import (
    DelayReason,
    HistoricalIncident,
    PassengerLoad,
    SeverityLevel,
    TransportType,
    WeatherCondition,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

ROUTES = {
    TransportType.TRAIN: [
        "Amsterdam Centraal - Utrecht Centraal",
        "Rotterdam Centraal - Den Haag Centraal",
        "Eindhoven Centraal - Utrecht Centraal",
        "Groningen - Zwolle",
        "Maastricht - Eindhoven",
    ],
    TransportType.BUS: [
        "Line 22: Leidseplein - Muiderpoort",
        "Line 48: Dam - Borneo Eiland",
        "Line 25: Schiedam - Rotterdam CS",
        "Line 18: Den Haag HS - Scheveningen",
    ],
    TransportType.ROAD: [
        "A1 Amsterdam - Apeldoorn",
        "A4 Den Haag - Rotterdam",
        "A2 Utrecht - Den Bosch",
        "A12 Den Haag - Utrecht",
        "A50 Eindhoven - Apeldoorn",
    ],
}

LOCATIONS = [
    "Amsterdam", "Rotterdam", "Den Haag", "Utrecht", "Eindhoven",
    "Groningen", "Zwolle", "Tilburg", "Breda", "Amersfoort",
    "Haarlem", "Lelystad", "Maastricht", "Venlo", "Assen",
]

WINTER_WEATHER = [WeatherCondition.SNOW, WeatherCondition.ICE, WeatherCondition.RAIN, WeatherCondition.CLOUDY]
SUMMER_WEATHER = [WeatherCondition.CLEAR, WeatherCondition.CLOUDY, WeatherCondition.RAIN]

MIN_DURATION = 300.0   # 5 minutes
MAX_DURATION = 3600.0  # 1 hour


class CorpusSeeder:
    """
    Generates a synthetic incident history: for each of the past `days`
    days, 0..max_incidents_per_day incidents at random hours.
    Weather follows the season and passenger load follows the clock.
    """

    def __init__(
        self,
        days: int = 90,
        max_incidents_per_day: int = 3,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        self.days = days
        self.max_incidents_per_day = max_incidents_per_day
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def _pick(self, items: Sequence[T]) -> T:
        return items[int(self.rng.integers(len(items)))]

    @log_execution_time(logger)
    def generate(self, now: datetime) -> List[HistoricalIncident]:
        incidents = []
        for day_offset in range(self.days):
            date = now - timedelta(days=day_offset)
            for _ in range(int(self.rng.integers(0, self.max_incidents_per_day + 1))):
                incidents.append(self._generate_incident(date))

        logger.info(f"Seeded {len(incidents)} synthetic incidents over {self.days} days")
        return incidents

    def _generate_incident(self, date: datetime) -> HistoricalIncident:
        timestamp = date.replace(
            hour=int(self.rng.integers(0, 24)),
            minute=int(self.rng.integers(0, 60)),
            second=0,
            microsecond=0,
        )
        transport_type = self._pick(list(TransportType))
        reason = self._pick(list(DelayReason))
        duration = float(self.rng.uniform(MIN_DURATION, MAX_DURATION))
        route = self._pick(ROUTES[transport_type])

        return HistoricalIncident(
            id=uuid.UUID(bytes=self.rng.bytes(16), version=4),
            timestamp=timestamp,
            transport_type=transport_type,
            route=route,
            location=self._pick(LOCATIONS),
            duration=duration,
            reason=reason,
            severity=SeverityLevel.for_duration(duration),
            weather_condition=self.weather_for(timestamp),
            day_of_week=day_of_week(timestamp),
            hour_of_day=timestamp.hour,
            passenger_load=self.passenger_load_for(timestamp),
            is_holiday=is_weekend(timestamp),
            description=f"{reason.value} on {route}",
        )

    def weather_for(self, ts: datetime) -> WeatherCondition:
        if ts.month in (12, 1, 2):
            return self._pick(WINTER_WEATHER)
        if ts.month in (6, 7, 8):
            return self._pick(SUMMER_WEATHER)
        return self._pick(list(WeatherCondition))

    def passenger_load_for(self, ts: datetime) -> PassengerLoad:
        if is_weekend(ts):
            return self._pick([PassengerLoad.LOW, PassengerLoad.NORMAL])
        if is_rush_hour(ts.hour):
            return self._pick([PassengerLoad.HIGH, PassengerLoad.EXTREME])
        return PassengerLoad.NORMAL
