"""
Builders for domain objects used across the test suite.
"""
import uuid
from datetime import datetime, timezone

from src.prediction.domain.calendar import day_of_week
from src.prediction.domain.entities import (
    DelayReason, HistoricalIncident, PassengerLoad, PredictionContext,
    SeverityLevel, TransportType, WeatherCondition
)

# Monday 8 January 2024, 08:00 UTC
MONDAY_MORNING = datetime(2024, 1, 8, 8, 0, tzinfo=timezone.utc)
# Wednesday 12 June 2024, 14:00 UTC
WEDNESDAY_AFTERNOON = datetime(2024, 6, 12, 14, 0, tzinfo=timezone.utc)

TRAIN_ROUTE = "Amsterdam Centraal - Utrecht Centraal"
BUS_ROUTE = "Line 22: Leidseplein - Muiderpoort"


def build_context(
    timestamp: datetime = WEDNESDAY_AFTERNOON,
    weather: WeatherCondition = WeatherCondition.CLEAR,
    load: PassengerLoad = PassengerLoad.NORMAL,
    is_holiday: bool = False,
    has_local_events: bool = False,
    location: str = "Utrecht",
) -> PredictionContext:
    return PredictionContext(
        timestamp=timestamp,
        day_of_week=day_of_week(timestamp),
        hour_of_day=timestamp.hour,
        month_of_year=timestamp.month,
        weather_condition=weather,
        passenger_load=load,
        is_holiday=is_holiday,
        has_local_events=has_local_events,
        location=location,
    )


def build_incident(
    timestamp: datetime = WEDNESDAY_AFTERNOON,
    transport_type: TransportType = TransportType.TRAIN,
    route: str = TRAIN_ROUTE,
    location: str = "Utrecht",
    duration: float = 600.0,
    weather: WeatherCondition = WeatherCondition.CLEAR,
    load: PassengerLoad = PassengerLoad.NORMAL,
    reason: DelayReason = DelayReason.SIGNAL_PROBLEM,
) -> HistoricalIncident:
    return HistoricalIncident(
        id=uuid.uuid4(),
        timestamp=timestamp,
        transport_type=transport_type,
        route=route,
        location=location,
        duration=duration,
        reason=reason,
        severity=SeverityLevel.for_duration(duration),
        weather_condition=weather,
        day_of_week=day_of_week(timestamp),
        hour_of_day=timestamp.hour,
        passenger_load=load,
        is_holiday=False,
        description=f"{reason.value} on {route}",
    )
