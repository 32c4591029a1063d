"""
Turns filtered historical incidents plus a PredictionContext into a
DelayPrediction.
"""
from typing import List, Optional, Sequence

from ..domain.calendar import MONDAY, is_weekend_day, elapsed_days
from ..domain.entities import (
    DelayFactor,
    DelayFactorType,
    DelayPrediction,
    HistoricalIncident,
    PassengerLoad,
    PredictionContext,
    TransportType,
    WeatherCondition,
)

NO_DATA_PROBABILITY = 0.15
STALE_DATA_PROBABILITY = 0.12
RECENT_WINDOW_DAYS = 90
MAX_BASE_PROBABILITY = 0.8
EVENT_MULTIPLIER = 1.2
MAX_CONFIDENCE = 0.95
DURATION_THRESHOLD = 0.3

WINTER_MONTHS = (12, 1, 2)
SUMMER_MONTHS = (7, 8)

CALM_WEATHER = (WeatherCondition.CLEAR, WeatherCondition.CLOUDY)
BUSY_LOADS = (PassengerLoad.HIGH, PassengerLoad.EXTREME)

# Inclusive hour bands
TRAIN_RUSH = ((7, 9), (17, 19))
BUS_RUSH = ((7, 9), (16, 18))
ROAD_RUSH = ((7, 9), (16, 19))
DAILY_RUSH = ((7, 9), (17, 19))
DAYTIME = (10, 16)


def _in_bands(hour: int, bands) -> bool:
    return any(start <= hour <= end for start, end in bands)


def _is_night(hour: int) -> bool:
    # 22:00 through 06:59, wrapping midnight
    return hour >= 22 or hour <= 6


def _mean_duration(incidents: Sequence[HistoricalIncident]) -> float:
    if not incidents:
        return 0.0
    return sum(i.duration for i in incidents) / len(incidents)


def base_probability(incidents: Sequence[HistoricalIncident], context: PredictionContext) -> float:
    if not incidents:
        return NO_DATA_PROBABILITY

    recent = [i for i in incidents if elapsed_days(context.timestamp, i.timestamp) <= RECENT_WINDOW_DAYS]
    if not recent:
        return STALE_DATA_PROBABILITY

    daily_rate = len(recent) / float(RECENT_WINDOW_DAYS)
    return min(daily_rate * 0.4, MAX_BASE_PROBABILITY)


def time_of_day_multiplier(hour: int, transport_type: TransportType) -> float:
    if transport_type == TransportType.TRAIN:
        if _in_bands(hour, TRAIN_RUSH):
            return 1.4
        if _is_night(hour):
            return 0.8
        return 1.0
    if transport_type == TransportType.BUS:
        return 1.6 if _in_bands(hour, BUS_RUSH) else 1.0
    return 1.8 if _in_bands(hour, ROAD_RUSH) else 1.0


def day_of_week_multiplier(day: int, transport_type: TransportType) -> float:
    if is_weekend_day(day):
        return 0.7 if transport_type == TransportType.ROAD else 0.8
    if day == MONDAY:
        return 1.2
    return 1.0


def seasonal_multiplier(month: int, transport_type: TransportType) -> float:
    if month in WINTER_MONTHS:
        return 1.3
    if month in SUMMER_MONTHS:
        return 1.1 if transport_type == TransportType.ROAD else 0.9
    return 1.0


def rush_hour_impact(hour: int) -> float:
    if _in_bands(hour, DAILY_RUSH):
        return 0.4
    if _in_bands(hour, (DAYTIME,)):
        return 0.1
    return 0.0


class ProbabilityModel:
    """
    Rule-based delay risk scoring.

    The base rate comes from how many similar incidents happened in the
    last 90 days; contextual multipliers (weather, load, time of day, day
    of week, season, holiday/event) scale it and the result is clamped
    to [0, 1].
    """

    def score(
        self,
        incidents: Sequence[HistoricalIncident],
        context: PredictionContext,
        transport_type: TransportType,
    ) -> DelayPrediction:
        probability = self.adjusted_probability(incidents, context, transport_type)
        factors = self.identify_factors(incidents, context)

        return DelayPrediction(
            probability=probability,
            confidence=self.confidence(len(incidents), context),
            primary_factors=factors,
            estimated_duration=self.estimate_duration(probability, incidents, context),
            recommendation=self.recommendation(probability, factors),
        )

    def adjusted_probability(
        self,
        incidents: Sequence[HistoricalIncident],
        context: PredictionContext,
        transport_type: TransportType,
    ) -> float:
        probability = base_probability(incidents, context)
        probability *= context.weather_condition.delay_risk_multiplier
        probability *= context.passenger_load.delay_risk_multiplier
        probability *= time_of_day_multiplier(context.hour_of_day, transport_type)
        probability *= day_of_week_multiplier(context.day_of_week, transport_type)
        probability *= seasonal_multiplier(context.month_of_year, transport_type)
        if context.is_holiday or context.has_local_events:
            probability *= EVENT_MULTIPLIER
        return max(0.0, min(probability, 1.0))

    def identify_factors(
        self, incidents: Sequence[HistoricalIncident], context: PredictionContext
    ) -> List[DelayFactor]:
        factors = []

        weather = context.weather_condition
        if weather not in CALM_WEATHER:
            factors.append(DelayFactor(
                type=DelayFactorType.WEATHER,
                impact=(weather.delay_risk_multiplier - 1.0) * 0.5,
                description=f"Current weather conditions: {weather.value}",
            ))

        rush_impact = rush_hour_impact(context.hour_of_day)
        if rush_impact > 0.1:
            factors.append(DelayFactor(
                type=DelayFactorType.TIME_OF_DAY,
                impact=rush_impact,
                description="Peak travel time increases delay risk",
            ))

        count = len(incidents)
        historical_impact = min(count / 50.0, 0.8)
        if historical_impact > 0.2:
            factors.append(DelayFactor(
                type=DelayFactorType.HISTORICAL_TRENDS,
                impact=historical_impact,
                description=f"Route has experienced {count} incidents recently",
            ))

        load = context.passenger_load
        if load in BUSY_LOADS:
            factors.append(DelayFactor(
                type=DelayFactorType.PASSENGER_VOLUME,
                impact=(load.delay_risk_multiplier - 1.0) * 0.6,
                description="High passenger volume expected",
            ))

        # sorted() is stable, ties keep insertion order
        return sorted(factors, key=lambda f: f.impact, reverse=True)

    @staticmethod
    def confidence(data_count: int, context: PredictionContext) -> float:
        confidence = 0.5 + min(data_count / 100.0, 0.3)
        if context.weather_condition != WeatherCondition.UNKNOWN:
            confidence += 0.1
        confidence += 0.1
        return min(confidence, MAX_CONFIDENCE)

    @staticmethod
    def estimate_duration(
        probability: float, incidents: Sequence[HistoricalIncident], context: PredictionContext
    ) -> Optional[float]:
        """Expected delay in seconds, or None when a delay is unlikely."""
        if probability <= DURATION_THRESHOLD or not incidents:
            return None

        relevant = [
            i for i in incidents
            if i.weather_condition == context.weather_condition or i.hour_of_day == context.hour_of_day
        ]
        average = _mean_duration(relevant)
        if not average:
            # Zero-length matches carry no duration signal
            average = _mean_duration(incidents)
        return average * probability

    @staticmethod
    def recommendation(probability: float, factors: Sequence[DelayFactor]) -> str:
        if probability < 0.2:
            return "Low delay risk. Normal travel conditions expected."
        if probability < 0.4:
            return "Moderate delay risk. Consider checking live updates before traveling."
        if probability < 0.7:
            primary = factors[0].type.value if factors else "various factors"
            return f"High delay risk due to {primary.lower()}. Consider alternative routes or times."
        return "Very high delay risk. Strong recommendation to delay travel or use alternative transport."
