"""
Scores historical incidents against a PredictionContext.
"""
from typing import Iterable, List

from ..domain.entities import HistoricalIncident, PredictionContext, TransportType, WeatherCondition
from ..domain.matching import location_matches, route_matches

SIMILARITY_THRESHOLD = 0.3
SIMILAR_WEATHER_SCORE = 0.6

WEATHER_GROUPS = (
    frozenset({WeatherCondition.RAIN, WeatherCondition.HEAVY_RAIN, WeatherCondition.STORM}),
    frozenset({WeatherCondition.CLEAR, WeatherCondition.CLOUDY}),
    frozenset({WeatherCondition.SNOW, WeatherCondition.ICE}),
)


def weather_similar(a: WeatherCondition, b: WeatherCondition) -> bool:
    return any(a in group and b in group for group in WEATHER_GROUPS)


class SimilarityMatcher:
    """
    Decides which historical incidents are relevant to a query.

    Route matches must also be contextually similar (score above the
    threshold). Incidents on other routes are kept on a plain location
    match, without scoring.
    """

    def __init__(self, threshold: float = SIMILARITY_THRESHOLD):
        self.threshold = threshold

    def filter(
        self,
        incidents: Iterable[HistoricalIncident],
        transport_type: TransportType,
        route: str,
        location: str,
        context: PredictionContext,
    ) -> List[HistoricalIncident]:
        return [i for i in incidents if self.matches(i, transport_type, route, location, context)]

    def rank(
        self,
        incidents: Iterable[HistoricalIncident],
        transport_type: TransportType,
        route: str,
        location: str,
        context: PredictionContext,
    ) -> List[HistoricalIncident]:
        """Filtered incidents, most similar first."""
        kept = self.filter(incidents, transport_type, route, location, context)
        return sorted(kept, key=lambda i: self.similarity(i, context), reverse=True)

    def matches(
        self,
        incident: HistoricalIncident,
        transport_type: TransportType,
        route: str,
        location: str,
        context: PredictionContext,
    ) -> bool:
        if incident.transport_type != transport_type:
            return False
        if not route_matches(incident.route, route):
            return location_matches(incident.location, location)
        return self.similarity(incident, context) > self.threshold

    def similarity(self, incident: HistoricalIncident, context: PredictionContext) -> float:
        """Unweighted mean of time, day, weather and load similarity, in [0, 1]."""
        scores = [
            self._time_score(incident.hour_of_day, context.hour_of_day),
            self._day_score(incident.day_of_week, context.day_of_week),
            self._weather_score(incident.weather_condition, context.weather_condition),
            1.0 if incident.passenger_load == context.passenger_load else 0.0,
        ]
        return sum(scores) / len(scores)

    @staticmethod
    def _time_score(hour: int, other: int) -> float:
        return max(0.0, 1.0 - abs(hour - other) / 12.0)

    @staticmethod
    def _day_score(day: int, other: int) -> float:
        if day == other:
            return 1.0
        if abs(day - other) == 1:
            return 0.5
        return 0.0

    @staticmethod
    def _weather_score(weather: WeatherCondition, other: WeatherCondition) -> float:
        if weather == other:
            return 1.0
        if weather_similar(weather, other):
            return SIMILAR_WEATHER_SCORE
        return 0.0
