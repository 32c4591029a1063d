"""
Aggregate delay statistics over the knowledge base.
Diagnostics only: nothing here feeds back into ProbabilityModel.
"""
from collections import Counter, defaultdict
from datetime import datetime
from typing import Dict, List, Sequence

from ...domain.entities import DelayPatterns, HistoricalIncident, RoutePattern, WeatherCondition

PEAK_HOURS_LIMIT = 3


def _share(counts: Counter, keys, total: int) -> Dict:
    return {k: counts.get(k, 0) / total for k in keys}


def analyze_route(route: str, incidents: Sequence[HistoricalIncident]) -> RoutePattern:
    reasons = Counter(i.reason for i in incidents)
    hours = Counter(i.hour_of_day for i in incidents)
    return RoutePattern(
        route=route,
        total_incidents=len(incidents),
        average_duration=sum(i.duration for i in incidents) / len(incidents),
        common_reasons=[reason for reason, _ in reasons.most_common()],
        peak_hours=[hour for hour, _ in hours.most_common(PEAK_HOURS_LIMIT)],
    )


def analyze_patterns(incidents: Sequence[HistoricalIncident], now: datetime) -> DelayPatterns:
    """
    Share of incidents per weather condition, hour and month, plus
    per-route summaries. Shares are fractions of the whole history.
    """
    patterns = DelayPatterns(computed_at=now, total_incidents=len(incidents))
    if not incidents:
        return patterns

    total = len(incidents)
    patterns.weather_patterns = _share(Counter(i.weather_condition for i in incidents), list(WeatherCondition), total)
    patterns.time_patterns = _share(Counter(i.hour_of_day for i in incidents), range(24), total)
    patterns.seasonal_patterns = _share(Counter(i.timestamp.month for i in incidents), range(1, 13), total)

    by_route: Dict[str, List[HistoricalIncident]] = defaultdict(list)
    for incident in incidents:
        by_route[incident.route].append(incident)
    patterns.route_patterns = {route: analyze_route(route, group) for route, group in by_route.items()}

    return patterns
