from datetime import datetime, timezone

import pytest

from src.prediction.application.learning import analyze_patterns
from src.prediction.domain.entities import DelayReason, WeatherCondition
from tests.factories import build_incident

NOW = datetime(2024, 6, 12, 14, 0, tzinfo=timezone.utc)


def test_empty_history():
    patterns = analyze_patterns([], NOW)
    assert patterns.total_incidents == 0
    assert patterns.weather_patterns == {}
    assert patterns.route_patterns == {}


def test_shares_and_route_summaries():
    incidents = [
        build_incident(timestamp=datetime(2024, 6, 10, 8, 0), weather=WeatherCondition.RAIN,
                       reason=DelayReason.SIGNAL_PROBLEM, duration=600),
        build_incident(timestamp=datetime(2024, 6, 11, 8, 0), weather=WeatherCondition.RAIN,
                       reason=DelayReason.SIGNAL_PROBLEM, duration=1200),
        build_incident(timestamp=datetime(2024, 5, 11, 17, 0), weather=WeatherCondition.CLEAR,
                       reason=DelayReason.ACCIDENT, duration=300),
        build_incident(timestamp=datetime(2024, 5, 12, 9, 0), route="Groningen - Zwolle"),
    ]
    patterns = analyze_patterns(incidents, NOW)

    assert patterns.computed_at == NOW
    assert patterns.weather_patterns[WeatherCondition.RAIN] == pytest.approx(0.5)
    assert patterns.weather_patterns[WeatherCondition.SNOW] == 0.0
    assert len(patterns.time_patterns) == 24
    assert patterns.time_patterns[8] == pytest.approx(0.5)
    assert patterns.seasonal_patterns[6] == pytest.approx(0.5)
    assert sum(patterns.seasonal_patterns.values()) == pytest.approx(1.0)

    main = patterns.route_patterns["Amsterdam Centraal - Utrecht Centraal"]
    assert main.total_incidents == 3
    assert main.average_duration == pytest.approx(700.0)
    assert main.common_reasons == [DelayReason.SIGNAL_PROBLEM, DelayReason.ACCIDENT]
    assert main.peak_hours[0] == 8
    assert len(main.peak_hours) <= 3
    assert patterns.route_patterns["Groningen - Zwolle"].total_incidents == 1
