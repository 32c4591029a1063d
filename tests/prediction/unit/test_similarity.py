from datetime import timedelta

import pytest

from src.prediction.application.similarity import SimilarityMatcher
from src.prediction.domain.entities import PassengerLoad, TransportType, WeatherCondition
from tests.factories import MONDAY_MORNING, TRAIN_ROUTE, build_context, build_incident


@pytest.fixture
def matcher():
    return SimilarityMatcher()


@pytest.fixture
def context():
    return build_context(timestamp=MONDAY_MORNING, weather=WeatherCondition.RAIN, load=PassengerLoad.HIGH)


def test_identical_conditions_score_one(matcher, context):
    incident = build_incident(timestamp=MONDAY_MORNING, weather=WeatherCondition.RAIN, load=PassengerLoad.HIGH)
    assert matcher.similarity(incident, context) == 1.0


def test_component_scores(matcher, context):
    # Tuesday (adjacent day), 14:00 (6h away), storm (same group as rain), normal load
    incident = build_incident(
        timestamp=MONDAY_MORNING + timedelta(days=1, hours=6),
        weather=WeatherCondition.STORM,
        load=PassengerLoad.NORMAL,
    )
    expected = (0.5 + 0.5 + 0.6 + 0.0) / 4
    assert matcher.similarity(incident, context) == pytest.approx(expected)


def test_no_weekday_wraparound(matcher):
    saturday = build_context(timestamp=MONDAY_MORNING + timedelta(days=5))
    sunday_incident = build_incident(timestamp=MONDAY_MORNING - timedelta(days=1))
    assert saturday.day_of_week == 7
    assert sunday_incident.day_of_week == 1
    assert matcher._day_score(sunday_incident.day_of_week, saturday.day_of_week) == 0.0


def test_other_transport_type_is_rejected(matcher, context):
    incident = build_incident(timestamp=MONDAY_MORNING, transport_type=TransportType.ROAD)
    assert matcher.filter([incident], TransportType.TRAIN, TRAIN_ROUTE, "Utrecht", context) == []


def test_route_match_needs_similarity(matcher, context):
    # Saturday 20:00, snow, low load: nothing in common with a rainy Monday rush
    dissimilar = build_incident(
        timestamp=MONDAY_MORNING + timedelta(days=5, hours=12),
        weather=WeatherCondition.SNOW,
        load=PassengerLoad.LOW,
        location="Elsewhere",
    )
    similar = build_incident(timestamp=MONDAY_MORNING, weather=WeatherCondition.RAIN, load=PassengerLoad.HIGH)

    kept = matcher.filter([dissimilar, similar], TransportType.TRAIN, TRAIN_ROUTE, "Utrecht", context)
    assert kept == [similar]


def test_route_containment_counts_as_match(matcher, context):
    incident = build_incident(timestamp=MONDAY_MORNING, route="Utrecht Centraal", location="Nowhere",
                              weather=WeatherCondition.RAIN, load=PassengerLoad.HIGH)
    assert matcher.filter([incident], TransportType.TRAIN, TRAIN_ROUTE, "Amsterdam", context) == [incident]


def test_location_match_alone_is_enough(matcher, context):
    dissimilar = build_incident(
        timestamp=MONDAY_MORNING + timedelta(days=5, hours=12),
        route="Groningen - Zwolle",
        location="UTRECHT Centraal",
        weather=WeatherCondition.SNOW,
        load=PassengerLoad.LOW,
    )
    kept = matcher.filter([dissimilar], TransportType.TRAIN, "Maastricht - Eindhoven", "utrecht", context)
    assert kept == [dissimilar]


def test_rank_orders_by_similarity(matcher, context):
    close = build_incident(timestamp=MONDAY_MORNING, weather=WeatherCondition.RAIN, load=PassengerLoad.HIGH)
    further = build_incident(timestamp=MONDAY_MORNING + timedelta(hours=3), weather=WeatherCondition.RAIN)

    ranked = matcher.rank([further, close], TransportType.TRAIN, TRAIN_ROUTE, "Utrecht", context)
    assert ranked == [close, further]
