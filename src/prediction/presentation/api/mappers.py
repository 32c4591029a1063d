"""
Domain -> response schema conversion.
"""
from ....common.schemas import (
    DelayFactorSchema,
    DelayPatternsResponse,
    DelayPredictionResponse,
    RoutePatternSchema,
    StationPredictionResponse,
)
from ...domain.entities import DelayPatterns, DelayPrediction, RouteDelayPrediction
from ...infrastructure.persistence.codec import encode_code

SURFACED_FACTORS = 3


def to_prediction_response(prediction: DelayPrediction) -> DelayPredictionResponse:
    return DelayPredictionResponse(
        probability=prediction.probability,
        confidence=prediction.confidence,
        primary_factors=[
            DelayFactorSchema(type=f.type.value, impact=f.impact, description=f.description)
            for f in prediction.top_factors(SURFACED_FACTORS)
        ],
        estimated_duration_seconds=prediction.estimated_duration,
        recommendation=prediction.recommendation,
    )


def to_station_response(route_prediction: RouteDelayPrediction) -> StationPredictionResponse:
    return StationPredictionResponse(
        station=route_prediction.station,
        prediction=to_prediction_response(route_prediction.prediction),
    )


def to_patterns_response(patterns: DelayPatterns) -> DelayPatternsResponse:
    return DelayPatternsResponse(
        computed_at=patterns.computed_at,
        total_incidents=patterns.total_incidents,
        weather_patterns={encode_code(w): share for w, share in patterns.weather_patterns.items()},
        time_patterns=dict(patterns.time_patterns),
        route_patterns=[
            RoutePatternSchema(
                route=p.route,
                total_incidents=p.total_incidents,
                average_duration_seconds=p.average_duration,
                common_reasons=[encode_code(r) for r in p.common_reasons],
                peak_hours=p.peak_hours,
            )
            for p in sorted(patterns.route_patterns.values(), key=lambda p: p.total_incidents, reverse=True)
        ],
        seasonal_patterns=dict(patterns.seasonal_patterns),
    )
