"""
Domain module initialization.
"""
from .entities import (
    TransportType,
    DelayReason,
    SeverityLevel,
    WeatherCondition,
    PassengerLoad,
    DelayFactorType,
    HistoricalIncident,
    PredictionContext,
    DelayFactor,
    DelayPrediction,
    RouteDelayPrediction,
    LiveDelayRecord,
    RoutePattern,
    DelayPatterns
)
from .protocols import WeatherProvider, EventProvider, DelayFeed
from .repositories import BlobStore
