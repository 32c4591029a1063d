from .incident import IncidentRecord
from .prediction import (
    DelayFactorSchema,
    DelayPredictionResponse,
    StationPredictionResponse,
    KnowledgeBaseStatus,
    RoutePatternSchema,
    DelayPatternsResponse,
)

__all__ = [
    "IncidentRecord",
    "DelayFactorSchema",
    "DelayPredictionResponse",
    "StationPredictionResponse",
    "KnowledgeBaseStatus",
    "RoutePatternSchema",
    "DelayPatternsResponse",
]
