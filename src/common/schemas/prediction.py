from datetime import datetime
from typing import Dict, List, Optional
from pydantic import BaseModel, Field


class DelayFactorSchema(BaseModel):
    type: str = Field(..., description="Factor category, e.g. 'Weather'")
    impact: float = Field(..., ge=0.0, le=1.0)
    description: str


class DelayPredictionResponse(BaseModel):
    """
    Prediction as returned to the UI layer. At most three factors are surfaced.
    """
    probability: float = Field(..., ge=0.0, le=1.0)
    confidence: float = Field(..., ge=0.0, le=0.95)
    primary_factors: List[DelayFactorSchema] = Field(..., max_length=3)
    estimated_duration_seconds: Optional[float] = Field(None, ge=0.0)
    recommendation: str


class StationPredictionResponse(BaseModel):
    station: str
    prediction: DelayPredictionResponse


class KnowledgeBaseStatus(BaseModel):
    total_incidents: int = Field(..., ge=0)
    is_learning: bool
    last_learning_update: Optional[datetime] = None
    last_prediction_update: Optional[datetime] = None
    cached_patterns: int = Field(..., ge=0)
    metrics: Dict[str, float] = Field(default_factory=dict)


class RoutePatternSchema(BaseModel):
    route: str
    total_incidents: int
    average_duration_seconds: float
    common_reasons: List[str]
    peak_hours: List[int]


class DelayPatternsResponse(BaseModel):
    computed_at: datetime
    total_incidents: int
    weather_patterns: Dict[str, float]
    time_patterns: Dict[int, float]
    route_patterns: List[RoutePatternSchema]
    seasonal_patterns: Dict[int, float]
