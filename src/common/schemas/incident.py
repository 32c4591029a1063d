from datetime import datetime
from typing import Literal
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field

TransportCode = Literal["road", "train", "bus"]
ReasonCode = Literal[
    "technical_failure", "weather_related", "infrastructure_issue", "accident",
    "staff_shortage", "planned_construction", "passenger_volume", "external_factors",
    "signal_problem", "track_maintenance", "road_construction", "traffic_accident",
]
SeverityCode = Literal["minor", "moderate", "major", "severe"]
WeatherCode = Literal["clear", "cloudy", "rain", "heavy_rain", "snow", "ice", "fog", "storm", "unknown"]
LoadCode = Literal["low", "normal", "high", "extreme"]


class IncidentRecord(BaseModel):
    """
    Persisted form of a historical incident.
    Enumerations are stored as stable lowercase codes, never as display labels.
    """
    model_config = ConfigDict(frozen=True)

    id: UUID = Field(..., description="Unique identifier of the incident")
    timestamp: datetime = Field(..., description="When the incident occurred")
    transport_type: TransportCode
    route: str
    location: str
    duration: float = Field(..., ge=0, description="Delay duration in seconds")
    reason: ReasonCode
    severity: SeverityCode
    weather_condition: WeatherCode
    day_of_week: int = Field(..., ge=1, le=7, description="1=Sunday .. 7=Saturday")
    hour_of_day: int = Field(..., ge=0, le=23)
    passenger_load: LoadCode
    is_holiday: bool
    description: str = ""
