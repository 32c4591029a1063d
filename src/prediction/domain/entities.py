"""
Domain entities for the Delay Prediction module.
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from .calendar import day_of_week, is_weekend


class TransportType(Enum):
    ROAD = "Road"
    TRAIN = "Train"
    BUS = "Bus"


class DelayReason(Enum):
    TECHNICAL_FAILURE = "Technical Failure"
    WEATHER_RELATED = "Weather Related"
    INFRASTRUCTURE_ISSUE = "Infrastructure Issue"
    ACCIDENT = "Accident"
    STAFF_SHORTAGE = "Staff Shortage"
    PLANNED_CONSTRUCTION = "Planned Construction"
    PASSENGER_VOLUME = "Passenger Volume"
    EXTERNAL_FACTORS = "External Factors"
    SIGNAL_PROBLEM = "Signal Problem"
    TRACK_MAINTENANCE = "Track Maintenance"
    ROAD_CONSTRUCTION = "Road Construction"
    TRAFFIC_ACCIDENT = "Traffic Accident"


class SeverityLevel(Enum):
    MINOR = "Minor"        # < 5 minutes
    MODERATE = "Moderate"  # 5-15 minutes
    MAJOR = "Major"        # 15-30 minutes
    SEVERE = "Severe"      # > 30 minutes

    @property
    def max_duration(self) -> float:
        """Nominal upper bound of the band, in seconds. Informational only."""
        return _SEVERITY_MAX_DURATION[self]

    @classmethod
    def for_duration(cls, duration: float) -> "SeverityLevel":
        if duration < 300:
            return cls.MINOR
        if duration < 900:
            return cls.MODERATE
        if duration < 1800:
            return cls.MAJOR
        return cls.SEVERE


_SEVERITY_MAX_DURATION = {
    SeverityLevel.MINOR: 300.0,
    SeverityLevel.MODERATE: 900.0,
    SeverityLevel.MAJOR: 1800.0,
    SeverityLevel.SEVERE: 3600.0,
}


class WeatherCondition(Enum):
    CLEAR = "Clear"
    CLOUDY = "Cloudy"
    RAIN = "Rain"
    HEAVY_RAIN = "Heavy Rain"
    SNOW = "Snow"
    ICE = "Ice"
    FOG = "Fog"
    STORM = "Storm"
    UNKNOWN = "Unknown"

    @property
    def delay_risk_multiplier(self) -> float:
        return _WEATHER_MULTIPLIERS[self]


_WEATHER_MULTIPLIERS = {
    WeatherCondition.CLEAR: 1.0,
    WeatherCondition.CLOUDY: 1.0,
    WeatherCondition.RAIN: 1.3,
    WeatherCondition.HEAVY_RAIN: 1.6,
    WeatherCondition.SNOW: 2.0,
    WeatherCondition.ICE: 2.5,
    WeatherCondition.FOG: 1.4,
    WeatherCondition.STORM: 2.2,
    WeatherCondition.UNKNOWN: 1.1,
}


class PassengerLoad(Enum):
    LOW = "Low"
    NORMAL = "Normal"
    HIGH = "High"
    EXTREME = "Extreme"

    @property
    def delay_risk_multiplier(self) -> float:
        return _LOAD_MULTIPLIERS[self]


_LOAD_MULTIPLIERS = {
    PassengerLoad.LOW: 0.8,
    PassengerLoad.NORMAL: 1.0,
    PassengerLoad.HIGH: 1.3,
    PassengerLoad.EXTREME: 1.7,
}


class DelayFactorType(Enum):
    WEATHER = "Weather"
    TIME_OF_DAY = "Time of Day"
    DAY_OF_WEEK = "Day of Week"
    SEASONAL_PATTERNS = "Seasonal Patterns"
    INFRASTRUCTURE = "Infrastructure"
    PASSENGER_VOLUME = "Passenger Volume"
    PLANNED_MAINTENANCE = "Planned Maintenance"
    HISTORICAL_TRENDS = "Historical Trends"
    EXTERNAL_EVENTS = "External Events"


@dataclass(frozen=True)
class HistoricalIncident:
    """
    A recorded delay event with its contextual metadata.
    Immutable once created; day_of_week (1=Sunday..7=Saturday) and
    hour_of_day are stored redundantly for fast filtering.
    """
    id: uuid.UUID
    timestamp: datetime
    transport_type: TransportType
    route: str
    location: str
    duration: float  # seconds
    reason: DelayReason
    severity: SeverityLevel
    weather_condition: WeatherCondition
    day_of_week: int
    hour_of_day: int
    passenger_load: PassengerLoad
    is_holiday: bool
    description: str

    def __post_init__(self):
        if self.duration < 0:
            raise ValueError(f"duration must be >= 0, got {self.duration}")
        if not 1 <= self.day_of_week <= 7:
            raise ValueError(f"day_of_week must be within [1, 7], got {self.day_of_week}")
        if not 0 <= self.hour_of_day <= 23:
            raise ValueError(f"hour_of_day must be within [0, 23], got {self.hour_of_day}")

    @classmethod
    def create(
        cls,
        timestamp: datetime,
        transport_type: TransportType,
        route: str,
        location: str,
        duration: float,
        reason: DelayReason,
        severity: SeverityLevel,
        weather_condition: WeatherCondition = WeatherCondition.UNKNOWN,
        passenger_load: PassengerLoad = PassengerLoad.NORMAL,
        is_holiday: Optional[bool] = None,
        description: Optional[str] = None,
    ) -> "HistoricalIncident":
        """Builds an incident, deriving the calendar fields from the timestamp."""
        return cls(
            id=uuid.uuid4(),
            timestamp=timestamp,
            transport_type=transport_type,
            route=route,
            location=location,
            duration=duration,
            reason=reason,
            severity=severity,
            weather_condition=weather_condition,
            day_of_week=day_of_week(timestamp),
            hour_of_day=timestamp.hour,
            passenger_load=passenger_load,
            is_holiday=is_weekend(timestamp) if is_holiday is None else is_holiday,
            description=description if description is not None else f"{reason.value} on {route}",
        )


@dataclass(frozen=True)
class PredictionContext:
    """
    Situational snapshot used to score a live query. Built fresh per query.
    """
    timestamp: datetime
    day_of_week: int
    hour_of_day: int
    month_of_year: int
    weather_condition: WeatherCondition
    passenger_load: PassengerLoad
    is_holiday: bool
    has_local_events: bool
    location: str


@dataclass(frozen=True)
class DelayFactor:
    type: DelayFactorType
    impact: float  # 0.0 to 1.0
    description: str


@dataclass
class DelayPrediction:
    """
    Result of scoring a query.
    """
    probability: float  # 0.0 to 1.0
    confidence: float  # 0.0 to 0.95
    primary_factors: List[DelayFactor]
    estimated_duration: Optional[float]  # seconds
    recommendation: str

    def top_factors(self, limit: int = 3) -> List[DelayFactor]:
        return self.primary_factors[:limit]


@dataclass
class RouteDelayPrediction:
    station: str
    prediction: DelayPrediction


@dataclass(frozen=True)
class LiveDelayRecord:
    """
    A delay signal as delivered by the live transit feed.
    """
    transport_type: TransportType
    route: str
    location: str
    duration: float  # seconds
    reason: DelayReason
    severity: SeverityLevel


@dataclass
class RoutePattern:
    route: str
    total_incidents: int
    average_duration: float
    common_reasons: List[DelayReason]
    peak_hours: List[int]


@dataclass
class DelayPatterns:
    """
    Aggregate statistics over the knowledge base. Diagnostics only.
    """
    computed_at: datetime
    total_incidents: int = 0
    weather_patterns: Dict[WeatherCondition, float] = field(default_factory=dict)
    time_patterns: Dict[int, float] = field(default_factory=dict)
    route_patterns: Dict[str, RoutePattern] = field(default_factory=dict)
    seasonal_patterns: Dict[int, float] = field(default_factory=dict)
