"""
Stable code table between domain enums and the persisted wire format.
Display labels (enum values) may change; codes must not.
"""
import json
from typing import Dict, List, Type, TypeVar

from pydantic import TypeAdapter

from ....common.schemas.incident import IncidentRecord
from ...domain.entities import (
    DelayReason,
    HistoricalIncident,
    PassengerLoad,
    SeverityLevel,
    TransportType,
    WeatherCondition,
)

E = TypeVar("E")

TRANSPORT_CODES: Dict[TransportType, str] = {
    TransportType.ROAD: "road",
    TransportType.TRAIN: "train",
    TransportType.BUS: "bus",
}

REASON_CODES: Dict[DelayReason, str] = {
    DelayReason.TECHNICAL_FAILURE: "technical_failure",
    DelayReason.WEATHER_RELATED: "weather_related",
    DelayReason.INFRASTRUCTURE_ISSUE: "infrastructure_issue",
    DelayReason.ACCIDENT: "accident",
    DelayReason.STAFF_SHORTAGE: "staff_shortage",
    DelayReason.PLANNED_CONSTRUCTION: "planned_construction",
    DelayReason.PASSENGER_VOLUME: "passenger_volume",
    DelayReason.EXTERNAL_FACTORS: "external_factors",
    DelayReason.SIGNAL_PROBLEM: "signal_problem",
    DelayReason.TRACK_MAINTENANCE: "track_maintenance",
    DelayReason.ROAD_CONSTRUCTION: "road_construction",
    DelayReason.TRAFFIC_ACCIDENT: "traffic_accident",
}

SEVERITY_CODES: Dict[SeverityLevel, str] = {
    SeverityLevel.MINOR: "minor",
    SeverityLevel.MODERATE: "moderate",
    SeverityLevel.MAJOR: "major",
    SeverityLevel.SEVERE: "severe",
}

WEATHER_CODES: Dict[WeatherCondition, str] = {
    WeatherCondition.CLEAR: "clear",
    WeatherCondition.CLOUDY: "cloudy",
    WeatherCondition.RAIN: "rain",
    WeatherCondition.HEAVY_RAIN: "heavy_rain",
    WeatherCondition.SNOW: "snow",
    WeatherCondition.ICE: "ice",
    WeatherCondition.FOG: "fog",
    WeatherCondition.STORM: "storm",
    WeatherCondition.UNKNOWN: "unknown",
}

LOAD_CODES: Dict[PassengerLoad, str] = {
    PassengerLoad.LOW: "low",
    PassengerLoad.NORMAL: "normal",
    PassengerLoad.HIGH: "high",
    PassengerLoad.EXTREME: "extreme",
}

_RECORDS = TypeAdapter(List[IncidentRecord])


def _decode(table: Dict[E, str], code: str) -> E:
    for member, member_code in table.items():
        if member_code == code:
            return member
    raise ValueError(f"Unknown code: {code}")


def encode_code(member) -> str:
    """Code for any engine enum member (used by exports and the API)."""
    for table in (TRANSPORT_CODES, REASON_CODES, SEVERITY_CODES, WEATHER_CODES, LOAD_CODES):
        if member in table:
            return table[member]
    raise ValueError(f"No code registered for {member!r}")


def decode_code(enum_type: Type[E], code: str) -> E:
    tables = {
        TransportType: TRANSPORT_CODES,
        DelayReason: REASON_CODES,
        SeverityLevel: SEVERITY_CODES,
        WeatherCondition: WEATHER_CODES,
        PassengerLoad: LOAD_CODES,
    }
    return _decode(tables[enum_type], code.strip().lower())


def to_record(incident: HistoricalIncident) -> IncidentRecord:
    return IncidentRecord(
        id=incident.id,
        timestamp=incident.timestamp,
        transport_type=TRANSPORT_CODES[incident.transport_type],
        route=incident.route,
        location=incident.location,
        duration=incident.duration,
        reason=REASON_CODES[incident.reason],
        severity=SEVERITY_CODES[incident.severity],
        weather_condition=WEATHER_CODES[incident.weather_condition],
        day_of_week=incident.day_of_week,
        hour_of_day=incident.hour_of_day,
        passenger_load=LOAD_CODES[incident.passenger_load],
        is_holiday=incident.is_holiday,
        description=incident.description,
    )


def from_record(record: IncidentRecord) -> HistoricalIncident:
    return HistoricalIncident(
        id=record.id,
        timestamp=record.timestamp,
        transport_type=_decode(TRANSPORT_CODES, record.transport_type),
        route=record.route,
        location=record.location,
        duration=record.duration,
        reason=_decode(REASON_CODES, record.reason),
        severity=_decode(SEVERITY_CODES, record.severity),
        weather_condition=_decode(WEATHER_CODES, record.weather_condition),
        day_of_week=record.day_of_week,
        hour_of_day=record.hour_of_day,
        passenger_load=_decode(LOAD_CODES, record.passenger_load),
        is_holiday=record.is_holiday,
        description=record.description,
    )


def dumps_incidents(incidents: List[HistoricalIncident]) -> str:
    records = [to_record(i) for i in incidents]
    return json.dumps(_RECORDS.dump_python(records, mode="json"), separators=(",", ":"))


def loads_incidents(payload: str) -> List[HistoricalIncident]:
    """Raises pydantic.ValidationError (a ValueError) on malformed JSON or schema mismatch."""
    return [from_record(r) for r in _RECORDS.validate_json(payload)]
