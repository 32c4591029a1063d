import json

import pytest
from pydantic import ValidationError

from src.prediction.domain.entities import DelayReason, TransportType, WeatherCondition
from src.prediction.infrastructure.persistence.codec import (
    decode_code, dumps_incidents, encode_code, loads_incidents
)
from tests.factories import build_incident


def test_enums_are_written_as_stable_codes():
    incident = build_incident(weather=WeatherCondition.HEAVY_RAIN, reason=DelayReason.TECHNICAL_FAILURE)
    record = json.loads(dumps_incidents([incident]))[0]

    assert record["transport_type"] == "train"
    assert record["weather_condition"] == "heavy_rain"
    assert record["reason"] == "technical_failure"
    assert record["passenger_load"] == "normal"


def test_loads_restores_equal_incidents():
    incidents = [build_incident(), build_incident(transport_type=TransportType.BUS, route="Line 25")]
    assert loads_incidents(dumps_incidents(incidents)) == incidents


def test_decode_is_case_insensitive():
    assert decode_code(TransportType, " Train ") == TransportType.TRAIN
    assert encode_code(WeatherCondition.ICE) == "ice"


def test_unknown_code_raises():
    with pytest.raises(ValueError):
        decode_code(WeatherCondition, "hail")


@pytest.mark.parametrize("payload", [
    "not json",
    '{"id": 1}',
    '[{"id": "00000000-0000-0000-0000-000000000000"}]',
])
def test_malformed_payload_raises_validation_error(payload):
    with pytest.raises(ValidationError):
        loads_incidents(payload)


def test_display_label_is_not_a_valid_code():
    record = json.loads(dumps_incidents([build_incident()]))
    record[0]["weather_condition"] = "Heavy Rain"
    with pytest.raises(ValidationError):
        loads_incidents(json.dumps(record))
