"""
Delay-risk prediction endpoints.
"""
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from .....common.schemas import DelayPredictionResponse, StationPredictionResponse
from .....common.schemas.incident import TransportCode
from ....application.prediction_service import DelayPredictionService
from ....domain.entities import TransportType
from ....infrastructure.persistence.codec import decode_code
from ..dependencies import get_service
from ..mappers import to_prediction_response, to_station_response

router = APIRouter()


@router.get("/predictions", response_model=DelayPredictionResponse)
async def predict_delay(
    transport_type: TransportCode,
    route: str = Query(..., min_length=1),
    location: str = Query(..., min_length=1),
    time: Optional[datetime] = None,
    service: DelayPredictionService = Depends(get_service),
):
    """Delay risk for one route at one location. Defaults to now."""
    prediction = await service.predict(decode_code(TransportType, transport_type), route, location, time)
    return to_prediction_response(prediction)


@router.get("/predictions/route", response_model=List[StationPredictionResponse])
async def predict_route(
    route: str = Query(..., min_length=1),
    transport_type: TransportCode = "train",
    time: Optional[datetime] = None,
    service: DelayPredictionService = Depends(get_service),
):
    """
    Per-station risk for the first and last stop of a route such as
    "Amsterdam Centraal - Utrecht Centraal".
    """
    predictions = await service.predict_route_delays(route, decode_code(TransportType, transport_type), time)
    return [to_station_response(p) for p in predictions]
