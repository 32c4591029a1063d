from fastapi import HTTPException, Request

from ...application.prediction_service import DelayPredictionService


def get_service(request: Request) -> DelayPredictionService:
    service = getattr(request.app.state, "service", None)
    if service is None:
        raise HTTPException(500, "Prediction service not initialized")
    return service
