"""
Knowledge base diagnostics and maintenance.
"""
from fastapi import APIRouter, Depends

from .....common.schemas import DelayPatternsResponse, KnowledgeBaseStatus
from ....application.prediction_service import DelayPredictionService
from ..dependencies import get_service
from ..mappers import to_patterns_response

router = APIRouter(prefix="/knowledge-base")


@router.get("/status", response_model=KnowledgeBaseStatus)
async def get_status(service: DelayPredictionService = Depends(get_service)):
    return KnowledgeBaseStatus(**service.status())


@router.get("/patterns", response_model=DelayPatternsResponse)
async def get_patterns(service: DelayPredictionService = Depends(get_service)):
    return to_patterns_response(service.patterns())


@router.post("/reset")
async def reset_knowledge_base(service: DelayPredictionService = Depends(get_service)):
    """Drops all incidents and cached patterns."""
    service.reset()
    return {"status": "reset", "total_incidents": service.knowledge_base.total_incidents}
