"""
Application layer: context gathering, matching, scoring and learning.
"""
from .context_gatherer import ContextGatherer, estimate_passenger_load
from .similarity import SimilarityMatcher
from .probability_model import ProbabilityModel
from .knowledge_base import KnowledgeBase
from .learning import LearningScheduler, analyze_patterns
from .prediction_service import DelayPredictionService, extract_stations

__all__ = [
    "ContextGatherer",
    "estimate_passenger_load",
    "SimilarityMatcher",
    "ProbabilityModel",
    "KnowledgeBase",
    "LearningScheduler",
    "analyze_patterns",
    "DelayPredictionService",
    "extract_stations",
]
