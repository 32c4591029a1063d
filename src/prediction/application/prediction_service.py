"""
Entry point for delay-risk queries.
"""
import logging
from datetime import datetime, timezone
from time import perf_counter
from typing import Callable, Dict, List, Optional

from ...common.metrics import MetricsCollector
from ..domain.entities import DelayPatterns, DelayPrediction, RouteDelayPrediction, TransportType
from ..infrastructure.export import export_incidents_csv
from .context_gatherer import ContextGatherer
from .knowledge_base import KnowledgeBase
from .learning import LearningScheduler, analyze_patterns
from .probability_model import ProbabilityModel

logger = logging.getLogger(__name__)

ROUTE_SEPARATOR = " - "


def extract_stations(route: str, separator: str = ROUTE_SEPARATOR) -> List[str]:
    """First and last station of a multi-stop route, else the route itself."""
    parts = route.split(separator)
    if len(parts) >= 2:
        return [parts[0], parts[-1]]
    return [route]


class DelayPredictionService:
    """
    Orchestrates a prediction: gather context, fetch similar history,
    score. Lookup problems degrade inside the gatherer, so predict()
    always returns a result.
    """

    def __init__(
        self,
        knowledge_base: KnowledgeBase,
        context_gatherer: ContextGatherer,
        model: Optional[ProbabilityModel] = None,
        scheduler: Optional[LearningScheduler] = None,
        metrics_collector: Optional[MetricsCollector] = None,
        clock: Optional[Callable[[], datetime]] = None,
        route_separator: str = ROUTE_SEPARATOR,
    ):
        self.knowledge_base = knowledge_base
        self.context_gatherer = context_gatherer
        self.model = model or ProbabilityModel()
        self.scheduler = scheduler
        self.metrics_collector = metrics_collector or MetricsCollector()
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.route_separator = route_separator
        self.last_prediction_at: Optional[datetime] = None

    async def predict(
        self,
        transport_type: TransportType,
        route: str,
        location: str,
        time: Optional[datetime] = None,
    ) -> DelayPrediction:
        start = perf_counter()
        context = await self.context_gatherer.gather(location, time or self.clock())
        incidents = self.knowledge_base.get_historical_data(transport_type, route, location, context)
        prediction = self.model.score(incidents, context, transport_type)

        self.last_prediction_at = self.clock()
        elapsed_ms = (perf_counter() - start) * 1000
        self.metrics_collector.record_prediction(elapsed_ms)
        logger.debug(
            f"Predicted {prediction.probability:.2f} for {transport_type.value} '{route}' at '{location}' "
            f"({len(incidents)} similar incidents, {elapsed_ms:.1f}ms)"
        )
        return prediction

    async def predict_route_delays(
        self,
        route: str,
        transport_type: TransportType = TransportType.TRAIN,
        time: Optional[datetime] = None,
    ) -> List[RouteDelayPrediction]:
        predictions = []
        for station in extract_stations(route, self.route_separator):
            prediction = await self.predict(transport_type, route, station, time)
            predictions.append(RouteDelayPrediction(station=station, prediction=prediction))
        return predictions

    def patterns(self) -> DelayPatterns:
        """Latest learned patterns, computed on demand before the first tick."""
        if self.scheduler and self.scheduler.latest_patterns is not None:
            return self.scheduler.latest_patterns
        return analyze_patterns(self.knowledge_base.snapshot(), self.clock())

    def status(self) -> Dict:
        return {
            'total_incidents': self.knowledge_base.total_incidents,
            'is_learning': self.scheduler.is_learning if self.scheduler else False,
            'last_learning_update': self.scheduler.last_update if self.scheduler else None,
            'last_prediction_update': self.last_prediction_at,
            'cached_patterns': self.knowledge_base.cached_patterns,
            'metrics': self.metrics_collector.get_metrics().to_dict(),
        }

    def reset(self):
        self.knowledge_base.reset()

    def export_incidents(self, output_file: str) -> int:
        return export_incidents_csv(self.knowledge_base.snapshot(), output_file)
