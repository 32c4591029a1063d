"""
Knowledge base: the incident store plus its derived-pattern cache.
"""
import logging
from typing import List, Optional

from ...common.concurrency import ReadWriteLock
from ...common.metrics import MetricsCollector
from ..domain.entities import HistoricalIncident, PredictionContext, TransportType
from ..infrastructure.cache import CacheKey, PatternCache
from ..infrastructure.persistence import IncidentStore
from .similarity import SimilarityMatcher

logger = logging.getLogger(__name__)


class KnowledgeBase:
    """
    Owns the (store, cache) pair and keeps them consistent.

    Queries share a read lock; add_incident and reset take the write
    lock, so a cached entry is never served after an overlapping incident
    was appended.
    """

    def __init__(
        self,
        store: IncidentStore,
        cache: Optional[PatternCache] = None,
        matcher: Optional[SimilarityMatcher] = None,
        lock: Optional[ReadWriteLock] = None,
        metrics_collector: Optional[MetricsCollector] = None,
    ):
        self.store = store
        self.cache = cache if cache is not None else PatternCache(metrics_collector)
        self.matcher = matcher or SimilarityMatcher()
        self.lock = lock or ReadWriteLock()
        self.metrics_collector = metrics_collector

    def get_historical_data(
        self,
        transport_type: TransportType,
        route: str,
        location: str,
        context: PredictionContext,
    ) -> List[HistoricalIncident]:
        key = CacheKey(
            transport_type=transport_type,
            route=route,
            location=location,
            day_of_week=context.day_of_week,
            hour_of_day=context.hour_of_day,
        )
        with self.lock.read():
            return self.cache.get_or_compute(
                key,
                lambda: self.matcher.rank(
                    self.store.query(transport_type, route, location),
                    transport_type, route, location, context,
                ),
            )

    def add_incident(self, incident: HistoricalIncident):
        with self.lock.write():
            self.store.add(incident)
            dropped = self.cache.invalidate_for(incident)
        if self.metrics_collector:
            self.metrics_collector.record_ingested()
        logger.debug(f"Added incident {incident.id} on '{incident.route}', {dropped} cached patterns dropped")

    def reset(self):
        with self.lock.write():
            self.store.reset()
            self.cache.clear()
        logger.info("Knowledge base reset")

    def snapshot(self) -> List[HistoricalIncident]:
        with self.lock.read():
            return self.store.all()

    @property
    def total_incidents(self) -> int:
        with self.lock.read():
            return len(self.store)

    @property
    def cached_patterns(self) -> int:
        return len(self.cache)
