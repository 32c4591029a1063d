"""
Derived-data cache: query key -> filtered incident list.
"""
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from ....common.metrics import MetricsCollector
from ...domain.entities import HistoricalIncident, TransportType
from ...domain.matching import location_matches, route_matches

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheKey:
    transport_type: TransportType
    route: str
    location: str
    day_of_week: int
    hour_of_day: int

    def possibly_affected_by(self, incident: HistoricalIncident) -> bool:
        """
        True when the incident could change this key's result: same
        transport type, and either the same day and hour slot or an
        overlapping route or location. Route and location overlap covers
        incidents that land in the filtered set through hour proximity
        or an adjacent day.
        """
        if incident.transport_type != self.transport_type:
            return False
        if incident.day_of_week == self.day_of_week and incident.hour_of_day == self.hour_of_day:
            return True
        return route_matches(incident.route, self.route) or location_matches(incident.location, self.location)


class PatternCache:
    """
    Maps CacheKey -> filtered incidents. Entries live until a write
    invalidates them. Callers hold the knowledge-base lock; the internal
    lock only protects the dict against concurrent readers filling it.
    """

    def __init__(self, metrics_collector: Optional[MetricsCollector] = None):
        self._entries: Dict[CacheKey, List[HistoricalIncident]] = {}
        self._lock = threading.Lock()
        self.metrics_collector = metrics_collector

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: CacheKey) -> bool:
        with self._lock:
            return key in self._entries

    def get_or_compute(
        self,
        key: CacheKey,
        compute_fn: Callable[[], List[HistoricalIncident]],
    ) -> List[HistoricalIncident]:
        with self._lock:
            cached = self._entries.get(key)
        if cached is not None:
            if self.metrics_collector:
                self.metrics_collector.record_cache_hit()
            return cached

        if self.metrics_collector:
            self.metrics_collector.record_cache_miss()
        value = compute_fn()
        with self._lock:
            # A concurrent reader may have filled it first; keep a single object
            return self._entries.setdefault(key, value)

    def invalidate_for(self, incident: HistoricalIncident) -> int:
        """Drops every entry the incident could affect. Returns the count dropped."""
        with self._lock:
            stale = [k for k in self._entries if k.possibly_affected_by(incident)]
            for key in stale:
                del self._entries[key]
        if stale:
            logger.debug(f"Invalidated {len(stale)} cached patterns for {incident.transport_type.value} incident")
        return len(stale)

    def clear(self):
        with self._lock:
            self._entries.clear()
