from dataclasses import dataclass
from typing import Dict, List
import threading
import time

@dataclass
class PredictionMetrics:
    """Engine performance metrics"""
    predictions_served: int
    avg_prediction_time_ms: float
    cache_hits: int
    cache_misses: int
    lookup_failures: int
    incidents_ingested: int
    uptime_seconds: float

    @property
    def cache_hit_rate(self) -> float:
        total = self.cache_hits + self.cache_misses
        return self.cache_hits / total if total else 0.0

    def to_dict(self) -> Dict:
        return {
            'predictions_served': self.predictions_served,
            'avg_prediction_time_ms': self.avg_prediction_time_ms,
            'cache_hits': self.cache_hits,
            'cache_misses': self.cache_misses,
            'cache_hit_rate': self.cache_hit_rate,
            'lookup_failures': self.lookup_failures,
            'incidents_ingested': self.incidents_ingested,
            'uptime_seconds': self.uptime_seconds
        }


class MetricsCollector:
    """Collects and aggregates engine metrics"""

    def __init__(self):
        self.prediction_times: List[float] = []
        self.predictions_served = 0
        self.cache_hits = 0
        self.cache_misses = 0
        self.lookup_failures = 0
        self.incidents_ingested = 0
        self.start_time = time.time()
        self._lock = threading.Lock()

    def record_prediction(self, duration_ms: float):
        with self._lock:
            self.prediction_times.append(duration_ms)
            self.predictions_served += 1
            # Keep buffer size manageable
            if len(self.prediction_times) > 1000:
                self.prediction_times.pop(0)

    def record_cache_hit(self):
        with self._lock:
            self.cache_hits += 1

    def record_cache_miss(self):
        with self._lock:
            self.cache_misses += 1

    def record_lookup_failure(self):
        with self._lock:
            self.lookup_failures += 1

    def record_ingested(self, count: int = 1):
        with self._lock:
            self.incidents_ingested += count

    def get_metrics(self) -> PredictionMetrics:
        with self._lock:
            avg = sum(self.prediction_times) / len(self.prediction_times) if self.prediction_times else 0.0
            return PredictionMetrics(
                predictions_served=self.predictions_served,
                avg_prediction_time_ms=avg,
                cache_hits=self.cache_hits,
                cache_misses=self.cache_misses,
                lookup_failures=self.lookup_failures,
                incidents_ingested=self.incidents_ingested,
                uptime_seconds=time.time() - self.start_time
            )
