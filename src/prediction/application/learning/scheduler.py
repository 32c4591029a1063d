"""
Periodic relearning from the live delay feed.
"""
import asyncio
import logging
import random
from datetime import datetime, timezone, tzinfo
from typing import Callable, List, Optional

from ...domain.calendar import to_local
from ...domain.entities import DelayPatterns, HistoricalIncident, LiveDelayRecord, WeatherCondition
from ...domain.protocols import DelayFeed
from ..context_gatherer import estimate_passenger_load
from ..knowledge_base import KnowledgeBase
from .patterns import analyze_patterns

logger = logging.getLogger(__name__)


class LearningScheduler:
    """
    Runs a learning tick every `interval` seconds as an asyncio task.

    start()/stop() own the task lifecycle; run_once() performs a single
    tick and is what tests drive directly.
    """

    def __init__(
        self,
        knowledge_base: KnowledgeBase,
        feed: DelayFeed,
        interval: float = 3600.0,
        materialize_probability: float = 0.3,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], datetime]] = None,
        tz: Optional[tzinfo] = None,
    ):
        self.knowledge_base = knowledge_base
        self.feed = feed
        self.interval = interval
        self.materialize_probability = materialize_probability
        self.rng = rng or random.Random()
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.tz = tz

        self.is_learning = False
        self.last_update: Optional[datetime] = None
        self.latest_patterns: Optional[DelayPatterns] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self):
        if self.is_running:
            logger.info("Learning scheduler already running")
            return
        self._task = asyncio.create_task(self._run())
        logger.info(f"Learning scheduler started (interval={self.interval}s)")

    async def stop(self):
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Learning scheduler stopped")

    async def _run(self):
        while True:
            await asyncio.sleep(self.interval)
            try:
                await self.run_once()
            except Exception as e:
                logger.error(f"Learning tick failed: {e}", exc_info=True)

    async def run_once(self) -> int:
        """One learning tick. Returns the number of incidents added."""
        self.is_learning = True
        added = 0
        try:
            now = to_local(self.clock(), self.tz)
            try:
                records = await self.feed.fetch()
            except Exception as e:
                logger.warning(f"Delay feed unavailable, skipping ingestion: {e}")
                records = []

            if records and self.rng.random() < self.materialize_probability:
                for incident in self.materialize(records, now):
                    self.knowledge_base.add_incident(incident)
                    added += 1

            self.latest_patterns = analyze_patterns(self.knowledge_base.snapshot(), now)
            logger.info(
                f"Learning tick: {added} new incidents, "
                f"{len(self.latest_patterns.weather_patterns)} weather patterns, "
                f"{len(self.latest_patterns.route_patterns)} route patterns, "
                f"{len(self.latest_patterns.time_patterns)} hourly patterns"
            )
        finally:
            self.is_learning = False
            self.last_update = self.clock()
        return added

    @staticmethod
    def materialize(records: List[LiveDelayRecord], now: datetime) -> List[HistoricalIncident]:
        return [
            HistoricalIncident.create(
                timestamp=now,
                transport_type=record.transport_type,
                route=record.route,
                location=record.location,
                duration=record.duration,
                reason=record.reason,
                severity=record.severity,
                weather_condition=WeatherCondition.UNKNOWN,
                passenger_load=estimate_passenger_load(now),
            )
            for record in records
        ]
