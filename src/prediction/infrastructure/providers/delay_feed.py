"""
DelayFeed implementations standing in for the live transit layer.
"""
import random
from typing import Iterable, List, Optional

from ...domain.entities import DelayReason, LiveDelayRecord, SeverityLevel, TransportType
from ...domain.protocols import DelayFeed
from ..persistence.seeding import LOCATIONS, ROUTES


class StaticDelayFeed(DelayFeed):
    """
    Replays queued batches, one per fetch. Empty once exhausted.
    """

    def __init__(self, batches: Optional[Iterable[List[LiveDelayRecord]]] = None):
        self._batches = list(batches or [])

    def push(self, batch: List[LiveDelayRecord]):
        self._batches.append(batch)

    async def fetch(self) -> List[LiveDelayRecord]:
        if not self._batches:
            return []
        return self._batches.pop(0)


class SimulatedDelayFeed(DelayFeed):
    """
    Produces one plausible delay signal per fetch (5-30 minutes, moderate).
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    async def fetch(self) -> List[LiveDelayRecord]:
        transport_type = self.rng.choice(list(TransportType))
        return [
            LiveDelayRecord(
                transport_type=transport_type,
                route=self.rng.choice(ROUTES[transport_type]),
                location=self.rng.choice(LOCATIONS),
                duration=self.rng.uniform(300, 1800),
                reason=self.rng.choice(list(DelayReason)),
                severity=SeverityLevel.MODERATE,
            )
        ]
