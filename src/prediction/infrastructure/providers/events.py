"""
EventProvider implementations.
"""
import random
from datetime import datetime
from typing import Optional

from ...domain.protocols import EventProvider


class StaticEventProvider(EventProvider):
    def __init__(self, has_events: bool = False):
        self.has_events = has_events

    async def has_local_events(self, location: str, date: datetime) -> bool:
        return self.has_events


class SimulatedEventProvider(EventProvider):
    """Reports a local event with a fixed probability (10% by default)."""

    def __init__(self, probability: float = 0.1, rng: Optional[random.Random] = None):
        self.probability = probability
        self.rng = rng or random.Random()

    async def has_local_events(self, location: str, date: datetime) -> bool:
        return self.rng.random() < self.probability
