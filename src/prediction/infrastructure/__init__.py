"""
Infrastructure module initialization.
"""
from .persistence import InMemoryBlobStore, FileBlobStore, SqlBlobStore, IncidentStore, CorpusSeeder
from .cache import CacheKey, PatternCache
from .providers import (
    StaticWeatherProvider,
    SimulatedWeatherProvider,
    OpenWeatherMapProvider,
    StaticEventProvider,
    SimulatedEventProvider,
    StaticDelayFeed,
    SimulatedDelayFeed,
)

__all__ = [
    "InMemoryBlobStore",
    "FileBlobStore",
    "SqlBlobStore",
    "IncidentStore",
    "CorpusSeeder",
    "CacheKey",
    "PatternCache",
    "StaticWeatherProvider",
    "SimulatedWeatherProvider",
    "OpenWeatherMapProvider",
    "StaticEventProvider",
    "SimulatedEventProvider",
    "StaticDelayFeed",
    "SimulatedDelayFeed",
]
