import logging
import os
from datetime import date, datetime
from typing import Dict, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from omegaconf import DictConfig

from ...common.database import create_db_engine, create_session_factory, init_db
from ...common.exceptions import ConfigurationError
from ...common.metrics import MetricsCollector
from ..domain import BlobStore, DelayFeed, EventProvider, WeatherCondition, WeatherProvider
from ..infrastructure.cache import PatternCache
from ..infrastructure.persistence import (
    CorpusSeeder, FileBlobStore, IncidentStore, InMemoryBlobStore, SqlBlobStore
)
from ..infrastructure.persistence.codec import decode_code
from ..infrastructure.providers import (
    OpenWeatherMapProvider, SimulatedDelayFeed, SimulatedEventProvider,
    SimulatedWeatherProvider, StaticDelayFeed, StaticEventProvider, StaticWeatherProvider
)
from .context_gatherer import ContextGatherer
from .knowledge_base import KnowledgeBase
from .learning import LearningScheduler
from .prediction_service import DelayPredictionService
from .similarity import SimilarityMatcher

logger = logging.getLogger(__name__)


class DelayRiskApplicationBuilder:
    """
    Builder pattern for constructing the delay-risk engine.
    Centralizes component instantiation and wiring; the caller owns the
    resulting instances.
    """

    def __init__(self, config: DictConfig):
        self.config = config
        self.metrics_collector = MetricsCollector()
        try:
            self.tz = ZoneInfo(config.calendar.timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ConfigurationError(f"Unknown timezone: {config.calendar.timezone}") from e

        # Components
        self.blob_store: Optional[BlobStore] = None
        self.knowledge_base: Optional[KnowledgeBase] = None
        self.context_gatherer: Optional[ContextGatherer] = None
        self.feed: Optional[DelayFeed] = None
        self.scheduler: Optional[LearningScheduler] = None
        self.service: Optional[DelayPredictionService] = None

    def build_blob_store(self) -> 'DelayRiskApplicationBuilder':
        persistence_cfg = self.config.persistence
        store_type = persistence_cfg.type
        logger.info(f"Initializing {store_type} blob store...")

        if store_type == 'memory':
            self.blob_store = InMemoryBlobStore()
        elif store_type == 'file':
            self.blob_store = FileBlobStore(output_dir=persistence_cfg.output_dir)
        elif store_type == 'sql':
            engine = create_db_engine(persistence_cfg.database_url)
            init_db(engine)
            self.blob_store = SqlBlobStore(create_session_factory(engine))
        else:
            raise ConfigurationError(f"Unknown persistence type: {store_type}")
        return self

    def build_knowledge_base(self) -> 'DelayRiskApplicationBuilder':
        if not self.blob_store:
            self.build_blob_store()

        seeding_cfg = self.config.seeding
        seeder = CorpusSeeder(
            days=seeding_cfg.days,
            max_incidents_per_day=seeding_cfg.max_incidents_per_day,
            seed=seeding_cfg.seed,
        )
        store = IncidentStore(
            self.blob_store,
            key=self.config.persistence.key,
            seeder=seeder,
            clock=lambda: datetime.now(self.tz),
        )
        store.load()

        self.knowledge_base = KnowledgeBase(
            store=store,
            cache=PatternCache(self.metrics_collector),
            matcher=SimilarityMatcher(),
            metrics_collector=self.metrics_collector,
        )
        return self

    def build_context_gatherer(self) -> 'DelayRiskApplicationBuilder':
        lookups_cfg = self.config.lookups
        try:
            holidays = [date.fromisoformat(str(d)) for d in self.config.calendar.holidays]
        except ValueError as e:
            raise ConfigurationError(f"Invalid holiday date: {e}") from e

        self.context_gatherer = ContextGatherer(
            weather_provider=self._create_weather_provider(lookups_cfg),
            event_provider=self._create_event_provider(lookups_cfg),
            timeout=lookups_cfg.timeout_seconds,
            tz=self.tz,
            holidays=holidays,
            metrics_collector=self.metrics_collector,
        )
        return self

    def build_scheduler(self) -> 'DelayRiskApplicationBuilder':
        learning_cfg = self.config.learning
        if not learning_cfg.enabled:
            return self
        if not self.knowledge_base:
            self.build_knowledge_base()

        if learning_cfg.feed == 'simulated':
            self.feed = SimulatedDelayFeed()
        elif learning_cfg.feed == 'static':
            self.feed = StaticDelayFeed()
        else:
            raise ConfigurationError(f"Unknown delay feed: {learning_cfg.feed}")

        self.scheduler = LearningScheduler(
            knowledge_base=self.knowledge_base,
            feed=self.feed,
            interval=learning_cfg.interval_seconds,
            materialize_probability=learning_cfg.materialize_probability,
            tz=self.tz,
        )
        return self

    def build_service(self) -> DelayPredictionService:
        if not self.knowledge_base:
            self.build_knowledge_base()
        if not self.context_gatherer:
            self.build_context_gatherer()

        self.service = DelayPredictionService(
            knowledge_base=self.knowledge_base,
            context_gatherer=self.context_gatherer,
            scheduler=self.scheduler,
            metrics_collector=self.metrics_collector,
            route_separator=self.config.route_separator,
        )
        return self.service

    def get_components(self) -> Dict:
        """Returns built components for external use (e.g. the API)"""
        return {
            'blob_store': self.blob_store,
            'knowledge_base': self.knowledge_base,
            'context_gatherer': self.context_gatherer,
            'feed': self.feed,
            'scheduler': self.scheduler,
            'service': self.service,
            'metrics_collector': self.metrics_collector
        }

    def _create_weather_provider(self, lookups_cfg: DictConfig) -> WeatherProvider:
        provider = lookups_cfg.weather_provider
        if provider == 'simulated':
            return SimulatedWeatherProvider()
        if provider == 'static':
            try:
                return StaticWeatherProvider(decode_code(WeatherCondition, lookups_cfg.static_weather))
            except ValueError as e:
                raise ConfigurationError(f"Invalid static weather: {lookups_cfg.static_weather}") from e
        if provider == 'openweathermap':
            api_key = os.getenv("OPENWEATHER_API_KEY")
            if not api_key:
                raise ConfigurationError("OPENWEATHER_API_KEY is required for the openweathermap provider")
            return OpenWeatherMapProvider(api_key=api_key, url=lookups_cfg.openweathermap_url)
        raise ConfigurationError(f"Unknown weather provider: {provider}")

    def _create_event_provider(self, lookups_cfg: DictConfig) -> EventProvider:
        provider = lookups_cfg.event_provider
        if provider == 'simulated':
            return SimulatedEventProvider(probability=lookups_cfg.event_probability)
        if provider == 'static':
            return StaticEventProvider(has_events=lookups_cfg.static_events)
        raise ConfigurationError(f"Unknown event provider: {provider}")
