"""
Durable, append-only collection of historical incidents.
"""
import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from ....common.exceptions import PersistenceError
from ....common.logging import log_execution_time
from ...domain.entities import HistoricalIncident, TransportType
from ...domain.repositories import BlobStore
from .codec import dumps_incidents, loads_incidents
from .seeding import CorpusSeeder

logger = logging.getLogger(__name__)

DEFAULT_KEY = "historicalIncidents"


class IncidentStore:
    """
    Holds the incident history in memory and mirrors it to a single blob.

    Empty, missing or corrupt blobs are treated as a cold start: the store
    seeds itself with a synthetic corpus and saves it. Save failures are
    logged and never undo the in-memory append.

    Not synchronized on its own; KnowledgeBase serializes writers.
    """

    def __init__(
        self,
        blob_store: BlobStore,
        key: str = DEFAULT_KEY,
        seeder: Optional[CorpusSeeder] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.blob_store = blob_store
        self.key = key
        self.seeder = seeder if seeder is not None else CorpusSeeder()
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self._incidents: List[HistoricalIncident] = []

    def __enter__(self) -> "IncidentStore":
        self.load()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.save()
        return False

    def __len__(self) -> int:
        return len(self._incidents)

    @log_execution_time(logger)
    def load(self) -> int:
        """Loads the blob, seeding on cold start. Returns the incident count."""
        try:
            payload = self.blob_store.read(self.key)
        except PersistenceError as e:
            logger.error(f"Failed to load incident store (key={self.key}): {e}")
            payload = None

        incidents: List[HistoricalIncident] = []
        if payload:
            try:
                incidents = loads_incidents(payload)
            except ValueError as e:
                logger.warning(f"Persisted incidents under '{self.key}' are corrupt, regenerating: {e}")

        if incidents:
            self._incidents = incidents
            logger.info(f"Loaded {len(incidents)} incidents from '{self.key}'")
        else:
            logger.info("Incident store is empty, seeding synthetic corpus")
            self._incidents = self.seeder.generate(self.clock())
            self.save()
        return len(self._incidents)

    @log_execution_time(logger)
    def save(self) -> bool:
        """Persists the full history. Returns False (and logs) on failure."""
        try:
            self.blob_store.write(self.key, dumps_incidents(self._incidents))
            return True
        except PersistenceError as e:
            logger.error(f"Failed to save incident store (key={self.key}, size={len(self._incidents)}): {e}")
            return False

    def add(self, incident: HistoricalIncident):
        self._incidents.append(incident)
        self.save()

    def query(
        self,
        transport_type: TransportType,
        route: Optional[str] = None,
        location: Optional[str] = None,
    ) -> List[HistoricalIncident]:
        """
        All incidents of the given transport type. Route and location are
        accepted for the contract; fuzzy matching belongs to SimilarityMatcher.
        """
        return [i for i in self._incidents if i.transport_type == transport_type]

    def all(self) -> List[HistoricalIncident]:
        return list(self._incidents)

    def reset(self):
        """Drops every incident and persists the empty history."""
        self._incidents = []
        self.save()
        logger.info(f"Incident store '{self.key}' reset")
