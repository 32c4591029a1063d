from datetime import timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from src.common.database import Base, create_session_factory
from src.common.metrics import MetricsCollector
from src.prediction.infrastructure.persistence import InMemoryBlobStore
from tests.factories import WEDNESDAY_AFTERNOON, build_context, build_incident


@pytest.fixture
def neutral_context():
    """Wednesday 14:00 in June, clear, normal load: every multiplier is 1.0"""
    return build_context()


@pytest.fixture
def recent_incidents():
    """Ten train incidents on the ten days before WEDNESDAY_AFTERNOON"""
    return [build_incident(timestamp=WEDNESDAY_AFTERNOON - timedelta(days=d)) for d in range(1, 11)]


@pytest.fixture
def blob_store():
    return InMemoryBlobStore()


@pytest.fixture
def metrics_collector():
    return MetricsCollector()


@pytest.fixture
def sqlite_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(sqlite_engine):
    return create_session_factory(sqlite_engine)
