import os
from typing import Optional
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

# Default to a local SQLite file if not specified
DEFAULT_DATABASE_URL = "sqlite:///data/delay_risk.db"

Base = declarative_base()


def resolve_database_url(configured: Optional[str] = None) -> str:
    """DATABASE_URL wins over the configured value."""
    return os.getenv("DATABASE_URL") or configured or DEFAULT_DATABASE_URL


def create_db_engine(database_url: Optional[str] = None) -> Engine:
    url = resolve_database_url(database_url)
    if url.startswith("sqlite:///") and not url.startswith("sqlite:///:memory:"):
        directory = os.path.dirname(url[len("sqlite:///"):])
        if directory:
            os.makedirs(directory, exist_ok=True)
    return create_engine(url, pool_pre_ping=True)


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine):
    """Initialize database tables."""
    # Import models here to ensure they are registered with Base
    from . import models
    Base.metadata.create_all(bind=engine)
