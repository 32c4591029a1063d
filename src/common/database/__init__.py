from .database import Base, create_db_engine, create_session_factory, init_db, resolve_database_url
from .models import BlobDB

__all__ = [
    "Base", "create_db_engine", "create_session_factory", "init_db", "resolve_database_url",
    "BlobDB"
]
