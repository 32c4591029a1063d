"""
BlobStore implementations: in-memory, JSON file directory and SQL table.
"""
import logging
import os
import threading
from typing import Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from ....common.database.models import BlobDB
from ....common.exceptions import PersistenceError
from ...domain.repositories import BlobStore

logger = logging.getLogger(__name__)


class InMemoryBlobStore(BlobStore):
    """
    Keeps blobs in a dict. Used by tests and ephemeral runs.
    """
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._blobs: Dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def read(self, key: str) -> Optional[str]:
        with self._lock:
            return self._blobs.get(key)

    def write(self, key: str, payload: str):
        with self._lock:
            self._blobs[key] = payload


class FileBlobStore(BlobStore):
    """
    Stores each blob as <output_dir>/<key>.json.
    Writes go through a temp file and an atomic rename.
    """
    def __init__(self, output_dir: str):
        self.output_dir = output_dir
        os.makedirs(self.output_dir, exist_ok=True)

    def _get_filename(self, key: str) -> str:
        return os.path.join(self.output_dir, f"{key}.json")

    def read(self, key: str) -> Optional[str]:
        filename = self._get_filename(key)
        if not os.path.exists(filename):
            return None
        try:
            with open(filename, mode='r', encoding='utf-8') as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError("read", key, str(e)) from e

    def write(self, key: str, payload: str):
        filename = self._get_filename(key)
        tmp_filename = f"{filename}.tmp"
        try:
            with open(tmp_filename, mode='w', encoding='utf-8') as f:
                f.write(payload)
            os.replace(tmp_filename, filename)
            logger.debug(f"Wrote {filename} ({len(payload)} bytes)")
        except OSError as e:
            raise PersistenceError("write", key, str(e)) from e


class SqlBlobStore(BlobStore):
    """
    Stores blobs in the kv_blobs table through SQLAlchemy.
    """
    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def read(self, key: str) -> Optional[str]:
        session = self.session_factory()
        try:
            row = session.get(BlobDB, key)
            return row.payload if row is not None else None
        except SQLAlchemyError as e:
            raise PersistenceError("read", key, str(e)) from e
        finally:
            session.close()

    def write(self, key: str, payload: str):
        session = self.session_factory()
        try:
            row = session.get(BlobDB, key)
            if row is None:
                session.add(BlobDB(key=key, payload=payload))
            else:
                row.payload = payload
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise PersistenceError("write", key, str(e)) from e
        finally:
            session.close()
