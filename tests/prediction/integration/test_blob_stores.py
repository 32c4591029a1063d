import os
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from src.common.exceptions import PersistenceError
from src.prediction.infrastructure.persistence import (
    CorpusSeeder, FileBlobStore, IncidentStore, SqlBlobStore
)

NOW = datetime(2024, 6, 12, 14, 0, tzinfo=timezone.utc)


def test_file_blob_store_write_and_read(tmp_path):
    store = FileBlobStore(str(tmp_path / "kb"))
    assert store.read("historicalIncidents") is None

    store.write("historicalIncidents", "[]")
    store.write("historicalIncidents", '[{"x": 1}]')

    assert store.read("historicalIncidents") == '[{"x": 1}]'
    assert os.listdir(tmp_path / "kb") == ["historicalIncidents.json"]


def test_file_blob_store_write_failure(tmp_path):
    store = FileBlobStore(str(tmp_path))
    os.makedirs(tmp_path / "blocked.json.tmp")

    with pytest.raises(PersistenceError) as exc_info:
        store.write("blocked", "[]")
    assert exc_info.value.operation == "write"
    assert exc_info.value.key == "blocked"


def test_file_blob_store_rejects_non_utf8(tmp_path):
    store = FileBlobStore(str(tmp_path))
    (tmp_path / "historicalIncidents.json").write_bytes(b"\xff\xfe\x00garbage")

    with pytest.raises(PersistenceError) as exc_info:
        store.read("historicalIncidents")
    assert exc_info.value.operation == "read"


def test_non_utf8_file_is_reseeded(tmp_path):
    (tmp_path / "historicalIncidents.json").write_bytes(b"\xff\xfe\x00garbage")
    store = IncidentStore(FileBlobStore(str(tmp_path)), seeder=CorpusSeeder(seed=5), clock=lambda: NOW)

    assert store.load() > 0
    assert FileBlobStore(str(tmp_path)).read("historicalIncidents").startswith("[")


def test_sql_blob_store_upsert(session_factory):
    store = SqlBlobStore(session_factory)
    assert store.read("historicalIncidents") is None

    store.write("historicalIncidents", "[]")
    store.write("historicalIncidents", "[1]")
    assert store.read("historicalIncidents") == "[1]"


def test_sql_blob_store_wraps_database_errors():
    session = MagicMock()
    session.get.side_effect = OperationalError("SELECT", {}, Exception("db is locked"))
    store = SqlBlobStore(lambda: session)

    with pytest.raises(PersistenceError):
        store.read("historicalIncidents")
    session.close.assert_called_once()


@pytest.mark.parametrize("backend", ["file", "sql"])
def test_incident_store_round_trip(backend, tmp_path, session_factory):
    blob_store = FileBlobStore(str(tmp_path)) if backend == "file" else SqlBlobStore(session_factory)

    original = IncidentStore(blob_store, seeder=CorpusSeeder(seed=21), clock=lambda: NOW)
    original.load()

    reloaded = IncidentStore(blob_store, seeder=CorpusSeeder(seed=22), clock=lambda: NOW)
    reloaded.load()

    assert len(reloaded) == len(original)
    assert set(reloaded.all()) == set(original.all())
