from .blob_store import InMemoryBlobStore, FileBlobStore, SqlBlobStore
from .incident_store import IncidentStore
from .seeding import CorpusSeeder
