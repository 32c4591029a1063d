"""
Domain repositories for the Delay Prediction module.
"""
from typing import Optional, Protocol


class BlobStore(Protocol):
    """
    Key-value storage for a single serialized document per key.
    Implementations raise PersistenceError on I/O failure.
    """
    def read(self, key: str) -> Optional[str]:
        ...

    def write(self, key: str, payload: str):
        ...
