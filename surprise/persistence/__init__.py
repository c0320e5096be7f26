"""
Persistence - Load and save the session as one opaque blob.

The engine only exposes plain state (snapshot) and accepts a plain
state to restore; this package owns the file and the blob schema.
"""

from .schema import StateBlob, PrizeRecord, ContainerRecord, parse_blob
from .store import StateStore, JsonFileStore

__all__ = [
    "StateBlob",
    "PrizeRecord",
    "ContainerRecord",
    "parse_blob",
    "StateStore",
    "JsonFileStore",
]
