"""
Key-value blob storage boundary.

The workspace store only needs to load, save and remove opaque bytes by
string key; ``SqlBlobStore`` keeps them in the ``blobs`` table.
"""

from typing import Callable, Protocol

from loguru import logger
from sqlalchemy.orm import Session

from ..models.blob import Blob


class BlobStore(Protocol):
    """Interface of a string-keyed blob store."""

    def load(self, key: str) -> bytes | None:
        ...

    def save(self, key: str, data: bytes) -> None:
        ...

    def remove(self, key: str) -> None:
        ...


class SqlBlobStore:
    """
    Blob store backed by a SQLAlchemy session factory.

    Each call runs in its own short-lived session and commits immediately.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def load(self, key: str) -> bytes | None:
        with self._session_factory() as db:
            blob = db.get(Blob, key)
            return None if blob is None else blob.data

    def save(self, key: str, data: bytes) -> None:
        with self._session_factory() as db:
            blob = db.get(Blob, key)
            if blob is None:
                db.add(Blob(key=key, data=data))
            else:
                blob.data = data
            db.commit()
        logger.debug("Stored {} bytes under {}", len(data), key)

    def remove(self, key: str) -> None:
        with self._session_factory() as db:
            blob = db.get(Blob, key)
            if blob is not None:
                db.delete(blob)
                db.commit()
