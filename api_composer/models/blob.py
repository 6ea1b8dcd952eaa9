"""
Blob model for the key-value storage boundary.

Each persisted collection (history, environments, saved requests) is
stored as a single serialized blob under a fixed string key.
"""

from datetime import datetime

from sqlalchemy import String, LargeBinary
from sqlalchemy.orm import Mapped, mapped_column

from ..database import Base


class Blob(Base):
    """
    SQLAlchemy model for opaque stored blobs.

    Attributes:
        key: Storage key (primary key)
        data: Serialized collection bytes
        updated_at: Timestamp of the last write
    """
    __tablename__ = "blobs"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    data: Mapped[bytes] = mapped_column(LargeBinary)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)
