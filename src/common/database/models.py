from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, String, Text
from .database import Base


class BlobDB(Base):
    """One serialized document per key (e.g. the historical incident array)."""
    __tablename__ = "kv_blobs"

    key = Column(String(128), primary_key=True, index=True)
    payload = Column(Text, nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
