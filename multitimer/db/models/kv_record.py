"""SQLAlchemy ORM model for kv_records table"""

from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.sql import func

from multitimer.db.base import Base


class KeyValueRecord(Base):
    """
    One persisted document per key.
    The value is the whole serialized document and is overwritten on every save.
    """
    __tablename__ = "kv_records"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)

    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )

    def __repr__(self) -> str:
        return f"<KeyValueRecord(key='{self.key}', size={len(self.value or '')})>"
