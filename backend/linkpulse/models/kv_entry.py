from sqlalchemy import Column, String, Text, DateTime, func
from ..database import Base


class KeyValueEntry(Base):
    """Persistent key-value slot holding one JSON snapshot"""
    __tablename__ = "kv_store"

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<KeyValueEntry {self.key}>"
