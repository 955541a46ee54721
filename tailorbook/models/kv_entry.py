from sqlalchemy import Column, Integer, String, DateTime, Text
from sqlalchemy.sql import func
from tailorbook.database import Base


class KeyValueEntry(Base):
    __tablename__ = "kv_store"

    id = Column(Integer, primary_key=True, index=True)
    key = Column(String, unique=True, nullable=False, index=True)

    # Whole serialized collection (JSON array)
    value = Column(Text, nullable=False)

    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
