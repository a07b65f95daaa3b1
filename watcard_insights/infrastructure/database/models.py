"""SQLAlchemy ORM models for persisted snapshot state"""

from sqlalchemy import Column, DateTime, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class KVState(Base):
    """One key of the persisted snapshot (raw batch, timestamp, balance)"""

    __tablename__ = "kv_state"

    key = Column(Text, primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
