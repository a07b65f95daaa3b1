"""Data access layer for snapshot state"""

from typing import Optional
from sqlalchemy.orm import Session
from watcard_insights.infrastructure.database.models import KVState


class SqlKeyValueStore:
    """Key-value store backed by the kv_state table"""

    def __init__(self, db: Session):
        self.db = db

    def get(self, key: str) -> Optional[str]:
        row = self.db.get(KVState, key)
        return row.value if row else None

    def set(self, key: str, value: str) -> None:
        row = self.db.get(KVState, key)
        if row:
            row.value = value
        else:
            self.db.add(KVState(key=key, value=value))
        self.db.flush()  # Visible to later reads without committing

    def delete(self, key: str) -> None:
        row = self.db.get(KVState, key)
        if row:
            self.db.delete(row)
            self.db.flush()
