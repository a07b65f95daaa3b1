"""Dependency injection for FastAPI endpoints"""

from datetime import datetime
from fastapi import Depends, Request
from sqlalchemy.orm import Session
from watcard_insights.domain.snapshot import SnapshotStore
from watcard_insights.infrastructure.database.repositories import SqlKeyValueStore
from watcard_insights.infrastructure.database.session import get_db


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_snapshot_store(db: Session = Depends(get_db)) -> SnapshotStore:
    """Provide the snapshot store over the request's database session"""
    return SnapshotStore(SqlKeyValueStore(db))


def get_now() -> datetime:
    """Wall-clock time used for forecasts (overridden in tests)"""
    return datetime.now()
