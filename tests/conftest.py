"""Pytest fixtures for testing"""

import pytest
from datetime import datetime
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from watcard_insights.api.dependencies import get_now
from watcard_insights.api.main import create_app
from watcard_insights.infrastructure.database.models import Base
from watcard_insights.infrastructure.database.session import get_db


# Test database: one shared in-memory connection
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Fixed clock: a Tuesday in the winter term
NOW = datetime(2026, 2, 10, 12, 0, 0)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database and fixed clock"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_now] = lambda: NOW
    return TestClient(app)


@pytest.fixture
def raw_records() -> list[dict]:
    """A week of scraped records as the browser extension copies them"""
    return [
        {"date": "2026-02-01 09:15:00", "terminal": "01481 : POS-FS-UWP MARKET-37", "amount": "$-12.50"},
        {"date": "2026-02-01 12:30:00", "terminal": "00212 : POS-FS-MUDIES-2", "amount": "$-9.75"},
        {"date": "2026-02-02 08:05:00", "terminal": "00310 : POS-FS-TH- SLC-1", "amount": "$-4.25"},
        {"date": "2026-02-03 17:45:00", "terminal": "00415 : POS-FS-WES LAUNDRY-", "amount": "$-3.00"},
        {"date": "2026-02-04 23:10:00", "terminal": "00212 : POS-FS-MUDIES-2", "amount": "$-9.00"},
        {"date": "2026-02-05 14:00:00", "terminal": "00501 : PRINT STATION-4", "amount": "$-2.50"},
        {"date": "2026-02-03 10:00:00", "terminal": "ONLINE DEPOSIT", "amount": "$100.00"},
    ]
