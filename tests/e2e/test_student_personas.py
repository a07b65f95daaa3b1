"""
E2E tests for student spending personas through the HTTP API.

Each scenario posts a scraped batch and checks the persona the dashboard
would show.

Student personas:
- night_owl: most spending after 9 PM
- coffee_regular: daily Tim Hortons and Starbucks runs
- late_diner: big late-night dining orders but most spend by day
- home_cook: grocery heavy
- scholar: printing and textbooks
- frugal: a few dollars over two weeks
"""

import pytest
from fastapi.testclient import TestClient


def record(date: str, terminal: str, amount: float) -> dict:
    return {"date": date, "terminal": terminal, "amount": f"$-{amount:.2f}"}


def persona_for(client: TestClient, records: list[dict]) -> str:
    response = client.post("/v1/analysis", json={"transactions": records})
    assert response.status_code == 200
    return response.json()["metrics"]["persona"]["title"]


@pytest.mark.integration
def test_night_owl(client: TestClient):
    records = [
        record("2026-02-02 23:30:00", "POS-FS-VENDING-1", 12.0),
        record("2026-02-03 01:15:00", "POS-FS-VENDING-1", 10.0),
        record("2026-02-04 12:00:00", "POS-FS-UWP MARKET-3", 30.0),
    ]
    assert persona_for(client, records) == "Midnight Snacker"


@pytest.mark.integration
def test_coffee_regular(client: TestClient):
    records = [record(f"2026-02-{day:02d} 08:30:00", "POS-FS-TH- SLC-1", 3.5) for day in range(2, 9)]
    records.append(record("2026-02-09 12:00:00", "POS-FS-UWP MARKET-3", 60.0))
    assert persona_for(client, records) == "Caffeine Addict"


@pytest.mark.integration
def test_late_diner(client: TestClient):
    records = [
        record("2026-02-02 22:00:00", "POS-FS-SUBWAY-1", 45.0),
        record("2026-02-03 12:00:00", "POS-FS-UWP MARKET-3", 80.0),
        record("2026-02-04 12:00:00", "POS-FS-PARKING-2", 80.0),
    ]
    assert persona_for(client, records) == "Late-Night Gourmet"


@pytest.mark.integration
def test_home_cook(client: TestClient):
    records = [
        record("2026-02-02 17:00:00", "POS-FS-UWP MARKET-3", 60.0),
        record("2026-02-05 17:00:00", "POS-FS-UWP MARKET-3", 40.0),
        record("2026-02-06 12:00:00", "POS-FS-PARKING-2", 50.0),
    ]
    assert persona_for(client, records) == "Smart Shopper"


@pytest.mark.integration
def test_scholar(client: TestClient):
    records = [
        record("2026-02-02 10:00:00", "POS-FS-DP PRINT-1", 30.0),
        record("2026-02-03 12:00:00", "POS-FS-PARKING-2", 50.0),
        record("2026-02-06 12:00:00", "POS-FS-UWP MARKET-3", 40.0),
    ]
    assert persona_for(client, records) == "Scholar"


@pytest.mark.integration
def test_frugal(client: TestClient):
    records = [
        record("2026-02-02 10:00:00", "POS-FS-PARKING-2", 20.0),
        record("2026-02-16 10:00:00", "POS-FS-PARKING-2", 20.0),
    ]
    assert persona_for(client, records) == "Budget Master"


@pytest.mark.integration
def test_deposits_only(client: TestClient):
    response = client.post(
        "/v1/analysis",
        json={"transactions": [{"date": "2026-02-02 10:00:00", "terminal": "DEPOSIT", "amount": "$200.00"}]},
    )

    data = response.json()
    assert data["metrics"]["total_spent"] == 0.0
    assert data["metrics"]["persona"]["title"] == "Budget Master"
    assert len(data["transactions"]) == 1
