"""POST/GET /v1/analysis - spending analytics over a scraped batch"""

import time
import logging
from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from watcard_insights.api.v1.schemas import AnalysisRequest, AnalysisResponse, to_response
from watcard_insights.api.dependencies import get_now, get_request_id, get_snapshot_store
from watcard_insights.config import settings
from watcard_insights.domain.analytics import generate_report
from watcard_insights.domain.exceptions import MalformedBatchError
from watcard_insights.domain.snapshot import SnapshotStore, parse_balance
from watcard_insights.infrastructure.database.session import get_db
from watcard_insights.infrastructure.observability.logging import log_analysis
from watcard_insights.infrastructure.observability.metrics import record_analysis, record_malformed_batch

router = APIRouter()

TIMESTAMP_FORMAT = "%b %d, %Y, %I:%M %p"


@router.post("/analysis", response_model=AnalysisResponse)
def create_analysis(
    request_body: AnalysisRequest,
    request: Request,
    db: Session = Depends(get_db),
    store: SnapshotStore = Depends(get_snapshot_store),
    now: datetime = Depends(get_now),
):
    """
    Ingest a scraped batch and return its analytics.

    Flow:
    1. Normalize raw records (bad records are dropped and counted)
    2. Derive metrics, persona and runway forecast
    3. Persist the raw batch, timestamp and balance (replacing the previous one)
    4. Return the report
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        if request_body.balance is not None:
            balance = request_body.balance
        else:
            balance = parse_balance(store.load().balance)

        report = generate_report(
            request_body.transactions,
            now=now,
            current_balance=balance,
            top_locations_limit=settings.top_locations_limit,
        )

        last_updated = now.strftime(TIMESTAMP_FORMAT)
        store.save_batch(request_body.transactions, last_updated)
        if request_body.balance is not None:
            store.save_balance(str(request_body.balance))
        db.commit()

        duration = time.time() - start_time
        persona = report.metrics.persona.title
        record_analysis(report.rejected_count, persona, duration)
        log_analysis(request_id, len(request_body.transactions), report.rejected_count, persona, duration * 1000)

        return to_response(report, last_updated)

    except MalformedBatchError as e:
        db.rollback()
        record_malformed_batch()
        logging.warning(f"Malformed batch: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/analysis", response_model=AnalysisResponse)
def get_analysis(
    request: Request,
    balance: Optional[float] = Query(None, description="Override the stored balance"),
    store: SnapshotStore = Depends(get_snapshot_store),
    now: datetime = Depends(get_now),
):
    """
    Re-derive analytics from the stored snapshot.

    Metrics are always recomputed from the raw batch, never cached.
    """
    request_id = get_request_id(request)
    snapshot = store.load()
    if snapshot.records is None:
        raise HTTPException(status_code=404, detail="No stored transactions")

    if balance is None:
        balance = parse_balance(snapshot.balance)

    try:
        report = generate_report(
            snapshot.records,
            now=now,
            current_balance=balance,
            top_locations_limit=settings.top_locations_limit,
        )
        return to_response(report, snapshot.last_updated)

    except MalformedBatchError as e:
        logging.warning(f"Ignoring corrupt stored batch: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail="No stored transactions")

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")
