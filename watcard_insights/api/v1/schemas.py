"""Pydantic schemas for API request/response validation"""

from datetime import date, datetime
from typing import Any, List, Optional
from pydantic import BaseModel, Field
from watcard_insights.domain.models import AnalysisReport, Category, Persona, TimeBucket


class AnalysisRequest(BaseModel):
    """Request body for POST /v1/analysis"""

    transactions: Any = Field(..., description="Raw scraped records, expected to be a JSON array")
    balance: Optional[float] = Field(None, description="Current card balance for the runway forecast")


class BalanceRequest(BaseModel):
    """Request body for PUT /v1/balance"""

    balance: Optional[float] = Field(None, description="Current balance, null to clear")


class BalanceResponse(BaseModel):
    balance: Optional[str]


class TransactionSchema(BaseModel):
    date: str
    terminal: str
    amount: float
    is_deposit: bool
    category: Category


class CategoryTotalSchema(BaseModel):
    name: Category
    total: float
    share: float


class DailySpendSchema(BaseModel):
    day: str
    label: str
    total: float


class DayTypeSpendSchema(BaseModel):
    name: str
    total: float
    avg: float
    active_days: int


class TimeOfDaySchema(BaseModel):
    name: TimeBucket
    total: float


class LocationSchema(BaseModel):
    name: str
    total: float


class RunwaySchema(BaseModel):
    days_to_zero: float
    runout_date: datetime
    days_left: int
    semester_end: date
    is_urgent: bool


class PersonaSchema(BaseModel):
    title: Persona
    emoji: str
    description: str


class MetricsSchema(BaseModel):
    total_spent: float
    elapsed_days: int
    daily_burn_rate: float
    coffee_tax: float
    late_night_dining_tax: float
    late_night_spend: float
    date_range: str
    category_totals: List[CategoryTotalSchema]
    daily_spend: List[DailySpendSchema]
    weekday_vs_weekend: List[DayTypeSpendSchema]
    time_of_day: List[TimeOfDaySchema]
    top_locations: List[LocationSchema]
    runway: Optional[RunwaySchema] = None
    persona: PersonaSchema


class AnalysisResponse(BaseModel):
    """Response for POST/GET /v1/analysis"""

    last_updated: Optional[str] = None
    rejected_count: int
    transactions: List[TransactionSchema]
    metrics: MetricsSchema


def to_response(report: AnalysisReport, last_updated: Optional[str]) -> AnalysisResponse:
    """Map the domain report onto the wire schema"""
    m = report.metrics
    runway = None
    if m.runway:
        runway = RunwaySchema(
            days_to_zero=m.runway.days_to_zero,
            runout_date=m.runway.runout_date,
            days_left=m.runway.days_left,
            semester_end=m.runway.semester_end,
            is_urgent=m.runway.is_urgent,
        )

    return AnalysisResponse(
        last_updated=last_updated,
        rejected_count=report.rejected_count,
        transactions=[
            TransactionSchema(
                date=t.date,
                terminal=t.terminal,
                amount=t.amount,
                is_deposit=t.is_deposit,
                category=t.category,
            )
            for t in report.transactions
        ],
        metrics=MetricsSchema(
            total_spent=m.total_spent,
            elapsed_days=m.elapsed_days,
            daily_burn_rate=m.daily_burn_rate,
            coffee_tax=m.coffee_tax,
            late_night_dining_tax=m.late_night_dining_tax,
            late_night_spend=m.late_night_spend,
            date_range=m.date_range,
            category_totals=[
                CategoryTotalSchema(name=c.name, total=c.total, share=c.share) for c in m.category_totals
            ],
            daily_spend=[DailySpendSchema(day=d.day, label=d.label, total=d.total) for d in m.daily_spend],
            weekday_vs_weekend=[
                DayTypeSpendSchema(name=w.name, total=w.total, avg=w.avg, active_days=w.active_days)
                for w in m.weekday_vs_weekend
            ],
            time_of_day=[TimeOfDaySchema(name=b.name, total=b.total) for b in m.time_of_day],
            top_locations=[LocationSchema(name=loc.name, total=loc.total) for loc in m.top_locations],
            runway=runway,
            persona=PersonaSchema(
                title=m.persona.persona,
                emoji=m.persona.emoji,
                description=m.persona.description,
            ),
        ),
    )
