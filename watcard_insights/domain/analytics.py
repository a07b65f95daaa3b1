"""Aggregation engine - core spending analytics over canonical transactions"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from watcard_insights.domain.forecast import forecast_runway
from watcard_insights.domain.models import (
    AnalysisReport,
    CanonicalTransaction,
    Category,
    CategoryTotal,
    DailySpend,
    DayTypeSpend,
    DerivedMetrics,
    LocationTotal,
    TimeBucket,
    TimeOfDayTotal,
)
from watcard_insights.domain.normalizer import normalize_batch
from watcard_insights.domain.persona import PersonaInputs, build_persona
from watcard_insights.domain.terminals import clean_terminal, is_coffee_terminal
from watcard_insights.utils.date_utils import days_between, format_day, hour_of, is_weekend

TOP_LOCATIONS_LIMIT = 5


def purchases_of(transactions: List[CanonicalTransaction]) -> List[CanonicalTransaction]:
    """Deposits never count towards spending"""
    return [t for t in transactions if not t.is_deposit]


def _sum(transactions: List[CanonicalTransaction]) -> float:
    # Always list order, so repeated runs give identical floats
    total = 0.0
    for t in transactions:
        total += t.amount
    return total


def time_bucket(date_str: str) -> TimeBucket:
    """
    Bucket by hour, closed-open ranges:
    Morning [5,11), Lunch [11,16), Dinner [16,21), Late Night otherwise.
    """
    hour = hour_of(date_str)
    if 5 <= hour < 11:
        return TimeBucket.MORNING
    if 11 <= hour < 16:
        return TimeBucket.LUNCH
    if 16 <= hour < 21:
        return TimeBucket.DINNER
    return TimeBucket.LATE_NIGHT


def elapsed_days(purchases: List[CanonicalTransaction]) -> int:
    """
    Calendar span between first and last purchase day, at least 1.

    This is the span, not the count of active days: purchases on Feb 1 and
    Feb 5 only give 4.
    """
    if not purchases:
        return 1
    days = sorted(t.day for t in purchases)
    return max(1, days_between(days[0], days[-1]))


def date_range_label(purchases: List[CanonicalTransaction]) -> str:
    if not purchases:
        return ""
    days = sorted(t.day for t in purchases)
    return f"{format_day(days[0])} – {format_day(days[-1])}"


def total_spent(purchases: List[CanonicalTransaction]) -> float:
    return _sum(purchases)


def daily_burn_rate(total: float, days: int) -> float:
    return total / days if days > 0 else 0.0


def coffee_tax(purchases: List[CanonicalTransaction]) -> float:
    return _sum([t for t in purchases if is_coffee_terminal(t.terminal)])


def late_night_spend(purchases: List[CanonicalTransaction]) -> float:
    return _sum([t for t in purchases if time_bucket(t.date) is TimeBucket.LATE_NIGHT])


def late_night_dining_tax(purchases: List[CanonicalTransaction]) -> float:
    """Late-night spend at Dining terminals only"""
    return _sum([
        t for t in purchases
        if time_bucket(t.date) is TimeBucket.LATE_NIGHT and t.category is Category.DINING
    ])


def category_totals(purchases: List[CanonicalTransaction]) -> List[CategoryTotal]:
    """Per-category sums, largest first; empty categories are omitted"""
    totals: Dict[Category, float] = {}
    for t in purchases:
        totals[t.category] = totals.get(t.category, 0.0) + t.amount

    grand_total = _sum(purchases)
    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return [
        CategoryTotal(
            name=category,
            total=total,
            share=total / grand_total if grand_total > 0 else 0.0,
        )
        for category, total in ranked
    ]


def daily_spend(purchases: List[CanonicalTransaction]) -> List[DailySpend]:
    """Per-day sums, oldest day first"""
    totals: Dict[str, float] = {}
    for t in purchases:
        totals[t.day] = totals.get(t.day, 0.0) + t.amount

    return [
        DailySpend(day=day, label=format_day(day), total=totals[day])
        for day in sorted(totals)
    ]


def weekday_vs_weekend(purchases: List[CanonicalTransaction]) -> List[DayTypeSpend]:
    """Average spend per active day, weekdays vs Saturday/Sunday"""
    weekday: Dict[str, float] = {}
    weekend: Dict[str, float] = {}
    for t in purchases:
        bucket = weekend if is_weekend(t.day) else weekday
        bucket[t.day] = bucket.get(t.day, 0.0) + t.amount

    result = []
    for name, by_day in (("Weekday", weekday), ("Weekend", weekend)):
        total = sum(by_day.values())
        active_days = len(by_day)
        result.append(
            DayTypeSpend(
                name=name,
                total=total,
                avg=total / active_days if active_days > 0 else 0.0,
                active_days=active_days,
            )
        )
    return result


def time_of_day_totals(purchases: List[CanonicalTransaction]) -> List[TimeOfDayTotal]:
    """All four buckets, zero-filled, in display order"""
    totals = {bucket: 0.0 for bucket in TimeBucket}
    for t in purchases:
        totals[time_bucket(t.date)] += t.amount
    return [TimeOfDayTotal(name=bucket, total=totals[bucket]) for bucket in TimeBucket]


def top_locations(
    purchases: List[CanonicalTransaction],
    limit: int = TOP_LOCATIONS_LIMIT,
) -> List[LocationTotal]:
    """Spend per cleaned terminal name, largest first"""
    totals: Dict[str, float] = {}
    for t in purchases:
        name = clean_terminal(t.terminal)
        totals[name] = totals.get(name, 0.0) + t.amount

    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return [LocationTotal(name=name, total=total) for name, total in ranked[:limit]]


def transaction_history(transactions: List[CanonicalTransaction]) -> List[CanonicalTransaction]:
    """Full listing, deposits included, newest first"""
    return sorted(transactions, key=lambda t: t.date, reverse=True)


def compute_metrics(
    transactions: List[CanonicalTransaction],
    now: Optional[datetime] = None,
    current_balance: Optional[float] = None,
    top_locations_limit: int = TOP_LOCATIONS_LIMIT,
) -> DerivedMetrics:
    """
    Derive every metric from a canonical transaction list.

    Pure recomputation: the same transactions, clock and balance always give
    the same result.
    """
    if now is None:
        now = datetime.now()

    purchases = purchases_of(transactions)

    days = elapsed_days(purchases)
    total = total_spent(purchases)
    burn_rate = daily_burn_rate(total, days)
    coffee = coffee_tax(purchases)
    late_night = late_night_spend(purchases)
    late_night_dining = late_night_dining_tax(purchases)
    categories = category_totals(purchases)

    def category_sum(category: Category) -> float:
        return next((c.total for c in categories if c.name is category), 0.0)

    persona = build_persona(
        PersonaInputs(
            total_spent=total,
            coffee_tax=coffee,
            late_night_dining_tax=late_night_dining,
            late_night_spend=late_night,
            daily_burn_rate=burn_rate,
            dining_total=category_sum(Category.DINING),
            groceries_total=category_sum(Category.GROCERIES),
            academic_total=category_sum(Category.ACADEMIC),
        )
    )

    return DerivedMetrics(
        total_spent=total,
        elapsed_days=days,
        daily_burn_rate=burn_rate,
        coffee_tax=coffee,
        late_night_dining_tax=late_night_dining,
        late_night_spend=late_night,
        date_range=date_range_label(purchases),
        category_totals=categories,
        daily_spend=daily_spend(purchases),
        weekday_vs_weekend=weekday_vs_weekend(purchases),
        time_of_day=time_of_day_totals(purchases),
        top_locations=top_locations(purchases, top_locations_limit),
        runway=forecast_runway(current_balance, burn_rate, now),
        persona=persona,
    )


def generate_report(
    payload: Any,
    now: Optional[datetime] = None,
    current_balance: Optional[float] = None,
    top_locations_limit: int = TOP_LOCATIONS_LIMIT,
) -> AnalysisReport:
    """
    Main entry point: normalize a raw batch and derive all metrics.

    Raises:
        MalformedBatchError: Payload is not a list of records
    """
    normalized = normalize_batch(payload)
    metrics = compute_metrics(
        normalized.transactions,
        now=now,
        current_balance=current_balance,
        top_locations_limit=top_locations_limit,
    )

    return AnalysisReport(
        transactions=transaction_history(normalized.transactions),
        rejected_count=normalized.rejected_count,
        metrics=metrics,
    )
