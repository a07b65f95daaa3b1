"""Runway forecast - when the current balance runs out at the current burn rate"""

import math
from datetime import date, datetime
from typing import Optional
from watcard_insights.domain.models import RunwayForecast
from watcard_insights.utils.date_utils import add_days


def semester_end(now: datetime) -> date:
    """
    Reference end of the current term.

    January through April -> April 30, otherwise December 15, both in the
    current year.
    """
    if now.month <= 4:
        return date(now.year, 4, 30)
    return date(now.year, 12, 15)

def forecast_runway(
    current_balance: Optional[float],
    daily_burn_rate: float,
    now: datetime,
) -> Optional[RunwayForecast]:
    """
    Project the balance run-out date.

    Returns None unless both the balance and the burn rate are positive and
    finite, and also when the run-out date lies past the last representable
    datetime.

    Example:
        balance 500, burn 25/day -> 20 days to zero, runout = now + 20 days
    """
    if current_balance is None or not math.isfinite(current_balance) or not math.isfinite(daily_burn_rate):
        return None
    if current_balance <= 0 or daily_burn_rate <= 0:
        return None

    days_to_zero = current_balance / daily_burn_rate
    if days_to_zero >= (datetime.max - now).days:
        return None

    runout_date = add_days(now, days_to_zero)
    term_end = semester_end(now)

    return RunwayForecast(
        days_to_zero=days_to_zero,
        runout_date=runout_date,
        days_left=(runout_date - now).days,
        semester_end=term_end,
        is_urgent=runout_date < datetime(term_end.year, term_end.month, term_end.day),
    )
