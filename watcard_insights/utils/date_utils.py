"""Date manipulation utilities for 'YYYY-MM-DD HH:MM:SS' date strings"""

from datetime import date, datetime, timedelta

MONTH_ABBREVIATIONS = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]


def date_portion(date_str: str) -> str:
    """'2026-02-25 22:21:45' -> '2026-02-25'"""
    return date_str.split(" ")[0]


def parse_day(ymd: str) -> date:
    """Naive calendar date from 'YYYY-MM-DD', no timezone adjustment"""
    return date.fromisoformat(ymd)


def hour_of(date_str: str) -> int:
    """Hour component of the time portion, 0 when there is no time"""
    parts = date_str.split(" ")
    if len(parts) < 2 or not parts[1]:
        return 0
    try:
        return int(parts[1].split(":")[0])
    except ValueError:
        return 0


def format_day(date_str: str) -> str:
    """'2026-02-25 22:21:45' -> 'Feb 25'"""
    ymd = date_portion(date_str)
    if not ymd:
        return ""
    _, mm, dd = ymd.split("-")
    return f"{MONTH_ABBREVIATIONS[int(mm) - 1]} {int(dd)}"


def days_between(start: str, end: str) -> int:
    """Whole calendar days from start to end (both 'YYYY-MM-DD')"""
    return (parse_day(end) - parse_day(start)).days


def is_weekend(ymd: str) -> bool:
    """Saturday or Sunday"""
    return parse_day(ymd).weekday() >= 5


def add_days(from_time: datetime, days: float) -> datetime:
    """Add a possibly fractional number of days"""
    return from_time + timedelta(days=days)
