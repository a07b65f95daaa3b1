"""Domain models - pure Python dataclasses representing spending analytics"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import List, Optional


class Category(str, Enum):
    """Closed set of spending categories assigned from the terminal name"""

    GROCERIES = "Groceries"
    LAUNDRY = "Laundry"
    ACADEMIC = "Academic"
    DINING = "Dining"
    OTHER = "Other"


class TimeBucket(str, Enum):
    """Time-of-day buckets, in display order"""

    MORNING = "Morning"
    LUNCH = "Lunch"
    DINNER = "Dinner"
    LATE_NIGHT = "Late Night"


class Persona(str, Enum):
    """Descriptive spending labels"""

    MIDNIGHT_SNACKER = "Midnight Snacker"
    CAFFEINE_ADDICT = "Caffeine Addict"
    LATE_NIGHT_GOURMET = "Late-Night Gourmet"
    CAMPUS_FOODIE = "Campus Foodie"
    SMART_SHOPPER = "Smart Shopper"
    SCHOLAR = "Scholar"
    BUDGET_MASTER = "Budget Master"
    CAMPUS_EXPLORER = "Campus Explorer"


@dataclass(frozen=True)
class CanonicalTransaction:
    """Validated card transaction; direction lives in is_deposit, never in amount"""

    date: str  # "YYYY-MM-DD HH:MM:SS", sortable as a string
    terminal: str
    amount: float
    is_deposit: bool
    category: Category

    @property
    def day(self) -> str:
        """Date portion (YYYY-MM-DD)"""
        return self.date.split(" ")[0]


@dataclass(frozen=True)
class Rejection:
    """A raw record dropped during normalization"""

    index: int
    reason: str


@dataclass
class NormalizationResult:
    """Canonical transactions in input order plus the records that were dropped"""

    transactions: List[CanonicalTransaction] = field(default_factory=list)
    rejections: List[Rejection] = field(default_factory=list)

    @property
    def rejected_count(self) -> int:
        return len(self.rejections)


@dataclass
class CategoryTotal:
    name: Category
    total: float
    share: float  # fraction of total spend


@dataclass
class DailySpend:
    day: str  # YYYY-MM-DD
    label: str  # "Feb 25"
    total: float


@dataclass
class DayTypeSpend:
    """Weekday or weekend spend with average per active day"""

    name: str  # "Weekday" | "Weekend"
    total: float
    avg: float
    active_days: int


@dataclass
class TimeOfDayTotal:
    name: TimeBucket
    total: float


@dataclass
class LocationTotal:
    name: str
    total: float


@dataclass
class RunwayForecast:
    """Projected run-out of the current balance at the current burn rate"""

    days_to_zero: float
    runout_date: datetime
    days_left: int
    semester_end: date
    is_urgent: bool


@dataclass
class PersonaProfile:
    persona: Persona
    emoji: str
    description: str

    @property
    def title(self) -> str:
        return self.persona.value


@dataclass
class DerivedMetrics:
    """Everything derived from one canonical transaction list"""

    total_spent: float
    elapsed_days: int
    daily_burn_rate: float
    coffee_tax: float
    late_night_dining_tax: float
    late_night_spend: float
    date_range: str
    category_totals: List[CategoryTotal]
    daily_spend: List[DailySpend]
    weekday_vs_weekend: List[DayTypeSpend]
    time_of_day: List[TimeOfDayTotal]
    top_locations: List[LocationTotal]
    runway: Optional[RunwayForecast]
    persona: PersonaProfile


@dataclass
class AnalysisReport:
    """Output of one ingestion: full history, rejection count and metrics"""

    transactions: List[CanonicalTransaction]
    rejected_count: int
    metrics: DerivedMetrics
