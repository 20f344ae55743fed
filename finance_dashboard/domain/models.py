"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from finance_dashboard.utils.date_utils import generate_date_range


class TransactionKind(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


INCOME_CATEGORIES = frozenset({"gaji", "bonus", "freelance", "investasi", "lainnya-masuk"})
EXPENSE_CATEGORIES = frozenset(
    {
        "makanan",
        "transportasi",
        "belanja",
        "tagihan",
        "hiburan",
        "kesehatan",
        "pendidikan",
        "lainnya-keluar",
    }
)

CATEGORIES_BY_KIND = {
    TransactionKind.INCOME: INCOME_CATEGORIES,
    TransactionKind.EXPENSE: EXPENSE_CATEGORIES,
}


def is_valid_category(kind: TransactionKind, category: str) -> bool:
    """Category must come from the label space of its kind (the two are disjoint)"""
    try:
        kind = TransactionKind(kind)
    except ValueError:
        return False
    return category in CATEGORIES_BY_KIND[kind]


@dataclass(frozen=True)
class Transaction:
    """Income or expense entry recorded by the user"""

    id: int  # creation timestamp in ms
    kind: TransactionKind
    category: str
    amount: int  # whole rupiah, never negative
    description: str
    date: date

    @property
    def signed_amount(self) -> int:
        return self.amount if self.kind == TransactionKind.INCOME else -self.amount


@dataclass(frozen=True)
class WeekWindow:
    """Monday 00:00 through Sunday 23:59:59.999 of one calendar week"""

    start: datetime
    end: datetime

    @property
    def start_date(self) -> date:
        return self.start.date()

    @property
    def end_date(self) -> date:
        return self.end.date()

    def days(self) -> List[date]:
        return generate_date_range(self.start_date, self.end_date)

    def contains(self, day: date) -> bool:
        if isinstance(day, datetime):
            day = day.date()
        return self.start_date <= day <= self.end_date


@dataclass(frozen=True)
class SavingsPlan:
    """Monthly amount needed to close the shortfall within a horizon"""

    months: int
    monthly_amount: float


@dataclass(frozen=True)
class EmergencyFundProfile:
    """Emergency fund sizing snapshot"""

    target: int
    current: int
    shortfall: int
    percentage: float
    months: int
    savings_plan: Tuple[SavingsPlan, ...] = ()


@dataclass(frozen=True)
class YearlyRow:
    """Cumulative position at the end of one simulated year"""

    year: int
    total_invested: int
    balance: float
    profit: float


@dataclass(frozen=True)
class InvestmentProjection:
    """Output of the ETF growth simulation"""

    initial_investment: int
    monthly_investment: int
    annual_return_rate: float
    horizon_years: int
    annual_inflation_rate: float
    final_value: float
    total_invested: int
    total_profit: float
    roi: float
    real_value: float
    real_profit: float
    yearly_schedule: Tuple[YearlyRow, ...] = ()


@dataclass(frozen=True)
class GrowthPoint:
    """Chart point: contributed capital vs portfolio value after `year` years"""

    year: int
    invested: int
    value: float


@dataclass(frozen=True)
class WeeklySeries:
    """Per-day income and expense sums, index 0 = Monday"""

    window: WeekWindow
    income: List[int]
    expense: List[int]


@dataclass(frozen=True)
class DashboardSummary:
    """Everything the dashboard page shows for the current week"""

    week: WeekWindow
    income: int
    expense: int
    balance: int
    emergency: Optional[EmergencyFundProfile]
    series: WeeklySeries
    recent: List[Transaction]


@dataclass(frozen=True)
class Recommendation:
    """Advice item; code + params only, wording is left to the client"""

    level: str  # "success" | "info" | "warning"
    code: str
    params: Dict[str, Any] = field(default_factory=dict)


class MarketStatus(str, Enum):
    OPEN = "open"
    PRE_MARKET = "pre_market"
    AFTER_HOURS = "after_hours"
    CLOSED = "closed"


class Sentiment(str, Enum):
    BULLISH = "bullish"
    SLIGHTLY_BULLISH = "slightly_bullish"
    NEUTRAL = "neutral"
    SLIGHTLY_BEARISH = "slightly_bearish"
    BEARISH = "bearish"


@dataclass(frozen=True)
class Quote:
    """Mocked stock/index quote for the ticker strip"""

    symbol: str
    market: str  # "US" or "ID"
    currency: str
    price: float
    change: float
    change_percent: float
    open: float
    high: float
    low: float
    prev_close: float
    volume: int
    fifty_two_week_high: float
    fifty_two_week_low: float


@dataclass(frozen=True)
class CryptoQuote:
    """Crypto price with 24h change"""

    symbol: str
    price: float
    change_percent: float
    source: str  # "coingecko" or "mock"


@dataclass(frozen=True)
class SpyOutlook:
    """Sentiment read of the SPY daily move and its distance from the 52-week high"""

    sentiment: Sentiment
    change_percent: float
    price_vs_high: float
    high_note: Optional[str]  # "near_high" | "far_from_high" | None
