"""Pydantic schemas for API request/response validation"""

import datetime as dt
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from finance_dashboard.domain.currency import parse_amount
from finance_dashboard.domain.emergency import HouseholdStatus
from finance_dashboard.domain.models import (
    EmergencyFundProfile,
    MarketStatus,
    Sentiment,
    Transaction,
    TransactionKind,
    WeekWindow,
    is_valid_category,
)


def _coerce_amount(value: Any) -> Any:
    # Form fields arrive formatted ("1.500.000"); plain numbers pass through
    if isinstance(value, str):
        return parse_amount(value)
    return value


class TransactionCreate(BaseModel):
    """Request body for POST /v1/transactions"""

    kind: TransactionKind
    category: str = Field(..., min_length=1)
    amount: int = Field(..., ge=0, description="Whole rupiah, formatted text accepted")
    description: str = ""
    date: dt.date = Field(default_factory=dt.date.today)

    @field_validator("amount", mode="before")
    @classmethod
    def normalize_amount(cls, value: Any) -> Any:
        return _coerce_amount(value)

    @model_validator(mode="after")
    def check_category_matches_kind(self) -> "TransactionCreate":
        if not is_valid_category(self.kind, self.category):
            raise ValueError(f"category '{self.category}' is not a {self.kind.value} category")
        return self


class TransactionSchema(BaseModel):
    """Single ledger entry"""

    id: int
    kind: TransactionKind
    category: str
    amount: int
    description: str
    date: dt.date

    @classmethod
    def from_domain(cls, t: Transaction) -> "TransactionSchema":
        return cls(
            id=t.id,
            kind=t.kind,
            category=t.category,
            amount=t.amount,
            description=t.description,
            date=t.date,
        )


class WeekSchema(BaseModel):
    """Monday-to-Sunday window"""

    offset: int
    start: dt.datetime
    end: dt.datetime

    @classmethod
    def from_domain(cls, window: WeekWindow, offset: int = 0) -> "WeekSchema":
        return cls(offset=offset, start=window.start, end=window.end)


class WeekTransactionsResponse(BaseModel):
    """Response for GET /v1/transactions"""

    week: WeekSchema
    income: int
    expense: int
    transactions: List[TransactionSchema]


class WeekShiftRequest(BaseModel):
    """Request body for POST /v1/transactions/week"""

    delta: int = 0
    reset: bool = False


class WeeklySeriesSchema(BaseModel):
    """Per-day chart series, index 0 = Monday"""

    days: List[dt.date]
    income: List[int]
    expense: List[int]


class SavingsPlanSchema(BaseModel):
    months: int
    monthly_amount: float


class EmergencyFundSchema(BaseModel):
    """Emergency fund snapshot"""

    target: int
    current: int
    shortfall: int
    percentage: float
    months: int
    savings_plan: List[SavingsPlanSchema]

    @classmethod
    def from_domain(cls, profile: EmergencyFundProfile) -> "EmergencyFundSchema":
        return cls(
            target=profile.target,
            current=profile.current,
            shortfall=profile.shortfall,
            percentage=profile.percentage,
            months=profile.months,
            savings_plan=[
                SavingsPlanSchema(months=p.months, monthly_amount=p.monthly_amount) for p in profile.savings_plan
            ],
        )


class DashboardResponse(BaseModel):
    """Response for GET /v1/dashboard"""

    week: WeekSchema
    income: int
    expense: int
    balance: int
    emergency: Optional[EmergencyFundSchema] = None
    series: WeeklySeriesSchema
    recent: List[TransactionSchema]


class RecommendationSchema(BaseModel):
    level: str
    code: str
    params: Dict[str, Any] = {}


class EmergencyFundRequest(BaseModel):
    """Request body for POST /v1/emergency-fund"""

    monthly_expense: int = Field(..., ge=0)
    household_status: str = Field(
        HouseholdStatus.SINGLE.value, description="single | married | family; others count as single"
    )
    current_savings: int = Field(0, ge=0)

    @field_validator("monthly_expense", "current_savings", mode="before")
    @classmethod
    def normalize_amounts(cls, value: Any) -> Any:
        return _coerce_amount(value)


class EmergencyFundResponse(BaseModel):
    """Response for POST /v1/emergency-fund"""

    fund: EmergencyFundSchema
    recommendations: List[RecommendationSchema]


class ProjectionRequest(BaseModel):
    """Request body for POST /v1/investment/projection"""

    initial_investment: int = Field(0, ge=0)
    monthly_investment: int = Field(..., ge=0)
    annual_return_rate: float = Field(..., gt=-1, le=1, description="Decimal, 0.08 for 8%; negative for a losing year")
    horizon_years: int = Field(..., ge=1, le=100)
    annual_inflation_rate: float = Field(0.0, ge=0, le=1)

    @field_validator("initial_investment", "monthly_investment", mode="before")
    @classmethod
    def normalize_amounts(cls, value: Any) -> Any:
        return _coerce_amount(value)


class YearlyRowSchema(BaseModel):
    year: int
    total_invested: int
    balance: float
    profit: float


class GrowthPointSchema(BaseModel):
    year: int
    invested: int
    value: float


class ProjectionResponse(BaseModel):
    """Response for POST /v1/investment/projection"""

    final_value: float
    total_invested: int
    total_profit: float
    roi: float
    real_value: float
    real_profit: float
    yearly_schedule: List[YearlyRowSchema]
    growth: List[GrowthPointSchema]
    recommendations: List[RecommendationSchema]


class QuoteSchema(BaseModel):
    symbol: str
    market: str
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


class CryptoQuoteSchema(BaseModel):
    symbol: str
    price: float
    change_percent: float
    source: str


class SpyOutlookSchema(BaseModel):
    sentiment: Sentiment
    change_percent: float
    price_vs_high: float
    high_note: Optional[str] = None


class MarketResponse(BaseModel):
    """Response for GET /v1/market/quotes"""

    updated_at: dt.datetime
    status: MarketStatus
    stocks: List[QuoteSchema]
    crypto: List[CryptoQuoteSchema]
    spy: Optional[SpyOutlookSchema] = None
    refresh_after_seconds: int
