"""GET /v1/dashboard - current week overview"""

from datetime import datetime

from fastapi import APIRouter, Depends

from finance_dashboard.api.dependencies import get_dashboard, get_now
from finance_dashboard.api.v1.schemas import (
    DashboardResponse,
    EmergencyFundSchema,
    TransactionSchema,
    WeekSchema,
    WeeklySeriesSchema,
)
from finance_dashboard.config import settings
from finance_dashboard.domain.dashboard import Dashboard

router = APIRouter()


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard_summary(
    dashboard: Dashboard = Depends(get_dashboard),
    now: datetime = Depends(get_now),
):
    """
    Summary cards, weekly chart series and recent transactions.

    Income/expense cover the current week only; the balance covers every
    transaction ever recorded.
    """
    summary = dashboard.summary(now, settings.recent_transactions_limit)

    return DashboardResponse(
        week=WeekSchema.from_domain(summary.week),
        income=summary.income,
        expense=summary.expense,
        balance=summary.balance,
        emergency=EmergencyFundSchema.from_domain(summary.emergency) if summary.emergency else None,
        series=WeeklySeriesSchema(
            days=summary.series.window.days(),
            income=summary.series.income,
            expense=summary.series.expense,
        ),
        recent=[TransactionSchema.from_domain(t) for t in summary.recent],
    )
