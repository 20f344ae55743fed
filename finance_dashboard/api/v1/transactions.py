"""Ledger endpoints - record, list by week, recent, delete"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response

from finance_dashboard.api.dependencies import get_dashboard, get_now, get_request_id
from finance_dashboard.api.v1.schemas import (
    TransactionCreate,
    TransactionSchema,
    WeekSchema,
    WeekShiftRequest,
    WeekTransactionsResponse,
)
from finance_dashboard.config import settings
from finance_dashboard.domain.dashboard import Dashboard
from finance_dashboard.domain.models import TransactionKind
from finance_dashboard.domain.windowing import week_range
from finance_dashboard.infrastructure.observability.logging import log_transaction_recorded, log_transaction_removed
from finance_dashboard.infrastructure.observability.metrics import (
    transactions_recorded_counter,
    transactions_removed_counter,
)

router = APIRouter()


@router.post("/transactions", response_model=TransactionSchema, status_code=201)
def create_transaction(
    body: TransactionCreate,
    request: Request,
    dashboard: Dashboard = Depends(get_dashboard),
):
    """Append a transaction to the ledger; the id is its creation timestamp in ms"""
    transaction = dashboard.record_transaction(
        kind=body.kind,
        category=body.category,
        amount=body.amount,
        description=body.description,
        on=body.date,
    )

    transactions_recorded_counter.labels(kind=transaction.kind.value).inc()
    log_transaction_recorded(get_request_id(request), transaction)

    return TransactionSchema.from_domain(transaction)


@router.get("/transactions", response_model=WeekTransactionsResponse)
def list_week_transactions(
    week_offset: Optional[int] = Query(None, description="Weeks from the current one; defaults to the browsed week"),
    dashboard: Dashboard = Depends(get_dashboard),
    now: datetime = Depends(get_now),
):
    """
    Transactions of one Monday-to-Sunday week, newest first.

    Returns:
        Week bounds, income/expense totals for the week and its entries
    """
    offset = dashboard.week_offset if week_offset is None else week_offset
    window = week_range(offset, now)

    return WeekTransactionsResponse(
        week=WeekSchema.from_domain(window, offset),
        income=dashboard.ledger.sum_by_kind(window, TransactionKind.INCOME),
        expense=dashboard.ledger.sum_by_kind(window, TransactionKind.EXPENSE),
        transactions=[TransactionSchema.from_domain(t) for t in dashboard.ledger.in_window(window)],
    )


@router.post("/transactions/week", response_model=WeekSchema)
def shift_week(
    body: WeekShiftRequest,
    dashboard: Dashboard = Depends(get_dashboard),
    now: datetime = Depends(get_now),
):
    """Move the browsed week back (negative delta) or forward, or reset to the current week"""
    if body.reset:
        dashboard.reset_week()
    else:
        dashboard.shift_week(body.delta)

    return WeekSchema.from_domain(dashboard.week_window(now), dashboard.week_offset)


@router.get("/transactions/recent", response_model=List[TransactionSchema])
def recent_transactions(
    limit: int = Query(settings.recent_transactions_limit, ge=0, le=100),
    dashboard: Dashboard = Depends(get_dashboard),
):
    """Most recent transactions across all weeks"""
    return [TransactionSchema.from_domain(t) for t in dashboard.ledger.recent(limit)]


@router.delete("/transactions/{transaction_id}", status_code=204)
def delete_transaction(
    transaction_id: int,
    request: Request,
    dashboard: Dashboard = Depends(get_dashboard),
):
    """Remove a transaction; deleting an unknown id is not an error"""
    removed = dashboard.remove_transaction(transaction_id)

    if removed:
        transactions_removed_counter.inc(removed)
    log_transaction_removed(get_request_id(request), transaction_id, removed)

    return Response(status_code=204)
